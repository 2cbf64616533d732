"""
Tests for pointer/touch handling on top of the hit tester and state machine.
"""

import unittest

from fakes import FakeClock, FakePanel

from guildmap.engine.coordinate_space import CoordinateSpace
from guildmap.engine.pointer_tracker import PointerTracker, estimate_tooltip_size
from guildmap.engine.state_machine import InteractionStateMachine
from guildmap.shared.types import InteractionPhase, Marker, Region

SQUARE = Region(
    id="square", label="Square", target="square.html", tooltip="A square",
    polygon=((0, 0), (100, 0), (100, 100), (0, 100)),
)
FAR = Region(
    id="far", label="Far", target="far.html",
    polygon=((1000, 600), (1200, 600), (1200, 800), (1000, 800)),
)
MARKER = Marker(id="centre", label="Centre", target="centre.html", fx=0.5, fy=0.5)
SECOND_MARKER = Marker(id="corner", label="Corner", target="corner.html", fx=0.9, fy=0.1)


class TestPointerTracker(unittest.TestCase):

    def setUp(self):
        self.navigated = []
        self.panel = FakePanel()
        self.clock = FakeClock()
        self.sm = InteractionStateMachine(navigate=self.navigated.append, panel=self.panel)
        self.space = CoordinateSpace(1536, 1024)
        self.space.resize(1536, 1024)
        self.tracker = PointerTracker(
            self.sm, self.space, [SQUARE, FAR], [MARKER, SECOND_MARKER],
            measure=lambda title, body: (80, 40),
            clock=self.clock,
        )

    def test_to_local_flips_vertical_axis(self):
        self.assertEqual(self.tracker.to_local(10, 1000), (10, 24))

    def test_move_over_region_hovers_and_places_tooltip(self):
        self.tracker.on_pointer_move(50, 50)
        state = self.sm.state
        self.assertEqual(state.phase, InteractionPhase.HOVER_REGION)
        self.assertEqual(state.hovered_region, SQUARE)
        self.assertEqual((state.tooltip.title, state.tooltip.body), ("Square", "A square"))
        # 50 - 12 - 40 = -2 overflows the top, so the tooltip sits below.
        self.assertEqual((state.tooltip.x, state.tooltip.y), (62, 62))

    def test_expanded_hit_near_edge(self):
        self.tracker.on_pointer_move(110, 50)
        self.assertEqual(self.sm.state.hovered_region, SQUARE)

    def test_move_off_region_returns_to_idle(self):
        self.tracker.on_pointer_move(50, 50)
        self.tracker.on_pointer_move(150, 50)
        self.assertEqual(self.sm.phase, InteractionPhase.IDLE)
        self.assertIsNone(self.sm.state.tooltip)

    def test_scaled_container(self):
        self.space.resize(768, 512)
        self.tracker.on_pointer_move(550, 350)
        self.assertEqual(self.sm.state.hovered_region, FAR)
        self.tracker.on_pointer_move(1100, 700)
        self.assertIsNone(self.sm.state.hovered_region)

    def test_marker_box_wins_over_region(self):
        self.tracker.on_pointer_move(768, 512)
        self.assertEqual(self.sm.phase, InteractionPhase.HOVER_MARKER)
        self.assertEqual(self.sm.state.hovered_marker, MARKER)
        self.tracker.on_pointer_move(768 + 40, 512)
        self.assertEqual(self.sm.phase, InteractionPhase.IDLE)

    def test_click_on_region_navigates(self):
        self.tracker.on_pointer_move(50, 50)
        self.assertTrue(self.tracker.on_click())
        self.assertEqual(self.navigated, ["square.html"])
        self.tracker.on_pointer_move(768, 512)
        self.assertFalse(self.tracker.on_click())
        self.assertEqual(self.navigated, ["square.html"])
        self.assertEqual(self.sm.phase, InteractionPhase.NAVIGATING)

    def test_click_on_marker_opens_panel(self):
        self.tracker.on_pointer_move(768, 512)
        self.tracker.on_click()
        self.assertEqual(self.sm.phase, InteractionPhase.PANEL_OPEN)
        self.assertEqual(self.panel.opened[0].target, "centre.html")
        # Moves are ignored while the panel is open.
        self.tracker.on_pointer_move(50, 50)
        self.assertEqual(self.sm.phase, InteractionPhase.PANEL_OPEN)

    def test_click_on_empty_map_does_nothing(self):
        self.tracker.on_pointer_move(700, 900)
        self.assertFalse(self.tracker.on_click())
        self.assertEqual(self.navigated, [])

    def test_touch_start_hides_tooltip_after_delay(self):
        self.tracker.on_touch_start(50, 50)
        self.assertIsNotNone(self.sm.state.tooltip)
        self.assertEqual(list(self.clock.once.values()), [1.5])
        self.clock.fire_once()
        self.assertIsNone(self.sm.state.tooltip)
        self.assertEqual(self.sm.state.hovered_region, SQUARE)

    def test_second_touch_restarts_hide_timer(self):
        self.tracker.on_touch_start(50, 50)
        self.tracker.on_touch_start(60, 60)
        self.assertEqual(len(self.clock.unscheduled), 1)
        self.assertEqual(len(self.clock.once), 1)

    def test_touch_without_clock_keeps_tooltip(self):
        tracker = PointerTracker(self.sm, self.space, [SQUARE], [],
                                 measure=lambda t, b: (80, 40))
        tracker.on_touch_start(50, 50)
        self.assertIsNotNone(self.sm.state.tooltip)

    def test_zero_size_container_clears_hover(self):
        self.tracker.on_pointer_move(50, 50)
        self.space.resize(0, 0)
        self.tracker.on_pointer_move(50, 50)
        self.assertEqual(self.sm.phase, InteractionPhase.IDLE)

    def test_keyboard_focus_cycles_markers(self):
        self.assertEqual(self.tracker.focus_next_marker(), MARKER)
        self.assertEqual(self.sm.state.hovered_marker, MARKER)
        self.assertEqual(self.tracker.focus_next_marker(), SECOND_MARKER)
        self.assertEqual(self.tracker.focus_next_marker(), MARKER)
        self.tracker.activate_focused()
        self.assertEqual(self.panel.opened[-1].label, "Centre")

    def test_pointer_leave_clears_hover(self):
        self.tracker.on_pointer_move(50, 50)
        self.tracker.on_pointer_leave()
        self.assertEqual(self.sm.phase, InteractionPhase.IDLE)


class TestEstimateTooltipSize(unittest.TestCase):

    def test_longer_text_is_larger(self):
        short = estimate_tooltip_size("Forge", "Click to open")
        long = estimate_tooltip_size("Forge", "word " * 60)
        self.assertGreaterEqual(long[0], short[0])
        self.assertGreater(long[1], short[1])

    def test_width_is_capped(self):
        width, _ = estimate_tooltip_size("x" * 500, "y" * 500)
        self.assertLessEqual(width, 260)


if __name__ == "__main__":
    unittest.main()
