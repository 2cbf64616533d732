"""
Tests for engine wiring: guarded construction, resize reseeding and the frame loop.
"""

import unittest

import numpy as np
from fakes import FakeClock, FakePanel, RecordingSurface

from guildmap.engine.catalog import parse_catalog
from guildmap.engine.map_engine import create_engine
from guildmap.shared.types import InteractionPhase

CATALOG = parse_catalog({
    "regions": [
        {"id": "guild", "label": "Guild", "target": "about.html",
         "polygon": [[0, 0], [100, 0], [100, 100], [0, 100]]},
    ],
    "markers": [{"id": "board", "label": "Board", "target": "board.html", "x": 0.5, "y": 0.5}],
})


class TestCreateEngine(unittest.TestCase):

    def test_missing_collaborators_disable_engine(self):
        with self.assertLogs("guildmap.engine.map_engine", level="WARNING"):
            self.assertIsNone(create_engine(None, RecordingSurface(), print, FakePanel()))
        with self.assertLogs("guildmap.engine.map_engine", level="WARNING"):
            self.assertIsNone(create_engine(CATALOG, None, print, FakePanel()))
        with self.assertLogs("guildmap.engine.map_engine", level="WARNING"):
            self.assertIsNone(create_engine(CATALOG, RecordingSurface(), print, None))


class TestMapEngine(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.surface = RecordingSurface()
        self.navigated = []
        self.engine = create_engine(
            CATALOG, self.surface, self.navigated.append, FakePanel(),
            clock=self.clock,
            measure=lambda title, body: (80, 40),
            rng=np.random.default_rng(11),
            time_source=lambda: 0.0,
        )

    def test_resize_reseeds_particles_within_new_bounds(self):
        self.engine.resize(400, 300, 2.0)
        for p in self.engine.particles:
            self.assertTrue(0 <= p.x <= 400 and 0 <= p.y <= 300)
        self.assertEqual(self.engine.space.backing_size(), (800, 600))
        self.engine.resize(40, 30)
        for p in self.engine.particles:
            self.assertTrue(0 <= p.x <= 40 and 0 <= p.y <= 30)

    def test_frames_render_from_the_scheduler(self):
        self.engine.resize(1536, 1024)
        self.engine.start()
        self.clock.tick()
        self.clock.tick()
        self.assertEqual(self.engine.renderer.frame_count, 2)
        self.assertEqual(self.surface.names().count("clear"), 2)

    def test_stop_tears_down_the_loop(self):
        self.engine.start()
        self.engine.stop()
        self.clock.tick()
        self.assertFalse(self.engine.scheduler.running)
        self.assertEqual(self.engine.renderer.frame_count, 0)

    def test_zero_size_frames_are_skipped(self):
        self.engine.resize(0, 0)
        self.engine.start()
        self.clock.tick()
        self.assertEqual(self.surface.calls, [])

    def test_hover_state_is_seen_by_next_frame(self):
        self.engine.resize(1536, 1024)
        self.engine.start()
        self.engine.tracker.on_pointer_move(50, 50)
        self.clock.tick()
        self.assertEqual(len(self.surface.of("stroke_polygon")), 2)

    def test_navigation_stops_the_loop(self):
        self.engine.resize(1536, 1024)
        self.engine.start()
        self.engine.tracker.on_pointer_move(50, 50)
        self.engine.tracker.on_click()
        self.assertEqual(self.navigated, ["about.html"])
        self.assertEqual(self.engine.state.phase, InteractionPhase.NAVIGATING)
        self.assertFalse(self.engine.scheduler.running)


if __name__ == "__main__":
    unittest.main()
