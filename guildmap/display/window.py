"""Map window — runs the pyglet window, input handlers and frame loop."""

import logging
import webbrowser
from pathlib import Path
from typing import Callable, Optional, Tuple
from urllib.parse import urljoin

import pyglet
from pyglet import shapes
from pyglet.window import key, mouse

from guildmap import config
from guildmap.display.surface import PygletSurface
from guildmap.engine.catalog import MapCatalog, load_catalog
from guildmap.engine.map_engine import create_engine
from guildmap.engine.tooltip import TooltipGlow
from guildmap.shared.types import PanelContent, TooltipPlacement

logger = logging.getLogger(__name__)

_FONT_SIZE = 11
_TEXT_COLOR = (242, 224, 182, 255)
_BOX_COLOR = (35, 26, 16, 230)
_PADDING = 10
# Drawn marker dot; spans the same width as the marker hit box.
MARKER_DOT_RADIUS = config.MARKER_SIZE_PX / 2


def tooltip_box_size(title_size: Tuple[float, float], body_size: Tuple[float, float]) -> Tuple[float, float]:
    """Padded tooltip box around the title and body text, capped at the max width."""
    width = max(title_size[0], body_size[0]) + 2 * _PADDING
    height = title_size[1] + body_size[1] + 2 * _PADDING
    return min(width, config.TOOLTIP_MAX_WIDTH), height


class TooltipView:
    """Draws the region tooltip and reports its size for placement."""

    def __init__(self, window: pyglet.window.Window) -> None:
        self._window = window
        self._title = pyglet.text.Label("", font_size=_FONT_SIZE, bold=True, color=_TEXT_COLOR,
                                        anchor_x="left", anchor_y="top")
        self._body = pyglet.text.Label("", font_size=_FONT_SIZE - 1, italic=True, color=_TEXT_COLOR,
                                       anchor_x="left", anchor_y="top", multiline=True,
                                       width=config.TOOLTIP_MAX_WIDTH - 2 * _PADDING)

    def measure(self, title: str, body: str) -> Tuple[float, float]:
        # Content goes in first: the size depends on the text.
        self._title.text = title
        self._body.text = body
        return tooltip_box_size(
            (self._title.content_width, self._title.content_height),
            (self._body.content_width, self._body.content_height),
        )

    def draw(self, placement: Optional[TooltipPlacement], glow: TooltipGlow) -> None:
        if placement is None:
            return
        top = self._window.height - placement.y
        halo = glow.size
        shapes.Rectangle(
            placement.x - halo / 2, top - placement.height - halo / 2,
            placement.width + halo, placement.height + halo,
            color=(242, 224, 182, int(glow.alpha * 255)),
        ).draw()
        shapes.Rectangle(
            placement.x, top - placement.height, placement.width, placement.height,
            color=_BOX_COLOR,
        ).draw()
        self._title.text = placement.title
        self._body.text = placement.body
        self._title.x = placement.x + _PADDING
        self._title.y = top - _PADDING
        self._body.x = placement.x + _PADDING
        self._body.y = top - _PADDING - self._title.content_height
        self._title.draw()
        self._body.draw()


class DetailPanelView:
    """In-window detail panel with Open and Close controls."""

    _WIDTH = 320
    _HEIGHT = 150
    _BUTTON_W = 90
    _BUTTON_H = 30

    def __init__(self, window: pyglet.window.Window) -> None:
        self._window = window
        self._content: Optional[PanelContent] = None
        self.on_open_target: Optional[Callable[[str], None]] = None
        self.on_close: Optional[Callable[[], None]] = None

    @property
    def visible(self) -> bool:
        return self._content is not None

    def open(self, content: PanelContent) -> None:
        self._content = content
        logger.info("Panel opened: %s -> %s", content.label, content.target)

    def close(self) -> None:
        self._content = None

    def request_open(self) -> None:
        if self._content is not None and self.on_open_target:
            self.on_open_target(self._content.target)

    def request_close(self) -> None:
        if self.on_close:
            self.on_close()

    def handle_click(self, x: float, y: float) -> None:
        """Route a click (window coordinates) to the panel's buttons."""
        (ox, oy), (cx, cy) = self._button_origins()
        if ox <= x <= ox + self._BUTTON_W and oy <= y <= oy + self._BUTTON_H:
            self.request_open()
        elif cx <= x <= cx + self._BUTTON_W and cy <= y <= cy + self._BUTTON_H:
            self.request_close()

    def draw(self) -> None:
        if self._content is None:
            return
        px, py = self._origin()
        shapes.Rectangle(px, py, self._WIDTH, self._HEIGHT, color=_BOX_COLOR).draw()
        pyglet.text.Label(
            self._content.label, font_size=_FONT_SIZE + 5, bold=True, color=_TEXT_COLOR,
            x=px + 16, y=py + self._HEIGHT - 16, anchor_y="top",
        ).draw()
        pyglet.text.Label(
            "Open: %s" % self._content.target, font_size=_FONT_SIZE, color=_TEXT_COLOR,
            x=px + 16, y=py + self._HEIGHT - 50, anchor_y="top",
        ).draw()
        (ox, oy), (cx, cy) = self._button_origins()
        for (bx, by), text, color in (
            ((ox, oy), "Open", (247, 233, 196, 255)),
            ((cx, cy), "Close", (70, 55, 35, 255)),
        ):
            shapes.Rectangle(bx, by, self._BUTTON_W, self._BUTTON_H, color=color).draw()
            pyglet.text.Label(
                text, font_size=_FONT_SIZE, color=(35, 26, 16, 255) if text == "Open" else _TEXT_COLOR,
                x=bx + self._BUTTON_W / 2, y=by + self._BUTTON_H / 2,
                anchor_x="center", anchor_y="center",
            ).draw()

    def _origin(self) -> Tuple[float, float]:
        return (
            (self._window.width - self._WIDTH) / 2,
            (self._window.height - self._HEIGHT) / 2,
        )

    def _button_origins(self):
        px, py = self._origin()
        return (px + 16, py + 16), (px + 32 + self._BUTTON_W, py + 16)


def _draw_markers(engine) -> None:
    """Marker buttons; the glow around the hovered one comes from the renderer."""
    height = engine.space.height
    focused = engine.tracker.focused_marker
    for marker in engine.catalog.markers:
        x, y = engine.space.marker_position(marker)
        radius = MARKER_DOT_RADIUS
        shapes.Circle(x, height - y, radius + 2, color=(35, 26, 16, 220)).draw()
        color = (255, 200, 110, 255) if marker == focused else (247, 233, 196, 255)
        shapes.Circle(x, height - y, radius, color=color).draw()


def _load_background(catalog: Optional[MapCatalog]) -> Optional[pyglet.sprite.Sprite]:
    if catalog is None or catalog.image_path is None:
        return None
    try:
        image = pyglet.image.load(str(catalog.image_path))
    except Exception:
        logger.warning("Failed to load map image: %s", catalog.image_path, exc_info=True)
        return None
    logger.info("Loaded map image %s (%dx%d)", catalog.image_path.name, image.width, image.height)
    return pyglet.sprite.Sprite(image)


def run_map_window(
    catalog_path: Optional[Path] = None,
    width: int = config.WINDOW_WIDTH,
    height: int = config.WINDOW_HEIGHT,
    fullscreen: bool = False,
) -> None:
    """Open the map window and run until it is closed or a region is clicked."""
    catalog = load_catalog(catalog_path)

    window = pyglet.window.Window(
        width=width,
        height=height,
        fullscreen=fullscreen,
        resizable=True,
        vsync=True,
        caption=(catalog.title if catalog and catalog.title else "Guild Map"),
    )
    pyglet.gl.glClearColor(*config.BACKGROUND_COLOR)

    background = _load_background(catalog)
    surface = PygletSurface()
    tooltip_view = TooltipView(window)
    panel = DetailPanelView(window)

    def navigate(target: str) -> None:
        url = urljoin(config.SITE_BASE_URL, target)
        logger.info("Opening %s", url)
        webbrowser.open(url)
        pyglet.app.exit()

    engine = create_engine(
        catalog, surface, navigate, panel,
        clock=pyglet.clock,
        measure=tooltip_view.measure,
    )
    if engine is not None:
        panel.on_open_target = engine.state_machine.begin_navigation
        panel.on_close = engine.state_machine.close_panel

    @window.event
    def on_resize(w, h):
        if background is not None and background.image.width and background.image.height:
            background.scale_x = w / background.image.width
            background.scale_y = h / background.image.height
        if engine is not None:
            engine.resize(w, h, window.get_pixel_ratio())

    @window.event
    def on_draw():
        window.clear()
        if background is not None:
            background.draw()
        if engine is None:
            return
        surface.draw()
        _draw_markers(engine)
        tooltip_view.draw(engine.state.tooltip, engine.tooltip_glow)
        panel.draw()

    if engine is None:
        logger.warning("Running as a static image")
    else:
        @window.event
        def on_mouse_motion(x, y, dx, dy):
            engine.tracker.on_pointer_move(*engine.tracker.to_local(x, y))

        @window.event
        def on_mouse_leave(x, y):
            engine.tracker.on_pointer_leave()

        @window.event
        def on_mouse_press(x, y, button, modifiers):
            if button != mouse.LEFT:
                return
            if panel.visible:
                panel.handle_click(x, y)
                return
            engine.tracker.on_pointer_move(*engine.tracker.to_local(x, y))
            engine.tracker.on_click()

        @window.event
        def on_key_press(symbol, modifiers):
            if panel.visible:
                if symbol in (key.ENTER, key.RETURN):
                    panel.request_open()
                elif symbol == key.ESCAPE:
                    panel.request_close()
                    return pyglet.event.EVENT_HANDLED
                return
            if symbol == key.TAB:
                engine.tracker.focus_next_marker()
            elif symbol in (key.ENTER, key.RETURN, key.SPACE):
                engine.tracker.activate_focused()

        engine.resize(window.width, window.height, window.get_pixel_ratio())
        engine.start()

    logger.info("Map window running (%dx%d)", window.width, window.height)

    try:
        pyglet.app.run()
    except Exception:
        logger.exception("Map window encountered an error")
    finally:
        if engine is not None:
            engine.stop()
        window.close()
        logger.info("Map window shut down")
