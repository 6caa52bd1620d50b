"""
Graphics Map Engine

Map engine drawing stations, overlays and flight paths on a QGraphicsScene
using an equirectangular projection.
"""

import logging
from typing import Callable, Optional, Tuple
from PySide6.QtCore import Qt, QPointF
from PySide6.QtGui import QBrush, QColor, QPen, QFont, QPainter
from PySide6.QtWidgets import (
    QGraphicsScene,
    QGraphicsView,
    QGraphicsEllipseItem,
    QGraphicsLineItem,
    QGraphicsRectItem,
    QGraphicsTextItem,
    QWidget,
)

from ...core.interfaces.i_map_engine import IMapEngine, OverlayContent
from ...core.models.station import Station, StationRole

logger = logging.getLogger(__name__)

ROLE_COLORS = {
    StationRole.ORIGIN: "#4fc3f7",
    StationRole.DESTINATION: "#ef5350",
    StationRole.CONNECTION: "#ffb74d",
}

PATH_COLOR = "#90caf9"
CONNECTING_PATH_COLOR = "#ffcc80"
HIGHLIGHT_COLOR = "#ff4081"
BACKGROUND_COLOR = "#1a1a1a"
GRATICULE_COLOR = "#2e2e2e"


class OverlayItem(QGraphicsRectItem):
    """Detail panel anchored to a marker. Clicking it closes it."""

    def __init__(self, content: OverlayContent, on_dismiss: Callable[[], None]):
        super().__init__()
        self._on_dismiss = on_dismiss

        self.text_item = QGraphicsTextItem(self)
        self.text_item.setDefaultTextColor(QColor("#ffffff"))
        self.text_item.setFont(QFont("Arial", 9))
        self.text_item.setPlainText("\n".join((content.title,) + content.lines))
        self.text_item.setTextWidth(320)
        self.text_item.setPos(6, 6)

        bounds = self.text_item.boundingRect()
        self.setRect(0, 0, bounds.width() + 12, bounds.height() + 12)
        self.setBrush(QBrush(QColor("#263238")))
        self.setPen(QPen(QColor("#4fc3f7"), 1))
        self.setZValue(3000)
        self.setToolTip("Click to close")

    def mousePressEvent(self, event):
        """Close the overlay on click."""
        self._on_dismiss()
        event.accept()


class MarkerItem(QGraphicsEllipseItem):
    """Clickable station dot."""

    RADIUS = 6.0

    def __init__(self, station: Station, role: StationRole,
                 on_overlay_open: Callable[[], None],
                 on_overlay_close: Callable[[], None],
                 on_click: Callable[['MarkerItem'], None]):
        r = self.RADIUS
        super().__init__(-r, -r, 2 * r, 2 * r)
        self.station = station
        self.role = role
        self.on_overlay_open = on_overlay_open
        self.on_overlay_close = on_overlay_close
        self.overlay: Optional[OverlayItem] = None
        self._on_click = on_click

        self.setBrush(QBrush(QColor(ROLE_COLORS[role])))
        self.setPen(QPen(QColor("#ffffff"), 1.5))
        self.setZValue(2000)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

    def mousePressEvent(self, event):
        """Toggle the overlay on click."""
        self._on_click(self)
        event.accept()


class PathItem(QGraphicsLineItem):
    """Clickable flight path."""

    def __init__(self, start: QPointF, end: QPointF, connecting: bool,
                 on_select: Optional[Callable[[], None]]):
        super().__init__(start.x(), start.y(), end.x(), end.y())
        self.connecting = connecting
        self.highlighted = False
        self._on_select = on_select
        self.setZValue(1000)

    def apply_style(self, highlighted: bool) -> None:
        """Apply the pen for the current highlight state."""
        self.highlighted = highlighted
        if highlighted:
            pen = QPen(QColor(HIGHLIGHT_COLOR), 3.5)
        else:
            color = CONNECTING_PATH_COLOR if self.connecting else PATH_COLOR
            pen = QPen(QColor(color), 1.5)
        if self.connecting:
            pen.setStyle(Qt.PenStyle.DashLine)
        self.setPen(pen)

    def mousePressEvent(self, event):
        """Report selection on click."""
        if self._on_select is not None:
            self._on_select()
        event.accept()


class GraphicsMapEngine(IMapEngine):
    """
    Map engine backed by a QGraphicsScene.

    Markers, overlays and paths are scene items; handles returned to callers
    are the items themselves.
    """

    def __init__(self, width: int = 1440, height: int = 720, parent: Optional[QWidget] = None):
        """
        Initialize the engine.

        Args:
            width: Scene width in pixels for the whole world
            height: Scene height in pixels for the whole world
            parent: Parent widget of the view
        """
        self.width = width
        self.height = height
        self.scene = QGraphicsScene(0, 0, width, height)
        self.scene.setBackgroundBrush(QBrush(QColor(BACKGROUND_COLOR)))
        self.view = QGraphicsView(self.scene, parent)
        self.view.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        self.view.setDragMode(QGraphicsView.DragMode.ScrollHandDrag)
        self._draw_graticule()

    def project(self, lat: float, lng: float) -> QPointF:
        """Convert a latitude/longitude pair to scene coordinates."""
        x = (lng + 180.0) / 360.0 * self.width
        y = (90.0 - lat) / 180.0 * self.height
        return QPointF(x, y)

    def set_view(self, center: Tuple[float, float], zoom: int) -> None:
        """Center the view on (lat, lng) at the given zoom level."""
        factor = 2.0 ** (zoom - 2)
        self.view.resetTransform()
        self.view.scale(factor, factor)
        self.view.centerOn(self.project(*center))

    def mount_marker(self, station: Station, role: StationRole, tooltip: str,
                     on_overlay_open: Callable[[], None],
                     on_overlay_close: Callable[[], None]) -> MarkerItem:
        """Place a marker item at the station's position."""
        item = MarkerItem(station, role, on_overlay_open, on_overlay_close, self._on_marker_clicked)
        item.setPos(self.project(station.lat, station.lng))
        item.setToolTip(tooltip)
        self.scene.addItem(item)
        return item

    def remove_marker(self, handle: MarkerItem) -> None:
        """Remove a marker and its overlay."""
        self.close_overlay(handle)
        if handle.scene() is self.scene:
            self.scene.removeItem(handle)

    def open_overlay(self, handle: MarkerItem, content: OverlayContent,
                     offset: Tuple[float, float]) -> None:
        """Show the overlay next to the marker, replacing any open one."""
        if handle.overlay is not None:
            self.scene.removeItem(handle.overlay)

        overlay = OverlayItem(content, lambda: self.close_overlay(handle))
        anchor = handle.pos()
        overlay.setPos(anchor.x() + offset[0], anchor.y() + offset[1])
        self.scene.addItem(overlay)
        handle.overlay = overlay
        logger.debug(f"Overlay shown for {handle.station.display_code} at offset {offset}")
        handle.on_overlay_open()

    def close_overlay(self, handle: MarkerItem) -> None:
        """Hide the marker's overlay if it is shown."""
        if handle.overlay is None:
            return
        self.scene.removeItem(handle.overlay)
        handle.overlay = None
        handle.on_overlay_close()

    def draw_path(self, departure: Station, arrival: Station, highlighted: bool,
                  connecting: bool, tooltip: str,
                  on_select: Optional[Callable[[], None]] = None) -> PathItem:
        """Draw a straight path between two stations."""
        item = PathItem(
            self.project(departure.lat, departure.lng),
            self.project(arrival.lat, arrival.lng),
            connecting,
            on_select,
        )
        item.apply_style(highlighted)
        item.setToolTip(tooltip)
        self.scene.addItem(item)
        return item

    def set_path_highlight(self, handle: PathItem, highlighted: bool) -> None:
        """Restyle a path for its highlight flag."""
        handle.apply_style(highlighted)

    def remove_path(self, handle: PathItem) -> None:
        """Remove a path."""
        if handle.scene() is self.scene:
            self.scene.removeItem(handle)

    def _on_marker_clicked(self, item: MarkerItem) -> None:
        if item.overlay is not None:
            self.close_overlay(item)
        else:
            item.on_overlay_open()

    def _draw_graticule(self) -> None:
        pen = QPen(QColor(GRATICULE_COLOR), 0.5)
        for lng in range(-180, 181, 30):
            top, bottom = self.project(90, lng), self.project(-90, lng)
            self.scene.addLine(top.x(), top.y(), bottom.x(), bottom.y(), pen)
        for lat in range(-90, 91, 30):
            left, right = self.project(lat, -180), self.project(lat, 180)
            self.scene.addLine(left.x(), left.y(), right.x(), right.y(), pen)
