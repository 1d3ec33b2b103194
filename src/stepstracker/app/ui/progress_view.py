from __future__ import annotations

from PySide6.QtCore import Qt, QRectF, Slot
from PySide6.QtGui import QColor, QFont, QPainter, QPen, QPaintEvent
from PySide6.QtWidgets import QWidget

from stepstracker.app.state import Store
from stepstracker.app.ui.spiral_view import to_qcolor
from stepstracker.config import VIEWPORT_SIZE
from stepstracker.model.colors import WHITE
from stepstracker.model.progress import DailyProgress

RING_DIAMETER = 140.0
RING_WIDTH = 8.0
RING_GAP = 20.0  # between ring and percentage line


def _font(size: float, weight: QFont.Weight = QFont.Weight.Normal) -> QFont:
    font = QFont()
    font.setPointSizeF(size)
    font.setWeight(weight)
    return font


def paint_progress(painter: QPainter, progress: DailyProgress, rect: QRectF) -> None:
    """
    Draw the daily progress ring centred in `rect`.

    Ring trim starts at 12 o'clock and runs clockwise. Inside: the step count
    and "of GOAL"; below the ring: "P% of goal".
    """
    painter.save()
    painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)

    center = rect.center()
    ring = QRectF(
        center.x() - RING_DIAMETER / 2,
        center.y() - RING_DIAMETER / 2 - RING_GAP,
        RING_DIAMETER,
        RING_DIAMETER,
    )

    pen = QPen(to_qcolor(WHITE, 0.3), RING_WIDTH)
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    painter.setPen(pen)
    painter.drawEllipse(ring)

    if progress.fraction > 0.0:
        pen.setColor(to_qcolor(WHITE))
        painter.setPen(pen)
        # Qt angles are 1/16 degree, counter-clockwise from 3 o'clock
        painter.drawArc(ring, 90 * 16, -int(round(progress.fraction * 360 * 16)))

    painter.setPen(to_qcolor(WHITE))
    painter.setFont(_font(37, QFont.Weight.Medium))
    count_rect = QRectF(ring.left(), ring.top(), ring.width(), ring.height() * 0.62)
    painter.drawText(count_rect, Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignBottom, progress.count_label())

    painter.setPen(to_qcolor(WHITE, 0.7))
    painter.setFont(_font(14))
    goal_rect = QRectF(ring.left(), count_rect.bottom(), ring.width(), ring.height() * 0.2)
    painter.drawText(goal_rect, Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop, progress.goal_label())

    painter.setPen(to_qcolor(WHITE, 0.8))
    painter.setFont(_font(16))
    percent_rect = QRectF(rect.left(), ring.bottom() + RING_GAP, rect.width(), 24.0)
    painter.drawText(percent_rect, Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop, progress.percent_label())

    painter.restore()


class ProgressRingView(QWidget):
    """Progress screen: today's steps against the confirmed goal."""
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store
        self.setMinimumSize(VIEWPORT_SIZE, VIEWPORT_SIZE)
        store.progress_changed.connect(self._on_progress_changed)

    @Slot(object)
    def _on_progress_changed(self, _progress: DailyProgress) -> None:
        self.update()

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            painter.fillRect(self.rect(), QColor(0, 0, 0))
            paint_progress(painter, self.store.progress, QRectF(self.rect()))
        finally:
            painter.end()
