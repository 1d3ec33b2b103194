from __future__ import annotations

from PySide6.QtCore import Qt, QPointF, QRectF, QVariantAnimation, QEasingCurve, Slot
from PySide6.QtGui import QColor, QFont, QPainter, QWheelEvent, QKeyEvent, QMouseEvent, QPaintEvent
from PySide6.QtWidgets import QWidget, QPushButton, QVBoxLayout

from stepstracker.app.goal_input import GoalInput
from stepstracker.app.state import Store
from stepstracker.config import DOT_DIAMETER, VIEWPORT_SIZE
from stepstracker.model.colors import RGB, WHITE
from stepstracker.model.spiral import SpiralState, ripple_scale

BACKGROUND = QColor(0, 0, 0)
UNFILLED_ALPHA = 0.2
WHEEL_TICK = 120  # angleDelta units per notch


def to_qcolor(color: RGB, alpha: float = 1.0) -> QColor:
    return QColor.fromRgbF(color.r, color.g, color.b, alpha)


# -------------------------------------------------------------------------------
# Render function
# -------------------------------------------------------------------------------

def paint_spiral(
    painter: QPainter,
    state: SpiralState,
    rect: QRectF,
    active: bool = False,
    zoom: float | None = None,
    dot_diameter: float = DOT_DIAMETER
) -> None:
    """
    Draw `state` centred in `rect`.

    Args:
        painter: Active painter on the target device.
        state: The spiral to draw.
        rect: Target area; the spiral centre is its centre.
        active: Goal input is active, so the newest dots ripple.
        zoom: Overrides `state.zoom_scale` (used while the zoom animates).
        dot_diameter: Dot size before zoom and ripple scaling.
    """
    painter.save()
    painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
    painter.translate(rect.center())
    scale = state.zoom_scale if zoom is None else zoom
    painter.scale(scale, scale)

    r = dot_diameter / 2.0
    painter.setPen(Qt.PenStyle.NoPen)

    # background (unfilled) dots first, so filled ripples overlap them
    painter.setBrush(to_qcolor(WHITE, UNFILLED_ALPHA))
    for dot in state.unfilled_dots:
        painter.drawEllipse(QPointF(dot.position.x, dot.position.y), r, r)

    for i, dot in enumerate(state.filled_dots):
        dot_r = r * ripple_scale(i, state.filled_dot_count, active)
        painter.setBrush(to_qcolor(dot.color))
        painter.drawEllipse(QPointF(dot.position.x, dot.position.y), dot_r, dot_r)

    # goal label
    font = QFont()
    if state.is_beyond_first_layer:
        font.setPointSizeF(28)
        font.setWeight(QFont.Weight.Black)
    else:
        font.setPointSizeF(24)
        font.setWeight(QFont.Weight.Medium)
    painter.setFont(font)
    painter.setPen(to_qcolor(state.current_color))
    extent = state.outer_radius
    painter.drawText(
        QRectF(-extent, -extent, 2 * extent, 2 * extent),
        Qt.AlignmentFlag.AlignCenter,
        str(state.display_goal)
    )

    painter.restore()


# -------------------------------------------------------------------------------
# Widget
# -------------------------------------------------------------------------------

class SpiralView(QWidget):
    """
    Goal-setting screen.

    Mouse wheel / arrow keys turn the goal, a downward drag reveals Continue.
    Releasing that drag, a double-click, Enter or the button confirms.
    """
    def __init__(self, store: Store, goal_input: GoalInput, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store
        self.goal_input = goal_input
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMinimumSize(VIEWPORT_SIZE, VIEWPORT_SIZE)

        self._press_y: float | None = None
        self._wheel_remainder = 0

        layout = QVBoxLayout(self)
        layout.addStretch(1)
        self.continue_button = QPushButton(self.tr("Continue"), self)
        self.continue_button.setStyleSheet(
            "QPushButton { background: white; color: black; border-radius: 14px; padding: 6px 20px; }"
        )
        self.continue_button.setVisible(goal_input.is_continue_visible)
        layout.addWidget(self.continue_button, 0, Qt.AlignmentFlag.AlignHCenter)

        # zoom eases towards the state's zoom_scale
        self._zoom = store.spiral.zoom_scale
        self._zoom_animation = QVariantAnimation(self)
        self._zoom_animation.setDuration(800)
        self._zoom_animation.setEasingCurve(QEasingCurve.Type.InOutQuad)
        self._zoom_animation.valueChanged.connect(self._on_zoom_step)

        # wiring
        self.continue_button.clicked.connect(goal_input.confirm)
        goal_input.continue_visible_changed.connect(self.continue_button.setVisible)
        goal_input.active_changed.connect(lambda *_: self.update())
        store.spiral_changed.connect(self._on_spiral_changed)

    @property
    def zoom(self) -> float:
        return self._zoom

    # ---- store ----

    @Slot(object)
    def _on_spiral_changed(self, state: SpiralState) -> None:
        if abs(state.zoom_scale - self._zoom) > 1e-9:
            self._zoom_animation.stop()
            self._zoom_animation.setStartValue(float(self._zoom))
            self._zoom_animation.setEndValue(float(state.zoom_scale))
            self._zoom_animation.start()
        self.update()

    def _on_zoom_step(self, value: float) -> None:
        self._zoom = float(value)
        self.update()

    # ---- painting ----

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            painter.fillRect(self.rect(), BACKGROUND)
            paint_spiral(
                painter,
                self.store.spiral,
                QRectF(self.rect()),
                active=self.goal_input.is_active,
                zoom=self._zoom * self._fit_factor(),
            )
        finally:
            painter.end()

    def _fit_factor(self) -> float:
        """Scale of the nominal viewport onto the actual widget size."""
        return max(1, min(self.width(), self.height())) / VIEWPORT_SIZE

    # ---- input ----

    def wheelEvent(self, event: QWheelEvent) -> None:
        self._wheel_remainder += event.angleDelta().y()
        notches = int(self._wheel_remainder / WHEEL_TICK)
        if notches:
            self._wheel_remainder -= notches * WHEEL_TICK
            self.goal_input.apply_delta(notches)
        event.accept()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        key = int(event.key())
        deltas = {
            int(Qt.Key.Key_Up): 1,
            int(Qt.Key.Key_Right): 1,
            int(Qt.Key.Key_Down): -1,
            int(Qt.Key.Key_Left): -1,
            int(Qt.Key.Key_PageUp): 10,
            int(Qt.Key.Key_PageDown): -10,
        }
        if key in deltas:
            self.goal_input.apply_delta(deltas[key])
        elif key in (int(Qt.Key.Key_Return), int(Qt.Key.Key_Enter)):
            self.goal_input.confirm()
        else:
            super().keyPressEvent(event)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._press_y = event.position().y()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._press_y is not None:
            offset = (event.position().y() - self._press_y) / self._fit_factor()
            self.goal_input.drag_moved(offset)
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if self._press_y is not None and event.button() == Qt.MouseButton.LeftButton:
            self._press_y = None
            self.goal_input.drag_ended()
        super().mouseReleaseEvent(event)

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._press_y = None
            self.goal_input.confirm()
            event.accept()
        else:
            super().mouseDoubleClickEvent(event)
