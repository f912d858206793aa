"""Viewport width source that layout-aware widgets subscribe to."""

from __future__ import annotations

from PySide6.QtCore import QObject, Signal


class ViewportObserver(QObject):
    """Publishes the current viewport width whenever it changes.

    The hosting layer calls ``resize`` from its resize handler (a Qt
    ``resizeEvent``, a browser resize message, ...).
    """

    width_changed = Signal(int)

    def __init__(self, width: int = 0, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._width = width

    @property
    def width(self) -> int:
        return self._width

    def resize(self, width: int) -> None:
        if width == self._width:
            return
        self._width = width
        self.width_changed.emit(width)
