"""Best-effort deterrent against copying exam content.

Blocks clipboard shortcuts, view-source/save/print shortcuts, the
developer-tools shortcuts and context menus. It is trivially bypassed and
is not a security boundary.
"""

from __future__ import annotations

from PySide6.QtCore import QEvent, QObject, Qt
from PySide6.QtGui import QKeyEvent

_BLOCKED_CTRL_KEYS = {Qt.Key_C, Qt.Key_V, Qt.Key_X, Qt.Key_U, Qt.Key_S, Qt.Key_P}


def is_blocked_shortcut(key: int, modifiers: Qt.KeyboardModifier) -> bool:
    if key == Qt.Key_F12:
        return True
    ctrl = bool(modifiers & (Qt.ControlModifier | Qt.MetaModifier))
    if not ctrl:
        return False
    if key in _BLOCKED_CTRL_KEYS:
        return True
    return key == Qt.Key_I and bool(modifiers & Qt.ShiftModifier)


class InputGuard(QObject):
    """Application-wide event filter swallowing blocked shortcuts and context menus."""

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if event.type() == QEvent.ContextMenu:
            return True
        if event.type() in (QEvent.KeyPress, QEvent.ShortcutOverride) and isinstance(event, QKeyEvent):
            if is_blocked_shortcut(event.key(), event.modifiers()):
                return True
        return super().eventFilter(watched, event)
