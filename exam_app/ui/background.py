"""Run blocking calls off the Qt event loop and report back on the GUI thread."""

from __future__ import annotations

import logging
from typing import Callable

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

from exam_app.core.errors import TransportError

logger = logging.getLogger(__name__)


class _TaskSignals(QObject):
    succeeded = Signal(object)
    failed = Signal(str)


class _TaskRelay(QObject):
    """Lives on the GUI thread so queued signal delivery lands there."""

    def __init__(
        self,
        on_success: Callable[[object], None],
        on_failure: Callable[[str], None],
    ) -> None:
        super().__init__()
        self._on_success = on_success
        self._on_failure = on_failure

    @Slot(object)
    def deliver_success(self, result: object) -> None:
        self._on_success(result)

    @Slot(str)
    def deliver_failure(self, message: str) -> None:
        self._on_failure(message)


class BackgroundTask(QRunnable):
    """Calls *fn* on a pool thread; any exception it raises is reported as ``failed``."""

    def __init__(self, fn: Callable[[], object], relay: _TaskRelay) -> None:
        super().__init__()
        self.setAutoDelete(False)
        self._fn = fn
        self.relay = relay
        self.signals = _TaskSignals()
        self.signals.succeeded.connect(relay.deliver_success)
        self.signals.failed.connect(relay.deliver_failure)

    def run(self) -> None:
        try:
            result = self._fn()
        except TransportError as exc:
            self.signals.failed.emit(str(exc))
            return
        except Exception as exc:
            logger.exception("Background task failed")
            self.signals.failed.emit(str(exc))
            return
        self.signals.succeeded.emit(result)


def run_in_background(
    fn: Callable[[], object],
    on_success: Callable[[object], None],
    on_failure: Callable[[str], None],
) -> BackgroundTask:
    """Start *fn* on the global thread pool.

    Callers keep the returned task referenced until one of the callbacks fires.
    """
    task = BackgroundTask(fn, _TaskRelay(on_success, on_failure))
    QThreadPool.globalInstance().start(task)
    return task
