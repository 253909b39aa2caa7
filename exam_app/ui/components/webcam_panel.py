"""Webcam preview shown while the exam runs."""

from __future__ import annotations

import logging

from PySide6.QtCore import QTimer, Signal
from PySide6.QtMultimedia import QCamera, QMediaCaptureSession, QMediaDevices
from PySide6.QtMultimediaWidgets import QVideoWidget
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from exam_app.constants.ui_constants import (
    WEBCAM_ACTIVE_MESSAGE,
    WEBCAM_FAILED_MESSAGE,
    WEBCAM_LOST_MESSAGE,
    WEBCAM_MISSING_MESSAGE,
    WEBCAM_START_TIMEOUT_MS,
)

logger = logging.getLogger(__name__)


class WebcamPanel(QWidget):
    """Starts the default camera and shows its preview.

    Opening a camera is asynchronous: ``start`` only requests it, and the
    outcome arrives as ``ready`` or ``failed``. A camera that stops after
    ``ready`` is reported through ``lost``.
    """

    ready = Signal()
    failed = Signal(str)
    lost = Signal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._camera: QCamera | None = None
        self._is_ready: bool = False
        self._capture_session = QMediaCaptureSession(self)

        self._start_timeout = QTimer(self)
        self._start_timeout.setSingleShot(True)
        self._start_timeout.setInterval(WEBCAM_START_TIMEOUT_MS)
        self._start_timeout.timeout.connect(self._handle_start_timeout)

        layout = QVBoxLayout()
        self.setLayout(layout)
        self.video_widget = QVideoWidget(self)
        self.video_widget.setFixedSize(200, 150)
        layout.addWidget(self.video_widget)
        self.status_label = QLabel("", self)
        self.status_label.setWordWrap(True)
        layout.addWidget(self.status_label)

    def start(self) -> bool:
        """Request the default camera. Returns False when there is none at all."""
        device = QMediaDevices.defaultVideoInput()
        if device.isNull():
            self.status_label.setText(WEBCAM_MISSING_MESSAGE)
            logger.warning("No video input available")
            return False
        self._is_ready = False
        self._camera = QCamera(device, self)
        self._camera.activeChanged.connect(self._handle_active_changed)
        self._camera.errorOccurred.connect(self._handle_error)
        self._capture_session.setCamera(self._camera)
        self._capture_session.setVideoOutput(self.video_widget)
        self._start_timeout.start()
        self._camera.start()
        return True

    def stop(self) -> None:
        self._start_timeout.stop()
        if self._camera is not None:
            camera = self._camera
            self._camera = None
            camera.activeChanged.disconnect(self._handle_active_changed)
            camera.errorOccurred.disconnect(self._handle_error)
            camera.stop()
        self._is_ready = False

    def _handle_active_changed(self, active: bool) -> None:
        if active and not self._is_ready:
            self._start_timeout.stop()
            self._is_ready = True
            self.status_label.setText(WEBCAM_ACTIVE_MESSAGE)
            self.ready.emit()
        elif not active and self._is_ready:
            self._report_lost(WEBCAM_LOST_MESSAGE)

    def _handle_error(self, error: QCamera.Error, message: str) -> None:
        logger.error("Camera error %s: %s", error, message)
        if self._is_ready:
            self._report_lost(message or WEBCAM_LOST_MESSAGE)
        else:
            self._report_failed(message or WEBCAM_FAILED_MESSAGE)

    def _handle_start_timeout(self) -> None:
        if self._camera is not None and not self._is_ready:
            logger.warning("Camera did not become active in %d ms", WEBCAM_START_TIMEOUT_MS)
            self._report_failed(WEBCAM_FAILED_MESSAGE)

    def _report_failed(self, message: str) -> None:
        self.stop()
        self.status_label.setText(WEBCAM_FAILED_MESSAGE)
        self.failed.emit(message)

    def _report_lost(self, message: str) -> None:
        self.stop()
        self.status_label.setText(WEBCAM_LOST_MESSAGE)
        self.lost.emit(message)
