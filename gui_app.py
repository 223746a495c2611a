import logging
import sys
from typing import Optional

import cv2
from PySide6 import QtCore, QtGui, QtWidgets

from alert_throttle import AlertThrottle
from camera import CameraStream
from config import AppSettings, settings
from logging_config import setup_logging
from monitor import MonitorResult, PostureMonitor
from notifications import NotificationUnavailable, Notifier
from pose_detection import PoseDetector
from pose_types import AlertRequest, Urgency
from ui import STATUS_CSS, status_lines
from visualization import draw_pose

logger = logging.getLogger(__name__)


class TrayNotifier(Notifier):
    def __init__(self, tray_icon: QtWidgets.QSystemTrayIcon, timeout_ms: int = 10000):
        self._tray = tray_icon
        self.timeout_ms = timeout_ms

    def notify(self, request: AlertRequest) -> None:
        tray_cls = QtWidgets.QSystemTrayIcon
        if not tray_cls.isSystemTrayAvailable() or not tray_cls.supportsMessages():
            raise NotificationUnavailable("System tray notifications are not supported on this system")
        icons = {
            Urgency.LOW: tray_cls.MessageIcon.Information,
            Urgency.NORMAL: tray_cls.MessageIcon.Warning,
            Urgency.CRITICAL: tray_cls.MessageIcon.Critical,
        }
        self._tray.showMessage(request.title, request.body, icons[request.urgency], self.timeout_ms)


class MonitorPage(QtWidgets.QWidget):
    def __init__(self, app_settings: AppSettings, notifier: Optional[Notifier] = None, parent=None):
        super().__init__(parent)
        self._settings = app_settings
        self._setup_ui()
        self._setup_runtime(notifier)

    def _setup_ui(self):
        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(16)

        self.video_label = QtWidgets.QLabel("Camera feed")
        self.video_label.setAlignment(QtCore.Qt.AlignCenter)
        self.video_label.setMinimumSize(720, 480)
        self.video_label.setStyleSheet("background:#101214; border-radius:12px;")

        self.stats_box = QtWidgets.QFrame()
        self.stats_box.setMinimumWidth(260)
        self.stats_box.setStyleSheet(
            "QFrame{background:#15181b;border:1px solid #2b2f33;border-radius:10px;color:#e6e6e6;}"
        )
        stats_layout = QtWidgets.QVBoxLayout(self.stats_box)
        stats_layout.setContentsMargins(12, 12, 12, 12)
        stats_layout.setSpacing(8)

        self.status_label = QtWidgets.QLabel("Starting camera...")
        self.status_label.setWordWrap(True)
        self.status_label.setStyleSheet("font-size:14px;")
        self.warning_label = QtWidgets.QLabel("")
        self.warning_label.setStyleSheet("color:#ff9b9b;font-size:14px;")
        stats_layout.addWidget(self.status_label)
        stats_layout.addWidget(self.warning_label)
        stats_layout.addStretch(1)

        layout.addWidget(self.video_label, 1)
        layout.addWidget(self.stats_box)

    def _setup_runtime(self, notifier: Optional[Notifier]):
        self.camera = CameraStream(
            camera_index=self._settings.CAMERA_INDEX,
            width=self._settings.FRAME_WIDTH,
            height=self._settings.FRAME_HEIGHT,
            target_fps=self._settings.TARGET_FPS,
        )
        self.detector = PoseDetector(
            model_complexity=self._settings.MODEL_COMPLEXITY,
            min_detection_confidence=self._settings.MIN_DETECTION_CONFIDENCE,
            min_tracking_confidence=self._settings.MIN_TRACKING_CONFIDENCE,
        )
        self.monitor = PostureMonitor(
            throttle=AlertThrottle(
                cooldown_seconds=self._settings.ALERT_COOLDOWN_SECONDS,
                title=self._settings.ALERT_TITLE,
            ),
            notifier=notifier,
        )

        self.timer = QtCore.QTimer(self)
        self.timer.timeout.connect(self._update_frame)
        self.timer.start(33)

    def set_notifier(self, notifier: Optional[Notifier]) -> None:
        self.monitor.notifier = notifier

    def stop_camera(self):
        self.timer.stop()
        self.camera.release()
        self.detector.close()
        logger.info("Monitoring stopped")

    def _update_frame(self):
        # A closed camera is reopened from read(), with backoff.
        cam_frame = self.camera.read()
        if not cam_frame.ok:
            self.warning_label.setText("Camera error")
            return
        self.warning_label.setText("")

        frame = cam_frame.frame
        detection = self.detector.process(frame, cam_frame.timestamp)
        result = self.monitor.process(detection.frame, analyzing=detection.person_detected)

        draw_pose(frame, detection.raw_landmarks, result.analysis)
        self._show_result(result)

        frame_rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        h, w, ch = frame_rgb.shape
        image = QtGui.QImage(frame_rgb.data, w, h, ch * w, QtGui.QImage.Format_RGB888)
        pixmap = QtGui.QPixmap.fromImage(image)
        self.video_label.setPixmap(pixmap.scaled(self.video_label.size(), QtCore.Qt.KeepAspectRatio))

    def _show_result(self, result: MonitorResult):
        color = "#e6e6e6"
        if result.analysis is not None:
            color = STATUS_CSS[result.analysis.status]
        self.status_label.setStyleSheet(f"font-size:14px;color:{color};")
        self.status_label.setText("\n".join(status_lines(result)))


class SettingsPage(QtWidgets.QWidget):
    def __init__(self, app_settings: AppSettings, parent=None):
        super().__init__(parent)
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(16)

        title = QtWidgets.QLabel("Settings")
        title.setStyleSheet("font-size:20px;font-weight:600;color:#f2f2f2;")
        layout.addWidget(title)

        info = QtWidgets.QLabel(
            f"Camera: {app_settings.CAMERA_INDEX} ({app_settings.FRAME_WIDTH}x{app_settings.FRAME_HEIGHT})\n"
            f"Alert cooldown: {app_settings.ALERT_COOLDOWN_SECONDS:.0f}s\n\n"
            "Tip: sit facing the camera with your head and shoulders in view. "
            "Step back so your hips are visible to switch to standing analysis."
        )
        info.setWordWrap(True)
        info.setStyleSheet("font-size:13px;color:#b9c0c5;")
        layout.addWidget(info)
        layout.addStretch(1)


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, app_settings: AppSettings):
        super().__init__()
        self._settings = app_settings
        self._quitting = False
        self.setWindowTitle(app_settings.APP_NAME)
        self.resize(1200, 800)
        self._setup_ui()
        self._setup_tray()

    def _setup_ui(self):
        self.setStyleSheet("QMainWindow{background:#0f1113;}")

        root = QtWidgets.QWidget()
        self.setCentralWidget(root)
        layout = QtWidgets.QHBoxLayout(root)
        layout.setContentsMargins(0, 0, 0, 0)

        nav = QtWidgets.QFrame()
        nav.setFixedWidth(200)
        nav.setStyleSheet("QFrame{background:#0c0e10;border-right:1px solid #22262a;}")
        nav_layout = QtWidgets.QVBoxLayout(nav)
        nav_layout.setContentsMargins(12, 20, 12, 12)
        nav_layout.setSpacing(10)

        self.monitor_btn = QtWidgets.QPushButton("Monitor")
        self.settings_btn = QtWidgets.QPushButton("Settings")
        for btn in [self.monitor_btn, self.settings_btn]:
            btn.setStyleSheet(
                "QPushButton{background:#15181b;color:#e6e6e6;padding:10px;border-radius:8px;text-align:left;}"
                "QPushButton:hover{background:#1a1f24;}"
            )
            nav_layout.addWidget(btn)
        nav_layout.addStretch(1)

        self.stack = QtWidgets.QStackedWidget()
        self.monitor_page = MonitorPage(self._settings)
        self.settings_page = SettingsPage(self._settings)
        self.stack.addWidget(self.monitor_page)
        self.stack.addWidget(self.settings_page)

        layout.addWidget(nav)
        layout.addWidget(self.stack, 1)

        self.monitor_btn.clicked.connect(lambda: self.stack.setCurrentIndex(0))
        self.settings_btn.clicked.connect(lambda: self.stack.setCurrentIndex(1))

    def _setup_tray(self):
        icon = self.style().standardIcon(QtWidgets.QStyle.SP_ComputerIcon)
        self.setWindowIcon(icon)
        self.tray = QtWidgets.QSystemTrayIcon(icon, self)
        self.tray.setToolTip(f"{self._settings.APP_NAME} - Posture Monitor")

        menu = QtWidgets.QMenu(self)
        menu.addAction("Show App", self.show_window)
        menu.addAction("Hide App", self.hide)
        menu.addSeparator()
        menu.addAction("Quit", self.quit)
        self.tray.setContextMenu(menu)

        self.tray.activated.connect(self._on_tray_activated)
        self.tray.messageClicked.connect(self.show_window)
        self.tray.show()
        self.monitor_page.set_notifier(TrayNotifier(self.tray))

    def _on_tray_activated(self, reason):
        if reason != QtWidgets.QSystemTrayIcon.Trigger:
            return
        if self.isVisible():
            self.hide()
        else:
            self.show_window()

    def show_window(self):
        self.show()
        self.setWindowState(self.windowState() & ~QtCore.Qt.WindowMinimized)
        self.raise_()
        self.activateWindow()

    def quit(self):
        self._quitting = True
        self.close()
        QtWidgets.QApplication.quit()

    def changeEvent(self, event):
        # Minimize goes to the tray; monitoring keeps running in the background.
        if event.type() == QtCore.QEvent.WindowStateChange and self.isMinimized() and self.tray.isVisible():
            QtCore.QTimer.singleShot(0, self.hide)
        super().changeEvent(event)

    def closeEvent(self, event):
        if not self._quitting and self.tray.isVisible():
            event.ignore()
            self.hide()
            return
        self.monitor_page.stop_camera()
        self.tray.hide()
        super().closeEvent(event)


def main():
    setup_logging(settings)
    app = QtWidgets.QApplication(sys.argv)
    app.setQuitOnLastWindowClosed(False)
    window = MainWindow(settings)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
