# boresight/ui/main_window.py
"""
Главное окно: изображение, калибровка по двум точкам, отметка точек
и вывод угловой статистики.
"""
import os
from typing import Optional

from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QPushButton,
    QMessageBox, QFileDialog, QStatusBar, QSizePolicy,
    QGraphicsView, QGraphicsScene, QGraphicsPixmapItem, QGraphicsEllipseItem
)
from PyQt5.QtCore import Qt, QRectF, QPointF, pyqtSignal
from PyQt5.QtGui import QPixmap, QPainter, QPen, QBrush, QColor, QMouseEvent, QWheelEvent

from boresight.calibration.calibration_point import PointRole
from boresight.calibration.calibration_service import CalibrationState
from boresight.config.config_model import AppConfig
from boresight.measurement.measurement_engine import MeasurementEngine
from boresight.measurement.result_writer import OutputFormat
from boresight.measurement.statistics_aggregator import StatisticsResult
from boresight.utils.logger import DataLogger, LogCategory
from boresight.utils.exceptions import BoreSightException


EXPORT_FILTERS = {
    OutputFormat.CSV: "CSV Files (*.csv)",
    OutputFormat.TXT: "Text Files (*.txt)",
    OutputFormat.MD: "Markdown Files (*.md)",
}


class ImageGraphicsView(QGraphicsView):
    """
    Вид для отображения фотографии и приёма кликов по ней.
    """
    # Сигнал, испускаемый при клике на изображении
    point_clicked = pyqtSignal(QPointF)  # QPointF в координатах сцены

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setRenderHint(QPainter.Antialiasing)
        self.setRenderHint(QPainter.SmoothPixmapTransform)
        self.setDragMode(QGraphicsView.NoDrag)
        self.setTransformationAnchor(QGraphicsView.AnchorUnderMouse)
        self.setResizeAnchor(QGraphicsView.AnchorUnderMouse)
        self.setCursor(Qt.CrossCursor)

        self._scene_item: Optional[QGraphicsPixmapItem] = None

    def set_scene_item(self, item: QGraphicsPixmapItem):
        """Устанавливает QGraphicsPixmapItem, на который можно кликать."""
        self._scene_item = item

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.LeftButton and self._scene_item:
            scene_pos = self.mapToScene(event.pos())
            if self._scene_item.contains(self._scene_item.mapFromScene(scene_pos)):
                self.point_clicked.emit(scene_pos)
        super().mousePressEvent(event)

    def wheelEvent(self, event: QWheelEvent):
        """Зум колесом мыши к курсору."""
        zoom_factor = 1.25 if event.angleDelta().y() > 0 else 1 / 1.25
        scene_pos = self.mapToScene(event.pos())
        self.scale(zoom_factor, zoom_factor)
        delta = self.mapToScene(event.pos()) - scene_pos
        self.translate(delta.x(), delta.y())
        event.accept()


class MainWindow(QMainWindow):
    """
    Главное окно приложения BoreSight.
    """
    def __init__(self, engine: MeasurementEngine, config: AppConfig, logger: DataLogger):
        super().__init__()
        self._engine = engine
        self._config = config
        self._logger = logger

        self._image_path: Optional[str] = None
        self._overlay_items = []

        self._graphics_view: ImageGraphicsView
        self._scene: QGraphicsScene
        self._pixmap_item: QGraphicsPixmapItem
        self._edit_distance: QLineEdit
        self._edit_range: QLineEdit
        self._btn_open: QPushButton
        self._btn_set_distance: QPushButton
        self._btn_compute: QPushButton
        self._btn_export: QPushButton
        self._btn_reset: QPushButton
        self._lbl_status: QLabel
        self._lbl_result: QLabel
        self._status_bar: QStatusBar

        self._setup_ui()
        self._setup_signals()
        self._update_status(self._engine.last_status)
        self._update_ui_state()

    def _setup_ui(self):
        self.setWindowTitle("BoreSight - угловые отклонения по фотографии")
        self.resize(1100, 800)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QVBoxLayout(central_widget)
        main_layout.setContentsMargins(10, 10, 10, 10)
        main_layout.setSpacing(10)

        # --- Кнопки и поля ввода ---
        controls = QHBoxLayout()
        controls.setSpacing(10)

        self._btn_open = QPushButton("Открыть изображение")
        self._edit_distance = QLineEdit()
        self._edit_distance.setPlaceholderText("Дистанция")
        self._edit_range = QLineEdit()
        self._edit_range.setPlaceholderText("Дальность")
        if self._config.default_real_distance is not None:
            self._edit_distance.setText(f"{self._config.default_real_distance:g}")
        if self._config.default_range is not None:
            self._edit_range.setText(f"{self._config.default_range:g}")
        self._btn_set_distance = QPushButton("Задать дистанцию")
        self._btn_compute = QPushButton("Рассчитать")
        self._btn_export = QPushButton("Экспорт")
        self._btn_reset = QPushButton("Сброс")

        controls.addWidget(self._btn_open)
        controls.addWidget(QLabel("Дистанция:"))
        controls.addWidget(self._edit_distance)
        controls.addWidget(QLabel("Дальность:"))
        controls.addWidget(self._edit_range)
        controls.addWidget(self._btn_set_distance)
        controls.addStretch()
        controls.addWidget(self._btn_compute)
        controls.addWidget(self._btn_export)
        controls.addWidget(self._btn_reset)
        main_layout.addLayout(controls)

        # --- Изображение ---
        self._graphics_view = ImageGraphicsView()
        self._graphics_view.setStyleSheet("background-color: black; border: 1px solid gray;")
        self._graphics_view.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self._scene = QGraphicsScene(self._graphics_view)
        self._graphics_view.setScene(self._scene)
        self._pixmap_item = QGraphicsPixmapItem()
        self._pixmap_item.setZValue(0)
        self._scene.addItem(self._pixmap_item)
        self._graphics_view.set_scene_item(self._pixmap_item)
        main_layout.addWidget(self._graphics_view)

        # --- Статус и результаты ---
        self._lbl_status = QLabel()
        self._lbl_status.setStyleSheet(
            "QLabel { background-color : lightgray; padding: 5px; border-radius: 3px; }"
        )
        self._lbl_status.setMinimumHeight(30)
        self._lbl_status.setWordWrap(True)
        main_layout.addWidget(self._lbl_status)

        self._lbl_result = QLabel("Результаты появятся после расчёта.")
        self._lbl_result.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self._lbl_result.setStyleSheet("QLabel { font-family: monospace; padding: 5px; }")
        main_layout.addWidget(self._lbl_result)

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)

    def _setup_signals(self):
        self._btn_open.clicked.connect(self._on_open_clicked)
        self._btn_set_distance.clicked.connect(self._on_set_distance_clicked)
        self._btn_compute.clicked.connect(self._on_compute_clicked)
        self._btn_export.clicked.connect(self._on_export_clicked)
        self._btn_reset.clicked.connect(self._on_reset_clicked)
        self._graphics_view.point_clicked.connect(self._on_image_clicked)

        self._engine.on_status = self._update_status
        self._engine.on_result = self._show_result

    # --- Вспомогательные методы ---
    def _update_ui_state(self):
        state = self._engine.state
        self._btn_set_distance.setEnabled(state != CalibrationState.IDLE)
        self._btn_compute.setEnabled(state == CalibrationState.CALIBRATED)
        self._btn_export.setEnabled(state == CalibrationState.CALIBRATED)
        self._btn_reset.setEnabled(state != CalibrationState.IDLE)

    def _update_status(self, message: str):
        self._lbl_status.setText(message)

    def _show_message(self, message: str, timeout: int = 3000):
        self._status_bar.showMessage(message, timeout)

    def _show_advisory(self, error: BoreSightException):
        self._logger.log_warn(LogCategory.UI, f"{type(error).__name__}: {error}")
        QMessageBox.warning(self, "Внимание", error.advisory)

    def _show_result(self, result: StatisticsResult):
        self._lbl_result.setText(self._engine.format_result(result))

    def _draw_marker(self, x: float, y: float, role: PointRole):
        """Рисует круглый маркер в координатах изображения."""
        r = self._config.marker_radius_px
        if role == PointRole.REFERENCE:
            color = QColor(self._config.reference_marker_color)
        else:
            color = QColor(self._config.marked_marker_color)
        item = QGraphicsEllipseItem(x - r, y - r, 2 * r, 2 * r)
        item.setBrush(QBrush(color))
        item.setPen(QPen(Qt.NoPen))
        item.setZValue(1)
        self._scene.addItem(item)
        self._overlay_items.append(item)

    def _clear_overlay(self):
        for item in self._overlay_items:
            self._scene.removeItem(item)
        self._overlay_items.clear()

    def _clear_result(self):
        self._lbl_result.setText("Результаты появятся после расчёта.")

    # --- Загрузка изображения ---
    def load_image(self, file_path: str) -> bool:
        """Загружает изображение с диска и сообщает движку."""
        pixmap = QPixmap(file_path)
        if pixmap.isNull():
            self._logger.log_error(LogCategory.UI, f"Не удалось загрузить изображение: {file_path}")
            QMessageBox.critical(self, "Ошибка", f"Не удалось загрузить изображение:\n{file_path}")
            return False

        self._clear_overlay()
        self._clear_result()
        self._pixmap_item.setPixmap(pixmap)
        self._scene.setSceneRect(QRectF(pixmap.rect()))
        self._graphics_view.fitInView(self._pixmap_item, Qt.KeepAspectRatio)
        self._image_path = file_path
        self._engine.load_image_known()
        self._logger.log_info(
            LogCategory.UI, f"Изображение {file_path} загружено ({pixmap.width()}x{pixmap.height()})"
        )
        self._show_message(f"Открыто: {os.path.basename(file_path)}")
        self._update_ui_state()
        return True

    # --- Обработчики событий UI ---
    def _on_open_clicked(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Открыть изображение", "",
            "Images (*.png *.jpg *.jpeg *.bmp *.tif *.tiff);;All Files (*)"
        )
        if file_path:
            self.load_image(file_path)

    def _on_set_distance_clicked(self):
        try:
            self._engine.set_calibration(self._edit_distance.text(), self._edit_range.text())
        except BoreSightException as e:
            self._show_advisory(e)
            return
        self._clear_overlay()
        self._clear_result()
        self._update_ui_state()

    def _on_image_clicked(self, scene_pos: QPointF):
        pixmap_pos = self._pixmap_item.mapFromScene(scene_pos)
        if not self._pixmap_item.pixmap().rect().contains(pixmap_pos.toPoint()):
            self._show_message("Клик вне области изображения", 2000)
            return

        x, y = pixmap_pos.x(), pixmap_pos.y()
        try:
            role = self._engine.click_at(x, y)
        except BoreSightException as e:
            self._show_advisory(e)
            return
        self._draw_marker(x, y, role)
        if role == PointRole.MARKED:
            count = self._engine.point_collector.get_point_count()
            self._show_message(f"Точка {count} отмечена: ({x:.1f}, {y:.1f})", 2000)
        self._update_ui_state()

    def _on_compute_clicked(self):
        try:
            self._engine.compute()
        except BoreSightException as e:
            self._show_advisory(e)

    def _on_export_clicked(self):
        default_format = OutputFormat(self._config.default_output_format)
        filters = [EXPORT_FILTERS[default_format]] + [
            f for fmt, f in EXPORT_FILTERS.items() if fmt != default_format
        ]
        file_path, selected_filter = QFileDialog.getSaveFileName(
            self, "Экспорт результатов", f"results.{default_format.value}", ";;".join(filters)
        )
        if not file_path:
            return

        output_format = default_format
        extension = os.path.splitext(file_path)[1].lstrip('.').lower()
        for fmt, f in EXPORT_FILTERS.items():
            if extension == fmt.value or (not extension and f == selected_filter):
                output_format = fmt
                break
        try:
            self._engine.export_results(file_path, output_format)
            self._show_message(f"Результаты сохранены в {file_path}")
        except BoreSightException as e:
            self._show_advisory(e)

    def _on_reset_clicked(self):
        self._engine.reset()
        self._clear_overlay()
        self._clear_result()
        self._update_ui_state()

    def closeEvent(self, event):
        self._logger.log_info(LogCategory.UI, "Закрытие главного окна")
        self._engine.on_status = None
        self._engine.on_result = None
        event.accept()
