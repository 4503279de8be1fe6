#!/usr/bin/env python3

"""
Main entry point for WishGallery - image uploader, Ken Burns carousel and lightbox.
"""

import os
import sys
from collections.abc import Sequence
from typing import Optional

from PySide6.QtCore import QEasingCurve, QPointF, QRectF, Qt, QUrl, QVariantAnimation
from PySide6.QtGui import (
    QCloseEvent,
    QColor,
    QDragEnterEvent,
    QDragLeaveEvent,
    QDropEvent,
    QPainter,
    QPaintEvent,
    QPixmap,
    QResizeEvent,
)
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QFrame,
    QGraphicsDropShadowEffect,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from typing_extensions import override

from wish_gallery.core.carousel import CarouselController, Direction
from wish_gallery.core.config_manager import GalleryConfig, load_config, save_config
from wish_gallery.core.image_processor import generate_thumbnail
from wish_gallery.core.image_store import AcceptedImageStore
from wish_gallery.core.ingestion import IngestionValidator
from wish_gallery.core.lightbox import LightboxController
from wish_gallery.core.preferences import ReducedMotionObserver, create_motion_source
from wish_gallery.type_defs import NEUTRAL_MOTION, AdmissionResult, ImageCandidate, MotionVector
from wish_gallery.utils.logging_config import install_qt_message_handler, log_function, logger

# ----------------------------- Design Tokens -----------------------------

SPACING_XS = 2
SPACING_SM = 4
SPACING_MD = 8
SPACING_LG = 12
SPACING_XL = 16

THUMBNAIL_SIZE = 96

COLOR_PRIMARY = "#F48FB1"           # Soft pink - primary actions
COLOR_PRIMARY_HOVER = "#F06292"
COLOR_PRIMARY_TEXT = "#880E4F"

COLOR_SURFACE = "#FFFFFF"
COLOR_BACKGROUND = "#FAFAFA"
COLOR_BORDER = "#E0E0E0"
COLOR_MUTED = "#F5F5F5"

COLOR_TEXT_PRIMARY = "#37474F"
COLOR_TEXT_SECONDARY = "#78909C"
COLOR_TEXT_DISABLED = "#9E9E9E"
COLOR_DESTRUCTIVE = "#E53935"

IMAGE_FILE_FILTER = "Images (*.png *.jpg *.jpeg *.gif *.webp *.bmp *.tif *.tiff);;All files (*)"


def pixmap_from_url(url: str) -> QPixmap:
    return QPixmap(QUrl(url).toLocalFile())


# ----------------------------- Card Widget -----------------------------


class CardWidget(QWidget):
    """Card widget with optional title and shadow effect."""

    def __init__(self, title: str = "", parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("card")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(SPACING_LG, SPACING_LG, SPACING_LG, SPACING_LG)
        layout.setSpacing(SPACING_MD)

        if title:
            title_label = QLabel(title)
            title_label.setObjectName("cardTitle")
            layout.addWidget(title_label)

        self.content_layout = QVBoxLayout()
        layout.addLayout(self.content_layout)

        shadow = QGraphicsDropShadowEffect()
        shadow.setBlurRadius(8)
        shadow.setOffset(0, 1)
        shadow.setColor(QColor(0, 0, 0, 10))
        self.setGraphicsEffect(shadow)


# ----------------------------- Uploader -----------------------------


class DropZone(QFrame):
    """Dashed drop target; forwards dropped local files to the uploader."""

    def __init__(self, uploader: "ImageUploaderPanel") -> None:
        super().__init__(uploader)
        self.setObjectName("dropZone")
        self.setAcceptDrops(True)
        self._uploader = uploader
        self.drag_active: bool = False

        layout = QVBoxLayout(self)
        layout.setContentsMargins(SPACING_XL, SPACING_XL, SPACING_XL, SPACING_XL)
        self.lbl_title = QLabel()
        self.lbl_title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.lbl_hint = QLabel()
        self.lbl_hint.setObjectName("hintLabel")
        self.lbl_hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.btn_browse = QPushButton("Add images")
        self.btn_browse.setObjectName("primaryButton")
        _ = self.btn_browse.clicked.connect(uploader.on_browse)
        layout.addWidget(self.lbl_title)
        layout.addWidget(self.lbl_hint)
        layout.addWidget(self.btn_browse, alignment=Qt.AlignmentFlag.AlignCenter)

    def _set_drag_active(self, active: bool) -> None:
        self.drag_active = active
        self.setProperty("dragActive", active)
        self.style().unpolish(self)
        self.style().polish(self)

    @override
    def dragEnterEvent(self, event: QDragEnterEvent) -> None:
        if self.isEnabled() and event.mimeData().hasUrls():
            self._set_drag_active(True)
            event.acceptProposedAction()
        else:
            event.ignore()

    @override
    def dragLeaveEvent(self, event: QDragLeaveEvent) -> None:
        self._set_drag_active(False)
        super().dragLeaveEvent(event)

    @override
    def dropEvent(self, event: QDropEvent) -> None:
        self._set_drag_active(False)
        paths = [url.toLocalFile() for url in event.mimeData().urls() if url.isLocalFile()]
        event.acceptProposedAction()
        self._uploader.ingest_paths(paths)


class ImageUploaderPanel(QWidget):
    """Drop zone, picker, single error message and removable thumbnail grid."""

    def __init__(
        self,
        store: AcceptedImageStore,
        validator: IngestionValidator,
        config: Optional[GalleryConfig] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.store: AcceptedImageStore = store
        self.validator: IngestionValidator = validator
        self.config: GalleryConfig = config if config is not None else GalleryConfig()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(SPACING_MD)

        self.drop_zone = DropZone(self)
        layout.addWidget(self.drop_zone)

        self.lbl_error = QLabel()
        self.lbl_error.setObjectName("errorLabel")
        self.lbl_error.setVisible(False)
        layout.addWidget(self.lbl_error)

        self.grid = QGridLayout()
        self.grid.setSpacing(SPACING_SM)
        layout.addLayout(self.grid)

        self.lbl_count = QLabel()
        self.lbl_count.setObjectName("hintLabel")
        self.lbl_count.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.lbl_count)

        _ = self.store.images_changed.connect(self._on_images_changed)
        self.refresh()

    @property
    def error_message(self) -> Optional[str]:
        return self.lbl_error.text() or None

    def set_error(self, message: Optional[str]) -> None:
        self.lbl_error.setText(message or "")
        self.lbl_error.setVisible(bool(message))

    @log_function
    def on_browse(self) -> None:
        paths, _ = QFileDialog.getOpenFileNames(
            self, "Add images", self.config.last_open_dir, IMAGE_FILE_FILTER
        )
        if paths:
            self.ingest_paths(paths)

    def ingest_paths(self, paths: Sequence[str]) -> AdmissionResult:
        if paths:
            self.config.last_open_dir = os.path.dirname(paths[0])
        return self.ingest_candidates(self.validator.candidates_for_paths(paths, len(self.store)))

    def ingest_candidates(self, candidates: Sequence[ImageCandidate]) -> AdmissionResult:
        """Run one ingestion attempt. The previous message is always cleared first."""
        self.set_error(None)
        result = self.validator.admit(candidates, len(self.store))
        if result.admitted:
            _ = self.store.add(result.admitted)
        self.set_error(result.rejection_reason)
        return result

    def remove_image(self, ordinal: int) -> None:
        _ = self.store.remove(ordinal)
        self.set_error(None)

    def refresh(self) -> None:
        """Rebuild the thumbnail grid and counter from the store."""
        while self.grid.count():
            item = self.grid.takeAt(0)
            widget = item.widget() if item is not None else None
            if widget is not None:
                widget.deleteLater()

        columns = max(1, self.validator.max_images)
        for image in self.store:
            tile = self._make_tile(image.ordinal, image.payload)
            self.grid.addWidget(tile, image.ordinal // columns, image.ordinal % columns)

        count = len(self.store)
        at_capacity = count >= self.validator.max_images
        self.drop_zone.setEnabled(not at_capacity)
        self.drop_zone.lbl_title.setText(
            "Maximum images reached" if at_capacity else "Drop images here or click to upload"
        )
        self.drop_zone.lbl_hint.setText(
            f"Max {self.validator.max_images} images, {self.validator.max_size_mb}MB each"
        )
        self.lbl_count.setText(f"{count} / {self.validator.max_images} images")

    def _make_tile(self, ordinal: int, payload: bytes) -> QWidget:
        tile = QWidget()
        tile_layout = QVBoxLayout(tile)
        tile_layout.setContentsMargins(0, 0, 0, 0)
        tile_layout.setSpacing(SPACING_XS)

        preview = QLabel()
        preview.setFixedSize(THUMBNAIL_SIZE, THUMBNAIL_SIZE)
        preview.setAlignment(Qt.AlignmentFlag.AlignCenter)
        thumb = generate_thumbnail(payload, THUMBNAIL_SIZE)
        if thumb is not None:
            pixmap = QPixmap()
            _ = pixmap.loadFromData(thumb)
            preview.setPixmap(pixmap)
        preview.setToolTip(f"Upload {ordinal + 1}")
        tile_layout.addWidget(preview)

        btn_remove = QPushButton("Remove")
        btn_remove.setObjectName("tertiaryButton")
        _ = btn_remove.clicked.connect(lambda: self.remove_image(ordinal))
        tile_layout.addWidget(btn_remove)
        return tile

    def _on_images_changed(self, _count: int) -> None:
        self.refresh()


# ----------------------------- Carousel -----------------------------


class KenBurnsImage(QWidget):
    """Paints one pixmap, easing towards the current motion target."""

    def __init__(self, duration_ms: int = 8000, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._pixmap: QPixmap = QPixmap()
        self._from: MotionVector = NEUTRAL_MOTION
        self._to: MotionVector = NEUTRAL_MOTION
        self._progress: float = 1.0

        self._anim = QVariantAnimation(self)
        self._anim.setStartValue(0.0)
        self._anim.setEndValue(1.0)
        self._anim.setDuration(duration_ms)
        self._anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        _ = self._anim.valueChanged.connect(self._on_progress)

    def set_pixmap(self, pixmap: QPixmap) -> None:
        self._pixmap = pixmap
        self.update()

    def current_vector(self) -> MotionVector:
        t = self._progress
        return MotionVector(
            scale=self._from.scale + (self._to.scale - self._from.scale) * t,
            x_offset=self._from.x_offset + (self._to.x_offset - self._from.x_offset) * t,
            y_offset=self._from.y_offset + (self._to.y_offset - self._from.y_offset) * t,
        )

    def set_target(self, vector: MotionVector) -> None:
        self._anim.stop()
        if vector == NEUTRAL_MOTION:
            # Snap back so the next direction starts from rest
            self._from = self._to = NEUTRAL_MOTION
            self._progress = 1.0
            self.update()
            return
        self._from = self.current_vector()
        self._to = vector
        self._progress = 0.0
        self._anim.start()

    def _on_progress(self, value: object) -> None:
        self._progress = float(value)  # type: ignore[arg-type]
        self.update()

    @override
    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(0, 0, 0, 12))
        if self._pixmap.isNull():
            return
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)

        # object-fit: contain
        size = self._pixmap.size().scaled(self.size(), Qt.AspectRatioMode.KeepAspectRatio)
        target = QRectF(
            (self.width() - size.width()) / 2,
            (self.height() - size.height()) / 2,
            size.width(),
            size.height(),
        )
        vector = self.current_vector()
        center = QPointF(self.width() / 2, self.height() / 2)
        painter.translate(center)
        painter.scale(vector.scale, vector.scale)
        painter.translate(
            target.width() * vector.x_offset / 100 - center.x(),
            target.height() * vector.y_offset / 100 - center.y(),
        )
        painter.drawPixmap(target, self._pixmap, QRectF(self._pixmap.rect()))


class PhotoCarouselView(QWidget):
    """Renders the carousel: current slide, arrows, dots and a fullscreen button."""

    def __init__(
        self,
        controller: CarouselController,
        lightbox: LightboxController,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.controller: CarouselController = controller
        self.lightbox: LightboxController = lightbox
        self._urls: list[str] = []
        self._pixmaps: list[QPixmap] = []
        self._dots: list[QPushButton] = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(SPACING_SM)

        self.image = KenBurnsImage(controller.motion.animation_duration_ms, self)
        self.image.setMinimumSize(320, 240)
        layout.addWidget(self.image, 1)

        controls = QHBoxLayout()
        self.btn_prev = QPushButton("‹")
        self.btn_prev.setObjectName("roundButton")
        _ = self.btn_prev.clicked.connect(lambda: controller.advance(Direction.PREV))
        self.btn_next = QPushButton("›")
        self.btn_next.setObjectName("roundButton")
        _ = self.btn_next.clicked.connect(lambda: controller.advance(Direction.NEXT))
        self.dots_layout = QHBoxLayout()
        self.dots_layout.setSpacing(SPACING_SM)
        self.btn_fullscreen = QPushButton("Fullscreen")
        self.btn_fullscreen.setObjectName("tertiaryButton")
        _ = self.btn_fullscreen.clicked.connect(lightbox.open)

        controls.addWidget(self.btn_prev)
        controls.addStretch(1)
        controls.addLayout(self.dots_layout)
        controls.addStretch(1)
        controls.addWidget(self.btn_next)
        controls.addWidget(self.btn_fullscreen)
        layout.addLayout(controls)

        _ = controller.index_changed.connect(self._on_index_changed)
        _ = controller.motion_changed.connect(self.image.set_target)

    def set_images(self, urls: Sequence[str]) -> None:
        """Show a new ordered list of displayable image URLs.

        Each accepted image keeps its URL, so a different URL at the current
        index means the shown image was replaced.
        """
        index = self.controller.current_index
        previous = self._urls[index] if index is not None and index < len(self._urls) else None
        self._urls = list(urls)
        self._pixmaps = [pixmap_from_url(url) for url in self._urls]
        replaced = (
            previous is not None
            and index is not None
            and index < len(self._urls)
            and self._urls[index] != previous
        )
        self.controller.set_count(len(self._pixmaps), current_replaced=replaced)
        self._rebuild_dots()
        self._show_current()

    def current_pixmap(self) -> QPixmap:
        index = self.controller.current_index
        if index is None or index >= len(self._pixmaps):
            return QPixmap()
        return self._pixmaps[index]

    def _rebuild_dots(self) -> None:
        for dot in self._dots:
            self.dots_layout.removeWidget(dot)
            dot.deleteLater()
        self._dots = []
        if len(self._pixmaps) <= 1:
            return
        for index in range(len(self._pixmaps)):
            dot = QPushButton()
            dot.setObjectName("dotButton")
            dot.setCheckable(True)
            dot.setFixedSize(10, 10)
            _ = dot.clicked.connect(lambda _checked=False, i=index: self.controller.go_to(i))
            self.dots_layout.addWidget(dot)
            self._dots.append(dot)

    def _show_current(self) -> None:
        has_many = len(self._pixmaps) > 1
        self.btn_prev.setVisible(has_many)
        self.btn_next.setVisible(has_many)
        self.btn_fullscreen.setEnabled(bool(self._pixmaps))
        self.image.set_pixmap(self.current_pixmap())
        for i, dot in enumerate(self._dots):
            dot.setChecked(i == self.controller.current_index)

    def _on_index_changed(self, _index: int) -> None:
        self._show_current()


class LightboxWindow(QWidget):
    """Black fullscreen overlay shown while the lightbox is open."""

    def __init__(self, carousel_view: PhotoCarouselView) -> None:
        super().__init__(None, Qt.WindowType.FramelessWindowHint | Qt.WindowType.Window)
        self.setObjectName("lightbox")
        self.setStyleSheet("#lightbox { background-color: black; }")
        self._view = carousel_view
        controller = carousel_view.controller
        lightbox = carousel_view.lightbox

        layout = QVBoxLayout(self)
        top = QHBoxLayout()
        top.addStretch(1)
        self.btn_close = QPushButton("✕")
        self.btn_close.setObjectName("lightboxButton")
        _ = self.btn_close.clicked.connect(lightbox.close)
        top.addWidget(self.btn_close)
        layout.addLayout(top)

        row = QHBoxLayout()
        self.btn_prev = QPushButton("‹")
        self.btn_prev.setObjectName("lightboxButton")
        _ = self.btn_prev.clicked.connect(lambda: controller.advance(Direction.PREV))
        self.lbl_image = QLabel()
        self.lbl_image.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.btn_next = QPushButton("›")
        self.btn_next.setObjectName("lightboxButton")
        _ = self.btn_next.clicked.connect(lambda: controller.advance(Direction.NEXT))
        row.addWidget(self.btn_prev)
        row.addWidget(self.lbl_image, 1)
        row.addWidget(self.btn_next)
        layout.addLayout(row, 1)

        _ = controller.fullscreen_changed.connect(self._on_fullscreen_changed)
        _ = controller.index_changed.connect(self._on_index_changed)

    def _render(self) -> None:
        pixmap = self._view.current_pixmap()
        has_many = self._view.controller.count > 1
        self.btn_prev.setVisible(has_many)
        self.btn_next.setVisible(has_many)
        if pixmap.isNull():
            self.lbl_image.clear()
            return
        self.lbl_image.setPixmap(
            pixmap.scaled(
                self.lbl_image.size(),
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )
        )

    @override
    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self._render()

    @override
    def closeEvent(self, event: QCloseEvent) -> None:
        # Window manager close behaves like the close button
        self._view.lightbox.close()
        super().closeEvent(event)

    def _on_fullscreen_changed(self, fullscreen: bool) -> None:
        if fullscreen:
            self.showFullScreen()
            self._render()
        else:
            self.hide()

    def _on_index_changed(self, _index: int) -> None:
        if self.isVisible():
            self._render()


# ----------------------------- Main Application -----------------------------


class WishGalleryApp(QMainWindow):
    def __init__(
        self,
        config: Optional[GalleryConfig] = None,
        preference: Optional[ReducedMotionObserver] = None,
        store: Optional[AcceptedImageStore] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("WishGallery")
        self.config: GalleryConfig = config if config is not None else load_config()

        # An injected observer belongs to the caller and outlives the window
        self._owns_preference = preference is None
        self.preference: ReducedMotionObserver = (
            preference
            if preference is not None
            else ReducedMotionObserver(create_motion_source(self.config.reduce_motion))
        )
        self.validator = IngestionValidator(self.config.max_images, self.config.max_size_mb)
        self.store: AcceptedImageStore = (
            store if store is not None else AcceptedImageStore(self.config.max_images, parent=self)
        )
        self.controller = CarouselController.from_config(self.config, self.preference, parent=self)
        self.lightbox = LightboxController(self.controller, parent=self)
        self._closed = False

        self.setup_style()
        self.initUI()
        _ = self.store.images_changed.connect(self._on_images_changed)
        self._on_images_changed(len(self.store))

    def setup_style(self) -> None:
        self.setStyleSheet(f"""
            QMainWindow {{
                background-color: {COLOR_BACKGROUND};
            }}

            #card {{
                background-color: {COLOR_SURFACE};
                border: 1px solid {COLOR_BORDER};
                border-radius: 8px;
            }}

            #cardTitle {{
                color: {COLOR_TEXT_PRIMARY};
                font-size: 14px;
                font-weight: 600;
                margin-bottom: {SPACING_SM}px;
            }}

            #dropZone {{
                border: 2px dashed {COLOR_BORDER};
                border-radius: 12px;
                background-color: {COLOR_SURFACE};
            }}

            #dropZone[dragActive="true"] {{
                border-color: {COLOR_PRIMARY};
                background-color: {COLOR_MUTED};
            }}

            #dropZone:disabled {{
                background-color: {COLOR_MUTED};
            }}

            #hintLabel {{
                color: {COLOR_TEXT_SECONDARY};
                font-size: 12px;
            }}

            #errorLabel {{
                color: {COLOR_DESTRUCTIVE};
                font-size: 13px;
            }}

            #primaryButton {{
                background-color: {COLOR_PRIMARY};
                color: {COLOR_PRIMARY_TEXT};
                border: none;
                border-radius: 6px;
                padding: {SPACING_MD}px {SPACING_LG}px;
                font-size: 14px;
                font-weight: bold;
                min-width: 120px;
            }}

            #primaryButton:hover {{
                background-color: {COLOR_PRIMARY_HOVER};
            }}

            #primaryButton:disabled {{
                background-color: {COLOR_BORDER};
                color: {COLOR_TEXT_DISABLED};
            }}

            #tertiaryButton {{
                background-color: transparent;
                color: {COLOR_TEXT_PRIMARY};
                border: 1px solid {COLOR_BORDER};
                border-radius: 4px;
                padding: {SPACING_XS}px {SPACING_MD}px;
                font-size: 12px;
            }}

            #roundButton {{
                border-radius: 16px;
                min-width: 32px;
                min-height: 32px;
                font-size: 18px;
                background-color: {COLOR_MUTED};
            }}

            #dotButton {{
                border-radius: 5px;
                background-color: {COLOR_BORDER};
            }}

            #dotButton:checked {{
                background-color: {COLOR_PRIMARY};
            }}

            #lightboxButton {{
                color: white;
                background-color: rgba(255, 255, 255, 25);
                border-radius: 24px;
                min-width: 48px;
                min-height: 48px;
                font-size: 22px;
            }}
        """)

    def initUI(self) -> None:
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QVBoxLayout()
        main_layout.setContentsMargins(SPACING_LG, SPACING_LG, SPACING_LG, SPACING_LG)
        main_layout.setSpacing(SPACING_SM)
        central_widget.setLayout(main_layout)

        upload_card = CardWidget("Your photos")
        self.uploader = ImageUploaderPanel(self.store, self.validator, self.config)
        upload_card.content_layout.addWidget(self.uploader)
        main_layout.addWidget(upload_card)

        preview_card = CardWidget("Preview")
        self.carousel_view = PhotoCarouselView(self.controller, self.lightbox)
        preview_card.content_layout.addWidget(self.carousel_view)
        main_layout.addWidget(preview_card, 1)

        self.lightbox_window = LightboxWindow(self.carousel_view)

    def _on_images_changed(self, _count: int) -> None:
        self.carousel_view.set_images(self.store.display_urls())

    @log_function
    def shutdown(self) -> None:
        """Tear down timers, listeners and display handles."""
        if self._closed:
            return
        self._closed = True
        self.lightbox.dispose()
        self.lightbox_window.close()
        self.controller.dispose()
        if self._owns_preference:
            self.preference.close()
        self.store.close()
        save_config(self.config)

    @override
    def closeEvent(self, event: QCloseEvent) -> None:
        try:
            self.shutdown()
            logger.info("Application closed.")
        except Exception as e:
            logger.error(f"Error during application shutdown: {e}", exc_info=True)
        event.accept()


# ----------------------------- Main Execution -----------------------------


def main() -> None:
    try:
        app = QApplication(sys.argv)
        install_qt_message_handler()
        window = WishGalleryApp()
        window.resize(720, 820)
        window.show()
        logger.info("Application started successfully.")
        sys.exit(app.exec())
    except Exception as e:
        logger.critical(f"Critical error in main execution: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
