"""Core components for WishGallery."""

from .carousel import CarouselController, Direction
from .config_manager import GalleryConfig, load_config, save_config
from .image_processor import generate_thumbnail, sniff_content_type
from .image_store import AcceptedImage, AcceptedImageStore, DisplayHandle, TempFileHandleFactory
from .ingestion import IngestionValidator, candidate_from_path, candidates_from_paths
from .lightbox import LightboxController
from .motion import KEN_BURNS_DIRECTIONS, MotionGenerator, pick_motion_vector
from .preferences import (
    ReducedMotionObserver,
    StaticMotionPreference,
    SystemMotionPreference,
    create_motion_source,
)

__all__ = [
    "AcceptedImage",
    "AcceptedImageStore",
    "CarouselController",
    "Direction",
    "DisplayHandle",
    "GalleryConfig",
    "IngestionValidator",
    "KEN_BURNS_DIRECTIONS",
    "LightboxController",
    "MotionGenerator",
    "ReducedMotionObserver",
    "StaticMotionPreference",
    "SystemMotionPreference",
    "TempFileHandleFactory",
    "candidate_from_path",
    "candidates_from_paths",
    "create_motion_source",
    "generate_thumbnail",
    "load_config",
    "pick_motion_vector",
    "save_config",
    "sniff_content_type",
]
