"""Accepted-image store - ordered collection of admitted images and their display handles.

Display handles are files in a private temp directory addressed by ``file://``
URLs. Each accepted image gets at most one, created on first access and
released exactly once on removal or when the store is closed.
"""

import os
import shutil
import tempfile
import warnings
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol

from PySide6.QtCore import QObject, Signal

from wish_gallery.type_defs import ImageCandidate
from wish_gallery.utils.logging_config import log_function, logger

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/bmp": ".bmp",
    "image/tiff": ".tiff",
}


# ----------------------------- Display Handles -----------------------------


@dataclass
class DisplayHandle:
    """Renderer-usable reference to one image payload."""

    url: str
    path: str
    factory: Optional["HandleFactory"] = field(default=None, repr=False, compare=False)
    released: bool = False

    def release(self) -> None:
        """Release the handle. Only the first call has an effect."""
        if self.released:
            return
        self.released = True
        if self.factory is not None:
            self.factory.revoke(self)


class HandleFactory(Protocol):
    def create(self, image: "AcceptedImage") -> DisplayHandle:
        ...

    def revoke(self, handle: DisplayHandle) -> None:
        ...

    def cleanup(self) -> None:
        ...


class TempFileHandleFactory:
    """Backs display handles with files in a private temp directory."""

    def __init__(self, base_dir: Optional[str] = None) -> None:
        self.base_dir: Optional[str] = base_dir
        self._dir: Optional[str] = None
        self._counter: int = 0

    def _ensure_dir(self) -> str:
        if self._dir is None:
            self._dir = tempfile.mkdtemp(prefix="wish_gallery_", dir=self.base_dir)
            logger.debug(f"Created display handle directory: {self._dir}")
        return self._dir

    def create(self, image: "AcceptedImage") -> DisplayHandle:
        self._counter += 1
        extension = _EXTENSIONS.get(image.content_type, ".img")
        path = os.path.join(self._ensure_dir(), f"{self._counter:04d}{extension}")
        with open(path, "wb") as f:
            f.write(image.payload)
        return DisplayHandle(url=Path(path).as_uri(), path=path, factory=self)

    def revoke(self, handle: DisplayHandle) -> None:
        # Best effort: a file left behind only delays reclamation
        try:
            os.remove(handle.path)
        except OSError as e:
            logger.warning(f"Could not revoke display handle {handle.url}: {e}")

    def cleanup(self) -> None:
        if self._dir is not None:
            shutil.rmtree(self._dir, ignore_errors=True)
            self._dir = None


# ----------------------------- Store -----------------------------


@dataclass
class AcceptedImage:
    payload: bytes
    content_type: str
    name: str
    ordinal: int
    handle: Optional[DisplayHandle] = field(default=None, repr=False)


class AcceptedImageStore(QObject):
    """Ordered, bounded collection of accepted images.

    Ordinals are always 0..count-1 in insertion order.
    """

    images_changed: Signal = Signal(int)  # type: ignore[misc]

    def __init__(
        self,
        max_images: int = 5,
        handle_factory: Optional[HandleFactory] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.max_images: int = max_images
        self._factory: HandleFactory = handle_factory if handle_factory is not None else TempFileHandleFactory()
        self._images: list[AcceptedImage] = []
        self._closed: bool = False

    def __len__(self) -> int:
        return len(self._images)

    def __iter__(self) -> Iterator[AcceptedImage]:
        return iter(list(self._images))

    def __enter__(self) -> "AcceptedImageStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def images(self) -> list[AcceptedImage]:
        return list(self._images)

    @property
    def live_handle_count(self) -> int:
        return sum(1 for image in self._images if image.handle is not None)

    @property
    def closed(self) -> bool:
        return self._closed

    def add(self, candidates: Iterable[ImageCandidate]) -> list[AcceptedImage]:
        """Append admitted candidates with the next contiguous ordinals.

        Raises:
            ValueError: if the store would exceed max_images
        """
        self._check_open()
        incoming = list(candidates)
        if len(self._images) + len(incoming) > self.max_images:
            raise ValueError(
                f"Cannot hold {len(self._images) + len(incoming)} images (max {self.max_images})"
            )
        if not incoming:
            return []

        added = [
            AcceptedImage(
                payload=candidate.payload,
                content_type=candidate.content_type,
                name=candidate.name,
                ordinal=len(self._images) + offset,
            )
            for offset, candidate in enumerate(incoming)
        ]
        self._images.extend(added)
        logger.info(f"Added {len(added)} image(s), now holding {len(self._images)}")
        self.images_changed.emit(len(self._images))
        return added

    def remove(self, ordinal: int) -> AcceptedImage:
        """Drop the image at ordinal, release its handle and re-index the rest.

        Raises:
            IndexError: if no image has that ordinal
        """
        self._check_open()
        if not 0 <= ordinal < len(self._images):
            raise IndexError(f"No accepted image at ordinal {ordinal}")

        removed = self._images.pop(ordinal)
        self._release(removed)
        for position, image in enumerate(self._images):
            image.ordinal = position
        logger.info(f"Removed image {ordinal}, now holding {len(self._images)}")
        self.images_changed.emit(len(self._images))
        return removed

    def display_handle_for(self, ordinal: int) -> DisplayHandle:
        """Return the image's display handle, creating it on first access."""
        self._check_open()
        if not 0 <= ordinal < len(self._images):
            raise IndexError(f"No accepted image at ordinal {ordinal}")
        image = self._images[ordinal]
        if image.handle is None:
            image.handle = self._factory.create(image)
        return image.handle

    def display_urls(self) -> list[str]:
        """Ordered URLs for every accepted image, as handed to the carousel."""
        return [self.display_handle_for(image.ordinal).url for image in self._images]

    @log_function
    def close(self) -> None:
        """Release every live handle and discard the collection."""
        if self._closed:
            return
        released = 0
        for image in self._images:
            if image.handle is not None:
                released += 1
            self._release(image)
        self._images.clear()
        self._factory.cleanup()
        self._closed = True
        logger.debug(f"Accepted image store closed, released {released} handle(s)")

    def _release(self, image: AcceptedImage) -> None:
        if image.handle is not None:
            image.handle.release()
            image.handle = None

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("AcceptedImageStore is closed")

    def __del__(self) -> None:
        try:
            leaked = 0 if self._closed else self.live_handle_count
        except (AttributeError, RuntimeError):
            return
        if leaked:
            logger.error(f"AcceptedImageStore discarded with {leaked} live display handle(s)")
            warnings.warn(
                f"AcceptedImageStore discarded with {leaked} live display handle(s); call close()",
                ResourceWarning,
                stacklevel=2,
            )
