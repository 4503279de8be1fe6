"""Image ingestion: turn user-picked files into candidates and decide which to admit."""

import os
from collections.abc import Iterable, Sequence
from typing import Optional

from wish_gallery.core.image_processor import UNKNOWN_CONTENT_TYPE, sniff_content_type
from wish_gallery.type_defs import AdmissionResult, ImageCandidate, RejectionKind
from wish_gallery.utils.logging_config import log_function, logger

IMAGE_TYPE_PREFIX = "image/"

INVALID_TYPE_MESSAGE = "Only image files are allowed"


def too_large_message(max_size_mb: int) -> str:
    return f"File size must be less than {max_size_mb}MB"


def capacity_message(max_images: int) -> str:
    return f"You can only upload {max_images} images total"


# ----------------------------- Validator -----------------------------


class IngestionValidator:
    """Decides which candidates of a batch are admitted into the collection.

    Pure decision object: it never mutates the collection, the caller applies
    the result.
    """

    def __init__(self, max_images: int = 5, max_size_mb: int = 2) -> None:
        self.max_images: int = max_images
        self.max_size_mb: int = max_size_mb
        self.max_size_bytes: int = max_size_mb * 1024 * 1024

    def check(self, candidate: ImageCandidate) -> Optional[RejectionKind]:
        """Return the reason a single candidate is unacceptable, or None."""
        if not candidate.content_type.startswith(IMAGE_TYPE_PREFIX):
            return RejectionKind.INVALID_TYPE
        if candidate.size > self.max_size_bytes:
            return RejectionKind.TOO_LARGE
        return None

    def message_for(self, kind: RejectionKind) -> str:
        if kind is RejectionKind.INVALID_TYPE:
            return INVALID_TYPE_MESSAGE
        if kind is RejectionKind.TOO_LARGE:
            return too_large_message(self.max_size_mb)
        return capacity_message(self.max_images)

    def remaining(self, current_count: int) -> int:
        """Free slots left when ``current_count`` images are already accepted."""
        return max(0, self.max_images - current_count)

    def candidates_for_paths(self, paths: Sequence[str], current_count: int) -> list[ImageCandidate]:
        """Read only what admit() will examine: the first remaining files, up to the size limit."""
        return candidates_from_paths(paths, max_size_bytes=self.max_size_bytes, limit=self.remaining(current_count))

    def admit(self, candidates: Sequence[ImageCandidate], current_count: int) -> AdmissionResult:
        """Admit candidates in input order until the remaining slots are used.

        Only the first ``remaining`` candidates are looked at. Each rejected one
        overwrites the reason, so the last cause wins. When the batch is longer
        than the remaining slots the capacity message replaces any other reason.

        Args:
            candidates: Files offered in this batch, in the order they were picked
            current_count: Number of images already accepted

        Returns:
            AdmissionResult with the admitted candidates and at most one message
        """
        result = AdmissionResult()
        remaining = self.remaining(current_count)

        for candidate in candidates[:remaining]:
            kind = self.check(candidate)
            if kind is None:
                result.admitted.append(candidate)
                continue
            logger.info(f"Rejected {candidate.name or 'candidate'} ({candidate.content_type}, {candidate.size} bytes): {kind.value}")
            result.rejections.append(kind)
            result.rejection_reason = self.message_for(kind)

        if len(candidates) > remaining:
            result.rejections.append(RejectionKind.CAPACITY_EXCEEDED)
            result.rejection_reason = self.message_for(RejectionKind.CAPACITY_EXCEEDED)
            logger.info(f"Batch of {len(candidates)} exceeds {remaining} remaining slot(s)")

        return result


# ----------------------------- File Boundary -----------------------------


def _unread_candidate(path: str) -> ImageCandidate:
    return ImageCandidate(payload=b"", content_type=UNKNOWN_CONTENT_TYPE, size=0, name=os.path.basename(path))


@log_function
def candidate_from_path(path: str, max_size_bytes: Optional[int] = None) -> ImageCandidate:
    """Read a file from disk into an ImageCandidate.

    The size comes from the file system. Files larger than ``max_size_bytes``
    are only sniffed from their header and keep an empty payload, since the
    validator never admits them. Unreadable files become an untyped candidate
    so the validator reports them instead of the whole batch failing.
    """
    name = os.path.basename(path)
    try:
        size = os.path.getsize(path)
    except OSError as e:
        logger.warning(f"Could not read {path}: {e}")
        return _unread_candidate(path)

    if max_size_bytes is not None and size > max_size_bytes:
        logger.debug(f"{name} is {size} bytes, sniffing header only")
        return ImageCandidate(payload=b"", content_type=sniff_content_type(path, name), size=size, name=name)

    try:
        with open(path, "rb") as f:
            payload = f.read()
    except OSError as e:
        logger.warning(f"Could not read {path}: {e}")
        return _unread_candidate(path)

    return ImageCandidate(
        payload=payload,
        content_type=sniff_content_type(payload, name),
        size=len(payload),
        name=name,
    )


def candidates_from_paths(
    paths: Iterable[str],
    max_size_bytes: Optional[int] = None,
    limit: Optional[int] = None,
) -> list[ImageCandidate]:
    """Turn picked paths into candidates, in order.

    Only the first ``limit`` paths are opened. The rest are listed by name so
    they still count towards the batch length; admit() never looks at them.
    """
    paths = list(paths)
    read_count = len(paths) if limit is None else max(0, limit)
    return [candidate_from_path(path, max_size_bytes) for path in paths[:read_count]] + [
        _unread_candidate(path) for path in paths[read_count:]
    ]
