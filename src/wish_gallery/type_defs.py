"""Centralized type definitions for WishGallery.

Shared by the ingestion, store and carousel modules so none of them has to
import another just for its types.

Data Flow:
    Ingestion: list[ImageCandidate] -> AdmissionResult -> AcceptedImageStore
    Presentation: timer / key input -> CarouselController -> CarouselSnapshot
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional

from typing_extensions import TypedDict


# =============================================================================
# Ingestion Types
# =============================================================================


@dataclass(frozen=True)
class ImageCandidate:
    """A file offered for upload. Lives only for a single ingestion call."""

    payload: bytes
    content_type: str
    size: int
    name: str = ""


class RejectionKind(enum.Enum):
    """Why a candidate (or a batch) was not fully admitted."""

    INVALID_TYPE = "invalid_type"
    TOO_LARGE = "too_large"
    CAPACITY_EXCEEDED = "capacity_exceeded"


@dataclass
class AdmissionResult:
    """Outcome of one ingestion attempt.

    rejection_reason is the single user-facing message; rejections records
    every kind encountered, in order, for logging.
    """

    admitted: list[ImageCandidate] = field(default_factory=list)
    rejection_reason: Optional[str] = None
    rejections: list[RejectionKind] = field(default_factory=list)


# =============================================================================
# Presentation Types
# =============================================================================


@dataclass(frozen=True)
class MotionVector:
    """Ken Burns target: zoom factor plus pan offsets in percent of the frame."""

    scale: float
    x_offset: float
    y_offset: float


NEUTRAL_MOTION = MotionVector(scale=1.0, x_offset=0.0, y_offset=0.0)


class CarouselSnapshot(TypedDict):
    """Render state of the carousel. current_index is None when count is 0."""

    current_index: Optional[int]
    count: int
    is_transitioning: bool
    is_fullscreen: bool
    motion: MotionVector
