"""Image payload helpers: content-type sniffing and in-memory thumbnails."""

import io
import mimetypes
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

from wish_gallery.utils.logging_config import log_function, logger

UNKNOWN_CONTENT_TYPE = "application/octet-stream"

_ROTATIONS = {
    3: 180,
    6: 270,
    8: 90,
}


def sniff_content_type(source: Union[bytes, str], name: str = "") -> str:
    """Identify the content type of a payload or of a file on disk.

    Pillow decides for anything it can open; only the header is read when
    ``source`` is a path. Other files fall back to a guess from the file name.
    Images Pillow refuses to decode (decompression bombs, truncated headers)
    count as unknown, so the validator rejects them as non-images.
    """
    try:
        with Image.open(io.BytesIO(source) if isinstance(source, bytes) else source) as image:
            mime = Image.MIME.get(image.format or "")
            if mime:
                return mime
    except Image.DecompressionBombError as e:
        logger.warning(f"Refusing oversized image {name or 'payload'}: {e}")
        return UNKNOWN_CONTENT_TYPE
    except (UnidentifiedImageError, OSError, ValueError):
        pass

    guessed, _ = mimetypes.guess_type(name)
    if guessed and not guessed.startswith("image/"):
        return guessed
    # An image extension Pillow could not read is not an image
    return UNKNOWN_CONTENT_TYPE


@log_function
def generate_thumbnail(payload: bytes, size: int = 160) -> Optional[bytes]:
    """Render a PNG thumbnail of at most size x size for the upload grid.

    Args:
        payload: Encoded image bytes
        size: Longest edge of the thumbnail in pixels

    Returns:
        PNG bytes, or None if the payload cannot be decoded
    """
    try:
        with Image.open(io.BytesIO(payload)) as img:
            exif = img.getexif() if hasattr(img, "getexif") else None
            orientation = exif.get(0x0112) if exif else None

            thumb = img.copy()
            if thumb.mode not in ("RGB", "RGBA"):
                thumb = thumb.convert("RGBA")
            if orientation in _ROTATIONS:
                thumb = thumb.rotate(_ROTATIONS[orientation], expand=True)

            thumb.thumbnail((size, size), Image.Resampling.LANCZOS)
            buffer = io.BytesIO()
            thumb.save(buffer, "PNG")
            return buffer.getvalue()
    except Exception as e:
        logger.error(f"Error generating thumbnail: {e}", exc_info=True)
        return None
