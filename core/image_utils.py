# core/image_utils.py
import io
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from PIL import Image

from config import MAX_IMAGE_SIZE
from .errors import RenderError

logger = logging.getLogger(__name__)

# Pillow formats that cannot store an alpha channel or a palette as-is
_RGB_ONLY_FORMATS = {"JPEG", "BMP"}


@dataclass
class ImageBlob:
    data: bytes
    mime_type: str
    filename: str

    @property
    def size(self) -> int:
        return len(self.data)


def _format_for_mime(mime_type: str) -> Optional[str]:
    """
    Maps a MIME type (image/jpeg, image/png, ...) to the Pillow format that writes it.
    """
    Image.init()
    wanted = (mime_type or "").split(";")[0].strip().lower()
    formats: Dict[str, str] = {}
    for fmt, mime in Image.MIME.items():
        if fmt in Image.SAVE:
            formats.setdefault(mime.lower(), fmt)
    if wanted == "image/jpg":
        wanted = "image/jpeg"
    return formats.get(wanted)


def scaled_size(width: int, height: int, max_size: int = MAX_IMAGE_SIZE) -> Tuple[int, int]:
    """
    Target size bounding the longer edge by max_size, aspect ratio preserved.
    Returns the input size when it already fits.
    """
    if width >= height and width > max_size:
        ratio = max_size / width
        return max_size, max(1, round(height * ratio))
    if height > max_size:
        ratio = max_size / height
        return max(1, round(width * ratio)), max_size
    return width, height


def _resize(blob: ImageBlob, max_size: int) -> ImageBlob:
    fmt = _format_for_mime(blob.mime_type)
    if not fmt:
        raise RenderError(f"No encoder for MIME type {blob.mime_type!r}")

    try:
        img = Image.open(io.BytesIO(blob.data))
        img.load()
        target = scaled_size(img.width, img.height, max_size)
        if target == img.size:
            return blob

        resized = img.resize(target, Image.LANCZOS)
        if fmt in _RGB_ONLY_FORMATS and resized.mode not in ("RGB", "L"):
            resized = resized.convert("RGB")

        buf = io.BytesIO()
        save_kwargs = {"quality": 92} if fmt == "JPEG" else {}
        resized.save(buf, format=fmt, **save_kwargs)
    except Exception as e:
        raise RenderError(f"Could not resize {blob.filename}: {e}") from e

    data = buf.getvalue()
    if not data:
        raise RenderError(f"Encoder produced no output for {blob.filename}")
    return ImageBlob(data=data, mime_type=blob.mime_type, filename=blob.filename)


def normalize_image(
    blob: ImageBlob,
    max_size: int = MAX_IMAGE_SIZE,
    on_error: Optional[Callable[[RenderError], None]] = None,
) -> ImageBlob:
    """
    Downsamples the image so its longer edge is at most max_size and re-encodes
    it with the same MIME type. Never raises: on any decode/encode problem the
    original blob is returned untouched and on_error, if given, gets the error.
    """
    try:
        out = _resize(blob, max_size)
    except RenderError as e:
        logger.warning("Error resizing file, using original: %s", e)
        if on_error is not None:
            on_error(e)
        return blob
    if out is not blob:
        logger.info("Resized %s: %d -> %d bytes", blob.filename, blob.size, out.size)
    return out
