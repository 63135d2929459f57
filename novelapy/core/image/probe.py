"""Image dimension probing with Pillow."""
import io

from PIL import Image, UnidentifiedImageError

from .size import Size
from ..exceptions import UnsupportedTypeError


def probe_size(data: bytes) -> Size:
    """
    Read pixel dimensions from encoded image bytes.

    Only the header is parsed; pixel data is not decoded.

    Raises:
        UnsupportedTypeError: If the bytes are not a readable image
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
    except (UnidentifiedImageError, OSError) as e:
        raise UnsupportedTypeError(f"Cannot read image dimensions: {e}") from e
    return Size(width, height)


def probe_format(data: bytes) -> str:
    """Return the MIME type Pillow detects for the bytes (e.g. 'image/png')."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            return Image.MIME.get(img.format, 'application/octet-stream')
    except (UnidentifiedImageError, OSError) as e:
        raise UnsupportedTypeError(f"Cannot identify image format: {e}") from e
