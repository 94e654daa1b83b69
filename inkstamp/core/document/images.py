"""
Decoding of images inserted with the image tool.
"""
import fitz  # PyMuPDF

from inkstamp.core.annotations import ImageAsset

_PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
_JPEG_MAGIC = b"\xff\xd8\xff"


class ImageDecodeError(ValueError):
    """Raised when image bytes cannot be decoded."""


def sniff_format(data: bytes) -> str:
    """Declared format of encoded image bytes: png, jpeg or other."""
    if data.startswith(_PNG_MAGIC):
        return "png"
    if data.startswith(_JPEG_MAGIC):
        return "jpeg"
    return "other"


def decode_image(data: bytes) -> ImageAsset:
    """
    Decode image bytes into an asset.

    Args:
        data: Encoded image file contents

    Returns:
        ImageAsset with the pixel size, the original bytes and their format

    Raises:
        ImageDecodeError: if the data is not an image MuPDF can read
    """
    if not data:
        raise ImageDecodeError("Empty image data")
    try:
        pixmap = fitz.Pixmap(data)
    except Exception as e:
        raise ImageDecodeError(f"Unreadable image: {e}") from e

    if pixmap.width <= 0 or pixmap.height <= 0:
        raise ImageDecodeError("Image has no pixels")
    return ImageAsset(width=pixmap.width, height=pixmap.height, data=bytes(data),
                      format=sniff_format(data))
