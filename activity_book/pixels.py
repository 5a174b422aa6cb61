"""
Pixel Buffer Helpers

Conversions between the RGBA numpy buffers used by the renderers and the
formats the rest of the book pipeline exchanges (PIL images, PNG bytes,
base64 data URLs).
"""

import base64
import io
from typing import Union

import cv2
import numpy as np
from PIL import Image


DATA_URL_PREFIX = "data:image/png;base64,"

ImageLike = Union[np.ndarray, Image.Image]


def to_rgba_array(image: ImageLike) -> np.ndarray:
    """
    Normalize an image to an (height, width, 4) uint8 RGBA buffer.

    Accepts PIL images of any mode and numpy arrays that are grayscale
    (H, W), RGB (H, W, 3) or RGBA (H, W, 4).

    Raises:
        ValueError: If the buffer is empty or has an unsupported shape
    """
    if isinstance(image, Image.Image):
        if image.width == 0 or image.height == 0:
            raise ValueError("Image has no pixels")
        return np.array(image.convert("RGBA"))

    array = np.asarray(image)
    if array.size == 0:
        raise ValueError("Pixel buffer is empty")
    if array.dtype != np.uint8:
        raise ValueError(f"Pixel buffer must be uint8, got {array.dtype}")

    if array.ndim == 2:
        return cv2.cvtColor(array, cv2.COLOR_GRAY2RGBA)
    if array.ndim == 3 and array.shape[2] == 3:
        return cv2.cvtColor(array, cv2.COLOR_RGB2RGBA)
    if array.ndim == 3 and array.shape[2] == 4:
        return np.ascontiguousarray(array)

    raise ValueError(f"Unsupported pixel buffer shape: {array.shape}")


def to_image(buffer: np.ndarray) -> Image.Image:
    """Wrap an RGBA buffer as a PIL image (copies the data)."""
    return Image.fromarray(to_rgba_array(buffer), "RGBA")


def blank_page(width: int, height: int, color: str = "white") -> np.ndarray:
    """Create an opaque page of the given size."""
    return np.array(Image.new("RGBA", (width, height), color))


def flatten_on_white(rgba: np.ndarray) -> np.ndarray:
    """Composite an RGBA buffer over an opaque white page of the same size."""
    height, width = rgba.shape[:2]
    page = Image.new("RGBA", (width, height), "white")
    page.alpha_composite(Image.fromarray(rgba, "RGBA"))
    return np.array(page)


def decode_png(data: bytes) -> np.ndarray:
    """Decode PNG (or any PIL-readable) bytes into an RGBA buffer."""
    with Image.open(io.BytesIO(data)) as img:
        return to_rgba_array(img)


def encode_png(buffer: np.ndarray) -> bytes:
    """Encode an RGBA buffer as PNG bytes."""
    out = io.BytesIO()
    to_image(buffer).save(out, "PNG")
    return out.getvalue()


def decode_data_url(url: str) -> np.ndarray:
    """
    Decode a base64 image data URL into an RGBA buffer.

    Any image MIME type PIL can read is accepted.

    Raises:
        ValueError: If the string is not a base64 data URL
    """
    header, sep, payload = url.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("Not a base64 data URL")
    return decode_png(base64.b64decode(payload))


def encode_data_url(buffer: np.ndarray) -> str:
    """Encode an RGBA buffer as a PNG data URL."""
    return DATA_URL_PREFIX + base64.b64encode(encode_png(buffer)).decode("ascii")
