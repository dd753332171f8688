import base64
import binascii
import io
from typing import Any, Dict

from PIL import Image, UnidentifiedImageError

from app.core.exceptions import ValidationError

PNG_DATA_URL_PREFIX = "data:image/png;base64,"


def to_png_data_url(image_bytes: bytes) -> str:
    return PNG_DATA_URL_PREFIX + base64.b64encode(image_bytes).decode("ascii")


def data_url_to_bytes(data_url) -> bytes:
    """Decode "data:image/png;base64,...." into raw bytes."""
    if not isinstance(data_url, str) or not data_url.startswith("data:"):
        raise ValidationError("Invalid imageDataUrl")

    header, sep, payload = data_url.partition(",")
    if not sep or not payload:
        raise ValidationError("Malformed data URL")

    try:
        if header.endswith(";base64"):
            return base64.b64decode(payload, validate=True)
        # Non-base64 data URLs are not produced by the preview endpoint
        raise ValidationError("imageDataUrl must be base64 encoded")
    except (binascii.Error, ValueError):
        raise ValidationError("imageDataUrl is not valid base64")


def inspect_image(image_bytes: bytes) -> Dict[str, Any]:
    """Width/height/format of an encoded image; rejects undecodable data."""
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            img.verify()
            return {
                "width": img.width,
                "height": img.height,
                "format": img.format,
            }
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ValidationError(f"imageDataUrl does not contain a readable image: {e}")
