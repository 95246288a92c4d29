"""
Common utility functions for the chefcampaign package.

Helpers for image references. An image reference is either a fetchable
http(s) URL or a self-contained ``data:<mime>;base64,<payload>`` URL.
"""

import base64
import binascii
import time
from io import BytesIO
from typing import Optional, Tuple

import requests
from PIL import Image, UnidentifiedImageError

from chefcampaign.core.error_handler import APIError, ValidationError

DEFAULT_IMAGE_MIME = "image/png"


def current_timestamp_ms() -> int:
    """
    Milliseconds since the epoch.
    """
    return int(time.time() * 1000)


def is_data_url(image_ref: str) -> bool:
    return image_ref.startswith("data:")


def detect_image_mime(data: bytes, default: str = DEFAULT_IMAGE_MIME) -> str:
    """
    Detect the MIME type of encoded image bytes with Pillow.

    Args:
        data (bytes): Encoded image bytes
        default (str): MIME type used when the format cannot be identified

    Returns:
        str: MIME type such as ``image/png`` or ``image/jpeg``
    """
    try:
        with Image.open(BytesIO(data)) as img:
            mime = Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError):
        mime = None
    return mime or default


def to_data_url(data: bytes, mime: Optional[str] = None) -> str:
    """
    Wrap encoded image bytes into a data URL that a browser can display directly.

    Args:
        data (bytes): Encoded image bytes
        mime (str, optional): MIME type; detected from the bytes when omitted

    Returns:
        str: ``data:<mime>;base64,<payload>``
    """
    mime = mime or detect_image_mime(data)
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def base64_to_data_url(encoded: str, mime: Optional[str] = None) -> str:
    """
    Wrap an already base64-encoded image into a data URL.

    Raises:
        ValidationError: If the payload is not valid base64
    """
    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError("Image payload is not valid base64", field="image") from e
    return f"data:{mime or detect_image_mime(data)};base64,{encoded}"


def parse_data_url(image_ref: str) -> Tuple[str, bytes]:
    """
    Split a base64 data URL into its MIME type and decoded bytes.

    Args:
        image_ref (str): ``data:<mime>;base64,<payload>``

    Returns:
        Tuple[str, bytes]: MIME type and raw bytes

    Raises:
        ValidationError: If the reference is not a base64 data URL
    """
    if not is_data_url(image_ref) or "," not in image_ref:
        raise ValidationError("Invalid data URL format", field="image")

    header, encoded = image_ref.split(",", 1)
    if not header.endswith(";base64"):
        raise ValidationError("Data URL is not base64 encoded", field="image")

    mime = header[len("data:"):-len(";base64")] or DEFAULT_IMAGE_MIME

    # Add padding if needed
    padding_needed = len(encoded) % 4
    if padding_needed:
        encoded += "=" * (4 - padding_needed)

    try:
        return mime, base64.b64decode(encoded)
    except (binascii.Error, ValueError) as e:
        raise ValidationError("Data URL payload is not valid base64", field="image") from e


def load_image_bytes(image_ref: str, timeout: Optional[float] = None) -> Tuple[str, bytes]:
    """
    Resolve an image reference to its MIME type and bytes.

    Data URLs are decoded locally; http(s) URLs are downloaded.

    Args:
        image_ref (str): Image reference
        timeout (float, optional): Download timeout in seconds

    Returns:
        Tuple[str, bytes]: MIME type and raw bytes

    Raises:
        ValidationError: If the reference is neither a data URL nor an http(s) URL
        APIError: If the download fails
    """
    if is_data_url(image_ref):
        return parse_data_url(image_ref)

    if not image_ref.startswith(("http://", "https://")):
        raise ValidationError("Image must be a data URL or an http(s) URL", field="image")

    try:
        response = requests.get(image_ref, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise APIError(f"Error downloading image: {e}", endpoint=image_ref) from e

    if not response.ok:
        raise APIError(
            f"Error downloading image: {response.status_code}",
            status_code=response.status_code,
            response=response.text,
            endpoint=image_ref
        )

    content_type = response.headers.get("Content-Type", "").split(";")[0].strip()
    if not content_type.startswith("image/"):
        content_type = detect_image_mime(response.content)
    return content_type, response.content


def ensure_data_url(image_ref: str, timeout: Optional[float] = None) -> str:
    """
    Return the reference as a data URL, downloading it first if it is remote.
    """
    if is_data_url(image_ref):
        return image_ref
    mime, data = load_image_bytes(image_ref, timeout=timeout)
    return to_data_url(data, mime)
