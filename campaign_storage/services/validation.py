"""Image upload validation, run before anything touches the network."""

import os
from typing import FrozenSet

VALID = "valid"

ALLOWED_IMAGE_EXTENSIONS: FrozenSet[str] = frozenset({".jpg", ".jpeg", ".png", ".gif"})

UNSUPPORTED_FORMAT_MESSAGE = (
    "This image is not in a supported file format. "
    "Please ensure your image is in either .jpg, .png, or .gif format. "
)


def oversize_message(max_length: int) -> str:
    kb = max_length // 1000
    return f"This image is over {kb} kb. Please compress your image and reupload. "


def file_extension(file_name: str) -> str:
    """Return the extension of the last path segment, dot included.

    A leading dot counts as an extension (".png" -> ".png"). Names without a
    dot, or ending in one, have no extension.
    """
    base = os.path.basename(file_name.replace("\\", "/"))
    dot = base.rfind(".")
    if dot == -1 or dot == len(base) - 1:
        return ""
    return base[dot:]


def validate_image(file_name: str, content_length: int, max_length: int = 0) -> str:
    """Check an image upload against the allowed formats and size ceiling.

    Args:
        file_name: Client-supplied file name; only its extension is inspected
        content_length: Size of the upload in bytes
        max_length: Byte ceiling, 0 disables the size check

    Returns:
        str: "valid", or every violation message concatenated in order
    """
    message = ""

    extension = file_extension(file_name).lower()
    if not extension or extension not in ALLOWED_IMAGE_EXTENSIONS:
        message += UNSUPPORTED_FORMAT_MESSAGE

    if max_length > 0 and content_length > max_length:
        message += oversize_message(max_length)

    return message or VALID
