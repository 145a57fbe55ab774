"""
Image upload validation tests.
"""

import pytest

from campaign_storage.services.validation import (
    UNSUPPORTED_FORMAT_MESSAGE,
    VALID,
    file_extension,
    validate_image,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "file_name", ["a.jpg", "a.jpeg", "a.png", "a.gif", "BANNER.JPG", "x.Png", ".png", ".JPG"]
)
def test_supported_extensions_are_valid(file_name):
    """Allowed extensions pass regardless of case, including dot-only names."""
    assert validate_image(file_name, 10_000) == VALID


@pytest.mark.unit
@pytest.mark.parametrize(
    "file_name, expected",
    [
        (".png", ".png"),
        ("banner.tar.gif", ".gif"),
        ("banner.", ""),
        ("banner", ""),
        ("uploads.v2/banner", ""),
        ("C:\\uploads\\hero.JPG", ".JPG"),
    ],
)
def test_file_extension_uses_last_segment_dot(file_name, expected):
    assert file_extension(file_name) == expected


@pytest.mark.unit
def test_size_at_ceiling_is_valid():
    assert validate_image("banner.png", 5000, max_length=5000) == VALID


@pytest.mark.unit
def test_zero_ceiling_disables_size_check():
    assert validate_image("banner.png", 50_000_000, max_length=0) == VALID


@pytest.mark.unit
@pytest.mark.parametrize("file_name", ["banner.bmp", "banner", "banner.", "banner.jpg.exe"])
def test_unsupported_extension(file_name):
    """Missing or unknown extensions produce the format message."""
    message = validate_image(file_name, 100)

    assert message == UNSUPPORTED_FORMAT_MESSAGE
    assert "not in a supported file format" in message


@pytest.mark.unit
def test_oversize_reports_truncated_kilobytes():
    """The ceiling is reported in whole kilobytes (integer division by 1000)."""
    message = validate_image("banner.png", 6000, max_length=5000)

    assert "over 5 kb" in message
    assert message == "This image is over 5 kb. Please compress your image and reupload. "


@pytest.mark.unit
def test_oversize_truncation_rounds_down():
    assert "over 5 kb" in validate_image("banner.png", 6000, max_length=5999)


@pytest.mark.unit
def test_multiple_violations_are_concatenated():
    """Format message first, then size message, separated by a space."""
    message = validate_image("banner.bmp", 6000, max_length=5000)

    assert message.startswith(UNSUPPORTED_FORMAT_MESSAGE)
    assert message.endswith("This image is over 5 kb. Please compress your image and reupload. ")
    assert message != VALID
