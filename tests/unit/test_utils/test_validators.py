"""Unit tests for validators."""

import pytest
from ossclient.core.exceptions import InvalidInputError, SigningError
from ossclient.utils.validators import (
    validate_header_name,
    validate_header_value,
    validate_part_size,
    validate_resource_key,
)


def test_validate_header_name_success():
    """Test header name validation with a valid token."""
    assert validate_header_name("x-oss-meta-author") == "x-oss-meta-author"


def test_validate_header_name_with_space():
    """Test header name validation with an embedded space."""
    with pytest.raises(SigningError, match="Invalid header name"):
        validate_header_name("x oss")


def test_validate_header_name_empty():
    """Test header name validation with an empty name."""
    with pytest.raises(SigningError):
        validate_header_name("")


def test_validate_header_value_newline():
    """Test header value validation with a line break."""
    with pytest.raises(SigningError, match="line break"):
        validate_header_value("x-oss-meta-a", "one\ntwo")


def test_validate_header_value_not_string():
    """Test header value validation with a non-string value."""
    with pytest.raises(SigningError, match="must be a string"):
        validate_header_value("Content-Length", 10)


def test_validate_header_value_latin1_accepted():
    """Test header value validation with Latin-1 text."""
    assert validate_header_value("x-oss-meta-city", "Zürich") == "Zürich"


def test_validate_resource_key_success():
    """Test sub-resource validation with a recognized keyword."""
    assert validate_resource_key("uploadId") == "uploadId"


def test_validate_resource_key_unknown():
    """Test sub-resource validation with an unknown keyword."""
    with pytest.raises(InvalidInputError, match="Unrecognized"):
        validate_resource_key("uploadid")


def test_validate_part_size():
    """Test part size validation."""
    assert validate_part_size(102400) == 102400
    with pytest.raises(InvalidInputError, match="positive"):
        validate_part_size(0)
