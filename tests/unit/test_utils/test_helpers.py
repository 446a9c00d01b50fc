"""Unit tests for helper functions."""

from datetime import datetime, timedelta, timezone
from ossclient.utils.helpers import (
    content_md5,
    format_file_size,
    http_date,
    quote_object_name,
    split_endpoint,
)


def test_http_date_is_rfc1123_gmt():
    """Test the Date header format."""
    moment = datetime(2026, 10, 18, 8, 0, 5, tzinfo=timezone.utc)
    assert http_date(moment) == "Sun, 18 Oct 2026 08:00:05 GMT"


def test_http_date_converts_to_gmt():
    """Test that aware datetimes in other zones are converted to GMT."""
    moment = datetime(2026, 1, 1, 1, 30, tzinfo=timezone(timedelta(hours=8)))
    assert http_date(moment) == "Wed, 31 Dec 2025 17:30:00 GMT"


def test_http_date_defaults_to_now():
    """Test that the current time is used without an argument."""
    assert http_date().endswith(" GMT")


def test_content_md5():
    """Test the base64 MD5 digest."""
    assert content_md5(b"") == "1B2M2Y8AsgTpgAmY7PhCfg=="


def test_split_endpoint():
    """Test scheme detection of endpoints."""
    assert split_endpoint("https://oss.example.com/") == ("https", "oss.example.com")
    assert split_endpoint("http://oss.example.com") == ("http", "oss.example.com")
    assert split_endpoint("oss.example.com") == ("http", "oss.example.com")


def test_quote_object_name_keeps_slashes():
    """Test URL quoting of object keys."""
    assert quote_object_name("dir/sub dir/file+1.txt") == "dir/sub%20dir/file%2B1.txt"


def test_format_file_size():
    """Test human readable sizes."""
    assert format_file_size(512) == "512.00 B"
    assert format_file_size(100 * 1024) == "100.00 KB"
