import pytest

from pdfsplit.utils import format_bytes, megabytes_to_bytes, safe_file_name


@pytest.mark.parametrize("num_bytes,expected", [
    (0, "0 Bytes"),
    (500, "500 Bytes"),
    (1024, "1 KB"),
    (1536, "1.5 KB"),
    (10 * 1024 * 1024, "10 MB"),
    (12345678, "11.77 MB"),
    (3 * 1024 ** 3, "3 GB"),
])
def test_format_bytes(num_bytes, expected):
    assert format_bytes(num_bytes) == expected


def test_format_bytes_decimals():
    assert format_bytes(1600, decimals=0) == "2 KB"


def test_megabytes_to_bytes():
    assert megabytes_to_bytes(10) == 10 * 1024 * 1024
    assert megabytes_to_bytes(0.5) == 512 * 1024


def test_safe_file_name_keeps_extension():
    assert safe_file_name("Annual Report (final)-part-1.pdf") == "annual-report-final-part-1.pdf"
