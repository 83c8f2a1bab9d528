import pytest

from main import format_timestamp


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0:00"), (59.9, "0:59"), (61, "1:01"), (3599, "59:59"), (3600, "1:00:00"), (3725, "1:02:05")],
)
def test_format_timestamp(seconds, expected):
    assert format_timestamp(seconds) == expected
