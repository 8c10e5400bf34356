from datetime import datetime, timedelta, timezone

from simple_app.utils import iso_timestamp, uptime_seconds

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_iso_timestamp_is_utc_millis():
    assert iso_timestamp(START) == "2024-01-01T00:00:00.000Z"
    plus_two = timezone(timedelta(hours=2))
    value = datetime(2024, 1, 1, 2, 0, 0, 123456, tzinfo=plus_two)
    assert iso_timestamp(value) == "2024-01-01T00:00:00.123Z"


def test_uptime_floors_to_whole_seconds():
    assert uptime_seconds(START, START + timedelta(seconds=1, milliseconds=999)) == 1
    assert uptime_seconds(START, START) == 0
    assert uptime_seconds(START, START - timedelta(seconds=3)) == 0
