import re

from utils.booking_id import new_booking_id, to_base36

PATTERN = re.compile(r"^HS-[0-9A-Z]+-[0-9A-Z]{5}$")


def test_to_base36():
    assert to_base36(0) == "0"
    assert to_base36(35) == "z"
    assert to_base36(36) == "10"
    assert int(to_base36(1700000000000), 36) == 1700000000000


def test_format():
    booking_id = new_booking_id(now_ms=1700000000000)
    assert PATTERN.match(booking_id)
    assert booking_id.startswith("HS-" + to_base36(1700000000000).upper() + "-")


def test_same_millisecond_ids_differ():
    ids = [new_booking_id(now_ms=1700000000000) for _ in range(1000)]
    assert all(a != b for a, b in zip(ids, ids[1:]))
    # 36**5 random suffixes; a handful of birthday collisions at most
    assert len(set(ids)) > 990


def test_default_timestamp():
    assert PATTERN.match(new_booking_id())
