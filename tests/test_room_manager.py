"""
Room registry: creation and lookup.
"""
import pytest

from roomshare.core.exceptions import RoomNotFoundError
from roomshare.utils.room_manager import RoomManager


def test_create_room_generates_distinct_codes(db_session):
    rooms = RoomManager(db_session)
    a = rooms.create_room("Math", "Ms. K", "Algebra")
    b = rooms.create_room("Math", "Ms. K", "Algebra")
    assert a.code and b.code
    assert a.code != b.code


def test_get_room_returns_metadata(db_session):
    rooms = RoomManager(db_session)
    created = rooms.create_room("Math", "Ms. K", "Algebra")
    room = rooms.get_room(created.code)
    assert (room.title, room.teacher, room.description) == ("Math", "Ms. K", "Algebra")


def test_get_room_unknown_code(db_session):
    with pytest.raises(RoomNotFoundError):
        RoomManager(db_session).get_room("nope")


def test_get_rooms_skips_missing_and_keeps_order(db_session):
    rooms = RoomManager(db_session)
    a = rooms.create_room("A", "t", "d")
    b = rooms.create_room("B", "t", "d")
    assert [r.code for r in rooms.get_rooms([b.code, "missing", a.code])] == [b.code, a.code]
    assert rooms.get_rooms([]) == []
