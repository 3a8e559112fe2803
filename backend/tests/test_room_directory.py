import pytest

from officehours.errors import NotFoundError
from officehours.services.room_directory import (
    DEFAULT_CODE_ALPHABET,
    RoomDirectory,
    generate_room_code,
)


@pytest.fixture
def rooms(hasher) -> RoomDirectory:
    return RoomDirectory(hasher)


def test_generated_codes_are_distinct(rooms):
    a = rooms.create_room("CS101", "alice")
    b = rooms.create_room("CS102", "bob")

    assert a.code != b.code
    assert len(a.code) == 6
    assert set(a.code) <= set(DEFAULT_CODE_ALPHABET)
    assert rooms.get_room(a.code) is a
    assert rooms.get_room("ZZZZZZ") is None


def test_alphabet_excludes_confusable_characters():
    for ch in "0O1I":
        assert ch not in DEFAULT_CODE_ALPHABET
    code = generate_room_code(32)
    assert not set(code) & set("0O1I")


def test_requested_code_is_get_or_create(rooms):
    first = rooms.create_room("Office Hours", "system", requested_code="main")
    second = rooms.create_room("Something else", "mallory", requested_code="MAIN")

    assert second is first
    assert second.code == "MAIN"
    assert second.created_at == first.created_at
    assert second.name == "Office Hours"
    assert len(rooms) == 1


def test_lookup_is_case_insensitive(rooms):
    room = rooms.create_room("Lab", "alice", requested_code="abc234")
    assert room.code == "ABC234"
    assert rooms.get_room("abc234") is room
    assert rooms.get_room(" Abc234 ") is room


def test_blank_requested_code_generates_one(rooms):
    room = rooms.create_room("Lab", "alice", requested_code="   ")
    assert len(room.code) == 6


def test_generation_retries_on_collision(hasher):
    # A two-letter alphabet of length 1 has exactly two codes.
    rooms = RoomDirectory(hasher, code_alphabet="AB", code_length=1)
    codes = {rooms.create_room(f"r{i}", "alice").code for i in range(2)}
    assert codes == {"A", "B"}


def test_require_room_raises_for_unknown(rooms):
    with pytest.raises(NotFoundError):
        rooms.require_room("NOPE42")


def test_default_room(rooms):
    room = rooms.ensure_default_room("MAIN", "Office Hours")
    assert rooms.ensure_default_room("main", "Other") is room
    assert room.created_by == "system"


def test_rooms_are_isolated(rooms):
    x = rooms.create_room("X", "alice")
    y = rooms.create_room("Y", "bob")
    y.queue.admit("+15550000001")
    before = [(e.entrant.id, e.position) for e in y.queue.snapshot()]

    a = x.queue.admit("+15550000001").entrant  # same phone, other room
    x.queue.admit("+15550000002")
    x.queue.remove(a.id)
    x.queue.pop_front()

    assert [(e.entrant.id, e.position) for e in y.queue.snapshot()] == before
    assert x.queue is not y.queue


def test_listeners_attached_to_every_room(hasher):
    events = []
    rooms = RoomDirectory(hasher, listeners=[events.append])
    for name in ("A", "B"):
        room = rooms.create_room(name, "alice")
        room.queue.admit("+15550000001")
        room.queue.pop_front()

    assert [e.room_code for e in events] == [r.code for r in rooms.list_rooms()]


def test_invalid_code_settings(hasher):
    with pytest.raises(ValueError):
        RoomDirectory(hasher, code_length=0)
    with pytest.raises(ValueError):
        RoomDirectory(hasher, code_alphabet="AAAA")
