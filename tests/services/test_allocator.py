import pytest

from lxccreator.errors import NoFreeIdentifier, ResourceExhausted
from lxccreator.services.allocator import IdentifierAllocator, next_free_id


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None


class FakeControlPlane:
    def __init__(self, ids):
        self.ids = set(ids)
        self.calls = 0

    def list_ids(self):
        self.calls += 1
        return set(self.ids)


def test_next_free_id_returns_range_start_when_unused():
    assert next_free_id(set(), 100, 999) == 100


def test_next_free_id_fills_gaps():
    assert next_free_id({100, 101, 103}, 100, 999) == 102


def test_next_free_id_ignores_ids_outside_range():
    assert next_free_id({5, 1000, 100}, 100, 999) == 101


def test_next_free_id_raises_when_range_is_full():
    with pytest.raises(NoFreeIdentifier, match="No free container ID"):
        next_free_id(set(range(100, 106)), 100, 105)

    assert issubclass(NoFreeIdentifier, ResourceExhausted)


def test_allocator_rereads_used_ids_on_every_call():
    control_plane = FakeControlPlane({100})
    allocator = IdentifierAllocator(control_plane=control_plane, logger=DummyLogger())

    assert allocator.allocate(100, 999) == 101
    control_plane.ids.add(101)
    assert allocator.allocate(100, 999) == 102
    assert control_plane.calls == 2
