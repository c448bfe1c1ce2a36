"""Container ID allocation for lxc-creator."""

from typing import Iterable

from lxccreator.constants import ID_RANGE_MAX, ID_RANGE_MIN
from lxccreator.errors import NoFreeIdentifier
from lxccreator.errors_catalog import actionable_error


def next_free_id(used_ids: Iterable[int], lower: int = ID_RANGE_MIN, upper: int = ID_RANGE_MAX) -> int:
    """Return the smallest ID in ``[lower, upper]`` that is not in ``used_ids``."""
    if lower > upper:
        raise ValueError(f"Invalid ID range: {lower}-{upper}")

    free = set(range(lower, upper + 1)).difference(used_ids)
    if not free:
        raise NoFreeIdentifier(actionable_error("no_free_id", lower=lower, upper=upper))
    return min(free)


class IdentifierAllocator:
    """Reads the live list of containers and picks the next free ID.

    The used set is queried on every call and never cached, so IDs taken by
    other tools in the meantime are respected. Nothing is reserved: two runs
    racing against the same host may still pick the same ID.
    """

    def __init__(self, control_plane, logger):
        self.control_plane = control_plane
        self.logger = logger

    def allocate(self, lower: int = ID_RANGE_MIN, upper: int = ID_RANGE_MAX) -> int:
        used_ids = self.control_plane.list_ids()
        self.logger.debug("Container IDs in use: %s", sorted(used_ids))
        return next_free_id(used_ids, lower, upper)
