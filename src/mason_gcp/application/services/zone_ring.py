"""Round-robin zone assignment for the specs of one project."""

from typing import Optional, Sequence

from mason_gcp.domain.resource.exceptions import EmptyZoneListError


class ZoneRing:
    """Cycles through a fixed, non-empty list of zones in the order given."""

    def __init__(self, zones: Sequence[str], project: Optional[str] = None) -> None:
        if not zones:
            raise EmptyZoneListError(project)
        self._values = list(zones)
        self._index = 0

    @property
    def zones(self) -> list[str]:
        return list(self._values)

    def next(self) -> str:
        value = self._values[self._index]
        self._index = (self._index + 1) % len(self._values)
        return value
