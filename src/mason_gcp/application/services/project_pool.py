"""Per-run copy of the broker's free projects, popped LIFO by kind."""

from mason_gcp.domain.resource.broker import Resource, TypeToResources
from mason_gcp.domain.resource.exceptions import PoolExhaustedError


class ProjectPool:
    """Projects available to a single provisioning run.

    The lists are copied on construction so popping never touches the
    broker's own inventory.
    """

    def __init__(self, types: TypeToResources) -> None:
        self._types: dict[str, list[Resource]] = {
            kind: list(resources) for kind, resources in types.items()
        }

    def pop(self, resource_kind: str) -> Resource:
        """Remove and return the most recently added project of ``resource_kind``."""
        projects = self._types.get(resource_kind)
        if not projects:
            raise PoolExhaustedError(resource_kind)
        return projects.pop()

    def remaining(self, resource_kind: str) -> int:
        return len(self._types.get(resource_kind, ()))
