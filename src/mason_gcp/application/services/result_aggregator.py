"""Folds drained creation results into a per-project inventory."""

from mason_gcp.application.services.result_channel import ResultChannel
from mason_gcp.domain.resource.value_objects import ResourceInventory


class ResultAggregator:
    """Builds the inventory of a run from its closed result channel."""

    def aggregate(self, channel: ResultChannel) -> ResourceInventory:
        # arrival order within a project follows task completion order
        inventory = ResourceInventory()
        for result in channel:
            inventory.record(result)
        return inventory
