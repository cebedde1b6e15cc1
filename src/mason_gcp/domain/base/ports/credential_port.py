"""Domain port for writing access credentials of created clusters."""

from abc import ABC, abstractmethod

from mason_gcp.domain.resource.value_objects import ResourceInventory


class CredentialMaterializerPort(ABC):
    """Merges the credentials of every cluster in an inventory into one file."""

    @abstractmethod
    def install(self, inventory: ResourceInventory, destination: str) -> None:
        """
        Write one access context per cluster into ``destination``.

        Raises:
            CredentialMaterializationError: If any context cannot be written
        """
