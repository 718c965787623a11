from abc import ABC, abstractmethod
from collections.abc import Sequence

from cosmetics_store.domain.models import Product, Sale, Snapshot


class Storage(ABC):
    """Load/save contract consumed by the inventory service.

    Adapters exchange full snapshots by value and never keep a reference
    to the service's collections between calls.
    """

    @abstractmethod
    def load(self) -> Snapshot:
        """
        Load the catalog and the ledger.

        Returns an empty snapshot when no prior data exists.

        Raises:
            StorageError: If stored data exists but cannot be read or parsed
        """

    @abstractmethod
    def save(self, products: Sequence[Product], sales: Sequence[Sale]) -> None:
        """
        Persist a full snapshot of both collections.

        Raises:
            StorageError: If the snapshot could not be written
        """
