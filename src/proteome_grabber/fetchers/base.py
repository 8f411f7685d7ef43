"""Abstract base class for per-database proteome fetchers."""

from abc import ABC, abstractmethod
from typing import List

from proteome_grabber.models import OrganismQuery, RetrievalOutcome


class BaseFetcher(ABC):
    @abstractmethod
    def databases(self) -> List[str]:
        """Return the ``db`` values this fetcher handles (e.g., ['refseq'])."""
        ...

    @abstractmethod
    def fetch(self, query: OrganismQuery, path: str) -> RetrievalOutcome:
        """Retrieve the proteome for ``query`` into the directory ``path``.

        Soft failures are returned as ``NotAvailable`` or ``Failed``; only
        integrity failures may raise.
        """
        ...
