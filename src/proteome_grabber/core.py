"""Orchestrator: validates the database, routes to a fetcher, decompresses."""

import logging
import os
from typing import Dict, Iterable, List, Optional

import requests

from proteome_grabber.assembly_index import AssemblyIndexProvider
from proteome_grabber.config import GrabberConfig
from proteome_grabber.errors import DecompressionError, UnknownDatabaseError
from proteome_grabber.fetchers import FETCHER_CLASSES
from proteome_grabber.fetchers.base import BaseFetcher
from proteome_grabber.models import DATABASES, Failed, OrganismQuery, RetrievalOutcome, Success
from proteome_grabber.rate_limiter import RateLimiter
from proteome_grabber.rest import RestClient
from proteome_grabber.transfer import VerifiedFetcher, gunzip_file

logger = logging.getLogger(__name__)


class ProteomeGrabber:
    def __init__(
        self,
        config: Optional[GrabberConfig] = None,
        index_provider: Optional[AssemblyIndexProvider] = None,
    ):
        self.config = config or GrabberConfig()
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": self.config.user_agent})

        self._rest = RestClient(
            self._session, RateLimiter(self.config.rest_rate), self.config.timeout
        )
        self._downloader = VerifiedFetcher(self._session, self.config.download_timeout)
        self._index = index_provider or AssemblyIndexProvider(self._rest, self.config)

        # Build db -> fetcher routing map
        self._db_map: Dict[str, BaseFetcher] = {}
        for cls in FETCHER_CLASSES:
            fetcher = self._instantiate_fetcher(cls)
            for db in fetcher.databases():
                self._db_map[db] = fetcher

    def _instantiate_fetcher(self, cls: type) -> BaseFetcher:
        from proteome_grabber.fetchers.ncbi import NCBIFetcher

        if cls is NCBIFetcher:
            return NCBIFetcher(self._index, self._downloader)
        return cls(self._rest, self._downloader, self.config)

    def retrieve(
        self,
        organism: str,
        db: str = "refseq",
        reference: bool = True,
        release: Optional[str] = None,
        gunzip: bool = False,
        path: Optional[str] = None,
    ) -> RetrievalOutcome:
        """Retrieve the proteome of a single organism.

        Raises ``UnknownDatabaseError`` for an unsupported ``db`` and
        ``ChecksumMismatchError`` for a corrupted download. An archive that
        cannot be decompressed is removed and reported as ``Failed``; every other
        failure is returned as ``NotAvailable`` or ``Failed``.
        """
        if db not in DATABASES or db not in self._db_map:
            raise UnknownDatabaseError(db, DATABASES)

        path = path or self.config.path
        query = OrganismQuery(
            identifier=organism, db=db, require_reference=reference, release=release
        )
        logger.info("Starting proteome retrieval of '%s' from %s ...", organism, db)
        os.makedirs(path, exist_ok=True)

        outcome = self._db_map[db].fetch(query, path)
        if not isinstance(outcome, Success):
            return outcome

        archive = outcome.local_path
        if not gunzip:
            logger.info(
                "The proteome of '%s' has been downloaded to '%s' and has been named '%s'.",
                organism, path, os.path.basename(archive),
            )
            return outcome

        unzipped = archive[: -len(".gz")] if archive.endswith(".gz") else archive + ".unzipped"
        logger.info("Unzipping downloaded file %s ...", archive)
        try:
            gunzip_file(archive, unzipped)
        except DecompressionError as exc:
            # no corrupt archive may satisfy skip-if-exists on a rerun
            os.remove(archive)
            logger.warning("%s The archive has been removed; please retry the retrieval.", exc)
            return Failed(str(exc))
        logger.info(
            "The proteome of '%s' has been downloaded to '%s' and has been named '%s'.",
            organism, path, os.path.basename(unzipped),
        )
        return Success(local_path=unzipped, metadata=outcome.metadata)

    def retrieve_all(self, organisms: Iterable[str], **kwargs) -> List[RetrievalOutcome]:
        """Retrieve several organisms, in order, with the same options."""
        return [self.retrieve(org.strip(), **kwargs) for org in organisms]


def get_proteome(
    organism: str,
    db: str = "refseq",
    reference: bool = True,
    release: Optional[str] = None,
    gunzip: bool = False,
    path: Optional[str] = None,
    config: Optional[GrabberConfig] = None,
) -> RetrievalOutcome:
    """One-shot convenience wrapper around ``ProteomeGrabber.retrieve``."""
    return ProteomeGrabber(config).retrieve(
        organism, db=db, reference=reference, release=release, gunzip=gunzip, path=path
    )
