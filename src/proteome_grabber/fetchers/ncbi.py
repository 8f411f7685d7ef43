"""Retrieve RefSeq / GenBank proteomes from the NCBI genomes FTP tree."""

import logging
import os
from typing import List

from proteome_grabber.assembly_index import AssemblyIndexProvider
from proteome_grabber.errors import ChecksumMismatchError, OrganismNotFoundError
from proteome_grabber.fetchers.base import BaseFetcher
from proteome_grabber.locations import build_ncbi_location
from proteome_grabber.metadata import ncbi_record, write_sidecars
from proteome_grabber.models import (
    NCBI_DATABASES,
    NotAvailable,
    OrganismQuery,
    RetrievalOutcome,
    Success,
)
from proteome_grabber.resolver import is_genome_available, resolve
from proteome_grabber.transfer import VerifiedFetcher

logger = logging.getLogger(__name__)


class NCBIFetcher(BaseFetcher):
    def __init__(self, index_provider: AssemblyIndexProvider, downloader: VerifiedFetcher):
        self._index = index_provider
        self._downloader = downloader

    def databases(self) -> List[str]:
        return list(NCBI_DATABASES)

    def fetch(self, query: OrganismQuery, path: str) -> RetrievalOutcome:
        index = self._index.get_index(query.db)

        if not is_genome_available(index, query.identifier):
            missing = self._index.missing_kingdoms(query.db)
            if missing:
                return _not_available(
                    f"The {query.db} assembly index is unavailable for "
                    f"{', '.join(missing)}, so '{query.identifier}' could not be looked up. "
                    "Please retry later."
                )
            return _not_available(
                f"Unfortunately no proteome file could be found for organism "
                f"'{query.identifier}'. Thus, the download of this organism has been omitted."
            )

        try:
            target = resolve(index, query)
        except OrganismNotFoundError as exc:
            return _not_available(str(exc))

        location = build_ncbi_location(target.record)
        destination = os.path.join(path, target.archive_name)

        result = self._downloader.fetch(location.archive_url, destination)
        if not result.ok:
            return _not_available(
                f"The download session seems to have timed out at '{location.archive_url}' "
                f"({result.error}). This could be due to an overload of queries to the "
                "databases. Please restart the retrieval or wait for a while before retrying."
            )

        if not result.skipped:
            logger.info("Proteome download of %s is completed!", target.label)
            try:
                verified = self._downloader.verify(
                    destination, location.checksum_manifest_url, location.checksum_key
                )
            except ChecksumMismatchError:
                os.remove(destination)
                raise
            if not verified:
                os.remove(destination)
                return _not_available(
                    f"The md5 checksum manifest '{location.checksum_manifest_url}' could not "
                    "be retrieved, so the download could not be verified. Please retry later."
                )

        record = ncbi_record(target, location.archive_url, path)
        write_sidecars(record, path, target.label, query.db)
        return Success(local_path=destination, metadata=record)


def _not_available(reason: str) -> NotAvailable:
    logger.warning(reason)
    return NotAvailable(reason)
