"""Retrieve UniProt proteomes via the UniProt REST API."""

import logging
import os
import re
from typing import List, Optional

from proteome_grabber.config import GrabberConfig
from proteome_grabber.fetchers.base import BaseFetcher
from proteome_grabber.metadata import uniprot_record, write_sidecars
from proteome_grabber.models import NotAvailable, OrganismQuery, RetrievalOutcome, Success
from proteome_grabber.resolver import is_taxid, normalize_label, strip_parentheses
from proteome_grabber.rest import RestClient
from proteome_grabber.transfer import VerifiedFetcher

logger = logging.getLogger(__name__)

_UPID_RE = re.compile(r"UP[0-9]{9,}")


class UniProtFetcher(BaseFetcher):
    def __init__(self, rest: RestClient, downloader: VerifiedFetcher, config: GrabberConfig):
        self._rest = rest
        self._downloader = downloader
        self._config = config

    def databases(self) -> List[str]:
        return ["uniprot"]

    def fetch(self, query: OrganismQuery, path: str) -> RetrievalOutcome:
        proteome = self.lookup_proteome(query)
        if proteome is None:
            reason = f"No UniProt proteome could be found for organism '{query.identifier}'."
            if query.require_reference:
                reason += " Have you tried reference=False?"
            logger.warning(reason)
            return NotAvailable(reason)

        label = normalize_label(query.identifier)
        file_name = f"{label}_protein_uniprot.faa.gz"
        destination = os.path.join(path, file_name)
        url = self.stream_url(proteome["id"])

        result = self._downloader.fetch(url, destination)
        if not result.ok:
            reason = f"Download of UniProt proteome {proteome['id']} failed ({result.error}). Please retry later."
            logger.warning(reason)
            return NotAvailable(reason)

        record = uniprot_record(file_name, url, label, path, proteome)
        write_sidecars(record, path, label, "uniprot")
        return Success(local_path=destination, metadata=record)

    def lookup_proteome(self, query: OrganismQuery) -> Optional[dict]:
        data = self._rest.get_json(
            f"{self._config.uniprot_rest_url}/proteomes/search",
            {"query": build_proteome_query(query), "format": "json", "size": "5"},
        )
        results = (data or {}).get("results", [])
        if not results:
            return None
        if len(results) > 1:
            logger.warning(
                "More than one UniProt proteome matches '%s'. Only the first entry '%s' is used.",
                query.identifier,
                results[0].get("id"),
            )
        return results[0]

    def stream_url(self, proteome_id: str) -> str:
        return (
            f"{self._config.uniprot_rest_url}/uniprotkb/stream"
            f"?query=proteome:{proteome_id}&format=fasta&compressed=true"
        )


def build_proteome_query(query: OrganismQuery) -> str:
    token = strip_parentheses(query.identifier.strip())
    if is_taxid(token):
        q = f"organism_id:{token}"
    elif _UPID_RE.fullmatch(token):
        q = f"upid:{token}"
    else:
        q = f'organism_name:"{token}"'
    if query.require_reference:
        q = f"({q}) AND proteome_type:1"
    return q
