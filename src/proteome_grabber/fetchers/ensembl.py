"""Retrieve Ensembl / EnsemblGenomes peptide FASTA files via the Ensembl REST API."""

import logging
import os
from typing import Dict, List, Optional

from proteome_grabber.config import GrabberConfig
from proteome_grabber.fetchers.base import BaseFetcher
from proteome_grabber.locations import RemoteLocation, build_ensembl_location, capitalize_species
from proteome_grabber.metadata import ensembl_record, write_sidecars
from proteome_grabber.models import (
    ENSEMBL_DATABASES,
    Failed,
    NotAvailable,
    OrganismQuery,
    RetrievalOutcome,
    Success,
)
from proteome_grabber.resolver import is_taxid, strip_parentheses
from proteome_grabber.rest import RestClient
from proteome_grabber.transfer import VerifiedFetcher

logger = logging.getLogger(__name__)

JSON_PARAMS = {"content-type": "application/json"}
VERTEBRATE_DIVISIONS = ("EnsemblVertebrates",)


class EnsemblFetcher(BaseFetcher):
    def __init__(self, rest: RestClient, downloader: VerifiedFetcher, config: GrabberConfig):
        self._rest = rest
        self._downloader = downloader
        self._config = config
        self._species: Dict[str, List[dict]] = {}

    def databases(self) -> List[str]:
        return list(ENSEMBL_DATABASES)

    def fetch(self, query: OrganismQuery, path: str) -> RetrievalOutcome:
        species = self.lookup_species(query)
        if species is None:
            return _failed(f"No {query.db} genome matches '{query.identifier}'.")

        location = self.locate(species, query)
        if location is None:
            return _failed(
                f"The {query.db} release layout for '{species['name']}' could not be determined."
            )

        organism = capitalize_species(species["name"])
        info_url = f"{self._config.ensembl_rest_url}/info/assembly/{organism}"
        info = self._rest.get_json(info_url, JSON_PARAMS)
        if info is None:
            reason = (
                f"The API call '{info_url}' did not work. This might be due to a non-existing "
                "organism or a corrupted internet or firewall connection."
            )
            logger.warning(reason)
            return NotAvailable(reason)

        destination = os.path.join(path, location.archive_url.rsplit("/", 1)[-1])
        result = self._downloader.fetch(location.archive_url, destination)
        if not result.ok:
            return _failed(
                f"Download of '{location.archive_url}' failed ({result.error}). Sometimes the "
                "internet connection isn't stable and re-running the retrieval might help."
            )

        record = ensembl_record(destination, location.archive_url, organism, query.db, info)
        write_sidecars(record, path, organism, query.db, with_report=True)
        logger.debug(
            "Retrieved %s genome '%s'.",
            query.db,
            species.get("display_name") or organism,
        )
        return Success(local_path=destination, metadata=record)

    def lookup_species(self, query: OrganismQuery) -> Optional[dict]:
        """Pick one species row of the division listing for ``query``."""
        rows = self._species_table(query.db)
        token = strip_parentheses(query.identifier.strip())

        if is_taxid(token):
            taxid = int(token)
            candidates = [r for r in rows if _as_int(r.get("taxon_id")) == taxid]
            exact = [r for r in candidates if r.get("assembly")]
        else:
            name = token.replace(" ", "_").lower()
            candidates = [
                r for r in rows
                if name in r.get("name", "")
                or token in (r.get("display_name") or "")
                or r.get("accession") == token
            ]
            exact = [
                r for r in candidates
                if (r.get("name") == name or r.get("accession") == token) and r.get("assembly")
            ]

        if not candidates:
            return None
        if len(candidates) > 1:
            candidates = exact or candidates
            if len(candidates) > 1:
                logger.warning(
                    "More than one %s genome matches '%s'. Only the first entry '%s' is used.",
                    query.db,
                    query.identifier,
                    candidates[0].get("name"),
                )
        return candidates[0]

    def locate(self, species: dict, query: OrganismQuery) -> Optional[RemoteLocation]:
        if not species.get("assembly"):
            return None

        if query.db == "ensembl":
            release = query.release or species.get("release")
            if not release:
                return None
            return build_ensembl_location(
                self._config.ensembl_ftp_url, str(release), species["name"], species["assembly"]
            )

        release = query.release or self._eg_release()
        if not release:
            return None
        division = species.get("division", "").replace("Ensembl", "").lower()
        return build_ensembl_location(
            self._config.ensemblgenomes_ftp_url,
            str(release),
            species["name"],
            species["assembly"],
            division=division,
            collection=self._collection(species["name"]),
        )

    def _species_table(self, db: str) -> List[dict]:
        """Species rows of every division; memoised only once all divisions loaded."""
        if db in self._species:
            return self._species[db]

        divisions = (
            VERTEBRATE_DIVISIONS if db == "ensembl" else self._config.ensemblgenomes_divisions
        )
        rows: List[dict] = []
        complete = True
        for division in divisions:
            data = self._rest.get_json(
                f"{self._config.ensembl_rest_url}/info/species",
                dict(JSON_PARAMS, division=division),
            )
            if data is None:
                logger.warning("Species listing of division %s is unavailable", division)
                complete = False
                continue
            rows.extend(data.get("species", []))

        if complete:
            self._species[db] = rows
        return rows

    def _eg_release(self) -> Optional[str]:
        data = self._rest.get_json(f"{self._config.ensembl_rest_url}/info/eg_version", JSON_PARAMS)
        return str(data["version"]) if data and data.get("version") else None

    def _collection(self, species_name: str) -> Optional[str]:
        """Bacteria/fungi/protists in collection databases live one folder deeper."""
        data = self._rest.get_json(
            f"{self._config.ensembl_rest_url}/info/genomes/{species_name}", JSON_PARAMS
        )
        dbname = (data or {}).get("dbname", "")
        if "_collection_" in dbname:
            return dbname.split("_core_")[0]
        return None


def _as_int(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _failed(error: str) -> Failed:
    logger.warning(error)
    return Failed(error)
