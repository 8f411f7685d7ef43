"""Load NCBI assembly summaries (one per kingdom) as ``AssemblyRecord`` lists."""

import csv
import logging
import os
from typing import Dict, Iterable, List, Optional

from proteome_grabber.config import GrabberConfig
from proteome_grabber.models import AssemblyRecord
from proteome_grabber.rest import RestClient

logger = logging.getLogger(__name__)

HEADER_MARKER = "assembly_accession"
MISSING = ("", "na")


class AssemblyIndexProvider:
    """Supplies the candidate assembly records for ``refseq`` or ``genbank``.

    Kingdom summaries are concatenated in ``config.ncbi_kingdoms`` order and
    row order is preserved, so the first match of a filter is stable between
    runs against the same files.
    """

    def __init__(self, rest: RestClient, config: GrabberConfig):
        self._rest = rest
        self._config = config
        self._cache: Dict[str, List[AssemblyRecord]] = {}
        self._missing: Dict[str, List[str]] = {}

    def get_index(self, db: str) -> List[AssemblyRecord]:
        """Records of every kingdom that could be loaded.

        Only a complete index is memoised; kingdoms that failed to load are
        requested again on the next call.
        """
        if db in self._cache:
            return self._cache[db]

        records: List[AssemblyRecord] = []
        missing: List[str] = []
        for kingdom in self._config.ncbi_kingdoms:
            text = self._load_summary(db, kingdom)
            if text is None:
                logger.warning("Assembly summary for %s/%s is unavailable", db, kingdom)
                missing.append(kingdom)
                continue
            records.extend(parse_assembly_summary(text))
        logger.debug("Loaded %d %s assembly records", len(records), db)

        self._missing[db] = missing
        if not missing:
            self._cache[db] = records
        return records

    def missing_kingdoms(self, db: str) -> List[str]:
        """Kingdoms whose summary failed to load on the last ``get_index``."""
        return list(self._missing.get(db, []))

    def summary_url(self, db: str, kingdom: str) -> str:
        return f"{self._config.ncbi_ftp_url}/{db}/{kingdom}/assembly_summary.txt"

    def _load_summary(self, db: str, kingdom: str) -> Optional[str]:
        cache_file = None
        if self._config.index_cache_dir:
            cache_file = os.path.join(
                self._config.index_cache_dir, f"assembly_summary_{db}_{kingdom}.txt"
            )
            if os.path.exists(cache_file):
                with open(cache_file, encoding="utf-8") as fh:
                    return fh.read()

        resp = self._rest.get(self.summary_url(db, kingdom))
        if resp is None:
            return None
        text = resp.text

        if cache_file:
            os.makedirs(self._config.index_cache_dir, exist_ok=True)
            with open(cache_file, "w", encoding="utf-8") as fh:
                fh.write(text)
        return text


def parse_assembly_summary(text: str) -> List[AssemblyRecord]:
    """Parse the tab-separated ``assembly_summary.txt`` format.

    The column header is the comment line starting with
    ``# assembly_accession``; any other comment line is ignored.
    """
    header: Optional[List[str]] = None
    records = []
    for row in csv.reader(_lines(text), delimiter="\t", quoting=csv.QUOTE_NONE):
        if not row:
            continue
        if row[0].startswith("#"):
            first = row[0].lstrip("#").strip()
            if first == HEADER_MARKER:
                header = [first] + [c.strip() for c in row[1:]]
            continue
        if header is None:
            continue
        records.append(_to_record(dict(zip(header, row))))
    return records


def _lines(text: str) -> Iterable[str]:
    return (line for line in text.splitlines() if line.strip())


def _to_record(row: Dict[str, str]) -> AssemblyRecord:
    ftp_path = row.get("ftp_path", "").strip()
    taxid = row.get("taxid", "").strip()
    return AssemblyRecord(
        organism_name=row.get("organism_name", ""),
        assembly_accession=row.get("assembly_accession", ""),
        taxonomy_id=int(taxid) if taxid.isdigit() else 0,
        refseq_category=row.get("refseq_category", "na"),
        version_status=row.get("version_status", ""),
        remote_base_path=None if ftp_path in MISSING else ftp_path,
        bioproject=row.get("bioproject", ""),
        biosample=row.get("biosample", ""),
        infraspecific_name=row.get("infraspecific_name", ""),
        release_type=row.get("release_type", ""),
        genome_representation=row.get("genome_rep", ""),
        sequence_release_date=row.get("seq_rel_date", ""),
        submitter=row.get("submitter", ""),
    )
