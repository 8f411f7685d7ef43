"""Build and write the provenance sidecars of a downloaded proteome."""

import csv
import io
import os
from datetime import datetime
from typing import Dict, Optional

from proteome_grabber.models import (
    ENSEMBL_DOC_COLUMNS,
    NCBI_DOC_COLUMNS,
    UNIPROT_DOC_COLUMNS,
    MetadataRecord,
    ResolvedTarget,
)

MISSING_VALUE = "none"

ENSEMBL_INFO_KEYS = (
    "assembly_name",
    "assembly_date",
    "genebuild_last_geneset_update",
    "assembly_accession",
    "genebuild_initial_release_date",
)

REPORT_LABELS = {
    "file_name": "File Name",
    "download_path": "Download Path",
    "organism": "Organism Name",
    "database": "Database",
    "download_date": "Download_Date",
}


def download_date(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime("%a %b %d %H:%M:%S %Y")


def doc_file_name(label: str, db: str, ext: str = "tsv") -> str:
    return f"doc_{label}_db_{db}.{ext}"


def ncbi_record(target: ResolvedTarget, url: str, path: str) -> MetadataRecord:
    rec = target.record
    return MetadataRecord(
        columns=NCBI_DOC_COLUMNS,
        values={
            "file_name": target.archive_name,
            "organism": target.label,
            "url": url,
            "database": target.db,
            "path": path,
            "refseq_category": rec.refseq_category,
            "assembly_accession": rec.assembly_accession,
            "bioproject": rec.bioproject,
            "biosample": rec.biosample,
            "taxid": str(rec.taxonomy_id),
            "infraspecific_name": rec.infraspecific_name,
            "version_status": rec.version_status,
            "release_type": rec.release_type,
            "genome_rep": rec.genome_representation,
            "seq_rel_date": rec.sequence_release_date,
            "submitter": rec.submitter,
            "download_date": download_date(),
        },
    )


def ensembl_record(
    file_path: str, url: str, organism: str, db: str, info: Dict
) -> MetadataRecord:
    """Missing assembly facts are rendered as "none", never dropped."""
    values = {
        "file_name": file_path,
        "download_path": url,
        "organism": organism,
        "database": db,
        "download_date": download_date(),
    }
    for key in ENSEMBL_INFO_KEYS:
        value = info.get(key)
        values[key] = MISSING_VALUE if value is None else str(value)
    return MetadataRecord(columns=ENSEMBL_DOC_COLUMNS, values=values)


def uniprot_record(
    file_name: str, url: str, organism: str, path: str, proteome: Dict
) -> MetadataRecord:
    taxonomy = proteome.get("taxonomy") or {}
    return MetadataRecord(
        columns=UNIPROT_DOC_COLUMNS,
        values={
            "file_name": file_name,
            "organism": organism,
            "url": url,
            "database": "uniprot",
            "path": path,
            "proteome_id": proteome.get("id", ""),
            "proteome_type": proteome.get("proteomeType", ""),
            "taxid": str(taxonomy.get("taxonId", "")),
            "protein_count": str(proteome.get("proteinCount", "")),
            "modified": proteome.get("modified", ""),
            "download_date": download_date(),
        },
    )


def write_doc_tsv(record: MetadataRecord, filepath: str) -> str:
    with open(filepath, "w", newline="", encoding="utf-8") as fh:
        fh.write(record_to_tsv(record))
    return filepath


def record_to_tsv(record: MetadataRecord) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(
        buf, fieldnames=list(record.columns), delimiter="\t", lineterminator="\n"
    )
    writer.writeheader()
    writer.writerow(record.to_dict())
    return buf.getvalue()


def render_report(record: MetadataRecord) -> str:
    """Human-readable ``Key: value`` rendering, one field per line."""
    lines = [
        f"{REPORT_LABELS.get(col, col)}: {value}" for col, value in record.to_dict().items()
    ]
    return "\n".join(lines) + "\n"


def write_report(record: MetadataRecord, filepath: str) -> str:
    with open(filepath, "w", encoding="utf-8") as fh:
        fh.write(render_report(record))
    return filepath


def write_sidecars(
    record: MetadataRecord, directory: str, label: str, db: str, with_report: bool = False
) -> None:
    write_doc_tsv(record, os.path.join(directory, doc_file_name(label, db)))
    if with_report:
        write_report(record, os.path.join(directory, doc_file_name(label, db, "txt")))
