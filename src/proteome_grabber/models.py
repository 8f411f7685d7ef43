"""Typed records passed between the resolver, fetchers and sidecar writers."""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

DATABASES = ("refseq", "genbank", "ensembl", "ensemblgenomes", "uniprot")
NCBI_DATABASES = ("refseq", "genbank")
ENSEMBL_DATABASES = ("ensembl", "ensemblgenomes")

REFERENCE_CATEGORIES = ("reference genome", "representative genome")

NOT_AVAILABLE = "Not available"

NCBI_DOC_COLUMNS = (
    "file_name",
    "organism",
    "url",
    "database",
    "path",
    "refseq_category",
    "assembly_accession",
    "bioproject",
    "biosample",
    "taxid",
    "infraspecific_name",
    "version_status",
    "release_type",
    "genome_rep",
    "seq_rel_date",
    "submitter",
    "download_date",
)

ENSEMBL_DOC_COLUMNS = (
    "file_name",
    "download_path",
    "organism",
    "database",
    "download_date",
    "assembly_name",
    "assembly_date",
    "genebuild_last_geneset_update",
    "assembly_accession",
    "genebuild_initial_release_date",
)

UNIPROT_DOC_COLUMNS = (
    "file_name",
    "organism",
    "url",
    "database",
    "path",
    "proteome_id",
    "proteome_type",
    "taxid",
    "protein_count",
    "modified",
    "download_date",
)


@dataclass(frozen=True)
class AssemblyRecord:
    """One row of an NCBI assembly summary."""

    organism_name: str
    assembly_accession: str
    taxonomy_id: int
    refseq_category: str = "na"
    version_status: str = "latest"
    remote_base_path: Optional[str] = None
    bioproject: str = ""
    biosample: str = ""
    infraspecific_name: str = ""
    release_type: str = ""
    genome_representation: str = ""
    sequence_release_date: str = ""
    submitter: str = ""


@dataclass(frozen=True)
class OrganismQuery:
    identifier: str
    db: str = "refseq"
    require_reference: bool = True
    release: Optional[str] = None


@dataclass(frozen=True)
class ResolvedTarget:
    record: AssemblyRecord
    label: str
    db: str

    @property
    def file_stem(self) -> str:
        return f"{self.label}_protein_{self.db}"

    @property
    def archive_name(self) -> str:
        return f"{self.file_stem}.faa.gz"


@dataclass(frozen=True)
class MetadataRecord:
    """Flat provenance record written next to a downloaded proteome."""

    columns: Tuple[str, ...]
    values: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Return an ordered dict of the record's columns."""
        return {col: str(self.values.get(col, "")) for col in self.columns}


# --- Retrieval outcomes ---


@dataclass(frozen=True)
class Success:
    local_path: str
    metadata: Optional[MetadataRecord] = None

    def legacy_value(self) -> Union[str, bool]:
        return self.local_path


@dataclass(frozen=True)
class NotAvailable:
    reason: str

    def legacy_value(self) -> Union[str, bool]:
        return NOT_AVAILABLE


@dataclass(frozen=True)
class Failed:
    error: str

    def legacy_value(self) -> Union[str, bool]:
        return False


RetrievalOutcome = Union[Success, NotAvailable, Failed]
