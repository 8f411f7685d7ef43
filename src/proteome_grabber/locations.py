"""Remote layout of proteome archives on the NCBI and Ensembl FTP sites."""

import posixpath
from dataclasses import dataclass
from typing import Optional

from proteome_grabber.models import AssemblyRecord

NCBI_ARCHIVE_SUFFIX = "_protein.faa.gz"
NCBI_MANIFEST_NAME = "md5checksums.txt"


@dataclass(frozen=True)
class RemoteLocation:
    archive_url: str
    checksum_manifest_url: Optional[str] = None
    checksum_key: Optional[str] = None  # entry name in the manifest


def build_ncbi_location(record: AssemblyRecord) -> RemoteLocation:
    """Archive and md5 manifest URLs for a RefSeq/GenBank assembly folder.

    ``ftp://x/GCF_1`` -> ``ftp://x/GCF_1/GCF_1_protein.faa.gz``
    """
    if not record.remote_base_path:
        raise ValueError(f"Assembly {record.assembly_accession} has no remote path")
    base = record.remote_base_path.rstrip("/")
    archive_name = posixpath.basename(base) + NCBI_ARCHIVE_SUFFIX
    return RemoteLocation(
        archive_url=f"{base}/{archive_name}",
        checksum_manifest_url=f"{base}/{NCBI_MANIFEST_NAME}",
        checksum_key=f"./{archive_name}",
    )


def ensembl_archive_name(species_name: str, assembly: str) -> str:
    """``homo_sapiens``, ``GRCh38`` -> ``Homo_sapiens.GRCh38.pep.all.fa.gz``"""
    return f"{capitalize_species(species_name)}.{assembly.replace(' ', '_')}.pep.all.fa.gz"


def build_ensembl_location(
    ftp_base: str,
    release: str,
    species_name: str,
    assembly: str,
    division: Optional[str] = None,
    collection: Optional[str] = None,
) -> RemoteLocation:
    """Peptide FASTA URL in the Ensembl / EnsemblGenomes release tree.

    ``division`` is the EnsemblGenomes site folder (``plants``, ``fungi``,
    ...) and is omitted for Ensembl vertebrates.
    """
    parts = [ftp_base.rstrip("/")]
    if division:
        parts.append(division)
    parts += [f"release-{release}", "fasta"]
    if collection:
        parts.append(collection)
    parts += [species_name, "pep", ensembl_archive_name(species_name, assembly)]
    return RemoteLocation(archive_url="/".join(parts))


def capitalize_species(species_name: str) -> str:
    return species_name[:1].upper() + species_name[1:]
