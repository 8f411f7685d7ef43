"""Runtime configuration shared by every component of a retrieval."""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

DEFAULT_PATH = os.path.join("_ncbi_downloads", "proteomes")

NCBI_KINGDOMS = (
    "archaea",
    "bacteria",
    "fungi",
    "invertebrate",
    "plant",
    "protozoa",
    "vertebrate_mammalian",
    "vertebrate_other",
    "viral",
)

ENSEMBLGENOMES_DIVISIONS = (
    "EnsemblPlants",
    "EnsemblFungi",
    "EnsemblMetazoa",
    "EnsemblProtists",
)


@dataclass
class GrabberConfig:
    path: str = DEFAULT_PATH
    ncbi_ftp_url: str = "https://ftp.ncbi.nlm.nih.gov/genomes"
    ncbi_kingdoms: Tuple[str, ...] = NCBI_KINGDOMS
    ensembl_rest_url: str = "https://rest.ensembl.org"
    ensembl_ftp_url: str = "https://ftp.ensembl.org/pub"
    ensemblgenomes_ftp_url: str = "https://ftp.ensemblgenomes.ebi.ac.uk/pub"
    ensemblgenomes_divisions: Tuple[str, ...] = ENSEMBLGENOMES_DIVISIONS
    uniprot_rest_url: str = "https://rest.uniprot.org"
    timeout: float = 30.0
    download_timeout: float = 300.0
    rest_rate: float = 15.0  # Ensembl REST allows 15 req/s
    index_cache_dir: Optional[str] = None
    user_agent: str = field(default="proteomeGrabber/0.1.0")
