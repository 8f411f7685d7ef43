"""Shared fixtures for proteome-grabber tests."""

import gzip
import hashlib

import pytest
import requests

from proteome_grabber.config import GrabberConfig
from proteome_grabber.models import AssemblyRecord
from proteome_grabber.rate_limiter import RateLimiter
from proteome_grabber.rest import RestClient
from proteome_grabber.transfer import VerifiedFetcher

NCBI_BASE = "https://ftp.ncbi.nlm.nih.gov/genomes"
HUMAN_FTP = f"{NCBI_BASE}/all/GCF/000/001/405/GCF_000001405.40_GRCh38.p14"
ARCHIVE_URL = f"{HUMAN_FTP}/GCF_000001405.40_GRCh38.p14_protein.faa.gz"
MANIFEST_URL = f"{HUMAN_FTP}/md5checksums.txt"
SUMMARY_URL = f"{NCBI_BASE}/refseq/vertebrate_mammalian/assembly_summary.txt"

ENSEMBL_REST = "https://rest.ensembl.org"
UNIPROT_REST = "https://rest.uniprot.org"


@pytest.fixture
def fast_limiter():
    """Rate limiter that never blocks (high rate)."""
    return RateLimiter(10_000)


@pytest.fixture
def session():
    return requests.Session()


@pytest.fixture
def rest(session, fast_limiter):
    return RestClient(session, fast_limiter)


@pytest.fixture
def downloader(session):
    return VerifiedFetcher(session, timeout=10)


@pytest.fixture
def config(tmp_path):
    return GrabberConfig(
        path=str(tmp_path / "proteomes"),
        ncbi_kingdoms=("vertebrate_mammalian",),
        ensemblgenomes_divisions=("EnsemblPlants",),
    )


# --- Payloads ---


@pytest.fixture
def proteome_fasta():
    return b">NP_000005.3 alpha-2-macroglobulin [Homo sapiens]\nMGKNKLLHPSLVLLLLVLLPTDA\n"


@pytest.fixture
def proteome_gz(proteome_fasta):
    return gzip.compress(proteome_fasta)


@pytest.fixture
def md5_manifest(proteome_gz):
    digest = hashlib.md5(proteome_gz).hexdigest()
    return (
        "0123456789abcdef0123456789abcdef  ./GCF_000001405.40_GRCh38.p14_genomic.fna.gz\n"
        f"{digest}  ./GCF_000001405.40_GRCh38.p14_protein.faa.gz\n"
        "fedcba9876543210fedcba9876543210  ./README.txt\n"
    )


@pytest.fixture
def assembly_summary_text():
    """Trimmed NCBI assembly_summary.txt with three human rows and one mouse row."""
    header = [
        "assembly_accession", "bioproject", "biosample", "wgs_master", "refseq_category",
        "taxid", "species_taxid", "organism_name", "infraspecific_name", "isolate",
        "version_status", "assembly_level", "release_type", "genome_rep", "seq_rel_date",
        "asm_name", "submitter", "gbrs_paired_asm", "paired_asm_comparison", "ftp_path",
    ]
    rows = [
        [
            "GCF_000001405.40", "PRJNA168", "na", "", "reference genome", "9606", "9606",
            "Homo sapiens", "", "", "latest", "Chromosome", "Patch", "Full", "2022/02/03",
            "GRCh38.p14", "Genome Reference Consortium", "GCA_000001405.29", "different",
            HUMAN_FTP,
        ],
        [
            "GCF_000001405.39", "PRJNA168", "na", "", "na", "9606", "9606",
            "Homo sapiens", "", "", "replaced", "Chromosome", "Patch", "Full", "2021/03/15",
            "GRCh38.p13", "Genome Reference Consortium", "GCA_000001405.28", "identical",
            f"{NCBI_BASE}/all/GCF/000/001/405/GCF_000001405.39_GRCh38.p13",
        ],
        [
            "GCF_009914755.1", "PRJNA807723", "SAMN03255769", "", "na", "9606", "9606",
            "Homo sapiens", "", "", "latest", "Complete Genome", "Major", "Full", "2022/01/24",
            "T2T-CHM13v2.0", "T2T Consortium", "GCA_009914755.4", "identical",
            f"{NCBI_BASE}/all/GCF/009/914/755/GCF_009914755.1_T2T-CHM13v2.0",
        ],
        [
            "GCF_000001635.27", "PRJNA169", "na", "", "reference genome", "10090", "10090",
            "Mus musculus", "strain=C57BL/6J", "", "latest", "Chromosome", "Major", "Full",
            "2020/06/24", "GRCm39", "Genome Reference Consortium", "GCA_000001635.9",
            "identical", "na",
        ],
    ]
    lines = [
        "#   See ftp://ftp.ncbi.nlm.nih.gov/genomes/README_assembly_summary.txt for a description of the columns",
        "# " + "\t".join(header),
    ]
    lines += ["\t".join(r) for r in rows]
    return "\n".join(lines) + "\n"


@pytest.fixture
def human_record():
    return AssemblyRecord(
        organism_name="Homo sapiens",
        assembly_accession="GCF_000001405.40",
        taxonomy_id=9606,
        refseq_category="reference genome",
        version_status="latest",
        remote_base_path=HUMAN_FTP,
        bioproject="PRJNA168",
        biosample="na",
        release_type="Patch",
        genome_representation="Full",
        sequence_release_date="2022/02/03",
        submitter="Genome Reference Consortium",
    )


@pytest.fixture
def ensembl_species_payload():
    return {
        "species": [
            {
                "name": "homo_sapiens", "display_name": "Human", "taxon_id": "9606",
                "accession": "GCA_000001405.29", "assembly": "GRCh38", "release": 112,
                "division": "EnsemblVertebrates", "common_name": "human",
            },
            {
                "name": "mus_musculus", "display_name": "Mouse", "taxon_id": "10090",
                "accession": "GCA_000001635.9", "assembly": "GRCm39", "release": 112,
                "division": "EnsemblVertebrates", "common_name": "house mouse",
            },
            {
                "name": "mus_musculus_129s1svimj", "display_name": "Mouse 129S1/SvImJ",
                "taxon_id": "10090", "accession": "GCA_001624185.1",
                "assembly": "129S1_SvImJ_v1", "release": 112,
                "division": "EnsemblVertebrates", "common_name": "house mouse",
            },
        ]
    }


@pytest.fixture
def ensembl_assembly_info():
    return {
        "assembly_name": "GRCh38.p14",
        "assembly_date": "2013-12",
        "assembly_accession": "GCA_000001405.29",
        "genebuild_last_geneset_update": "2023-03",
    }
