import csv

from proteome_grabber.metadata import (
    doc_file_name,
    ensembl_record,
    ncbi_record,
    render_report,
    write_doc_tsv,
    write_sidecars,
)
from proteome_grabber.models import ENSEMBL_DOC_COLUMNS, NCBI_DOC_COLUMNS, ResolvedTarget


def _target(record):
    return ResolvedTarget(record=record, label="Homo_sapiens", db="refseq")


def test_ncbi_record_columns(human_record):
    rec = ncbi_record(_target(human_record), "https://x/a.faa.gz", "out")
    d = rec.to_dict()
    assert tuple(d.keys()) == NCBI_DOC_COLUMNS
    assert d["file_name"] == "Homo_sapiens_protein_refseq.faa.gz"
    assert d["genome_rep"] == "Full"
    assert d["download_date"]


def test_write_doc_tsv(tmp_path, human_record):
    rec = ncbi_record(_target(human_record), "https://x/a.faa.gz", str(tmp_path))
    path = write_doc_tsv(rec, str(tmp_path / "doc.tsv"))

    with open(path, newline="") as fh:
        rows = list(csv.DictReader(fh, delimiter="\t"))
    assert len(rows) == 1
    assert rows[0]["assembly_accession"] == "GCF_000001405.40"
    assert rows[0]["database"] == "refseq"


def test_ensembl_record_fills_missing_with_none():
    rec = ensembl_record("x.fa.gz", "https://x/x.fa.gz", "Homo_sapiens", "ensembl", {"assembly_name": "GRCh38"})
    d = rec.to_dict()
    assert tuple(d.keys()) == ENSEMBL_DOC_COLUMNS
    assert d["assembly_name"] == "GRCh38"
    assert d["assembly_date"] == "none"
    assert d["genebuild_initial_release_date"] == "none"


def test_render_report():
    rec = ensembl_record("x.fa.gz", "https://x/x.fa.gz", "Homo_sapiens", "ensembl", {})
    lines = render_report(rec).splitlines()
    assert lines[0] == "File Name: x.fa.gz"
    assert lines[1] == "Download Path: https://x/x.fa.gz"
    assert lines[2] == "Organism Name: Homo_sapiens"
    assert lines[3] == "Database: ensembl"
    assert lines[4].startswith("Download_Date: ")
    assert len(lines) == len(ENSEMBL_DOC_COLUMNS)


def test_write_sidecars(tmp_path):
    rec = ensembl_record("x.fa.gz", "https://x/x.fa.gz", "Homo_sapiens", "ensembl", {})
    write_sidecars(rec, str(tmp_path), "Homo_sapiens", "ensembl", with_report=True)
    assert sorted(p.name for p in tmp_path.iterdir()) == [
        "doc_Homo_sapiens_db_ensembl.tsv",
        "doc_Homo_sapiens_db_ensembl.txt",
    ]


def test_doc_file_name():
    assert doc_file_name("Homo_sapiens", "refseq") == "doc_Homo_sapiens_db_refseq.tsv"
    assert doc_file_name("Homo_sapiens", "ensembl", "txt") == "doc_Homo_sapiens_db_ensembl.txt"
