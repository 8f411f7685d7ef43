import dataclasses

import pytest

from proteome_grabber.models import (
    NOT_AVAILABLE,
    AssemblyRecord,
    Failed,
    MetadataRecord,
    NotAvailable,
    ResolvedTarget,
    Success,
)


def test_legacy_values():
    assert Success(local_path="out/x.faa.gz").legacy_value() == "out/x.faa.gz"
    assert NotAvailable(reason="missing").legacy_value() == NOT_AVAILABLE == "Not available"
    assert Failed(error="boom").legacy_value() is False


def test_assembly_record_is_immutable():
    rec = AssemblyRecord("Homo sapiens", "GCF_1", 9606)
    with pytest.raises(dataclasses.FrozenInstanceError):
        rec.taxonomy_id = 1


def test_resolved_target_names():
    target = ResolvedTarget(AssemblyRecord("Homo sapiens", "GCF_1", 9606), "Homo_sapiens", "genbank")
    assert target.file_stem == "Homo_sapiens_protein_genbank"
    assert target.archive_name == "Homo_sapiens_protein_genbank.faa.gz"


def test_metadata_record_to_dict_order():
    rec = MetadataRecord(columns=("b", "a", "c"), values={"a": "1", "b": 2})
    assert list(rec.to_dict().items()) == [("b", "2"), ("a", "1"), ("c", "")]
