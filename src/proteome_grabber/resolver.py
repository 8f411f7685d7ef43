"""Select the single assembly record that matches an organism query."""

import logging
import re
from typing import Callable, List, Sequence

from proteome_grabber.errors import OrganismNotFoundError
from proteome_grabber.models import (
    REFERENCE_CATEGORIES,
    AssemblyRecord,
    OrganismQuery,
    ResolvedTarget,
)

logger = logging.getLogger(__name__)

Predicate = Callable[[AssemblyRecord], bool]

_TAXID_RE = re.compile(r"[0-9]+")


def is_taxid(identifier: str) -> bool:
    """True if ``identifier`` is an NCBI Taxonomy id (ASCII digits only)."""
    return bool(_TAXID_RE.fullmatch(identifier.strip()))


def strip_parentheses(identifier: str) -> str:
    return identifier.replace("(", "").replace(")", "")


def normalize_label(identifier: str) -> str:
    """Turn an organism identifier into a file-name-safe label."""
    label = strip_parentheses(identifier.strip())
    return label.replace(" ", "_").replace("/", "_")


def matches_identifier(identifier: str) -> Predicate:
    """Taxid equality for numeric identifiers, else name/accession match.

    Name matching is a case-sensitive substring test, so "Homo" also
    matches "Homo sapiens neanderthalensis".
    """
    token = strip_parentheses(identifier.strip())
    if is_taxid(token):
        taxid = int(token)
        return lambda rec: rec.taxonomy_id == taxid
    return lambda rec: token in rec.organism_name or token in rec.assembly_accession


def is_latest(rec: AssemblyRecord) -> bool:
    return rec.version_status == "latest"


def has_remote_path(rec: AssemblyRecord) -> bool:
    return bool(rec.remote_base_path)


def is_reference(rec: AssemblyRecord) -> bool:
    return rec.refseq_category in REFERENCE_CATEGORIES


def all_of(*predicates: Predicate) -> Predicate:
    return lambda rec: all(p(rec) for p in predicates)


def is_genome_available(index: Sequence[AssemblyRecord], identifier: str) -> bool:
    """True if any record in ``index`` matches ``identifier`` at all."""
    match = matches_identifier(identifier)
    return any(match(rec) for rec in index)


def find_candidates(
    index: Sequence[AssemblyRecord], query: OrganismQuery
) -> List[AssemblyRecord]:
    predicates = [matches_identifier(query.identifier), is_latest, has_remote_path]
    if query.require_reference:
        predicates.append(is_reference)
    combined = all_of(*predicates)
    return [rec for rec in index if combined(rec)]


def resolve(index: Sequence[AssemblyRecord], query: OrganismQuery) -> ResolvedTarget:
    """Pick the first record in index order that satisfies ``query``.

    Raises ``OrganismNotFoundError`` when nothing matches. Several matches
    are logged as a warning; the remaining ones are ignored.
    """
    candidates = find_candidates(index, query)
    if not candidates:
        kind = "reference or representative proteome" if query.require_reference else "proteome"
        raise OrganismNotFoundError(
            f"No {kind} was found for '{query.identifier}' in {query.db}. "
            f"Have you tried reference=False? Alternatively, specify the organism "
            f"by its NCBI assembly accession or NCBI Taxonomy id."
        )

    chosen = candidates[0]
    if len(candidates) > 1:
        logger.warning(
            "More than one entry has been found for '%s'. Only the first entry '%s' (%s) "
            "is used for proteome retrieval. To download a different version, specify "
            "the organism by its NCBI assembly accession.",
            query.identifier,
            chosen.assembly_accession,
            chosen.organism_name,
        )

    return ResolvedTarget(
        record=chosen,
        label=normalize_label(query.identifier),
        db=query.db,
    )
