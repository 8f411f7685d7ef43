"""Command-line interface for proteome-grabber."""

import argparse
import logging
import os
import sys
from typing import List, Optional

from proteome_grabber.config import DEFAULT_PATH, GrabberConfig
from proteome_grabber.core import ProteomeGrabber
from proteome_grabber.errors import ProteomeGrabberError
from proteome_grabber.models import DATABASES, Failed, NotAvailable, Success


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="proteome-grabber",
        description="Download the proteome of one or more organisms from RefSeq, GenBank, "
        "Ensembl, EnsemblGenomes or UniProt.",
    )
    parser.add_argument(
        "organisms",
        nargs="*",
        help="Scientific names, assembly accessions or NCBI Taxonomy ids "
        "(e.g., 'Homo sapiens' GCF_000001405.40 9606)",
    )
    parser.add_argument(
        "-f", "--file", type=str, default=None,
        help="File containing organisms, one per line",
    )
    parser.add_argument(
        "--db", choices=DATABASES, default="refseq",
        help="Database to retrieve from (default: refseq)",
    )
    parser.add_argument(
        "--all-assemblies", action="store_false", dest="reference",
        help="Also accept assemblies not marked as reference or representative genome",
    )
    parser.add_argument(
        "--release", type=str, default=None,
        help="Ensembl/EnsemblGenomes release (default: most recent)",
    )
    parser.add_argument(
        "--gunzip", action="store_true",
        help="Decompress the downloaded proteome",
    )
    parser.add_argument(
        "-p", "--path", type=str, default=DEFAULT_PATH,
        help=f"Output directory (default: {DEFAULT_PATH})",
    )
    parser.add_argument(
        "--index-cache", type=str, default=None,
        help="Directory for cached NCBI assembly summaries (env: PROTEOME_GRABBER_INDEX_CACHE)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable verbose/debug logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    # Collect organisms
    organisms = list(args.organisms or [])
    if args.file:
        try:
            with open(args.file) as fh:
                for line in fh:
                    stripped = line.strip()
                    if stripped and not stripped.startswith("#"):
                        organisms.append(stripped)
        except FileNotFoundError:
            print(f"Error: file not found: {args.file}", file=sys.stderr)
            sys.exit(1)

    if not organisms:
        parser.error("No organisms provided. Supply them as arguments or via --file.")

    config = GrabberConfig(
        path=args.path,
        index_cache_dir=args.index_cache or os.environ.get("PROTEOME_GRABBER_INDEX_CACHE"),
    )
    grabber = ProteomeGrabber(config)

    print(f"Retrieving {len(organisms)} proteome(s) from {args.db}...")
    try:
        outcomes = grabber.retrieve_all(
            organisms,
            db=args.db,
            reference=args.reference,
            release=args.release,
            gunzip=args.gunzip,
            path=args.path,
        )
    except ProteomeGrabberError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    for organism, outcome in zip(organisms, outcomes):
        if isinstance(outcome, Success):
            print(f"{organism}\t{outcome.local_path}")
        else:
            print(f"{organism}\t{outcome.legacy_value()}")

    success = sum(1 for o in outcomes if isinstance(o, Success))
    missing = sum(1 for o in outcomes if isinstance(o, NotAvailable))
    failed = sum(1 for o in outcomes if isinstance(o, Failed))
    print(f"Done. {success} succeeded, {missing} not available, {failed} failed.")


if __name__ == "__main__":
    main()
