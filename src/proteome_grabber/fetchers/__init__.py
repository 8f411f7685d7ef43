"""Fetcher registry — add new fetcher classes here."""

from proteome_grabber.fetchers.ncbi import NCBIFetcher
from proteome_grabber.fetchers.ensembl import EnsemblFetcher
from proteome_grabber.fetchers.uniprot import UniProtFetcher

FETCHER_CLASSES = [
    NCBIFetcher,
    EnsemblFetcher,
    UniProtFetcher,
]
