from ordtree.indexing import EMPTY_MARKER, KeyNotFoundError, OrderedTree
from ordtree.storage import IngestSummary, ingest_csv, ingest_csv_with_summary, parse_key

__all__ = [
    "EMPTY_MARKER",
    "IngestSummary",
    "KeyNotFoundError",
    "OrderedTree",
    "ingest_csv",
    "ingest_csv_with_summary",
    "parse_key",
]
