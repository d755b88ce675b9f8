import csv
import logging
import math
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from ordtree.indexing import OrderedTree

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 100000

KEY_PARSERS: Dict[str, Callable[[str], Any]] = {
    "str": str,
    "int": int,
    "float": float,
}


@dataclass
class IngestSummary:
    rows_read: int = 0
    rows_inserted: int = 0
    rows_skipped: int = 0


# ------------------ Parsing ------------------
def parse_key(raw: Any, key_type: str = "str") -> Any:
    """Convert a raw cell (string or number) to a key of the given type."""
    parser = KEY_PARSERS.get(key_type)
    if parser is None:
        raise ValueError(f"Unsupported key type {key_type!r}; expected one of {sorted(KEY_PARSERS)}")
    if raw is None:
        raise ValueError("Missing key")
    raw_str = str(raw).strip()
    if not raw_str:
        raise ValueError("Empty key")
    key = parser(raw_str)
    if isinstance(key, float) and not math.isfinite(key):
        raise ValueError(f"Non-finite key {raw_str!r}")
    return key


# ------------------ Data ingestion ------------------
def ingest_csv_with_summary(
    file_path: str,
    key_column: str = "key",
    value_column: str = "value",
    key_type: str = "str",
    tree: Optional[OrderedTree] = None,
) -> Tuple[OrderedTree, IngestSummary]:
    """
    Reads key/value rows from a CSV file and inserts them into a tree in file
    order. Rows whose key cannot be parsed are skipped.
    """
    if key_type not in KEY_PARSERS:
        raise ValueError(f"Unsupported key type {key_type!r}; expected one of {sorted(KEY_PARSERS)}")
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"CSV file not found: {file_path}")

    if tree is None:
        tree = OrderedTree()
    summary = IngestSummary()

    logger.info("Ingesting data from: %s", file_path)
    with open(file_path, mode='r', newline='', encoding='utf-8') as csvfile:
        reader = csv.DictReader(csvfile)

        fieldnames = reader.fieldnames or []
        if key_column not in fieldnames:
            logger.warning("key column %r not found; available columns: %s", key_column, fieldnames)

        for row in reader:
            summary.rows_read += 1
            try:
                key = parse_key(row.get(key_column), key_type)
            except ValueError as e:
                summary.rows_skipped += 1
                logger.debug("Skipping row %d: %s", summary.rows_read, e)
                continue

            tree.insert(key, row.get(value_column))
            summary.rows_inserted += 1

            if summary.rows_inserted % PROGRESS_EVERY == 0:
                logger.info("Progress: %s records ingested...", f"{summary.rows_inserted:,}")

    logger.info(
        "Ingestion summary: %s rows read, %s inserted, %s skipped, tree size %s, height %s",
        f"{summary.rows_read:,}", f"{summary.rows_inserted:,}", f"{summary.rows_skipped:,}",
        f"{len(tree):,}", tree.height(),
    )
    return tree, summary


def ingest_csv(
    file_path: str,
    key_column: str = "key",
    value_column: str = "value",
    key_type: str = "str",
    tree: Optional[OrderedTree] = None,
) -> OrderedTree:
    """Same as ingest_csv_with_summary, returning only the tree."""
    tree, _ = ingest_csv_with_summary(file_path, key_column, value_column, key_type, tree)
    return tree
