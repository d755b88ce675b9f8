import argparse
import logging
import time

from ordtree import settings
from ordtree.indexing import KeyNotFoundError
from ordtree.storage import ingest_csv_with_summary

logger = logging.getLogger(__name__)


def run_ingest_and_smoke_test(csv_path: str, key_type: str = settings.KEY_TYPE) -> int:
    print("--- ordtree ingest + smoke test ---")

    start_time = time.time()
    try:
        tree, summary = ingest_csv_with_summary(csv_path, settings.KEY_COLUMN, settings.VALUE_COLUMN, key_type)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Ingestion failed: %s", e)
        return 1
    end_time = time.time()

    print(f"Ingested {summary.rows_inserted:,} pairs ({summary.rows_skipped:,} skipped) in {end_time - start_time:.2f}s")
    print(f"Tree size: {len(tree):,}, height: {tree.height()}")

    keys = list(tree)
    if not keys:
        print("No pairs loaded.")
        return 0

    if len(tree) <= settings.PRINT_TRAVERSALS_UP_TO:
        print(f"  pre-order:     {tree.pre_order_traversal()}")
        print(f"  in-order:      {tree.in_order_traversal()}")
        print(f"  post-order:    {tree.post_order_traversal()}")
        print(f"  breadth-first: {tree.breadth_first_traversal()}")

    mid_key = keys[len(keys) // 2]
    print(f"Sample GET {mid_key!r}: {tree.get(mid_key)!r}")
    try:
        removed = tree.remove(mid_key)
    except KeyNotFoundError:
        logger.error("Median key %r vanished before removal", mid_key)
        return 1
    print(f"Sample REMOVE {mid_key!r}: {removed!r} (size now {len(tree):,})")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Load key/value pairs from CSV into an ordered tree and smoke test it.")
    parser.add_argument("csv_path", nargs="?", default=settings.CSV_PATH)
    parser.add_argument("--key-type", default=settings.KEY_TYPE, choices=["str", "int", "float"])
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
    return run_ingest_and_smoke_test(args.csv_path, args.key_type)


if __name__ == "__main__":
    raise SystemExit(main())
