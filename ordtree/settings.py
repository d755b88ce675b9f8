import os

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

CSV_PATH = os.environ.get("ORDTREE_CSV_PATH", os.path.join(BASE_DIR, "data", "pairs.csv"))
KEY_TYPE = os.environ.get("ORDTREE_KEY_TYPE", "str")
KEY_COLUMN = os.environ.get("ORDTREE_KEY_COLUMN", "key")
VALUE_COLUMN = os.environ.get("ORDTREE_VALUE_COLUMN", "value")

LOG_LEVEL = os.environ.get("ORDTREE_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

HOST = os.environ.get("ORDTREE_HOST", "127.0.0.1")
PORT = int(os.environ.get("ORDTREE_PORT", "5000"))

# Trees at or below this size get their traversals printed by the CLI.
PRINT_TRAVERSALS_UP_TO = 50
