import logging
import os
import threading
import time
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

from ordtree import settings
from ordtree.indexing import KeyNotFoundError, OrderedTree
from ordtree.storage import ingest_csv, parse_key

logger = logging.getLogger(__name__)

TRAVERSALS = {
    "pre": ("pre_order", "pre_order_traversal"),
    "in": ("in_order", "in_order_traversal"),
    "post": ("post_order", "post_order_traversal"),
    "breadth": ("breadth_first", "breadth_first_traversal"),
}


def ok(data=None, **extra):
    payload = {"ok": True}
    if data is not None:
        payload["data"] = data
    payload.update(extra)
    return jsonify(payload)

def err(message: str, status: int = 400, **extra):
    payload = {"ok": False, "error": message}
    payload.update(extra)
    return jsonify(payload), status


def warm_start(app: Flask, csv_path: Optional[str] = None) -> None:
    """Ingest the configured CSV into the app's tree at startup."""
    ext = app.extensions["ordtree"]
    state = ext["state"]

    csv_path = (csv_path or settings.CSV_PATH or "").strip()
    state["csv_path"] = csv_path

    if not csv_path:
        logger.warning("[warm_start] No CSV path provided.")
        return
    if not os.path.exists(csv_path):
        logger.warning("[warm_start] CSV not found: %s", csv_path)
        return

    t0 = time.time()
    with ext["lock"]:
        try:
            ingest_csv(csv_path, settings.KEY_COLUMN, settings.VALUE_COLUMN, ext["key_type"], tree=ext["tree"])
        except (FileNotFoundError, ValueError) as e:
            # Rows read before the failure stay in the tree.
            logger.error("[warm_start] Ingestion of %s failed: %s", csv_path, e)
            return
    state["tree_loaded"] = True
    logger.info("[warm_start] Tree loaded: %s nodes in %.2fs", f"{len(ext['tree']):,}", time.time() - t0)


def create_app(tree: Optional[OrderedTree] = None, key_type: Optional[str] = None) -> Flask:
    """Build a Flask app serving one tree. Tree access is serialized by a lock."""
    app = Flask(__name__)

    tree = tree if tree is not None else OrderedTree()
    key_type = key_type or settings.KEY_TYPE
    lock = threading.Lock()
    state: Dict[str, Any] = {"csv_path": None, "tree_loaded": False}

    app.extensions["ordtree"] = {"tree": tree, "state": state, "lock": lock, "key_type": key_type}

    def _key_or_error(raw: Any):
        try:
            return parse_key(raw, key_type), None
        except ValueError as e:
            return None, err(f"invalid key: {e}")

    @app.get("/api/status")
    def api_status():
        with lock:
            return ok({
                "csv_path": state["csv_path"],
                "tree_loaded": state["tree_loaded"],
                "key_type": key_type,
                "size": len(tree),
                "height": tree.height(),
            })

    @app.get("/api/tree/<path:key>")
    def api_tree_get(key: str):
        k, bad = _key_or_error(key)
        if bad is not None:
            return bad

        with lock:
            if k not in tree:
                return err("key not found", 404, key=k)
            value = tree.get(k)
        return ok({"key": k, "value": value})

    @app.post("/api/tree")
    def api_tree_insert():
        data = request.get_json(silent=True) or {}
        missing = [f for f in ("key", "value") if f not in data]
        if missing:
            return err(f"missing fields: {missing}")

        k, bad = _key_or_error(data["key"])
        if bad is not None:
            return bad

        with lock:
            tree.insert(k, data["value"])
            size = len(tree)
        return ok({"key": k, "value": data["value"], "size": size})

    @app.delete("/api/tree/<path:key>")
    def api_tree_remove(key: str):
        k, bad = _key_or_error(key)
        if bad is not None:
            return bad

        with lock:
            try:
                value = tree.remove(k)
            except KeyNotFoundError:
                return err("key not found", 404, key=k)
            size = len(tree)
        return ok({"key": k, "value": value, "size": size})

    @app.get("/api/traversal/<order>")
    def api_traversal(order: str):
        names = TRAVERSALS.get(order)
        if names is None:
            return err(f"unknown traversal order {order!r}; expected one of {sorted(TRAVERSALS)}")

        keys_name, rendered_name = names
        with lock:
            keys = list(getattr(tree, keys_name)())
            rendered = getattr(tree, rendered_name)()
        return ok({"order": order, "rendered": rendered, "keys": keys})

    return app


app = create_app()

if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
    warm_start(app)
    app.run(host=settings.HOST, port=settings.PORT, debug=True, use_reloader=False)
