import pytest

from ordtree.app import create_app, warm_start
from ordtree.indexing import OrderedTree

LETTERS = [('F', 1), ('B', 2), ('G', 3), ('A', 4), ('D', 5), ('I', 6), ('C', 7), ('E', 8), ('H', 9)]


@pytest.fixture
def tree():
    return OrderedTree.from_sequence(LETTERS)


@pytest.fixture
def client(tree):
    app = create_app(tree=tree, key_type="str")
    app.config["TESTING"] = True
    return app.test_client()


def test_status(client):
    body = client.get("/api/status").get_json()
    assert body["ok"] is True
    assert body["data"]["size"] == 9
    assert body["data"]["height"] == 4
    assert body["data"]["tree_loaded"] is False


def test_get_existing_and_missing(client):
    body = client.get("/api/tree/D").get_json()
    assert body == {"ok": True, "data": {"key": "D", "value": 5}}

    resp = client.get("/api/tree/Z")
    assert resp.status_code == 404
    assert resp.get_json()["ok"] is False


def test_insert(client, tree):
    resp = client.post("/api/tree", json={"key": "J", "value": 10})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["size"] == 10
    assert tree.get("J") == 10


def test_insert_requires_fields(client):
    resp = client.post("/api/tree", json={"key": "J"})
    assert resp.status_code == 400
    assert "missing fields" in resp.get_json()["error"]


def test_remove_two_child_root(client, tree):
    body = client.delete("/api/tree/F").get_json()
    assert body["data"] == {"key": "F", "value": 1, "size": 8}
    assert tree.breadth_first_traversal() == "[E, B, G, A, D, I, C, H]"

    resp = client.delete("/api/tree/F")
    assert resp.status_code == 404


@pytest.mark.parametrize("order,rendered", [
    ("pre", "[F, B, A, D, C, E, G, I, H]"),
    ("in", "[A, B, C, D, E, F, G, H, I]"),
    ("post", "[A, C, E, D, B, H, I, G, F]"),
    ("breadth", "[F, B, G, A, D, I, C, E, H]"),
])
def test_traversals(client, order, rendered):
    data = client.get(f"/api/traversal/{order}").get_json()["data"]
    assert data["rendered"] == rendered
    assert ", ".join(data["keys"]) == rendered[1:-1]


def test_unknown_traversal(client):
    resp = client.get("/api/traversal/sideways")
    assert resp.status_code == 400


def test_int_keys_are_parsed():
    app = create_app(tree=OrderedTree(), key_type="int")
    client = app.test_client()
    client.post("/api/tree", json={"key": "10", "value": "ten"})
    client.post("/api/tree", json={"key": 2, "value": "two"})
    data = client.get("/api/traversal/in").get_json()["data"]
    assert data["keys"] == [2, 10]

    resp = client.get("/api/tree/abc")
    assert resp.status_code == 400


def test_warm_start_loads_csv(tmp_path):
    path = tmp_path / "pairs.csv"
    path.write_text("key,value\nm,13\nc,3\nx,24\n", encoding="utf-8")
    app = create_app(tree=OrderedTree(), key_type="str")
    warm_start(app, str(path))

    body = app.test_client().get("/api/status").get_json()["data"]
    assert body["tree_loaded"] is True
    assert body["size"] == 3
    assert body["csv_path"] == str(path)


def test_warm_start_missing_csv(tmp_path):
    app = create_app(tree=OrderedTree())
    warm_start(app, str(tmp_path / "absent.csv"))
    body = app.test_client().get("/api/status").get_json()["data"]
    assert body["tree_loaded"] is False
    assert body["size"] == 0


def test_warm_start_survives_unsupported_key_type(tmp_path, caplog):
    path = tmp_path / "pairs.csv"
    path.write_text("key,value\nm,13\n", encoding="utf-8")
    app = create_app(tree=OrderedTree(), key_type="date")
    warm_start(app, str(path))

    assert "Ingestion of" in caplog.text
    assert app.extensions["ordtree"]["state"]["tree_loaded"] is False
    assert len(app.extensions["ordtree"]["tree"]) == 0


def test_warm_start_survives_undecodable_csv(tmp_path):
    path = tmp_path / "pairs.csv"
    path.write_bytes(b"\xff\xfe,1\n")
    app = create_app(tree=OrderedTree(), key_type="str")
    warm_start(app, str(path))

    body = app.test_client().get("/api/status").get_json()["data"]
    assert body["tree_loaded"] is False


@pytest.mark.parametrize("raw", ["nan", "inf", "-inf"])
def test_non_finite_float_keys_are_rejected(raw):
    tree = OrderedTree()
    client = create_app(tree=tree, key_type="float").test_client()
    resp = client.post("/api/tree", json={"key": raw, "value": 1})
    assert resp.status_code == 400
    assert len(tree) == 0

    resp = client.delete(f"/api/tree/{raw}")
    assert resp.status_code == 400


def test_keys_containing_slashes(client, tree):
    resp = client.post("/api/tree", json={"key": "a/b", "value": "slashed"})
    assert resp.status_code == 200

    body = client.get("/api/tree/a/b").get_json()
    assert body["data"] == {"key": "a/b", "value": "slashed"}

    body = client.delete("/api/tree/a/b").get_json()
    assert body["data"]["value"] == "slashed"
    assert "a/b" not in tree
