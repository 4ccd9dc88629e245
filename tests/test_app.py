import pytest

import app as app_module
from balancedtrees.storage import TreeStore


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(app_module, "store", TreeStore())
    app_module.app.config["TESTING"] = True
    with app_module.app.test_client() as c:
        yield c


def insert(client, kind, element):
    return client.post(f"/api/trees/{kind}/insert", json={"element": element})


def test_status(client):
    resp = client.get("/api/status")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["ok"] is True
    assert body["data"]["elements"] == 0
    assert body["data"]["trees"]["avl"] == {"size": 0, "height": -1}


def test_insert_and_search(client):
    for e in [10, 20, 30]:
        assert insert(client, "redblack", e).status_code == 200
    resp = client.get("/api/trees/redblack/search?element=20")
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["element"] == 20
    assert data["color"] == "black"
    assert data["depth"] == 0
    assert data["has_left"] and data["has_right"]

    resp = client.get("/api/trees/redblack/search?element=10")
    assert resp.get_json()["data"]["color"] == "red"


def test_avl_search_has_no_color(client):
    insert(client, "avl", 5)
    data = client.get("/api/trees/avl/search?element=5").get_json()["data"]
    assert data == {
        "element": 5,
        "height": 0,
        "depth": 0,
        "has_parent": False,
        "has_left": False,
        "has_right": False,
    }


@pytest.mark.parametrize("payload", [{}, {"element": "abc"}, {"element": True}, {"element": 1.5}])
def test_insert_rejects_bad_elements(client, payload):
    resp = client.post("/api/trees/avl/insert", json=payload)
    assert resp.status_code == 400
    assert resp.get_json()["ok"] is False


def test_string_digits_are_accepted(client):
    resp = insert(client, "avl", "-12")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["element"] == -12


def test_unknown_kind(client):
    resp = insert(client, "splay", 1)
    assert resp.status_code == 404
    assert "unknown tree kind" in resp.get_json()["error"]


def test_search_errors(client):
    assert client.get("/api/trees/avl/search").status_code == 400
    assert client.get("/api/trees/avl/search?element=3").status_code == 404


@pytest.mark.parametrize("raw", ["²", "١٢", "-³"])
def test_non_ascii_digits_are_rejected(client, raw):
    resp = client.get("/api/trees/avl/search", query_string={"element": raw})
    assert resp.status_code == 400
    assert resp.get_json()["ok"] is False
    resp = insert(client, "redblack", raw)
    assert resp.status_code == 400


def test_delete(client):
    insert(client, "avl", 3)
    resp = client.post("/api/trees/avl/delete", json={"element": 4})
    assert resp.status_code == 404
    resp = client.post("/api/trees/avl/delete", json={"element": 3})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["size"] == 0
    assert resp.get_json()["data"]["height"] == -1


def test_traverse(client):
    for e in range(1, 8):
        insert(client, "avl", e)
    resp = client.get("/api/trees/avl/traverse?order=preorder")
    assert resp.get_json()["data"]["elements"] == [4, 2, 1, 3, 6, 5, 7]
    resp = client.get("/api/trees/avl/traverse")
    assert resp.get_json()["data"]["elements"] == [1, 2, 3, 4, 5, 6, 7]
    resp = client.get("/api/trees/avl/traverse?order=breadthfirst&limit=3")
    assert resp.get_json()["data"]["elements"] == [4, 2, 6]
    assert client.get("/api/trees/avl/traverse?order=sideways").status_code == 400


def test_render_and_check(client):
    insert(client, "avl", 5)
    resp = client.get("/api/trees/avl/render")
    assert resp.get_json()["data"]["text"] == "5 0/0\n"
    resp = client.get("/api/trees/redblack/check")
    assert resp.get_json()["data"] == {"valid": True, "errors": []}


@pytest.mark.parametrize("kind", ["avl", "redblack"])
@pytest.mark.parametrize("direction", ["left", "right"])
def test_rotation_is_refused(client, kind, direction):
    resp = client.post(f"/api/trees/{kind}/rotate?direction={direction}")
    assert resp.status_code == 405
    for e in [1, 2, 3]:
        insert(client, kind, e)
    resp = client.post(f"/api/trees/{kind}/rotate?direction={direction}")
    assert resp.status_code == 405
    assert resp.get_json()["ok"] is False


def test_clear(client):
    insert(client, "redblack", 1)
    assert client.post("/api/trees/redblack/clear").status_code == 200
    data = client.get("/api/status").get_json()["data"]
    assert data["trees"]["redblack"]["size"] == 0


def test_unknown_route_is_json(client):
    resp = client.get("/api/nowhere")
    assert resp.status_code == 404
    assert resp.get_json()["ok"] is False
