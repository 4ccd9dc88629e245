import os
import time
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from balancedtrees import RotationNotSupportedError
from balancedtrees.checks import validate
from balancedtrees.red_black import RedBlackTree
from balancedtrees.storage import TREE_KINDS, TreeStore

app = Flask(__name__)

store = TreeStore()

STATE: Dict[str, Any] = {"seed_path": None, "seeded": False}

DEFAULT_SEED_PATH = os.environ.get("TREES_SEED_CSV", os.path.join(os.path.dirname(__file__), "data", "elements.csv"))
SEED_COLUMN = os.environ.get("TREES_SEED_COLUMN", "element")

TRAVERSALS = ("preorder", "inorder", "postorder", "breadthfirst")


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

def warm_start():
    """Ingest the seed CSV at startup, if there is one."""
    seed_path = (DEFAULT_SEED_PATH or "").strip()
    STATE["seed_path"] = seed_path

    if not seed_path:
        print("[warm_start] No seed CSV configured.")
        return
    if not os.path.exists(seed_path):
        print(f"[warm_start] Seed CSV not found: {seed_path}")
        return

    print(f"[warm_start] Ingesting CSV: {seed_path}")
    t0 = time.time()
    store.ingest_data(seed_path, SEED_COLUMN)
    t1 = time.time()
    STATE["seeded"] = True
    print(f"[warm_start] Trees loaded: {len(store):,} elements in {t1 - t0:.2f}s")

def parse_element(raw: Any) -> Optional[int]:
    """
    Elements are integers. Accepts an int, or a string of optional sign and
    ASCII digits. Returns None for anything else (bools included).
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    s = str(raw if raw is not None else "").strip()
    digits = s[1:] if s[:1] in "+-" else s
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(s)

def vertex_info(tree, p) -> Dict[str, Any]:
    info = {
        "element": p.get_element(),
        "height": p.height(),
        "depth": p.depth(),
        "has_parent": p.has_parent(),
        "has_left": p.has_left(),
        "has_right": p.has_right(),
    }
    if isinstance(tree, RedBlackTree):
        info["color"] = tree.color(p).value
    return info

def element_from_body():
    data = request.get_json(silent=True) or {}
    if "element" not in data:
        return None, err("JSON body with an integer 'element' is required")
    element = parse_element(data["element"])
    if element is None:
        return None, err("element must be an integer")
    return element, None


def require_tree(kind: str):
    if kind not in TREE_KINDS:
        return None, err(f"unknown tree kind '{kind}'; expected one of {list(TREE_KINDS)}", 404)
    return store.tree(kind), None


@app.errorhandler(RotationNotSupportedError)
def handle_rotation(e):
    return err(str(e), 405)

@app.errorhandler(Exception)
def handle_unexpected(e):
    if isinstance(e, HTTPException):
        return err(e.description, e.code)
    app.logger.exception("unhandled error while serving %s", request.path)
    return err("internal error", 500)


@app.get("/api/status")
def api_status():
    return ok({
        "seed_path": STATE["seed_path"],
        "seeded": STATE["seeded"],
        "elements": len(store),
        "inserted": store.inserted,
        "deleted": store.deleted,
        "trees": store.summary(),
    })


@app.post("/api/trees/<kind>/insert")
def api_insert(kind: str):
    tree, bad = require_tree(kind)
    if bad is not None:
        return bad
    element, bad = element_from_body()
    if bad is not None:
        return bad

    tree.insert(element)
    return ok({"element": element, "size": len(tree), "height": tree.height()})

@app.post("/api/trees/<kind>/delete")
def api_delete(kind: str):
    tree, bad = require_tree(kind)
    if bad is not None:
        return bad
    element, bad = element_from_body()
    if bad is not None:
        return bad

    if element not in tree:
        return err("element not found", 404)
    tree.delete(element)
    return ok({"deleted": True, "element": element, "size": len(tree), "height": tree.height()})

@app.get("/api/trees/<kind>/search")
def api_search(kind: str):
    tree, bad = require_tree(kind)
    if bad is not None:
        return bad
    element = parse_element(request.args.get("element"))
    if element is None:
        return err("element is required: /api/trees/<kind>/search?element=...")

    p = tree.search(element)
    if p is None:
        return err("element not found", 404)
    return ok(vertex_info(tree, p))

@app.get("/api/trees/<kind>/traverse")
def api_traverse(kind: str):
    tree, bad = require_tree(kind)
    if bad is not None:
        return bad
    order = (request.args.get("order") or "inorder").strip()
    if order not in TRAVERSALS:
        return err(f"order must be one of {list(TRAVERSALS)}")

    limit = request.args.get("limit", "200")
    try:
        limit = max(1, min(10000, int(limit)))
    except ValueError:
        limit = 200

    elements: List[Any] = []
    for p in getattr(tree, order)():
        elements.append(p.get_element())
        if len(elements) >= limit:
            break
    return ok({"order": order, "count_returned": len(elements), "elements": elements})

@app.get("/api/trees/<kind>/render")
def api_render(kind: str):
    tree, bad = require_tree(kind)
    if bad is not None:
        return bad
    return ok({"text": str(tree), "size": len(tree), "height": tree.height()})

@app.get("/api/trees/<kind>/check")
def api_check(kind: str):
    tree, bad = require_tree(kind)
    if bad is not None:
        return bad
    valid, errors = validate(tree)
    return ok({"valid": valid, "errors": errors[:50]})

@app.post("/api/trees/<kind>/rotate")
def api_rotate(kind: str):
    tree, bad = require_tree(kind)
    if bad is not None:
        return bad
    direction = (request.args.get("direction") or "left").strip()
    if direction not in ("left", "right"):
        return err("direction must be 'left' or 'right'")

    # both tree kinds refuse user rotations, empty or not
    target = None if tree.is_empty() else tree.root()
    if direction == "left":
        tree.rotate_left(target)
    else:
        tree.rotate_right(target)
    return ok({"rotated": direction})

@app.post("/api/trees/<kind>/clear")
def api_clear(kind: str):
    tree, bad = require_tree(kind)
    if bad is not None:
        return bad
    tree.clear()
    return ok({"cleared": True})


if __name__ == "__main__":
    warm_start()
    app.run(host="127.0.0.1", port=5000, debug=True, use_reloader=False)
