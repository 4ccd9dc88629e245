
import os
import random
import time
from balancedtrees.checks import validate
from balancedtrees.generator import generate
from balancedtrees.storage import TreeStore

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
CSV_FILE_PATH = os.environ.get("TREES_SEED_CSV", os.path.join(BASE_DIR, 'data', 'elements.csv'))
SEED_COLUMN = os.environ.get("TREES_SEED_COLUMN", "element")
SEED_COUNT = int(os.environ.get("TREES_SEED_COUNT", "10000"))

def run_ingest_and_smoke_test():
    print("--- balancedtrees ingest + smoke test ---")
    if not os.path.exists(CSV_FILE_PATH):
        print(f"Generating {SEED_COUNT:,} elements into {CSV_FILE_PATH}")
        generate(CSV_FILE_PATH, SEED_COUNT)

    store = TreeStore()

    start_time = time.time()
    store.ingest_data(CSV_FILE_PATH, SEED_COLUMN)
    end_time = time.time()

    print(f"Ingested {len(store)} elements in {end_time - start_time:.2f}s")

    elements = list(store.tree("avl"))
    if not elements:
        print("No elements loaded.")
        return

    mid = elements[len(elements) // 2]
    for kind in ("avl", "redblack"):
        p = store.tree(kind).search(mid)
        print(f"Sample SEARCH {mid} in {kind}: depth={p.depth()} height={p.height()}")

    rng = random.Random(7)
    victims = rng.sample(elements, min(len(elements) // 2, 5000))
    start_time = time.time()
    for e in victims:
        store.delete_element(e)
    end_time = time.time()
    print(f"Deleted {len(victims)} elements in {end_time - start_time:.2f}s")

    for kind, stats in store.summary().items():
        valid, errors = validate(store.tree(kind))
        print(f"{kind}: size={stats['size']:,} height={stats['height']} valid={valid}")
        for message in errors[:10]:
            print(f"  {message}")

if __name__ == "__main__":
    run_ingest_and_smoke_test()
