
import csv
import os
from typing import Any, Dict, List

from .avl import AVLTree
from .ordered import OrderedBinaryTree
from .red_black import RedBlackTree

TREE_KINDS = ("avl", "redblack")


class TreeStore:
    """Keeps the same multiset of elements in an AVL tree and a red-black tree."""

    # ------------------ Initialization ------------------

    def __init__(self):
        """Initializes the store with two empty trees."""
        self.trees: Dict[str, OrderedBinaryTree] = {
            "avl": AVLTree(),
            "redblack": RedBlackTree(),
        }
        self.inserted: int = 0
        self.deleted: int = 0

    # ------------------ Accessors ------------------
    def __len__(self) -> int:
        """Return the number of elements held (the same in every tree)."""
        return len(self.trees["avl"])

    def tree(self, kind: str) -> OrderedBinaryTree:
        """Return the tree registered under kind ('avl' or 'redblack')."""
        if kind not in self.trees:
            raise KeyError(f"unknown tree kind {kind!r}; expected one of {list(TREE_KINDS)}")
        return self.trees[kind]

    def contains(self, element: Any) -> bool:
        return element in self.trees["avl"]

    def summary(self) -> Dict[str, Dict[str, int]]:
        return {
            kind: {"size": len(t), "height": t.height()}
            for kind, t in self.trees.items()
        }

    # ------------------ Core mutations ------------------
    def insert_element(self, element: Any) -> None:
        """Insert element into every tree."""
        if element is None:
            raise ValueError("element must not be None")
        for t in self.trees.values():
            t.insert(element)
        self.inserted += 1

    def delete_element(self, element: Any) -> bool:
        """Delete one occurrence of element from every tree; False if it was absent."""
        if not self.contains(element):
            return False
        for t in self.trees.values():
            t.delete(element)
        self.deleted += 1
        return True

    def clear(self) -> None:
        for t in self.trees.values():
            t.clear()

    # ------------------ Data ingestion ------------------
    def _parse_element(self, raw: Any) -> int:
        """Convert a CSV cell to an integer element."""
        if raw is None:
            raise ValueError("Missing element")
        raw_str = str(raw).strip()
        try:
            return int(raw_str)
        except ValueError:
            return int(float(raw_str))

    def ingest_data(self, file_path: str, column_name: str = 'element') -> int:
        """
        Reads integers from one column of a CSV file and inserts them into
        every tree. Rows that cannot be parsed are skipped. Returns the number
        of elements ingested.
        """
        if not os.path.exists(file_path):
            print(f"Error: File not found at {file_path}.")
            return 0

        print(f"Ingesting data from: {file_path}")
        total = 0
        skipped: List[Any] = []

        with open(file_path, mode='r', newline='', encoding='utf-8') as csvfile:
            reader = csv.DictReader(csvfile)

            fieldnames = reader.fieldnames or []
            if column_name not in fieldnames:
                print(f"Warning: column '{column_name}' not found; available columns: {fieldnames}")
                return 0

            for row in reader:
                try:
                    element = self._parse_element(row.get(column_name))
                except (ValueError, OverflowError):
                    skipped.append(row.get(column_name))
                    continue

                self.insert_element(element)
                total += 1

                if total % 100000 == 0:
                    print(f"Progress: {total:,} elements ingested...")

        print("--- Ingestion Summary ---")
        print(f"Total elements ingested: {total:,}")
        print(f"Rows skipped: {len(skipped):,}")
        for kind, stats in self.summary().items():
            print(f"{kind} tree: size={stats['size']:,} height={stats['height']}")
        return total
