"""
Synthetic dataset generator.

Writes a CSV with a single ``element`` column of pseudo-random integers, the
format ``TreeStore.ingest_data`` reads.
"""

import csv
import os
import random


def generate(path: str, count: int = 10000, low: int = 0, high: int = 1_000_000, seed: int = 1337) -> str:
    if count < 0:
        raise ValueError("count must be non-negative")
    if low > high:
        raise ValueError("low must not exceed high")

    rng = random.Random(seed)
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)

    with open(path, mode='w', newline='', encoding='utf-8') as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(["element"])
        for _ in range(count):
            writer.writerow([rng.randint(low, high)])
    return path
