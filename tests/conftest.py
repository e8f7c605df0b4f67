# tests/conftest.py
"""Shared fixtures: dictionary trees and word indexes on disk."""

import sqlite3

import pytest

from dictfleet.core.autocomplete import INDEX_FILE, INDEX_TABLE


WORDS = [
    "cat", "Category", "concatenate", "dog", "scatter", "bobcat",
    "catalog", "doghouse", "CATERPILLAR", "bird", "100%", "snake_case",
]


def touch(path, content=b""):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


@pytest.fixture
def two_tier(tmp_path):
    """root/{oxford,collins}/*.mdx plus noise."""
    touch(tmp_path / "oxford" / "oaldpe.mdx")
    touch(tmp_path / "oxford" / "oaldpe.mdd")
    touch(tmp_path / "oxford" / "oaldpe.1.mdd")
    touch(tmp_path / "oxford" / "oaldpe.css", b"body { color: black; }")
    touch(tmp_path / "collins" / "collins.mdx")
    touch(tmp_path / "notes" / "readme.txt")
    touch(tmp_path / "stray.mdx")
    return tmp_path


@pytest.fixture
def one_tier(tmp_path):
    touch(tmp_path / "oaldpe.mdx")
    touch(tmp_path / "oaldpe.mdd")
    return tmp_path


def build_index(path, words):
    conn = sqlite3.connect(path)
    conn.execute(f"CREATE TABLE {INDEX_TABLE} (word TEXT)")
    conn.executemany(f"INSERT INTO {INDEX_TABLE} (word) VALUES (?)", [(w,) for w in words])
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def word_index(two_tier):
    """two_tier root with an ecdict_wfd.db next to the dictionaries."""
    build_index(two_tier / INDEX_FILE, WORDS + [f"cat{i:03d}" for i in range(80)])
    return two_tier
