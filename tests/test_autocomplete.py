# tests/test_autocomplete.py
"""Tests for the lazily opened word index."""

import asyncio
import sqlite3

import pytest

from dictfleet.core.autocomplete import AutocompleteIndex, IndexQueryError, MAX_SUGGESTIONS
from tests.conftest import build_index


def run(coro):
    return asyncio.run(coro)


def test_query_substring_case_insensitive(word_index):
    index = AutocompleteIndex(word_index)

    words = run(index.query("cat"))

    assert words
    assert len(words) <= MAX_SUGGESTIONS
    assert all("cat" in w.lower() for w in words)
    assert "dog" not in words


def test_query_capped_at_50(word_index):
    index = AutocompleteIndex(word_index)
    assert len(run(index.query("cat"))) == 50


def test_query_finds_mixed_case_words(word_index):
    index = AutocompleteIndex(word_index)

    words = run(index.query("caterp"))

    assert words == ["CATERPILLAR"]


def test_query_wildcards_are_literal(word_index):
    index = AutocompleteIndex(word_index)

    assert run(index.query("%")) == ["100%"]
    assert run(index.query("e_c")) == ["snake_case"]


def test_query_no_match(word_index):
    index = AutocompleteIndex(word_index)
    assert run(index.query("zebra")) == []


def test_empty_term_does_not_open(tmp_path):
    index = AutocompleteIndex(tmp_path)

    assert run(index.query("")) == []
    assert run(index.query(None)) == []
    assert not index.is_open


def test_opened_lazily_and_once(word_index):
    index = AutocompleteIndex(word_index)
    assert not index.is_open

    async def scenario():
        await asyncio.gather(*(index.query("dog") for _ in range(10)))
        first = index._conn
        await index.query("bird")
        return first

    first = run(scenario())
    assert index.is_open
    assert index._conn is first


def test_missing_index_file(tmp_path):
    index = AutocompleteIndex(tmp_path)

    with pytest.raises(IndexQueryError):
        run(index.query("cat"))
    assert not index.is_open


def test_missing_table(tmp_path):
    sqlite3.connect(tmp_path / "ecdict_wfd.db").close()
    index = AutocompleteIndex(tmp_path)

    with pytest.raises(IndexQueryError):
        run(index.query("cat"))


def test_index_is_read_only(word_index):
    index = AutocompleteIndex(word_index)

    async def scenario():
        conn = await index.connection()
        return conn

    conn = run(scenario())
    with pytest.raises(sqlite3.OperationalError):
        conn.execute("INSERT INTO ecdict_wfd (word) VALUES ('nope')")
    conn.close()


def test_custom_index_file(tmp_path):
    build_index(tmp_path / "words.db", ["apple", "pineapple"])
    index = AutocompleteIndex(tmp_path, index_file="words.db")

    assert run(index.query("apple")) == ["apple", "pineapple"]


def test_close(word_index):
    index = AutocompleteIndex(word_index)

    async def scenario():
        await index.query("cat")
        await index.close()
        await index.close()

    run(scenario())
    assert not index.is_open


def test_close_never_opened(tmp_path):
    index = AutocompleteIndex(tmp_path)
    run(index.close())
    assert not index.is_open


def test_statements_are_serialized(word_index):
    index = AutocompleteIndex(word_index)

    async def scenario():
        await index.query("dog")
        blocked = asyncio.ensure_future(index.query("bird"))
        with index._conn_lock:
            done, _ = await asyncio.wait([blocked], timeout=0.2)
            assert not done
        assert await blocked == ["bird"]
        results = await asyncio.gather(*(index.query("dog") for _ in range(20)))
        await index.close()
        return results

    results = run(scenario())
    assert all(r == ["dog", "doghouse"] for r in results)
