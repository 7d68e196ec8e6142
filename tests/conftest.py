"""Shared fixtures: translation documents written to a temporary directory."""

import json
from pathlib import Path

import pytest


SAMPLE_VERSES = [
    {"book_name": "John", "chapter": 3, "verse": 16, "text": "For God so loved the world"},
    {"book_name": "Genesis", "chapter": 1, "verse": 2, "text": "And the earth was without form"},
    {"book_name": "Genesis", "chapter": 1, "verse": 1, "text": "In the beginning God created the heaven and the earth."},
]


def _write(path: Path, verses: list[dict], metadata: dict | None = None) -> Path:
    doc: dict = {}
    if metadata is not None:
        doc["metadata"] = metadata
    doc["verses"] = verses
    path.write_text(json.dumps(doc), encoding="utf-8")
    return path


@pytest.fixture
def write_bible():
    """Return a function that writes a translation document and returns its path."""
    return _write


@pytest.fixture
def bibles_dir(tmp_path):
    """A directory holding two good translations, one without verses, and junk."""
    d = tmp_path / "bibles"
    d.mkdir()

    _write(
        d / "kjv.json",
        SAMPLE_VERSES,
        {"name": "King James Version", "shortname": "KJV", "year": "1611"},
    )
    _write(
        d / "WEB.json",
        [
            {"book_name": "John", "chapter": 3, "verse": 16, "text": "For God so loved the world, that he gave"},
            {"book_name": "John", "chapter": 3, "verse": 17, "text": "For God didn't send his Son"},
        ],
    )
    # Metadata but no verses array
    (d / "bad.json").write_text(
        json.dumps({"metadata": {"name": "Broken Bible", "shortname": "BRK"}}),
        encoding="utf-8",
    )
    # Not UTF-8
    (d / "latin.json").write_bytes(b'{"verses": [{"text": "\xff\xfe"}]}')
    # Ignored: not a .json document
    (d / "notes.txt").write_text("not a bible", encoding="utf-8")

    return d
