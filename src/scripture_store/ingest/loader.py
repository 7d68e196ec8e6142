"""
Load translation documents into indexed Translations.

Document shape:
{
  "metadata": { "name": "...", "shortname": "KJV", "year": "1611" },
  "verses": [
    { "book_name": "Genesis", "chapter": 1, "verse": 1, "text": "..." },
    ...
  ]
}

The document is scanned with the field extractor rather than decoded,
so one damaged verse object only costs that verse.
"""

import logging
import time
from pathlib import Path

from scripture_store.errors import TranslationLoadError
from scripture_store.ingest.extractor import (
    extract_int,
    extract_string,
    find_matching_close,
    value_start,
)
from scripture_store.models import TranslationMetadata
from scripture_store.translation import Translation

logger = logging.getLogger(__name__)


def read_document(path: Path, code: str | None = None) -> str:
    """
    Read a whole translation document as UTF-8 text.

    Raises:
        TranslationLoadError: if the file cannot be read or decoded
    """
    code = code or path.stem.lower()
    try:
        # utf-8-sig also accepts files saved with a byte order mark
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise TranslationLoadError(code, f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise TranslationLoadError(code, f"cannot read {path}: {e.strerror or e}") from e


def parse_metadata(content: str, code: str) -> TranslationMetadata:
    """
    Extract the metadata block, falling back to defaults derived from the code.

    Each field falls back on its own, so a block with only a name still
    gets a short name and year.
    """
    default = TranslationMetadata.default(code)

    start = value_start(content, "metadata")
    if start < 0 or start >= len(content) or content[start] != "{":
        return default

    end = find_matching_close(content, start)
    if end is None:
        logger.debug("%s: metadata block is truncated; using defaults", code)
        return default

    block = content[start : end + 1]
    return TranslationMetadata(
        code=code,
        name=extract_string(block, "name") or default.name,
        short_name=extract_string(block, "shortname") or default.short_name,
        year=extract_string(block, "year") or default.year,
    )


def _next_object(content: str, pos: int) -> int:
    """Index of the next '{' in the verses array, or -1 once the array closes."""
    n = len(content)
    while pos < n:
        c = content[pos]
        if c == "{":
            return pos
        if c == "]":
            return -1
        pos += 1
    return -1


def parse_verses(content: str, translation: Translation) -> int:
    """
    Scan the verses array and add every well-formed verse to `translation`.

    A record is kept when it has a book name, a text, and positive
    chapter and verse numbers. Anything else is skipped.

    Returns:
        Number of records skipped

    Raises:
        TranslationLoadError: if the document has no verses array
    """
    code = translation.code
    start = value_start(content, "verses")
    if start < 0 or start >= len(content) or content[start] != "[":
        raise TranslationLoadError(code, "no verses array found")

    skipped = 0
    pos = start + 1

    while True:
        obj_start = _next_object(content, pos)
        if obj_start < 0:
            break

        obj_end = find_matching_close(content, obj_start)
        if obj_end is None:
            logger.warning("%s: verse object at offset %d is truncated; stopping", code, obj_start)
            skipped += 1
            break

        record = content[obj_start : obj_end + 1]
        book = extract_string(record, "book_name")
        chapter = extract_int(record, "chapter")
        verse = extract_int(record, "verse")
        text = extract_string(record, "text")

        if book is not None and text is not None and chapter > 0 and verse > 0:
            translation.add_verse(book, chapter, verse, text)
        else:
            skipped += 1
            logger.debug("%s: skipping malformed verse record at offset %d", code, obj_start)

        pos = obj_end + 1

    return skipped


def load_translation(code: str, path: Path) -> Translation:
    """
    Load one translation document into a new Translation.

    A document whose verses array holds no usable records still yields a
    (empty) Translation so its metadata stays queryable.

    Args:
        code: Translation code (lower-cased before use)
        path: Path to the JSON document

    Raises:
        TranslationLoadError: if the document is unreadable or has no verses array
    """
    code = code.lower()
    logger.info("Loading %s from %s", code, path)
    started = time.perf_counter()

    content = read_document(path, code)
    translation = Translation(parse_metadata(content, code))
    try:
        skipped = parse_verses(content, translation)
    except TranslationLoadError as e:
        e.metadata = translation.metadata
        raise
    translation.freeze()

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "Loaded %s (%d verses, %d skipped) in %.0fms",
        code,
        translation.verse_count,
        skipped,
        elapsed_ms,
    )
    return translation
