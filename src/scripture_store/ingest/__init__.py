"""Translation document ingestion."""

from scripture_store.ingest.extractor import extract_int, extract_string, find_matching_close
from scripture_store.ingest.loader import load_translation, parse_metadata, parse_verses, read_document

__all__ = [
    "extract_int",
    "extract_string",
    "find_matching_close",
    "load_translation",
    "parse_metadata",
    "parse_verses",
    "read_document",
]
