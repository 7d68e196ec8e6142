"""Scripture Store - in-memory scripture index and query engine."""

__version__ = "0.1.0"

from scripture_store.models import TranslationMetadata, Verse
from scripture_store.reference import Reference, parse_reference
from scripture_store.store import ScriptureStore
from scripture_store.translation import Translation

__all__ = [
    "ScriptureStore",
    "Translation",
    "TranslationMetadata",
    "Verse",
    "Reference",
    "parse_reference",
]
