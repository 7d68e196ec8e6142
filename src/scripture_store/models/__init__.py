"""Data models for verses and translations."""

from scripture_store.models.verse import Verse
from scripture_store.models.metadata import TranslationMetadata

__all__ = ["Verse", "TranslationMetadata"]
