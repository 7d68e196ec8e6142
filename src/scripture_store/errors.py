"""Exceptions raised while setting up the store."""

from scripture_store.models import TranslationMetadata


class ScriptureError(Exception):
    """Base class for Scripture Store errors."""


class TranslationLoadError(ScriptureError):
    """
    A single translation document could not be ingested.

    `metadata` is set when the failure happened after the metadata block
    was parsed, so the translation can still be listed.
    """

    def __init__(self, code: str, reason: str, metadata: TranslationMetadata | None = None):
        self.code = code
        self.reason = reason
        self.metadata = metadata
        super().__init__(f"{code}: {reason}")
