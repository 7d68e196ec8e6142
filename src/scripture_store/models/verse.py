"""Verse model returned by every query."""

from pydantic import BaseModel, ConfigDict, Field


class Verse(BaseModel):
    """A single addressable verse of one translation."""

    model_config = ConfigDict(frozen=True)

    book: str
    chapter: int = Field(ge=1)
    verse: int = Field(ge=1)
    text: str

    def reference(self) -> str:
        """Return a reference string like "John 3:16"."""
        return f"{self.book} {self.chapter}:{self.verse}"
