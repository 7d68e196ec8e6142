"""Translation metadata model."""

from pydantic import BaseModel, ConfigDict


class TranslationMetadata(BaseModel):
    """Descriptive information about a translation, listed without its text."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    short_name: str
    year: str = "Unknown"

    @classmethod
    def default(cls, code: str) -> "TranslationMetadata":
        """Metadata derived from the code alone, for documents without a metadata block."""
        return cls(
            code=code,
            name=code.upper(),
            short_name=code.upper(),
            year="Unknown",
        )
