"""
Scripture Store

Registry of every loaded translation and the query API used by the rest
of the application. Queries never raise on a miss: an unknown translation
code, book, chapter or verse comes back as None or an empty list.
"""

import logging
import threading
from pathlib import Path

from scripture_store.canon import BOOK_ORDER, standard_chapter_count
from scripture_store.config import Settings
from scripture_store.errors import TranslationLoadError
from scripture_store.ingest.loader import load_translation
from scripture_store.models import TranslationMetadata, Verse
from scripture_store.reference import Reference
from scripture_store.translation import Translation

logger = logging.getLogger(__name__)


class ScriptureStore:
    """
    Holds all loaded translations keyed by lower-cased code.

    Construct one per process and hand it to whatever needs scripture
    text. Translations are built fully before being published, and the
    registries are replaced rather than mutated, so readers only ever see
    complete translations.

    Usage:
        store = ScriptureStore()
        store.initialize("data/bibles")
        store.load_all()
        store.get_verse("KJV", "John", 3, 16)

        # Or as a context manager
        with ScriptureStore.from_settings(get_settings()) as store:
            store.load_all()
    """

    def __init__(self, location: str | Path | None = None):
        """
        Initialize an empty store.

        Args:
            location: Optional directory of translation documents
        """
        self._location: Path | None = None
        self._translations: dict[str, Translation] = {}
        self._metadata: dict[str, TranslationMetadata] = {}
        self._loaded = False
        self._write_lock = threading.Lock()

        if location is not None:
            self.initialize(location)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScriptureStore":
        """Create a store pointed at the configured bibles directory."""
        return cls(settings.bibles_dir)

    def __enter__(self) -> "ScriptureStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def location(self) -> Path | None:
        return self._location

    def initialize(self, location: str | Path) -> None:
        """Record where translation documents live. Nothing is loaded yet."""
        self._location = Path(location)
        logger.info("Scripture store initialized with path: %s", self._location)

    def load_all(self) -> list[str]:
        """
        Load every *.json document in the configured directory.

        The translation code is the lower-cased file name without its
        extension. A document that fails to load is logged and skipped.
        The store counts as loaded once the pass finishes, even when
        nothing could be loaded.

        Returns:
            Codes of the translations loaded successfully
        """
        loaded: list[str] = []
        try:
            files = self._document_paths()
            if files:
                logger.info("Loading %d translation files...", len(files))

            seen: dict[str, Path] = {}
            for path in files:
                code = path.stem.lower()
                if code in seen:
                    logger.warning(
                        "Skipping %s: code %s already taken by %s",
                        path.name,
                        code,
                        seen[code].name,
                    )
                    continue
                seen[code] = path
                try:
                    ok = self.load_translation(code, path)
                except Exception:
                    logger.exception("Unexpected error loading %s", code)
                    continue
                if ok:
                    loaded.append(code)
        finally:
            self._loaded = True

        logger.info("Loaded %d translations", len(self._translations))
        return loaded

    def _document_paths(self) -> list[Path]:
        if self._location is None:
            logger.error("Bibles path not set; call initialize() first")
            return []

        if not self._location.is_dir():
            logger.error("Bibles directory not found: %s", self._location)
            return []

        # Suffix matched case-insensitively, like the code derived from the stem
        files = sorted(
            (p for p in self._location.iterdir() if p.suffix.lower() == ".json" and p.is_file()),
            key=lambda p: (p.name.lower(), p.name),
        )
        if not files:
            logger.warning("No JSON files found in %s", self._location)
        return files

    def load_translation(self, code: str, path: str | Path) -> bool:
        """
        Load (or reload) a single translation and publish it.

        The new Translation replaces any previous one with the same code
        in a single step. Metadata is published even when the verses
        could not be read, so the translation is still listed, unless
        text for the code is already published.

        Returns:
            True if the translation was published
        """
        code = code.lower()
        try:
            translation = load_translation(code, Path(path))
        except TranslationLoadError as e:
            logger.warning("Error loading %s: %s", code, e.reason)
            # A failed reload keeps the published metadata and text together
            if e.metadata is not None and code not in self._translations:
                self._publish_metadata(e.metadata)
            return False

        self._publish(translation)
        return True

    def _publish_metadata(self, metadata: TranslationMetadata) -> None:
        with self._write_lock:
            self._metadata = {**self._metadata, metadata.code: metadata}

    def _publish(self, translation: Translation) -> None:
        with self._write_lock:
            self._metadata = {**self._metadata, translation.code: translation.metadata}
            self._translations = {**self._translations, translation.code: translation}

    def close(self) -> None:
        """Drop every translation and return to the never-loaded state."""
        with self._write_lock:
            self._translations = {}
            self._metadata = {}
            self._loaded = False

    def is_loaded(self) -> bool:
        """True once a load_all() pass has completed."""
        return self._loaded

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _get(self, code: str) -> Translation | None:
        return self._translations.get(code.lower())

    def has_translation(self, code: str) -> bool:
        return self._get(code) is not None

    def list_translations(self) -> list[TranslationMetadata]:
        """Metadata for every translation seen, whether or not its text loaded."""
        return list(self._metadata.values())

    def verse_count(self, code: str) -> int:
        t = self._get(code)
        return t.verse_count if t else 0

    def list_books(self, code: str) -> list[str]:
        """Books in canonical order; the full canon when the code is unknown."""
        t = self._get(code)
        if t is None:
            return list(BOOK_ORDER)
        return t.books()

    def chapter_count(self, code: str, book: str) -> int:
        """
        Chapter count for a book.

        Uses the translation's own data when it has any chapters for the
        book, otherwise the standard chapter table. 0 only when the book
        is unknown to both.
        """
        t = self._get(code)
        if t is not None:
            count = t.chapter_count(book)
            if count > 0:
                return count
        return standard_chapter_count(book)

    def list_chapters(self, code: str, book: str) -> list[int]:
        """
        Chapter numbers for a book.

        The translation's own chapters when it has any for the book,
        otherwise 1..N from the standard chapter table.
        """
        t = self._get(code)
        if t is not None:
            chapters = t.chapters(book)
            if chapters:
                return chapters
        return list(range(1, standard_chapter_count(book) + 1))

    def get_verse(self, code: str, book: str, chapter: int, verse: int) -> Verse | None:
        t = self._get(code)
        if t is None:
            return None
        return t.verse(book, chapter, verse)

    def get_chapter(self, code: str, book: str, chapter: int) -> list[Verse]:
        t = self._get(code)
        if t is None:
            return []
        return t.chapter(book, chapter)

    def get_verse_range(
        self,
        code: str,
        book: str,
        chapter: int,
        start: int,
        end: int,
    ) -> list[Verse]:
        t = self._get(code)
        if t is None:
            return []
        return t.verse_range(book, chapter, start, end)

    def get_passage(self, code: str, ref: Reference) -> list[Verse]:
        """Verses for a parsed reference: a whole chapter or a verse range."""
        if ref.is_chapter:
            return self.get_chapter(code, ref.book, ref.chapter)
        end = ref.end if ref.end is not None else ref.start
        return self.get_verse_range(code, ref.book, ref.chapter, ref.start, end)

    def search(self, code: str, query: str, limit: int) -> list[Verse]:
        """First `limit` verses containing `query`, case-insensitively, in canonical order."""
        t = self._get(code)
        if t is None:
            return []
        return t.search(query, limit)
