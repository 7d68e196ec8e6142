"""
Indexed store for one translation.

Verses are kept in a three-level mapping book -> chapter -> verse -> text.
Python dicts keep insertion order, not numeric order, so a separate
sorted index (book -> chapter -> sorted verse numbers, chapters inserted
in ascending order) drives every ordered read. The index is rebuilt only
after the text changes, and is built for good by `freeze()` before the
translation is published.
"""

from bisect import bisect_left, bisect_right

from scripture_store.canon import BOOK_ORDER, book_index
from scripture_store.models import TranslationMetadata, Verse


class Translation:
    """
    All verses of one translation plus its metadata.

    Built once by the loader through `add_verse`, then frozen. Every
    query returns fresh `Verse` values, never views into the index.

    Usage:
        t = Translation(TranslationMetadata.default("kjv"))
        t.add_verse("John", 3, 16, "For God so loved the world...")
        t.freeze()
        t.verse("John", 3, 16)
    """

    def __init__(self, metadata: TranslationMetadata):
        self.metadata = metadata
        self._data: dict[str, dict[int, dict[int, str]]] = {}
        self._sorted: dict[str, dict[int, list[int]]] | None = None
        self._verse_count = 0
        self._frozen = False

    @property
    def code(self) -> str:
        return self.metadata.code

    @property
    def verse_count(self) -> int:
        """Number of distinct verses ingested."""
        return self._verse_count

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add_verse(self, book: str, chapter: int, verse: int, text: str) -> None:
        """
        Add one verse to the index.

        A repeated (book, chapter, verse) replaces the earlier text.

        Raises:
            ValueError: if chapter or verse is not positive
            RuntimeError: if the translation has been frozen
        """
        if self._frozen:
            raise RuntimeError(f"Translation {self.code!r} is frozen")
        if chapter <= 0 or verse <= 0:
            raise ValueError(f"Invalid verse location {book} {chapter}:{verse}")

        verses = self._data.setdefault(book, {}).setdefault(chapter, {})
        if verse not in verses:
            self._verse_count += 1
            self._sorted = None
        verses[verse] = text

    def freeze(self) -> None:
        """Build the sorted index and refuse any further verses."""
        self._ordered()
        self._frozen = True

    def _ordered(self) -> dict[str, dict[int, list[int]]]:
        if self._sorted is None:
            self._sorted = {
                book: {ch: sorted(chapters[ch]) for ch in sorted(chapters)}
                for book, chapters in self._data.items()
            }
        return self._sorted

    def _search_order(self) -> list[str]:
        """Books in scan order: canonical first, then any others by name."""
        extra = sorted(b for b in self._data if book_index(b) is None)
        return self.books() + extra

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def books(self) -> list[str]:
        """Canonical book order, filtered to books present in this translation."""
        return [book for book in BOOK_ORDER if book in self._data]

    def chapter_count(self, book: str) -> int:
        """Distinct chapters present for a book, 0 if absent."""
        return len(self._data.get(book, {}))

    def chapters(self, book: str) -> list[int]:
        """Chapter numbers present for a book, ascending."""
        return list(self._ordered().get(book, {}))

    def verse(self, book: str, chapter: int, verse: int) -> Verse | None:
        text = self._data.get(book, {}).get(chapter, {}).get(verse)
        if text is None:
            return None
        return Verse(book=book, chapter=chapter, verse=verse, text=text)

    def chapter(self, book: str, chapter: int) -> list[Verse]:
        """All verses of a chapter, ordered by verse number."""
        numbers = self._ordered().get(book, {}).get(chapter)
        if not numbers:
            return []
        texts = self._data[book][chapter]
        return [Verse(book=book, chapter=chapter, verse=v, text=texts[v]) for v in numbers]

    def verse_range(self, book: str, chapter: int, start: int, end: int) -> list[Verse]:
        """
        Verses start..end inclusive within one chapter.

        Missing verse numbers are skipped, not padded. Returns an empty
        list when start > end or the chapter is absent.
        """
        numbers = self._ordered().get(book, {}).get(chapter)
        if not numbers or start > end:
            return []
        texts = self._data[book][chapter]
        lo = bisect_left(numbers, start)
        hi = bisect_right(numbers, end)
        return [Verse(book=book, chapter=chapter, verse=v, text=texts[v]) for v in numbers[lo:hi]]

    def search(self, query: str, limit: int) -> list[Verse]:
        """
        Case-insensitive substring search over verse text.

        Scans books in canonical order, then chapters and verses in
        ascending order, and stops as soon as `limit` matches are found.
        The first matches in that order are returned, not the best ones.
        """
        if limit <= 0 or not query:
            return []

        needle = query.lower()
        results: list[Verse] = []
        ordered = self._ordered()

        for book in self._search_order():
            for chapter, numbers in ordered[book].items():
                texts = self._data[book][chapter]
                for v in numbers:
                    text = texts[v]
                    if needle in text.lower():
                        results.append(Verse(book=book, chapter=chapter, verse=v, text=text))
                        if len(results) >= limit:
                            return results

        return results

    def __repr__(self) -> str:
        return f"Translation(code={self.code!r}, books={len(self._data)}, verses={self._verse_count})"
