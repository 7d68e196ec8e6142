"""Parse human-written references like "John 3:16-18"."""

from dataclasses import dataclass

from scripture_store.canon import resolve_book


@dataclass(frozen=True)
class Reference:
    """
    A resolved reference within one chapter.

    start/end are both None for a whole chapter.
    """
    book: str
    chapter: int
    start: int | None = None
    end: int | None = None

    @property
    def is_chapter(self) -> bool:
        return self.start is None

    def __str__(self) -> str:
        if self.start is None:
            return f"{self.book} {self.chapter}"
        if self.end is None or self.end == self.start:
            return f"{self.book} {self.chapter}:{self.start}"
        return f"{self.book} {self.chapter}:{self.start}-{self.end}"


def _positive(s: str) -> int | None:
    s = s.strip()
    if not s.isascii() or not s.isdigit():
        return None
    value = int(s)
    return value if value > 0 else None


def parse_reference(ref: str) -> Reference | None:
    """
    Parse a reference string.

    Accepted forms:
        "John 3"        whole chapter
        "John 3:16"     single verse
        "John 3:16-18"  verse range
    The book may be a full name, a book id ("JHN") or a close spelling.

    Returns None on anything that cannot be parsed or resolved.
    """
    s = ref.strip()
    if not s:
        return None

    try:
        space_idx = s.rindex(" ")
    except ValueError:
        return None

    book_str = s[:space_idx].strip()
    cv_str = s[space_idx + 1 :].strip()

    book = resolve_book(book_str)
    if book is None:
        return None

    if ":" not in cv_str:
        chapter = _positive(cv_str)
        return Reference(book, chapter) if chapter else None

    chap_str, verse_part = cv_str.split(":", 1)
    chapter = _positive(chap_str)
    if chapter is None:
        return None

    if "-" in verse_part:
        start_str, end_str = verse_part.split("-", 1)
        start = _positive(start_str)
        end = _positive(end_str)
        if start is None or end is None:
            return None
        return Reference(book, chapter, start, end)

    verse = _positive(verse_part)
    if verse is None:
        return None
    return Reference(book, chapter, verse, verse)
