"""
Canonical book tables.

The 66-book Protestant canon in its fixed order, the standard chapter
count for each book, and the 3-character book ids. The tables are
positionally aligned and must never be mutated.
"""

from rapidfuzz import fuzz, process


BOOK_ORDER: tuple[str, ...] = (
    # Old Testament (39)
    "Genesis", "Exodus", "Leviticus", "Numbers", "Deuteronomy",
    "Joshua", "Judges", "Ruth", "1 Samuel", "2 Samuel",
    "1 Kings", "2 Kings", "1 Chronicles", "2 Chronicles",
    "Ezra", "Nehemiah", "Esther", "Job", "Psalms", "Proverbs",
    "Ecclesiastes", "Song of Solomon", "Isaiah", "Jeremiah", "Lamentations",
    "Ezekiel", "Daniel", "Hosea", "Joel", "Amos",
    "Obadiah", "Jonah", "Micah", "Nahum", "Habakkuk",
    "Zephaniah", "Haggai", "Zechariah", "Malachi",
    # New Testament (27)
    "Matthew", "Mark", "Luke", "John", "Acts",
    "Romans", "1 Corinthians", "2 Corinthians", "Galatians", "Ephesians",
    "Philippians", "Colossians", "1 Thessalonians", "2 Thessalonians",
    "1 Timothy", "2 Timothy", "Titus", "Philemon", "Hebrews",
    "James", "1 Peter", "2 Peter", "1 John", "2 John", "3 John",
    "Jude", "Revelation",
)

CHAPTER_COUNTS: tuple[int, ...] = (
    # Old Testament (39)
    50, 40, 27, 36, 34,
    24, 21, 4, 31, 24,
    22, 25, 29, 36,
    10, 13, 10, 42, 150, 31,
    12, 8, 66, 52, 5,
    48, 12, 14, 3, 9,
    1, 4, 7, 3, 3,
    3, 2, 14, 4,
    # New Testament (27)
    28, 16, 24, 21, 28,
    16, 16, 13, 6, 6,
    4, 4, 5, 3,
    6, 4, 3, 1, 13,
    5, 5, 3, 5, 1, 1,
    1, 22,
)

_CODES: tuple[str, ...] = (
    "GEN", "EXO", "LEV", "NUM", "DEU",
    "JOS", "JDG", "RUT", "1SA", "2SA",
    "1KI", "2KI", "1CH", "2CH",
    "EZR", "NEH", "EST", "JOB", "PSA", "PRO",
    "ECC", "SNG", "ISA", "JER", "LAM",
    "EZK", "DAN", "HOS", "JOL", "AMO",
    "OBA", "JON", "MIC", "NAM", "HAB",
    "ZEP", "HAG", "ZEC", "MAL",
    "MAT", "MRK", "LUK", "JHN", "ACT",
    "ROM", "1CO", "2CO", "GAL", "EPH",
    "PHP", "COL", "1TH", "2TH",
    "1TI", "2TI", "TIT", "PHM", "HEB",
    "JAS", "1PE", "2PE", "1JN", "2JN", "3JN",
    "JUD", "REV",
)

OLD_TESTAMENT_BOOKS = 39

STANDARD_CHAPTERS: dict[str, int] = dict(zip(BOOK_ORDER, CHAPTER_COUNTS))
BOOK_CODES: dict[str, str] = dict(zip(BOOK_ORDER, _CODES))

_BOOK_INDEX: dict[str, int] = {name: i for i, name in enumerate(BOOK_ORDER)}

# Lowercased names and ids -> canonical name
_LOOKUP: dict[str, str] = {}
for _name, _code in BOOK_CODES.items():
    _LOOKUP[_name.lower()] = _name
    _LOOKUP[_code.lower()] = _name
# Common alternate spellings
_LOOKUP.update({
    "psalm": "Psalms",
    "song of songs": "Song of Solomon",
    "canticles": "Song of Solomon",
    "revelations": "Revelation",
})

FUZZY_THRESHOLD = 85


def standard_chapter_count(book: str) -> int:
    """Standard chapter count for a canonical book, 0 if the book is unknown."""
    return STANDARD_CHAPTERS.get(book, 0)


def book_index(book: str) -> int | None:
    """Position of a book in the canonical order."""
    return _BOOK_INDEX.get(book)


def book_code(book: str) -> str:
    """3-character book id, e.g. "Genesis" -> "GEN". Unknown names pass through."""
    return BOOK_CODES.get(book, book)


def testament(book: str) -> str | None:
    """Return "OT" or "NT" for canonical books."""
    idx = book_index(book)
    if idx is None:
        return None
    return "OT" if idx < OLD_TESTAMENT_BOOKS else "NT"


def resolve_book(text: str) -> str | None:
    """
    Resolve user input to a canonical book name.

    Accepts the full name in any case, the 3-character id, a few common
    alternate spellings, and close misspellings ("Genisis", "Philipians").
    Returns None when nothing is close enough.
    """
    key = " ".join(text.split()).lower()
    if not key:
        return None

    if key in _LOOKUP:
        return _LOOKUP[key]

    # "1Cor" / "1 Cor" style prefixes of a full name
    compact = key.replace(" ", "")
    prefix_hits = [
        name for name in BOOK_ORDER
        if len(compact) >= 3 and name.lower().replace(" ", "").startswith(compact)
    ]
    if len(prefix_hits) == 1:
        return prefix_hits[0]

    result = process.extractOne(
        key,
        [name.lower() for name in BOOK_ORDER],
        scorer=fuzz.ratio,
    )
    if result and result[1] >= FUZZY_THRESHOLD:
        return _LOOKUP[result[0]]

    return None
