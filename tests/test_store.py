"""Tests for the scripture store registry and query API."""

import logging
import threading

import pytest

from scripture_store.canon import BOOK_ORDER
from scripture_store.config import Settings
from scripture_store.reference import Reference
from scripture_store.store import ScriptureStore


@pytest.fixture
def store(bibles_dir):
    s = ScriptureStore()
    s.initialize(bibles_dir)
    s.load_all()
    return s


class TestLoadAll:
    """Test the bulk load pass."""

    def test_initialize_does_not_load(self, bibles_dir):
        s = ScriptureStore()
        s.initialize(bibles_dir)
        assert not s.is_loaded()
        assert s.list_translations() == []

    def test_good_documents_load_despite_bad_ones(self, bibles_dir):
        s = ScriptureStore(bibles_dir)
        loaded = s.load_all()

        assert loaded == ["kjv", "web"]
        assert s.is_loaded()
        assert s.has_translation("kjv")
        assert s.has_translation("web")
        assert not s.has_translation("bad")
        assert not s.has_translation("latin")

    def test_metadata_listed_without_text(self, store):
        listed = {m.code: m for m in store.list_translations()}

        assert set(listed) == {"bad", "kjv", "web"}
        assert listed["bad"].name == "Broken Bible"
        assert listed["kjv"].year == "1611"
        assert listed["web"].name == "WEB"

    def test_missing_directory(self, tmp_path):
        s = ScriptureStore(tmp_path / "does-not-exist")
        assert s.load_all() == []
        assert s.is_loaded()
        assert s.list_translations() == []
        assert s.get_verse("kjv", "John", 3, 16) is None

    def test_location_never_set(self):
        s = ScriptureStore()
        assert s.load_all() == []
        assert s.is_loaded()

    def test_empty_directory(self, tmp_path):
        s = ScriptureStore(tmp_path)
        assert s.load_all() == []
        assert s.is_loaded()

    def test_from_settings(self, bibles_dir):
        s = ScriptureStore.from_settings(Settings(bibles_dir=bibles_dir))
        assert s.location == bibles_dir
        s.load_all()
        assert s.has_translation("kjv")


class TestQueries:
    """Test delegation and case-insensitive codes."""

    def test_get_verse(self, store):
        v = store.get_verse("kjv", "John", 3, 16)
        assert v.text == "For God so loved the world"
        assert store.get_verse("kjv", "John", 3, 17) is None

    def test_code_is_case_insensitive(self, store):
        assert store.get_verse("KJV", "John", 3, 16) is not None
        assert store.get_verse("Web", "John", 3, 17) is not None

    def test_list_books(self, store):
        assert store.list_books("kjv") == ["Genesis", "John"]
        assert store.list_books("web") == ["John"]

    def test_get_chapter(self, store):
        verses = store.get_chapter("kjv", "Genesis", 1)
        assert [v.verse for v in verses] == [1, 2]

    def test_get_verse_range(self, store):
        verses = store.get_verse_range("web", "John", 3, 15, 20)
        assert [v.verse for v in verses] == [16, 17]
        assert store.get_verse_range("web", "John", 3, 17, 16) == []

    def test_search(self, store):
        results = store.search("web", "for god", 1)
        assert len(results) == 1
        assert results[0].reference() == "John 3:16"

    def test_verse_count(self, store):
        assert store.verse_count("kjv") == 3
        assert store.verse_count("bad") == 0

    def test_get_passage(self, store):
        chapter = store.get_passage("kjv", Reference("Genesis", 1))
        assert [v.verse for v in chapter] == [1, 2]

        single = store.get_passage("kjv", Reference("Genesis", 1, 2, 2))
        assert [v.verse for v in single] == [2]


class TestChapterCountFallback:
    """Test the standard chapter table fallback."""

    def test_translation_data_wins(self, store):
        assert store.chapter_count("kjv", "Genesis") == 1

    def test_absent_book_uses_standard_table(self, store):
        assert store.chapter_count("kjv", "Exodus") == 40

    def test_unknown_code_uses_standard_table(self, store):
        assert store.chapter_count("nope", "Psalms") == 150
        assert store.chapter_count("nope", "Philemon") == 1

    def test_unknown_book_is_zero(self, store):
        assert store.chapter_count("kjv", "Tobit") == 0


class TestListChapters:
    """Test chapter numbers with the standard table fallback."""

    def test_translation_data_wins(self, store):
        assert store.list_chapters("kjv", "Genesis") == [1]
        assert store.list_chapters("KJV", "John") == [3]

    def test_absent_book_uses_standard_table(self, store):
        assert store.list_chapters("kjv", "Exodus") == list(range(1, 41))
        assert store.list_chapters("nope", "Jude") == [1]

    def test_unknown_book_is_empty(self, store):
        assert store.list_chapters("kjv", "Tobit") == []


class TestUnknownTranslation:
    """Unknown codes degrade to empty results, never errors."""

    def test_every_query(self, store):
        assert store.list_books("xyz") == list(BOOK_ORDER)
        assert store.get_verse("xyz", "John", 3, 16) is None
        assert store.get_chapter("xyz", "John", 3) == []
        assert store.get_verse_range("xyz", "John", 3, 1, 5) == []
        assert store.search("xyz", "god", 10) == []
        assert store.verse_count("xyz") == 0

    def test_before_any_load(self):
        s = ScriptureStore()
        assert s.list_books("kjv") == list(BOOK_ORDER)
        assert s.chapter_count("kjv", "Revelation") == 22
        assert s.search("kjv", "god", 10) == []


class TestReloadAndLifecycle:
    """Test single-translation reloads and teardown."""

    def test_reload_replaces_translation(self, store, bibles_dir, write_bible):
        write_bible(
            bibles_dir / "kjv.json",
            [{"book_name": "Mark", "chapter": 1, "verse": 1, "text": "The beginning of the gospel"}],
        )
        assert store.load_translation("KJV", bibles_dir / "kjv.json")

        assert store.list_books("kjv") == ["Mark"]
        assert store.get_verse("kjv", "John", 3, 16) is None
        listed = {m.code: m for m in store.list_translations()}
        assert listed["kjv"].name == "KJV"

    def test_failed_reload_keeps_previous_text(self, store, bibles_dir):
        (bibles_dir / "kjv.json").write_text('{"metadata":{"name":"Half written"}}', encoding="utf-8")

        assert not store.load_translation("kjv", bibles_dir / "kjv.json")
        assert store.get_verse("kjv", "John", 3, 16) is not None

        listed = {m.code: m for m in store.list_translations()}
        assert listed["kjv"].name == "King James Version"
        assert listed["kjv"].year == "1611"

    def test_failed_first_load_still_lists_metadata(self, store, bibles_dir):
        path = bibles_dir / "asv.json"
        path.write_text('{"metadata":{"name":"American Standard Version"}}', encoding="utf-8")

        assert not store.load_translation("asv", path)
        listed = {m.code: m for m in store.list_translations()}
        assert listed["asv"].name == "American Standard Version"
        assert not store.has_translation("asv")

    def test_close(self, store):
        store.close()
        assert not store.is_loaded()
        assert store.list_translations() == []
        assert store.get_verse("kjv", "John", 3, 16) is None

    def test_context_manager(self, bibles_dir):
        with ScriptureStore(bibles_dir) as s:
            s.load_all()
            assert s.has_translation("kjv")
        assert not s.is_loaded()
        assert not s.has_translation("kjv")

    def test_readers_never_see_partial_translation(self, bibles_dir, write_bible):
        verses = [
            {"book_name": "Psalms", "chapter": 119, "verse": n, "text": f"verse {n}"}
            for n in range(1, 177)
        ]
        path = write_bible(bibles_dir / "psa.json", verses)

        s = ScriptureStore(bibles_dir)
        s.load_all()

        seen: list[int] = []
        stop = threading.Event()

        def reader():
            while True:
                seen.append(len(s.get_chapter("psa", "Psalms", 119)))
                if stop.is_set():
                    break

        thread = threading.Thread(target=reader)
        thread.start()
        try:
            for _ in range(5):
                s.load_translation("psa", path)
        finally:
            stop.set()
            thread.join()

        assert seen
        assert set(seen) == {176}


class TestDocumentDiscovery:
    """Test which files become translations."""

    def test_upper_case_extension(self, tmp_path, write_bible):
        write_bible(
            tmp_path / "ASV.JSON",
            [{"book_name": "John", "chapter": 1, "verse": 1, "text": "In the beginning was the Word"}],
        )
        s = ScriptureStore(tmp_path)

        assert s.load_all() == ["asv"]
        assert s.get_verse("asv", "John", 1, 1) is not None

    def test_duplicate_code_loads_once_and_warns(self, tmp_path, write_bible, caplog):
        write_bible(
            tmp_path / "KJV.json",
            [{"book_name": "John", "chapter": 3, "verse": 16, "text": "upper"}],
        )
        write_bible(
            tmp_path / "kjv.json",
            [{"book_name": "John", "chapter": 3, "verse": 16, "text": "lower"}],
        )
        if len(list(tmp_path.iterdir())) < 2:
            pytest.skip("case-insensitive filesystem")
        s = ScriptureStore(tmp_path)

        with caplog.at_level(logging.WARNING, logger="scripture_store.store"):
            loaded = s.load_all()

        assert loaded == ["kjv"]
        # KJV.json sorts first, so its text is the one kept
        assert s.get_verse("kjv", "John", 3, 16).text == "upper"
        assert "already taken by KJV.json" in caplog.text
