"""Tests for DictionaryStore first-match lookups."""
from __future__ import annotations

import threading
import time

import pytest

from core.domain.models import PhrasebookData
from core.errors import NoMappingError
from core.services import dictionary_store
from core.services.dictionary_store import DictionaryStore, get_builtin_store

PROMPT = r"/[\/a-zA-Z0-9.-]+ ?(?:\(config[^)]*\))? ?[#>]/"


@pytest.fixture
def store() -> DictionaryStore:
    return DictionaryStore(
        {
            "Base": {"paging": "base paging", "prompt": "base prompt"},
            "Mid": None,
            "Leaf": {"paging": "leaf paging", "extra": "leaf extra"},
        }
    )


class TestFetch:
    def test_first_match_wins(self, store: DictionaryStore) -> None:
        assert store.fetch(("Leaf", "Mid", "Base"), "paging") == "leaf paging"

    def test_falls_back_along_path(self, store: DictionaryStore) -> None:
        assert store.fetch(("Leaf", "Mid", "Base"), "prompt") == "base prompt"

    def test_order_is_the_callers(self, store: DictionaryStore) -> None:
        assert store.fetch(("Base", "Leaf"), "paging") == "base paging"

    def test_empty_and_absent_dictionaries_behave_the_same(self, store: DictionaryStore) -> None:
        assert store.fetch(("Mid", "Base"), "prompt") == "base prompt"
        assert store.fetch(("Missing", "Base"), "prompt") == "base prompt"

    def test_no_mapping(self, store: DictionaryStore) -> None:
        with pytest.raises(NoMappingError) as excinfo:
            store.fetch(("Leaf", "Base"), "FGHIJ")
        assert excinfo.value.keyword == "FGHIJ"
        assert excinfo.value.search_path == ("Leaf", "Base")
        assert "FGHIJ" in str(excinfo.value)

    def test_keyword_only_in_later_dictionary_not_on_path(self, store: DictionaryStore) -> None:
        with pytest.raises(NoMappingError):
            store.fetch(("Base",), "extra")

    def test_lookup_reports_dictionary(self, store: DictionaryStore) -> None:
        assert store.lookup(("Leaf", "Mid", "Base"), "prompt") == ("Base", "base prompt")

    def test_accepts_any_iterable(self, store: DictionaryStore) -> None:
        assert store.fetch(iter(["Mid", "Base"]), "paging") == "base paging"


class TestViews:
    def test_resolve_all(self, store: DictionaryStore) -> None:
        assert store.resolve_all(("Leaf", "Mid", "Base")) == {
            "extra": ("Leaf", "leaf extra"),
            "paging": ("Leaf", "leaf paging"),
            "prompt": ("Base", "base prompt"),
        }

    def test_keywords_sorted(self, store: DictionaryStore) -> None:
        assert store.keywords(("Leaf", "Base")) == ["extra", "paging", "prompt"]

    def test_names_and_membership(self, store: DictionaryStore) -> None:
        assert store.names() == ["Base", "Mid", "Leaf"]
        assert "Mid" in store
        assert "Missing" not in store
        assert store.get("Mid") is not None
        assert store.get("Missing") is None


class TestBuiltinStore:
    def test_fwsm3_view(self) -> None:
        view = get_builtin_store().resolve_all(("FWSM3", "FWSM", "PIXOS"))
        assert view["paging"] == ("FWSM3", "terminal pager lines")
        assert view["prompt"] == ("PIXOS", PROMPT)
        assert view["err_str"][0] == "PIXOS"

    def test_same_instance(self) -> None:
        assert get_builtin_store() is get_builtin_store()

    def test_concurrent_first_use(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(dictionary_store, "_builtin_store", None)
        calls: list[int] = []
        original = dictionary_store.load_builtin_phrasebook

        def counting_load() -> PhrasebookData:
            calls.append(1)
            time.sleep(0.05)
            return original()

        monkeypatch.setattr(dictionary_store, "load_builtin_phrasebook", counting_load)

        seen: list[DictionaryStore] = []
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            seen.append(get_builtin_store())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert len(seen) == 8
        assert all(s is seen[0] for s in seen)
        assert seen[0].fetch(("Aironet", "IOS"), "paging") == "terminal length"
