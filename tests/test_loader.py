"""Tests for YAML phrasebook loading and validation."""
from __future__ import annotations

import io
from pathlib import Path

import pytest

from adapters.phrasebook_source import (
    DEFAULT_DICTIONARY,
    load_phrasebook,
    loads_phrasebook,
    parse_phrasebook,
)
from core.errors import MalformedSourceError
from core.resources_loader import get_builtin_phrasebook_path, load_builtin_phrasebook

IOS_ERR_STR = r'% (?:Type "[^?]+\?"|(?:Incomplete|Unknown) command|Invalid input)'
PIXOS_ERR_STR = r"(?:Type help|(?:ERROR|Usage):)"
PROMPT = r"/[\/a-zA-Z0-9.-]+ ?(?:\(config[^)]*\))? ?[#>]/"


class TestBuiltinPhrasebook:
    def test_dictionaries(self) -> None:
        data = load_builtin_phrasebook()
        assert set(data.dictionaries) == {"IOS", "Aironet", "PIXOS", "FWSM", "FWSM3"}
        assert DEFAULT_DICTIONARY not in data.dictionaries

    def test_contents(self) -> None:
        d = load_builtin_phrasebook().dictionaries
        assert d["IOS"].entries == {
            "err_str": IOS_ERR_STR,
            "paging": "terminal length",
            "prompt": PROMPT,
        }
        assert d["PIXOS"].entries == {
            "err_str": PIXOS_ERR_STR,
            "paging": "pager lines",
            "prompt": PROMPT,
        }
        assert d["FWSM3"].entries == {"paging": "terminal pager lines"}
        assert d["Aironet"].is_alias
        assert d["FWSM"].is_alias

    def test_file_is_packaged(self) -> None:
        assert get_builtin_phrasebook_path().is_file()


class TestLoadSources:
    def test_path(self, sample_phrasebook: Path) -> None:
        data = load_phrasebook(sample_phrasebook)
        assert data.source == str(sample_phrasebook)
        assert data.dictionaries["MyOS2"].entries == {"paging": "terminal length 0"}
        assert data.dictionaries["MyOS2-lite"].entries == {}

    def test_path_as_string(self, sample_phrasebook: Path) -> None:
        assert "MyOS" in load_phrasebook(str(sample_phrasebook)).dictionaries

    def test_handle_is_left_open(self) -> None:
        handle = io.StringIO("IOS:\n  paging: terminal length\n")
        data = load_phrasebook(handle)
        assert data.dictionaries["IOS"].get("paging") == "terminal length"
        assert not handle.closed

    def test_mapping(self) -> None:
        data = load_phrasebook({"A": {"k": "v"}, "B": None})
        assert data.dictionaries["A"].entries == {"k": "v"}
        assert data.dictionaries["B"].is_alias

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(MalformedSourceError, match="cannot read"):
            load_phrasebook(tmp_path / "nope.yml")

    def test_merge_key_override(self) -> None:
        text = (
            "PIXOS: &pix\n"
            "  paging: 'pager lines'\n"
            "  prompt: '[#>] ?$'\n"
            "FWSM3:\n"
            "  <<: *pix\n"
            "  paging: 'terminal pager lines'\n"
        )
        data = loads_phrasebook(text)
        assert data.dictionaries["FWSM3"].entries == {
            "paging": "terminal pager lines",
            "prompt": "[#>] ?$",
        }
        assert data.dictionaries["PIXOS"].get("paging") == "pager lines"

    def test_numbers_become_strings(self) -> None:
        data = loads_phrasebook("IOS:\n  lines: 24\n  ratio: 1.5\n")
        assert data.dictionaries["IOS"].entries == {"lines": "24", "ratio": "1.5"}


class TestMalformed:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "---\n",
            "0000default :\n",
            "just a scalar\n",
            "- IOS\n- PIXOS\n",
            "IOS: terminal length\n",
            "IOS:\n  paging:\n",
            "IOS:\n  paging: [a, b]\n",
            "IOS:\n  paging: {a: b}\n",
            "IOS:\n  enabled: yes\n",
            "IOS:\n  paging: 'unterminated\n",
        ],
    )
    def test_rejected(self, text: str) -> None:
        with pytest.raises(MalformedSourceError):
            loads_phrasebook(text)

    def test_duplicate_keyword(self) -> None:
        with pytest.raises(MalformedSourceError, match="duplicate key"):
            loads_phrasebook("IOS:\n  paging: a\n  paging: b\n")

    def test_duplicate_next_to_merge_still_rejected(self) -> None:
        text = "A: &a\n  paging: x\nB:\n  <<: *a\n  prompt: p\n  prompt: q\n"
        with pytest.raises(MalformedSourceError, match="duplicate key 'prompt'"):
            loads_phrasebook(text)

    def test_duplicate_dictionary(self) -> None:
        with pytest.raises(MalformedSourceError, match="duplicate key"):
            loads_phrasebook("IOS:\n  paging: a\nIOS:\n  prompt: b\n")

    def test_duplicate_after_normalisation(self) -> None:
        with pytest.raises(MalformedSourceError, match="duplicate keyword '1'"):
            parse_phrasebook({"IOS": {1: "a", "1": "b"}})

    def test_error_names_source(self) -> None:
        with pytest.raises(MalformedSourceError) as excinfo:
            loads_phrasebook("", source="custom.yml")
        assert excinfo.value.source == "custom.yml"
        assert str(excinfo.value).startswith("custom.yml: ")
