from __future__ import annotations

import sys
from pathlib import Path

import pytest

TESTS_ROOT = Path(__file__).resolve().parent
SRC_ROOT = TESTS_ROOT.parent / "src"

# Make src/ importable without an editable install
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


SAMPLE_PHRASEBOOK = """\
---
0000default :

MyOS :
    paging : 'set length 0'
    prompt : '[#>] ?$'
    show_if : 'show interface :name'

MyOS2 :
    paging : 'terminal length 0'

MyOS2-lite :
"""


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep user/project .env files and NET_PHRASEBOOK_* variables out of tests."""

    for name in (
        "NET_PHRASEBOOK_PHRASEBOOK_PATH",
        "NET_PHRASEBOOK_DEFAULT_PLATFORM",
        "NET_PHRASEBOOK_PLACEHOLDER_PATTERN",
        "NET_PHRASEBOOK_LOG_LEVEL",
        "NET_PHRASEBOOK_CONFIG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def sample_phrasebook(tmp_path: Path) -> Path:
    path = tmp_path / "sample.yml"
    path.write_text(SAMPLE_PHRASEBOOK, encoding="utf-8")
    return path
