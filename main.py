"""Development entry point, runnable from a checkout without installing.

    python -m main fetch paging -p FWSM3

Installed copies use the ``net-phrasebook`` console script instead.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(SRC) not in sys.path:
        sys.path.insert(0, str(SRC))

    from cli.main import app  # noqa: PLC0415

    app(prog_name="net-phrasebook")


if __name__ == "__main__":
    main()
