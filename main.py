"""Development entry point (without an editable install).

Runs the CLI with `python -m main ...` from the repository root: the code
lives under `src/`, so `cli`, `core` and `adapters` are only importable once
that directory is on `sys.path`.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    project_root = Path(__file__).resolve().parent
    src = project_root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
