"""Run script.

Why it exists:
- Lets you run the CLI with `python -m main` from `src/` during development.
- Keeps a simple entry point next to the `swapi-aggregate` console script.
"""

from __future__ import annotations

import sys

# Rich prints non-ASCII glyphs; Windows consoles may default to cp1252.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
