"""Allows `python -m last_gig_finder ...`."""

from __future__ import annotations

import sys

# Windows terminals default to cp1252; the outreach message contains emoji.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from last_gig_finder.cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
