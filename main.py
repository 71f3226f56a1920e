"""Development entrypoint for Stronghold.

Run ``python main.py`` to play in the console or ``python main.py serve``
to start the HTTP API.
"""

from __future__ import annotations

from stronghold.main import main

if __name__ == "__main__":
    raise SystemExit(main())
