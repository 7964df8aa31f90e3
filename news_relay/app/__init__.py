"""News Relay application package.

Importing the package loads ``.env`` and ``.env.local`` from the repository root
into the process environment without overriding variables that are already set.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

_base_dir = Path(__file__).resolve().parents[2]
for _name in (".env", ".env.local"):
    load_dotenv(_base_dir / _name, override=False)
