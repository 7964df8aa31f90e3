from __future__ import annotations

import sys

from news_relay.app.main import run


def main() -> int:
    run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
