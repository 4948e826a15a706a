"""Allow ``python -m pulse_cli`` and back the ``pulse`` console script."""

from __future__ import annotations

import sys
from typing import Sequence

from . import main as cli_main


def main(argv: Sequence[str] | None = None) -> int:
    return cli_main.main(argv)


if __name__ == "__main__":
    sys.exit(main())
