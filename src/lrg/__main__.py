"""Allow running lrg with ``python -m lrg``."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
