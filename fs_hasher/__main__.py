"""Module entrypoint for ``python -m fs_hasher``."""

import sys

from fs_hasher.cli import main


if __name__ == "__main__":
    sys.exit(main())
