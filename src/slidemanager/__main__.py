"""Allow ``python -m slidemanager``."""

import sys

from slidemanager.cli import main

if __name__ == "__main__":
    sys.exit(main())
