"""Allow ``python -m uischema``."""

import sys

from uischema.cli import main

if __name__ == "__main__":
    sys.exit(main())
