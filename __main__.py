"""CLI entry point for uischema.

Allows running the command line from a source checkout with ``python .``.
"""

import sys

from uischema.cli import main

if __name__ == "__main__":
    sys.exit(main())
