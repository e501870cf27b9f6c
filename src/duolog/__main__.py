"""Allow `python -m duolog`."""

import sys

from duolog.cli import main

sys.exit(main())
