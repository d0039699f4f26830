"""Allow `python -m wordgen`."""

import sys

from wordgen.cli import main

sys.exit(main())
