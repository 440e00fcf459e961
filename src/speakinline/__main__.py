"""Allow ``python -m speakinline``."""

import sys

from speakinline.cli import main

sys.exit(main())
