"""Allow ``python -m microbench``."""

import sys

from microbench.cli import main

sys.exit(main())
