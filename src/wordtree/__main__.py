"""Entry point for ``python -m wordtree``."""

import sys

from wordtree.cli import main

sys.exit(main())
