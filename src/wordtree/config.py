"""Local configuration for wordtree."""

from __future__ import annotations

import os


DEFAULT_INTRO_TITLE = "Intro"
DEFAULT_SECTION_ID_PREFIX = "n_"
DEFAULT_EXPORT_FONT = "Calibri"
DEFAULT_LOG_LEVEL = "INFO"

# Title given to the section synthesized for content that precedes any heading.
WORDTREE_INTRO_TITLE = os.getenv("WORDTREE_INTRO_TITLE", DEFAULT_INTRO_TITLE)
WORDTREE_SECTION_ID_PREFIX = os.getenv("WORDTREE_SECTION_ID_PREFIX", DEFAULT_SECTION_ID_PREFIX)
WORDTREE_EXPORT_FONT = os.getenv("WORDTREE_EXPORT_FONT", DEFAULT_EXPORT_FONT)
WORDTREE_LOG_LEVEL = os.getenv("WORDTREE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
