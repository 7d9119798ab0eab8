"""Stage catalog and prompt rendering."""

from .builder import PromptBuilder, build_style_prefix
from .constants import (
    ARCHITECTURE,
    CLOSING_BLOCK,
    DEFAULT_STYLE_PREFIX,
    DESCRIPTION,
    FEATURES,
    INCREMENTAL_STAGES,
    INSTALLATION,
    MONOLITHIC_STAGES,
    README,
    TITLE,
    USAGE,
    Stage,
    select_stages,
)

__all__ = [
    "ARCHITECTURE",
    "CLOSING_BLOCK",
    "DEFAULT_STYLE_PREFIX",
    "DESCRIPTION",
    "FEATURES",
    "INCREMENTAL_STAGES",
    "INSTALLATION",
    "MONOLITHIC_STAGES",
    "PromptBuilder",
    "README",
    "Stage",
    "TITLE",
    "USAGE",
    "build_style_prefix",
    "select_stages",
]
