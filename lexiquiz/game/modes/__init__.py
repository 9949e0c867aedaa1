from lexiquiz.game.modes.catalog import (
    DEFAULT_CATEGORY,
    DEFAULT_MODE,
    LEVELS,
    ModeDescriptor,
    PoolKind,
    PromptDirection,
    TrainingMode,
    VariantKind,
    WordCategory,
    describe_mode,
    normalize_level,
    parse_category,
    parse_mode,
)

__all__ = [
    "DEFAULT_CATEGORY",
    "DEFAULT_MODE",
    "LEVELS",
    "ModeDescriptor",
    "PoolKind",
    "PromptDirection",
    "TrainingMode",
    "VariantKind",
    "WordCategory",
    "describe_mode",
    "normalize_level",
    "parse_category",
    "parse_mode",
]
