"""Constants shared across SuffixPy."""


class Constants:
    """Namespace for project-wide constants."""

    DEFAULT_SENTINEL = "$"

    # Output
    OUTPUT_SEPARATOR = "\t"
    BANNER_WIDTH = 60

    # Texts longer than this get a warning before the rotation sort, which
    # compares whole rotations
    ROTATION_SORT_WARNING_LENGTH = 100_000
