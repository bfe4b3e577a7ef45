"""
Engine Configuration
Generation, grid size limits, file format and history settings.
"""


class EngineConfig:
    """Engine-wide settings, read at call time."""

    # Puzzle generation
    FILL_PROBABILITY = 0.75       # Chance of each solution cell being filled
    MIN_FILL_RATIO = None         # e.g. 0.2 to reject nearly empty pictures
    MAX_FILL_RATIO = None         # e.g. 0.9 to reject nearly full pictures
    MAX_GENERATION_ATTEMPTS = 100

    # Grid dimensions
    MIN_SIZE = 1
    MAX_SIZE = 99
    DEFAULT_SIZE = 5

    # Grid files
    FILE_EXTENSION = "yaya"
    SAVE_NAME_PATTERN = "grid-{index}.{extension}"
    MAX_SAVE_FILES = 9

    # Symbol per cell kind name; Measured cells are handled by MEASURED_SAVE_POLICY
    SYMBOLS = {
        'EMPTY': '.',
        'FILLED': '#',
        'CROSSED': 'x',
        'MAYBED': '?',
    }
    MEASURED_SAVE_POLICY = "empty"   # "empty" or "marker"
    MEASURED_MARKER_SYMBOL = "m"

    # Undo/redo
    MAX_HISTORY = None            # None keeps every action

    # Solve timer
    MAX_REPORTED_SECONDS = 99 * 60 * 60

    @classmethod
    def valid_size(cls, value: int) -> bool:
        """Check a width or height against the supported range."""
        return cls.MIN_SIZE <= value <= cls.MAX_SIZE
