"""
Elapsed-time formatting for the solve timer.
"""

HOUR = 60 * 60


def format_seconds(total_seconds: int) -> str:
    """Format seconds as HH:MM:SS, e.g. 4205 -> '01:10:05'."""
    seconds = total_seconds % 60
    minutes = total_seconds // 60 % 60
    hours = total_seconds // HOUR
    return f"{hours:02}:{minutes:02}:{seconds:02}"
