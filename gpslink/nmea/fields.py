"""NMEA field parsing utilities.

NMEA fields are comma-separated and may be empty (consecutive commas indicate
missing data). These utilities return None for empty or unparseable fields,
so a single bad value never fails the whole sentence.
"""

# Supported NMEA talker IDs for GNSS receivers.
#   GP = GPS (USA)
#   GN = Multi-GNSS (combined solution)
#   GL = GLONASS (Russia)
#   GA = Galileo (Europe)
#   GB = BeiDou (China)
#   GQ = QZSS (Japan)
VALID_TALKER_IDS = ("GP", "GN", "GL", "GA", "GB", "GQ")


def parse_float_field(value: str) -> float | None:
    """Parse a string field to float, returning None if empty or invalid.

    Example:
        >>> parse_float_field("545.4")
        545.4
        >>> parse_float_field("")  # empty field
    """
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def parse_int_field(value: str) -> int | None:
    """Parse a string field to int, returning None if empty or invalid."""
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def parse_string_field(value: str) -> str | None:
    """Return the field unchanged, or None if empty."""
    if not value:
        return None
    return value


def parse_coordinate_field(value: str) -> float | None:
    """Convert an NMEA coordinate (DDMM.MMMM / DDDMM.MMMM) to unsigned degrees.

    The two digits before the decimal point are always minutes; everything
    before them is whole degrees. The hemisphere is kept in its own field,
    so the result is never negative.

    Returns:
        Decimal degrees, or None if the field is empty or malformed.

    Example:
        >>> parse_coordinate_field("4807.038")  # 48 deg 07.038'
        48.1173
        >>> parse_coordinate_field("01131.000")  # 11 deg 31.000'
        11.516666666666667
    """
    if not value:
        return None

    dot_position = value.find(".")
    if dot_position == -1:
        dot_position = len(value)
    if dot_position < 2:
        return None

    try:
        degrees = int(value[: dot_position - 2] or "0")
        minutes = float(value[dot_position - 2 :])
    except ValueError:
        return None

    if degrees < 0 or not 0.0 <= minutes < 60.0:
        return None
    return degrees + minutes / 60.0
