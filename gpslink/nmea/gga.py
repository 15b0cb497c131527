"""GGA sentence field decoding.

GGA (Global Positioning System Fix Data) is the fix-reporting sentence:
position, fix quality, and satellite/accuracy metrics.

GGA Sentence Format:
    $GPGGA,123456,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*4D
           |      |        | |         | | |  |   |     | |    | ||
           |      |        | |         | | |  |   |     | |    | |+-- DGPS station ID
           |      |        | |         | | |  |   |     | |    | +-- DGPS age
           |      |        | |         | | |  |   |     | +----+-- Geoid separation
           |      |        | |         | | |  |   +-----+-- Altitude above MSL
           |      |        | |         | | |  +-- HDOP
           |      |        | |         | | +-- Number of satellites
           |      |        | |         | +-- Fix quality (0 = no fix)
           |      |        | +---------+-- Longitude + E/W
           |      +--------+-- Latitude + N/S
           +-- UTC time (HHMMSS.ss)
"""

from gpslink.nmea.fields import (
    parse_coordinate_field,
    parse_float_field,
    parse_int_field,
    parse_string_field,
)
from gpslink.nmea.types import FixQuality, GGAFields

SENTENCE_TYPE = "GGA"

# Data fields up to and including the quality indicator. Shorter sentences
# are truncated beyond recovery; longer-but-incomplete ones decode with None
# for the missing tail.
MINIMUM_FIELD_COUNT = 6

_FIELD_COUNT = len(GGAFields._fields)


def _parse_quality(value: str) -> FixQuality | None:
    """Decode the quality indicator.

    An empty field means the receiver reported nothing, which is the same
    as "no fix". Codes outside the known range decode to None.
    """
    if not value:
        return FixQuality.INVALID
    code = parse_int_field(value)
    if code is None:
        return None
    try:
        return FixQuality(code)
    except ValueError:
        return None


def decode_gga_fields(values: list[str]) -> GGAFields | None:
    """Map raw GGA data fields to the typed ``GGAFields`` schema.

    Args:
        values: Comma-separated data fields, excluding the identifier.

    Returns:
        Decoded fields, or None if fewer than ``MINIMUM_FIELD_COUNT`` are
        present.
    """
    if len(values) < MINIMUM_FIELD_COUNT:
        return None

    padded = values[:_FIELD_COUNT] + [""] * (_FIELD_COUNT - len(values))

    return GGAFields(
        utc_time=parse_string_field(padded[0]),
        latitude=parse_coordinate_field(padded[1]),
        latitude_hemisphere=parse_string_field(padded[2]),
        longitude=parse_coordinate_field(padded[3]),
        longitude_hemisphere=parse_string_field(padded[4]),
        quality=_parse_quality(padded[5]),
        num_satellites=parse_int_field(padded[6]),
        horizontal_dilution_of_precision=parse_float_field(padded[7]),
        altitude_meters=parse_float_field(padded[8]),
        altitude_units=parse_string_field(padded[9]),
        geoid_separation_meters=parse_float_field(padded[10]),
        geoid_units=parse_string_field(padded[11]),
        dgps_age_seconds=parse_float_field(padded[12]),
        dgps_station_id=parse_string_field(padded[13]),
    )
