"""NMEA data types for decoded sentences.

Design Decisions:
    1. Sentences form a small tagged union: ``StandardSentence`` for the
       talker/type combinations with a known field schema (only GGA),
       ``ProprietarySentence`` for vendor ``$P...`` sentences, and
       ``UnrecognizedSentence`` for everything else that is well formed.
       Unknown sentences are values, not errors, so a stream mixing many
       sentence types flows through the pipeline untouched.

    2. Optional fields (float | None): NMEA fields may be empty. None marks
       "no data received", which is different from a measured zero.

    3. GGA fields are positional (``GGAFields`` is a NamedTuple), so they can
       be addressed by index in schema order as well as by name.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Union

__all__ = [
    "FixQuality",
    "GGAFields",
    "ProprietarySentence",
    "Sentence",
    "StandardSentence",
    "UnrecognizedSentence",
]


class FixQuality(IntEnum):
    """GGA quality indicator.

    ``INVALID`` is the "no fix" sentinel: the receiver is reporting but has
    no usable position (e.g. no satellites locked).
    """

    INVALID = 0
    GPS = 1
    DGPS = 2
    PPS = 3
    RTK_FIXED = 4
    RTK_FLOAT = 5
    ESTIMATED = 6
    MANUAL = 7
    SIMULATION = 8


class GGAFields(NamedTuple):
    """Positional field schema of a GGA (fix data) sentence.

    Coordinates are unsigned decimal degrees; the hemisphere fields carry
    the sign information and are resolved by the consumer.

    Attributes:
        utc_time: UTC timestamp in HHMMSS.ss format.
        latitude: Latitude magnitude in decimal degrees (from DDMM.MMMM).
        latitude_hemisphere: "N" or "S" as received.
        longitude: Longitude magnitude in decimal degrees (from DDDMM.MMMM).
        longitude_hemisphere: "E" or "W" as received.
        quality: Fix quality indicator. ``FixQuality.INVALID`` when the field
            is empty; None when the code is not a known quality value.
        num_satellites: Satellites used in the solution.
        horizontal_dilution_of_precision: HDOP, lower is better.
        altitude_meters: Antenna altitude above mean sea level.
        altitude_units: Units of ``altitude_meters`` ("M").
        geoid_separation_meters: Geoid height above the WGS84 ellipsoid.
        geoid_units: Units of ``geoid_separation_meters`` ("M").
        dgps_age_seconds: Age of differential corrections.
        dgps_station_id: Differential reference station ID.
    """

    utc_time: str | None
    latitude: float | None
    latitude_hemisphere: str | None
    longitude: float | None
    longitude_hemisphere: str | None
    quality: FixQuality | None
    num_satellites: int | None = None
    horizontal_dilution_of_precision: float | None = None
    altitude_meters: float | None = None
    altitude_units: str | None = None
    geoid_separation_meters: float | None = None
    geoid_units: str | None = None
    dgps_age_seconds: float | None = None
    dgps_station_id: str | None = None


@dataclass(frozen=True)
class StandardSentence:
    """A sentence with a known talker and a typed field schema.

    Attributes:
        talker_id: Two-letter source identifier (e.g. "GP").
        sentence_type: Three-letter message type (e.g. "GGA").
        fields: Typed fields in schema order.
        checksum: Checksum carried by the frame, or None if it had none.
    """

    talker_id: str
    sentence_type: str
    fields: GGAFields
    checksum: int | None = None


@dataclass(frozen=True)
class ProprietarySentence:
    """A vendor-specific ``$P...`` sentence, kept as raw text."""

    raw: str


@dataclass(frozen=True)
class UnrecognizedSentence:
    """A well-formed sentence whose talker/type combination is not decoded."""

    raw: str
    identifier: str


Sentence = Union[StandardSentence, ProprietarySentence, UnrecognizedSentence]
