"""NMEA 0183 sentence decoding."""

from gpslink.nmea.checksum import calculate_checksum, validate_checksum
from gpslink.nmea.codec import SENTENCE_DELIMITER, parse_sentence
from gpslink.nmea.errors import (
    ChecksumMismatchError,
    MalformedSentenceError,
    SentenceParseError,
)
from gpslink.nmea.types import (
    FixQuality,
    GGAFields,
    ProprietarySentence,
    Sentence,
    StandardSentence,
    UnrecognizedSentence,
)

__all__ = [
    "SENTENCE_DELIMITER",
    "ChecksumMismatchError",
    "FixQuality",
    "GGAFields",
    "MalformedSentenceError",
    "ProprietarySentence",
    "Sentence",
    "SentenceParseError",
    "StandardSentence",
    "UnrecognizedSentence",
    "calculate_checksum",
    "parse_sentence",
    "validate_checksum",
]
