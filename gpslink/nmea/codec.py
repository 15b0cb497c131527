"""Decoding of a single delimited NMEA frame into a typed sentence.

``parse_sentence`` is a pure function: one frame in, one ``Sentence`` out,
or a ``SentenceParseError`` describing why the frame was rejected. It never
raises for sentence types it does not know; those come back as
``UnrecognizedSentence`` so the caller can ignore them cheaply.
"""

from gpslink.nmea.checksum import START_DELIMITERS, calculate_checksum, split_checksum
from gpslink.nmea.errors import ChecksumMismatchError, MalformedSentenceError
from gpslink.nmea.fields import VALID_TALKER_IDS
from gpslink.nmea.gga import SENTENCE_TYPE as GGA, decode_gga_fields
from gpslink.nmea.types import (
    ProprietarySentence,
    Sentence,
    StandardSentence,
    UnrecognizedSentence,
)

__all__ = ["SENTENCE_DELIMITER", "parse_sentence"]

SENTENCE_DELIMITER = "\r\n"

_PROPRIETARY_PREFIX = "P"
_IDENTIFIER_LENGTH = 5


def _verify_checksum(frame: str, body: str, provided: str | None) -> int | None:
    """Check the optional ``*hh`` suffix; return the checksum value if present."""
    if provided is None:
        return None
    if len(provided) != 2:
        raise MalformedSentenceError(f"checksum must be two hex digits: {provided!r}", frame)
    try:
        actual = int(provided, 16)
    except ValueError as exc:
        raise MalformedSentenceError(f"checksum is not hexadecimal: {provided!r}", frame) from exc

    expected = calculate_checksum(body)
    if expected != actual:
        raise ChecksumMismatchError(frame, expected=expected, actual=actual)
    return actual


def parse_sentence(frame: str) -> Sentence:
    """Decode one NMEA frame.

    The frame may still carry its ``\\r\\n`` delimiter and surrounding
    whitespace; both are stripped first.

    Args:
        frame: One sentence, e.g.
            ``"$GPGGA,123456,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*4D"``

    Returns:
        ``StandardSentence`` for GGA from a supported talker,
        ``ProprietarySentence`` for ``$P...`` frames, otherwise
        ``UnrecognizedSentence``.

    Raises:
        ChecksumMismatchError: The ``*hh`` suffix does not match the content.
        MalformedSentenceError: Missing start delimiter, malformed checksum
            text, a too-short identifier, or a GGA sentence truncated before
            its quality indicator.

    Example:
        >>> sentence = parse_sentence("$GPGGA,123456,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*4D\\r\\n")
        >>> sentence.sentence_type, sentence.fields.latitude_hemisphere
        ('GGA', 'N')
    """
    text = frame.strip()
    if text[:1] not in START_DELIMITERS:
        raise MalformedSentenceError("missing start delimiter", frame)

    body, provided = split_checksum(text)
    checksum = _verify_checksum(frame, body, provided)

    values = body.split(",")
    identifier = values[0]

    if identifier.startswith(_PROPRIETARY_PREFIX):
        return ProprietarySentence(raw=text)

    if len(identifier) < _IDENTIFIER_LENGTH:
        raise MalformedSentenceError(f"identifier too short: {identifier!r}", frame)

    talker_id = identifier[:2]
    sentence_type = identifier[2:]

    if talker_id not in VALID_TALKER_IDS or sentence_type != GGA:
        return UnrecognizedSentence(raw=text, identifier=identifier)

    fields = decode_gga_fields(values[1:])
    if fields is None:
        raise MalformedSentenceError("GGA sentence truncated before quality indicator", frame)

    return StandardSentence(
        talker_id=talker_id,
        sentence_type=sentence_type,
        fields=fields,
        checksum=checksum,
    )
