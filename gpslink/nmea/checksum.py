"""NMEA checksum calculation and validation.

NMEA 0183 sentences carry an optional XOR checksum. It is calculated over all
characters between the start delimiter ('$' or '!') and '*' (exclusive), then
written as a two-digit hexadecimal number after the '*'.

Example sentence structure:
    $GPGGA,123456,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*4D
     ^                    checksum content                     ^  ^^
     start                                                   '*'  checksum
"""

START_DELIMITERS = ("$", "!")
CHECKSUM_DELIMITER = "*"


def calculate_checksum(content: str) -> int:
    """Calculate the XOR checksum of the content between '$' and '*'.

    Args:
        content: The sentence body without the start delimiter and checksum.

    Returns:
        Integer checksum value (0-255).

    Example:
        >>> f"{calculate_checksum('GPGGA,123456,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,'):02X}"
        '4D'
    """
    result = 0
    for character in content:
        result ^= ord(character)
    return result


def split_checksum(sentence: str) -> tuple[str, str | None]:
    """Split a sentence into its body and the provided checksum text.

    The start delimiter is removed from the body. Everything after the
    first '*' is returned as the checksum text, unvalidated; callers decide
    whether it is well formed.

    Returns:
        ``(body, checksum_text)``, where ``checksum_text`` is ``None`` when
        the sentence carries no '*'.

    Example:
        >>> split_checksum("$GPGGA,123456*4D")
        ('GPGGA,123456', '4D')
        >>> split_checksum("$GPGGA,123456")
        ('GPGGA,123456', None)
    """
    body = sentence[1:] if sentence[:1] in START_DELIMITERS else sentence
    if CHECKSUM_DELIMITER not in body:
        return body, None
    body, provided = body.split(CHECKSUM_DELIMITER, 1)
    return body, provided


def validate_checksum(sentence: str) -> bool:
    """Validate the checksum of an NMEA sentence.

    Args:
        sentence: Complete NMEA sentence including '$', '*', and checksum.
            May include trailing whitespace/newlines (will be stripped).

    Returns:
        True if the checksum is valid, False if:
        - Sentence is missing its start delimiter or '*'
        - Checksum is not exactly two hexadecimal digits
        - Calculated checksum doesn't match provided checksum
    """
    sentence = sentence.strip()
    if sentence[:1] not in START_DELIMITERS:
        return False

    body, provided = split_checksum(sentence)
    if provided is None or len(provided) != 2:
        return False

    try:
        return calculate_checksum(body) == int(provided, 16)
    except ValueError:
        return False
