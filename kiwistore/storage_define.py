"""Layout constants and the user-key escaping used in encoded keys."""

from __future__ import annotations

PREFIX_RESERVE_LENGTH = 8
VERSION_LENGTH = 8
SUFFIX_RESERVE_LENGTH = 16

TYPE_LENGTH = 1
TIMESTAMP_LENGTH = 8

NEED_TRANSFORM_CHARACTER = 0x00
ENCODED_TRANSFORM_CHARACTER = b"\x00\x01"
ENCODED_KEY_DELIM = b"\x00\x00"
ENCODED_KEY_DELIM_SIZE = 2

STRING_VALUE_SUFFIXLENGTH = 2 * TIMESTAMP_LENGTH + SUFFIX_RESERVE_LENGTH
BASE_META_VALUE_COUNT_LENGTH = 8
BASE_META_VALUE_LENGTH = (
    TYPE_LENGTH
    + BASE_META_VALUE_COUNT_LENGTH
    + VERSION_LENGTH
    + SUFFIX_RESERVE_LENGTH
    + 2 * TIMESTAMP_LENGTH
)


class InvalidFormatError(ValueError):
    """Raised when stored bytes do not follow the expected layout."""


def encode_user_key(user_key: bytes) -> bytes:
    """Escape zero bytes in a user key and append the key delimiter."""
    escaped = bytes(user_key).replace(
        bytes([NEED_TRANSFORM_CHARACTER]), ENCODED_TRANSFORM_CHARACTER
    )
    return escaped + ENCODED_KEY_DELIM


def decode_user_key(encoded_key_part: bytes) -> bytes:
    """Undo :func:`encode_user_key`, reading up to the first delimiter."""
    if len(encoded_key_part) < ENCODED_KEY_DELIM_SIZE:
        raise InvalidFormatError("Encoded key part too short")

    user_key = bytearray()
    zero_ahead = False
    delim_found = False
    for byte in encoded_key_part:
        if byte == 0x00:
            if zero_ahead:
                delim_found = True
                break
            zero_ahead = True
        elif byte == 0x01:
            user_key.append(0x00 if zero_ahead else byte)
            zero_ahead = False
        else:
            if zero_ahead:
                raise InvalidFormatError(
                    "Invalid encoding sequence: single zero followed by "
                    "non-one/non-zero byte"
                )
            user_key.append(byte)

    if not delim_found:
        raise InvalidFormatError(
            "Encoded key delimiter not found or key ends unexpectedly"
        )
    return bytes(user_key)