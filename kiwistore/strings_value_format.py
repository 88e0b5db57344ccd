"""On-disk layout of string values.

| type | value | reserve | cdate | timestamp |
|  1B  |       |   16B   |   8B  |     8B    |
"""

from __future__ import annotations

import enum
import struct

from kiwistore.storage_define import (
    STRING_VALUE_SUFFIXLENGTH,
    SUFFIX_RESERVE_LENGTH,
    TIMESTAMP_LENGTH,
    TYPE_LENGTH,
    InvalidFormatError,
)
from kiwistore.types import DataType

_TYPE_CODES = {
    DataType.STRING: 0,
    DataType.HASH: 1,
    DataType.SET: 2,
    DataType.LIST: 3,
    DataType.ZSET: 4,
    DataType.ALL: 6,
}
_TYPES_BY_CODE = {code: dtype for dtype, code in _TYPE_CODES.items()}
_TIMES = struct.Struct("<QQ")
_TIME = struct.Struct("<Q")


class CompactionDecision(enum.Enum):
    """What compaction should do with a stored value."""

    KEEP = enum.auto()
    REMOVE = enum.auto()


class StringValue:
    """A string value ready to be encoded for storage."""

    def __init__(self, user_value: bytes) -> None:
        self.data_type = DataType.STRING
        self.user_value = bytes(user_value)
        self.ctime = 0
        self.etime = 0

    def set_ctime(self, ctime: int) -> None:
        """Set the creation time."""
        self.ctime = ctime

    def set_etime(self, etime: int) -> None:
        """Set the expiry time; 0 means no expiry."""
        self.etime = etime

    def encode(self) -> bytes:
        """Encode as type byte, value, reserve, ctime and etime."""
        return (
            bytes([_TYPE_CODES[DataType.STRING]])
            + self.user_value
            + bytes(SUFFIX_RESERVE_LENGTH)
            + _TIMES.pack(self.ctime, self.etime)
        )


class ParsedStringsValue:
    """A decoded string value that still owns its encoded bytes."""

    def __init__(self, internal_value: bytes) -> None:
        value = bytearray(internal_value)
        needed = TYPE_LENGTH + STRING_VALUE_SUFFIXLENGTH
        if len(value) < needed:
            raise InvalidFormatError(
                f"invalid string value length: {len(value)} < {needed}"
            )
        try:
            self.data_type = _TYPES_BY_CODE[value[0]]
        except KeyError:
            raise InvalidFormatError(f"invalid data type: {value[0]}") from None

        self._user_start = TYPE_LENGTH
        self._user_end = len(value) - STRING_VALUE_SUFFIXLENGTH
        times_start = self._user_end + SUFFIX_RESERVE_LENGTH
        self._ctime, self._etime = _TIMES.unpack_from(value, times_start)
        self._value = value

    @property
    def value(self) -> bytes:
        """The bytes currently held."""
        return bytes(self._value)

    def user_value(self) -> bytes:
        """The user part of the value."""
        return bytes(self._value[self._user_start : self._user_end])

    def ctime(self) -> int:
        """The creation time."""
        return self._ctime

    def etime(self) -> int:
        """The expiry time; 0 means no expiry."""
        return self._etime

    def strip_suffix(self) -> None:
        """Drop the type byte and the suffix, leaving the user value."""
        del self._value[:TYPE_LENGTH]
        if len(self._value) >= STRING_VALUE_SUFFIXLENGTH:
            del self._value[len(self._value) - STRING_VALUE_SUFFIXLENGTH :]
        self._user_start = 0
        self._user_end = len(self._value)

    def _time_offset(self, index: int) -> int:
        if len(self._value) < STRING_VALUE_SUFFIXLENGTH:
            raise InvalidFormatError("value holds no timestamp suffix")
        return (
            len(self._value)
            - STRING_VALUE_SUFFIXLENGTH
            + SUFFIX_RESERVE_LENGTH
            + index * TIMESTAMP_LENGTH
        )

    def set_ctime(self, ctime: int) -> None:
        """Set the creation time, in the held bytes too."""
        _TIME.pack_into(self._value, self._time_offset(0), ctime)
        self._ctime = ctime

    def set_etime(self, etime: int) -> None:
        """Set the expiry time, in the held bytes too."""
        _TIME.pack_into(self._value, self._time_offset(1), etime)
        self._etime = etime

    def filter_decision(self, cur_time: int) -> CompactionDecision:
        """Remove the value once it has expired, keep it otherwise."""
        if self._etime != 0 and self._etime < cur_time:
            return CompactionDecision.REMOVE
        return CompactionDecision.KEEP