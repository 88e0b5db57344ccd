"""Plain value types shared by the storage engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


@dataclass
class KeyValue:
    """A key and its value; ordering looks at the key alone."""

    key: bytes
    value: bytes

    def __lt__(self, other: KeyValue) -> bool:
        if not isinstance(other, KeyValue):
            return NotImplemented
        return self.key < other.key

    def __le__(self, other: KeyValue) -> bool:
        if not isinstance(other, KeyValue):
            return NotImplemented
        return self.key <= other.key

    def __gt__(self, other: KeyValue) -> bool:
        if not isinstance(other, KeyValue):
            return NotImplemented
        return self.key > other.key

    def __ge__(self, other: KeyValue) -> bool:
        if not isinstance(other, KeyValue):
            return NotImplemented
        return self.key >= other.key


@dataclass
class FieldValue:
    """A field and its value inside a hash."""

    field: bytes
    value: bytes


@dataclass
class KeyVersion:
    """A key together with the version of its data."""

    key: bytes
    version: int


@dataclass(eq=False)
class ScoreMember:
    """A member of a sorted set and its score."""

    score: float
    member: bytes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScoreMember):
            return NotImplemented
        # Compare scores as floats so that NaN never equals itself.
        return self.score == other.score and self.member == other.member

    __hash__ = None  # type: ignore[assignment]


@dataclass
class ValueStatus:
    """A value together with its remaining time to live."""

    value: bytes
    ttl: int


@dataclass
class KeyInfo:
    """Key counts gathered by a scan of the keyspace."""

    keys: int = 0
    expires: int = 0
    avg_ttl: int = 0
    invalid_keys: int = 0

    def add(self, other: KeyInfo) -> KeyInfo:
        """Return the field-wise sum of two records."""
        return KeyInfo(
            keys=self.keys + other.keys,
            expires=self.expires + other.expires,
            avg_ttl=self.avg_ttl + other.avg_ttl,
            invalid_keys=self.invalid_keys + other.invalid_keys,
        )

    def __add__(self, other: KeyInfo) -> KeyInfo:
        if not isinstance(other, KeyInfo):
            return NotImplemented
        return self.add(other)


class DataType(enum.Enum):
    """Data types the storage engine holds."""

    STRING = enum.auto()
    HASH = enum.auto()
    LIST = enum.auto()
    SET = enum.auto()
    ZSET = enum.auto()
    ALL = enum.auto()


class Operation(enum.Enum):
    """Kinds of background operation."""

    NONE = enum.auto()
    CLEAN_ALL = enum.auto()
    COMPACT_RANGE = enum.auto()


@dataclass
class BGTask:
    """A background task on data of one type."""

    data_type: DataType
    operation: Operation
    args: list[bytes] = field(default_factory=list)