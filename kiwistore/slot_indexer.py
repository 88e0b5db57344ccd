"""Mapping of keys to hash slots and of slots to storage instances."""

from __future__ import annotations

SLOT_INDEXER_INSTANCE_NUM = 3


def _build_crc16_arc_table() -> tuple[int, ...]:
    table = []
    for byte in range(256):
        crc = byte
        for _ in range(8):
            crc = (crc >> 1) ^ 0xA001 if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_CRC16_ARC_TABLE = _build_crc16_arc_table()


def crc16_arc(data: bytes) -> int:
    """Compute the CRC-16/ARC checksum of ``data``."""
    crc = 0
    for byte in bytes(data):
        crc = (crc >> 8) ^ _CRC16_ARC_TABLE[(crc ^ byte) & 0xFF]
    return crc


def key_to_slot_id(key: bytes) -> int:
    """Map a key to its slot id using CRC16-ARC."""
    return crc16_arc(key)


class SlotIndexer:
    """Assigns slots to storage instances."""

    def __init__(self, instance_num: int = SLOT_INDEXER_INSTANCE_NUM) -> None:
        if instance_num <= 0:
            raise ValueError("Instance number must be greater than zero.")
        self._instance_num = instance_num

    @property
    def instance_num(self) -> int:
        """Number of storage instances slots are spread over."""
        return self._instance_num

    def get_instance_id(self, slot_id: int) -> int:
        """Return the instance that holds ``slot_id``."""
        return slot_id % self._instance_num

    def __repr__(self) -> str:
        return f"SlotIndexer(instance_num={self._instance_num})"