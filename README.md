# kiwistore

Core pieces of a Redis-compatible key-value storage engine, in plain Python
with no third-party dependencies.

## What is inside

- `kiwistore.types`: value records `KeyValue` (ordered by key alone),
  `FieldValue`, `KeyVersion`, `ScoreMember`, `ValueStatus`, `KeyInfo`
  (instances add up field by field with `KeyInfo.add` or `+`), `BGTask`, and
  the `DataType` and `Operation` enums.
- `kiwistore.storage_define`: layout constants and `encode_user_key` /
  `decode_user_key`. Encoding replaces each zero byte of a user key with
  `\x00\x01` and appends the `\x00\x00` delimiter; decoding reads up to the
  first delimiter. Input that is too short, lacks the delimiter or holds a
  zero followed by a byte other than `\x00` or `\x01` raises
  `InvalidFormatError` (a `ValueError`).
- `kiwistore.murmur3`: `murmur3_32(data, seed=0)`, the 32-bit MurmurHash3
  (x86 variant). Text is hashed as UTF-8.
- `kiwistore.slot_indexer`: `crc16_arc`, `key_to_slot_id` (the CRC-16/ARC of
  the key) and `SlotIndexer`, which maps a slot id to an instance id by taking
  it modulo the number of instances (3 by default; zero or fewer raises
  `ValueError`).
- `kiwistore.statistics`: `KeyStatistics`, which keeps a window of
  `window_size + 2` durations and reports their mean without the largest and
  smallest entry once the window is full (0 before that), plus a modification
  counter; and `KeyStatisticsDurationGuard`, a context manager that passes the
  data type, the key and the elapsed `datetime.timedelta` to a callback on
  exit.
- `kiwistore.strings_value_format`: `StringValue` and `ParsedStringsValue`
  for the string value layout
  `| type 1B | value | reserve 16B | ctime 8B LE | etime 8B LE |`, and
  `CompactionDecision` (`REMOVE` once a non-zero expiry time is in the past,
  `KEEP` otherwise).
- `kiwistore.util`: `is_dir`, `mkdir_with_path` (creates parents, then sets
  the mode on POSIX), `delete_dir` (recursive removal) and
  `unique_test_db_path`, which returns a path that does not exist yet.
- `kiwistore.storage`: `Storage`, which routes `set` and `get` to one of its
  instances by key slot, and `BgTaskHandler`, a bounded asyncio queue of
  `CleanAll`, `CompactRange` and `Shutdown` tasks consumed by
  `Storage.bg_task_worker`.

## Examples

Encoding and decoding a key:

```python
from kiwistore.storage_define import encode_user_key, decode_user_key

encoded = encode_user_key(b"test\x00key")
assert encoded == b"test\x00\x01key\x00\x00"
assert decode_user_key(encoded) == b"test\x00key"
```

Encoding a string value and reading it back:

```python
from kiwistore.strings_value_format import StringValue, ParsedStringsValue

value = StringValue(b"hello")
value.set_etime(1630000000)
parsed = ParsedStringsValue(value.encode())
assert parsed.user_value() == b"hello"
assert parsed.etime() == 1630000000
```

Routing keys through `Storage` to instances you supply:

```python
from kiwistore.storage import Storage

class MemoryInstance:
    def __init__(self):
        self.data = {}

    def set(self, key, value):
        self.data[key] = value

    def get(self, key):
        return self.data[key].decode()

storage = Storage(1, 0)
storage.insts.append(MemoryInstance())
storage.set(b"k", b"v")
assert storage.get(b"k") == "v"
```

Running the background task worker:

```python
import asyncio
from kiwistore.storage import Storage, BgTaskHandler, CleanAll, Shutdown
from kiwistore.types import DataType

async def main():
    storage = Storage(1, 0)
    handler = BgTaskHandler(1000)
    storage.bg_task_handler = handler
    worker = asyncio.create_task(Storage.bg_task_worker(storage, handler))
    await handler.send(CleanAll(DataType.ALL))
    await handler.send(Shutdown())
    await worker

asyncio.run(main())
```

The worker logs `CleanAll` tasks, calls `compact_range(start, end)` on the
first instance for `CompactRange` tasks when that instance has such a method,
and returns on `Shutdown`.

## What it does not do

There is no database engine here: nothing writes keys to disk, and `Storage`
has no way to open instances of its own. Its `insts` list must be filled with
objects that provide `set(key, value)` and `get(key)`; `Storage.set` and
`Storage.get` raise `RuntimeError` when the instance a key routes to is
missing. There is no network server and no command to run.

## Tests

```
pip install -e .[test]
pytest
```