# fogpack

Building blocks for the fog-pack binary data format, a strict, canonical
relative of MessagePack. The package has no dependencies beyond the
standard library.

## Modules

- `fogpack.timestamp`: `Timestamp`, a TAI time value counted from the
  1970 Unix epoch as seconds plus nanoseconds. `to_bytes()` gives a 4, 8 or
  12 byte little-endian form, and `Timestamp.from_bytes()` reads it back.
  It also has `from_tai`, `from_tai_secs`, `zero`, `min_value`,
  `max_value`, `next`, `prev`, `time_since` and `size`. You can add or
  subtract whole seconds (`int`) or a `TimeDelta`. Subtracting two
  timestamps gives a `TimeDelta`.
- `fogpack.timedelta`: `TimeDelta`, a signed difference between
  timestamps. It has `from_secs`, `from_millis`, `from_micros` and
  `from_nanos`, and supports addition, subtraction and negation.
- `fogpack.leapseconds`: `LeapSeconds` tables. A table comes from an NTP
  `leap-seconds.list` text (`LeapSeconds.from_ntp_file`) or from the
  built-in list (`LeapSeconds.default`). The module converts between UTC
  and TAI with `from_utc`, `from_utc_secs`, `to_utc` and `now`.
  `set_utc_leap_seconds` replaces the table those conversions use.
- `fogpack.encoding`: encoders for single elements: `encode_null`,
  `encode_bool`, `encode_int`, `encode_f32`, `encode_f64`, `encode_str`,
  `encode_bin`, `encode_array_header`, `encode_map_header` and
  `encode_timestamp`. `F32` marks a float for single precision.
  `EncodeError` is raised for values that are out of range or too large.
  `MAX_DOC_SIZE` is the size limit.
- `fogpack.serializer`: `Serializer` and `serialize`, which turn Python
  values into fog-pack bytes. The supported values are `None`, `bool`,
  `int`, `float`, `F32`, `str`, bytes-like objects, `list`/`tuple`,
  `dict` with string keys, dataclass instances, `Enum` members and
  `Timestamp`. Map keys are written in sorted order. With `ordered=True`
  the keys must already come in strictly increasing order, and
  `EncodeError` is raised otherwise.
- `fogpack.containers`: `open_map` and `open_sequence` return a
  `MapEncoder` or `SequenceEncoder`. These write a map or array into a
  `Serializer` one entry at a time, with or without a known length. Both
  are context managers that end the container when the block exits
  normally.
- `fogpack.validators`: the `Validator` base class, `ValidationError`,
  `AnyValidator` and `BoolValidator`.
- `fogpack.binary`: `BinValidator`, for byte sequences. It checks bit
  masks, a little-endian numeric range, length, and `in`/`nin` lists.
- `fogpack.array`: `ArrayValidator`, for arrays. It checks length,
  `in`/`nin` lists, uniqueness, `contains`, per-index `prefix` validators,
  `items` and `same_len`.
- `fogpack.regexes`: `count_regexes`, which counts the regular expressions
  in a validator given in its tagged map form, such as
  `{"Str": {"matches": "..."}}`.

Every validator's `validate(value)` returns the value if it passes and
raises `ValidationError` if it does not. `query_check(other)` tells
whether a query that uses `other` at that spot is allowed. A list or
tuple passed to it must pass as a whole. `BoolValidator`, `BinValidator`
and `ArrayValidator` also have `to_dict()`, which returns the validator
as a map with default fields left out.

## Installing

```
pip install .
```

## Examples

```python
from fogpack.serializer import serialize

serialize({"itty": "i", "bitty": "b"})
# b'\x82\xa5bitty\xa1b\xa4itty\xa1i'
```

```python
from fogpack.serializer import Serializer
from fogpack.containers import open_map

ser = Serializer()
with open_map(ser) as m:
    m.entry("itty", "i")
    m.entry("bitty", "b")
ser.getvalue()
# b'\x82\xa5bitty\xa1b\xa4itty\xa1i'
```

```python
from fogpack.timestamp import Timestamp

t = Timestamp.from_tai(1, 1)
data = t.to_bytes()          # 12 bytes
assert Timestamp.from_bytes(data) == t
```

```python
from fogpack.leapseconds import from_utc_secs, to_utc

tai = from_utc_secs(1_700_000_000)
assert to_utc(tai) == (1_700_000_000, 0)
```

```python
from fogpack.array import ArrayValidator
from fogpack.validators import BoolValidator, ValidationError

v = ArrayValidator(items=BoolValidator(), max_len=2)
v.validate([True, False])
try:
    v.validate([True, 1])
except ValidationError as err:
    print(err)               # Expected Bool, got Int
```

## What the package does not do

- It only encodes. There is no decoder that reads fog-pack bytes back into
  Python values, apart from `Timestamp.from_bytes`.
- It has no documents, entries, schemas or queries, and it does no
  compression.
- Its only validators are for any value, booleans, byte sequences and
  arrays. There are none for integers, floats, strings, maps, hashes or
  enums.
- The only extension element it encodes is `Timestamp`.

## Running the tests

```
pip install .[test]
pytest
```