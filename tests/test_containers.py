import pytest

from fogpack.containers import open_map, open_sequence
from fogpack.encoding import MAX_DOC_SIZE, EncodeError
from fogpack.serializer import Serializer


def expected_map():
    out = bytearray([0x82, 0xA5])
    out += b"bitty"
    out += bytes([0xA1, ord("b"), 0xA4])
    out += b"itty"
    out += bytes([0xA1, ord("i")])
    return bytes(out)


@pytest.mark.parametrize("length", [None, 2])
def test_map_unordered_sorts_keys(length):
    ser = Serializer()
    m = open_map(ser, length)
    m.entry("itty", "i")
    m.entry("bitty", "b")
    m.end()
    assert ser.getvalue() == expected_map()


@pytest.mark.parametrize("length", [None, 2])
def test_map_unordered_repeated_keys_fail(length):
    ser = Serializer()
    m = open_map(ser, length)
    m.entry("itty", "i")
    m.entry("itty", "b")
    with pytest.raises(EncodeError, match="repeated"):
        m.end()


@pytest.mark.parametrize("length", [None, 2])
def test_map_ordered_in_order(length):
    ser = Serializer(ordered=True)
    m = open_map(ser, length)
    m.entry("bitty", "b")
    m.entry("itty", "i")
    m.end()
    assert ser.getvalue() == expected_map()


@pytest.mark.parametrize("length", [None, 2])
def test_map_ordered_out_of_order_fails(length):
    ser = Serializer(ordered=True)
    m = open_map(ser, length)
    m.entry("itty", "i")
    with pytest.raises(EncodeError, match="unordered"):
        m.entry("bitty", "b")


@pytest.mark.parametrize("length", [None, 2])
def test_map_ordered_repeated_key_fails(length):
    ser = Serializer(ordered=True)
    m = open_map(ser, length)
    m.entry("itty", "i")
    with pytest.raises(EncodeError):
        m.entry("itty", "b")


def test_map_sized_too_big():
    ser = Serializer()
    with pytest.raises(EncodeError):
        open_map(ser, MAX_DOC_SIZE // 2 + 1)


def test_map_unsized_too_big():
    ser = Serializer()
    m = open_map(ser)
    with pytest.raises(EncodeError, match="map too large"):
        for x in range(MAX_DOC_SIZE // 2 + 1):
            m.entry(str(x), x)


def test_map_non_string_key_fails():
    ser = Serializer()
    m = open_map(ser)
    with pytest.raises(EncodeError, match="expected string"):
        m.entry(1, "x")


def test_map_context_manager_ends():
    ser = Serializer()
    with open_map(ser) as m:
        m.entry("itty", "i")
        m.entry("bitty", "b")
    assert ser.getvalue() == expected_map()


def test_map_entry_after_end_fails():
    ser = Serializer()
    m = open_map(ser)
    m.end()
    assert ser.getvalue() == bytes([0x80])
    with pytest.raises(RuntimeError):
        m.entry("a", 1)


@pytest.mark.parametrize("length", [None, 5])
def test_sequence(length):
    ser = Serializer()
    seq = open_sequence(ser, length)
    for x in range(5):
        seq.element(x)
    seq.end()
    assert ser.getvalue() == bytes([0x95, 0x00, 0x01, 0x02, 0x03, 0x04])


def test_sequence_context_manager_mixed_items():
    ser = Serializer()
    with open_sequence(ser) as seq:
        seq.element(0)
        seq.element("c")
        seq.element("\0\0")
    assert ser.getvalue() == bytes([0x93, 0x00, 0xA1, ord("c"), 0xA2, 0x00, 0x00])


def test_sequence_sized_too_big():
    ser = Serializer()
    with pytest.raises(EncodeError):
        open_sequence(ser, 17_000_000)


def test_sequence_unsized_too_big():
    ser = Serializer()
    seq = open_sequence(ser)
    with pytest.raises(EncodeError, match="array too large"):
        for _ in range(MAX_DOC_SIZE + 1):
            seq.element(None)


def test_sequence_end_twice_fails():
    ser = Serializer()
    seq = open_sequence(ser)
    seq.end()
    assert ser.getvalue() == bytes([0x90])
    with pytest.raises(RuntimeError):
        seq.end()


def test_nested_map_in_sequence():
    ser = Serializer()
    with open_sequence(ser, 1) as seq:
        seq.element({"itty": "i", "bitty": "b"})
    assert ser.getvalue() == bytes([0x91]) + expected_map()