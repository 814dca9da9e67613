import math

import pytest

from geoview.telemetry import (
    Command,
    DataType,
    Packet,
    decode,
    encode_message,
    encode_vector,
)


def test_message_wire_bytes():
    assert encode_message("1") == b"\x00\x00\x00\x00" + b"\x00\x00\x00\x01" + b"1"


def test_vector_wire_bytes():
    assert encode_vector([1.0]) == (
        b"\x00\x00\x00\x01" + b"\x00\x00\x00\x01" + b"\x3f\xf0\x00\x00\x00\x00\x00\x00"
    )


def test_empty_vector_header_only():
    assert encode_vector([]) == b"\x00\x00\x00\x01\x00\x00\x00\x00"


@pytest.mark.parametrize("text", ["Hello from client!", "", "0", "3", "Полученный вектор"])
def test_message_round_trip(text):
    packet = decode(encode_message(text))
    assert packet.type is DataType.MESSAGE
    assert packet.message == text


def test_vector_round_trip():
    values = [1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 35, 50, 0]
    packet = decode(encode_vector(values))
    assert packet.type is DataType.VECTOR
    assert packet.values == tuple(float(v) for v in values)


def test_vector_round_trip_special_values():
    values = [-0.5, math.pi, 1e300, -1e-300]
    assert decode(encode_vector(values)).values == tuple(values)


def test_vector_length_grows_by_eight_per_value():
    assert len(encode_vector([0.0] * 5)) - len(encode_vector([0.0] * 4)) == 8


def test_null_message_decodes_empty():
    packet = decode(b"\x00\x00\x00\x00\xff\xff\xff\xff")
    assert packet.message == ""


def test_packet_encode_matches_functions():
    assert Packet(DataType.MESSAGE, message="hi").encode() == encode_message("hi")
    assert Packet(DataType.VECTOR, values=(2.0, 3.0)).encode() == encode_vector([2.0, 3.0])


def test_unknown_type_rejected():
    with pytest.raises(ValueError):
        decode(b"\x00\x00\x00\x07\x00\x00\x00\x00")


def test_truncated_vector_rejected():
    data = encode_vector([1.0, 2.0])
    with pytest.raises(ValueError):
        decode(data[:-3])


def test_truncated_message_rejected():
    data = encode_message("hello")
    with pytest.raises(ValueError):
        decode(data[:-1])


def test_missing_header_rejected():
    with pytest.raises(ValueError):
        decode(b"\x00\x00")


def test_command_ids():
    assert [Command.NONE, Command.TAKEOFF, Command.LAND, Command.RETURN_TO_LAUNCH] == [0, 1, 2, 3]
    assert Command(2) is Command.LAND
    with pytest.raises(ValueError):
        Command(4)