import pytest

from aptosclient.address import ACCOUNT_ONE, AccountAddress
from aptosclient.bcs import BcsError, Serializer, deserialize, serialize
from aptosclient.script import Script, ScriptArgument, ScriptArgumentVariant
from aptosclient.typetag import TypeTag, U64Tag, new_string_tag

V = ScriptArgumentVariant


@pytest.mark.parametrize(
    "variant, value",
    [
        (V.U8, 255),
        (V.U16, 65535),
        (V.U32, 4_000_000_000),
        (V.U64, 2**64 - 1),
        (V.U128, 2**127 + 5),
        (V.U256, 2**255 + 7),
        (V.ADDRESS, AccountAddress.from_string_relaxed("0xabc123")),
        (V.U8_VECTOR, b"\x01\x02\x03"),
        (V.U8_VECTOR, b""),
        (V.BOOL, True),
        (V.BOOL, False),
    ],
)
def test_argument_round_trip(variant, value):
    arg = ScriptArgument(variant, value)
    back = deserialize(ScriptArgument, serialize(arg))
    assert back == arg
    assert back.variant == variant


def test_argument_wire_bytes():
    assert serialize(ScriptArgument(V.BOOL, True)) == b"\x05\x01"
    assert serialize(ScriptArgument(V.ADDRESS, ACCOUNT_ONE)) == b"\x03" + ACCOUNT_ONE.data


@pytest.mark.parametrize(
    "variant, value",
    [
        (V.U8, "x"),
        (V.U64, True),
        (V.U128, 1.5),
        (V.ADDRESS, b"\x00" * 32),
        (V.U8_VECTOR, "abc"),
        (V.BOOL, 1),
    ],
)
def test_argument_wrong_type(variant, value):
    with pytest.raises(BcsError):
        serialize(ScriptArgument(variant, value))


def test_argument_out_of_range():
    with pytest.raises(BcsError):
        serialize(ScriptArgument(V.U8, 256))
    with pytest.raises(BcsError):
        serialize(ScriptArgument(V.U64, -1))


def test_argument_unknown_variant_on_decode():
    ser = Serializer()
    ser.uleb128(99)
    with pytest.raises(BcsError):
        deserialize(ScriptArgument, ser.to_bytes())


def test_argument_unknown_variant_on_construct():
    with pytest.raises(ValueError):
        ScriptArgument(42, 0)


def test_script_round_trip():
    script = Script(
        code=b"\xa1\x1c\xeb\x0b\x01\x02",
        arg_types=[TypeTag(U64Tag()), TypeTag(new_string_tag())],
        args=[
            ScriptArgument(V.U64, 10_000),
            ScriptArgument(V.ADDRESS, ACCOUNT_ONE),
            ScriptArgument(V.U8_VECTOR, b"hello"),
        ],
    )
    data = serialize(script)
    assert data.startswith(b"\x06" + script.code)
    assert deserialize(Script, data) == script


def test_empty_script_round_trip():
    script = Script(code=b"")
    data = serialize(script)
    assert data == b"\x00\x00\x00"
    assert deserialize(Script, data) == script


def test_script_truncated():
    script = Script(code=b"\x01\x02", args=[ScriptArgument(V.U32, 7)])
    with pytest.raises(BcsError):
        deserialize(Script, serialize(script)[:-1])