from __future__ import annotations

"""Header validation gate: magic, sizes, version, kind tag and their order."""
import struct

import pytest

from cxmf.api import decode_model, encode_model, load_from_memory
from cxmf.codec.constants import HEADER_SIZE, MAGIC, PREAMBLE_SIZE
from cxmf.codec.errors import (
    E_KIND,
    E_MAGIC,
    E_SIZE,
    E_TRUNCATED,
    FormatError,
    VersionError,
)
from cxmf.codec.header import Header, parse_header, read_preamble
from cxmf.codec.version import decode_version, get_version, make_version
from cxmf.logging import CollectingLogger
from cxmf.model.entities import ModelKind

from model_factory import make_static

_VERSION_OFFSET = 4
_COMPRESSED_OFFSET = 8
_BASE_OFFSET = 12


def _encoded() -> bytearray:
    return bytearray(encode_model(make_static("Cube")))


def _set_u32(buf: bytearray, offset: int, value: int) -> None:
    struct.pack_into("=I", buf, offset, value)


def test_magic_bytes_spell_cxmf_on_little_endian():
    data = encode_model(make_static())
    header = parse_header(data)
    assert header.magic == MAGIC
    assert struct.pack("<I", MAGIC) == b"CXMF"


def test_flipped_magic_byte_rejected():
    buf = _encoded()
    buf[0] ^= 0xFF
    log = CollectingLogger()
    assert load_from_memory(bytes(buf), log) is None
    assert "Invalid model magic!" in log
    with pytest.raises(FormatError) as exc:
        decode_model(bytes(buf))
    assert exc.value.code == E_MAGIC


def test_major_version_mismatch_rejected():
    buf = _encoded()
    _set_u32(buf, _VERSION_OFFSET, make_version(2, 2, 0))
    log = CollectingLogger()
    assert load_from_memory(bytes(buf), log) is None
    assert "Incorrect model version 2.2.0 | Supported: 1.2.X" in log


def test_minor_version_mismatch_rejected():
    buf = _encoded()
    _set_u32(buf, _VERSION_OFFSET, make_version(1, 3, 0))
    with pytest.raises(VersionError):
        decode_model(bytes(buf))


def test_patch_version_difference_accepted():
    buf = _encoded()
    _set_u32(buf, _VERSION_OFFSET, make_version(1, 2, 0xBEEF))
    model = decode_model(bytes(buf))
    assert decode_version(model.common.version) == (1, 2, 0xBEEF)


@pytest.mark.parametrize(
    "offset,value",
    [(_COMPRESSED_OFFSET, 0), (_BASE_OFFSET, 0), (_COMPRESSED_OFFSET, 0xFFFF)],
)
def test_size_gate(offset, value):
    buf = _encoded()
    _set_u32(buf, offset, value)
    log = CollectingLogger()
    assert load_from_memory(bytes(buf), log) is None
    assert "Invalid model size!" in log
    with pytest.raises(FormatError) as exc:
        decode_model(bytes(buf))
    assert exc.value.code == E_SIZE


def test_truncated_without_header_patch_hits_size_gate():
    data = bytes(_encoded()[:-10])
    with pytest.raises(FormatError) as exc:
        decode_model(data)
    assert exc.value.code == E_SIZE


def test_unknown_kind_tag_rejected():
    buf = _encoded()
    buf[HEADER_SIZE] = 7
    log = CollectingLogger()
    assert load_from_memory(bytes(buf), log) is None
    assert "Invalid model type!" in log
    with pytest.raises(FormatError) as exc:
        decode_model(bytes(buf))
    assert exc.value.code == E_KIND


@pytest.mark.parametrize("size", [0, 1, HEADER_SIZE, PREAMBLE_SIZE])
def test_too_short_buffers_rejected(size):
    data = bytes(_encoded()[:size])
    assert load_from_memory(data) is None
    with pytest.raises(FormatError) as exc:
        decode_model(data)
    assert exc.value.code == E_TRUNCATED


def test_none_buffer_returns_none():
    assert load_from_memory(None) is None


def test_gate_order_magic_before_version():
    buf = _encoded()
    buf[1] ^= 0x01
    _set_u32(buf, _VERSION_OFFSET, make_version(9, 9, 9))
    with pytest.raises(FormatError) as exc:
        decode_model(bytes(buf))
    assert exc.value.code == E_MAGIC


def test_gate_order_size_before_version_and_kind():
    buf = _encoded()
    _set_u32(buf, _BASE_OFFSET, 0)
    _set_u32(buf, _VERSION_OFFSET, make_version(9, 0, 0))
    buf[HEADER_SIZE] = 9
    with pytest.raises(FormatError) as exc:
        decode_model(bytes(buf))
    assert exc.value.code == E_SIZE


def test_gate_order_version_before_kind():
    buf = _encoded()
    _set_u32(buf, _VERSION_OFFSET, make_version(0, 1, 0))
    buf[HEADER_SIZE] = 9
    with pytest.raises(VersionError):
        decode_model(bytes(buf))


def test_read_preamble_returns_header_and_kind():
    data = _encoded()
    header, kind = read_preamble(bytes(data))
    assert kind == ModelKind.STATIC
    assert header.version == get_version()
    assert header.compressed_size == len(data) - PREAMBLE_SIZE
    assert header.version_triple == (1, 2, 0)


def test_header_pack_is_twenty_bytes_without_padding():
    h = Header(MAGIC, get_version(), 1, 2, 3)
    assert len(h.pack("little")) == HEADER_SIZE
    assert parse_header(h.pack("big"), "big") == h


def test_header_pack_rejects_out_of_range_flags():
    with pytest.raises(FormatError):
        Header(MAGIC, get_version(), 1, 2, 1 << 32).pack()


def test_version_packing():
    v = make_version(1, 2, 3)
    assert v == (1 << 24) | (2 << 16) | 3
    assert decode_version(v) == (1, 2, 3)
    assert decode_version(get_version()) == (1, 2, 0)
