import struct

import pytest

from somarender.volume import (
    Volume,
    VolumeError,
    VolumeMetadata,
    load_raw,
    load_raw_with_header,
)


def test_load_raw_8bit(tmp_path):
    payload = bytes(range(24))
    path = tmp_path / "v.raw"
    path.write_bytes(payload)
    vol = load_raw(path, 2, 3, 4)
    assert vol.data == payload
    assert vol.metadata == VolumeMetadata(2, 3, 4, False)


def test_load_raw_16bit_size(tmp_path):
    payload = bytes(2 * 2 * 2 * 2)
    path = tmp_path / "v.raw"
    path.write_bytes(payload)
    vol = load_raw(path, 2, 2, 2, True)
    assert vol.metadata.is_16bit
    assert len(vol.data) == vol.metadata.byte_size


def test_load_raw_size_mismatch(tmp_path):
    path = tmp_path / "v.raw"
    path.write_bytes(bytes(10))
    with pytest.raises(VolumeError):
        load_raw(path, 2, 2, 2)


def test_load_raw_missing_file(tmp_path):
    with pytest.raises(VolumeError):
        load_raw(tmp_path / "absent.raw", 1, 1, 1)


def test_header_round_trip(tmp_path):
    body = bytes(range(2 * 3 * 2))
    path = tmp_path / "h.raw"
    path.write_bytes(struct.pack("<4I", 2, 3, 2, 8) + body)
    vol = load_raw_with_header(path)
    assert vol.metadata == VolumeMetadata(2, 3, 2, False)
    assert vol.data == body


def test_header_16bit(tmp_path):
    body = bytes(range(8))
    path = tmp_path / "h.raw"
    path.write_bytes(struct.pack("<4I", 2, 2, 1, 16) + body)
    vol = load_raw_with_header(path)
    assert vol.metadata.is_16bit
    assert vol.data == body


def test_header_too_short(tmp_path):
    path = tmp_path / "h.raw"
    path.write_bytes(bytes(15))
    with pytest.raises(VolumeError):
        load_raw_with_header(path)


def test_header_body_mismatch(tmp_path):
    path = tmp_path / "h.raw"
    path.write_bytes(struct.pack("<4I", 4, 4, 4, 8) + bytes(10))
    with pytest.raises(VolumeError):
        load_raw_with_header(path)


def test_to_r8_keeps_high_byte():
    samples = struct.pack("<2H", 0x1234, 0x5678)
    vol = Volume(VolumeMetadata(2, 1, 1, True), samples)
    assert vol.to_r8() == bytes([0x12, 0x56])


def test_to_r8_passes_8bit_through():
    vol = Volume(VolumeMetadata(3, 1, 1, False), b"abc")
    assert vol.to_r8() == b"abc"


def test_to_r8_length_equals_voxel_count():
    meta = VolumeMetadata(3, 2, 2, True)
    vol = Volume(meta, bytes(meta.byte_size))
    assert len(vol.to_r8()) == meta.voxel_count


def test_to_r8_empty_raises():
    with pytest.raises(VolumeError):
        Volume(VolumeMetadata(), b"").to_r8()