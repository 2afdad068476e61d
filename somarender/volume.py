"""Loading raw voxel volumes from disk."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from os import PathLike
from typing import Union

PathArg = Union[str, "PathLike[str]"]

_HEADER = struct.Struct("<4I")


class VolumeError(Exception):
    """Raised when a volume file cannot be read or does not match its size."""


@dataclass(frozen=True)
class VolumeMetadata:
    """Dimensions and sample width of a volume."""

    width: int = 0
    height: int = 0
    depth: int = 0
    is_16bit: bool = False

    @property
    def voxel_count(self) -> int:
        return self.width * self.height * self.depth

    @property
    def byte_size(self) -> int:
        return self.voxel_count * (2 if self.is_16bit else 1)


@dataclass(frozen=True)
class Volume:
    """Voxel samples together with their metadata."""

    metadata: VolumeMetadata
    data: bytes

    def to_r8(self) -> bytes:
        """Return one byte per voxel; 16-bit samples keep their high byte."""
        if not self.data:
            raise VolumeError("volume holds no data")
        if self.metadata.is_16bit:
            return bytes(self.data[1::2])
        return bytes(self.data)


def _read(path: PathArg) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as exc:
        raise VolumeError(f"cannot read {path}: {exc}") from exc


def load_raw(
    path: PathArg, width: int, height: int, depth: int, bits16: bool = False
) -> Volume:
    """Load a headerless volume whose size must match the given dimensions."""
    meta = VolumeMetadata(width, height, depth, bits16)
    raw = _read(path)
    if len(raw) != meta.byte_size:
        raise VolumeError(
            f"{path}: file holds {len(raw)} bytes, expected {meta.byte_size}"
        )
    return Volume(meta, raw)


def load_raw_with_header(path: PathArg) -> Volume:
    """Load a volume preceded by a 16-byte header: width, height, depth, bits."""
    raw = _read(path)
    if len(raw) < _HEADER.size:
        raise VolumeError(f"{path}: file too short for a header")
    width, height, depth, bits = _HEADER.unpack_from(raw)
    meta = VolumeMetadata(width, height, depth, bits == 16)
    body = raw[_HEADER.size:]
    if len(body) != meta.byte_size:
        raise VolumeError(
            f"{path}: body holds {len(body)} bytes, expected {meta.byte_size}"
        )
    return Volume(meta, body)