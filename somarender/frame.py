"""Per-frame state of the viewer: arguments, uniform block and mouse orbit."""

from __future__ import annotations

import re
import struct
import sys
from dataclasses import dataclass, field
from typing import Sequence

from somarender.camera import Camera, mat4_identity
from somarender.volume import VolumeMetadata

DEFAULT_VOLUME_PATH = "assets/volume.raw"
DEFAULT_DIMENSION = 256
DEFAULT_STEP_SIZE = 0.002
ORBIT_SENSITIVITY = 0.01
ZOOM_STEP = 0.1

# invViewProj, cameraPos, pad, resolution, pad, volumeSize, stepSize, tail padding
_UNIFORM_LAYOUT = struct.Struct("<16f3f4x2f8x3ff16x")
UNIFORM_SIZE = _UNIFORM_LAYOUT.size

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    value = int(match.group(1)) if match else 0
    return value & 0xFFFFFFFF


@dataclass(frozen=True)
class RenderArgs:
    """Volume file and its dimensions as given on the command line."""

    volume_path: str = DEFAULT_VOLUME_PATH
    width: int = DEFAULT_DIMENSION
    height: int = DEFAULT_DIMENSION
    depth: int = DEFAULT_DIMENSION


def parse_args(argv: Sequence[str] | None = None) -> RenderArgs:
    """Parse ``[path [width height depth]]``; dimensions need all three values."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        return RenderArgs()
    if len(args) >= 4:
        return RenderArgs(args[0], _atoi(args[1]), _atoi(args[2]), _atoi(args[3]))
    return RenderArgs(volume_path=args[0])


@dataclass
class UniformParams:
    """The uniform block read by the ray-casting shader."""

    inv_view_proj: tuple[float, ...] = field(default_factory=mat4_identity)
    camera_pos: tuple[float, float, float] = (0.0, 0.0, 0.0)
    resolution: tuple[float, float] = (0.0, 0.0)
    volume_size: tuple[float, float, float] = (0.0, 0.0, 0.0)
    step_size: float = DEFAULT_STEP_SIZE

    def pack(self) -> bytes:
        """Return the 128-byte little-endian buffer contents."""
        if len(self.inv_view_proj) != 16:
            raise ValueError("inv_view_proj must hold 16 values")
        return _UNIFORM_LAYOUT.pack(
            *self.inv_view_proj,
            *self.camera_pos,
            *self.resolution,
            *self.volume_size,
            self.step_size,
        )


def build_uniforms(
    camera: Camera,
    width: int,
    height: int,
    metadata: VolumeMetadata,
    step_size: float = DEFAULT_STEP_SIZE,
) -> UniformParams:
    """Fill the uniform block for one frame."""
    inv_view_proj, camera_pos = camera.inv_view_proj_and_camera_pos(width, height)
    return UniformParams(
        inv_view_proj=inv_view_proj,
        camera_pos=camera_pos,
        resolution=(float(width), float(height)),
        volume_size=(float(metadata.width), float(metadata.height), float(metadata.depth)),
        step_size=step_size,
    )


@dataclass
class OrbitInput:
    """Turns mouse drags and arrow keys into camera motion."""

    mouse_down: bool = False
    last_x: float = 0.0
    last_y: float = 0.0

    def update(
        self,
        camera: Camera,
        button_pressed: bool,
        x: float,
        y: float,
        key_up: bool = False,
        key_down: bool = False,
    ) -> None:
        """Apply one frame of input to ``camera``."""
        if button_pressed:
            if self.mouse_down:
                camera.orbit(
                    (x - self.last_x) * ORBIT_SENSITIVITY,
                    (self.last_y - y) * ORBIT_SENSITIVITY,
                )
            self.mouse_down = True
            self.last_x = x
            self.last_y = y
        else:
            self.mouse_down = False
        scroll = 0.0
        if key_up:
            scroll += ZOOM_STEP
        if key_down:
            scroll -= ZOOM_STEP
        camera.zoom(scroll)