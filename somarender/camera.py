"""Orbit camera and the 4x4 matrix helpers it relies on.

Matrices are flat tuples of 16 floats. Element ``row * 4 + col`` is the
entry at that row and column as seen by :func:`mat4_multiply`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

Mat4 = Tuple[float, ...]
Vec3 = Tuple[float, float, float]

MAX_ELEVATION = 3.14159 * 0.5 - 0.01
MIN_DISTANCE = 0.5
MAX_DISTANCE = 20.0
_SINGULAR_EPSILON = 1e-8
_NORMALIZE_EPSILON = 1e-6


def mat4_identity() -> Mat4:
    """Return the 4x4 identity matrix."""
    return tuple(1.0 if row == col else 0.0 for row in range(4) for col in range(4))


def _rows(m: Sequence[float]) -> list[Sequence[float]]:
    if len(m) != 16:
        raise ValueError(f"expected 16 matrix elements, got {len(m)}")
    return [m[r * 4:(r + 1) * 4] for r in range(4)]


def mat4_multiply(a: Sequence[float], b: Sequence[float]) -> Mat4:
    """Return the product ``a * b``."""
    a_rows = _rows(a)
    b_cols = list(zip(*_rows(b)))
    return tuple(
        sum(x * y for x, y in zip(row, col)) for row in a_rows for col in b_cols
    )


def _det3(m: Sequence[Sequence[float]]) -> float:
    (a, b, c), (d, e, f), (g, h, i) = m
    return a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)


def mat4_invert(m: Sequence[float]) -> Mat4:
    """Return the inverse of ``m``; a (near) singular matrix yields the identity."""
    rows = _rows(m)

    def cofactor(r: int, c: int) -> float:
        minor = [
            [v for j, v in enumerate(row) if j != c]
            for i, row in enumerate(rows)
            if i != r
        ]
        sign = -1.0 if (r + c) % 2 else 1.0
        return sign * _det3(minor)

    cof = [[cofactor(r, c) for c in range(4)] for r in range(4)]
    det = sum(rows[0][c] * cof[0][c] for c in range(4))
    if abs(det) < _SINGULAR_EPSILON:
        return mat4_identity()
    return tuple(cof[c][r] / det for r in range(4) for c in range(4))


def _normalize(v: Vec3) -> Vec3:
    length = math.sqrt(sum(x * x for x in v))
    if length > _NORMALIZE_EPSILON:
        return (v[0] / length, v[1] / length, v[2] / length)
    return v


def _cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


@dataclass
class Camera:
    """A camera orbiting the origin on a sphere of radius ``distance``."""

    distance: float = 2.5
    azimuth: float = 0.0
    elevation: float = 0.3
    fov_y_rad: float = 0.8
    near: float = 0.01
    far: float = 100.0

    def orbit(self, d_azimuth: float, d_elevation: float) -> None:
        """Rotate around the origin, keeping the elevation short of the poles."""
        self.azimuth += d_azimuth
        self.elevation = max(-MAX_ELEVATION, min(MAX_ELEVATION, self.elevation + d_elevation))

    def zoom(self, delta: float) -> None:
        """Move towards the origin by ``delta`` within the allowed distance range."""
        self.distance = max(MIN_DISTANCE, min(MAX_DISTANCE, self.distance - delta))

    @property
    def eye(self) -> Vec3:
        """The camera position in world space."""
        cy = math.cos(self.elevation)
        return (
            self.distance * math.cos(self.azimuth) * cy,
            self.distance * math.sin(self.elevation),
            self.distance * math.sin(self.azimuth) * cy,
        )

    def view_projection(self, viewport_width: int, viewport_height: int) -> tuple[Mat4, Mat4]:
        """Return the ``(view, projection)`` matrices for the given viewport."""
        eye = self.eye
        up = (0.0, 1.0, 0.0)
        f = _normalize((-eye[0], -eye[1], -eye[2]))
        s = _normalize(_cross(f, up))
        u = _cross(s, f)

        view = (
            s[0], u[0], -f[0], 0.0,
            s[1], u[1], -f[1], 0.0,
            s[2], u[2], -f[2], 0.0,
            -_dot(s, eye), -_dot(u, eye), _dot(f, eye), 1.0,
        )

        aspect = float(viewport_width) / float(viewport_height if viewport_height > 0 else 1)
        tan_half_fov = math.tan(self.fov_y_rad * 0.5)
        n, fa = self.near, self.far
        proj = (
            1.0 / (aspect * tan_half_fov), 0.0, 0.0, 0.0,
            0.0, 1.0 / tan_half_fov, 0.0, 0.0,
            0.0, 0.0, -(fa + n) / (fa - n), -1.0,
            0.0, 0.0, -(2.0 * fa * n) / (fa - n), 0.0,
        )
        return view, proj

    def inv_view_proj_and_camera_pos(
        self, viewport_width: int, viewport_height: int
    ) -> tuple[Mat4, Vec3]:
        """Return the inverse view-projection matrix and the camera position."""
        view, proj = self.view_projection(viewport_width, viewport_height)
        inv_view_proj = mat4_invert(mat4_multiply(proj, view))
        inv_view = mat4_invert(view)
        return inv_view_proj, (inv_view[12], inv_view[13], inv_view[14])