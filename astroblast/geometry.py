"""Small 3D vector, quaternion and transform types."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import ClassVar, Iterator


@dataclass(frozen=True)
class Vec3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    ZERO: ClassVar[Vec3]
    X: ClassVar[Vec3]
    Y: ClassVar[Vec3]
    Z: ClassVar[Vec3]

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def distance(self, other: Vec3) -> float:
        return (self - other).length()

    def normalize_or_zero(self) -> Vec3:
        """Return the unit vector in this direction, or zero if there is none."""
        length = self.length()
        if length > 0.0 and math.isfinite(length):
            return self / length
        return Vec3.ZERO

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )


Vec3.ZERO = Vec3(0.0, 0.0, 0.0)
Vec3.X = Vec3(1.0, 0.0, 0.0)
Vec3.Y = Vec3(0.0, 1.0, 0.0)
Vec3.Z = Vec3(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Quat:
    """A rotation quaternion stored as (x, y, z, w)."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    IDENTITY: ClassVar[Quat]

    @classmethod
    def from_axis_angle(cls, axis: Vec3, angle: float) -> Quat:
        """Rotation of ``angle`` radians about ``axis``."""
        unit = axis.normalize_or_zero()
        if unit == Vec3.ZERO:
            raise ValueError("rotation axis must be non-zero")
        half = angle * 0.5
        s = math.sin(half)
        return cls(unit.x * s, unit.y * s, unit.z * s, math.cos(half))

    @classmethod
    def from_rotation_axes(cls, x_axis: Vec3, y_axis: Vec3, z_axis: Vec3) -> Quat:
        """Rotation whose matrix has the given orthonormal columns."""
        m00, m10, m20 = x_axis
        m01, m11, m21 = y_axis
        m02, m12, m22 = z_axis
        trace = m00 + m11 + m22
        if trace > 0.0:
            s = math.sqrt(trace + 1.0) * 2.0
            return cls((m21 - m12) / s, (m02 - m20) / s, (m10 - m01) / s, 0.25 * s)
        if m00 > m11 and m00 > m22:
            s = math.sqrt(1.0 + m00 - m11 - m22) * 2.0
            return cls(0.25 * s, (m01 + m10) / s, (m02 + m20) / s, (m21 - m12) / s)
        if m11 > m22:
            s = math.sqrt(1.0 + m11 - m00 - m22) * 2.0
            return cls((m01 + m10) / s, 0.25 * s, (m12 + m21) / s, (m02 - m20) / s)
        s = math.sqrt(1.0 + m22 - m00 - m11) * 2.0
        return cls((m02 + m20) / s, (m12 + m21) / s, 0.25 * s, (m10 - m01) / s)

    def __mul__(self, other: Quat) -> Quat:
        x1, y1, z1, w1 = self.x, self.y, self.z, self.w
        x2, y2, z2, w2 = other.x, other.y, other.z, other.w
        return Quat(
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
        )

    def rotate(self, vector: Vec3) -> Vec3:
        """Apply this rotation to ``vector``."""
        u = Vec3(self.x, self.y, self.z)
        t = u.cross(vector) * 2.0
        return vector + t * self.w + u.cross(t)

    def normalized(self) -> Quat:
        norm = math.sqrt(self.x**2 + self.y**2 + self.z**2 + self.w**2)
        if norm == 0.0:
            raise ValueError("cannot normalize a zero quaternion")
        return Quat(self.x / norm, self.y / norm, self.z / norm, self.w / norm)


Quat.IDENTITY = Quat()


def _any_orthonormal(vector: Vec3) -> Vec3:
    helper = Vec3.X if abs(vector.x) < 0.9 else Vec3.Y
    return vector.cross(helper).normalize_or_zero()


@dataclass
class Transform:
    """Position and orientation of an object in the world."""

    translation: Vec3 = field(default_factory=Vec3)
    rotation: Quat = field(default_factory=Quat)

    @classmethod
    def from_translation(cls, translation: Vec3) -> Transform:
        return cls(translation=translation)

    @classmethod
    def from_xyz(cls, x: float, y: float, z: float) -> Transform:
        return cls(translation=Vec3(x, y, z))

    def looking_at(self, target: Vec3, up: Vec3) -> Transform:
        """A copy of this transform rotated so that its forward points at ``target``."""
        back = (self.translation - target).normalize_or_zero()
        if back == Vec3.ZERO:
            back = Vec3.Z
        up_unit = up.normalize_or_zero()
        if up_unit == Vec3.ZERO:
            up_unit = Vec3.Y
        right = up_unit.cross(back).normalize_or_zero()
        if right == Vec3.ZERO:
            right = _any_orthonormal(up_unit)
        true_up = back.cross(right)
        return Transform(self.translation, Quat.from_rotation_axes(right, true_up, back))

    def rotate_y(self, angle: float) -> None:
        """Rotate about the world Y axis."""
        self.rotation = Quat.from_axis_angle(Vec3.Y, angle) * self.rotation

    def rotate_local_z(self, angle: float) -> None:
        """Rotate about this transform's own Z axis."""
        self.rotation = self.rotation * Quat.from_axis_angle(Vec3.Z, angle)

    def forward(self) -> Vec3:
        return self.rotation.rotate(-Vec3.Z)