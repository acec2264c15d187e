from __future__ import annotations

from dataclasses import dataclass
import math

EPS = 1e-12


@dataclass(frozen=True)
class Vec2:
    x: float
    y: float

    def __add__(self, o: "Vec2") -> "Vec2":
        return Vec2(self.x + o.x, self.y + o.y)

    def __sub__(self, o: "Vec2") -> "Vec2":
        return Vec2(self.x - o.x, self.y - o.y)

    def __mul__(self, s: float) -> "Vec2":
        return Vec2(self.x * s, self.y * s)

    __rmul__ = __mul__

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)

    def dot(self, o: "Vec2") -> float:
        return self.x * o.x + self.y * o.y

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Vec2":
        n = self.norm()
        if n < EPS:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / n, self.y / n)

    def perp(self) -> "Vec2":
        return Vec2(-self.y, self.x)


def add(a: Vec2, b: Vec2) -> Vec2:
    return a + b


def subtract(a: Vec2, b: Vec2) -> Vec2:
    return a - b


def scale(v: Vec2, s: float) -> Vec2:
    return v * s


def normalize(v: Vec2) -> Vec2:
    return v.normalized()


def dot(a: Vec2, b: Vec2) -> float:
    return a.dot(b)


def perpendicular(v: Vec2) -> Vec2:
    return v.perp()


def to_radians(degrees: float) -> float:
    return degrees * (math.pi / 180.0)


def rotate(v: Vec2, theta: float) -> Vec2:
    c = math.cos(theta)
    s = math.sin(theta)
    return Vec2(c * v.x - s * v.y, s * v.x + c * v.y)


def direction_from_degrees(degrees: float) -> Vec2:
    """Unit vector pointing along ``degrees``, measured from +x towards +y."""
    a = to_radians(degrees)
    return Vec2(math.cos(a), math.sin(a))
