from __future__ import annotations

from dataclasses import dataclass
from beamline.optics.vec2 import Vec2, rotate, to_radians


@dataclass(frozen=True)
class Pose2:
    pos: Vec2
    theta: float  # radians

    @classmethod
    def from_degrees(cls, pos: Vec2, degrees: float) -> "Pose2":
        return cls(pos=pos, theta=to_radians(degrees))

    def world_to_local(self, p: Vec2) -> Vec2:
        return rotate(p - self.pos, -self.theta)

    def local_to_world(self, p: Vec2) -> Vec2:
        return rotate(p, self.theta) + self.pos

    def dir_world_to_local(self, d: Vec2) -> Vec2:
        return rotate(d, -self.theta)

    def dir_local_to_world(self, d: Vec2) -> Vec2:
        return rotate(d, self.theta)

    @property
    def normal(self) -> Vec2:
        """Local +x expressed in world coordinates."""
        return self.dir_local_to_world(Vec2(1.0, 0.0))

