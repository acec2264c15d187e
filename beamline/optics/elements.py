from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Optional, Tuple

from beamline.optics.transform import Pose2
from beamline.optics.vec2 import Vec2

if TYPE_CHECKING:
    from beamline.optics.schema import OpticalComponent


# Ray/surface solver tolerances.
PARALLEL_EPS = 1e-6
FORWARD_EPS = 1e-4

# Rendered surface length is 2.5 * size; the hit test must use the same footprint.
VISUAL_LENGTH = 2.5

DEFAULT_REFLECTIVITY = 1.0
DEFAULT_TRANSMISSIVITY = 0.5
DEFAULT_FOCAL_LENGTH = 1.0


class ComponentType(str, Enum):
    EMITTER = "EMITTER"
    MIRROR = "MIRROR"
    CONVEX_LENS = "CONVEX_LENS"
    CONCAVE_LENS = "CONCAVE_LENS"
    SPLITTER = "SPLITTER"
    DETECTOR = "DETECTOR"

    @classmethod
    def parse(cls, value: object) -> Optional["ComponentType"]:
        """Resolve a type tag, accepting the editor's legacy spellings.

        Returns None for anything unrecognised.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip().upper()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return None


_ALIASES = {"LASER": "EMITTER", "BEAM_SPLITTER": "SPLITTER"}

# Angle (degrees) of each kind's surface normal in its unrotated frame.
# The splitter's surface is the 45 degree diagonal.
BASE_NORMAL_ANGLE: Dict[ComponentType, float] = {
    ComponentType.MIRROR: 0.0,
    ComponentType.CONVEX_LENS: 0.0,
    ComponentType.CONCAVE_LENS: 0.0,
    ComponentType.DETECTOR: 0.0,
    ComponentType.SPLITTER: -45.0,
}


def half_extent(size: float) -> float:
    return size * VISUAL_LENGTH * 0.5


def facing_normal(d: Vec2, n: Vec2) -> Vec2:
    """Flip ``n`` so that it opposes the incoming direction ``d``."""
    if d.dot(n) > 0:
        return -n
    return n


def reflect_dir(d: Vec2, n: Vec2) -> Vec2:
    return (d - n * (2.0 * d.dot(n))).normalized()


def thin_lens_dir(d: Vec2, offset: Vec2, n: Vec2, f: float) -> Vec2:
    """Paraxial thin-lens kick.

    `offset` is the hit point relative to the lens centre, `n` the ray-facing
    normal. The principal axis runs along the surface, perpendicular to `n`.
    """
    axis = n.perp()
    h = offset.dot(axis)
    return (d - axis * (h / f)).normalized()


@dataclass(frozen=True)
class Hit:
    t: float
    p_world: Vec2
    n_world: Vec2
    surface: "Surface"


@dataclass(frozen=True)
class Surface:
    """Flat interactive surface of a placed component.

    The surface is the local line x=0 of `pose`; its normal is local +x and
    the tangent local +y.
    """

    id: str
    kind: ComponentType
    pose: Pose2
    half_extent: float
    reflectivity: float = DEFAULT_REFLECTIVITY
    transmissivity: float = DEFAULT_TRANSMISSIVITY
    focal_length: float = DEFAULT_FOCAL_LENGTH

    @classmethod
    def from_component(cls, c: "OpticalComponent") -> Optional["Surface"]:
        kind = ComponentType.parse(c.type)
        if kind is None or kind not in BASE_NORMAL_ANGLE:
            return None
        pos = Vec2(float(c.position.x), float(c.position.y))
        return cls(
            id=c.id,
            kind=kind,
            pose=Pose2.from_degrees(pos, float(c.rotation) + BASE_NORMAL_ANGLE[kind]),
            half_extent=half_extent(float(c.size)),
            reflectivity=_or_default(c.reflectivity, DEFAULT_REFLECTIVITY),
            transmissivity=_or_default(c.transmissivity, DEFAULT_TRANSMISSIVITY),
            focal_length=_or_default(c.focal_length, DEFAULT_FOCAL_LENGTH),
        )

    def intersect(self, ro: Vec2, rd: Vec2) -> Optional[Hit]:
        ro_l = self.pose.world_to_local(ro)
        rd_l = self.pose.dir_world_to_local(rd)
        if abs(rd_l.x) < PARALLEL_EPS:
            return None
        t = -ro_l.x / rd_l.x
        if t < FORWARD_EPS:
            return None
        y = ro_l.y + t * rd_l.y
        if abs(y) > self.half_extent:
            return None
        return Hit(t=t, p_world=ro + rd * t, n_world=self.pose.normal, surface=self)


def _or_default(value: Optional[float], default: float) -> float:
    return default if value is None else float(value)


# Interaction rules. Each returns (direction, intensity factor) pairs for the
# continuation rays; `n` is already the ray-facing normal.
Rule = Callable[[Surface, Vec2, Vec2, Vec2], List[Tuple[Vec2, float]]]


def _absorb(s: Surface, p: Vec2, d: Vec2, n: Vec2) -> List[Tuple[Vec2, float]]:
    return []


def _mirror(s: Surface, p: Vec2, d: Vec2, n: Vec2) -> List[Tuple[Vec2, float]]:
    return [(reflect_dir(d, n), s.reflectivity)]


def _splitter(s: Surface, p: Vec2, d: Vec2, n: Vec2) -> List[Tuple[Vec2, float]]:
    return [(reflect_dir(d, n), s.reflectivity), (d, s.transmissivity)]


def _lens(s: Surface, p: Vec2, d: Vec2, n: Vec2) -> List[Tuple[Vec2, float]]:
    f = s.focal_length if s.kind is ComponentType.CONVEX_LENS else -s.focal_length
    return [(thin_lens_dir(d, p - s.pose.pos, n, f), 1.0)]


INTERACTIONS: Dict[ComponentType, Rule] = {
    ComponentType.DETECTOR: _absorb,
    ComponentType.MIRROR: _mirror,
    ComponentType.SPLITTER: _splitter,
    ComponentType.CONVEX_LENS: _lens,
    ComponentType.CONCAVE_LENS: _lens,
}


def interact(s: Surface, p: Vec2, d: Vec2, n: Vec2) -> List[Tuple[Vec2, float]]:
    """Continuation rays for a ray travelling along `d` that struck `s` at `p`."""
    rule = INTERACTIONS.get(s.kind)
    if rule is None:
        return []
    return rule(s, p, d, facing_normal(d, n))


def build_surfaces(components: Iterable[object]) -> List[Surface]:
    """Intersectable surfaces of a scene; emitters and unknown kinds are dropped."""
    out: List[Surface] = []
    for c in components:
        s = c if isinstance(c, Surface) else Surface.from_component(c)
        if s is not None:
            out.append(s)
    return out
