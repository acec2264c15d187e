from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from beamline.optics.elements import ComponentType, build_surfaces, interact
from beamline.optics.intersect import find_closest_intersection
from beamline.optics.schema import OpticalComponent, TraceSettings
from beamline.optics.vec2 import Vec2, direction_from_degrees

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActiveRay:
    origin: Vec2
    direction: Vec2  # unit
    intensity: float
    last_hit_id: Optional[str] = None


@dataclass(frozen=True)
class RaySegment:
    p1: Vec2
    p2: Vec2
    intensity: float

    def to_dict(self) -> Dict:
        return {
            "p1": {"x": self.p1.x, "y": self.p1.y},
            "p2": {"x": self.p2.x, "y": self.p2.y},
            "intensity": self.intensity,
        }


def seed_ray(emitter: OpticalComponent, offset: float) -> ActiveRay:
    d = direction_from_degrees(float(emitter.rotation))
    pos = Vec2(float(emitter.position.x), float(emitter.position.y))
    return ActiveRay(origin=pos + d * offset, direction=d, intensity=1.0, last_hit_id=emitter.id)


def calculate_ray_path(
    components: Sequence[OpticalComponent],
    settings: Optional[TraceSettings] = None,
) -> List[RaySegment]:
    """Trace every emitter's beam through the scene.

    Rays are advanced one bounce per round for all active rays at once, so
    segments come out round-major. Propagation stops at the bounce ceiling or
    once no ray is left above the intensity floor.
    """
    settings = settings or TraceSettings()

    emitters = [c for c in components if ComponentType.parse(c.type) is ComponentType.EMITTER]
    if not emitters:
        logger.debug("no emitters in scene; nothing to trace")
        return []

    surfaces = build_surfaces(components)
    active = [seed_ray(e, settings.emitter_offset) for e in emitters]
    segments: List[RaySegment] = []
    logger.debug("tracing %d emitter(s) against %d surface(s)", len(active), len(surfaces))

    for bounce in range(settings.max_bounces):
        if not active:
            break
        next_active: List[ActiveRay] = []
        for ray in active:
            hit = find_closest_intersection(ray, surfaces)
            if hit is None:
                end = ray.origin + ray.direction * settings.far_distance
                segments.append(RaySegment(p1=ray.origin, p2=end, intensity=ray.intensity))
                continue

            segments.append(RaySegment(p1=ray.origin, p2=hit.p_world, intensity=ray.intensity))
            for d2, factor in interact(hit.surface, hit.p_world, ray.direction, hit.n_world):
                next_active.append(
                    ActiveRay(
                        origin=hit.p_world,
                        direction=d2,
                        intensity=ray.intensity * factor,
                        last_hit_id=hit.surface.id,
                    )
                )
        active = [r for r in next_active if r.intensity > settings.min_intensity]
        logger.debug("bounce %d: %d ray(s) continue", bounce, len(active))

    if active:
        logger.debug("bounce ceiling %d reached with %d ray(s) active", settings.max_bounces, len(active))
    logger.debug("traced %d segment(s)", len(segments))
    return segments
