from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

from beamline.optics.elements import Hit, build_surfaces

if TYPE_CHECKING:
    from beamline.optics.tracer import ActiveRay


def find_closest_intersection(ray: "ActiveRay", components: Iterable[object]) -> Optional[Hit]:
    """Nearest surface struck by `ray`, or None.

    `components` may hold schema components or prebuilt surfaces. The surface
    the ray just left is skipped. On an exact distance tie the earlier entry
    wins.
    """
    best: Optional[Hit] = None
    for s in build_surfaces(components):
        if s.id == ray.last_hit_id:
            continue
        h = s.intersect(ray.origin, ray.direction)
        if h is None:
            continue
        if best is None or h.t < best.t:
            best = h
    return best
