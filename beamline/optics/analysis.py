from __future__ import annotations

from typing import Dict, Iterable, Sequence, Set

import numpy as np

from beamline.optics.elements import ComponentType
from beamline.optics.schema import OpticalComponent
from beamline.optics.tracer import RaySegment

# Detectors are drawn 3 * size across; a segment ending inside that disc counts as a hit.
DETECTOR_VISUAL_SIZE = 3.0

# Empty-scene bounds and per-component padding (multiples of size).
DEFAULT_BOUNDS = {"min_x": 0.0, "min_y": 0.0, "max_x": 10.0, "max_y": 10.0}
BOUNDS_PAD = 2.0


def capture_radius(size: float) -> float:
    return size * DETECTOR_VISUAL_SIZE * 0.5


def _end_points(segments: Sequence[RaySegment]) -> np.ndarray:
    return np.array([[s.p2.x, s.p2.y] for s in segments], dtype=float).reshape(-1, 2)


def detector_readings(
    segments: Sequence[RaySegment],
    components: Iterable[OpticalComponent],
) -> Dict[str, Dict]:
    """Per-detector summary of the segments terminating on it.

    Returns ``{detector_id: {"hit", "ray_count", "intensity"}}``.
    """
    ends = _end_points(segments)
    weights = np.array([s.intensity for s in segments], dtype=float)

    out: Dict[str, Dict] = {}
    for c in components:
        if ComponentType.parse(c.type) is not ComponentType.DETECTOR:
            continue
        center = np.array([c.position.x, c.position.y], dtype=float)
        dist = np.linalg.norm(ends - center, axis=1)
        mask = dist < capture_radius(float(c.size))
        out[c.id] = {
            "hit": bool(mask.any()),
            "ray_count": int(mask.sum()),
            "intensity": float(weights[mask].sum()),
        }
    return out


def hit_detector_ids(segments: Sequence[RaySegment], components: Iterable[OpticalComponent]) -> Set[str]:
    return {k for k, v in detector_readings(segments, components).items() if v["hit"]}


def bounding_box(components: Sequence[OpticalComponent]) -> Dict[str, float]:
    """Axis-aligned bounds of the scene, padded by each component's extent."""
    if not components:
        return dict(DEFAULT_BOUNDS)

    pos = np.array([[c.position.x, c.position.y] for c in components], dtype=float)
    pad = np.array([float(c.size) * BOUNDS_PAD for c in components], dtype=float)[:, None]
    lo = np.min(pos - pad, axis=0)
    hi = np.max(pos + pad, axis=0)
    return {
        "min_x": float(lo[0]),
        "min_y": float(lo[1]),
        "max_x": float(hi[0]),
        "max_y": float(hi[1]),
    }
