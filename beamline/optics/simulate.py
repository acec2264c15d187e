from __future__ import annotations

from typing import Dict, List

from beamline.optics.analysis import bounding_box, detector_readings
from beamline.optics.color import wavelength_to_rgb
from beamline.optics.elements import ComponentType
from beamline.optics.schema import Scene
from beamline.optics.tracer import calculate_ray_path


def simulate_scene(scene: Scene) -> Dict:
    segments = calculate_ray_path(scene.components, scene.settings)

    emitters: List[Dict] = []
    for c in scene.components:
        if c.kind is not ComponentType.EMITTER:
            continue
        emitters.append(
            {
                "id": c.id,
                "power": c.power,
                "wavelength": c.wavelength,
                "color": wavelength_to_rgb(c.wavelength) if c.wavelength is not None else None,
            }
        )

    return {
        "segments": [s.to_dict() for s in segments],
        "detectors": detector_readings(segments, scene.components),
        "bounds": bounding_box(scene.components),
        "emitters": emitters,
    }
