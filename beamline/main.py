from __future__ import annotations

import logging

from fastapi import FastAPI

from beamline.optics.schema import Scene
from beamline.optics.simulate import simulate_scene

logger = logging.getLogger(__name__)

app = FastAPI(title="Beamline 2D")


@app.post("/api/trace")
def api_trace(scene: Scene):
    logger.debug("trace request with %d component(s)", len(scene.components))
    return simulate_scene(scene)
