from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from beamline.optics.elements import ComponentType


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class OpticalComponent(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    # Free-form so that unknown kinds survive validation; the tracer skips them.
    type: str
    position: Position
    rotation: float = Field(default=0.0, validate_default=True, description="Orientation (degrees).")
    size: float = Field(default=1.0, gt=0.0, description="Multiplier on the visual/physical extent.")
    reflectivity: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    transmissivity: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    focal_length: Optional[float] = Field(default=None, gt=0.0, alias="focalLength")
    power: Optional[float] = Field(default=None, ge=0.0)
    wavelength: Optional[float] = Field(default=None, gt=0.0, description="Wavelength (nm).")

    @field_validator("type", mode="before")
    @classmethod
    def _canonical_type(cls, v):
        kind = ComponentType.parse(v)
        return kind.value if kind is not None else v

    @field_validator("rotation")
    @classmethod
    def _emitter_rotation(cls, v: float, info: ValidationInfo) -> float:
        # Emitters reserve 0 degrees; the same direction is spelled 360.
        if v == 0 and ComponentType.parse(info.data.get("type")) is ComponentType.EMITTER:
            return 360.0
        return v

    @property
    def kind(self) -> Optional[ComponentType]:
        return ComponentType.parse(self.type)


class TraceSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_bounces: int = Field(default=30, ge=0, le=200)
    min_intensity: float = Field(
        default=0.01,
        ge=0.0,
        lt=1.0,
        description="Continuation rays at or below this intensity are dropped.",
    )
    far_distance: float = Field(default=500.0, gt=0.0, description="Length of a segment that hits nothing.")
    emitter_offset: float = Field(default=1e-3, ge=0.0)


class Scene(BaseModel):
    components: List[OpticalComponent] = Field(default_factory=list)
    settings: TraceSettings = Field(default_factory=TraceSettings)

    @model_validator(mode="after")
    def _unique_ids(self) -> "Scene":
        seen = set()
        for c in self.components:
            if c.id in seen:
                raise ValueError(f"duplicate component id: {c.id!r}")
            seen.add(c.id)
        return self
