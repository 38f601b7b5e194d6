"""Configuration models for the randomizer."""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, Field, ValidationInfo, field_validator


class DrawOptions(BaseModel):
    """Bounds and output mode for a single bounded draw."""

    min: float = Field(default=0.0, description="Inclusive lower bound of the draw.")
    max: float = Field(default=1.0, description="Exclusive upper bound of the draw.")
    success_threshold: Optional[float] = Field(
        default=None,
        description="When set, the draw returns ``raw >= success_threshold``.",
    )
    decimal: Union[bool, int, None] = Field(
        default=None,
        description="``True`` or a number of places returns the draw as a formatted string.",
    )
    reset_above: Optional[float] = Field(
        default=None,
        description="Draws strictly above this value trigger the reset callback.",
    )

    @field_validator("decimal")
    @classmethod
    def _validate_decimal(cls, value: Union[bool, int, None]) -> Union[bool, int, None]:
        if isinstance(value, bool) or value is None:
            return value
        if value < 0:
            raise ValueError("decimal places cannot be negative")
        return value

    def merged(self, overrides: dict[str, Any]) -> "DrawOptions":
        """Return a copy with non-``None`` overrides applied."""

        update = {key: value for key, value in overrides.items() if value is not None}
        if not update:
            return self
        return self.model_validate({**self.model_dump(), **update})


class RampOptions(DrawOptions):
    """Draw options plus the trial count used by the escalation curves."""

    trials: Optional[int] = Field(
        default=None,
        ge=0,
        description="Trial count; defaults to the randomizer's own counter.",
    )


class TelemetryConfig(BaseModel):
    """Telemetry emission settings."""

    enabled: bool = False
    sample_rate: float = Field(default=1.0, ge=0.0, le=1.0)


class RandomizerConfig(BaseModel):
    """Top-level configuration object for the package."""

    draw: DrawOptions = Field(default_factory=DrawOptions)
    rapidity: float = Field(
        default=1.0,
        description="Default rapidity for the ramps when a call does not supply one.",
    )
    decimal_places: int = Field(
        default=2,
        ge=0,
        description="Places used when a caller asks for ``decimal=True``.",
    )
    order_ceiling: float = Field(default=10, description="Highest weight assigned by from_order.")
    order_floor: Optional[float] = Field(
        default=None,
        description="Lowest weight assigned by from_order; derived from the ceiling when unset.",
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for a private random source; ignored when a random_fn is injected.",
    )
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    @field_validator("order_floor")
    @classmethod
    def _validate_floor(cls, value: Optional[float], info: ValidationInfo) -> Optional[float]:
        ceiling = info.data.get("order_ceiling", 10)
        if value is not None and value >= ceiling:
            raise ValueError("order_floor must be smaller than order_ceiling")
        return value

    def resolve_draw(
        self,
        options: Optional[DrawOptions],
        overrides: dict[str, Any],
        *,
        model: type[DrawOptions] = DrawOptions,
    ) -> DrawOptions:
        """Merge per-call keywords over a per-call options model over instance defaults."""

        base = model.model_validate(self.draw.model_dump())
        if options is not None:
            base = base.merged(options.model_dump(exclude_unset=True))
        return base.merged(overrides)


__all__ = [
    "DrawOptions",
    "RampOptions",
    "RandomizerConfig",
    "TelemetryConfig",
]
