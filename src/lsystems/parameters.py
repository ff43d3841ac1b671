"""Library-wide configuration and the base class for per-call settings.

Values are read from the environment with the ``LSYSTEMS_`` prefix, e.g.
``LSYSTEMS_LOCK_TIMEOUT=0.5`` or ``LSYSTEMS_TIE_BREAK=latest``.
"""

# Standard library
from enum import Enum
from typing import Any

# Third-party libraries
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

# Local libraries
from lsystems.errors import InvalidSettingsError


class TieBreak(Enum):
    """What to do when several matching rules share the same specificity."""

    POOL = "pool"  # all of them are weighted alternatives
    LATEST = "latest"  # most recently registered wins
    EARLIEST = "earliest"  # first registered wins


class LSystemsConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LSYSTEMS_")

    # Seconds to wait for a grammar lock, None waits forever
    lock_timeout: float | None = Field(default=5.0, ge=0)

    # Derivation
    default_iterations: int = Field(default=5, ge=0)
    tie_break: TieBreak = TieBreak.POOL

    # SVG output
    svg_width: int = Field(default=500, gt=0)
    svg_height: int = Field(default=500, gt=0)
    svg_stroke: str = "black"
    svg_stroke_width: float = Field(default=0.2, gt=0)


config = LSystemsConfig()


class SettingsModel(BaseModel):
    """Frozen pydantic model whose validation failures are ``InvalidSettingsError``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            msg = f"invalid {type(self).__name__}: {exc}"
            raise InvalidSettingsError(msg) from exc
