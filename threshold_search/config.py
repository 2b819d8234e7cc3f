from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, StrictInt, field_validator


class ThresholdConfig(BaseModel):
    """Read-only settings shared by every search a searcher runs."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_k: StrictInt = 100
    k_increment: StrictInt = 10
    min_similarity_score: Optional[float] = None  # keep score >= this
    max_distance_score: Optional[float] = None    # keep score <= this
    filter: Optional[Any] = None                  # passed through to the store untouched

    @field_validator("min_similarity_score", "max_distance_score", mode="before")
    @classmethod
    def _numeric_threshold(cls, v: Any) -> Any:
        # ints are fine, but "0.5" or True are not scores
        if v is not None and (isinstance(v, bool) or not isinstance(v, (int, float))):
            raise ValueError(f"threshold must be a number, got {v!r}")
        return v

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ThresholdConfig":
        """Build from the `retriever:` section of config.yaml; unknown keys are ignored."""
        data = data or {}
        known = {k: v for k, v in data.items() if k in cls.model_fields and v is not None}
        return cls(**known)

    @property
    def has_threshold(self) -> bool:
        return self.min_similarity_score is not None or self.max_distance_score is not None


def load_config(path: str = "config.yaml") -> Dict[str, Any]:
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}
