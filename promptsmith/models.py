from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .schema import PartKey

Source = Literal["remote", "heuristic"]


class Part(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    key: PartKey
    label: str
    text: str = ""
    suggestions: List[str] = Field(..., min_length=1)


class Decomposition(BaseModel):
    """One analysis pass over a raw prompt.

    ``parts`` holds whatever the producing source returned: ``Part`` objects
    from the heuristic, plain mappings from the remote classifier. Nothing
    here is trusted until it has been through ``reconcile``.
    """

    model_config = ConfigDict(frozen=True)

    parts: List[Any] = Field(default_factory=list)
    assembled_prompt_hint: Optional[str] = None
    source: Source = "heuristic"

    @field_validator("parts", mode="before")
    @classmethod
    def coerce_parts(cls, value: Any) -> List[Any]:
        if isinstance(value, (list, tuple)):
            return list(value)
        return []

    @field_validator("assembled_prompt_hint", mode="before")
    @classmethod
    def coerce_hint(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    prompt: str
    model: str
