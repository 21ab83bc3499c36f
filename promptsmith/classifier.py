import json
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from .llm import EmptyModelOutput, InvalidModelJSON, extract_text, resolve_client, strip_code_fences
from .models import AnalyzeRequest, Decomposition
from .prompts import (
    DEFAULT_MODEL,
    PART_LINES,
    RESPONSE_SCHEMA,
    SYSTEM_PROMPT,
    USER_TEMPLATE,
    model_hint,
    resolve_model,
)


@dataclass(frozen=True)
class ClassificationResult:
    decomposition: Decomposition
    raw: str


def _to_decomposition(data: Any, raw: str) -> Decomposition:
    if not isinstance(data, dict):
        raise InvalidModelJSON(
            raw_text=raw,
            error=f"expected a JSON object, got {type(data).__name__}",
            kind="schema_validation",
        )
    try:
        return Decomposition(
            parts=data.get("parts"),
            assembled_prompt_hint=data.get("assembled_prompt"),
            source="remote",
        )
    except ValidationError as e:
        raise InvalidModelJSON(raw_text=raw, error=str(e), kind="schema_validation") from e


def classify_prompt(
    raw_text: str,
    model: str = DEFAULT_MODEL,
    *,
    client: Any | None = None,
    api_key: str | None = None,
) -> ClassificationResult:
    request = AnalyzeRequest(prompt=raw_text, model=model)
    resolved_client = resolve_client(client=client, api_key=api_key)

    prompt = USER_TEMPLATE.format(
        schema=RESPONSE_SCHEMA,
        part_lines=PART_LINES,
        model_hint=model_hint(request.model),
        prompt=request.prompt,
    )

    resp = resolved_client.messages.create(
        model=resolve_model(request.model),
        max_tokens=800,
        temperature=0.0,
        system=SYSTEM_PROMPT,
        messages=[{"role": "user", "content": prompt}],
    )

    raw = strip_code_fences(extract_text(resp))
    if not raw:
        raise EmptyModelOutput()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidModelJSON(raw_text=raw, error=str(e), kind="json_decode") from e

    return ClassificationResult(decomposition=_to_decomposition(data, raw), raw=raw)
