from dataclasses import dataclass
from typing import Any

from anthropic import APIError

from .classifier import classify_prompt
from .heuristics import analyze_heuristic
from .llm import InvalidModelJSON
from .logger import get_logger
from .models import Decomposition
from .prompts import DEFAULT_MODEL

log = get_logger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    decomposition: Decomposition
    raw: str | None = None
    error: Exception | None = None

    @property
    def used_fallback(self) -> bool:
        return self.decomposition.source == "heuristic"


def analyze_prompt(
    raw_text: str,
    model: str = DEFAULT_MODEL,
    *,
    client: Any | None = None,
    api_key: str | None = None,
    offline: bool = False,
) -> AnalysisResult:
    """Decompose *raw_text*, preferring the remote classifier.

    Any remote failure degrades to the local heuristic on the same text; the
    caught error is returned alongside so callers can report it.
    """
    if offline or (client is None and not api_key):
        log.info("Remote classifier unavailable, using heuristic analysis")
        return AnalysisResult(decomposition=analyze_heuristic(raw_text))

    try:
        result = classify_prompt(raw_text, model, client=client, api_key=api_key)
    except InvalidModelJSON as exc:
        log.warning("Classifier returned unusable output (%s), using heuristic: %s", exc.kind, exc.error)
        return AnalysisResult(decomposition=analyze_heuristic(raw_text), raw=exc.raw_text, error=exc)
    except APIError as exc:
        log.warning("Classifier request failed, using heuristic: %s", exc)
        return AnalysisResult(decomposition=analyze_heuristic(raw_text), error=exc)

    return AnalysisResult(decomposition=result.decomposition, raw=result.raw)
