import re
from typing import Any, Dict, List

from .models import Decomposition
from .reconcile import reconcile
from .schema import PartKey, ordered_keys

CONTEXT_MAX_CHARS = 200
INPUT_MAX_CHARS = 400

_LENGTH_RE = re.compile(r"(\d+)\s*(words|word|chars|sentences)", re.IGNORECASE)
_SENTENCE_SPLIT_RE = re.compile(r"[.?!]\s+")


def _task_text(lower: str) -> str:
    if "explain" in lower:
        return "Explain the topic"
    if "summarize" in lower or "summary" in lower:
        return "Summarize the text"
    return ""


def split_sentences(text: str) -> List[str]:
    return [fragment for fragment in _SENTENCE_SPLIT_RE.split(text) if fragment]


def assembled_hint(texts: Dict[PartKey, str]) -> str:
    return " | ".join(texts[key] for key in ordered_keys() if texts.get(key))


def analyze_heuristic(raw_text: Any) -> Decomposition:
    """Keyword and sentence based fallback decomposition.

    Rules fire independently per part, so one pass may fill several parts.
    The result is approximate by nature.
    """
    text = raw_text if isinstance(raw_text, str) else ""
    lower = text.lower()
    texts: Dict[PartKey, str] = {key: "" for key in ordered_keys()}

    texts["task"] = _task_text(lower)

    if "beginner" in lower or "novice" in lower:
        texts["role"] = "A beginner"

    match = _LENGTH_RE.search(text)
    if match:
        texts["constraints"] = f"About {match.group(1)} words"

    sentences = split_sentences(text)
    if sentences:
        texts["context"] = sentences[0][:CONTEXT_MAX_CHARS]
        if len(sentences) > 1:
            texts["input"] = ". ".join(sentences[1:3])[:INPUT_MAX_CHARS]

    parts = reconcile([{"key": key, "text": value} for key, value in texts.items()])
    return Decomposition(parts=parts, assembled_prompt_hint=assembled_hint(texts), source="heuristic")
