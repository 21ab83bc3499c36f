from collections.abc import Mapping
from typing import Any, List, Optional

from .models import Decomposition, Part
from .schema import PartKey, default_suggestions_of, is_part_key, label_of, ordered_keys


def _entries(decomposition: Any) -> List[Any]:
    if isinstance(decomposition, Decomposition):
        return list(decomposition.parts)
    if isinstance(decomposition, Mapping):
        decomposition = decomposition.get("parts")
    if isinstance(decomposition, (list, tuple)):
        return list(decomposition)
    return []


def _as_mapping(entry: Any) -> Optional[Mapping]:
    if isinstance(entry, Part):
        return entry.model_dump()
    if isinstance(entry, Mapping):
        return entry
    return None


def _index_by_key(entries: List[Any]) -> dict[str, Mapping]:
    found: dict[str, Mapping] = {}
    for entry in entries:
        fields = _as_mapping(entry)
        if fields is None:
            continue
        key = fields.get("key")
        # first entry for a key wins
        if is_part_key(key) and key not in found:
            found[key] = fields
    return found


def _suggestions(value: Any, key: PartKey) -> List[str]:
    if isinstance(value, (list, tuple)):
        kept = [item for item in value if isinstance(item, str)]
        if kept:
            return kept
    return list(default_suggestions_of(key))


def empty_part(key: PartKey) -> Part:
    return Part(key=key, label=label_of(key), text="", suggestions=list(default_suggestions_of(key)))


def reconcile(decomposition: Any) -> List[Part]:
    """Normalize any decomposition into the canonical seven-part list.

    Accepts a ``Decomposition``, a raw response mapping with a ``parts`` list,
    or a bare sequence of entries. Unknown keys are dropped, missing keys are
    filled with empty parts, labels always come from the schema and missing or
    malformed suggestion lists fall back to the schema defaults. Never raises.
    """
    found = _index_by_key(_entries(decomposition))
    parts: List[Part] = []
    for key in ordered_keys():
        fields = found.get(key)
        if fields is None:
            parts.append(empty_part(key))
            continue
        text = fields.get("text")
        parts.append(
            Part(
                key=key,
                label=label_of(key),
                text=text if isinstance(text, str) else "",
                suggestions=_suggestions(fields.get("suggestions"), key),
            )
        )
    return parts
