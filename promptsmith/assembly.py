from collections.abc import Iterable, Mapping

from .models import Part
from .schema import label_of, ordered_keys


def assemble(parts: Iterable[Part]) -> str:
    lines = [f"{part.label}: {part.text.strip()}" for part in parts if part.text.strip()]
    return "\n\n".join(lines)


def build_raw_text(answers: Mapping[str, str]) -> str:
    """Turn wizard answers into raw prompt text, one labelled line per answered part."""
    lines = []
    for key in ordered_keys():
        answer = answers.get(key)
        if answer:
            lines.append(f"{label_of(key)}: {answer}")
    return "\n".join(lines)
