from types import MappingProxyType
from typing import Literal, NamedTuple, Tuple, cast, get_args

PartKey = Literal["role", "context", "input", "task", "constraints", "style", "format"]

PART_ORDER: Tuple[PartKey, ...] = cast(Tuple[PartKey, ...], get_args(PartKey))

PART_LABELS = MappingProxyType(
    {
        "role": "Role / Persona",
        "context": "Context / Background",
        "input": "Input Data",
        "task": "Task / Instruction",
        "constraints": "Constraints / Requirements",
        "style": "Style / Tone",
        "format": "Output Format",
    }
)

DEFAULT_SUGGESTIONS = MappingProxyType(
    {
        "role": ("A beginner", "A student", "An expert", "A senior engineer", "A friendly mentor"),
        "context": (
            "History of the topic",
            "Real-world applications",
            "Math foundations",
            "Company-specific context",
        ),
        "input": ("An article (URL)", "A dataset", "Personal notes", "This exact paragraph"),
        "task": (
            "Summarize",
            "Explain step-by-step",
            "Generate code",
            "Compare alternatives",
            "Create an outline",
        ),
        "constraints": (
            "Short (200 words)",
            "Medium (500 words)",
            "Long (1000+ words)",
            "Bullet points",
            "Include references",
        ),
        "style": ("Casual", "Professional", "Technical", "Storytelling", "Concise"),
        "format": ("Paragraph", "Bullet points", "JSON object", "Lesson plan", "Slide outline"),
    }
)


class WizardQuestion(NamedTuple):
    key: PartKey
    question: str
    suggestions: Tuple[str, ...]


_QUESTIONS = {
    "role": "Who should the AI be?",
    "context": "What background/context matters?",
    "input": "What input will you give the model?",
    "task": "What is the main task?",
    "constraints": "Any constraints (length, format)?",
    "style": "Preferred tone/style?",
    "format": "Desired output format?",
}

WIZARD_QUESTIONS: Tuple[WizardQuestion, ...] = tuple(
    WizardQuestion(key=key, question=_QUESTIONS[key], suggestions=DEFAULT_SUGGESTIONS[key])
    for key in PART_ORDER
)


def ordered_keys() -> Tuple[PartKey, ...]:
    return PART_ORDER


def is_part_key(value: object) -> bool:
    return isinstance(value, str) and value in PART_LABELS


def label_of(key: PartKey) -> str:
    return PART_LABELS[key]


def default_suggestions_of(key: PartKey) -> Tuple[str, ...]:
    return DEFAULT_SUGGESTIONS[key]
