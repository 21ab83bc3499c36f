from .schema import label_of, ordered_keys

DEFAULT_MODEL = "opus"

MODEL_IDS = {
    "opus": "claude-opus-4-6",
    "sonnet": "claude-sonnet-4-5",
    "haiku": "claude-haiku-4-5",
}

MODEL_HINTS = {
    "opus": "You are using the latest model. Return a detailed JSON breakdown.",
    "sonnet": "You are using a capable model; be thorough but return strict JSON.",
    "haiku": "You are using a faster, cheaper model; focus on concise JSON.",
}

SYSTEM_PROMPT = """
You are a prompt analyzer.

You break a user's prompt into its semantic parts:
role, context, input, task, constraints, style and format.

Only report what the prompt says or clearly implies. Suggest concrete
alternatives the user could pick for every part.
"""

PART_LINES = "\n".join(f'- "{key}": "{label_of(key)}"' for key in ordered_keys())

RESPONSE_SCHEMA = """{
  \"parts\": [
    {\"key\": string, \"label\": string, \"text\": string, \"suggestions\": string[]}
  ],
  \"assembled_prompt\": string
}"""

USER_TEMPLATE = """
Return ONLY valid, compact JSON (no markdown, no explanations, no trailing text).

Required schema:
{schema}

Part keys and labels (use exactly these keys, one entry per key, in this order):
{part_lines}

Hard rules (MUST follow):
- Output MUST be a single JSON object starting with '{{' and ending with '}}'.
- If a part is missing from the prompt, give it an empty "text" and still list suggestions.
- "suggestions": 2 to 5 short items per part.
- "assembled_prompt": the prompt rewritten from the parts, one sentence per non-empty part.

Model hint: {model_hint}

User prompt:
\"\"\"{prompt}\"\"\"
"""


def resolve_model(model: str) -> str:
    return MODEL_IDS.get(model, MODEL_IDS[DEFAULT_MODEL])


def model_hint(model: str) -> str:
    return MODEL_HINTS.get(model, MODEL_HINTS[DEFAULT_MODEL])
