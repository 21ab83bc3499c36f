import pytest

from promptsmith.models import Decomposition, Part
from promptsmith.reconcile import empty_part, reconcile
from promptsmith.schema import default_suggestions_of, label_of, ordered_keys


def _assert_canonical(parts):
    assert [p.key for p in parts] == list(ordered_keys())
    for part in parts:
        assert part.label == label_of(part.key)
        assert part.suggestions


def test_reconcile_is_idempotent_on_canonical_parts():
    canonical = [
        Part(key=key, label=label_of(key), text=f"{key} text", suggestions=["a", "b"])
        for key in ordered_keys()
    ]
    assert reconcile(canonical) == canonical
    assert reconcile(reconcile(canonical)) == canonical


def test_missing_keys_are_synthesized_with_defaults():
    parts = reconcile(Decomposition(parts=[{"key": "task", "text": "Summarize"}]))
    _assert_canonical(parts)
    by_key = {p.key: p for p in parts}
    assert by_key["task"].text == "Summarize"
    assert by_key["role"] == empty_part("role")
    assert by_key["task"].suggestions == list(default_suggestions_of("task"))


def test_unknown_keys_dropped_and_order_restored(remote_payload):
    parts = reconcile(remote_payload)
    _assert_canonical(parts)
    assert "mood" not in {p.key for p in parts}
    assert parts[0].text == "A poet"
    assert parts[3].text == "Write a haiku"
    assert parts[3].suggestions == ["Write a poem"]


def test_source_label_does_not_override_schema_label(remote_payload):
    task = reconcile(remote_payload)[3]
    assert task.label == "Task / Instruction"


def test_duplicate_keys_first_entry_wins():
    parts = reconcile([{"key": "style", "text": "Casual"}, {"key": "style", "text": "Formal"}])
    assert parts[5].text == "Casual"


@pytest.mark.parametrize(
    "entry",
    [
        {"key": "role", "text": None, "suggestions": None},
        {"key": "role", "text": 42, "suggestions": "nope"},
        {"key": "role", "suggestions": []},
        {"key": "role", "suggestions": [1, 2, None]},
    ],
)
def test_malformed_fields_treated_as_absent(entry):
    role = reconcile([entry])[0]
    assert role.text == ""
    assert role.suggestions == list(default_suggestions_of("role"))


def test_non_string_suggestions_are_filtered():
    role = reconcile([{"key": "role", "suggestions": ["A poet", 3, None]}])[0]
    assert role.suggestions == ["A poet"]


@pytest.mark.parametrize(
    "garbage",
    [None, 17, "parts", {}, {"parts": "oops"}, [None, 3, "role", {"key": None}], {"parts": [{"text": "x"}]}],
)
def test_reconcile_never_fails(garbage):
    parts = reconcile(garbage)
    _assert_canonical(parts)
    assert all(p.text == "" for p in parts)


def test_results_do_not_share_lists_with_input():
    suggestions = ["one", "two"]
    part = reconcile([{"key": "format", "suggestions": suggestions}])[6]
    part.suggestions.append("three")
    assert suggestions == ["one", "two"]
    default = reconcile([])[6]
    default.suggestions.append("Haiku")
    assert "Haiku" not in default_suggestions_of("format")
