import pytest

from promptsmith.schema import (
    DEFAULT_SUGGESTIONS,
    WIZARD_QUESTIONS,
    default_suggestions_of,
    is_part_key,
    label_of,
    ordered_keys,
)


def test_ordered_keys_is_canonical():
    assert ordered_keys() == ("role", "context", "input", "task", "constraints", "style", "format")
    assert ordered_keys() is ordered_keys()


def test_every_key_has_label_and_suggestions():
    for key in ordered_keys():
        assert label_of(key)
        assert len(default_suggestions_of(key)) > 0


def test_labels_match_expected_text():
    assert label_of("role") == "Role / Persona"
    assert label_of("format") == "Output Format"


def test_table_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_SUGGESTIONS["role"] = ("Someone",)


def test_is_part_key():
    assert is_part_key("style")
    assert not is_part_key("mood")
    assert not is_part_key(None)


def test_wizard_questions_follow_schema_order():
    assert tuple(q.key for q in WIZARD_QUESTIONS) == ordered_keys()
    assert WIZARD_QUESTIONS[0].question == "Who should the AI be?"
    assert WIZARD_QUESTIONS[3].suggestions == default_suggestions_of("task")
