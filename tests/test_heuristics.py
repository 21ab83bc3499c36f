from promptsmith.heuristics import analyze_heuristic, split_sentences
from promptsmith.schema import default_suggestions_of, ordered_keys


def _texts(decomposition):
    return {part.key: part.text for part in decomposition.parts}


def test_explain_beginner_word_count():
    d = analyze_heuristic("Explain machine learning to a beginner in about 200 words.")
    texts = _texts(d)
    assert texts["task"] == "Explain the topic"
    assert texts["role"] == "A beginner"
    assert texts["constraints"] == "About 200 words"
    assert d.source == "heuristic"


def test_summarize_splits_context_and_input():
    d = analyze_heuristic("Summarize this article. It covers neural networks. It also covers training loops.")
    texts = _texts(d)
    assert texts["task"] == "Summarize the text"
    assert texts["context"] == "Summarize this article"
    assert texts["input"] == "It covers neural networks. It also covers training loops."


def test_explain_beats_summary_when_both_present():
    texts = _texts(analyze_heuristic("Explain and summarize the plot"))
    assert texts["task"] == "Explain the topic"


def test_summary_keyword_and_case_insensitivity():
    texts = _texts(analyze_heuristic("Give me a SUMMARY for a Novice reader"))
    assert texts["task"] == "Summarize the text"
    assert texts["role"] == "A beginner"


def test_constraint_unit_is_always_reported_as_words():
    assert _texts(analyze_heuristic("Use 3 sentences"))["constraints"] == "About 3 words"
    assert _texts(analyze_heuristic("Max 280chars"))["constraints"] == "About 280 words"


def test_input_uses_at_most_sentences_two_and_three():
    texts = _texts(analyze_heuristic("One. Two! Three? Four. Five."))
    assert texts["context"] == "One"
    assert texts["input"] == "Two. Three"


def test_truncation_limits():
    long_first = "a" * 300
    long_rest = "b" * 300
    texts = _texts(analyze_heuristic(f"{long_first}. {long_rest}. {long_rest}."))
    assert len(texts["context"]) == 200
    assert len(texts["input"]) == 400


def test_empty_text_gives_empty_decomposition():
    d = analyze_heuristic("")
    assert [p.key for p in d.parts] == list(ordered_keys())
    assert all(p.text == "" for p in d.parts)
    assert d.assembled_prompt_hint == ""
    assert all(p.suggestions == list(default_suggestions_of(p.key)) for p in d.parts)


def test_hint_joins_filled_parts_in_schema_order():
    d = analyze_heuristic("Explain machine learning to a beginner in about 200 words.")
    assert d.assembled_prompt_hint == (
        "A beginner | Explain machine learning to a beginner in about 200 words. "
        "| Explain the topic | About 200 words"
    )


def test_split_sentences_drops_empty_fragments():
    assert split_sentences("") == []
    assert split_sentences("Hi. There") == ["Hi", "There"]
