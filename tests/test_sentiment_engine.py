"""Unit and property-based tests for the sentiment engine."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from campus_assistant.config import Config
from campus_assistant.engines.sentiment_engine import (
    SentimentClassifier,
    SentimentLexicon,
    analyze_sentiment,
    classify,
    label_for_score,
)

SINGLE_WORD_POSITIVE = [w for w in Config.POSITIVE_WORDS if " " not in w]
SINGLE_WORD_NEGATIVE = [w for w in Config.NEGATIVE_WORDS if " " not in w]


class TestScore:
    """Tests for the weighted score variant."""

    def test_single_positive_word(self):
        assert analyze_sentiment("This is great") == pytest.approx(0.2)

    def test_single_negative_word(self):
        assert analyze_sentiment("The bus was late") == pytest.approx(-0.2)

    def test_mixed_words_cancel(self):
        assert analyze_sentiment("good food but slow service") == pytest.approx(0.0)

    def test_punctuation_is_a_token_boundary(self):
        assert analyze_sentiment("Thanks!!! helpful, nice.") == pytest.approx(0.6)

    def test_case_insensitive(self):
        assert analyze_sentiment("AWESOME") == pytest.approx(0.2)

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_empty_text_scores_zero(self, text):
        assert analyze_sentiment(text) == 0.0

    def test_score_is_clamped(self):
        assert analyze_sentiment("great " * 50) == 1.0
        assert analyze_sentiment("terrible " * 50) == -1.0

    @given(st.lists(st.sampled_from(SINGLE_WORD_POSITIVE + SINGLE_WORD_NEGATIVE), max_size=60))
    def test_score_always_within_bounds(self, words):
        """Property test: repetition never pushes the score outside [-1, 1]."""
        score = analyze_sentiment(" ".join(words))
        assert -1.0 <= score <= 1.0

    @given(st.lists(st.sampled_from(SINGLE_WORD_POSITIVE), min_size=1, max_size=20))
    def test_positive_only_text_scores_positive(self, words):
        assert analyze_sentiment(" ".join(words)) > 0

    @given(st.lists(st.sampled_from(SINGLE_WORD_NEGATIVE), min_size=1, max_size=20))
    def test_negative_only_text_scores_negative(self, words):
        assert analyze_sentiment(" ".join(words)) < 0


class TestClassify:
    """Tests for the categorical variant."""

    def test_positive(self):
        assert classify("Thank you, that was helpful") == "positive"

    def test_negative(self):
        assert classify("the shuttle is broken again") == "negative"

    def test_neutral(self):
        assert classify("When does the library open?") == "neutral"

    @pytest.mark.parametrize("text", ["", "    "])
    def test_empty_is_neutral(self, text):
        assert classify(text) == "neutral"

    def test_multi_word_phrase_matches_by_substring(self):
        assert classify("the printer is not working") == "negative"

    def test_positive_checked_first(self):
        assert classify("good, but the bus was late") == "positive"

    @given(st.lists(st.sampled_from(Config.POSITIVE_WORDS), min_size=1, max_size=10))
    def test_positive_words_classify_positive(self, words):
        assert classify(" ".join(words)) == "positive"

    @given(st.lists(st.sampled_from(Config.NEGATIVE_WORDS), min_size=1, max_size=10))
    def test_negative_words_classify_negative(self, words):
        assert classify(" ".join(words)) == "negative"

    @given(st.text())
    def test_classify_is_deterministic(self, text):
        assert classify(text) == classify(text)
        assert classify(text) in {"positive", "neutral", "negative"}


class TestLexicon:
    """Tests for lexicon configuration."""

    def test_custom_lexicon_weights(self):
        lexicon = SentimentLexicon({"stellar": 0.5, "meh": -0.1})
        classifier = SentimentClassifier(lexicon)

        assert classifier.score("stellar stellar") == pytest.approx(1.0)
        assert classifier.score("meh") == pytest.approx(-0.1)
        assert classifier.classify("pretty meh") == "negative"

    def test_word_lists_use_given_weight(self):
        lexicon = SentimentLexicon.from_word_lists(["yay"], ["boo"], weight=0.5)

        assert lexicon.weight("yay") == 0.5
        assert lexicon.weight("boo") == -0.5
        assert lexicon.weight("other") == 0.0

    def test_analyze_returns_score_and_label(self):
        result = SentimentClassifier().analyze("great help")

        assert result.label == "positive"
        assert result.score == pytest.approx(0.2)
        assert result.to_dict() == {"score": result.score, "label": "positive"}

    @pytest.mark.parametrize(
        "score,label",
        [(0.4, "positive"), (0.2, "neutral"), (0.0, "neutral"), (-0.2, "neutral"), (-0.21, "negative")],
    )
    def test_label_for_score(self, score, label):
        assert label_for_score(score) == label
