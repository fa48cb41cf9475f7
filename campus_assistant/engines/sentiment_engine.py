"""
Sentiment Engine - keyword-lexicon polarity for chat messages

Two variants over the same word lists:
1. Score  - per-token weights summed and clamped to [-1, 1]
2. Label  - first matching category by substring search, else neutral

The lexicon is plain data (word -> weight) so a real model can replace it
without touching callers.
"""
import re
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional

from campus_assistant.config import Config

POSITIVE = "positive"
NEUTRAL = "neutral"
NEGATIVE = "negative"

# Query-log thresholds for bucketing a score into a label
POSITIVE_THRESHOLD = 0.2
NEGATIVE_THRESHOLD = -0.2

_TOKEN_SPLIT_RE = re.compile(r"\W+")


def _clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def label_for_score(score: float) -> str:
    if score > POSITIVE_THRESHOLD:
        return POSITIVE
    if score < NEGATIVE_THRESHOLD:
        return NEGATIVE
    return NEUTRAL


@dataclass(frozen=True)
class SentimentResult:
    score: float
    label: str

    def to_dict(self) -> Dict[str, object]:
        return {"score": self.score, "label": self.label}


class SentimentLexicon:
    """Word -> weight mapping. Positive weights mark positive words."""

    def __init__(self, weights: Mapping[str, float]):
        self.weights: Dict[str, float] = {
            str(word).strip().lower(): float(weight)
            for word, weight in weights.items()
            if str(word).strip()
        }

    @classmethod
    def from_word_lists(
        cls,
        positive: Iterable[str],
        negative: Iterable[str],
        weight: float = 0.2,
    ) -> "SentimentLexicon":
        weights: Dict[str, float] = {}
        for word in negative:
            weights[word] = -abs(weight)
        # Positive wins when a word appears in both lists
        for word in positive:
            weights[word] = abs(weight)
        return cls(weights)

    @property
    def positive_words(self):
        return [w for w, v in self.weights.items() if v > 0]

    @property
    def negative_words(self):
        return [w for w, v in self.weights.items() if v < 0]

    def weight(self, token: str) -> float:
        return self.weights.get(token, 0.0)


DEFAULT_LEXICON = SentimentLexicon.from_word_lists(
    Config.POSITIVE_WORDS,
    Config.NEGATIVE_WORDS,
    weight=Config.SENTIMENT_WEIGHT,
)


class SentimentClassifier:
    def __init__(self, lexicon: Optional[SentimentLexicon] = None):
        self.lexicon = lexicon or DEFAULT_LEXICON

    def score(self, text: str) -> float:
        """Sum token weights, clamped to [-1, 1]. Empty text scores 0."""
        if not text or not text.strip():
            return 0.0
        total = 0.0
        for token in _TOKEN_SPLIT_RE.split(text.lower()):
            if token:
                total += self.lexicon.weight(token)
        return _clamp(round(total, 6))

    def classify(self, text: str) -> str:
        """First matching category by substring search; positive is checked first."""
        if not text or not text.strip():
            return NEUTRAL
        lowered = text.lower()
        if any(word in lowered for word in self.lexicon.positive_words):
            return POSITIVE
        if any(word in lowered for word in self.lexicon.negative_words):
            return NEGATIVE
        return NEUTRAL

    def analyze(self, text: str) -> SentimentResult:
        return SentimentResult(score=self.score(text), label=self.classify(text))


# Singleton instance
sentiment_classifier = SentimentClassifier()


def analyze_sentiment(text: str) -> float:
    return sentiment_classifier.score(text)


def classify(text: str) -> str:
    return sentiment_classifier.classify(text)
