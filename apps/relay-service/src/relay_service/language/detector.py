"""Source language detection.

LanguageDetector.detect(text, fallback) never raises. It returns the
fallback when the text is too short, when the statistical detector cannot
decide, or when the detected code is outside the canonical table.
"""

import re

from langdetect import DetectorFactory, detect_langs
from langdetect.lang_detect_exception import LangDetectException

from .codes import DETECTOR_TO_CANONICAL

# langdetect is randomized unless seeded
DetectorFactory.seed = 0

DEFAULT_MIN_CHARS = 3
DEFAULT_MIN_PROBABILITY = 0.5

# Romanized Hindi marker words. Latin-script Hindi reads as English to a
# character n-gram detector, so these are checked first.
HINGLISH_MARKERS: frozenset[str] = frozenset(
    {"mujhe", "chahiye", "nahi", "haan", "kya", "kaise", "tum"}
)

_WORD_RE = re.compile(r"[a-z]+")


def looks_hinglish(text: str) -> bool:
    """Return True if the text contains a romanized Hindi marker word."""
    words = set(_WORD_RE.findall(text.lower()))
    return not words.isdisjoint(HINGLISH_MARKERS)


class LanguageDetector:
    """Deterministic text language guesser mapped to canonical codes."""

    def __init__(
        self,
        min_chars: int = DEFAULT_MIN_CHARS,
        min_probability: float = DEFAULT_MIN_PROBABILITY,
        code_table: dict[str, str] | None = None,
    ):
        self._min_chars = min_chars
        self._min_probability = min_probability
        self._code_table = code_table if code_table is not None else DETECTOR_TO_CANONICAL

    def detect(self, text: str | None, fallback: str) -> str:
        """Guess the language of text.

        Args:
            text: Text fragment to inspect
            fallback: Code returned whenever detection is not conclusive

        Returns:
            Canonical language code
        """
        if not isinstance(text, str) or len(text.strip()) < self._min_chars:
            return fallback

        if looks_hinglish(text):
            return self._code_table.get("hi", fallback)

        native = self._detect_native(text)
        if native is None:
            return fallback
        return self._code_table.get(native, fallback)

    def _detect_native(self, text: str) -> str | None:
        """Run the statistical detector; None means undetermined."""
        try:
            candidates = detect_langs(text)
        except LangDetectException:
            return None

        if not candidates:
            return None
        best = candidates[0]
        if best.prob < self._min_probability:
            return None
        return best.lang
