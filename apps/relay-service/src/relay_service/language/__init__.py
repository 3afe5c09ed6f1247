"""Language detection and code mapping."""

from .codes import from_bcp47, normalize_code, to_sarvam_code
from .detector import LanguageDetector, looks_hinglish

__all__ = [
    "LanguageDetector",
    "looks_hinglish",
    "from_bcp47",
    "normalize_code",
    "to_sarvam_code",
]
