"""Language code tables.

The system's canonical code space is lowercase ISO-639-1 ("en", "hi").
Two foreign code spaces meet it at the edges:
- the statistical detector's native codes (mapped through DETECTOR_TO_CANONICAL)
- Sarvam's BCP-47 regional codes ("hi-IN"), used by the STT and TTS adapters
"""

# langdetect native code -> canonical code. Anything else falls back.
DETECTOR_TO_CANONICAL: dict[str, str] = {
    "en": "en",
    "hi": "hi",
    "ta": "ta",
    "te": "te",
    "bn": "bn",
    "mr": "mr",
    "gu": "gu",
    "pa": "pa",
    "ur": "ur",
    "ml": "ml",
    "kn": "kn",
    "es": "es",
    "fr": "fr",
    "de": "de",
    "it": "it",
    "pt": "pt",
}

# canonical code -> Sarvam BCP-47 code
CANONICAL_TO_SARVAM: dict[str, str] = {
    "en": "en-IN",
    "hi": "hi-IN",
    "ta": "ta-IN",
    "te": "te-IN",
    "ml": "ml-IN",
    "kn": "kn-IN",
    "bn": "bn-IN",
    "gu": "gu-IN",
    "mr": "mr-IN",
}

AUTO = "auto"


def normalize_code(code: str | None) -> str | None:
    """Lowercase and strip a language code; empty becomes None."""
    if code is None:
        return None
    code = code.strip().lower()
    return code or None


def to_sarvam_code(language: str | None) -> str | None:
    """Map a canonical code to Sarvam's BCP-47 form.

    Codes that already carry a region ("hi-IN") pass through unchanged.
    "auto", empty and unknown codes return None.
    """
    if not language or language.strip().lower() == AUTO:
        return None
    if "-" in language:
        return language.strip()
    return CANONICAL_TO_SARVAM.get(language.strip().lower())


def from_bcp47(code: str | None) -> str | None:
    """Reduce a BCP-47 code to its primary subtag ("hi-IN" -> "hi")."""
    if not code:
        return None
    return normalize_code(str(code).split("-")[0])
