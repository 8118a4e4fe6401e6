"""
Transcript Normalizer.
Turns Hinglish / Hindi / mixed-language speech transcripts into canonical
English text for deterministic intent matching.

Stages:
1. Lowercase, trim, collapse whitespace
2. Rewrite common speech-to-text mishearings of event names
3. Translate Hindi / Hinglish tokens to English
4. (intent matching only) strip filler words

Both rewrite tables are compiled once into a single alternation regex with
the longest phrase first, so more specific phrases always win.
"""

import re
from typing import Dict, FrozenSet, Pattern

# Upper bound on rewrite passes; the tables settle in two.
_MAX_PASSES = 5


# =========================
# Speech Corrections
# =========================

SPEECH_CORRECTIONS: Dict[str, str] = {
    # Codeology
    "cardiology": "codeology",
    "codiology": "codeology",
    "code ology": "codeology",
    "cold ology": "codeology",
    "code biology": "codeology",
    # Pharmathon
    "pharma tone": "pharmathon",
    "pharma thon": "pharmathon",
    "pharmacy thon": "pharmathon",
    "farmathon": "pharmathon",
    "pharmacon": "pharmathon",
    "farma thon": "pharmathon",
    # ZENGA Block
    "zinga": "zenga",
    "genga": "zenga",
    "jenga": "zenga",
    # Master Chef
    "masterchef": "master chef",
    "master shift": "master chef",
    "master chief": "master chef",
    # Reel to Deal
    "real to deal": "reel to deal",
    "real to reel": "reel to deal",
    "reel to reel": "reel to deal",
    # Robotics
    "robot race": "robo race",
    "robot swim": "robo swim",
    "robot soccer": "robo soccer",
    "robo socker": "robo soccer",
    # Misc event names
    "clash of titans": "clash of titan",
    "design verse": "designverse",
    "ad mad": "admad",
    "ad-mad": "admad",
    "shark tanks": "shark tank",
    "tambola": "tech bingo",
    # The fest itself
    "citronix": "citronics",
    "citronics 2k26": "citronics 2026",
    "citro nix": "citronics",
}


# =========================
# Hindi / Hinglish Tokens
# =========================

TOKEN_MAP: Dict[str, str] = {
    # Verbs / actions
    "dikhao": "show",
    "dikha": "show",
    "dikha do": "show",
    "batao": "tell",
    "bata do": "tell",
    "kholo": "open",
    "khol do": "open",
    "karo": "do",
    "kar do": "do",
    "karna hai": "do",
    "karna": "do",
    "register karo": "register",
    "register kar do": "register",
    "chalo": "go",
    "jao": "go",
    "le jao": "go to",
    "band karo": "close",
    "search karo": "search",
    "dhoondo": "search",
    "dhundho": "search",
    "sunao": "tell",
    "peeche jao": "go back",
    "wapas jao": "go back",
    "wapas": "back",

    # Nouns / pages
    "ghar": "home",
    "jagah": "location",
    "sthan": "location",
    "tarikh": "date",
    "samay": "time",
    "keemat": "price",
    "fees": "fee",
    "paisa": "price",
    "madad": "help",
    "sahayata": "help",

    # Pronouns / connectors
    "mujhe": "me",
    "mera": "my",
    "mere": "my",
    "kya": "what",
    "kab": "when",
    "kahan": "where",
    "kaun": "who",
    "kitne": "how many",
    "kitna": "how much",
    "hai": "is",
    "hain": "are",
    "ka": "of",
    "ke": "of",
    "ki": "of",
    "ko": "to",
    "me": "in",
    "pe": "on",
    "se": "from",
    "aur": "and",
    "ya": "or",
    "sab": "all",
    "sabhi": "all",
    "aaj": "today",
    "kal": "tomorrow",
    "abhi": "now",
    "naya": "new",
    "naye": "new",
    "purana": "old",
    "aane wale": "upcoming",
    "aane wala": "upcoming",
    "kaise": "how",
    "kaisa": "how",

    # Greetings
    "namaste": "hello",
    "namaskar": "hello",
    "shukriya": "thank you",
    "dhanyavaad": "thank you",
    "alvida": "goodbye",
    "bye bye": "goodbye",
}

# Greetings are intentionally absent so GREETING patterns still match.
FILLER_WORDS: FrozenSet[str] = frozenset({
    "um", "uh", "hmm", "like", "actually", "basically",
    "please", "ok", "okay", "citro", "the", "a", "an", "just",
    "can", "you", "i", "want", "to", "need", "would",
})

_WHITESPACE = re.compile(r"\s+")


def _compile_table(table: Dict[str, str]) -> Pattern:
    keys = sorted(table, key=len, reverse=True)
    return re.compile(r"\b(" + "|".join(re.escape(k) for k in keys) + r")\b")


_CORRECTION_RE = _compile_table(SPEECH_CORRECTIONS)
_TOKEN_RE = _compile_table(TOKEN_MAP)


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _rewrite(text: str) -> str:
    text = _CORRECTION_RE.sub(lambda m: SPEECH_CORRECTIONS[m.group(1)], text)
    text = _TOKEN_RE.sub(lambda m: TOKEN_MAP[m.group(1)], text)
    return _collapse(text)


def normalize(raw) -> str:
    """
    Normalize a raw speech transcript into canonical English.

    Non-string or empty input yields "". The rewrite is repeated until the
    text stops changing, so normalize(normalize(x)) == normalize(x).
    """
    if not raw or not isinstance(raw, str):
        return ""

    text = _collapse(raw.lower())

    for _ in range(_MAX_PASSES):
        rewritten = _rewrite(text)
        if rewritten == text:
            break
        text = rewritten

    return text


def strip_fillers(text: str) -> str:
    """Drop filler words from already-normalized text."""
    return " ".join(w for w in text.split(" ") if w and w not in FILLER_WORDS)


def normalize_for_intent(raw) -> str:
    """Normalize and strip filler words for intent matching."""
    return strip_fillers(normalize(raw))
