"""
Intent Engine.
Deterministic rule-based intent detection over the intent dataset.

Scoring:
1. Plain patterns: token overlap weighted by a length penalty
2. `$entity` patterns: ordered fixed-token matching with entity capture
3. Knowledge-base fallback: a bare event name becomes EVENT_DETAILS

No ML, no external calls. Identical input always yields identical output.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Sequence, Tuple

from citro.config import get_settings
from citro.core.models import IntentMatch
from citro.voice.event_knowledge import find_event
from citro.voice.intent_dataset import INTENTS, IntentDefinition, IntentId, get_declared_action
from citro.voice.normalizer import normalize_for_intent

logger = logging.getLogger(__name__)

settings = get_settings()


class PatternScore(NamedTuple):
    """Score of one input against one pattern."""
    score: float
    entities: Dict[str, str]


@dataclass(frozen=True)
class CompiledPattern:
    definition: IntentDefinition
    source: str
    tokens: Tuple[str, ...]

    @property
    def has_entities(self) -> bool:
        return any(t.startswith("$") for t in self.tokens)


def _compile_patterns() -> Tuple[CompiledPattern, ...]:
    # Patterns go through the same cleaning as the input so both sides agree
    compiled: List[CompiledPattern] = []
    for definition in INTENTS:
        seen = set()
        for pattern in definition.patterns:
            cleaned = normalize_for_intent(pattern)
            if not cleaned or cleaned in seen:
                continue
            seen.add(cleaned)
            compiled.append(CompiledPattern(definition, pattern, tuple(cleaned.split(" "))))
    return tuple(compiled)


PATTERNS: Tuple[CompiledPattern, ...] = _compile_patterns()


def _unknown() -> IntentMatch:
    return IntentMatch(IntentId.UNKNOWN, {}, 0.0, None)


def detect_intent(normalized_text: str) -> IntentMatch:
    """
    Detect the intent of already-normalized text.

    Returns UNKNOWN with confidence 0 when nothing clears the threshold.
    """
    cleaned = normalize_for_intent(normalized_text)
    if not cleaned:
        return _unknown()

    input_words = cleaned.split(" ")
    best_pattern = None
    best = PatternScore(0.0, {})

    for pattern in PATTERNS:
        result = match_pattern(input_words, pattern.tokens)

        # Equal scores keep the earlier pattern
        if result.score > best.score:
            best, best_pattern = result, pattern

        if result.score >= 1.0:
            break

    if best_pattern is not None and best.score >= settings.INTENT_MIN_CONFIDENCE:
        definition = best_pattern.definition
        logger.debug(
            f"Intent {definition.id.value} ({best.score:.2f}) via '{best_pattern.source}'"
        )
        return IntentMatch(
            definition.id,
            dict(best.entities),
            min(best.score, 1.0),
            definition.action,
        )

    # A bare event name ("codeology") is a request for its details
    match = find_event(cleaned)
    if match is not None and match.confidence >= settings.KB_FALLBACK_MIN_CONFIDENCE:
        confidence = min(match.confidence * settings.KB_FALLBACK_DAMPING, 1.0)
        logger.debug(f"Knowledge-base fallback: '{cleaned}' -> {match.event.name} ({confidence:.2f})")
        return IntentMatch(
            IntentId.EVENT_DETAILS,
            {"name": cleaned},
            confidence,
            get_declared_action(IntentId.EVENT_DETAILS),
        )

    return _unknown()


# =========================
# Pattern Matching
# =========================

def match_pattern(input_words: Sequence[str], pattern_words: Sequence[str]) -> PatternScore:
    """Score input words against one pattern's tokens."""
    if any(w.startswith("$") for w in pattern_words):
        return match_with_entities(input_words, pattern_words)
    return PatternScore(token_overlap_score(input_words, pattern_words), {})


def match_with_entities(input_words: Sequence[str], pattern_words: Sequence[str]) -> PatternScore:
    """
    Sequential matcher for patterns like "add $name to cart".

    Fixed tokens are searched forward from a cursor; words skipped or matched
    are consumed. A `$token` captures the words between the cursor and the
    next fixed token's position, or everything left when that token is
    absent. Captures never overlap.
    """
    cursor = 0
    matched_fixed = 0
    total_fixed = 0
    entities: Dict[str, str] = {}

    for i, token in enumerate(pattern_words):
        if token.startswith("$"):
            next_fixed = next((t for t in pattern_words[i + 1:] if not t.startswith("$")), None)
            end = _find(input_words, next_fixed, cursor) if next_fixed else -1
            if end < 0:
                end = len(input_words)

            words = input_words[cursor:end]
            if words:
                entities[token[1:]] = " ".join(words)
            cursor = end
        else:
            total_fixed += 1
            pos = _find(input_words, token, cursor)
            if pos >= 0:
                matched_fixed += 1
                cursor = pos + 1

    if total_fixed == 0:
        return PatternScore(0.0, entities)

    fixed_ratio = matched_fixed / total_fixed
    score = fixed_ratio * 0.9 if entities else fixed_ratio * 0.5

    return PatternScore(min(score, 1.0), entities)


def token_overlap_score(input_words: Sequence[str], pattern_words: Sequence[str]) -> float:
    """
    Share of pattern words present in the input, scaled down for noisy input:
    coverage x (0.7 + 0.3 x |pattern| / max(|input|, |pattern|)).
    """
    input_set = set(input_words)
    pattern_set = set(pattern_words)
    if not pattern_set:
        return 0.0

    matches = sum(1 for w in pattern_set if w in input_set)
    coverage = matches / len(pattern_set)
    length_ratio = len(pattern_set) / max(len(input_set), len(pattern_set))

    return coverage * (7 + 3 * length_ratio) / 10


def _find(words: Sequence[str], token: str, start: int) -> int:
    for idx in range(start, len(words)):
        if words[idx] == token:
            return idx
    return -1
