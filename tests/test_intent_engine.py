"""Tests for intent detection."""

import pytest

from citro.voice.intent_dataset import (
    INTENTS,
    ActionType,
    IntentId,
    get_declared_action,
    get_intent_definition,
)
from citro.voice.intent_engine import (
    PATTERNS,
    detect_intent,
    match_pattern,
    match_with_entities,
    token_overlap_score,
)
from citro.voice.normalizer import FILLER_WORDS, normalize


def detect(raw):
    return detect_intent(normalize(raw))


class TestDataset:
    """Tests for the intent table."""

    def test_ids_unique(self):
        """Each intent is defined once."""
        ids = [d.id for d in INTENTS]
        assert len(ids) == len(set(ids))

    def test_every_matchable_intent_defined(self):
        """Every intent except the synthetic fallbacks has patterns."""
        synthetic = {IntentId.UNKNOWN, IntentId.LOW_CONFIDENCE}
        defined = {d.id for d in INTENTS}
        assert defined == set(IntentId) - synthetic

    def test_declared_actions(self):
        """Declared actions are the single source of action shape."""
        assert get_declared_action(IntentId.NAV_EVENTS).to_dict() == {"type": "navigate", "path": "/events"}
        assert get_declared_action(IntentId.GOODBYE).type == ActionType.CLOSE
        assert get_declared_action(IntentId.UNKNOWN).type == ActionType.REPLY
        assert get_declared_action("REGISTER_EVENT").to_dict() == {
            "type": "execute",
            "handler": "registerForEvent",
            "path": "/events",
        }

    def test_intent_definition_lookup(self):
        """Synthetic intents have no definition."""
        assert get_intent_definition(IntentId.UNKNOWN) is None
        assert get_intent_definition(IntentId.ADD_TO_CART).has_entities

    def test_compiled_patterns_are_clean(self):
        """Compiled patterns contain no filler words."""
        for pattern in PATTERNS:
            assert pattern.tokens
            assert not set(pattern.tokens) & FILLER_WORDS


class TestDetectIntent:
    """Tests for detect_intent()."""

    def test_hinglish_navigation(self):
        """Hinglish verbs reach the navigation intent."""
        match = detect("dikhao events")
        assert match.intent == IntentId.NAV_EVENTS
        assert match.confidence == 1.0
        assert match.action.to_dict() == {"type": "navigate", "path": "/events"}

    def test_register_with_misheard_name(self):
        """Misheard names are corrected before entity capture."""
        match = detect("register for cardiology")
        assert match.intent == IntentId.REGISTER_EVENT
        assert match.entities == {"name": "codeology"}

    def test_add_to_cart(self):
        """Multi-word names are captured between fixed tokens."""
        match = detect("add master chef to cart")
        assert match.intent == IntentId.ADD_TO_CART
        assert match.entities == {"name": "master chef"}
        assert match.confidence == pytest.approx(0.9)

    def test_add_and_checkout(self):
        """Checkout phrasing is listed ahead of the plain add, so it wins the tie."""
        match = detect("select codeology and checkout")
        assert match.intent == IntentId.ADD_CART_AND_CHECKOUT
        assert match.entities == {"name": "codeology"}

    def test_remove_from_cart(self):
        """Remove patterns capture the event name."""
        match = detect("remove master chef from cart")
        assert match.intent == IntentId.REMOVE_FROM_CART
        assert match.entities == {"name": "master chef"}

    @pytest.mark.parametrize("raw,intent,name", [
        ("tell me about cardiology", IntentId.EVENT_DETAILS, "codeology"),
        ("what is codeology", IntentId.EVENT_DETAILS, "codeology"),
        ("when is robo soccer", IntentId.EVENT_WHEN, "robo soccer"),
        ("price of master chef", IntentId.EVENT_PRICE, "master chef"),
        ("cse events", IntentId.DEPT_EVENTS, "cse"),
    ])
    def test_event_questions(self, raw, intent, name):
        """Event questions extract the event or department name."""
        match = detect(raw)
        assert match.intent == intent
        assert match.entities == {"name": name}

    @pytest.mark.parametrize("raw", ["show me events", "mujhe events dikhao"])
    def test_plain_navigation_beats_open_capture(self, raw):
        """An earlier plain pattern keeps a tied score over a later $name capture."""
        match = detect(raw)
        assert match.intent == IntentId.NAV_EVENTS
        assert match.entities == {}
        assert match.confidence == pytest.approx(0.9)

    def test_day_events_literal(self):
        """Literal day phrases match exactly with no entity."""
        match = detect("day 2 events")
        assert match.intent == IntentId.DAY_EVENTS
        assert match.confidence == 1.0
        assert match.entities == {}

    def test_greeting_survives_filler_stripping(self):
        """The wake word is stripped but the greeting is kept."""
        match = detect("hey citro")
        assert match.intent == IntentId.GREETING
        assert match.confidence == 1.0

    def test_what_is_citro(self):
        """The bare wake-word question is platform info."""
        assert detect("what is citro").intent == IntentId.INFO_WHAT_IS_CITRO

    def test_knowledge_base_fallback(self):
        """A bare event name becomes EVENT_DETAILS at damped confidence."""
        match = detect("codeology")
        assert match.intent == IntentId.EVENT_DETAILS
        assert match.entities == {"name": "codeology"}
        assert match.confidence == pytest.approx(0.85)
        assert match.action.type == ActionType.REPLY

    @pytest.mark.parametrize("raw", ["asdkjasd", "", "um uh please", None])
    def test_unknown(self, raw):
        """Nothing matching yields UNKNOWN with zero confidence."""
        match = detect(raw)
        assert match.intent == IntentId.UNKNOWN
        assert match.confidence == 0.0
        assert match.entities == {}
        assert match.action is None

    @pytest.mark.parametrize("raw", [
        "dikhao events",
        "add master chef to cart",
        "mujhe codeology ke baare me batao",
        "robo race prize money",
        "day 3 schedule",
    ])
    def test_deterministic_and_bounded(self, raw):
        """Repeated calls agree and confidence stays in [0, 1]."""
        first = detect(raw)
        second = detect(raw)
        assert first == second
        assert 0.0 <= first.confidence <= 1.0

    def test_match_is_frozen(self):
        """Matches are immutable."""
        match = detect("show events")
        with pytest.raises(AttributeError):
            match.confidence = 0.1


class TestMatchWithEntities:
    """Tests for the entity matcher."""

    def test_capture_between_fixed_tokens(self):
        """The entity stops at the next fixed token."""
        result = match_with_entities(["add", "master", "chef", "cart"], ["add", "$name", "cart"])
        assert result.entities == {"name": "master chef"}
        assert result.score == pytest.approx(0.9)

    def test_capture_rest_when_next_token_missing(self):
        """Without the next fixed token the entity takes the remainder."""
        result = match_with_entities(["add", "master", "chef"], ["add", "$name", "cart"])
        assert result.entities == {"name": "master chef"}
        assert result.score == pytest.approx(0.45)

    def test_multiple_entities_do_not_overlap(self):
        """Captures are disjoint slices of the input."""
        words = ["from", "day", "one", "to", "day", "three"]
        result = match_with_entities(words, ["from", "$start", "to", "$end"])
        assert result.entities == {"start": "day one", "end": "day three"}

    def test_adjacent_entities(self):
        """A second adjacent placeholder gets nothing once the first consumed it."""
        result = match_with_entities(["a", "b", "x"], ["$first", "$second", "x"])
        assert result.entities == {"first": "a b"}

    def test_fixed_without_entity(self):
        """All fixed tokens but no capture halves the score."""
        result = match_with_entities(["show"], ["show", "$name"])
        assert result.entities == {}
        assert result.score == pytest.approx(0.5)

    def test_placeholder_only_pattern(self):
        """Patterns with no fixed tokens never score."""
        assert match_with_entities(["anything"], ["$name"]).score == 0.0


class TestTokenOverlap:
    """Tests for plain pattern scoring."""

    def test_exact(self):
        """Identical word sets score 1."""
        assert token_overlap_score(["show", "events"], ["show", "events"]) == pytest.approx(1.0)

    def test_noisy_input_penalized(self):
        """Extra input words reduce the score."""
        score = token_overlap_score(["show", "all", "events", "now"], ["show", "events"])
        assert score == pytest.approx(0.85)

    def test_partial_coverage(self):
        """Missing pattern words reduce coverage."""
        assert token_overlap_score(["show"], ["show", "events"]) == pytest.approx(0.5)

    def test_empty_pattern(self):
        """An empty pattern scores 0."""
        assert token_overlap_score(["show"], []) == 0.0

    def test_match_pattern_dispatch(self):
        """Placeholder patterns go through the entity matcher."""
        assert match_pattern(["find", "codeology"], ["find", "$name"]).entities == {"name": "codeology"}
        assert match_pattern(["show", "events"], ["show", "events"]).entities == {}
