"""Tests for response rendering."""

import pytest

from citro.voice.event_knowledge import EVENTS, FEST_INFO
from citro.voice.intent_dataset import IntentId
from citro.voice.response_templates import TEMPLATES, RenderContext, build_response


def _event(name):
    return next(e for e in EVENTS if e.name == name)


CART_ITEM = {
    "eventId": 7,
    "title": "Master Chef",
    "ticketPrice": 300.0,
    "quantity": 1,
    "venue": "CDIPS Entrance",
    "startTime": None,
    "image": None,
    "available": 10,
}


class TestTemplateTable:
    """Tests for template coverage."""

    def test_every_intent_has_a_template(self):
        """No intent falls through to the default."""
        assert set(TEMPLATES) == set(IntentId)

    @pytest.mark.parametrize("intent", list(IntentId))
    def test_renders_without_data(self, intent):
        """Every template renders with an empty context."""
        response = build_response(intent, RenderContext(hour=10))
        assert isinstance(response.reply, str)
        assert response.reply
        assert response.intent == intent.value


class TestBuildResponse:
    """Tests for build_response()."""

    def test_navigation_uses_declared_action(self):
        """Navigation replies carry the dataset action."""
        response = build_response(IntentId.NAV_EVENTS, RenderContext(confidence=1.0))
        assert response.reply == "Here are the events!"
        assert response.action == {"type": "navigate", "path": "/events"}
        assert response.confidence == 1.0
        assert response.speak_text is None

    def test_reply_actions_are_dropped(self):
        """Reply-only intents send no action."""
        assert build_response(IntentId.JOKE).action is None
        assert build_response(IntentId.CONTEXT_WHERE_AM_I).action is None

    def test_goodbye_closes(self):
        """Goodbye tells the UI to close."""
        assert build_response(IntentId.GOODBYE).action == {"type": "close"}

    def test_unknown_intent_id(self):
        """An unrecognized intent renders as UNKNOWN."""
        response = build_response("NOT_AN_INTENT", RenderContext(transcript="blah"))
        assert response.intent == "UNKNOWN"
        assert response.reply.startswith('I\'m not sure about "blah".')

    def test_event_details(self):
        """Event details render the detail card and a spoken summary."""
        ctx = RenderContext(data={"event": _event("Codeology")})
        response = build_response(IntentId.EVENT_DETAILS, ctx)
        assert response.reply.startswith("📌 Codeology")
        assert response.speak_text == "Codeology is on April 8, 2026 at Lab 8 & 9. Entry is 100 rupees."
        assert response.action is None

    def test_event_error_is_surfaced(self):
        """Resolver errors are shown verbatim."""
        ctx = RenderContext(error='I couldn\'t find an event called "zzz".')
        response = build_response(IntentId.EVENT_WHEN, ctx)
        assert response.reply == 'I couldn\'t find an event called "zzz".'

    def test_failed_event_lookup_sends_no_action(self):
        """A navigation intent whose event was not found does not navigate."""
        ctx = RenderContext(error='I couldn\'t find an event called "zzz".')
        response = build_response(IntentId.NAV_EVENT, ctx)
        assert response.reply == 'I couldn\'t find an event called "zzz".'
        assert response.action is None

    def test_event_when(self):
        """Time questions answer with date and time."""
        ctx = RenderContext(data={"event": _event("ROBO Soccer")})
        response = build_response(IntentId.EVENT_WHEN, ctx)
        assert response.reply == "📅 ROBO Soccer is on April 8-9, 2026, from 12:00 PM to 4:00 PM."
        assert response.speak_text == response.reply

    def test_stats(self):
        """Stats render the headline numbers."""
        ctx = RenderContext(data={
            "total_events": 35, "active_events": 30, "total_registrations": 12, "tickets_sold": 9,
        })
        response = build_response(IntentId.QUERY_STATS, ctx)
        assert response.reply == (
            "Here's a quick overview: 35 total events, 30 active, 12 registrations, and 9 tickets sold."
        )
        assert response.action == {"type": "display", "widget": "stats"}

    def test_upcoming_truncates(self):
        """Only the first three upcoming titles are listed."""
        events = [{"title": t} for t in ["A", "B", "C", "D", "E"]]
        response = build_response(IntentId.QUERY_UPCOMING_EVENTS, RenderContext(data=events))
        assert response.reply == "Upcoming events: A, B, C and 2 more."

    def test_upcoming_empty(self):
        """No upcoming events says so."""
        response = build_response(IntentId.QUERY_UPCOMING_EVENTS, RenderContext(data=[]))
        assert response.reply == "No upcoming events found right now."

    def test_department_events(self):
        """Department listings count events with correct plurals."""
        events = [_event("Codeology")]
        ctx = RenderContext(data={"department": "CSE", "events": events})
        response = build_response(IntentId.DEPT_EVENTS, ctx)
        assert response.reply.startswith("🏛️ Computer Science & Engineering (CSE) has 1 event:")
        assert response.speak_text == "CSE has 1 event."

    def test_day_events(self):
        """Day listings use the day label."""
        ctx = RenderContext(data={"day": 3, "events": [_event("ROBO Swim"), _event("ZENGA Block")]})
        response = build_response(IntentId.DAY_EVENTS, ctx)
        assert response.reply.startswith("📅 Day 3 (April 10) - 2 events:")
        assert "• ROBO Swim - 10:00 AM, Swimming Pool" in response.reply

    def test_fest_info(self):
        """Fest info reads the fest summary."""
        response = build_response(IntentId.FEST_INFO, RenderContext(data={"fest": dict(FEST_INFO)}))
        assert "Total Events: 35 across 14 departments" in response.reply

    def test_list_all_events(self):
        """The full listing names every event."""
        reply = build_response(IntentId.LIST_ALL_EVENTS).reply
        assert reply.startswith("📋 All 35 Citronics 2K26 Events:")
        for event in EVENTS:
            assert event.name in reply


class TestCartResponses:
    """Tests for cart replies and actions."""

    def test_add_to_cart(self):
        """A successful add dispatches the cart item."""
        ctx = RenderContext(data={"event": _event("Master Chef"), "cartItem": CART_ITEM})
        response = build_response(IntentId.ADD_TO_CART, ctx)
        assert response.action == {"type": "add-to-cart", "cartItem": CART_ITEM}
        assert "💰 Price: ₹300" in response.reply
        assert "📍 CDIPS Entrance - April 8, 2026" in response.reply
        assert response.speak_text == "Added Master Chef to your cart! Say checkout when you're ready."

    def test_add_and_checkout(self):
        """Checkout adds the path to the declared action."""
        ctx = RenderContext(data={"event": _event("Master Chef"), "cartItem": CART_ITEM})
        response = build_response(IntentId.ADD_CART_AND_CHECKOUT, ctx)
        assert response.action == {"type": "add-to-cart-and-checkout", "path": "/cart", "cartItem": CART_ITEM}

    def test_sold_out(self):
        """Sold-out results show the error, keep the flag and send no action."""
        data = {"soldOut": True, "event": None, "eventId": 7, "eventTitle": "Master Chef"}
        ctx = RenderContext(data=data, error='Sorry, "Master Chef" is sold out! Check out other events.')
        response = build_response(IntentId.ADD_TO_CART, ctx)
        assert response.reply == 'Sorry, "Master Chef" is sold out! Check out other events.'
        assert response.action is None
        assert response.data["soldOut"] is True
        assert response.speak_text is None

    def test_remove(self):
        """Removal dispatches the event id."""
        ctx = RenderContext(data={"event": None, "eventId": 7, "eventTitle": "Master Chef"})
        response = build_response(IntentId.REMOVE_FROM_CART, ctx)
        assert response.reply == '🗑️ Removed "Master Chef" from your cart.'
        assert response.action == {"type": "remove-from-cart", "eventId": 7}


class TestChatResponses:
    """Tests for conversational replies."""

    @pytest.mark.parametrize("hour,greeting", [(9, "Good morning"), (14, "Good afternoon"), (20, "Good evening")])
    def test_greeting_by_hour(self, hour, greeting):
        """The greeting follows the time of day."""
        reply = build_response(IntentId.GREETING, RenderContext(hour=hour)).reply
        assert reply.startswith(f"{greeting}! I'm Citro")

    def test_variants_follow_seed(self):
        """The seed picks the variant deterministically."""
        first = build_response(IntentId.JOKE, RenderContext(seed=0)).reply
        again = build_response(IntentId.JOKE, RenderContext(seed=0)).reply
        other = build_response(IntentId.JOKE, RenderContext(seed=1)).reply
        assert first == again
        assert first != other

    def test_where_am_i(self):
        """Page context names the page."""
        response = build_response(IntentId.CONTEXT_WHERE_AM_I, RenderContext(current_page="/dashboard"))
        assert response.reply == "You're currently on the dashboard."
        unknown = build_response(IntentId.CONTEXT_WHERE_AM_I, RenderContext(current_page="/profile"))
        assert unknown.reply == "You're currently on the profile page."

    def test_low_confidence_echoes_transcript(self):
        """Low-confidence replies quote what was heard."""
        response = build_response(IntentId.LOW_CONFIDENCE, RenderContext(transcript="asdkjasd", confidence=0.2))
        assert response.reply.startswith('I heard "asdkjasd", but ')
        assert response.confidence == 0.2
        assert response.action is None
