"""
Intent Dataset.
Static table mapping trigger phrases to intents.

Each definition carries:
- id:       closed IntentId enum member
- patterns: canonical English phrases; tokens prefixed with `$` capture an entity
- action:   what the UI should do, the single source of truth for action shape

Patterns are matched after normalization (Hinglish -> English). The best
score wins and equal scores keep the earlier definition, so longer, more
specific phrasings are listed before the intents they extend.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class IntentId(str, Enum):
    """Every intent the pipeline can produce."""

    # Navigation
    NAV_HOME = "NAV_HOME"
    NAV_DASHBOARD = "NAV_DASHBOARD"
    NAV_EVENTS = "NAV_EVENTS"
    NAV_LOGIN = "NAV_LOGIN"
    NAV_REGISTER = "NAV_REGISTER"
    NAV_BACK = "NAV_BACK"
    NAV_EVENT = "NAV_EVENT"
    NAV_CART = "NAV_CART"

    # Event queries
    QUERY_UPCOMING_EVENTS = "QUERY_UPCOMING_EVENTS"
    LIST_ALL_EVENTS = "LIST_ALL_EVENTS"
    RECOMMEND_EVENT = "RECOMMEND_EVENT"
    SEARCH_EVENT = "SEARCH_EVENT"
    EVENT_DETAILS = "EVENT_DETAILS"
    EVENT_WHEN = "EVENT_WHEN"
    EVENT_WHERE = "EVENT_WHERE"
    EVENT_PRICE = "EVENT_PRICE"
    EVENT_PRIZE = "EVENT_PRIZE"
    DEPT_EVENTS = "DEPT_EVENTS"
    DAY_EVENTS = "DAY_EVENTS"
    FEST_INFO = "FEST_INFO"

    # Cart
    ADD_TO_CART = "ADD_TO_CART"
    ADD_CART_AND_CHECKOUT = "ADD_CART_AND_CHECKOUT"
    REMOVE_FROM_CART = "REMOVE_FROM_CART"
    CLEAR_CART = "CLEAR_CART"

    # Registration / dashboard
    REGISTER_EVENT = "REGISTER_EVENT"
    QUERY_STATS = "QUERY_STATS"
    QUERY_MY_REGISTRATIONS = "QUERY_MY_REGISTRATIONS"

    # Platform info
    INFO_WHAT_IS_CITRO = "INFO_WHAT_IS_CITRO"
    INFO_WHO_MADE_CITRO = "INFO_WHO_MADE_CITRO"
    INFO_EVENT_LOCATION = "INFO_EVENT_LOCATION"
    INFO_EVENT_DATE = "INFO_EVENT_DATE"
    INFO_HOW_TO_REGISTER = "INFO_HOW_TO_REGISTER"
    INFO_TICKET_PRICE = "INFO_TICKET_PRICE"
    INFO_CONTACT = "INFO_CONTACT"

    # Page context
    CONTEXT_WHERE_AM_I = "CONTEXT_WHERE_AM_I"
    CONTEXT_WHAT_CAN_I_DO = "CONTEXT_WHAT_CAN_I_DO"

    # Small talk
    GREETING = "GREETING"
    HOW_ARE_YOU = "HOW_ARE_YOU"
    COMPLIMENT = "COMPLIMENT"
    JOKE = "JOKE"
    BORED = "BORED"
    HELP = "HELP"
    THANK_YOU = "THANK_YOU"
    WHO_ARE_YOU = "WHO_ARE_YOU"
    GOODBYE = "GOODBYE"

    # FAQ
    FAQ_CERTIFICATE = "FAQ_CERTIFICATE"
    FAQ_CANCEL_REGISTRATION = "FAQ_CANCEL_REGISTRATION"
    FAQ_REFUND = "FAQ_REFUND"
    FAQ_TEAM_SIZE = "FAQ_TEAM_SIZE"
    FAQ_WIFI = "FAQ_WIFI"
    FAQ_FOOD = "FAQ_FOOD"
    FAQ_WHAT_TO_BRING = "FAQ_WHAT_TO_BRING"
    FAQ_PARKING = "FAQ_PARKING"
    FAQ_ACCOMMODATION = "FAQ_ACCOMMODATION"

    # Synthetic fallbacks, never matched by a pattern
    UNKNOWN = "UNKNOWN"
    LOW_CONFIDENCE = "LOW_CONFIDENCE"


class ActionType(str, Enum):
    """UI action families."""
    NAVIGATE = "navigate"
    QUERY = "query"
    EXECUTE = "execute"
    DISPLAY = "display"
    REPLY = "reply"
    CONTEXT = "context"
    CLOSE = "close"
    ADD_TO_CART = "add-to-cart"
    ADD_TO_CART_AND_CHECKOUT = "add-to-cart-and-checkout"
    REMOVE_FROM_CART = "remove-from-cart"
    CLEAR_CART = "clear-cart"


@dataclass(frozen=True)
class IntentAction:
    """Declared UI action: a type plus a static payload (path, handler, widget)."""
    type: ActionType
    payload: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, **self.payload}


@dataclass(frozen=True)
class IntentDefinition:
    id: IntentId
    patterns: Tuple[str, ...]
    action: IntentAction

    @property
    def has_entities(self) -> bool:
        return any(tok.startswith("$") for p in self.patterns for tok in p.split())


def _action(action_type: ActionType, **payload) -> IntentAction:
    return IntentAction(action_type, MappingProxyType(payload))


def _intent(intent_id: IntentId, patterns, action: IntentAction) -> IntentDefinition:
    return IntentDefinition(intent_id, tuple(patterns), action)


_REPLY = _action(ActionType.REPLY)


# =========================
# Intent Table
# =========================

INTENTS: Tuple[IntentDefinition, ...] = (
    # Navigation
    _intent(IntentId.NAV_HOME, [
        "go home", "open home", "show home", "home page", "take me home",
        "go to home", "back to home", "main page", "landing page",
    ], _action(ActionType.NAVIGATE, path="/")),
    _intent(IntentId.NAV_DASHBOARD, [
        "open dashboard", "show dashboard", "go to dashboard", "dashboard",
        "my dashboard", "take me to dashboard",
    ], _action(ActionType.NAVIGATE, path="/dashboard")),
    _intent(IntentId.NAV_EVENTS, [
        "show events", "open events", "go to events", "events page",
        "all events", "show all events", "list events", "events",
        "browse events", "event list", "see events",
    ], _action(ActionType.NAVIGATE, path="/events")),
    _intent(IntentId.NAV_LOGIN, [
        "login", "log in", "sign in", "go to login",
    ], _action(ActionType.NAVIGATE, path="/login")),
    _intent(IntentId.NAV_REGISTER, [
        "sign up", "create account", "go to register", "register page",
        "registration page", "i want to register",
    ], _action(ActionType.NAVIGATE, path="/register")),
    _intent(IntentId.NAV_BACK, [
        "go back", "back", "previous page", "take me back",
        "go to previous", "back page",
    ], _action(ActionType.NAVIGATE, path="back")),

    # Event queries
    _intent(IntentId.QUERY_UPCOMING_EVENTS, [
        "upcoming events", "show upcoming events", "what events are coming",
        "next events", "new events", "upcoming", "what is coming up",
        "what events are happening", "show me upcoming", "any events soon",
        "events happening soon", "what is next",
    ], _action(ActionType.DISPLAY, widget="upcoming-events")),
    _intent(IntentId.LIST_ALL_EVENTS, [
        "list all events", "list out all events", "list me out all events",
        "show me all events", "all events list",
        "can you list all events", "list every event",
        "what are all events", "tell me all events",
        "all the events", "every event", "complete event list",
        "full event list", "show complete events",
        "which events you know", "what events you know",
        "what events do you know", "what events do you have",
        "which events do you have", "what events are there",
        "which events are there", "how many events you know",
        "what all events", "tell me events", "which events",
    ], _REPLY),
    _intent(IntentId.RECOMMEND_EVENT, [
        "which is best event", "best event", "recommended events",
        "which event should attend", "top events", "popular events",
        "suggest events", "best events happening", "which is best",
        "what is best event", "most popular event", "highlight events",
        "must attend events", "which events are best",
    ], _REPLY),
    _intent(IntentId.SEARCH_EVENT, [
        "search event $name", "find event $name", "search $name",
        "find $name event", "look for $name", "search for $name",
        "find $name", "is there $name",
    ], _action(ActionType.NAVIGATE, path="/events", query=True)),

    # Event knowledge
    _intent(IntentId.EVENT_DETAILS, [
        "tell me about $name", "what is $name", "details of $name",
        "info about $name", "about $name event", "describe $name",
        "explain $name", "$name details", "$name info",
        "what is $name about", "tell about $name", "details $name",
    ], _REPLY),
    _intent(IntentId.NAV_EVENT, [
        "open $name", "show $name", "take me to $name",
        "go to $name", "open $name event", "show me $name",
        "navigate to $name", "visit $name",
    ], _action(ActionType.NAVIGATE, path="/events")),
    _intent(IntentId.EVENT_WHEN, [
        "when is $name", "what time is $name", "time of $name",
        "when does $name start", "schedule of $name", "date of $name",
        "$name timing", "$name date", "$name time", "when $name",
    ], _REPLY),
    _intent(IntentId.EVENT_WHERE, [
        "where is $name", "venue of $name", "location of $name",
        "$name venue", "$name location", "where is $name happening",
        "where will $name be", "$name where",
    ], _REPLY),
    _intent(IntentId.EVENT_PRICE, [
        "price of $name", "how much is $name", "cost of $name",
        "$name price", "$name cost", "$name fee", "fee for $name",
        "ticket price of $name", "how much for $name", "$name ticket price",
    ], _REPLY),
    _intent(IntentId.EVENT_PRIZE, [
        "prize of $name", "prize for $name", "what is the prize for $name",
        "$name prize", "$name prize money", "prize money of $name",
        "reward for $name", "winning prize $name", "how much prize $name",
    ], _REPLY),
    _intent(IntentId.DEPT_EVENTS, [
        "$name department events", "events by $name", "events of $name",
        "events from $name", "$name events", "show $name department events",
        "what events does $name have", "list $name events",
        "events in $name department", "events under $name",
    ], _REPLY),
    _intent(IntentId.DAY_EVENTS, [
        "events on day $name", "day $name events", "what is on day $name",
        "show day $name", "day $name schedule", "schedule for day $name",
        "events on april $name", "april $name events",
        "day 1 events", "day 2 events", "day 3 events",
        "first day events", "second day events", "third day events",
        "what events are on day 1", "what events are on day 2", "what events are on day 3",
    ], _REPLY),
    _intent(IntentId.FEST_INFO, [
        "about the fest", "about citronics fest", "tell me about the fest",
        "citronics 2026", "about citronics 2026", "fest details",
        "what is citronics 2026", "when is the fest", "fest schedule",
        "how many events", "total events", "how many events are there",
        "fest theme", "what is the theme",
        "about citronics", "citronics", "tell me about citronics",
        "what is citronics",
    ], _REPLY),

    # Cart / checkout
    _intent(IntentId.ADD_CART_AND_CHECKOUT, [
        "select $name and checkout", "select $name and move to checkout",
        "add $name and checkout", "add $name to cart and checkout",
        "book $name and checkout", "buy $name and checkout",
        "add $name and go to cart", "select $name and go to cart",
        "add $name to cart and go to checkout",
        "select $name and proceed to checkout",
        "select $name and pay", "buy $name and pay",
    ], _action(ActionType.ADD_TO_CART_AND_CHECKOUT, path="/cart")),
    _intent(IntentId.ADD_TO_CART, [
        "add $name to cart", "add $name to my cart",
        "put $name in cart", "put $name in my cart",
        "select $name", "book $name", "buy $name",
        "i want $name", "add $name", "cart $name",
        "get ticket for $name", "get tickets for $name",
        "buy ticket for $name", "buy tickets for $name",
    ], _action(ActionType.ADD_TO_CART)),
    _intent(IntentId.NAV_CART, [
        "go to cart", "open cart", "show cart", "view cart",
        "my cart", "show my cart", "checkout", "go to checkout",
        "proceed to checkout", "move to checkout", "open checkout",
        "cart page", "take me to cart", "take me to checkout",
    ], _action(ActionType.NAVIGATE, path="/cart")),
    _intent(IntentId.REMOVE_FROM_CART, [
        "remove $name from cart", "delete $name from cart",
        "remove $name", "take out $name from cart",
        "cancel $name from cart",
    ], _action(ActionType.REMOVE_FROM_CART)),
    _intent(IntentId.CLEAR_CART, [
        "clear cart", "empty cart", "clear my cart", "empty my cart",
        "remove everything from cart", "delete all from cart",
    ], _action(ActionType.CLEAR_CART)),

    # Registration
    _intent(IntentId.REGISTER_EVENT, [
        "register for $name", "register do $name", "sign up for $name",
        "do registration $name", "register $name", "enroll $name",
        "enroll for $name", "join $name",
    ], _action(ActionType.EXECUTE, handler="registerForEvent", path="/events")),

    # Dashboard stats
    _intent(IntentId.QUERY_STATS, [
        "show stats", "dashboard stats", "how many events",
        "total events", "total registrations", "show statistics",
        "give me stats", "event count", "numbers", "overview",
    ], _action(ActionType.DISPLAY, widget="stats")),
    _intent(IntentId.QUERY_MY_REGISTRATIONS, [
        "my registrations", "show my registrations", "what did register for",
        "my events", "registered events", "show my events",
        "what am i registered for", "my tickets",
    ], _action(ActionType.DISPLAY, widget="my-registrations")),

    # Platform info
    # "citro" is filler, so "about citro" would collapse to a bare "about"
    _intent(IntentId.INFO_WHAT_IS_CITRO, [
        "what is citro", "explain citro", "what is this platform", "what is this website",
        "what is this site", "what does citro do", "what is this app",
        "what is this",
    ], _REPLY),
    _intent(IntentId.INFO_WHO_MADE_CITRO, [
        "who made citro", "who built citro", "who created citro",
        "who made this", "who built this", "developers of citro",
        "who is behind citro", "made by whom", "created by",
    ], _REPLY),
    _intent(IntentId.INFO_EVENT_LOCATION, [
        "where is the event", "event location", "where is citronics",
        "location", "venue", "where is it happening", "event venue",
        "address", "where should i go", "how to reach", "directions",
        "where are the events",
    ], _REPLY),
    _intent(IntentId.INFO_EVENT_DATE, [
        "when is the event", "event date", "when is citronics",
        "date", "when is it", "when does it start", "event time",
        "what date", "when is it happening", "timing",
    ], _REPLY),
    _intent(IntentId.INFO_HOW_TO_REGISTER, [
        "how to register", "how do i register", "registration process",
        "how to sign up", "how to join", "how to participate",
        "how can i register", "registration steps", "how enrollment works",
        "steps to register", "how do i sign up",
    ], _REPLY),
    _intent(IntentId.INFO_TICKET_PRICE, [
        "ticket price", "how much", "cost", "fees", "is it free",
        "registration fee", "price", "ticket cost", "how much does it cost",
        "entry fee", "pricing", "is registration free",
    ], _REPLY),
    _intent(IntentId.INFO_CONTACT, [
        "contact", "contact us", "support", "email", "phone number",
        "how to contact", "helpline", "customer support", "reach out",
        "organizer contact", "get in touch",
    ], _REPLY),

    # Page context
    _intent(IntentId.CONTEXT_WHERE_AM_I, [
        "where am i", "what page is this", "current page", "which page",
        "what page", "where am i right now",
    ], _action(ActionType.CONTEXT)),
    _intent(IntentId.CONTEXT_WHAT_CAN_I_DO, [
        "what can i do here", "what is on this page", "what can i see",
        "options on this page", "what is available here", "show me options",
    ], _action(ActionType.CONTEXT)),

    # Small talk
    _intent(IntentId.GREETING, [
        "hello", "hi", "hey", "namaste", "good morning", "good evening",
        "good afternoon", "whats up", "howdy", "sup", "hi there",
        "hey there", "hello there", "greetings", "yo",
    ], _REPLY),
    _intent(IntentId.HOW_ARE_YOU, [
        "how are you", "how is it going", "how do you do",
        "how you doing", "are you fine", "are you okay",
        "how are you doing", "whats going on", "hows life",
    ], _REPLY),
    _intent(IntentId.COMPLIMENT, [
        "you are great", "you are awesome", "nice", "awesome", "cool",
        "amazing", "wonderful", "brilliant", "fantastic", "good job",
        "well done", "great work", "love it", "you rock", "superb",
        "love you", "you are the best", "impressive",
    ], _REPLY),
    _intent(IntentId.JOKE, [
        "tell me joke", "joke", "make me laugh", "say something funny",
        "tell joke", "funny", "humor", "entertain me",
    ], _REPLY),
    _intent(IntentId.BORED, [
        "bored", "boring", "nothing do", "what should do",
        "suggest something", "any suggestions", "what do recommend",
    ], _REPLY),
    _intent(IntentId.HELP, [
        "help", "what can you do", "commands", "show help", "how to use",
        "what do you do", "your features", "capabilities", "assist me",
    ], _REPLY),
    _intent(IntentId.THANK_YOU, [
        "thank you", "thanks", "shukriya", "dhanyavaad", "thank",
    ], _REPLY),
    _intent(IntentId.WHO_ARE_YOU, [
        "who are you", "what are you", "your name", "introduce yourself",
        "are you a bot", "are you ai", "are you real",
    ], _REPLY),
    _intent(IntentId.GOODBYE, [
        "bye", "goodbye", "see you", "later", "good night",
        "take care", "close", "nevermind", "never mind",
    ], _action(ActionType.CLOSE)),

    # FAQ
    _intent(IntentId.FAQ_CERTIFICATE, [
        "will i get a certificate", "certificate", "do i get certificate",
        "is there a certificate", "participation certificate", "certificates",
        "do we get certificates", "certificate of participation",
    ], _REPLY),
    _intent(IntentId.FAQ_CANCEL_REGISTRATION, [
        "cancel registration", "cancel my registration", "how to cancel",
        "unregister", "remove registration", "cancel enrollment",
        "can i cancel", "withdraw registration", "cancel my ticket",
    ], _REPLY),
    _intent(IntentId.FAQ_REFUND, [
        "refund", "refund policy", "can i get a refund", "money back",
        "return my money", "refund request", "how to get refund",
    ], _REPLY),
    _intent(IntentId.FAQ_TEAM_SIZE, [
        "team size", "how many members", "team limit", "group size",
        "max team size", "minimum team size", "solo or team",
        "can i participate alone", "individual participation",
    ], _REPLY),
    _intent(IntentId.FAQ_WIFI, [
        "is there wifi", "wifi available", "internet access", "wifi",
        "internet", "is wifi available", "wifi password",
    ], _REPLY),
    _intent(IntentId.FAQ_FOOD, [
        "is there food", "food", "meals", "lunch", "snacks",
        "will food be provided", "refreshments", "is food included",
        "breakfast", "dinner", "catering",
    ], _REPLY),
    _intent(IntentId.FAQ_WHAT_TO_BRING, [
        "what to bring", "what should i bring", "do i need a laptop",
        "bring laptop", "requirements", "things to carry",
        "what do i need", "prerequisites",
    ], _REPLY),
    _intent(IntentId.FAQ_PARKING, [
        "parking", "is there parking", "parking available", "where to park",
        "parking facility", "car parking", "vehicle parking",
    ], _REPLY),
    _intent(IntentId.FAQ_ACCOMMODATION, [
        "accommodation", "stay", "hotel", "where to stay", "hostel",
        "accommodation available", "lodging", "can i stay overnight",
        "overnight stay", "rooms",
    ], _REPLY),
)

_BY_ID: Mapping[IntentId, IntentDefinition] = MappingProxyType({d.id: d for d in INTENTS})

# Actions for the synthetic intents
_FALLBACK_ACTIONS: Mapping[IntentId, IntentAction] = MappingProxyType({
    IntentId.UNKNOWN: _REPLY,
    IntentId.LOW_CONFIDENCE: _REPLY,
})


def get_intent_definition(intent_id: IntentId) -> Optional[IntentDefinition]:
    return _BY_ID.get(IntentId(intent_id))


def get_declared_action(intent_id: IntentId) -> IntentAction:
    """Declared action for an intent, including the synthetic fallbacks."""
    intent_id = IntentId(intent_id)
    definition = _BY_ID.get(intent_id)
    if definition is not None:
        return definition.action
    return _FALLBACK_ACTIONS[intent_id]
