"""
Response Templates.
Deterministic reply text for every intent.

Each template has a reply (static text or a callable over the render
context), a speakable rule for TTS, and an optional action override. When
no override is given the intent's declared action from the dataset is used.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Union

from citro.core.models import VoiceResponse
from citro.voice.event_knowledge import (
    DEPARTMENTS,
    FEST_INFO,
    format_event_details,
    get_day_label,
    get_event_count,
    iter_events_by_department,
)
from citro.voice.intent_dataset import ActionType, IntentId, get_declared_action

logger = logging.getLogger(__name__)


@dataclass
class RenderContext:
    """Everything a template may read."""
    entities: Dict[str, str] = field(default_factory=dict)
    data: Any = None
    error: Optional[str] = None
    confidence: float = 0.0
    current_page: str = "/"
    transcript: str = ""
    seed: int = 0
    hour: Optional[int] = None

    def get(self, key: str, default: Any = None) -> Any:
        """Read a key from dict-shaped resolver data."""
        if isinstance(self.data, Mapping):
            return self.data.get(key, default)
        return default

    def pick(self, variants: Sequence[str]) -> str:
        return variants[self.seed % len(variants)]


TextRule = Union[str, Callable[[RenderContext], Optional[str]]]
ActionRule = Callable[[RenderContext], Optional[Dict[str, Any]]]


@dataclass(frozen=True)
class ResponseTemplate:
    reply: TextRule
    # True speaks the reply, a string speaks that summary, None stays silent
    speakable: Union[bool, TextRule, None] = None
    action: Optional[ActionRule] = None


# Declared action types that carry nothing for the UI to do
SILENT_ACTION_TYPES = (ActionType.REPLY, ActionType.CONTEXT)


# =========================
# Page context
# =========================

PAGE_LABELS = {
    "/": "the home page",
    "/dashboard": "the dashboard",
    "/events": "the events page",
    "/login": "the login page",
    "/register": "the registration page",
    "/cart": "your cart",
}

PAGE_HINTS = {
    "/": "From here you can browse events, or ask me anything about Citronics.",
    "/dashboard": "Here you can see your stats, registrations, and manage your events.",
    "/events": "You can browse all events, search for specific ones, or register for any event you like.",
    "/login": "Enter your credentials to sign in, or say 'register' to create an account.",
    "/register": "Fill in your details to create an account and start registering for events.",
    "/cart": "Review your tickets here. Say 'checkout' to pay, or 'clear cart' to start over.",
}

DEFAULT_PAGE_HINT = "You can navigate to events, browse the dashboard, or ask me anything about Citronics."


def page_label(page: str) -> str:
    return PAGE_LABELS.get(page) or f"the {page.strip('/') or 'home'} page"


# =========================
# Event knowledge replies
# =========================

NOT_FOUND_SHORT = "I couldn't find that event. Try the full event name!"


def _event(ctx: RenderContext):
    return ctx.get("event")


def _event_reply(render: Callable[[Any], str], missing: str = NOT_FOUND_SHORT) -> Callable[[RenderContext], str]:
    """Wrap an event renderer with the shared error and not-found handling."""
    def reply(ctx: RenderContext) -> str:
        if ctx.error:
            return ctx.error
        event = _event(ctx)
        if event is None:
            return missing
        return render(event)
    return reply


def _nav_event_reply(ev) -> str:
    return f"Opening \"{ev.name}\" - it's at {ev.venue} on {ev.date}. Taking you to the events page!"


def _details_speakable(ctx: RenderContext) -> Optional[str]:
    ev = _event(ctx)
    if ev is None:
        return None
    return f"{ev.name} is on {ev.date} at {ev.venue}. Entry is {ev.price} rupees."


def _stats_reply(ctx: RenderContext) -> str:
    d = ctx.data
    if not d:
        return ctx.error or "Could not fetch stats right now."
    return (
        f"Here's a quick overview: {d.get('total_events', 0)} total events, "
        f"{d.get('active_events', 0)} active, {d.get('total_registrations', 0)} registrations, "
        f"and {d.get('tickets_sold', 0)} tickets sold."
    )


def _upcoming_reply(ctx: RenderContext) -> str:
    events = ctx.data or []
    if not events:
        return ctx.error or "No upcoming events found right now."
    names = ", ".join(e.get("title", "") for e in events[:3])
    suffix = f" and {len(events) - 3} more." if len(events) > 3 else "."
    return f"Upcoming events: {names}{suffix}"


def _search_reply(ctx: RenderContext) -> str:
    name = ctx.entities.get("name") or "events"
    return f"Searching for \"{name}\"... Let me take you to the events page."


def _register_reply(ctx: RenderContext) -> str:
    ev = _event(ctx)
    if ev is not None:
        return (
            f"Starting registration for \"{ev.name}\"! It costs ₹{ev.price} and is at "
            f"{ev.venue} on {ev.date}. Taking you to the events page!"
        )
    name = ctx.entities.get("name") or "the event"
    return f"Starting registration for \"{name}\". Taking you to the events page!"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _dept_reply(ctx: RenderContext) -> str:
    if ctx.error:
        return ctx.error
    department = ctx.get("department")
    events = ctx.get("events") or []
    if not events:
        return f"No events found for the {department} department."
    full_name = DEPARTMENTS.get(department, department)
    lines = "\n".join(f"• {e.name} - {e.date}, ₹{e.price}" for e in events)
    return f"🏛️ {full_name} ({department}) has {_plural(len(events), 'event')}:\n{lines}"


def _dept_speakable(ctx: RenderContext) -> Optional[str]:
    events = ctx.get("events")
    if events is None:
        return None
    return f"{ctx.get('department')} has {_plural(len(events), 'event')}."


def _day_reply(ctx: RenderContext) -> str:
    if ctx.error:
        return ctx.error
    day = ctx.get("day")
    events = ctx.get("events") or []
    if not events:
        return f"No events found for day {day}."
    lines = "\n".join(f"• {e.name} - {e.start_time}, {e.venue}" for e in events)
    return f"📅 {get_day_label(day)} - {_plural(len(events), 'event')}:\n{lines}"


def _day_speakable(ctx: RenderContext) -> Optional[str]:
    events = ctx.get("events")
    if events is None:
        return None
    return f"Day {ctx.get('day')} has {_plural(len(events), 'event')}."


def _fest(ctx: RenderContext) -> Mapping[str, Any]:
    return ctx.get("fest") or FEST_INFO


def _fest_reply(ctx: RenderContext) -> str:
    f = _fest(ctx)
    return (
        f"🎪 {f['name']}\n"
        f"🎨 Theme: \"{f['theme']}\"\n"
        f"📅 Dates: {f['dates']} ({f['days']} days)\n"
        f"📊 Total Events: {f['total_events']} across {f['departments']} departments\n"
        f"📍 Venue: {f['venue']}\n\n"
        "Ask me about any specific event, department, or day!"
    )


def _fest_speakable(ctx: RenderContext) -> str:
    f = _fest(ctx)
    return f"Citronics 2026 has {f['total_events']} events across {f['days']} days. The theme is {f['theme']}."


def _list_all_reply(ctx: RenderContext) -> str:
    parts = [f"📋 All {get_event_count()} Citronics 2K26 Events:\n"]
    for dept, events in iter_events_by_department():
        parts.append(f"🏛️ {DEPARTMENTS.get(dept, dept)} ({dept}):")
        parts.extend(f"  • {e.name} - {e.date}, ₹{e.price}" for e in events)
        parts.append("")
    parts.append("Say any event name to learn more!")
    return "\n".join(parts)


RECOMMENDED = (
    ("Shark Tank", "🦈 ₹30,000 prize - pitch your AI startup idea!"),
    ("Codeology", "💻 Classic coding battle with ₹12,000 in prizes!"),
    ("ROBO Soccer", "⚽ Build a robot and play soccer, ₹12,000 prizes!"),
    ("Youth Parliament", "🏛️ Full-day parliamentary debate, ₹16,200 in prizes!"),
    ("Master Chef", "👨‍🍳 Culinary showdown - cook your way to ₹8,000!"),
    ("Prompt it Right", "🤖 AI prompt engineering contest, ₹16,000 in prizes!"),
    ("Innovate 2026", "🚀 Mega project competition, ₹20,000+ prizes!"),
)


def _recommend_reply(ctx: RenderContext) -> str:
    lines = ["🌟 Top Recommended Events at Citronics 2K26:", ""]
    for name, why in RECOMMENDED:
        lines.extend([why, f"  → {name}", ""])
    lines.append("These are crowd favorites! Say any event name to get full details.")
    return "\n".join(lines)


# =========================
# Cart replies
# =========================

CART_FAILED = "I couldn't add that to your cart. Try saying the full event name!"


def _cart_name(ctx: RenderContext) -> Optional[str]:
    ev = _event(ctx)
    if ev is not None:
        return ev.name
    item = ctx.get("cartItem")
    return item.get("title") if item else None


def _add_to_cart_reply(ctx: RenderContext) -> str:
    if ctx.error:
        return ctx.error
    item = ctx.get("cartItem")
    if not item:
        return CART_FAILED
    ev = _event(ctx)
    where = f"{ev.venue} - {ev.date}" if ev is not None else (item.get("venue") or "Venue TBA")
    return (
        f"🛒 Added \"{_cart_name(ctx)}\" to your cart!\n"
        f"💰 Price: ₹{item['ticketPrice']:g}\n"
        f"📍 {where}\n\n"
        "Say 'checkout' to proceed or keep adding events!"
    )


def _add_to_cart_speakable(ctx: RenderContext) -> Optional[str]:
    if not ctx.get("cartItem"):
        return None
    return f"Added {_cart_name(ctx)} to your cart! Say checkout when you're ready."


def _add_to_cart_action(ctx: RenderContext) -> Optional[Dict[str, Any]]:
    item = ctx.get("cartItem")
    if not item:
        return None
    return {"type": ActionType.ADD_TO_CART.value, "cartItem": item}


def _checkout_reply(ctx: RenderContext) -> str:
    if ctx.error:
        return ctx.error
    item = ctx.get("cartItem")
    if not item:
        return CART_FAILED
    return (
        f"🛒 Added \"{_cart_name(ctx)}\" to your cart! (₹{item['ticketPrice']:g})\n"
        "🚀 Taking you to checkout now!"
    )


def _checkout_speakable(ctx: RenderContext) -> Optional[str]:
    if not ctx.get("cartItem"):
        return None
    return f"Added {_cart_name(ctx)} to your cart. Taking you to checkout!"


def _checkout_action(ctx: RenderContext) -> Optional[Dict[str, Any]]:
    item = ctx.get("cartItem")
    if not item:
        return None
    action = get_declared_action(IntentId.ADD_CART_AND_CHECKOUT).to_dict()
    action["cartItem"] = item
    return action


def _removed_name(ctx: RenderContext) -> str:
    return ctx.get("eventTitle") or "that event"


def _remove_reply(ctx: RenderContext) -> str:
    if ctx.error:
        return ctx.error
    return f"🗑️ Removed \"{_removed_name(ctx)}\" from your cart."


def _remove_action(ctx: RenderContext) -> Optional[Dict[str, Any]]:
    event_id = ctx.get("eventId")
    if event_id is None:
        return None
    return {"type": ActionType.REMOVE_FROM_CART.value, "eventId": event_id}


# =========================
# Chat replies
# =========================

def _salutation(hour: int) -> str:
    if hour < 12:
        return "Good morning"
    if hour < 17:
        return "Good afternoon"
    return "Good evening"


def _greeting_reply(ctx: RenderContext) -> str:
    hour = ctx.hour if ctx.hour is not None else datetime.now().hour
    hello = _salutation(hour)
    return ctx.pick((
        f"{hello}! I'm Citro, your Citronics fest buddy! 🎉 Ask me about any event, or say 'help' to see what I can do.",
        f"{hello}! Welcome to Citronics 2K26! I know all about the 36+ events happening April 8-10. What would you like to know?",
        "Hey there! 👋 I'm Citro, your fest guide. Try asking me 'what events does CSE have?' or 'tell me about Robo Soccer'!",
    ))


def _variants(*texts: str) -> Callable[[RenderContext], str]:
    return lambda ctx: ctx.pick(texts)


def _where_am_i(ctx: RenderContext) -> str:
    return f"You're currently on {page_label(ctx.current_page or '/')}."


def _what_can_i_do(ctx: RenderContext) -> str:
    return PAGE_HINTS.get(ctx.current_page or "/", DEFAULT_PAGE_HINT)


def _low_confidence_reply(ctx: RenderContext) -> str:
    heard = f"I heard \"{ctx.transcript}\", but " if ctx.transcript else ""
    return heard + ctx.pick((
        "I didn't quite catch that. Try asking about a specific event like 'tell me about Codeology' or say 'help' to see what I can do!",
        "I'm not sure what you mean. You can ask me things like 'when is Robo Soccer?', 'CSE events', or 'show events'.",
        "I couldn't understand that. Try saying an event name, or ask 'what events does MBA have?'",
    ))


def _unknown_reply(ctx: RenderContext) -> str:
    about = f"\"{ctx.transcript}\"" if ctx.transcript else "that one"
    return (
        f"I'm not sure about {about}. I'm best at answering questions about Citronics events! "
        "Try asking 'tell me about Robo Soccer', 'CSE events', or say 'help' to see what I can do. 😊"
    )


# =========================
# Template table
# =========================

TEMPLATES: Dict[IntentId, ResponseTemplate] = {
    # Navigation
    IntentId.NAV_HOME: ResponseTemplate("Taking you home!"),
    IntentId.NAV_DASHBOARD: ResponseTemplate("Opening your dashboard."),
    IntentId.NAV_EVENTS: ResponseTemplate("Here are the events!"),
    IntentId.NAV_LOGIN: ResponseTemplate("Taking you to the login page."),
    IntentId.NAV_REGISTER: ResponseTemplate("Opening the registration page."),
    IntentId.NAV_BACK: ResponseTemplate("Going back!"),
    IntentId.NAV_EVENT: ResponseTemplate(
        _event_reply(_nav_event_reply, "Couldn't find that event. Try browsing the events page!"),
        speakable=True,
    ),
    IntentId.NAV_CART: ResponseTemplate("Opening your cart! 🛒", speakable="Opening your cart!"),

    # Queries
    IntentId.QUERY_STATS: ResponseTemplate(_stats_reply),
    IntentId.QUERY_UPCOMING_EVENTS: ResponseTemplate(_upcoming_reply),
    IntentId.SEARCH_EVENT: ResponseTemplate(_search_reply),
    IntentId.REGISTER_EVENT: ResponseTemplate(_register_reply),
    IntentId.QUERY_MY_REGISTRATIONS: ResponseTemplate("Fetching your registrations."),

    # Event knowledge
    IntentId.EVENT_DETAILS: ResponseTemplate(
        _event_reply(
            format_event_details,
            "I couldn't find that event. Try saying the full event name, like 'tell me about Robo Soccer'.",
        ),
        speakable=_details_speakable,
    ),
    IntentId.EVENT_WHEN: ResponseTemplate(
        _event_reply(lambda ev: f"📅 {ev.name} is on {ev.date}, from {ev.start_time} to {ev.end_time}."),
        speakable=True,
    ),
    IntentId.EVENT_WHERE: ResponseTemplate(
        _event_reply(lambda ev: f"📍 {ev.name} is at {ev.venue}."),
        speakable=True,
    ),
    IntentId.EVENT_PRICE: ResponseTemplate(
        _event_reply(lambda ev: f"💰 {ev.name} costs ₹{ev.price} per entry."),
        speakable=True,
    ),
    IntentId.EVENT_PRIZE: ResponseTemplate(
        _event_reply(lambda ev: f"🏆 {ev.name}: {ev.prize}"),
        speakable=True,
    ),
    IntentId.DEPT_EVENTS: ResponseTemplate(_dept_reply, speakable=_dept_speakable),
    IntentId.DAY_EVENTS: ResponseTemplate(_day_reply, speakable=_day_speakable),
    IntentId.FEST_INFO: ResponseTemplate(_fest_reply, speakable=_fest_speakable),
    IntentId.LIST_ALL_EVENTS: ResponseTemplate(
        _list_all_reply,
        speakable=lambda ctx: (
            f"There are {get_event_count()} events across {len(DEPARTMENTS)} departments. "
            "Ask me about any specific event!"
        ),
    ),
    IntentId.RECOMMEND_EVENT: ResponseTemplate(
        _recommend_reply,
        speakable="Some top picks are Shark Tank with 30,000 in prizes, Codeology for coders, "
                  "Robo Soccer for robotics fans, and Prompt it Right for AI enthusiasts!",
    ),

    # Cart
    IntentId.ADD_TO_CART: ResponseTemplate(
        _add_to_cart_reply, speakable=_add_to_cart_speakable, action=_add_to_cart_action
    ),
    IntentId.ADD_CART_AND_CHECKOUT: ResponseTemplate(
        _checkout_reply, speakable=_checkout_speakable, action=_checkout_action
    ),
    IntentId.REMOVE_FROM_CART: ResponseTemplate(
        _remove_reply,
        speakable=lambda ctx: f"Removed {_removed_name(ctx)} from your cart.",
        action=_remove_action,
    ),
    IntentId.CLEAR_CART: ResponseTemplate("🗑️ Your cart has been cleared!", speakable="Cart cleared!"),

    # Platform info
    IntentId.INFO_WHAT_IS_CITRO: ResponseTemplate(
        "Citronics 2K26 is the annual tech fest of CDGI & CDIP, Indore! The theme this year is "
        "'AI for Sustainable Tomorrow'. It runs from April 8-10, 2026 with 36+ events across 14 "
        "departments, from robotics to coding to debates and cooking! And I'm Citro, your "
        "voice-powered guide to it all!",
        speakable="Citronics 2026 is CDGI's annual tech fest with 36+ events. I'm Citro, your voice guide!",
    ),
    IntentId.INFO_WHO_MADE_CITRO: ResponseTemplate(
        "Citro was built by a passionate development team as the digital backbone of Citronics 2K26. "
        "It uses real-time event data and features me, a voice assistant to make your fest "
        "experience seamless!",
        speakable="Citro was built by a passionate dev team.",
    ),
    IntentId.INFO_EVENT_LOCATION: ResponseTemplate(
        "Citronics 2K26 events are spread across the CDGI & CDIP campus, including labs, seminar "
        "halls, classrooms, lawns, the auditorium, and even the swimming pool! Each event has its "
        "own venue. Ask me about a specific event like 'where is Robo Soccer?' to get its exact location.",
        speakable="Events are at the CDGI campus. Ask about a specific event for its venue.",
    ),
    IntentId.INFO_EVENT_DATE: ResponseTemplate(
        "Citronics 2K26 runs for 3 days:\n"
        "• Day 1: April 8, 2026\n"
        "• Day 2: April 9, 2026\n"
        "• Day 3: April 10, 2026\n\n"
        "Ask me 'day 1 events' or 'when is Codeology?' for specifics!",
        speakable="Citronics runs April 8 to 10, 2026. Ask about a specific event for its timing.",
    ),
    IntentId.INFO_HOW_TO_REGISTER: ResponseTemplate(
        "Easy! Browse the events page, pick an event you like, and hit the register button. You can "
        "also say 'register for Robo Soccer' and I'll help you get started!",
        speakable="Browse events, pick one, and hit register!",
    ),
    IntentId.INFO_TICKET_PRICE: ResponseTemplate(
        "Prices vary by event, from as low as ₹50 (Zenga Block, Newspaper Tall Structure) to ₹700 "
        "(Youth Parliament). Most events are ₹100-₹200. Ask me 'price of [event name]' for specifics!",
        speakable="Prices range from 50 to 700 rupees. Ask about a specific event.",
    ),
    IntentId.INFO_CONTACT: ResponseTemplate(
        "For support or queries, check the contact section on the website or reach out through the "
        "organizer details on specific event pages. I'm always here to help with navigation!",
        speakable="Check the contact section for support.",
    ),

    # Page context
    IntentId.CONTEXT_WHERE_AM_I: ResponseTemplate(_where_am_i, speakable=True),
    IntentId.CONTEXT_WHAT_CAN_I_DO: ResponseTemplate(_what_can_i_do, speakable=True),

    # Small talk
    IntentId.GREETING: ResponseTemplate(
        _greeting_reply, speakable="Hey! I'm Citro, your fest buddy. Ask me about any event!"
    ),
    IntentId.HOW_ARE_YOU: ResponseTemplate(
        _variants(
            "I'm doing great, thanks for asking! 😊 I've been helping people navigate Citronics all day. What can I do for you?",
            "I'm fantastic! Buzzing with excitement for Citronics 2K26! 🎉 How can I help you?",
            "I'm good! Always ready to help. Want to hear about some cool events? 🚀",
        ),
        speakable="I'm doing great! How can I help you?",
    ),
    IntentId.COMPLIMENT: ResponseTemplate(
        _variants(
            "Aww, that's so kind of you! 😊 You just made my circuits happy! Let me know if I can help with anything.",
            "Thanks! You're pretty awesome yourself! 🌟 Want to explore some events?",
            "You're too sweet! 💫 I'm here whenever you need me. Ask away!",
            "That means a lot! I try my best. 😄 Anything else I can help with?",
        ),
        speakable="Thanks, that's so kind!",
    ),
    IntentId.JOKE: ResponseTemplate(
        _variants(
            "Why do programmers prefer dark mode? Because light attracts bugs! 🐛😄",
            "Why did the robot go to Citronics? Because it heard there was a ROBO Soccer match! ⚽🤖",
            "What's a robot's favorite type of music? Heavy metal! 🤘 ...Okay, I'll stick to being a fest guide.",
            "Why was the computer cold at Citronics? It left its Windows open! 🥶💻",
            "I'd tell you a UDP joke, but you might not get it. 😅",
        ),
        speakable=True,
    ),
    IntentId.BORED: ResponseTemplate(
        _variants(
            "Bored? Not on my watch! 🎮 Here are some cool events:\n"
            "• 🤖 ROBO Soccer: robot football at Admission Lawn!\n"
            "• 👨‍🍳 Master Chef: cooking competition by CDIPS!\n"
            "• 💻 Codeology: coding battle by CSE!\n"
            "Say any event name to learn more!",
            "How about checking out some exciting events? 🎉 You could try Shark Tank (₹30K prize!), "
            "Youth Parliament, or Prompt it Right. Just ask me about any of them!",
            "Time to explore Citronics! Say 'show events' to browse all events, or ask me about a "
            "specific department like 'CSE events' or 'MBA events'.",
        ),
        speakable="Check out events like Robo Soccer, Master Chef, or Codeology. Just ask me about any event!",
    ),
    IntentId.HELP: ResponseTemplate(
        "Here's what I can do:\n"
        "• 📍 Navigate: 'show events', 'open dashboard', 'go home'\n"
        "• 🔍 Event Info: 'tell me about Robo Soccer', 'when is Codeology?'\n"
        "• 💰 Pricing: 'price of Master Chef', 'how much is Shark Tank?'\n"
        "• 🏆 Prizes: 'prize of Robo Race'\n"
        "• 🏛️ Departments: 'CSE events', 'MBA events'\n"
        "• 📅 Schedule: 'day 1 events', 'day 2 events'\n"
        "• 🛒 Cart: 'add Codeology to cart', 'checkout'\n"
        "• 📊 Stats: 'show stats', 'my registrations'\n"
        "• 💬 Chat: just say hi! I'm friendly 😊\n\n"
        "Just speak naturally!",
        speakable="I can help with events, navigation, pricing, prizes, and more. Just speak naturally!",
    ),
    IntentId.THANK_YOU: ResponseTemplate(
        _variants(
            "Happy to help! 😊 Let me know if you need anything else.",
            "You're welcome! I'm here whenever you need me. Enjoy Citronics! 🎉",
            "Anytime! Just tap the mic if you need something. 🎤",
        ),
        speakable=True,
    ),
    IntentId.WHO_ARE_YOU: ResponseTemplate(
        "I'm Citro, the voice assistant for Citronics 2K26! 🤖 I know everything about all 36+ events "
        "happening April 8-10. I can tell you about events, venues, prizes, schedules, and help you "
        "navigate. Think of me as your personal fest concierge!",
        speakable="I'm Citro, your voice assistant for Citronics! I know everything about the fest.",
    ),
    IntentId.GOODBYE: ResponseTemplate(
        _variants(
            "See you at Citronics! 🎉 Tap the mic whenever you need me.",
            "Bye for now! Enjoy the fest! I'll be right here if you need anything. 👋",
            "Take care! Come back anytime. Citronics 2K26 is going to be amazing! 🚀",
        ),
        speakable=True,
    ),

    # FAQ
    IntentId.FAQ_CERTIFICATE: ResponseTemplate(
        "Certificates depend on the specific event. Most workshops and competitions at Citronics "
        "provide participation certificates. Check the event details page for confirmation, or ask "
        "the department coordinator.",
        speakable="Most events provide certificates. Check the event details.",
    ),
    IntentId.FAQ_CANCEL_REGISTRATION: ResponseTemplate(
        "To cancel a registration, go to your dashboard and find the event under 'My Registrations'. "
        "If a cancel option is available, you can use it there. For further help, contact the event organizer.",
        speakable="Go to your dashboard to cancel a registration.",
    ),
    IntentId.FAQ_REFUND: ResponseTemplate(
        "Refund policies vary by event. Contact the event organizer or department coordinator for "
        "specific refund requests.",
        speakable="Refund policies vary. Contact the organizer.",
    ),
    IntentId.FAQ_TEAM_SIZE: ResponseTemplate(
        "Team size requirements vary by event. Some are solo, others need teams. Check the specific "
        "event's details page, or ask me about a specific event and I'll tell you!",
        speakable="Team sizes vary by event. Ask about a specific one.",
    ),
    IntentId.FAQ_WIFI: ResponseTemplate(
        "Wi-Fi is available across the CDGI/CDIP campus for participants during Citronics.",
        speakable="Wi-Fi is available at the campus.",
    ),
    IntentId.FAQ_FOOD: ResponseTemplate(
        "Food stalls and refreshments are available at the fest venue. Some events like Master Chef "
        "even feature cooking competitions! 👨‍🍳",
        speakable="Food stalls are available at the venue.",
    ),
    IntentId.FAQ_WHAT_TO_BRING: ResponseTemplate(
        "What you need depends on the event type. For coding events, bring your laptop and charger. "
        "For robotics events (Robo Soccer, Robo Race, etc.), bring your robot and tools. A valid "
        "college ID is usually required for check-in.",
        speakable="Bring your laptop and ID. Check event prerequisites.",
    ),
    IntentId.FAQ_PARKING: ResponseTemplate(
        "Parking is available at the CDGI/CDIP campus. Follow the signage for visitor parking during Citronics.",
        speakable="Parking is available at the campus.",
    ),
    IntentId.FAQ_ACCOMMODATION: ResponseTemplate(
        "For accommodation queries, contact the Core Team or your department coordinator. The campus "
        "is in Indore, so local students can commute easily.",
        speakable="Contact the Core Team for accommodation.",
    ),

    # Fallbacks
    IntentId.LOW_CONFIDENCE: ResponseTemplate(
        _low_confidence_reply,
        speakable="Sorry, I didn't quite catch that. Try asking about a specific event or say help.",
    ),
    IntentId.UNKNOWN: ResponseTemplate(
        _unknown_reply,
        speakable="I'm not sure about that. Ask about events or say help for options.",
    ),
}


def _render_text(rule: TextRule, ctx: RenderContext) -> Optional[str]:
    return rule(ctx) if callable(rule) else rule


def _declared_action(intent: IntentId) -> Optional[Dict[str, Any]]:
    action = get_declared_action(intent)
    if action.type in SILENT_ACTION_TYPES:
        return None
    return action.to_dict()


def build_response(intent, ctx: Optional[RenderContext] = None) -> VoiceResponse:
    """
    Render the final response for an intent.

    Unknown intent ids fall back to the UNKNOWN template.
    """
    ctx = ctx or RenderContext()

    try:
        intent = IntentId(intent)
    except ValueError:
        logger.warning(f"No template for intent {intent!r}")
        intent = IntentId.UNKNOWN

    template = TEMPLATES.get(intent, TEMPLATES[IntentId.UNKNOWN])
    reply = _render_text(template.reply, ctx)

    if template.speakable is True:
        speak_text = reply
    elif template.speakable:
        speak_text = _render_text(template.speakable, ctx)
    else:
        speak_text = None

    # A failed lookup has nothing for the UI to act on
    if ctx.error:
        action = None
    elif template.action:
        action = template.action(ctx)
    else:
        action = _declared_action(intent)

    return VoiceResponse(
        reply=reply,
        intent=intent.value,
        confidence=ctx.confidence or 0.0,
        speak_text=speak_text,
        action=action,
        data=ctx.data,
    )
