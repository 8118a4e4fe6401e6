"""
Event Knowledge Base.
Static catalog of every Citronics 2K26 event, department and fest day.

Used by the intent engine and the resolvers to answer event questions
without a database round trip. All tables are built once at import time
and never mutated afterwards.

Dates: April 8-10, 2026 | Theme: "AI for Sustainable Tomorrow"
"""

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple

from citro.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


# =========================
# Departments & Days
# =========================

DEPARTMENTS: Mapping[str, str] = MappingProxyType({
    "ME": "Mechanical Engineering",
    "EC": "Electronics & Communication Engineering",
    "CIVIL": "Civil Engineering",
    "CSE": "Computer Science & Engineering",
    "IT": "Information Technology",
    "CI": "Computer Informatics",
    "AD": "Artificial Intelligence & Data Science",
    "Pharma": "Pharmacy",
    "ESH": "Engineering Sciences & Humanities",
    "PAHAL": "PAHAL (Project & Hardware Lab)",
    "CDIPS": "CDIPS",
    "MBA": "Master of Business Administration",
    "CDIL": "CDIL",
    "Core Team": "Core Organizing Team",
})

DAY_LABELS: Mapping[int, str] = MappingProxyType({
    1: "Day 1 (April 8)",
    2: "Day 2 (April 9)",
    3: "Day 3 (April 10)",
})

DAY_DATES: Mapping[int, str] = MappingProxyType({
    1: "April 8, 2026",
    2: "April 9, 2026",
    3: "April 10, 2026",
})

# Day 1 of the fest falls on April 8
_FIRST_DATE = 8


@dataclass(frozen=True)
class KnowledgeEvent:
    """One fest event as announced in the official schedule."""
    name: str
    dept: str
    venue: str
    days: Tuple[int, ...]
    start_time: str
    end_time: str
    price: int
    max_tickets: int
    prize: str
    tags: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def date(self) -> str:
        first, last = self.days[0], self.days[-1]
        if first == last:
            return DAY_DATES[first]
        return f"April {_FIRST_DATE + first - 1}-{_FIRST_DATE + last - 1}, 2026"

    @property
    def department_name(self) -> str:
        return DEPARTMENTS.get(self.dept, self.dept)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "dept": self.dept,
            "venue": self.venue,
            "days": list(self.days),
            "date": self.date,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "price": self.price,
            "maxTickets": self.max_tickets,
            "prize": self.prize,
            "tags": list(self.tags),
        }


class EventMatch(NamedTuple):
    """Result of a fuzzy event lookup."""
    event: KnowledgeEvent
    confidence: float


def _prize(total: str, *places: str) -> str:
    ordinals = ("1st", "2nd", "3rd")
    split = ", ".join(f"{o} ₹{p}" for o, p in zip(ordinals, places))
    return f"Total ₹{total} ({split})"


# =========================
# Events
# =========================

EVENTS: Tuple[KnowledgeEvent, ...] = (
    # Mechanical Engineering
    KnowledgeEvent("Battle of Design", "ME", "CAD Lab", (1,), "12:00 PM", "4:00 PM",
                   100, 10, _prize("5,000", "2,500", "1,500", "1,000"), ("ME", "design", "CAD")),
    KnowledgeEvent("Auto Quest", "ME", "SAE Lab", (2,), "10:00 AM", "4:00 PM",
                   100, 10, _prize("5,000", "2,500", "1,500", "1,000"), ("ME", "automobile")),

    # Electronics & Communication
    KnowledgeEvent("ROBO Soccer", "EC", "Admission Lawn", (1, 2), "12:00 PM", "4:00 PM",
                   500, 15, _prize("10,000", "5,000", "3,000", "2,000"), ("EC", "robotics", "soccer")),
    KnowledgeEvent("ROBO Race", "EC", "To decide with Arena", (1, 2), "12:00 PM", "4:00 PM",
                   500, 20, _prize("15,000", "8,000", "5,000", "2,000"), ("EC", "robotics", "race")),
    KnowledgeEvent("Line Follower", "EC", "Class Room", (2,), "10:00 AM", "3:00 PM",
                   500, 20, _prize("12,000", "7,000", "3,500", "1,500"), ("EC", "robotics", "line follower")),
    KnowledgeEvent("ROBO Swim", "EC", "Swimming Pool", (3,), "10:00 AM", "1:00 PM",
                   500, 10, _prize("8,000", "5,000", "2,000", "1,000"), ("EC", "robotics", "swim")),

    # Civil Engineering
    KnowledgeEvent("Arch Mania", "CIVIL", "Lawn", (1,), "12:00 PM", "4:00 PM",
                   100, 20, _prize("3,000", "1,500", "1,000", "500"), ("CIVIL", "architecture")),
    KnowledgeEvent("Newspaper Tall Structure", "CIVIL", "Smart Classroom", (2,), "10:00 AM", "4:00 PM",
                   50, 20, _prize("2,000", "1,000", "600", "400"), ("CIVIL", "structure", "building")),
    KnowledgeEvent("ZENGA Block", "CIVIL", "Lawn", (3,), "10:00 AM", "12:00 PM",
                   50, 20, _prize("2,000", "1,000", "600", "400"), ("CIVIL", "jenga", "blocks")),

    # Computer Science & Engineering
    KnowledgeEvent("Codeology", "CSE", "Lab 8 & 9", (1,), "12:00 PM", "3:00 PM",
                   100, 35, _prize("5,000", "3,000", "1,200", "800"), ("CSE", "coding", "programming")),
    KnowledgeEvent("Build your own Chatbot", "CSE", "Lab 6", (2,), "10:00 AM", "2:00 PM",
                   200, 25, _prize("10,000", "5,000", "3,000", "2,000"), ("CSE", "AI", "chatbot")),
    KnowledgeEvent("DesignVerse: UI/UX & AI Design Challenge", "CSE", "Lab 8 & 9", (3,), "10:00 AM", "2:00 PM",
                   100, 50, _prize("10,000", "5,000", "3,000", "2,000"), ("CSE", "UI/UX", "design", "AI")),

    # Information Technology
    KnowledgeEvent("The Tech - Commercial show", "IT", "CDIPS Auditorium", (1,), "1:00 PM", "4:00 PM",
                   100, 20, _prize("3,500", "2,000", "1,000", "500"), ("IT", "tech", "commercial")),

    # Computer Informatics
    KnowledgeEvent("AI Image Story Creation", "CI", "Lab 7", (1,), "1:00 PM", "4:00 PM",
                   100, 35, _prize("5,000", "3,000", "1,200", "800"), ("CI", "AI", "image", "story")),

    # AI & Data Science
    KnowledgeEvent("Prompt it Right - AI Image Prompt Battle", "AD", "Lab 109", (3,), "10:00 AM", "1:00 PM",
                   100, 80, _prize("8,000", "5,000", "2,000", "1,000"), ("AD", "AI", "prompt", "image")),

    # Pharmacy
    KnowledgeEvent("Pharmathon", "Pharma", "CDIP", (1,), "12:00 PM", "4:00 PM",
                   150, 20, _prize("9,000", "5,000", "3,000", "1,000"), ("Pharma", "pharmacy")),
    KnowledgeEvent("Pharma Model", "Pharma", "CDIP", (2,), "9:00 AM", "4:00 PM",
                   150, 20, _prize("9,000", "5,000", "3,000", "1,000"), ("Pharma", "model")),
    KnowledgeEvent("Pharma Innoventia", "Pharma", "CDIP", (3,), "9:00 AM", "4:00 PM",
                   150, 20, _prize("9,000", "5,000", "3,000", "1,000"), ("Pharma", "innovation")),

    # Engineering Sciences & Humanities
    KnowledgeEvent("INNOVATE 2026: Science Model Exhibition", "ESH", "Drawing Lab", (2,), "10:00 AM", "4:00 PM",
                   200, 60, _prize("15,000", "8,000", "5,000", "2,000"), ("ESH", "science", "model", "exhibition")),

    # PAHAL
    KnowledgeEvent("Project Competition-Software", "PAHAL", "Seminar Hall 1", (2,), "9:00 AM", "4:00 PM",
                   500, 10, _prize("25,000", "12,000", "8,000", "5,000"), ("PAHAL", "project", "software")),
    KnowledgeEvent("Project Competition-Hardware", "PAHAL", "Seminar Hall 1", (3,), "12:00 PM", "4:00 PM",
                   500, 10, _prize("25,000", "12,000", "8,000", "5,000"), ("PAHAL", "project", "hardware")),

    # CDIPS
    KnowledgeEvent("Master Chef", "CDIPS", "CDIPS Entrance", (1,), "12:00 PM", "4:00 PM",
                   300, 30, _prize("10,000", "5,000", "3,000", "2,000"), ("CDIPS", "cooking", "chef")),
    KnowledgeEvent("Boardroom Battle", "CDIPS", "Classroom", (1,), "12:00 PM", "4:00 PM",
                   200, 15, _prize("5,000", "3,000", "1,200", "800"), ("CDIPS", "business", "strategy")),
    KnowledgeEvent("Reel to Deal", "CDIPS", "Seminar Hall 2 for Judgement", (1, 2), "9:00 AM", "5:00 PM",
                   250, 15, _prize("5,000", "3,000", "1,200", "800"), ("CDIPS", "reel", "content")),
    KnowledgeEvent("Clash of Titan", "CDIPS", "Classroom", (2,), "10:00 AM", "1:00 PM",
                   300, 15, _prize("5,000", "3,000", "1,200", "800"), ("CDIPS", "competition")),
    KnowledgeEvent("Tech Bingo (Tambola)", "CDIPS", "MP Theater", (2,), "10:00 AM", "1:00 PM",
                   100, 25, _prize("5,000", "3,000", "1,200", "800"), ("CDIPS", "bingo", "tambola", "fun")),

    # MBA
    KnowledgeEvent("AI Slave", "MBA", "Lab 109", (1,), "12:00 PM", "4:00 PM",
                   150, 20, _prize("8,000", "5,000", "2,000", "1,000"), ("MBA", "AI")),
    KnowledgeEvent("AD-MAD Show", "MBA", "Seminar Hall 2", (1, 2), "12:00 PM", "3:00 PM",
                   250, 20, _prize("8,000", "5,000", "2,000", "1,000"), ("MBA", "advertising", "marketing")),
    KnowledgeEvent("Brand Quiz", "MBA", "CDIPS Auditorium", (2,), "9:00 AM", "12:00 PM",
                   150, 20, _prize("8,000", "5,000", "2,000", "1,000"), ("MBA", "quiz", "brand")),
    KnowledgeEvent("Share Market Simulation", "MBA", "Lab 109", (2,), "12:00 PM", "4:00 PM",
                   150, 20, _prize("8,000", "5,000", "2,000", "1,000"), ("MBA", "stock", "finance", "simulation")),
    KnowledgeEvent("Business Ethics Decision Making", "MBA", "Class Room, Interview Room", (3,), "9:00 AM", "12:00 PM",
                   150, 20, _prize("8,000", "5,000", "2,000", "1,000"), ("MBA", "ethics", "business")),

    # CDIL
    KnowledgeEvent("Debate Competition", "CDIL", "MP Theater", (1,), "12:00 PM", "4:00 PM",
                   200, 20, _prize("6,000", "4,000", "2,000"), ("CDIL", "debate", "speaking")),
    KnowledgeEvent("Youth Parliament", "CDIL", "Chankya Sabhagrah", (2,), "9:00 AM", "3:00 PM",
                   700, 30, _prize("16,200", "11,100", "5,100"), ("CDIL", "parliament", "politics", "debate")),

    # Core Team
    KnowledgeEvent("Reel Making Competition on CITRONICS 2K26 Theme", "Core Team", "Seminar Hall 1 for Judgement",
                   (1, 2, 3), "9:00 AM", "5:00 PM",
                   200, 10, _prize("5,000", "3,000", "2,000"), ("Core Team", "reel", "video", "content")),
    KnowledgeEvent("Shark Tank: AI theme Indore City Problem", "Core Team", "CDIPS Auditorium", (1, 2),
                   "9:00 AM", "5:00 PM",
                   500, 30, _prize("30,000", "30,000"), ("Core Team", "shark tank", "AI", "startup", "pitch")),
)

FEST_INFO: Mapping[str, Any] = MappingProxyType({
    "name": "Citronics 2K26",
    "theme": "AI for Sustainable Tomorrow",
    "dates": "April 8-10, 2026",
    "days": 3,
    "total_events": len(EVENTS),
    "venue": "CDIP Campus",
    "departments": len(DEPARTMENTS),
})


# =========================
# Alias Index
# =========================

# Speech-to-text regularly mishears these; values are canonical event names.
SPEECH_EVENT_ALIASES: Mapping[str, str] = MappingProxyType({
    "cardiology": "Codeology",
    "codiology": "Codeology",
    "code ology": "Codeology",
    "cold ology": "Codeology",
    "pharma tone": "Pharmathon",
    "farmathon": "Pharmathon",
    "pharmacy thon": "Pharmathon",
    "pharma thon": "Pharmathon",
    "pharmacon": "Pharmathon",
    "zinga": "ZENGA Block",
    "genga": "ZENGA Block",
    "jenga": "ZENGA Block",
    "zenga": "ZENGA Block",
    "jenga block": "ZENGA Block",
    "robot race": "ROBO Race",
    "robot swim": "ROBO Swim",
    "robot soccer": "ROBO Soccer",
    "shark tank": "Shark Tank: AI theme Indore City Problem",
    "ad mad": "AD-MAD Show",
    "admad": "AD-MAD Show",
    "masterchef": "Master Chef",
    "master shift": "Master Chef",
    "real to deal": "Reel to Deal",
    "real to reel": "Reel to Deal",
    "clash of titans": "Clash of Titan",
    "tech bingo": "Tech Bingo (Tambola)",
    "tambola": "Tech Bingo (Tambola)",
    "design verse": "DesignVerse: UI/UX & AI Design Challenge",
    "designverse": "DesignVerse: UI/UX & AI Design Challenge",
    "prompt it right": "Prompt it Right - AI Image Prompt Battle",
    "innovate": "INNOVATE 2026: Science Model Exhibition",
    "innovate 2026": "INNOVATE 2026: Science Model Exhibition",
    "chatbot": "Build your own Chatbot",
})

_NON_ALNUM = re.compile(r"[^a-z0-9 ]")
_SPACES = re.compile(r"\s+")


def _clean(text: str) -> str:
    """Lowercase, drop punctuation, collapse spaces."""
    return _SPACES.sub(" ", _NON_ALNUM.sub("", text.lower().strip())).strip()


def _build_indexes() -> Tuple[Mapping[str, KnowledgeEvent], Tuple[Tuple[str, KnowledgeEvent], ...]]:
    aliases: Dict[str, KnowledgeEvent] = {}
    name_index: List[Tuple[str, KnowledgeEvent]] = []
    by_name = {event.name.lower(): event for event in EVENTS}

    for event in EVENTS:
        clean_name = _clean(event.name)
        name_index.append((clean_name, event))
        aliases[clean_name] = event

        words = clean_name.split(" ")
        if len(words) >= 2:
            aliases.setdefault(" ".join(words[:2]), event)
            if len(words) > 2:
                aliases.setdefault(" ".join(words[-2:]), event)

    for misheard, canonical in SPEECH_EVENT_ALIASES.items():
        event = by_name.get(canonical.lower())
        if event is None:
            logger.warning(f"Speech alias '{misheard}' points at unknown event '{canonical}'")
            continue
        aliases[_clean(misheard)] = event

    return MappingProxyType(aliases), tuple(name_index)


ALIASES, _NAME_INDEX = _build_indexes()


# =========================
# Lookup Functions
# =========================

def find_event(query: Optional[str], min_confidence: Optional[float] = None) -> Optional[EventMatch]:
    """
    Fuzzy match an event by spoken name.

    Exact alias hits score 1.0. Otherwise each event is scored by substring
    containment (length ratio + 0.3, capped at 1.0) and by word overlap
    (0.85 x overlap ratio); the best event wins if it clears the threshold.
    """
    if not query or not isinstance(query, str):
        return None

    q = _clean(query)
    if not q:
        return None

    if q in ALIASES:
        return EventMatch(ALIASES[q], 1.0)

    if min_confidence is None:
        min_confidence = settings.KB_MATCH_MIN_CONFIDENCE

    q_words = q.split(" ")
    best_event: Optional[KnowledgeEvent] = None
    best_score = 0.0

    for clean_name, event in _NAME_INDEX:
        score = 0.0

        if q in clean_name or clean_name in q:
            ratio = len(q) / max(len(clean_name), len(q))
            score = min(ratio + 0.3, 1.0)

        e_words = clean_name.split(" ")
        matches = sum(
            1 for w in q_words
            if any(w in ew or ew in w for ew in e_words)
        )
        if matches:
            overlap = matches / max(len(q_words), len(e_words))
            score = max(score, overlap * 0.85)

        if score > best_score:
            best_event, best_score = event, score

    if best_event is not None and best_score >= min_confidence:
        return EventMatch(best_event, best_score)

    return None


def get_events_by_department(dept_code: Optional[str]) -> List[KnowledgeEvent]:
    """All events for a department code (case-insensitive; prefix match only when no code is exact)."""
    if not dept_code:
        return []
    upper = dept_code.upper()
    exact = [e for e in EVENTS if e.dept.upper() == upper]
    if exact:
        return exact
    return [e for e in EVENTS if e.dept.upper().startswith(upper)]


def get_events_by_day(day) -> List[KnowledgeEvent]:
    """All events running on fest day 1, 2 or 3."""
    try:
        d = int(day)
    except (TypeError, ValueError):
        return []
    if d not in DAY_LABELS:
        return []
    return [e for e in EVENTS if d in e.days]


def get_day_label(day) -> str:
    return DAY_LABELS.get(day, f"Day {day}")


def get_event_count() -> int:
    return len(EVENTS)


def iter_events_by_department() -> List[Tuple[str, List[KnowledgeEvent]]]:
    """Events grouped by department, in catalog order."""
    grouped: Dict[str, List[KnowledgeEvent]] = {}
    for event in EVENTS:
        grouped.setdefault(event.dept, []).append(event)
    return list(grouped.items())


# Curated spoken forms; checked after exact codes and full names.
DEPT_ALIASES: Mapping[str, str] = MappingProxyType({
    "mechanical": "ME", "mech": "ME",
    "electronics": "EC", "ece": "EC",
    "civil": "CIVIL",
    "computer science": "CSE", "cs": "CSE", "computer": "CSE",
    "information technology": "IT",
    "computer informatics": "CI", "informatics": "CI",
    "artificial intelligence": "AD", "ai": "AD", "data science": "AD", "aids": "AD", "aiml": "AD",
    "pharmacy": "Pharma",
    "humanities": "ESH", "science": "ESH",
    "hardware lab": "PAHAL",
    "management": "MBA", "business": "MBA",
    "core": "Core Team", "organizing team": "Core Team",
})


def get_department_code(query: Optional[str]) -> Optional[str]:
    """
    Resolve a spoken department to its code.

    Order: exact code, then whole-word match inside a full department name,
    then the curated alias table.
    """
    if not query:
        return None
    q = _SPACES.sub(" ", query.lower().strip())
    q = re.sub(r"\s*\bdepartment\b\s*", " ", q).strip()
    if not q:
        return None

    for code in DEPARTMENTS:
        if code.lower() == q:
            return code

    word_re = re.compile(r"\b" + re.escape(q) + r"\b")
    for code, full_name in DEPARTMENTS.items():
        if word_re.search(full_name.lower()):
            return code

    return DEPT_ALIASES.get(q)


# =========================
# Formatting
# =========================

def format_event_summary(event: KnowledgeEvent) -> str:
    """One-line summary for an event."""
    return (
        f"{event.name} - {event.date}, {event.start_time} to {event.end_time} "
        f"at {event.venue} (₹{event.price})"
    )


def format_event_details(event: KnowledgeEvent) -> str:
    """Multi-line detail card for an event."""
    return "\n".join([
        f"📌 {event.name}",
        f"🏛️ Department: {event.department_name} ({event.dept})",
        f"📍 Venue: {event.venue}",
        f"📅 Date: {event.date}",
        f"⏰ Time: {event.start_time} - {event.end_time}",
        f"💰 Price: ₹{event.price}",
        f"🏆 Prize: {event.prize}",
        f"👥 Max Teams/Participants: {event.max_tickets}",
    ])
