"""
Pipeline data models.
Plain dataclasses passed between the normalizer, intent engine, resolvers
and response templates.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from citro.voice.intent_dataset import IntentAction, IntentId


def serialize(value: Any) -> Any:
    """Convert pipeline payloads into JSON-friendly structures."""
    if hasattr(value, "to_dict"):
        return serialize(value.to_dict())
    if isinstance(value, Mapping):
        return {str(k): serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize(v) for v in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


@dataclass
class CommandContext:
    """Caller context forwarded from the HTTP layer."""
    current_page: str = "/"
    user_id: Optional[str] = None
    role: Optional[str] = None
    is_authenticated: bool = False
    transcript: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CommandContext":
        """Build from a camelCase or snake_case mapping."""
        data = data or {}

        def pick(*keys, default=None):
            for key in keys:
                if data.get(key) is not None:
                    return data[key]
            return default

        user_id = pick("user_id", "userId")
        return cls(
            current_page=pick("current_page", "currentPage", default="/") or "/",
            user_id=str(user_id) if user_id is not None else None,
            role=pick("role"),
            is_authenticated=bool(pick("is_authenticated", "isAuthenticated", default=False)),
            transcript=pick("transcript", default="") or "",
        )


@dataclass(frozen=True)
class IntentMatch:
    """Output of intent detection."""
    intent: IntentId
    entities: Dict[str, str] = field(default_factory=dict)
    confidence: float = 0.0
    action: Optional[IntentAction] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "intent": self.intent.value,
            "entities": dict(self.entities),
            "confidence": self.confidence,
            "action": self.action.to_dict() if self.action else None,
        }


@dataclass
class ResolveResult:
    """Outcome of resolving an intent against the knowledge base and services."""
    success: bool
    data: Any = None
    current_page: str = "/"
    error: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None, current_page: str = "/", message: Optional[str] = None) -> "ResolveResult":
        return cls(success=True, data=data, current_page=current_page, message=message)

    @classmethod
    def fail(cls, error: str, current_page: str = "/", data: Any = None) -> "ResolveResult":
        return cls(success=False, data=data, current_page=current_page, error=error)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "success": self.success,
            "data": serialize(self.data),
            "currentPage": self.current_page,
        }
        if self.error is not None:
            result["error"] = self.error
        if self.message is not None:
            result["message"] = self.message
        return result


@dataclass
class VoiceResponse:
    """Final rendered response handed to the UI."""
    reply: str
    intent: str
    confidence: float = 0.0
    speak_text: Optional[str] = None
    action: Optional[Dict[str, Any]] = None
    data: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reply": self.reply,
            "speakText": self.speak_text,
            "action": serialize(self.action),
            "data": serialize(self.data),
            "intent": self.intent,
            "confidence": self.confidence,
        }
