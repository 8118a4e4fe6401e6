"""
Voice Command Endpoints.
Bridge between the browser assistant and the command pipeline.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from citro.config import get_settings
from citro.core.exceptions import TranscriptValidationException
from citro.core.models import CommandContext
from citro.core.pipeline import get_pipeline

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter()


class VoiceCommandRequest(BaseModel):
    """Request body for /process. Field names follow the browser client."""
    transcript: Optional[Any] = None
    currentPage: Optional[str] = None
    userId: Optional[Any] = None
    role: Optional[str] = None
    isAuthenticated: bool = False


def sanitize_transcript(transcript: Any) -> str:
    """Trim and cap the transcript; reject anything empty or non-text."""
    if not isinstance(transcript, str) or not transcript.strip():
        raise TranscriptValidationException()
    return transcript.strip()[:settings.MAX_TRANSCRIPT_LENGTH]


@router.post("/process")
async def process_voice_command(request: Request, body: VoiceCommandRequest):
    """
    Run a browser transcript through the pipeline.

    Body:
    {
        "transcript": "dikhao events",
        "currentPage": "/dashboard"  // optional
    }

    Returns {"success": true, "data": {reply, speakText, action, data, intent, confidence}}
    """
    transcript = sanitize_transcript(body.transcript)

    context = CommandContext.from_dict({
        "currentPage": body.currentPage,
        "userId": body.userId,
        "role": body.role,
        "isAuthenticated": body.isAuthenticated,
    })

    pipeline = getattr(request.app.state, "pipeline", None) or get_pipeline()

    try:
        response = await pipeline.process_command(transcript, context)
    except Exception as e:
        logger.exception(f"Voice processing error: {e}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Voice processing failed"}
        )

    return {"success": True, "data": response.to_dict()}
