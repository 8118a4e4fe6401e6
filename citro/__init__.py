"""
Citro - Voice Command Service for Citronics 2K26
=================================================
Deterministic voice assistant backend for the fest ticketing site.

Features:
- Hinglish / Hindi transcript normalization
- Rule-based intent detection with entity extraction
- Static event knowledge base with fuzzy name lookup
- Cart, stats and event resolution against the event database

Tech Stack:
- FastAPI (async backend)
- SQLAlchemy + aiosqlite (event data)
- Browser speech recognition upstream (no audio on the server)
"""

__version__ = "1.0.0"
__author__ = "Citronics Web Team"
