"""
Command Logger for Markdown Execution Logs.
Human-readable record of every voice command the pipeline handles.
"""

import asyncio
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from citro.core.models import serialize

logger = logging.getLogger(__name__)


def _ms(value: Optional[float]) -> str:
    return f"{value:.1f}ms" if value is not None else "N/A"


class CommandLogger:
    """
    Markdown logger for the command pipeline.

    Documents, per command:
    - Raw and normalized transcript
    - Detected intent, confidence and entities
    - Resolver outcome
    - Stage latencies

    Entries are queued and written by a background task when an event loop
    is running, and appended synchronously otherwise.
    """

    def __init__(self, log_path: str = "logs/command_log.md"):
        self.log_path = Path(log_path)
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

        self._queue: asyncio.Queue = asyncio.Queue()
        self._writer_task: Optional[asyncio.Task] = None
        self._running = False

    def start(self):
        """Start the background writer on the running loop, if any."""
        if self._writer_task is not None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._running = True
        self._writer_task = loop.create_task(self._write_loop())

    async def _write_loop(self):
        """Background loop to write queued entries."""
        while self._running:
            try:
                entry = await asyncio.wait_for(self._queue.get(), timeout=1.0)
                self._sync_write(entry)
            except asyncio.TimeoutError:
                continue
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"Command log writer error: {e}")

    def _sync_write(self, entry: str):
        try:
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(entry)
                f.write("\n")
        except OSError as e:
            logger.error(f"Failed to write command log: {e}")

    async def _log(self, entry: str):
        if self._running and self._writer_task:
            await self._queue.put(entry)
        else:
            self._sync_write(entry)

    # =========================
    # Public Logging Methods
    # =========================

    async def log_command(
        self,
        transcript: str,
        normalized: str,
        intent: str,
        confidence: float,
        entities: Optional[Dict[str, Any]] = None,
        success: Optional[bool] = None,
        error: Optional[str] = None,
        metrics: Optional[Dict[str, Any]] = None
    ):
        """Log one processed command."""
        timestamp = datetime.now().strftime("%H:%M:%S")
        metrics = metrics or {}

        if confidence >= 0.9:
            conf_indicator = "🟢"
        elif confidence >= 0.5:
            conf_indicator = "🟡"
        else:
            conf_indicator = "🔴"

        if success is None:
            outcome = "skipped (confidence gate)"
        elif success:
            outcome = "✅ success"
        else:
            outcome = f"❌ {error or 'failed'}"

        entities_str = json.dumps(serialize(entities or {}), ensure_ascii=False)

        entry = f"""### 🎤 Command | {timestamp}

**Transcript:** "{transcript}"
**Normalized:** "{normalized}"
**Intent:** `{intent}`
**Confidence:** {conf_indicator} {confidence:.2%}
**Entities:** `{entities_str}`
**Resolver:** {outcome}

| Stage | Latency |
|-------|---------|
| Normalize | {_ms(metrics.get('normalize_latency_ms'))} |
| Intent | {_ms(metrics.get('intent_latency_ms'))} |
| Resolve | {_ms(metrics.get('resolve_latency_ms'))} |
| Render | {_ms(metrics.get('render_latency_ms'))} |
| Total | {_ms(metrics.get('total_latency_ms'))} |

---
"""
        await self._log(entry)

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        stack_trace: Optional[str] = None
    ):
        """Log an error."""
        timestamp = datetime.now().strftime("%H:%M:%S")

        entry = f"""### ❌ Error | {timestamp}

**Type:** `{error_type}`
**Message:** {error_message}
"""

        if stack_trace:
            entry += f"""
<details>
<summary>Stack Trace</summary>

```
{stack_trace}
```

</details>
"""

        await self._log(entry)

    async def log_system_event(
        self,
        event: str,
        details: Dict[str, Any]
    ):
        """Log a system event."""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        details_str = ""
        for key, value in details.items():
            details_str += f"- **{key}:** {value}\n"

        entry = f"""### ⚙️ System Event | {timestamp}

**Event:** {event}

{details_str}
---
"""
        await self._log(entry)

    async def initialize_log(self, version: str = "1.0.0"):
        """Start a fresh log file with a header."""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        header = f"""# 🎙️ Citro Command Log

**Generated:** {timestamp}
**Version:** {version}

**Pipeline:** Transcript → Normalize → Intent → Resolve → Render

---

## Execution Log

"""
        with open(self.log_path, "w", encoding="utf-8") as f:
            f.write(header)

        logger.info(f"Command log initialized: {self.log_path}")

    async def close(self):
        """Stop the writer and flush pending entries."""
        self._running = False

        if self._writer_task:
            self._writer_task.cancel()
            try:
                await self._writer_task
            except asyncio.CancelledError:
                pass
            self._writer_task = None

        while not self._queue.empty():
            try:
                entry = self._queue.get_nowait()
                self._sync_write(entry)
            except asyncio.QueueEmpty:
                break

        logger.info("Command logger closed")
