"""
Generation Logger - Structured logging for generation operations.

This module provides structured logging for the generation pipeline.
It captures:
- Generation requests (project, provider, token)
- Generation results (outcome, html size, latency)
- History mutations

Log Format:
==========
Each event is a single line whose payload is JSON:

    [2026-01-01 10:00:00] INFO [webmaker.generation] Generation Result: {"event": ...}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from webmaker.core.config import settings

# Configure the root logger of the package
logger = logging.getLogger("webmaker")
logger.setLevel(logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper())

# Create console handler if not exists
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


class GenerationLogger:
    """
    Structured logger for generation events.

    Usage:
        generation_logger.log_request(token=3, project_name="Acme", provider="chatgpt")
        generation_logger.log_result(token=3, outcome="fallback", html_length=4120,
                                     latency_ms=812.4, level="warn")
    """

    def __init__(self, name: str = "webmaker.generation"):
        self._logger = logging.getLogger(name)

    def log_request(
        self,
        token: int,
        project_name: str,
        provider: str,
        template_id: Optional[str] = None,
    ) -> None:
        """Log the start of a generation."""
        log_data = {
            "event": "generation_request",
            "token": token,
            "project_name": project_name[:60],
            "provider": provider,
            "template_id": template_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self._logger.info(f"Generation Request: {json.dumps(log_data)}")

    def log_result(
        self,
        token: int,
        outcome: str,
        html_length: int,
        latency_ms: float,
        level: str = "success",
        superseded: bool = False,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log the end of a generation.

        Fallbacks and superseded results are logged at WARNING so they
        stand out when tailing the service output.
        """
        log_data = {
            "event": "generation_result",
            "token": token,
            "outcome": outcome,
            "html_length": html_length,
            "latency_ms": round(latency_ms, 2),
            "superseded": superseded,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if metadata:
            log_data["metadata"] = metadata

        log_level = logging.WARNING if (level != "success" or superseded) else logging.INFO
        self._logger.log(log_level, f"Generation Result: {json.dumps(log_data)}")

    def log_history_recorded(self, item_id: str, size: int) -> None:
        """Log a history append."""
        log_data = {
            "event": "history_recorded",
            "item_id": item_id,
            "history_size": size,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self._logger.info(f"History Recorded: {json.dumps(log_data)}")


# Singleton instance
generation_logger = GenerationLogger()
