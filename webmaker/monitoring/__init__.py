"""
Monitoring Module - Logging for generation operations.

Usage:
======
    from webmaker.monitoring import generation_logger

    generation_logger.log_request(token, project_name, provider)
    generation_logger.log_result(token, outcome, html_length, latency_ms)
"""

from webmaker.monitoring.logger import GenerationLogger, generation_logger

__all__ = [
    "GenerationLogger",
    "generation_logger",
]
