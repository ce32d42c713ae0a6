"""
MoodSummarizer: LLM-backed mood narrative for a day's activities.

The prompt comes from ``prompt.synthesize``; the model's text is returned
as-is. Failures are raised as SummarizerFailure, never replaced with
made-up text.

Related:
- src/daylog/ollama_client.py: LLM inference
- src/mood/prompt.py: prompt construction
"""

import logging
from typing import Optional, Sequence

from src.daylog.ollama_client import OllamaClient
from src.ledger.aggregator import ActivityLike
from src.ledger.errors import SummarizerFailure

from .prompt import synthesize

logger = logging.getLogger(__name__)


class MoodSummarizer:
    """Sends the mood prompt to the model and passes the answer through."""

    def __init__(self, ollama_client: Optional[OllamaClient] = None):
        """
        Args:
            ollama_client: Ollama client (injectable for tests)
        """
        self.ollama_client = ollama_client or OllamaClient()

    def summarize(self, records: Sequence[ActivityLike]) -> str:
        """
        Generate the mood text for ``records``.

        Raises:
            ValidationError: when ``records`` is empty
            SummarizerFailure: when the model call fails or returns no text
        """
        mood_prompt = synthesize(records)
        logger.info(
            "Requesting mood summary (%d activities, %d mins, complete_day=%s)",
            len(records),
            mood_prompt.total_minutes,
            mood_prompt.complete_day,
        )

        try:
            text = self.ollama_client.chat(mood_prompt.to_messages())
        except Exception as e:
            logger.error(f"Mood summary request failed: {e}")
            raise SummarizerFailure(str(e)) from e

        if not isinstance(text, str) or not text.strip():
            logger.warning("Mood summary response was empty")
            raise SummarizerFailure("Empty response from summarizer")

        return text
