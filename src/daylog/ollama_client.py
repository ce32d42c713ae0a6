"""
Ollama API client module

Related:
  - config.Config: provides host/model/generation settings
  - src.mood.summarizer.MoodSummarizer: the only caller

The client returns the model's plain text; interpreting it is left to the caller.
"""

import logging
from typing import Dict, List

import ollama


class OllamaClient:
    """Thin wrapper around ``ollama.Client`` with fixed generation options."""

    def __init__(
        self,
        host: str = "http://localhost:11434",
        model: str = "qwen3:8b",
        temperature: float = 0.7,
        max_tokens: int = 300,
    ):
        """
        Args:
            host: Ollama server URL
            model: Model name
            temperature: Sampling temperature (0.0-1.0)
            max_tokens: Maximum number of generated tokens
        """
        self.host = host
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.logger = logging.getLogger(__name__)

        self.client = ollama.Client(host=host)

    def chat(self, messages: List[Dict[str, str]]) -> str:
        """
        Send a chat conversation and return the assistant's text.

        Args:
            messages: Message list [{"role": "user", "content": "..."}]

        Returns:
            The generated text (possibly empty)
        """
        try:
            response = self.client.chat(
                model=self.model,
                messages=messages,
                stream=False,
                options={
                    "temperature": self.temperature,
                    "num_predict": self.max_tokens,
                },
            )
            return response["message"]["content"] or ""

        except Exception as e:
            self.logger.error(f"Ollama chat error: {e}")
            raise
