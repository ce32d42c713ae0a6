"""
MoodSummarizer tests
"""

from unittest.mock import MagicMock

import pytest

from src.ledger import Category, SummarizerFailure, ValidationError
from src.mood import MoodActivity, MoodSummarizer, synthesize


class TestMoodSummarizer:
    """MoodSummarizer with a mocked Ollama client"""

    @pytest.fixture
    def mock_ollama_client(self):
        return MagicMock()

    @pytest.fixture
    def activities(self):
        return [
            MoodActivity(name="Run", category=Category.HEALTH, duration_minutes=30),
            MoodActivity(name="Coding", category=Category.WORK, duration_minutes=240),
        ]

    def test_summarize_passes_text_through(self, mock_ollama_client, activities):
        mock_ollama_client.chat.return_value = "  Great start!\n1. Hydrate\n2. Walk\n3. Rest  "
        summarizer = MoodSummarizer(ollama_client=mock_ollama_client)

        result = summarizer.summarize(activities)

        assert result == "  Great start!\n1. Hydrate\n2. Walk\n3. Rest  "
        mock_ollama_client.chat.assert_called_once_with(synthesize(activities).to_messages())

    def test_summarize_wraps_client_errors(self, mock_ollama_client, activities):
        mock_ollama_client.chat.side_effect = ConnectionError("ollama is down")
        summarizer = MoodSummarizer(ollama_client=mock_ollama_client)

        with pytest.raises(SummarizerFailure) as exc_info:
            summarizer.summarize(activities)
        assert exc_info.value.user_message == "Could not analyze your day."

    @pytest.mark.parametrize("response", ["", "   \n", None])
    def test_summarize_rejects_empty_responses(self, mock_ollama_client, activities, response):
        mock_ollama_client.chat.return_value = response
        summarizer = MoodSummarizer(ollama_client=mock_ollama_client)

        with pytest.raises(SummarizerFailure):
            summarizer.summarize(activities)

    def test_summarize_requires_activities(self, mock_ollama_client):
        summarizer = MoodSummarizer(ollama_client=mock_ollama_client)

        with pytest.raises(ValidationError):
            summarizer.summarize([])
        mock_ollama_client.chat.assert_not_called()
