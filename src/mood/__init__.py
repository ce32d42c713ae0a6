"""
Mood module: prompt construction and LLM-powered daily mood summaries.
"""

from src.mood.prompt import MoodActivity, MoodPrompt, synthesize
from src.mood.summarizer import MoodSummarizer

__all__ = ["MoodActivity", "MoodPrompt", "MoodSummarizer", "synthesize"]
