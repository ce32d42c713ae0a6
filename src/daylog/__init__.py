"""Shared configuration, logging and LLM client for the daylog services."""
