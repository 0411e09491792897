"""Shared helpers for Todo NLP."""
