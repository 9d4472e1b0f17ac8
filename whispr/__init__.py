"""Whispr: record a short utterance and transcribe it."""

__version__ = "0.1.0"
