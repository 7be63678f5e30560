"""Scribe Relay: a small web front door to the AssemblyAI transcription API."""

__version__ = "0.1.0"
