"""Conversation memory module for chatterm.

Holds the in-memory transcript resent with every request.
"""

from .transcript import Transcript

__all__ = ["Transcript"]
