"""Business logic services.

This module contains service-layer functions that implement business logic.
Services are called by route handlers and operate on the injected store.
"""

from arena.services.randomness import RandomSource
from arena.services.turns import VoteOutcome, begin_message, complete_stream, submit_vote

__all__ = [
    "RandomSource",
    "VoteOutcome",
    "begin_message",
    "complete_stream",
    "submit_vote",
]
