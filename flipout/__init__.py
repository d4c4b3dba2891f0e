"""
Flipout - Texas Hold'em Deal and Showdown Engine

A small Texas Hold'em table with:
- Pure Python deal/reveal/showdown core (no betting)
- Best-of-seven hand evaluation with chop detection
- FastAPI + WebSocket server for presentation clients

Usage:
    from flipout.core import Table, evaluate_hand, describe_hand
"""

__version__ = "0.1.0"

from flipout.core.card import Card, Deck
from flipout.core.seat import Seat
from flipout.core.table import Table
from flipout.core.hand import HandCategory, HandRanking, evaluate_hand
from flipout.core.describe import describe_hand

__all__ = [
    "Card",
    "Deck",
    "Seat",
    "Table",
    "HandCategory",
    "HandRanking",
    "evaluate_hand",
    "describe_hand",
    "__version__",
]
