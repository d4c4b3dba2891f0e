"""
Flipout Core - Pure Python deal and showdown logic.

This module contains all table logic without any network dependencies.
"""

from flipout.core.card import Card, Deck, Rank, Suit, EmptyDeckError
from flipout.core.seat import Seat
from flipout.core.hand import (
    HandCategory, HandRanking, InvalidHandSizeError, evaluate_hand, compare_rankings,
)
from flipout.core.describe import describe_hand, describe_ranking
from flipout.core.rules import Stage, SeatResult
from flipout.core.table import Table, AdvanceResult, ShowdownResult, RevealResult

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "EmptyDeckError",
    "Seat",
    "HandCategory",
    "HandRanking",
    "InvalidHandSizeError",
    "evaluate_hand",
    "compare_rankings",
    "describe_hand",
    "describe_ranking",
    "Stage",
    "SeatResult",
    "Table",
    "AdvanceResult",
    "ShowdownResult",
    "RevealResult",
]
