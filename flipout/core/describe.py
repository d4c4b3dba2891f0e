"""
Human-readable descriptions of evaluated hands.

Labels embed the ranks that matter for the category, e.g.
"Full House (Kings over Fours)" or "Straight (5 High)". The description
always comes from the evaluator's winning 5 cards so that it can never
disagree with the showdown result.
"""

from __future__ import annotations
from typing import Optional, Sequence

from flipout.core.card import Card, rank_text
from flipout.core.hand import (
    HandCategory, HandRanking, HAND_CATEGORY_NAMES, evaluate_hand,
)
from flipout.core.rules import HAND_SIZE

INCOMPLETE_HAND = "Incomplete hand"

_PLURAL_NAMES = {
    2: "Twos", 3: "Threes", 4: "Fours", 5: "Fives", 6: "Sixes",
    7: "Sevens", 8: "Eights", 9: "Nines", 10: "Tens", 11: "Jacks",
    12: "Queens", 13: "Kings", 14: "Aces",
}


def plural_rank_name(value: int) -> str:
    """Plural name of a rank value, e.g. 13 -> 'Kings'. Ace may be 1 or 14."""
    return _PLURAL_NAMES[14 if value == 1 else value]


def describe_ranking(ranking: HandRanking, hole: Optional[Sequence[Card]] = None) -> str:
    """
    Describe a ranking.

    Args:
        ranking: Result of evaluate_hand
        hole: The seat's hole cards. A high-card hand is reported by the
            higher hole card rather than by the board.
    """
    category = ranking.category
    name = HAND_CATEGORY_NAMES[category]

    if category in (HandCategory.STRAIGHT_FLUSH, HandCategory.STRAIGHT):
        if ranking.is_royal:
            return "Royal Flush"
        return f"{name} ({rank_text(ranking.key[0])} High)"

    if category == HandCategory.FLUSH:
        return f"{name} ({rank_text(ranking.key[0])} High)"

    if category == HandCategory.HIGH_CARD:
        if hole:
            return f"{rank_text(max(c.value for c in hole))} High"
        return f"{rank_text(ranking.key[0])} High"

    # Paired keys list grouped ranks first, kickers after
    if category == HandCategory.FULL_HOUSE:
        trips, pair = ranking.key[:2]
        return f"{name} ({plural_rank_name(trips)} over {plural_rank_name(pair)})"
    if category == HandCategory.TWO_PAIR:
        high, low = ranking.key[:2]
        return f"{name} ({plural_rank_name(high)} and {plural_rank_name(low)})"
    return f"{name} ({plural_rank_name(ranking.key[0])})"


def describe_hand(hole: Sequence[Card], community: Sequence[Card]) -> str:
    """Describe the best hand a seat can make from its hole and community cards."""
    cards = list(hole) + list(community)
    if len(cards) < HAND_SIZE:
        return INCOMPLETE_HAND
    return describe_ranking(evaluate_hand(cards), hole)
