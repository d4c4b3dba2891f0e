"""
Hand Evaluation for Texas Hold'em.

This module evaluates 5-7 cards and returns the best 5-card hand as a
HandRanking: a category from 0 (high card) to 8 (straight flush) plus a
tie-break key. Higher rankings are better hands, and rankings compare with
the ordinary comparison operators.

Every 5-card subset of the input is scored (21 subsets for 7 cards) and
the best one is kept. There are no shortcuts for partial hands.

Hand Rankings (best to worst):
8. Straight Flush: 5 consecutive cards of same suit (A-high is a Royal Flush)
7. Four of a Kind: 4 cards of same rank
6. Full House: 3 of a kind + pair
5. Flush: 5 cards of same suit
4. Straight: 5 consecutive cards
3. Three of a Kind: 3 cards of same rank
2. Two Pair: 2 different pairs
1. One Pair: 2 cards of same rank
0. High Card: No made hand

Note: Ace can be low in A-2-3-4-5 straight (wheel), which ranks as 5-high.
"""

from __future__ import annotations
from typing import List, Sequence, Tuple, Optional
from itertools import combinations, zip_longest
from dataclasses import dataclass, field
from enum import IntEnum
from collections import Counter

from flipout.core.card import Card, ACE_HIGH
from flipout.core.rules import HAND_SIZE, MAX_HAND_INPUT


class InvalidHandSizeError(ValueError):
    """Raised when the evaluator is given too few (or too many) cards."""


class HandCategory(IntEnum):
    """Hand categories from weakest (0) to strongest (8)."""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8


# Hand category names for display
HAND_CATEGORY_NAMES = {
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.HIGH_CARD: "High Card",
}

WHEEL = [ACE_HIGH, 5, 4, 3, 2]


@dataclass(frozen=True, eq=False)
class HandRanking:
    """
    Result of evaluating a hand.

    Attributes:
        category: Hand category (0-8)
        key: Rank values compared lexicographically within a category
        cards: The 5 cards making the hand (not part of comparison)
    """
    category: HandCategory
    key: Tuple[int, ...]
    cards: Tuple[Card, ...] = field(default=())

    @property
    def name(self) -> str:
        return HAND_CATEGORY_NAMES[self.category]

    @property
    def is_royal(self) -> bool:
        return self.category == HandCategory.STRAIGHT_FLUSH and self.key == (ACE_HIGH,)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HandRanking):
            return NotImplemented
        return compare_rankings(self, other) == 0

    def __hash__(self) -> int:
        key = list(self.key)
        while key and key[-1] == 0:
            key.pop()
        return hash((int(self.category), tuple(key)))

    def __lt__(self, other: HandRanking) -> bool:
        return compare_rankings(self, other) < 0

    def __le__(self, other: HandRanking) -> bool:
        return compare_rankings(self, other) <= 0

    def __gt__(self, other: HandRanking) -> bool:
        return compare_rankings(self, other) > 0

    def __ge__(self, other: HandRanking) -> bool:
        return compare_rankings(self, other) >= 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "category": int(self.category),
            "name": self.name,
            "key": list(self.key),
            "cards": [str(c) for c in self.cards],
        }


def compare_rankings(a: HandRanking, b: HandRanking) -> int:
    """
    Compare two rankings.

    Returns:
        1 if a wins, -1 if b wins, 0 if tie. Missing trailing key
        components count as 0.
    """
    if a.category != b.category:
        return 1 if a.category > b.category else -1
    for av, bv in zip_longest(a.key, b.key, fillvalue=0):
        if av != bv:
            return 1 if av > bv else -1
    return 0


def evaluate_hand(cards: Sequence[Card]) -> HandRanking:
    """
    Evaluate a poker hand (5-7 cards).

    Args:
        cards: 5-7 Card objects (hole cards plus community cards)

    Returns:
        The best HandRanking over every 5-card subset

    Raises:
        InvalidHandSizeError: If not 5-7 cards provided
    """
    if len(cards) < HAND_SIZE or len(cards) > MAX_HAND_INPUT:
        raise InvalidHandSizeError(
            f"Need {HAND_SIZE}-{MAX_HAND_INPUT} cards, got {len(cards)}"
        )

    best: Optional[HandRanking] = None
    for combo in combinations(cards, HAND_SIZE):
        ranking = _evaluate_5_cards(combo)
        if best is None or ranking > best:
            best = ranking
    return best


def _evaluate_5_cards(cards: Sequence[Card]) -> HandRanking:
    """Score exactly 5 cards."""
    sorted_cards = sorted(cards, key=lambda c: c.value, reverse=True)
    values = [c.value for c in sorted_cards]

    is_flush = len({c.suit for c in sorted_cards}) == 1
    straight_high = _straight_high(values)

    rank_counts = Counter(values)
    # Distinct ranks by (multiplicity desc, rank desc)
    grouped = sorted(rank_counts, key=lambda v: (rank_counts[v], v), reverse=True)
    counts = [rank_counts[v] for v in grouped]

    if straight_high and is_flush:
        return _ranking(HandCategory.STRAIGHT_FLUSH, (straight_high,),
                        _straight_order(sorted_cards, straight_high))

    if counts == [4, 1]:
        category = HandCategory.FOUR_OF_A_KIND
    elif counts == [3, 2]:
        category = HandCategory.FULL_HOUSE
    elif is_flush:
        return _ranking(HandCategory.FLUSH, tuple(values), sorted_cards)
    elif straight_high:
        return _ranking(HandCategory.STRAIGHT, (straight_high,),
                        _straight_order(sorted_cards, straight_high))
    elif counts == [3, 1, 1]:
        category = HandCategory.THREE_OF_A_KIND
    elif counts == [2, 2, 1]:
        category = HandCategory.TWO_PAIR
    elif counts == [2, 1, 1, 1]:
        category = HandCategory.ONE_PAIR
    else:
        return _ranking(HandCategory.HIGH_CARD, tuple(values), sorted_cards)

    # Paired categories: quads/trips/pairs first, then kickers
    ordered = sorted(sorted_cards, key=lambda c: (rank_counts[c.value], c.value), reverse=True)
    return _ranking(category, tuple(grouped), ordered)


def _ranking(category: HandCategory, key: Tuple[int, ...], cards: Sequence[Card]) -> HandRanking:
    return HandRanking(category=category, key=key, cards=tuple(cards))


def _straight_high(values: List[int]) -> Optional[int]:
    """
    Check if 5 ranks (sorted descending) form a straight.

    Returns:
        The straight's high card (5 for the wheel), or None
    """
    if len(set(values)) != HAND_SIZE:
        return None
    if values[0] - values[-1] == HAND_SIZE - 1:
        return values[0]
    if values == WHEEL:
        return 5
    return None


def _straight_order(cards: List[Card], high: int) -> List[Card]:
    """Order straight cards from the top; in the wheel the Ace goes last."""
    if high != 5 or cards[0].value != ACE_HIGH:
        return cards
    return cards[1:] + cards[:1]


def compare_hands(cards1: Sequence[Card], cards2: Sequence[Card]) -> int:
    """
    Compare two hands.

    Returns:
        1 if cards1 wins, -1 if cards2 wins, 0 if tie
    """
    return compare_rankings(evaluate_hand(cards1), evaluate_hand(cards2))
