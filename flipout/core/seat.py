"""
Seat class for the Flipout table.

A seat holds:
- Its index and display name
- Exactly two hole cards for the current hand
- How it finished the hand (normal, winner, chop)
"""

from __future__ import annotations
from typing import List, Dict, Any
from dataclasses import dataclass, field

from flipout.core.card import Card
from flipout.core.rules import SeatResult, HOLE_CARDS, seat_name


@dataclass
class Seat:
    """
    A seat at the table for one hand.

    Attributes:
        index: Seat position at the table (0-indexed)
        name: Display name (zodiac animal for the seat index)
        hole_cards: The seat's private cards (2 cards once dealt)
        result: How the seat finished the hand
    """
    index: int
    name: str = ""
    hole_cards: List[Card] = field(default_factory=list)
    result: SeatResult = SeatResult.NORMAL

    def __post_init__(self) -> None:
        if not self.name:
            self.name = seat_name(self.index)

    def receive(self, card: Card) -> None:
        """Take one hole card during round-robin dealing."""
        if len(self.hole_cards) >= HOLE_CARDS:
            raise ValueError(f"Seat {self.index} already holds {HOLE_CARDS} cards")
        self.hole_cards.append(card)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "index": self.index,
            "name": self.name,
            "cards": [card.to_dict() for card in self.hole_cards],
            "result": self.result.value,
        }

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hole_cards) if self.hole_cards else "??"
        return f"Seat {self.index} {self.name} [{cards_str}]"
