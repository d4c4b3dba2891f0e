"""
Card and Deck classes for the Flipout table.

Ranks follow the table's natural numbering: 1 is the Ace, 11-13 are the
Jack, Queen and King. The Ace plays high (14) everywhere except in the
wheel straight, so ranking code should use ``Card.value`` rather than
``Card.rank``.
"""

from __future__ import annotations
import random
from typing import List, Optional
from enum import Enum, IntEnum


class EmptyDeckError(Exception):
    """Raised when a card is drawn from an exhausted deck."""


class Suit(Enum):
    """Card suits, in the order a fresh deck is built."""
    SPADE = "spade"
    HEART = "heart"
    DIAMOND = "diamond"
    CLUB = "club"


class Rank(IntEnum):
    """Card ranks, Ace first."""
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13


ACE_HIGH = 14

# String mappings
SUIT_SYMBOLS = {
    Suit.SPADE: "♠",
    Suit.HEART: "♥",
    Suit.DIAMOND: "♦",
    Suit.CLUB: "♣",
}

SUIT_CHARS = {
    Suit.SPADE: "s",
    Suit.HEART: "h",
    Suit.DIAMOND: "d",
    Suit.CLUB: "c",
}

RANK_CHARS = {
    Rank.ACE: "A",
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}

# Reverse mappings
CHAR_TO_RANK = {v: k for k, v in RANK_CHARS.items()}
CHAR_TO_RANK["T"] = Rank.TEN  # Also accept "T"
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}


def rank_text(value: int) -> str:
    """Short text for a rank value, accepting both 1 and 14 for the Ace."""
    if value == ACE_HIGH:
        value = Rank.ACE
    return RANK_CHARS[Rank(value)]


class Card:
    """
    An immutable playing card.

    Cards can be created from:
    - Rank and Suit: Card(Rank.ACE, Suit.SPADE), Card(1, "spade") or Card(14, "spade")
    - String notation: Card.from_string("As"), Card.from_string("10♥")
    - Integer (0-51): Card.from_int(0) = Ace of spades

    The integer encoding follows the order of a freshly built deck:
    card_int = suit_index * 13 + (rank - 1)
    """

    __slots__ = ("_rank", "_suit", "_int")

    def __init__(self, rank: int, suit: Suit | str):
        rank = Rank.ACE if rank == ACE_HIGH else Rank(rank)
        suit = Suit(suit)
        object.__setattr__(self, "_rank", rank)
        object.__setattr__(self, "_suit", suit)
        object.__setattr__(
            self, "_int", _SUIT_ORDER.index(suit) * 13 + int(rank) - 1
        )

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def value(self) -> int:
        """Rank value for ranking purposes: Ace counts 14."""
        return ACE_HIGH if self._rank == Rank.ACE else int(self._rank)

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts formats:
        - "As", "Kh", "Td", "10d", "2c" (rank + suit char)
        - "A♠", "K♥", "10♦", "2♣" (rank + suit symbol)
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_part = s[:-1].upper()
        suit_part = s[-1]

        if rank_part not in CHAR_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_part}")

        rank = CHAR_TO_RANK[rank_part]

        # Try suit char first, then symbol
        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(rank, suit)

    @classmethod
    def from_int(cls, card_int: int) -> Card:
        """Create a card from integer (0-51)."""
        if not 0 <= card_int <= 51:
            raise ValueError(f"Card int must be 0-51, got {card_int}")
        return cls(card_int % 13 + 1, _SUIT_ORDER[card_int // 13])

    def to_int(self) -> int:
        """Return the integer representation (0-51)."""
        return self._int

    def __int__(self) -> int:
        return self._int

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Card):
            return self._int == other._int
        return False

    def __hash__(self) -> int:
        return self._int

    def __lt__(self, other: Card) -> bool:
        """Compare by ranking value only (for sorting)."""
        return self.value < other.value

    def __repr__(self) -> str:
        return f"Card({RANK_CHARS[self._rank]}{SUIT_CHARS[self._suit]})"

    def __str__(self) -> str:
        return f"{RANK_CHARS[self._rank]}{SUIT_SYMBOLS[self._suit]}"

    @property
    def short_str(self) -> str:
        """Short string like 'As', '10h'."""
        return f"{RANK_CHARS[self._rank]}{SUIT_CHARS[self._suit]}"

    @property
    def color(self) -> str:
        """Return 'red' for hearts/diamonds, 'black' for clubs/spades."""
        return "red" if self._suit in (Suit.HEART, Suit.DIAMOND) else "black"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": RANK_CHARS[self._rank],
            "suit": self._suit.value,
            "symbol": SUIT_SYMBOLS[self._suit],
            "text": str(self),
            "color": self.color,
        }


_SUIT_ORDER = list(Suit)


def build_deck() -> List[Card]:
    """Return all 52 cards, suit-major, ranks Ace through King, unshuffled."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffle_deck(cards: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """Shuffle ``cards`` in place with a Fisher-Yates pass and return it."""
    rng = rng or random
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randint(0, i)
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def draw_card(cards: List[Card]) -> Card:
    """Remove and return the top (last) card."""
    if not cards:
        raise EmptyDeckError("Cannot draw from an empty deck")
    return cards.pop()


class Deck:
    """
    A standard 52-card deck. Cards are drawn from the end of the list.

    Usage:
        deck = Deck()
        hole_cards = deck.deal(2)
        flop = deck.deal(3)
    """

    def __init__(self, shuffle: bool = True, rng: Optional[random.Random] = None):
        """Initialize a new deck, optionally shuffled."""
        self._rng = rng
        self.reset()
        if shuffle:
            self.shuffle()

    def reset(self) -> None:
        """Reset the deck to a full 52 cards in order."""
        self._cards: List[Card] = build_deck()
        self._dealt: List[Card] = []

    def shuffle(self) -> None:
        """Shuffle the remaining cards in the deck."""
        shuffle_deck(self._cards, self._rng)

    def draw(self) -> Card:
        """Draw a single card."""
        card = draw_card(self._cards)
        self._dealt.append(card)
        return card

    def deal(self, n: int = 1) -> List[Card]:
        """
        Deal n cards from the top of the deck.

        Raises:
            EmptyDeckError: If not enough cards remain.
        """
        if n > len(self._cards):
            raise EmptyDeckError(f"Cannot deal {n} cards, only {len(self._cards)} remain")
        return [self.draw() for _ in range(n)]

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    @property
    def dealt_cards(self) -> List[Card]:
        """List of cards that have been dealt."""
        return self._dealt.copy()

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse multiple cards from a string.

    Accepts formats:
    - "As Kh 10d" (space-separated)
    - "AsKhTd" (no separator)
    - "A♠ K♥ T♦" (with symbols)
    """
    cards_str = cards_str.strip()

    if " " in cards_str:
        return [Card.from_string(s) for s in cards_str.split()]

    result = []
    i = 0
    while i < len(cards_str):
        # "10" is the only two-character rank
        width = 3 if cards_str[i:i + 2] == "10" else 2
        chunk = cards_str[i:i + width]
        if len(chunk) < width:
            raise ValueError(f"Cannot parse card at position {i}: {cards_str[i:]}")
        result.append(Card.from_string(chunk))
        i += width

    return result
