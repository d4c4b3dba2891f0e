"""
Flipout Table Rules and Constants.

A hand moves through a fixed, linear sequence of stages. Community cards
are revealed in three streets with no burn cards:

1. Flop: 3 cards, only from PREFLOP.
2. Turn: 1 card, only from FLOP.
3. River: 1 card, only from TURN.

Showdown needs all 5 community cards. There is no betting.
"""

from enum import Enum, auto


class Stage(Enum):
    """Stages of a Flipout hand."""
    WAITING = auto()      # No hand dealt yet
    PREFLOP = auto()      # Hole cards dealt, no community cards
    FLOP = auto()         # 3 community cards
    TURN = auto()         # 4 community cards
    RIVER = auto()        # 5 community cards
    SHOWDOWN = auto()     # Winners determined

    @classmethod
    def parse(cls, stage: "Stage | str") -> "Stage":
        """Accept a Stage or a case-insensitive stage name."""
        if isinstance(stage, cls):
            return stage
        try:
            return cls[str(stage).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown stage: {stage}") from None


class SeatResult(Enum):
    """How a seat finished the hand."""
    NORMAL = "normal"
    WINNER = "winner"
    CHOP = "chop"


# Seat limits
MIN_PLAYERS = 1
MAX_PLAYERS = 10
DEFAULT_PLAYERS = 6
DECK_SEAT_LIMIT = 23  # 23 * 2 hole cards + 5 community = 51 cards

# Cards per stage
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

# Hand evaluation
HAND_SIZE = 5  # Best 5-card hand
MAX_HAND_INPUT = HAND_SIZE + HOLE_CARDS

# Street reached from each stage, and how many cards it reveals
STREET_TRANSITIONS = {
    Stage.PREFLOP: (Stage.FLOP, FLOP_CARDS),
    Stage.FLOP: (Stage.TURN, TURN_CARDS),
    Stage.TURN: (Stage.RIVER, RIVER_CARDS),
}

# Presentation pacing (milliseconds), used by the WebSocket layer only
DEAL_DELAY_MS = 120
FLOP_DELAY_MS = 800
TURN_DELAY_MS = 1200
RIVER_DELAY_MS = 1200
SHOWDOWN_DELAY_MS = 800

# Seat names cycle through the zodiac
ZODIAC_SEATS = [
    ("🐭", "Rat"),
    ("🐮", "Ox"),
    ("🐯", "Tiger"),
    ("🐰", "Rabbit"),
    ("🐲", "Dragon"),
    ("🐍", "Snake"),
    ("🐴", "Horse"),
    ("🐐", "Goat"),
    ("🐵", "Monkey"),
    ("🐔", "Rooster"),
    ("🐶", "Dog"),
    ("🐗", "Pig"),
]


def seat_name(index: int) -> str:
    """Display name for a seat, e.g. '🐭 Rat'."""
    emoji, name = ZODIAC_SEATS[index % len(ZODIAC_SEATS)]
    return f"{emoji} {name}"


def validate_player_count(player_count: int, max_players: int = MAX_PLAYERS) -> int:
    """
    Check a requested player count against the table limit.

    Raises:
        ValueError: If the count is not an integer in MIN_PLAYERS..max_players
    """
    if isinstance(player_count, bool) or not isinstance(player_count, int):
        raise ValueError(f"Player count must be an integer, got {player_count!r}")
    if not MIN_PLAYERS <= player_count <= max_players:
        raise ValueError(
            f"Number of players must be {MIN_PLAYERS}-{max_players}, got {player_count}"
        )
    return player_count
