"""
Flipout Table - Deal and Showdown State Machine.

This module drives one table through a hand:
- Dealing hole cards round-robin to a requested number of seats
- Revealing community cards street by street (flop, turn, river)
- Showdown: scoring every seat's best 5 of 7 and marking winners or a chop
- Describing a seat's best hand for display

Stages only move forward: PREFLOP -> FLOP -> TURN -> RIVER -> SHOWDOWN.
A Table owns its deck, seats and community cards; callers that trigger it
from several places must serialise those calls.
"""

from __future__ import annotations
from typing import List, Dict, Optional, Tuple, Any
from dataclasses import dataclass, field
import logging
import random

from flipout.core.card import Card, Deck
from flipout.core.seat import Seat
from flipout.core.hand import HandRanking, evaluate_hand
from flipout.core.describe import describe_hand, describe_ranking
from flipout.core.rules import (
    Stage, SeatResult,
    STREET_TRANSITIONS, DEFAULT_PLAYERS, MAX_PLAYERS, DECK_SEAT_LIMIT,
    HOLE_CARDS, TOTAL_COMMUNITY_CARDS,
    validate_player_count,
)


logger = logging.getLogger(__name__)

NOT_READY_MESSAGE = "Not all community cards have been revealed yet."


@dataclass
class AdvanceResult:
    """Result of asking the table to reveal a street."""
    success: bool
    stage: Stage
    message: str
    cards: List[Card] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "stage": self.stage.name,
            "message": self.message,
            "cards": [c.to_dict() for c in self.cards],
        }


@dataclass
class ShowdownResult:
    """
    Outcome of a showdown.

    When not_ready is True no seat was scored and winners is empty.
    """
    not_ready: bool
    message: str
    winners: Tuple[int, ...] = ()
    rankings: Dict[int, HandRanking] = field(default_factory=dict)
    labels: Dict[int, str] = field(default_factory=dict)

    @property
    def is_chop(self) -> bool:
        return len(self.winners) > 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "not_ready": self.not_ready,
            "message": self.message,
            "winners": list(self.winners),
            "is_chop": self.is_chop,
            "labels": {str(i): label for i, label in self.labels.items()},
            "rankings": {str(i): r.to_dict() for i, r in self.rankings.items()},
        }


@dataclass
class RevealResult:
    """Streets revealed by reveal_remaining, plus the optional showdown."""
    streets: List[AdvanceResult] = field(default_factory=list)
    showdown: Optional[ShowdownResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "streets": [s.to_dict() for s in self.streets],
            "showdown": self.showdown.to_dict() if self.showdown else None,
        }


class Table:
    """
    Flipout table implementing the deal/reveal/showdown state machine.

    Usage:
        table = Table()
        table.start_hand(6)
        table.advance("flop")
        table.advance("turn")
        table.advance("river")
        result = table.showdown()
        label = table.describe_winning_hand(result.winners[0])
    """

    def __init__(
        self,
        table_id: Optional[str] = None,
        max_players: int = MAX_PLAYERS,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize an empty table.

        Args:
            table_id: Optional identifier used in logs and state
            max_players: Largest player count start_hand accepts
            rng: Optional random source for reproducible shuffles
        """
        if max_players < 1 or max_players > DECK_SEAT_LIMIT:
            raise ValueError(f"max_players must be 1-{DECK_SEAT_LIMIT}, got {max_players}")

        self.table_id = table_id
        self.max_players = max_players
        self._rng = rng

        self.deck = Deck(shuffle=False, rng=rng)
        self.seats: List[Seat] = []
        self.community_cards: List[Card] = []
        self.stage = Stage.WAITING
        self.hand_number = 0
        self.status = ""

        # Order hole cards were dealt, for animated dealing
        self.deal_sequence: List[Tuple[int, Card]] = []

        # Events of the current hand, kept in memory only
        self.hand_history: List[Dict[str, Any]] = []

        self._last_showdown: Optional[ShowdownResult] = None

    @property
    def num_players(self) -> int:
        """Number of seats dealt into the current hand."""
        return len(self.seats)

    def is_hand_running(self) -> bool:
        """Check if a hand has been dealt and not yet shown down."""
        return self.stage not in (Stage.WAITING, Stage.SHOWDOWN)

    def start_hand(self, player_count: int) -> List[Seat]:
        """
        Start a new hand.

        Rebuilds and shuffles the deck, then deals two hole cards to each
        seat, one card per seat per round.

        Raises:
            ValueError: If player_count is outside 1..max_players
        """
        validate_player_count(player_count, self.max_players)

        self.hand_number += 1
        logger.info(f"Starting hand #{self.hand_number} with {player_count} players")

        # Reset for new hand
        self.deck = Deck(shuffle=True, rng=self._rng)
        self.seats = [Seat(index=i) for i in range(player_count)]
        self.community_cards = []
        self.deal_sequence = []
        self.hand_history = []
        self._last_showdown = None

        self._deal_hole_cards()
        self.stage = Stage.PREFLOP
        self._set_status("")

        self._log_action("HAND_START", {
            "hand_number": self.hand_number,
            "players": player_count,
        })

        return self.seats

    def next_hand(self, player_count: Optional[int] = None) -> List[Seat]:
        """Start the next hand, reusing the previous player count by default."""
        if player_count is None:
            player_count = self.num_players or DEFAULT_PLAYERS
        return self.start_hand(player_count)

    def _deal_hole_cards(self) -> None:
        """Deal hole cards round-robin: one card per seat, two rounds."""
        for _ in range(HOLE_CARDS):
            for seat in self.seats:
                card = self.deck.draw()
                seat.receive(card)
                self.deal_sequence.append((seat.index, card))

    def advance(self, stage: Stage | str) -> AdvanceResult:
        """
        Reveal the next street.

        Only the street immediately after the current stage is accepted:
        FLOP from PREFLOP, TURN from FLOP, RIVER from TURN. Any other
        request changes nothing and returns an unsuccessful result.

        Raises:
            ValueError: If stage is not a known stage name
        """
        requested = Stage.parse(stage)
        transition = STREET_TRANSITIONS.get(self.stage)

        if transition is None or transition[0] != requested:
            message = f"Cannot reveal {requested.name} during {self.stage.name}"
            logger.debug(message)
            return AdvanceResult(success=False, stage=self.stage, message=message)

        next_stage, count = transition
        cards = self.deck.deal(count)
        self.community_cards.extend(cards)
        self.stage = next_stage

        message = f"{next_stage.name} revealed."
        self._set_status(message)
        self._log_action(next_stage.name, {"cards": [str(c) for c in cards]})
        logger.debug(f"Hand #{self.hand_number}: {next_stage.name} {' '.join(str(c) for c in cards)}")

        return AdvanceResult(success=True, stage=next_stage, message=message, cards=cards)

    def reveal_remaining(self, auto_showdown: bool = False) -> RevealResult:
        """
        Reveal every street still face down, in order, and optionally
        go to showdown.
        """
        result = RevealResult()
        while self.stage in STREET_TRANSITIONS:
            street, _ = STREET_TRANSITIONS[self.stage]
            result.streets.append(self.advance(street))

        if auto_showdown:
            result.showdown = self.showdown()
        return result

    def showdown(self) -> ShowdownResult:
        """
        Score every seat and mark the winner(s).

        Returns a not-ready result, without changing anything, while fewer
        than 5 community cards are out.
        """
        if len(self.community_cards) < TOTAL_COMMUNITY_CARDS:
            self._set_status(NOT_READY_MESSAGE)
            return ShowdownResult(not_ready=True, message=NOT_READY_MESSAGE)

        rankings: Dict[int, HandRanking] = {}
        labels: Dict[int, str] = {}
        for seat in self.seats:
            ranking = evaluate_hand(seat.hole_cards + self.community_cards)
            rankings[seat.index] = ranking
            labels[seat.index] = describe_ranking(ranking, seat.hole_cards)

        best = max(rankings.values())
        winners = tuple(i for i, r in rankings.items() if r == best)

        winner_result = SeatResult.CHOP if len(winners) > 1 else SeatResult.WINNER
        for seat in self.seats:
            seat.result = winner_result if seat.index in winners else SeatResult.NORMAL

        message = self._showdown_message(winners, labels)
        result = ShowdownResult(
            not_ready=False,
            message=message,
            winners=winners,
            rankings=rankings,
            labels=labels,
        )

        self.stage = Stage.SHOWDOWN
        self._last_showdown = result
        self._set_status(message)
        self._log_action("SHOWDOWN", {"winners": list(winners), "labels": dict(labels)})
        logger.info(f"Hand #{self.hand_number} showdown: {message}")

        return result

    def _showdown_message(self, winners: Tuple[int, ...], labels: Dict[int, str]) -> str:
        label = labels[winners[0]]
        if len(winners) == 1:
            return f"{self.seats[winners[0]].name} wins! {label}"
        names = ", ".join(self.seats[i].name for i in winners)
        return f"Chop between {names}! {label}"

    def describe_winning_hand(self, seat_index: int) -> str:
        """
        Describe the best hand the seat makes with the community cards.

        Raises:
            IndexError: If there is no such seat in the current hand
        """
        seat = self._get_seat(seat_index)
        return describe_hand(seat.hole_cards, self.community_cards)

    def _get_seat(self, seat_index: int) -> Seat:
        if not 0 <= seat_index < len(self.seats):
            raise IndexError(f"No seat {seat_index} (table has {len(self.seats)} seats)")
        return self.seats[seat_index]

    @property
    def last_showdown(self) -> Optional[ShowdownResult]:
        """Result of the most recent completed showdown in this hand."""
        return self._last_showdown

    def get_state(self) -> Dict[str, Any]:
        """Get the current table state."""
        return {
            "table_id": self.table_id,
            "hand_number": self.hand_number,
            "stage": self.stage.name,
            "board": [c.to_dict() for c in self.community_cards],
            "seats": [s.to_dict() for s in self.seats],
            "deck_remaining": self.deck.remaining,
            "status": self.status,
            "showdown": self.last_showdown.to_dict() if self.last_showdown else None,
        }

    def _set_status(self, text: str) -> None:
        self.status = text

    def _log_action(self, action: str, details: Dict[str, Any]) -> None:
        """Log an event to the hand history."""
        self.hand_history.append({
            "action": action,
            "stage": self.stage.name,
            **details
        })

    def __repr__(self) -> str:
        return (
            f"Table({self.table_id}, hand={self.hand_number}, "
            f"stage={self.stage.name}, seats={self.num_players})"
        )
