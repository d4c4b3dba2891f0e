"""
Pytest configuration and shared fixtures for Flipout tests.
"""

import random

import pytest
from fastapi.testclient import TestClient

from flipout.core.card import Card, Deck, Rank, Suit, parse_cards
from flipout.core.table import Table
from flipout.server.app import create_app


@pytest.fixture
def deck():
    """Create a fresh shuffled deck."""
    return Deck(shuffle=True, rng=random.Random(7))


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def table():
    """Create an empty table with a seeded shuffle."""
    return Table(table_id="test", rng=random.Random(42))


@pytest.fixture
def six_seat_table(table):
    """A table with a 6-seat hand dealt."""
    table.start_hand(6)
    return table


@pytest.fixture
def rigged_table(table):
    """
    Factory that deals a hand and then replaces the cards.

    Usage:
        t = rigged_table(["As Ks", "7c 2d"], "Qs Js Ts 3h 4d")
    """
    def _rig(holes, board=""):
        table.start_hand(len(holes))
        for seat, hole in zip(table.seats, holes):
            seat.hole_cards = parse_cards(hole)
        table.community_cards = parse_cards(board) if board else []
        return table
    return _rig


@pytest.fixture
def client():
    """HTTP/WebSocket test client on a fresh app."""
    return TestClient(create_app())


@pytest.fixture
def sample_hand():
    """Create a sample 5-card hand (pair of aces)."""
    return [
        Card(Rank.ACE, Suit.SPADE),
        Card(Rank.ACE, Suit.HEART),
        Card(Rank.KING, Suit.DIAMOND),
        Card(Rank.QUEEN, Suit.CLUB),
        Card(Rank.JACK, Suit.SPADE),
    ]


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADE),
        Card(Rank.KING, Suit.SPADE),
        Card(Rank.QUEEN, Suit.SPADE),
        Card(Rank.JACK, Suit.SPADE),
        Card(Rank.TEN, Suit.SPADE),
    ]


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return [
        Card(Rank.NINE, Suit.HEART),
        Card(Rank.EIGHT, Suit.HEART),
        Card(Rank.SEVEN, Suit.HEART),
        Card(Rank.SIX, Suit.HEART),
        Card(Rank.FIVE, Suit.HEART),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.TWO, Suit.HEART),
        Card(Rank.THREE, Suit.DIAMOND),
        Card(Rank.FOUR, Suit.CLUB),
        Card(Rank.FIVE, Suit.SPADE),
        Card(Rank.ACE, Suit.HEART),
    ]
