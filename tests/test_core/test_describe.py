"""
Tests for hand descriptions.
"""

import pytest
from flipout.core.card import parse_cards
from flipout.core.hand import evaluate_hand, HandCategory, HandRanking
from flipout.core.describe import (
    describe_hand, describe_ranking, plural_rank_name, INCOMPLETE_HAND,
)


class TestDescribeHand:
    """Labels for each category, from hole + community cards."""

    @pytest.mark.parametrize("hole, board, label", [
        ("As Ks", "Qs Js Ts 2h 2d", "Royal Flush"),
        ("9h 8h", "7h 6h 5h Kc 2d", "Straight Flush (9 High)"),
        ("Ah 2h", "3h 4h 5h Kc Kd", "Straight Flush (5 High)"),
        ("Ks Kh", "Kd Kc 4s 9h 2d", "Four of a Kind (Kings)"),
        ("Ks Kh", "Kd 4c 4s 9h 2d", "Full House (Kings over Fours)"),
        ("6s 6h", "6d Qc Qs 9h 2d", "Full House (Sixes over Queens)"),
        ("As 9s", "Js 4s 2s Kh Qd", "Flush (A High)"),
        ("Ah 2s", "3d 4c 5s Kh Qd", "Straight (5 High)"),
        ("9h Ts", "Jd Qc Ks 2h 3d", "Straight (K High)"),
        ("7s 7h", "7d Qc 2s 9h 4d", "Three of a Kind (Sevens)"),
        ("As Ah", "8d 8c Qs 3h 4d", "Two Pair (Aces and Eights)"),
        ("Qs Qh", "8d 5c 2s 3h 9d", "One Pair (Queens)"),
        ("Th 3c", "Tc 5d 8s Jh 2d", "One Pair (Tens)"),
    ])
    def test_labels(self, hole, board, label):
        assert describe_hand(parse_cards(hole), parse_cards(board)) == label

    def test_high_card_uses_higher_hole_card(self):
        """7-2 with a dry board reports '7 High' even though the board has a King."""
        hole = parse_cards("7c 2d")
        board = parse_cards("Ks 9h 4s 3c Jd")
        assert evaluate_hand(hole + board).key[0] == 13
        assert describe_hand(hole, board) == "7 High"

    def test_high_card_ace_in_hole(self):
        assert describe_hand(parse_cards("Ac 2d"), parse_cards("Ks 9h 4s 3c Jd")) == "A High"

    def test_wheel_never_reports_ace(self):
        label = describe_hand(parse_cards("Ah 2s"), parse_cards("3d 4c 5s Kh Qd"))
        assert "A" not in label.replace("Straight", "")

    def test_incomplete_hand(self):
        assert describe_hand(parse_cards("As Ks"), []) == INCOMPLETE_HAND
        assert describe_hand(parse_cards("As Ks"), parse_cards("Qs Jd")) == INCOMPLETE_HAND

    def test_flop_only(self):
        assert describe_hand(parse_cards("As Ah"), parse_cards("Ad 7c 2s")) == "Three of a Kind (Aces)"


class TestDescribeRanking:
    """Labels straight from rankings."""

    def test_high_card_without_hole_uses_key(self):
        ranking = evaluate_hand(parse_cards("As Kh Jd 9c 2s"))
        assert describe_ranking(ranking) == "A High"

    def test_label_matches_category(self):
        ranking = HandRanking(HandCategory.TWO_PAIR, (13, 4, 2))
        assert describe_ranking(ranking) == "Two Pair (Kings and Fours)"

    def test_plural_names(self):
        assert plural_rank_name(1) == "Aces"
        assert plural_rank_name(14) == "Aces"
        assert plural_rank_name(6) == "Sixes"
        assert plural_rank_name(2) == "Twos"
