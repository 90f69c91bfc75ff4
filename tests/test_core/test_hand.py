"""
Tests for hand evaluation.
"""

import pytest
from pokercoach.core.card import parse_cards
from pokercoach.core.hand import (
    HandCategory, HandValue, evaluate_hand, compare_hands, get_hand_description,
)


def evaluate(cards: str) -> HandValue:
    return evaluate_hand(parse_cards(cards))


class TestHandCategories:
    """One test per category, with its score."""

    def test_royal_flush(self, royal_flush):
        value = evaluate_hand(royal_flush)
        assert value.category == HandCategory.STRAIGHT_FLUSH
        assert value.score == 8014
        assert value.name == "Royal Flush"
        assert value.is_royal

    def test_straight_flush(self, straight_flush):
        value = evaluate_hand(straight_flush)
        assert value.category == HandCategory.STRAIGHT_FLUSH
        assert value.score == 8009
        assert value.name == "Straight Flush"
        assert not value.is_royal

    def test_four_of_a_kind(self):
        value = evaluate("9s 9h 9d 9c Kd")
        assert value.category == HandCategory.FOUR_OF_A_KIND
        assert value.score == 7009
        assert value.tie_breakers == (9, 13)

    def test_full_house(self):
        value = evaluate("Ks Kh Kd 2c 2d")
        assert value.category == HandCategory.FULL_HOUSE
        assert value.score == 6132
        assert value.tie_breakers == (13, 2)

    def test_flush(self):
        value = evaluate("Ah Jh 8h 4h 2h")
        assert value.category == HandCategory.FLUSH
        assert value.score == 5014
        assert value.tie_breakers == (14, 11, 8, 4, 2)

    def test_straight(self):
        value = evaluate("9s 8h 7d 6c 5s")
        assert value.category == HandCategory.STRAIGHT
        assert value.score == 4009

    def test_wheel(self, wheel_straight):
        value = evaluate_hand(wheel_straight)
        assert value.category == HandCategory.STRAIGHT
        assert value.score == 4005
        assert value.tie_breakers == (5,)

    def test_three_of_a_kind(self):
        value = evaluate("7s 7h 7d Kc 2s")
        assert value.category == HandCategory.THREE_OF_A_KIND
        assert value.score == 3007
        assert value.tie_breakers == (7, 13, 2)

    def test_two_pair(self):
        value = evaluate("9s 9h 4d 4c As")
        assert value.category == HandCategory.TWO_PAIR
        assert value.score == 2094
        assert value.tie_breakers == (9, 4, 14)

    def test_one_pair(self):
        value = evaluate("Js Jh 8d 5c 3s")
        assert value.category == HandCategory.ONE_PAIR
        assert value.score == 1011
        assert value.tie_breakers == (11, 8, 5, 3)

    def test_high_card(self):
        value = evaluate("As Kh 9d 7c 3s")
        assert value.category == HandCategory.HIGH_CARD
        assert value.score == 14
        assert value.tie_breakers == (14, 13, 9, 7, 3)


class TestSevenCards:
    """Best five out of seven."""

    def test_higher_straight_beats_wheel(self):
        value = evaluate("As 2h 3d 4c 5s 6h Kd")
        assert value.category == HandCategory.STRAIGHT
        assert value.tie_breakers == (6,)

    def test_straight_flush_inside_bigger_flush(self):
        value = evaluate("2h 3h 4h 5h 6h Kh 9s")
        assert value.category == HandCategory.STRAIGHT_FLUSH
        assert value.score == 8006

    def test_flush_and_straight_is_not_straight_flush(self):
        value = evaluate("9h 8h 7h 6s 5h 2h Kd")
        assert value.category == HandCategory.FLUSH
        assert value.tie_breakers == (9, 8, 7, 5, 2)

    def test_flush_beats_straight(self):
        value = evaluate("Th 9s 8h 7h 6d 2h 3h")
        assert value.category == HandCategory.FLUSH

    def test_two_trips_make_full_house(self):
        value = evaluate("8s 8h 8d 3c 3s 3h Ad")
        assert value.category == HandCategory.FULL_HOUSE
        assert value.tie_breakers == (8, 3)

    def test_three_pairs_keep_best_two(self):
        value = evaluate("As Ah Kd Kc Qs Qh 2d")
        assert value.category == HandCategory.TWO_PAIR
        assert value.tie_breakers == (14, 13, 12)

    def test_quads_use_best_kicker(self):
        value = evaluate("5s 5h 5d 5c 2s Ah Kd")
        assert value.tie_breakers == (5, 14)

    def test_hole_and_board_are_combined(self):
        assert evaluate_hand(parse_cards("As Ah"), parse_cards("Ad 7c 2s")).category == (
            HandCategory.THREE_OF_A_KIND
        )


class TestPartialHands:
    """Fewer than five cards still evaluate."""

    def test_empty(self):
        value = evaluate_hand([])
        assert value.score == 0
        assert value.category == HandCategory.HIGH_CARD
        assert get_hand_description(value) == "No cards"

    def test_pocket_pair(self):
        value = evaluate("Qs Qd")
        assert value.category == HandCategory.ONE_PAIR
        assert value.score == 1012
        assert value.tie_breakers == (12,)

    def test_two_high_cards(self):
        value = evaluate("Kd 4c")
        assert value.score == 13
        assert value.tie_breakers == (13, 4)

    def test_four_cards_cannot_straight(self):
        assert evaluate("9s 8h 7d 6c").category == HandCategory.HIGH_CARD


class TestComparison:
    """Ordering is by category, then tie-break vector."""

    def test_two_pair_kicker_decides(self):
        better = evaluate("9s 9h 4d 4c As")
        worse = evaluate("9d 9c 4s 4h Ks")
        assert better > worse
        assert compare_hands(better, worse) == 1
        assert compare_hands(worse, better) == -1

    def test_equal_hands_tie(self):
        a = evaluate("As Kh 9d 7c 3s")
        b = evaluate("Ad Kc 9h 7s 3d")
        assert compare_hands(a, b) == 0
        assert not a > b and not a < b

    def test_full_house_orders_by_trips_not_score(self):
        aces_full = evaluate("As Ah Ad 2c 2s")
        kings_full = evaluate("Ks Kh Kd Ac As")
        assert aces_full.score < kings_full.score
        assert aces_full > kings_full

    def test_wheel_is_lowest_straight(self):
        wheel = evaluate("As 2h 3d 4c 5s")
        six_high = evaluate("2s 3h 4d 5c 6s")
        assert wheel < six_high

    @pytest.mark.parametrize("better,worse", [
        ("2h 3h 4h 5h 6h", "As Ah Ad Ac Ks"),
        ("2s 2h 2d 3c 3s", "Ah Kh Qh Jh 9h"),
        ("2h 3h 4h 5h 7h", "Ts Jh Qd Kc As"),
        ("2s 3h 4d 5c 6s", "As Ah Ad Kc Qs"),
        ("2s 2h 2d 3c 4s", "As Ah Kd Kc Qs"),
        ("2s 2h 3d 3c 4s", "As Ah Kd Qc Js"),
        ("2s 2h 3d 4c 5s", "As Kh Qd Jc 9s"),
    ])
    def test_category_precedence(self, better, worse):
        assert evaluate(better) > evaluate(worse)


class TestDescriptions:
    """Human-readable hand text."""

    @pytest.mark.parametrize("cards,text", [
        ("As Ks Qs Js Ts", "Royal Flush"),
        ("Ks Kh Kd 2c 2d", "Full House, Kings full of Twos"),
        ("As 2h 3d 4c 5s", "Straight, Five high (Wheel)"),
        ("6s 6h 4d 4c As", "Two Pair, Sixes and Fours"),
        ("Js Jh 8d 5c 3s", "Pair of Jacks"),
        ("As Kh 9d 7c 3s", "High Card, Ace"),
    ])
    def test_description(self, cards, text):
        assert get_hand_description(evaluate(cards)) == text
