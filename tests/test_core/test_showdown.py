"""
Tests for showdown winner determination.

The whole pot goes to one seat: the best hand, or on an exact tie the
earliest seat.
"""

from pokercoach.core.card import parse_cards
from pokercoach.core.hand import HandCategory
from pokercoach.core.player import Player
from pokercoach.core.showdown import resolve_showdown


def seat(player_id: str, cards: str, folded: bool = False) -> Player:
    player = Player(player_id=player_id, name=player_id, chips=1000)
    player.hole_cards = parse_cards(cards)
    player.is_folded = folded
    return player


BOARD = parse_cards("2d 3c 4d 5c 7h")


class TestShowdown:
    """Tests for resolve_showdown."""

    def test_best_hand_wins(self):
        players = [seat("a", "Ks Kh"), seat("b", "As Ah")]
        result = resolve_showdown(players, BOARD)
        assert result.winner.player_id == "b"
        assert result.hand.category == HandCategory.STRAIGHT

    def test_pair_beats_high_card(self):
        board = parse_cards("2d 3c 8d Tc Jh")
        players = [seat("a", "Ks Qh"), seat("b", "8s 4h")]
        result = resolve_showdown(players, board)
        assert result.winner.player_id == "b"
        assert result.hand.category == HandCategory.ONE_PAIR

    def test_kicker_decides(self):
        board = parse_cards("Ad Ac 8d 5c 2h")
        players = [seat("a", "Ks 3h"), seat("b", "Qs Jh")]
        assert resolve_showdown(players, board).winner.player_id == "a"

    def test_folded_seat_cannot_win(self):
        players = [seat("a", "As Ah", folded=True), seat("b", "9s 8h"), seat("c", "Ks Qh")]
        board = parse_cards("Ad Ac Td 5c 2h")
        result = resolve_showdown(players, board)
        assert result.winner.player_id == "c"
        assert set(result.hands) == {"b", "c"}

    def test_exact_tie_goes_to_earliest_seat(self):
        board = parse_cards("As Ks Qd Jc Th")
        players = [seat("a", "2c 3d"), seat("b", "2h 3s"), seat("c", "4h 4s")]
        result = resolve_showdown(players, board)
        assert result.winner.player_id == "a"
        assert result.hands["a"] == result.hands["b"] == result.hands["c"]

    def test_later_seat_needs_strictly_better_hand(self):
        board = parse_cards("9d 9c 5s 5h 2c")
        players = [seat("a", "Ac 3d", folded=True), seat("b", "Kh 4d"), seat("c", "Ks 3s")]
        assert resolve_showdown(players, board).winner.player_id == "b"

    def test_no_contenders(self):
        players = [seat("a", "As Ah", folded=True), seat("b", "Ks Kh", folded=True)]
        assert resolve_showdown(players, BOARD) is None

    def test_single_contender(self):
        result = resolve_showdown([seat("a", "2c 7d")], BOARD)
        assert result.winner.player_id == "a"
        assert list(result.hands) == ["a"]
