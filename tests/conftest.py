"""
Pytest configuration and shared fixtures for PokerCoach tests.
"""

import random

import pytest
from pokercoach.core.card import Card, Deck, Rank, Suit
from pokercoach.core.player import Player
from pokercoach.core.game import TexasHoldemGame


@pytest.fixture
def rng():
    """A seeded random source so shuffles are repeatable."""
    return random.Random(1234)


@pytest.fixture
def deck(rng):
    """Create a fresh shuffled deck."""
    return Deck(rng=rng, shuffle=True)


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def sample_player():
    """Create a sample player with 1000 chips."""
    return Player(player_id="test_player", name="Tester", chips=1000)


@pytest.fixture
def two_player_game(rng):
    """Create a 2-player game (heads-up)."""
    return TexasHoldemGame(
        num_players=2,
        big_blind=20,
        small_blind=10,
        buy_in=1000,
        rng=rng,
    )


@pytest.fixture
def three_player_game(rng):
    """Create a 3-player game."""
    return TexasHoldemGame(num_players=3, rng=rng)


@pytest.fixture
def five_player_game(rng):
    """Create a full 5-player table."""
    return TexasHoldemGame(num_players=5, rng=rng)


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return [
        Card(Rank.NINE, Suit.HEARTS),
        Card(Rank.EIGHT, Suit.HEARTS),
        Card(Rank.SEVEN, Suit.HEARTS),
        Card(Rank.SIX, Suit.HEARTS),
        Card(Rank.FIVE, Suit.HEARTS),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]
