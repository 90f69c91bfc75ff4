"""
Card and Deck classes for Texas Hold'em.

A card is an immutable (rank, suit) pair carrying a numeric value from
2 to 14 (ace high). The deck is consumed from its end: the last card in
the list is the top of the deck.

Shuffling is driven by an injected random source so that hands can be
replayed and tests can be deterministic.
"""

from __future__ import annotations
import random
from typing import Iterable, List, Optional
from enum import IntEnum

from pokercoach.core.errors import DeckExhausted


class Suit(IntEnum):
    """Card suits."""
    CLUBS = 0     # ♣
    DIAMONDS = 1  # ♦
    HEARTS = 2    # ♥
    SPADES = 3    # ♠


class Rank(IntEnum):
    """Card ranks from 2 (lowest) to Ace (highest)."""
    TWO = 0
    THREE = 1
    FOUR = 2
    FIVE = 3
    SIX = 4
    SEVEN = 5
    EIGHT = 6
    NINE = 7
    TEN = 8
    JACK = 9
    QUEEN = 10
    KING = 11
    ACE = 12


SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.CLUBS: "c",
    Suit.DIAMONDS: "d",
    Suit.HEARTS: "h",
    Suit.SPADES: "s",
}

RANK_CHARS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

CHAR_TO_RANK = {v: k for k, v in RANK_CHARS.items()}
CHAR_TO_RANK["10"] = Rank.TEN
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}


class Card:
    """
    A playing card.

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - String notation: Card.from_string("As") or Card.from_string("A♠")

    Cards are immutable and compare equal by (rank, suit).
    """

    __slots__ = ("_rank", "_suit")

    def __init__(self, rank: Rank, suit: Suit):
        object.__setattr__(self, "_rank", Rank(rank))
        object.__setattr__(self, "_suit", Suit(suit))

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    def __delattr__(self, name):
        raise AttributeError("Card is immutable")

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def value(self) -> int:
        """Numeric value, 2 through 14 with the ace high."""
        return int(self._rank) + 2

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts formats:
        - "As", "Kh", "Td", "2c" (rank + suit char)
        - "A♠", "K♥", "T♦", "2♣" (rank + suit symbol)
        - "10h" for the ten
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        if s[:2] == "10":
            rank_part, suit_part = "10", s[2:]
        else:
            rank_part, suit_part = s[0].upper(), s[1:]

        if rank_part not in CHAR_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_part}")
        rank = CHAR_TO_RANK[rank_part]

        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(rank, suit)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Card):
            return self._rank == other._rank and self._suit == other._suit
        return NotImplemented

    def __hash__(self) -> int:
        return int(self._rank) * 4 + int(self._suit)

    def __repr__(self) -> str:
        return f"Card({RANK_CHARS[self._rank]}{SUIT_CHARS[self._suit]})"

    def __str__(self) -> str:
        return f"{RANK_CHARS[self._rank]}{SUIT_SYMBOLS[self._suit]}"

    @property
    def short_str(self) -> str:
        """Short string like 'As', 'Kh'."""
        return f"{RANK_CHARS[self._rank]}{SUIT_CHARS[self._suit]}"

    @property
    def color(self) -> str:
        return "red" if self._suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": RANK_CHARS[self._rank],
            "suit": SUIT_SYMBOLS[self._suit],
            "value": self.value,
            "text": str(self),
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Card:
        return cls.from_string(f"{data['rank']}{data['suit']}")


def new_deck() -> List[Card]:
    """Return the 52 cards in rank-major order, unshuffled."""
    return [Card(rank, suit) for rank in Rank for suit in Suit]


def shuffle_cards(cards: Iterable[Card], rng: random.Random) -> List[Card]:
    """
    Return a uniformly random permutation of ``cards``.

    Fisher-Yates: walk from the last index down to 1 and swap each slot
    with a uniformly chosen index at or below it. The input is not
    modified.
    """
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


class Deck:
    """
    A standard 52-card deck.

    Usage:
        deck = Deck(rng=random.Random(7))
        hole_cards = deck.deal(2)
        deck.burn()
        flop = deck.deal(3)
    """

    def __init__(self, rng: Optional[random.Random] = None, shuffle: bool = True):
        self._rng = rng if rng is not None else random.Random()
        self.reset()
        if shuffle:
            self.shuffle()

    def reset(self) -> None:
        """Reset the deck to a full 52 cards in order."""
        self._cards: List[Card] = new_deck()

    def shuffle(self) -> None:
        """Shuffle the remaining cards in the deck."""
        self._cards = shuffle_cards(self._cards, self._rng)

    def deal(self, n: int = 1) -> List[Card]:
        """
        Remove and return the top ``n`` cards, top card first.

        Raises:
            DeckExhausted: If not enough cards remain.
        """
        if n < 0:
            raise ValueError(f"Cannot deal a negative number of cards: {n}")
        if n > len(self._cards):
            raise DeckExhausted(n, len(self._cards))
        return [self._cards.pop() for _ in range(n)]

    def deal_one(self) -> Card:
        """Deal a single card."""
        return self.deal(1)[0]

    def burn(self) -> Card:
        """Burn (discard) the top card."""
        return self.deal_one()

    @property
    def remaining(self) -> int:
        return len(self._cards)

    @property
    def cards(self) -> List[Card]:
        """Copy of the remaining cards, bottom first."""
        return list(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse multiple cards from a string.

    Accepts formats:
    - "As Kh Td" (space-separated)
    - "AsKhTd" (no separator, 2 chars each)
    - "A♠ K♥ T♦" (with symbols)
    """
    cards_str = cards_str.strip()
    if not cards_str:
        return []

    if " " in cards_str:
        return [Card.from_string(s) for s in cards_str.split()]

    result = []
    i = 0
    while i < len(cards_str):
        if i + 1 < len(cards_str) and (
            cards_str[i + 1] in SYMBOL_TO_SUIT
            or cards_str[i + 1].lower() in CHAR_TO_SUIT
        ):
            result.append(Card.from_string(cards_str[i:i + 2]))
            i += 2
        else:
            raise ValueError(f"Cannot parse card at position {i}: {cards_str[i:]}")

    return result
