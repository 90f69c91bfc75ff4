"""
Hand Evaluation for Texas Hold'em.

Evaluates 2 hole cards plus 0-5 community cards and returns the best
5-card ranking as a HandValue: a category, a display score and a
tie-break vector.

Hand Rankings (best to worst):
8. Straight Flush (ace high is a Royal Flush)
7. Four of a Kind
6. Full House
5. Flush
4. Straight
3. Three of a Kind
2. Two Pair
1. One Pair
0. High Card

Two hands are ordered by category first, then by their tie-break vectors
compared element by element. The score is category * 1000 refined by the
top card(s), e.g. a royal flush scores 8014 and kings full of twos 6132.

Note: Ace can be low in A-2-3-4-5 straight (wheel).
"""

from __future__ import annotations
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Sequence, Tuple

from pokercoach.core.card import Card


class HandCategory(IntEnum):
    """Hand categories from worst (0) to best (8)."""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8

    @property
    def base(self) -> int:
        return int(self) * CATEGORY_MULTIPLIER


CATEGORY_MULTIPLIER = 1000

HAND_CATEGORY_NAMES = {
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.HIGH_CARD: "High Card",
}

ACE_VALUE = 14
WHEEL_HIGH = 5
WHEEL_VALUES = (14, 5, 4, 3, 2)


@dataclass(frozen=True)
class HandValue:
    """
    Result of evaluating a hand.

    Attributes:
        score: Category base plus a refinement from the top card(s)
        category: HandCategory of the best five cards
        tie_breakers: Card values compared element-wise within a category
    """
    score: int
    category: HandCategory
    tie_breakers: Tuple[int, ...] = field(default_factory=tuple)

    @property
    def key(self) -> Tuple[int, Tuple[int, ...]]:
        return (int(self.category), self.tie_breakers)

    @property
    def is_royal(self) -> bool:
        return (
            self.category == HandCategory.STRAIGHT_FLUSH
            and self.tie_breakers[:1] == (ACE_VALUE,)
        )

    @property
    def name(self) -> str:
        if self.is_royal:
            return "Royal Flush"
        return HAND_CATEGORY_NAMES[self.category]

    def __lt__(self, other: HandValue) -> bool:
        return self.key < other.key

    def __le__(self, other: HandValue) -> bool:
        return self.key <= other.key

    def __gt__(self, other: HandValue) -> bool:
        return self.key > other.key

    def __ge__(self, other: HandValue) -> bool:
        return self.key >= other.key

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "category": self.category.name,
            "name": self.name,
            "tie_breakers": list(self.tie_breakers),
        }


def evaluate_hand(
    hole_cards: Sequence[Card],
    community_cards: Sequence[Card] = (),
) -> HandValue:
    """
    Evaluate the best 5-card hand from hole and community cards.

    Total over any 0-7 distinct cards: with fewer than five cards only
    pairs, trips, quads and high cards can be made.

    Args:
        hole_cards: The seat's private cards
        community_cards: Board cards revealed so far

    Returns:
        HandValue for the best achievable hand
    """
    cards = sorted(
        list(hole_cards) + list(community_cards),
        key=lambda c: c.value,
        reverse=True,
    )
    if not cards:
        return HandValue(0, HandCategory.HIGH_CARD, ())

    counts = Counter(c.value for c in cards)
    distinct = sorted(counts, reverse=True)

    flush_cards = _find_flush(cards)

    if flush_cards is not None:
        sf_high = _straight_high([c.value for c in flush_cards])
        if sf_high is not None:
            return _make(HandCategory.STRAIGHT_FLUSH, sf_high, [sf_high])

    quads = [v for v in distinct if counts[v] == 4]
    trips = [v for v in distinct if counts[v] == 3]
    pairs = [v for v in distinct if counts[v] == 2]

    if quads:
        quad = quads[0]
        kicker = next((v for v in distinct if v != quad), 0)
        return _make(HandCategory.FOUR_OF_A_KIND, quad, [quad, kicker])

    if trips and (pairs or len(trips) > 1):
        high_trip = trips[0]
        # Two triples: the lower one plays as the pair.
        pair = trips[1] if len(trips) > 1 else pairs[0]
        return _make(
            HandCategory.FULL_HOUSE, high_trip * 10 + pair, [high_trip, pair]
        )

    if flush_cards is not None:
        top_five = [c.value for c in flush_cards[:5]]
        return _make(HandCategory.FLUSH, top_five[0], top_five)

    straight_high = _straight_high(distinct)
    if straight_high is not None:
        return _make(HandCategory.STRAIGHT, straight_high, [straight_high])

    if trips:
        trip = trips[0]
        kickers = [v for v in distinct if v != trip][:2]
        return _make(HandCategory.THREE_OF_A_KIND, trip, [trip] + kickers)

    if len(pairs) >= 2:
        high_pair, low_pair = pairs[0], pairs[1]
        kicker = next((v for v in distinct if v not in (high_pair, low_pair)), 0)
        return _make(
            HandCategory.TWO_PAIR,
            high_pair * 10 + low_pair,
            [high_pair, low_pair, kicker],
        )

    if pairs:
        pair = pairs[0]
        kickers = [v for v in distinct if v != pair][:3]
        return _make(HandCategory.ONE_PAIR, pair, [pair] + kickers)

    return _make(HandCategory.HIGH_CARD, distinct[0], distinct[:5])


def _make(category: HandCategory, refinement: int, tie_breakers: List[int]) -> HandValue:
    return HandValue(category.base + refinement, category, tuple(tie_breakers))


def _find_flush(cards: List[Card]) -> Optional[List[Card]]:
    """Return every card of a suit holding five or more, highest first."""
    by_suit: Dict[int, List[Card]] = defaultdict(list)
    for card in cards:
        by_suit[card.suit].append(card)
    for suited in by_suit.values():
        if len(suited) >= 5:
            return suited
    return None


def _straight_high(values: Sequence[int]) -> Optional[int]:
    """
    Return the high card of the best straight among ``values``.

    The wheel (A-2-3-4-5) counts as five-high and is only reported when
    no higher straight exists.
    """
    unique = sorted(set(values), reverse=True)
    for i in range(len(unique) - 4):
        if unique[i] - unique[i + 4] == 4:
            return unique[i]
    if all(v in unique for v in WHEEL_VALUES):
        return WHEEL_HIGH
    return None


def compare_hands(a: HandValue, b: HandValue) -> int:
    """
    Compare two evaluated hands.

    Returns:
        1 if a wins, -1 if b wins, 0 if tie
    """
    if a.key > b.key:
        return 1
    if a.key < b.key:
        return -1
    return 0


def get_hand_description(value: HandValue) -> str:
    """Get a human-readable description of an evaluated hand."""
    category = value.category
    tb = value.tie_breakers
    if not tb:
        return "No cards"

    if value.is_royal:
        return "Royal Flush"
    if category == HandCategory.STRAIGHT_FLUSH:
        return f"Straight Flush, {_value_name(tb[0])} high"
    if category == HandCategory.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(tb[0])}"
    if category == HandCategory.FULL_HOUSE:
        return f"Full House, {_plural(tb[0])} full of {_plural(tb[1])}"
    if category == HandCategory.FLUSH:
        return f"Flush, {_value_name(tb[0])} high"
    if category == HandCategory.STRAIGHT:
        if tb[0] == WHEEL_HIGH:
            return "Straight, Five high (Wheel)"
        return f"Straight, {_value_name(tb[0])} high"
    if category == HandCategory.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(tb[0])}"
    if category == HandCategory.TWO_PAIR:
        return f"Two Pair, {_plural(tb[0])} and {_plural(tb[1])}"
    if category == HandCategory.ONE_PAIR:
        return f"Pair of {_plural(tb[0])}"
    return f"High Card, {_value_name(tb[0])}"


_VALUE_NAMES = {
    2: "Two", 3: "Three", 4: "Four", 5: "Five", 6: "Six", 7: "Seven",
    8: "Eight", 9: "Nine", 10: "Ten", 11: "Jack", 12: "Queen", 13: "King",
    14: "Ace",
}


def _value_name(value: int) -> str:
    return _VALUE_NAMES[value]


def _plural(value: int) -> str:
    name = _VALUE_NAMES[value]
    return name + "es" if name == "Six" else name + "s"
