import random

from game.engine import RoundEngine
from game.models import Card, Deck, full_card_set


def C(value, suit):
    return Card(value, suit)


def deck_without(*cards):
    return Deck(cards=[c for c in full_card_set() if c not in cards])


def stacked_engine(draw_order, balance=1000, **kwargs):
    """Engine whose every round deals draw_order first."""
    return RoundEngine(
        balance=balance,
        rng=random.Random(7),
        deck_factory=lambda rng: Deck.stacked(draw_order, rng),
        **kwargs
    )
