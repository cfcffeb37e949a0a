import random
from datetime import datetime
from dataclasses import dataclass
from typing import List, Optional

SUITS = ["hearts", "diamonds", "clubs", "spades"]
VALUES = list(range(2, 15))  # 11=J, 12=Q, 13=K, 14=A

RED_SUITS = ("hearts", "diamonds")

SUIT_SYMBOLS = {"hearts": "♥", "diamonds": "♦", "clubs": "♣", "spades": "♠"}
RANK_LABELS = {11: "J", 12: "Q", 13: "K", 14: "A"}

# -----------------------------
# CARD
# -----------------------------

@dataclass(frozen=True)
class Card:
    """
    Represents a single playing card.
    """
    value: int  # 2..14
    suit: str   # hearts / diamonds / clubs / spades

    def __post_init__(self):
        if self.value not in VALUES:
            raise ValueError(f"Invalid card value: {self.value}")
        if self.suit not in SUITS:
            raise ValueError(f"Invalid card suit: {self.suit}")

    @property
    def rank(self):
        return RANK_LABELS.get(self.value, str(self.value))

    @property
    def color(self):
        return "red" if self.suit in RED_SUITS else "black"

    def __str__(self):
        return f"{self.rank}{SUIT_SYMBOLS[self.suit]}"

    def to_dict(self):
        return {
            "value": self.value,
            "suit": self.suit,
            "rank": self.rank,
            "color": self.color,
            "label": str(self),
        }


def full_card_set() -> List[Card]:
    return [Card(value, suit) for suit in SUITS for value in VALUES]


# -----------------------------
# DECK
# -----------------------------

class Deck:
    """
    The 52-card drawable pool. The tail of the list is the top of the deck.
    """
    def __init__(self, rng: Optional[random.Random] = None, cards: Optional[List[Card]] = None):
        self.rng = rng or random.Random()
        if cards is None:
            self.cards = full_card_set()
            self.shuffle()
        else:
            self.cards = list(cards)

    @classmethod
    def stacked(cls, draw_order: List[Card], rng: Optional[random.Random] = None):
        """
        Build a full deck whose next draws come out in draw_order.
        The remaining cards are shuffled underneath.
        """
        if len(set(draw_order)) != len(draw_order):
            raise ValueError("Duplicate cards in draw order")
        rng = rng or random.Random()
        rest = [c for c in full_card_set() if c not in draw_order]
        rng.shuffle(rest)
        return cls(rng=rng, cards=rest + list(reversed(draw_order)))

    def shuffle(self):
        # Fisher-Yates through the injected random source
        self.rng.shuffle(self.cards)

    def draw(self) -> Card:
        if not self.cards:
            raise ValueError("Not enough cards left")
        return self.cards.pop()

    def put_back(self, card: Card):
        """
        Return a voided draw to the pool and reshuffle.
        """
        if card in self.cards:
            raise ValueError(f"Card {card} is already in the deck")
        self.cards.append(card)
        self.shuffle()

    def remaining(self) -> int:
        return len(self.cards)

    def __len__(self):
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)


# -----------------------------
# ROUND STATE
# -----------------------------

class RoundState:
    """
    Holds mutable state for one round. Idle rounds have stage -1 and no deck.
    """
    def __init__(self):
        self.stage = -1          # -1 idle, 0 color, 1 higher/lower, 2 between/outside, 3 suit
        self.deck: Optional[Deck] = None
        self.drawn_cards: List[Card] = []
        self.payout_multiplier = 1.0
        self.started_at: Optional[datetime] = None

    def begin(self, deck: Deck):
        self.stage = 0
        self.deck = deck
        self.drawn_cards = []
        self.payout_multiplier = 1.0
        self.started_at = datetime.now()

    @property
    def is_active(self):
        return self.stage >= 0

    @property
    def last_card(self) -> Optional[Card]:
        return self.drawn_cards[-1] if self.drawn_cards else None
