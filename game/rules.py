'''
[**RIDE THE BUS: THE 4 STAGES**]
Each round is four guesses against cards drawn from one shrinking deck.

0. COLOR: red or black. Odds are fixed at 50/50.
1. HIGHER/LOWER: against the card drawn in the color stage.
2. BETWEEN/OUTSIDE: against the range spanned by the first two cards.
   A card equal to either end of the range counts as outside.
3. SUIT: one of the four suits.

From stage 1 on, a card with the same value as the previous draw is a PUSH:
it goes back into the deck and the same guess is played again.
Each correct guess multiplies the payout by (1 / probability) * house edge.
'''
import math

from config import GameConfig
from game.errors import DegenerateOddsError, InvalidGuessError
from game.models import SUITS

STAGE_IDLE = -1
STAGE_COLOR = 0
STAGE_HIGHER_LOWER = 1
STAGE_BETWEEN = 2
STAGE_SUIT = 3
FINAL_STAGE = STAGE_SUIT

STAGE_NAMES = {
    STAGE_IDLE: "idle",
    STAGE_COLOR: "color",
    STAGE_HIGHER_LOWER: "higher_lower",
    STAGE_BETWEEN: "between_outside",
    STAGE_SUIT: "suit",
}

RED, BLACK = "red", "black"
HIGHER, LOWER = "higher", "lower"
BETWEEN, OUTSIDE = "between", "outside"

STAGE_GUESSES = {
    STAGE_COLOR: (RED, BLACK),
    STAGE_HIGHER_LOWER: (HIGHER, LOWER),
    STAGE_BETWEEN: (BETWEEN, OUTSIDE),
    STAGE_SUIT: tuple(SUITS),
}

# Short tokens, per stage ('h' means higher in stage 1 and hearts in stage 3)
GUESS_ALIASES = {
    STAGE_COLOR: {"r": RED, "b": BLACK},
    STAGE_HIGHER_LOWER: {"h": HIGHER, "l": LOWER},
    STAGE_BETWEEN: {"i": BETWEEN, "in": BETWEEN, "o": OUTSIDE, "out": OUTSIDE},
    STAGE_SUIT: {"h": "hearts", "d": "diamonds", "c": "clubs", "s": "spades"},
}


def normalize_guess(stage, guess):
    """
    Map a guess token (full name or alias, any case) onto the stage's canonical token.
    """
    if stage not in STAGE_GUESSES:
        raise InvalidGuessError(f"No guesses are taken during the {STAGE_NAMES.get(stage, stage)} stage")
    token = str(guess).strip().lower()
    token = GUESS_ALIASES[stage].get(token, token)
    if token not in STAGE_GUESSES[stage]:
        options = ", ".join(STAGE_GUESSES[stage])
        raise InvalidGuessError(f"Invalid guess '{guess}' for the {STAGE_NAMES[stage]} stage. Expected one of: {options}")
    return token


def between_bounds(drawn_cards):
    low, high = sorted((drawn_cards[0].value, drawn_cards[1].value))
    return low, high


# -----------------------------
# ODDS & PAYOUT
# -----------------------------

def compute_odds(stage, deck, drawn_cards):
    """
    Probability of each guess of the stage, against the cards still in the deck.
    Pure: neither the deck nor the drawn cards are modified.
    """
    if stage not in STAGE_GUESSES:
        return {}

    cards = list(deck) if deck is not None else []
    total = len(cards)

    if stage == STAGE_COLOR:
        # Fixed split, not recomputed from the live deck
        return {RED: 0.5, BLACK: 0.5}

    if total == 0:
        return {}

    if stage == STAGE_HIGHER_LOWER:
        ref = drawn_cards[-1].value
        higher = sum(1 for c in cards if c.value > ref)
        lower = sum(1 for c in cards if c.value < ref)
        return {HIGHER: higher / total, LOWER: lower / total}

    if stage == STAGE_BETWEEN:
        low, high = between_bounds(drawn_cards)
        between = sum(1 for c in cards if low < c.value < high)
        outside = sum(1 for c in cards if c.value <= low or c.value >= high)
        return {BETWEEN: between / total, OUTSIDE: outside / total}

    if stage == STAGE_SUIT:
        return {suit: sum(1 for c in cards if c.suit == suit) / total for suit in SUITS}

    return {}


def compute_payout(probability, house_edge=None):
    """
    Fair-odds multiplier scaled by the house edge, rounded half-up to 2 decimals.
    """
    if house_edge is None:
        house_edge = GameConfig.HOUSE_EDGE
    if probability is None or probability <= 0:
        raise DegenerateOddsError("Probability must be greater than zero to compute a payout")
    return math.floor((1 / probability) * house_edge * 100 + 0.5) / 100


def offered_guesses(odds):
    """
    Guesses that can be offered to the player: zero-probability options are left out.
    """
    return [guess for guess, probability in odds.items() if probability > 0]


def payout_table(odds, house_edge=None):
    return {
        guess: {
            "probability": probability,
            "payout": compute_payout(probability, house_edge),
        }
        for guess, probability in odds.items() if probability > 0
    }


# -----------------------------
# GUESS EVALUATION
# -----------------------------

def is_push(stage, card, drawn_cards):
    return stage >= STAGE_HIGHER_LOWER and bool(drawn_cards) and card.value == drawn_cards[-1].value


def is_correct_guess(stage, guess, card, drawn_cards):
    """
    drawn_cards are the cards drawn before this one.
    """
    if stage == STAGE_COLOR:
        return card.color == guess

    if stage == STAGE_HIGHER_LOWER:
        ref = drawn_cards[0].value
        return (guess == HIGHER and card.value > ref) or (guess == LOWER and card.value < ref)

    if stage == STAGE_BETWEEN:
        low, high = between_bounds(drawn_cards)
        inside = low < card.value < high
        return inside if guess == BETWEEN else not inside

    if stage == STAGE_SUIT:
        return card.suit == guess

    return False
