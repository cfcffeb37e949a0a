import random
from dataclasses import dataclass
from typing import Optional

from config import GameConfig
from game import rules
from game.errors import DegenerateOddsError, EngineStateError
from game.models import Card, Deck, RoundState
from models.round_record import RoundRecord, trim_history
from models.stats import Stats
from models.wallet import Wallet
from utils import safe_print

'''
[**ROUND FLOW**]
IDLE(-1) --start_round--> COLOR(0) --correct--> HIGHER/LOWER(1) --correct--> BETWEEN(2) --correct--> SUIT(3)

Any active stage goes back to IDLE on a wrong guess (bet is lost), on cash_out
(bet * multiplier is paid) or on a correct SUIT guess (auto win, bet * multiplier is paid).
A PUSH never moves the round: the card is returned, the deck reshuffled and the guess replayed.
'''

PUSH = "push"
CORRECT = "correct"
WIN = "win"
INCORRECT = "incorrect"


@dataclass
class GuessOutcome:
    result: str  # push / correct / win / incorrect
    guess: str
    card: Card
    stage: int
    payout_multiplier: float
    balance: float
    next_stage: Optional[int] = None
    winnings: Optional[float] = None
    loss: Optional[float] = None

    def to_dict(self):
        return {
            "result": self.result,
            "guess": self.guess,
            "card": self.card.to_dict(),
            "stage": self.stage,
            "payout_multiplier": self.payout_multiplier,
            "balance": self.balance,
            "next_stage": self.next_stage,
            "winnings": self.winnings,
            "loss": self.loss,
        }


class RoundEngine:
    def __init__(self, balance=GameConfig.INITIAL_BALANCE, rng=None,
                 house_edge=GameConfig.HOUSE_EDGE, hold_reveal=False, deck_factory=None):
        self.rng = rng or random.Random()
        self.house_edge = house_edge
        # When set, the in-flight guard stays up until complete_reveal()
        self.hold_reveal = hold_reveal
        # deck_factory(rng) -> Deck; a fresh shuffled deck when None
        self.deck_factory = deck_factory

        self.wallet = Wallet(balance)
        self.stats = Stats()
        self.round = RoundState()
        self.history = []
        self.rounds_played = 0
        self.guessing = False

        self.events = []
        self.ui_log = []

        safe_print(f"[ENGINE] Engine initialized with balance {self.wallet.balance:.2f}")

    # ---------------------
    # STATE HELPERS
    # ---------------------
    def get_state(self):
        deck = self.round.deck
        return {
            "stage": self.round.stage,
            "stage_name": rules.STAGE_NAMES[self.round.stage],
            "drawn_cards": [c.to_dict() for c in self.round.drawn_cards],
            "payout_multiplier": self.round.payout_multiplier,
            "balance": self.wallet.balance,
            "current_bet": self.wallet.current_bet,
            "deck_remaining": deck.remaining() if deck is not None else 0,
            "guessing": self.guessing,
        }

    def get_odds(self):
        if not self.round.is_active:
            return {}
        return rules.compute_odds(self.round.stage, self.round.deck, self.round.drawn_cards)

    def get_offered_guesses(self):
        return rules.offered_guesses(self.get_odds())

    def get_payout_table(self):
        return rules.payout_table(self.get_odds(), self.house_edge)

    def get_stats(self):
        return self.stats.to_dict()

    def get_history(self):
        return [r.to_dict() for r in self.history]

    def _log(self, msg):
        # print to console and append to ui log for frontend consumption
        safe_print(msg)
        self.ui_log.append(msg)

    def _emit(self, kind, **data):
        # Transitions are emitted synchronously; the presentation layer decides when to show them
        self.events.append({"type": kind, "stage": self.round.stage, **data})

    def _require_active(self, action):
        if not self.round.is_active:
            raise EngineStateError(f"Cannot {action} while no round is active")
        if self.guessing:
            raise EngineStateError(f"Cannot {action} while a guess is in flight")

    # ---------------------
    # ROUND CONTROL
    # ---------------------

    def start_round(self, bet):
        if self.guessing:
            raise EngineStateError("Cannot start a round while a guess is being revealed")
        if self.round.is_active:
            raise EngineStateError("A round is already in progress")

        bet = self.wallet.lock_bet(bet)

        deck = self.deck_factory(self.rng) if self.deck_factory else Deck(rng=self.rng)
        self.round.begin(deck)
        self.rounds_played += 1

        self._emit("round_started", bet=bet)
        self._log(f"[ENGINE] Round {self.rounds_played} started with bet {bet:.2f}")

        return self.get_state()

    def complete_reveal(self):
        """
        Release the in-flight guard held after a guess when hold_reveal is set.
        """
        self.guessing = False

    # ---------------------
    # GUESSING
    # ---------------------

    def submit_guess(self, guess):
        self._require_active("submit a guess")

        stage = self.round.stage
        guess = rules.normalize_guess(stage, guess)
        odds = self.get_odds()
        if odds.get(guess, 0) <= 0:
            raise DegenerateOddsError(f"'{guess}' cannot win with the cards left in the deck")

        self.guessing = True
        try:
            outcome = self._resolve_guess(stage, guess, odds)
        except Exception:
            self.guessing = False
            raise

        if not self.hold_reveal:
            self.guessing = False
        return outcome

    def _resolve_guess(self, stage, guess, odds):
        deck = self.round.deck
        drawn = self.round.drawn_cards
        card = deck.draw()

        if rules.is_push(stage, card, drawn):
            deck.put_back(card)
            self._emit("push", guess=guess, card=card.to_dict())
            self._log(f"[ENGINE] Same value! {card} matches {drawn[-1]}, draw again")
            return GuessOutcome(PUSH, guess, card, stage, self.round.payout_multiplier,
                                self.wallet.balance, next_stage=stage)

        correct = rules.is_correct_guess(stage, guess, card, drawn)
        drawn.append(card)

        if not correct:
            loss = self._settle_loss()
            self._log(f"[ENGINE] Wrong! Guessed {guess}, drew {card}. Lost {loss:.2f}")
            return GuessOutcome(INCORRECT, guess, card, stage, 0.0, self.wallet.balance, loss=loss)

        self.round.payout_multiplier *= rules.compute_payout(odds[guess], self.house_edge)
        multiplier = self.round.payout_multiplier

        if stage == rules.FINAL_STAGE:
            winnings = self._settle_win(GameConfig.OUTCOME_WIN)
            self._log(f"[ENGINE] All four stages cleared with {card}! Won {winnings:.2f}")
            return GuessOutcome(WIN, guess, card, stage, multiplier, self.wallet.balance, winnings=winnings)

        self.round.stage += 1
        self._emit("stage_advanced", payout_multiplier=multiplier, card=card.to_dict())
        self._log(f"[ENGINE] Correct! Drew {card}. Current payout: {multiplier:.2f}x")
        safe_print(f"[ENGINE] Stage transition: {rules.STAGE_NAMES[stage]} -> {rules.STAGE_NAMES[self.round.stage]}")

        return GuessOutcome(CORRECT, guess, card, stage, multiplier, self.wallet.balance,
                            next_stage=self.round.stage)

    # ---------------------
    # CASH OUT
    # ---------------------

    def cash_out(self):
        self._require_active("cash out")
        if self.round.stage == rules.STAGE_COLOR:
            raise EngineStateError("Make at least one correct guess before cashing out")

        winnings = self._settle_win(GameConfig.OUTCOME_CASHOUT)
        self._log(f"[ENGINE] Cashed out for {winnings:.2f}!")
        return winnings

    # ---------------------
    # SETTLEMENT
    # ---------------------

    def _settle_win(self, outcome):
        multiplier = self.round.payout_multiplier
        winnings = self.wallet.award_winnings(multiplier)
        self.stats.record(True, winnings)
        self._record_round(outcome, winnings)
        self._emit("cashed_out" if outcome == GameConfig.OUTCOME_CASHOUT else "round_won",
                   winnings=winnings, payout_multiplier=multiplier)
        self._reset_round()
        return winnings

    def _settle_loss(self):
        loss = self.wallet.deduct_bet()
        self.stats.record(False)
        self._record_round(GameConfig.OUTCOME_LOSS, 0.0)
        self._emit("round_lost", loss=loss)
        self._reset_round()
        return loss

    def _record_round(self, outcome, winnings):
        record = RoundRecord(
            round_no=self.rounds_played,
            bet=self.wallet.current_bet,
            outcome=outcome,
            stage_reached=self.round.stage,
            payout_multiplier=self.round.payout_multiplier,
            winnings=winnings,
            cards=self.round.drawn_cards,
            started_at=self.round.started_at,
        )
        self.history.append(record)
        trim_history(self.history)

    def _reset_round(self):
        self.round = RoundState()
        safe_print("[ENGINE] Round reset to idle")

    def consume_ui_state(self):
        data = self.get_state()
        data["odds"] = self.get_payout_table()
        data["events"] = list(self.events)
        data["ui_log"] = list(self.ui_log)

        # clear transient fields
        self.events.clear()
        self.ui_log.clear()
        return data
