import time

from config import GameConfig
from game import rules
from game.engine import INCORRECT, PUSH, WIN
from game.errors import EngineError
from utils import format_money, safe_print

STAGE_PROMPTS = {
    rules.STAGE_COLOR: "Red or Black? (r/b)",
    rules.STAGE_HIGHER_LOWER: "Higher or Lower than the first card? (h/l)",
    rules.STAGE_BETWEEN: "In between or Outside the first two cards? (i/o)",
    rules.STAGE_SUIT: "Which suit? (h/d/c/s)",
}


class CLIController:
    def __init__(self, engine, reveal_delay=None):
        self.engine = engine
        self.reveal_delay = GameConfig.reveal_delay_seconds() if reveal_delay is None else reveal_delay

    # -----------------------------
    # DISPLAY HELPERS
    # -----------------------------

    def show_state(self):
        state = self.engine.get_state()

        safe_print("\n===== RIDE THE BUS =====")
        safe_print(f"Balance: {format_money(state['balance'])}")
        safe_print(f"Bet: {format_money(state['current_bet'])}")
        safe_print(f"Stage: {state['stage_name']}")
        safe_print("Cards: " + (" ".join(c["label"] for c in state["drawn_cards"]) or "-"))
        safe_print(f"Payout: {state['payout_multiplier']:.2f}x")

        for guess, info in self.engine.get_payout_table().items():
            safe_print(f"  {guess:>9}: {info['probability'] * 100:5.1f}% ({info['payout']}x)")

        safe_print("========================\n")

    def show_stats(self):
        stats = self.engine.get_stats()
        safe_print(f"Wins: {stats['wins']}  Losses: {stats['losses']}  "
                   f"Highest Win: {format_money(stats['highest_win'])}  Win Rate: {stats['win_rate']}%")

    def _reveal(self):
        # Hold the result on screen before the next stage becomes actionable
        time.sleep(self.reveal_delay)
        self.engine.complete_reveal()

    # -----------------------------
    # MAIN GAME LOOP
    # -----------------------------

    def run(self):
        safe_print("=== RIDE THE BUS CLI ===")

        while True:
            if not self.engine.round.is_active:
                if not self.handle_bet():
                    break
                continue

            self.show_state()
            if not self.handle_guess():
                break

        self.show_stats()
        safe_print(f"\nGoodbye. Final balance: {format_money(self.engine.wallet.balance)}")

    # -----------------------------
    # BETTING
    # -----------------------------

    def handle_bet(self):
        """
        Returns False when the player quits.
        """
        if self.engine.wallet.balance <= 0:
            safe_print("You are out of money.")
            return False

        safe_print(f"Balance {format_money(self.engine.wallet.balance)}. "
                   f"Enter a bet (Enter for {GameConfig.DEFAULT_BET}), 's' for stats, 'q' to quit:")
        choice = input("> ").strip().lower()

        if choice == "q":
            return False
        if choice == "s":
            self.show_stats()
            return True

        try:
            self.engine.start_round(choice or GameConfig.DEFAULT_BET)
        except EngineError as e:
            safe_print(str(e))
        return True

    # -----------------------------
    # GUESSING
    # -----------------------------

    def handle_guess(self):
        """
        Returns False when the player quits.
        """
        stage = self.engine.round.stage
        prompt = STAGE_PROMPTS[stage]
        if stage > rules.STAGE_COLOR:
            prompt += ", 'cash' to cash out"
        safe_print(prompt)

        choice = input("> ").strip().lower()

        if choice == "q":
            return False

        try:
            if choice == "cash" and stage > rules.STAGE_COLOR:
                winnings = self.engine.cash_out()
                safe_print(f"Cashed out for {format_money(winnings)}!")
                return True

            outcome = self.engine.submit_guess(choice)
        except EngineError as e:
            safe_print(str(e))
            return True

        if outcome.result == PUSH:
            safe_print(f"{outcome.card} - Same value! Draw again...")
        elif outcome.result == INCORRECT:
            safe_print(f"{outcome.card} - Wrong! Better luck next time! (-{format_money(outcome.loss)})")
        elif outcome.result == WIN:
            safe_print(f"{outcome.card} - You rode the bus! Won {format_money(outcome.winnings)}")
        else:
            safe_print(f"{outcome.card} - Correct! Current payout: {outcome.payout_multiplier:.2f}x")

        self._reveal()
        return True
