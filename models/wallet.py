"""
Wallet Model
Tracks the player's balance and the bet locked for the current round
"""
from typing import Optional

from config import GameConfig
from game.errors import InvalidBetError


class Wallet:
    """Balance plus the bet locked by the active round"""

    def __init__(self, balance: float = GameConfig.INITIAL_BALANCE):
        self.balance = float(balance)
        self.current_bet: Optional[float] = None

    def has_sufficient_balance(self, amount: float) -> bool:
        """Check if the balance covers a bet"""
        return 0 < amount <= self.balance

    def lock_bet(self, amount) -> float:
        """Validate and lock the bet for a new round. Nothing changes on failure."""
        try:
            amount = float(amount)
        except (TypeError, ValueError):
            raise InvalidBetError(f"Bet must be a number, got {amount!r}")

        if amount != amount or amount <= 0:
            raise InvalidBetError("Please enter a valid bet amount")
        if amount > self.balance:
            raise InvalidBetError("Your bet cannot exceed your balance")

        self.current_bet = amount
        return amount

    def award_winnings(self, multiplier: float) -> float:
        """Credit bet * multiplier to the balance and return the winnings"""
        winnings = self.current_bet * multiplier
        self.balance += winnings
        return winnings

    def deduct_bet(self) -> float:
        """Debit the locked bet after a lost round"""
        loss = self.current_bet
        self.balance -= loss
        return loss

    def to_dict(self):
        """Convert wallet to dictionary for JSON serialization"""
        return {
            'balance': self.balance,
            'current_bet': self.current_bet,
        }
