"""
Round Record Model
Keeps a summary of each resolved round for the session history
"""
from datetime import datetime
from typing import List, Optional

from config import GameConfig


class RoundRecord:
    """Represents one resolved round"""

    def __init__(
        self,
        round_no: int,
        bet: float,
        outcome: str,
        stage_reached: int,
        payout_multiplier: float,
        winnings: float,
        cards: List,
        started_at: Optional[datetime] = None
    ):
        self.round_no = round_no
        self.bet = bet
        self.outcome = outcome  # 'win', 'cashout' or 'loss'
        self.stage_reached = stage_reached
        self.payout_multiplier = payout_multiplier
        self.winnings = winnings
        self.cards = [str(c) for c in cards]
        self.started_at = started_at or datetime.now()
        self.completed_at = datetime.now()

    def won(self) -> bool:
        return self.outcome in (GameConfig.OUTCOME_WIN, GameConfig.OUTCOME_CASHOUT)

    def net_result(self) -> float:
        """Balance change caused by this round"""
        return self.winnings if self.won() else -self.bet

    def get_duration_seconds(self) -> float:
        duration = self.completed_at - self.started_at
        return duration.total_seconds()

    def to_dict(self):
        """Convert record to dictionary for JSON serialization"""
        return {
            'round_no': self.round_no,
            'bet': self.bet,
            'outcome': self.outcome,
            'stage_reached': self.stage_reached,
            'payout_multiplier': self.payout_multiplier,
            'winnings': self.winnings,
            'net_result': self.net_result(),
            'cards': self.cards,
            'started_at': self.started_at.isoformat(),
            'completed_at': self.completed_at.isoformat(),
            'duration_seconds': self.get_duration_seconds()
        }


def trim_history(history: list, limit: int = GameConfig.HISTORY_LIMIT) -> list:
    """Keep the most recent records, newest first"""
    history.sort(key=lambda r: r.round_no, reverse=True)
    del history[limit:]
    return history
