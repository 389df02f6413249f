"""Win/loss performance summary over settled outcome records."""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping

from edgeboard.constants import RESULT_LOSS, RESULT_WIN


@dataclass(frozen=True)
class PerformanceSummary:
    total_bets: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: float = 0.0
    current_week_opportunities: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalBets": self.total_bets,
            "wins": self.wins,
            "losses": self.losses,
            "winRate": self.win_rate,
            "currentWeekOpportunities": self.current_week_opportunities,
        }


def summarize_performance(
    outcomes: Iterable[Mapping[str, Any]],
    current_opportunities: int = 0,
) -> PerformanceSummary:
    """Count WIN/LOSS outcomes; any other ``Result`` (PUSH, blank) is ignored."""
    wins = 0
    losses = 0
    for outcome in outcomes or []:
        if not isinstance(outcome, Mapping):
            continue
        result = outcome.get("Result")
        if result == RESULT_WIN:
            wins += 1
        elif result == RESULT_LOSS:
            losses += 1

    total = wins + losses
    win_rate = (wins / total) * 100 if total > 0 else 0.0
    return PerformanceSummary(
        total_bets=total,
        wins=wins,
        losses=losses,
        win_rate=win_rate,
        current_week_opportunities=current_opportunities,
    )
