from scorers.sitting import SittingScorer, SittingThresholds
from scorers.standing import StandingScorer, StandingThresholds

__all__ = [
    "SittingScorer",
    "SittingThresholds",
    "StandingScorer",
    "StandingThresholds",
]
