"""
Ranker implementations.

Provides the rating update rules applied after every match.

Available implementations:
- EloRanker: Fixed-K Elo updates persisted through a RatingStore, including
  the mutual-loss update used when a matchup times out
"""

from .elo_ranker import EloRanker, expected_score

__all__ = ["EloRanker", "expected_score"]
