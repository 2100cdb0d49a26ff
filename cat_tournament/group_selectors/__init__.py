"""
Selector implementations.

Provides implementations of the Selector interface for choosing which photos
enter a fresh tournament.

Available implementations:
- LeastMatchupsSelector: Favors photos with the fewest recorded matchups and
  fills the remainder at random
"""

from .least_matchups_selector import LeastMatchupsSelector, select_candidates

__all__ = ["LeastMatchupsSelector", "select_candidates"]
