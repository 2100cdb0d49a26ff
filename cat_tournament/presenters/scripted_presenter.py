"""
Scripted presenter implementation for testing.

Replays a fixed list of decisions.
"""

from collections.abc import Iterable

from typing_extensions import override

from ..exceptions import ValidationError
from ..interfaces import Presenter
from ..models import Matchup

LEFT = "left"
RIGHT = "right"


class ScriptedPresenter(Presenter):
    """
    Presenter that answers from a script.

    Each script item is "left", "right", None (no decision) or an explicit
    photo id. Presented matchups are recorded in order.
    """

    def __init__(self, choices: Iterable[str | None]):
        """
        Initialize scripted presenter.

        Args:
            choices: Answers to give, one per presented matchup
        """
        self.choices: list[str | None] = list(choices)
        self.presented = list[Matchup]()
        self.labels = list[str]()

    @override
    def present(self, matchup: Matchup, label: str, timeout: float) -> str | None:
        if len(self.presented) >= len(self.choices):
            raise ValidationError(f"Script exhausted after {len(self.choices)} matchups")

        choice = self.choices[len(self.presented)]
        self.presented.append(matchup)
        self.labels.append(label)

        if choice == LEFT:
            return matchup.left.photo_id
        if choice == RIGHT:
            return matchup.right.photo_id
        return choice

    @property
    def remaining(self) -> int:
        return len(self.choices) - len(self.presented)
