"""
Orchestrator for cat photo tournaments.

GameSession is the explicit state machine for one tournament: it selects the
field, builds brackets, feeds each match result to the ranker and decides
when a champion is crowned. Orchestrator drives a session with a presenter.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loguru import Logger

from .bracket import build_bracket, estimate_total_rounds
from .constants import DEFAULT_CANDIDATE_COUNT, DEFAULT_DECISION_TIMEOUT
from .exceptions import ConfigurationError, ValidationError
from .interfaces import ImageCatalog, Presenter, RatingStore, Selector
from .leaderboard import rank_of
from .logging_config import get_logger
from .models import FinaleResult, Matchup, Photo, RoundState
from .rankers.elo_ranker import EloRanker

MIN_PHOTOS = 2


class GameState(Enum):
    """Lifecycle of a game session."""

    LOADING = "loading"
    NOT_ENOUGH = "not-enough"
    PLAYING = "playing"
    FINALE = "finale"


@dataclass
class RunConfig:
    """Configuration for a tournament session."""

    candidate_count: int = DEFAULT_CANDIDATE_COUNT  # photos drawn per tournament
    decision_timeout: float = DEFAULT_DECISION_TIMEOUT  # seconds per matchup
    max_restarts: int = 3  # consecutive all-timeout restarts before giving up

    def __post_init__(self):
        """Validate configuration."""
        if self.candidate_count < MIN_PHOTOS:
            raise ConfigurationError(f"candidate_count must be at least {MIN_PHOTOS}, got {self.candidate_count}")
        if self.decision_timeout <= 0:
            raise ConfigurationError(f"decision_timeout must be positive, got {self.decision_timeout}")
        if self.max_restarts < 0:
            raise ConfigurationError(f"max_restarts must not be negative, got {self.max_restarts}")


class GameSession:
    """
    State machine for one tournament.

    loading -> not-enough | playing -> finale. The session owns the round
    state; the rating store stays the authority for ratings. Only
    start/restart/resolve_match change state.
    """

    def __init__(
        self,
        catalog: ImageCatalog,
        store: RatingStore,
        selector: Selector,
        config: RunConfig | None = None,
        ranker: EloRanker | None = None,
    ):
        self.catalog: ImageCatalog = catalog
        self.store: RatingStore = store
        self.selector: Selector = selector
        self.config: RunConfig = config or RunConfig()
        self.ranker: EloRanker = ranker or EloRanker(store)

        self.state: GameState = GameState.LOADING
        self.round: RoundState | None = None
        self.finale: FinaleResult | None = None
        self.failure: Exception | None = None  # why the last start ended in not-enough
        self.photos: list[Photo] | None = None  # catalog snapshot reused by restarts
        self.restarts: int = 0  # consecutive restarts caused by all-timeout rounds

        self.logger: Logger = get_logger("game_session")

    @property
    def current_matchup(self) -> Matchup | None:
        if self.state is not GameState.PLAYING or self.round is None:
            return None
        return self.round.current_matchup

    def start(self, photos: list[Photo] | None = None) -> GameState:
        """
        Start a fresh tournament.

        Args:
            photos: Catalog snapshot to reuse; fetched from the catalog when None

        Returns:
            The resulting state (playing or not-enough)
        """
        self.state = GameState.LOADING
        self.round = None
        self.finale = None
        self.failure = None

        try:
            if photos is None:
                photos = self.catalog.list_photos()
            self.photos = list(photos)

            if len(self.photos) < MIN_PHOTOS:
                self.logger.info(f"Not enough photos to play: {len(self.photos)}")
                self.state = GameState.NOT_ENOUGH
                return self.state

            ratings = {entry.image_id: entry for entry in self.store.get_all_ratings()}
        except Exception as e:
            # Surfaced to the player as not-enough; the cause stays on the session
            self.logger.exception(f"Failed to load photos or ratings: {e}")
            self.failure = e
            self.state = GameState.NOT_ENOUGH
            return self.state

        selected = self.selector.select_candidates(self.photos, ratings, self.config.candidate_count)
        self.round = RoundState(
            matchups=build_bracket(selected),
            total_rounds=estimate_total_rounds(len(selected)),
        )
        self.state = GameState.PLAYING
        self.logger.info(
            f"Tournament started: {len(selected)} of {len(self.photos)} photos, "
            f"{len(self.round.matchups)} matchups, ~{self.round.total_rounds} rounds"
        )
        return self.state

    def restart(self) -> GameState:
        """Start again, reusing the fetched photo list when there is one."""
        return self.start(self.photos)

    def resolve_match(self, winner_id: str | None, matchup: Matchup | None = None) -> bool:
        """
        Apply the outcome of the current matchup.

        Args:
            winner_id: Chosen photo id, or None when time ran out
            matchup: The matchup the answer belongs to. An answer for any
                matchup other than the one awaiting a decision is ignored.

        Returns:
            True if the outcome was applied, False if it was ignored

        Raises:
            ValidationError: If winner_id is not part of the current matchup
        """
        current = self.current_matchup
        if current is None:
            self.logger.debug(f"Ignoring outcome {winner_id!r}: session is {self.state.value}")
            return False
        if matchup is not None and matchup is not current:
            self.logger.debug(f"Ignoring outcome {winner_id!r} for an already resolved matchup")
            return False
        if winner_id is not None and not current.contains(winner_id):
            raise ValidationError(f"{winner_id} is not in the current matchup")

        if winner_id is None:
            self._resolve_no_decision(current)
        else:
            self._resolve_win(current, winner_id)
        return True

    def _resolve_no_decision(self, matchup: Matchup) -> None:
        assert self.round is not None
        self.ranker.record_no_decision(matchup.left.photo_id, matchup.right.photo_id)

        if not self.round.is_last_matchup:
            self.round.current_index += 1
            return

        winners = self.round.winners_so_far
        if not winners:
            self.restarts += 1
            self.logger.info(f"Every matchup in round {self.round.round_number} timed out, restarting tournament")
            self.restart()
            return

        if len(winners) == 1:
            self._crown(winners[0])
            return

        self._advance_round(winners)

    def _resolve_win(self, matchup: Matchup, winner_id: str) -> None:
        assert self.round is not None
        winner = matchup.photo(winner_id)
        loser = matchup.other(winner_id)
        self.ranker.record_win(winner.photo_id, loser.photo_id)
        self.restarts = 0

        # Round state only changes once the finale or next round is built
        winners = [*self.round.winners_so_far, winner]
        if not self.round.is_last_matchup:
            self.round.winners_so_far = winners
            self.round.current_index += 1
            return

        if len(winners) == 1:
            self._crown(winners[0])
            return

        self._advance_round(winners)

    def _advance_round(self, winners: list[Photo]) -> None:
        assert self.round is not None
        next_round = RoundState(
            matchups=build_bracket(winners),
            round_number=self.round.round_number + 1,
            total_rounds=self.round.total_rounds,
        )
        if len(winners) % 2:
            self.logger.debug(f"Odd field of {len(winners)}, {winners[-1].photo_id} is dropped")
        self.round = next_round
        self.logger.info(f"Round {next_round.round_number}: {len(next_round.matchups)} matchups")

    def _crown(self, champion: Photo) -> None:
        entry = self.store.get_rating(champion.photo_id)
        rank = rank_of(self.store.get_all_ratings(), champion.photo_id)
        self.finale = FinaleResult(
            champion=champion,
            entry=entry,
            rank=rank,
            total_photos=len(self.photos or []),
        )
        self.state = GameState.FINALE
        self.logger.info(f"Champion: {champion.photo_id} (rating {entry.rating}, rank #{rank})")


class Orchestrator:
    """Drives a game session with a presenter until a champion is crowned."""

    def __init__(self, session: GameSession, presenter: Presenter):
        self.session: GameSession = session
        self.presenter: Presenter = presenter
        self.config: RunConfig = session.config
        self.logger: Logger = get_logger("orchestrator")

    def run(self) -> FinaleResult | None:
        """
        Play one tournament.

        Returns:
            The finale, or None if the tournament could not start or every
            round kept timing out past max_restarts
        """
        session = self.session
        session.restarts = 0
        session.start(session.photos)

        while session.state is GameState.PLAYING:
            if session.restarts > self.config.max_restarts:
                self.logger.warning(f"Giving up after {session.restarts} restarts without a decision")
                return None

            matchup = session.current_matchup
            assert matchup is not None and session.round is not None
            choice = self.presenter.present(matchup, session.round.label, self.config.decision_timeout)
            session.resolve_match(choice, matchup=matchup)

        if session.state is GameState.NOT_ENOUGH:
            self.logger.warning("Tournament could not start")
            return None
        return session.finale
