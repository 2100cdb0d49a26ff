"""Rating and selection constants shared across the engine."""

K_FACTOR = 32  # max rating points exchanged per match
DEFAULT_RATING = 1500  # rating for a photo with no recorded matchups
ELO_SCALE = 400.0

DEFAULT_CANDIDATE_COUNT = 32  # photos drawn into a fresh tournament
UNDERPLAYED_FRACTION = 0.7  # share of the draw reserved for least-played photos

# Battle screen: 5s animation followed by a 3s grace period
DEFAULT_DECISION_TIMEOUT = 8.0
