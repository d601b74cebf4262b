"""Response selection — text nudge or emoji reaction."""

from random import Random
from typing import Sequence

from gohome.config import GO_HOME_MESSAGES
from gohome.domain.models import ReactionAdd, ResponsePlan, TextReply


class ResponseSelector:
    """Chooses how to nudge a late poster.

    ``rng`` is required so callers decide the randomness source; tests pass a
    seeded ``random.Random`` or a stub with ``random()`` and ``choice()``.
    """

    def __init__(
        self,
        rng: Random,
        reaction_probability: float = 0.4,
        corpus: Sequence[str] = GO_HOME_MESSAGES,
        reaction_name: str = "go_home",
    ):
        if not corpus:
            raise ValueError("corpus must not be empty")
        self._rng = rng
        self._reaction_probability = reaction_probability
        self._corpus = tuple(corpus)
        self._reaction_name = reaction_name

    def should_use_reaction(self) -> bool:
        return bool(self._rng.random() < self._reaction_probability)

    def generate_go_home(self) -> str:
        return self._rng.choice(self._corpus)

    def is_tired(self) -> bool:
        """Hook for response rate limiting. Always False for now."""
        return False

    def select(self) -> ResponsePlan:
        if self.should_use_reaction():
            return ReactionAdd(self._reaction_name)
        return TextReply(self.generate_go_home())
