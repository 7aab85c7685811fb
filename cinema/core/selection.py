from __future__ import annotations

import asyncio
import logging
import random
from typing import Callable, List, Optional, Tuple

from cinema.core.candidates import CandidateCollector, CandidateIntro
from cinema.core.custom_intros import list_custom_intro_files, pick_custom_intros
from cinema.core.interfaces import (
    EntitlementService,
    LibraryService,
    PolicyLoader,
    TrailerChannel,
)
from cinema.core.maturity import RatingPolicy
from cinema.core.models import (
    IntroResult,
    ItemKind,
    MediaItem,
    SelectionPolicy,
    UserContext,
)
from cinema.core.policy import load_policy

logger = logging.getLogger(__name__)
# Ensure INFO-level selection messages surface unless overridden globally.
if logger.level == logging.NOTSET:
    logger.setLevel(logging.INFO)
if not logger.handlers:
    _stream: logging.Handler = logging.StreamHandler()
    _stream.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
    logger.addHandler(_stream)
    logger.propagate = False

MAX_INTROS = 2
MAX_CUSTOM_INTROS = 1


def _is_enabled_for(target: MediaItem, policy: SelectionPolicy) -> bool:
    if target.kind is ItemKind.MOVIE:
        return policy.enable_intros_for_movies
    if target.kind is ItemKind.EPISODE:
        return policy.enable_intros_for_episodes
    return False


class DefaultIntroProvider:
    """
    Picks trailers and custom intro clips to play before a movie or episode.

    Trailers are ranked by metadata similarity to the item about to play, with
    random jitter so repeated plays do not always show the same ones. When at
    least one custom intro is available it takes one of the two slots.
    """

    name = "Default"

    def __init__(
        self,
        library: LibraryService,
        entitlement: EntitlementService,
        channel: TrailerChannel | None = None,
        rating_policy: RatingPolicy | None = None,
        policy_loader: PolicyLoader = load_policy,
        rng_factory: Callable[[], random.Random] = random.Random,
    ):
        self.rating_policy = rating_policy or RatingPolicy()
        self.policy_loader = policy_loader
        self.rng_factory = rng_factory
        self.collector = CandidateCollector(library, channel, entitlement)

    async def get_intros(
        self, target: MediaItem, user: UserContext
    ) -> List[IntroResult]:
        policy = self.policy_loader()

        if not _is_enabled_for(target, policy):
            logger.debug(
                "Intros disabled for %s (kind=%s)", target.id, target.kind.value
            )
            return []

        rating_level = self.rating_policy.level(target.official_rating)
        rng = self.rng_factory()

        candidates = await self.collector.collect(target, user, policy, rng)

        custom_intros: List[IntroResult] = []
        if policy.enable_custom_intro:
            custom_intros = await asyncio.to_thread(
                pick_custom_intros, policy.custom_intro_path, rng
            )

        trailer_limit = MAX_INTROS
        if custom_intros:
            trailer_limit -= MAX_CUSTOM_INTROS

        # Played lookups can query the database; keep them off the event loop.
        eligible, ranked = await asyncio.to_thread(
            self._filter_and_rank, candidates, policy, rating_level, rng
        )

        intros = [candidate.to_intro() for candidate in ranked[:trailer_limit]]
        intros.extend(custom_intros[:MAX_CUSTOM_INTROS])

        logger.debug(
            "Selected %d intros for %s from %d candidates (%d eligible, limit=%d)",
            len(intros),
            target.id,
            len(candidates),
            len(eligible),
            trailer_limit,
        )
        return intros

    def get_all_intro_files(self) -> List[str]:
        return list_custom_intro_files(self.policy_loader().custom_intro_path)

    def _filter_and_rank(
        self,
        candidates: List[CandidateIntro],
        policy: SelectionPolicy,
        rating_level: Optional[int],
        rng: random.Random,
    ) -> Tuple[List[CandidateIntro], List[CandidateIntro]]:
        eligible = [
            candidate
            for candidate in candidates
            if self._is_eligible(candidate, policy, rating_level)
        ]
        return eligible, self._rank(eligible, rng)

    def _is_eligible(
        self,
        candidate: CandidateIntro,
        policy: SelectionPolicy,
        rating_level: Optional[int],
    ) -> bool:
        if policy.enable_intros_parental_control and not self.rating_policy.allows(
            rating_level, candidate.item.official_rating
        ):
            return False
        if not policy.enable_intros_for_watched_content and candidate.is_played:
            return False
        return True

    @staticmethod
    def _rank(
        candidates: List[CandidateIntro], rng: random.Random
    ) -> List[CandidateIntro]:
        # Equal scores favour unplayed items; anything still tied is shuffled.
        tie_breakers = {id(candidate): rng.random() for candidate in candidates}
        return sorted(
            candidates,
            key=lambda candidate: (
                -candidate.score,
                candidate.is_played,
                tie_breakers[id(candidate)],
            ),
        )
