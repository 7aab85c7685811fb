from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from functools import cached_property
from typing import Callable, List, Sequence

from cinema.core.interfaces import EntitlementService, LibraryService, TrailerChannel
from cinema.core.models import (
    CandidateSource,
    IntroResult,
    ItemKind,
    MediaItem,
    SelectionPolicy,
    UserContext,
)
from cinema.core.similarity import similarity_score

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class CandidateIntro:
    """A prospective intro for one selection call.

    ``score`` and ``is_played`` are evaluated on first access and cached on the
    instance; candidates never outlive the call that built them.
    """

    item: MediaItem
    source: CandidateSource
    user: UserContext
    watching_item: MediaItem
    rng: random.Random
    played_lookup: Callable[[MediaItem, UserContext], bool]

    @cached_property
    def score(self) -> int:
        return similarity_score(self.watching_item, self.item, self.rng)

    @cached_property
    def is_played(self) -> bool:
        return bool(self.played_lookup(self.item, self.user))

    def to_intro(self) -> IntroResult:
        item_id = self.item.id
        if self.source is CandidateSource.ITEM_WITH_TRAILER and self.item.trailer_ids:
            item_id = self.item.trailer_ids[0]
        return IntroResult(item_id=item_id)


class CandidateCollector:
    def __init__(
        self,
        library: LibraryService,
        channel: TrailerChannel | None,
        entitlement: EntitlementService,
    ):
        self.library = library
        self.channel = channel
        self.entitlement = entitlement

    async def collect(
        self,
        target: MediaItem,
        user: UserContext,
        policy: SelectionPolicy,
        rng: random.Random,
    ) -> List[CandidateIntro]:
        library_items = list(
            await asyncio.to_thread(self.library.recursive_items, user)
        )
        candidates: List[CandidateIntro] = []

        def _wrap(items: Sequence[MediaItem], source: CandidateSource) -> None:
            candidates.extend(
                CandidateIntro(
                    item=item,
                    source=source,
                    user=user,
                    watching_item=target,
                    rng=rng,
                    played_lookup=self.library.is_played,
                )
                for item in items
            )

        if policy.enable_intros_from_library_trailers:
            with_trailers = [
                item
                for item in library_items
                if item.has_trailers and item.kind is ItemKind.MOVIE
            ]
            _wrap(with_trailers, CandidateSource.ITEM_WITH_TRAILER)
            logger.debug("Library items with trailers: %d", len(with_trailers))

        if policy.enable_intros_from_remote_trailers and self.entitlement.is_entitled(
            user
        ):
            channel_trailers: Sequence[MediaItem] = []
            if self.channel is not None:
                channel_trailers = await self.channel.query_trailers(user)
            _wrap(channel_trailers, CandidateSource.CHANNEL_TRAILER)

            library_trailers = [
                item for item in library_items if item.kind is ItemKind.TRAILER
            ]
            _wrap(library_trailers, CandidateSource.LIBRARY_TRAILER)
            logger.debug(
                "Remote trailers: %d | library trailers: %d",
                len(channel_trailers),
                len(library_trailers),
            )

        return candidates
