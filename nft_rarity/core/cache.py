"""
Rarity Cache
============
Holds the last published RaritySnapshot and guards refreshes so only one
runs at a time. Readers always see a complete snapshot: a refresh builds a
new one and swaps the reference.
"""
import asyncio
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional

from nft_rarity.core.logger import get_logger, log_event
from nft_rarity.engines.rarity import aggregate_trait_frequencies, compute_rarity_for_collection
from nft_rarity.ingestion.models import RaritySnapshot, Token

logger = get_logger("core.cache")

TokenLoader = Callable[[], Awaitable[List[Token]]]

STATUS_UPDATED = "updated"
STATUS_IN_PROGRESS = "in_progress"


class RefreshError(Exception):
    """A refresh failed; the previously published snapshot is still served."""


@dataclass(frozen=True)
class RefreshOutcome:
    status: str
    last_updated: Optional[str] = None
    tokens_processed: int = 0

    def to_dict(self):
        return asdict(self)


class RarityCache:
    def __init__(self):
        self._snapshot: Optional[RaritySnapshot] = None
        self._lock = asyncio.Lock()

    @property
    def snapshot(self) -> Optional[RaritySnapshot]:
        return self._snapshot

    @property
    def last_updated(self) -> Optional[str]:
        return self._snapshot.calculated_at if self._snapshot else None

    @property
    def is_updating(self) -> bool:
        return self._lock.locked()

    def publish(self, snapshot: RaritySnapshot) -> None:
        self._snapshot = snapshot

    async def refresh(self, loader: TokenLoader) -> RefreshOutcome:
        """
        Fetch the collection with `loader`, score it and publish the result.
        Returns `in_progress` without doing anything if another refresh holds
        the guard.
        """
        if self._lock.locked():
            return RefreshOutcome(status=STATUS_IN_PROGRESS, last_updated=self.last_updated)

        async with self._lock:
            started_at = datetime.now(timezone.utc).isoformat()
            log_event(logger, "rarity_refresh_started", {"started_at": started_at})
            try:
                tokens = await loader()
                trait_counts = aggregate_trait_frequencies(tokens)
                scored = compute_rarity_for_collection(tokens, trait_counts)
            except Exception as e:
                log_event(logger, "rarity_refresh_failed", {
                    "error": str(e),
                    "last_updated": self.last_updated,
                })
                raise RefreshError(str(e)) from e

            self.publish(RaritySnapshot.build(scored, trait_counts, started_at))
            log_event(logger, "rarity_refresh_completed", {
                "tokens_processed": len(scored),
                "trait_types": sorted(trait_counts),
            })
            return RefreshOutcome(
                status=STATUS_UPDATED,
                last_updated=started_at,
                tokens_processed=len(scored),
            )


# Process-wide default; routers receive it through get_rarity_cache
rarity_cache = RarityCache()


def get_rarity_cache() -> RarityCache:
    return rarity_cache
