# src/blockinsight/explorer/listing.py
import logging
import re
from datetime import datetime, timezone
from typing import Callable, Optional

from .models import BlockList, PaginationCursor
from .summary import SummaryBuilder
from ..exceptions import InvalidInputError
from ..node.interfaces import NodeService
from ..utils.config import Config

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(timestamp: int) -> str:
    """Unix seconds to a yyyy-mm-dd UTC date string"""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime(Config.DATE_FORMAT)


def parse_date(date_str: str) -> datetime:
    if not DATE_PATTERN.fullmatch(date_str):
        raise InvalidInputError("Please use yyyy-mm-dd format")
    try:
        return datetime.strptime(date_str, Config.DATE_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError as e:
        raise InvalidInputError(f"Please use yyyy-mm-dd format: {e}") from e


class ListingPaginator:
    """Lists the blocks of one UTC day, newest first, a page at a time"""

    def __init__(
        self,
        node: NodeService,
        summaries: SummaryBuilder,
        default_limit: int = Config.BLOCK_LIMIT,
        clock: Callable[[], datetime] = utc_now
    ):
        self.node = node
        self.summaries = summaries
        self.default_limit = default_limit
        self.clock = clock

    async def list_blocks(
        self,
        block_date: Optional[str] = None,
        start_timestamp: Optional[int] = None,
        limit: Optional[int] = None
    ) -> BlockList:
        today_str = self.clock().strftime(Config.DATE_FORMAT)
        date_str = block_date or today_str
        day = parse_date(date_str)

        if limit is None:
            limit = self.default_limit
        if limit < 1:
            raise InvalidInputError(f"Limit must be positive, got {limit}")

        gte = int(day.timestamp())
        lte = start_timestamp or gte + Config.SECONDS_PER_DAY

        hashes = await self.node.get_block_hashes_by_timestamp(lte, gte)
        hashes = list(reversed(hashes))

        more = False
        if len(hashes) > limit:
            more = True
            hashes = hashes[:limit]

        # One tip read serves the cache admission of the whole page
        tip_height = await self.node.get_tip_height() if hashes else None

        # Sequential on purpose: the node is queried one block at a time
        blocks = []
        more_timestamp = lte
        for block_hash in hashes:
            summary = await self.summaries.build(block_hash, tip_height)
            more_timestamp = min(more_timestamp, summary.time)
            blocks.append(summary)

        blocks.sort(key=lambda summary: summary.height, reverse=True)
        logger.debug(f"Listed {len(blocks)} blocks for {date_str} (more={more})")

        pagination = PaginationCursor(
            next=format_timestamp(lte) if lte else None,
            prev=format_timestamp(gte - Config.SECONDS_PER_DAY),
            currentTs=lte - 1,
            current=date_str,
            isToday=date_str == today_str,
            more=more,
            moreTs=more_timestamp if more else None
        )
        return BlockList(blocks=blocks, length=len(blocks), pagination=pagination)
