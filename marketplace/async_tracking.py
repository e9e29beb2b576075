"""
Asynchronous view tracking for product reads.

Reading a product schedules a ``viewCount`` increment on a small thread pool
so the API can respond without waiting for the write. The increment is
fire-and-forget: its failure is logged inside the task and never reaches
the request that triggered it.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from bson import ObjectId

from infrastructure.database import MongoDbContext


class ViewCountTracker:
    """
    Background ``$inc`` of product view counters.

    Args:
        context: Document store access
        executor: Pool running the increments (a 2-worker pool by default)
        logger: Logger for task failures
    """

    def __init__(
        self,
        context: MongoDbContext,
        executor: Optional[ThreadPoolExecutor] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.context = context
        self.executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="view_tracker")
        self.logger = logger or logging.getLogger(f"{__name__}.ViewCountTracker")

    def track_view(self, product_id: ObjectId) -> Optional[Future]:
        """Schedule a view-count increment; returns the future, or None if the pool is closed."""
        try:
            return self.executor.submit(self._increment, product_id)
        except RuntimeError as e:
            self.logger.warning(f"View tracking unavailable for product {product_id}: {e}")
            return None

    def _increment(self, product_id: ObjectId) -> None:
        try:
            self.context.products.update_one({"_id": product_id}, {"$inc": {"viewCount": 1}})
            self.logger.debug(f"View count incremented for product {product_id}")
        except Exception as e:
            self.logger.error(f"Failed to increment view count for product {product_id}: {e}", exc_info=True)

    def shutdown(self, wait: bool = True) -> None:
        self.executor.shutdown(wait=wait)
        self.logger.info("ViewCountTracker thread pool shut down")
