import logging
from unittest.mock import MagicMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from marketplace.async_tracking import ViewCountTracker


@pytest.fixture
def product_id(seeded_context):
    return seeded_context.products.insert_one({"title": "Bike", "viewCount": 3}).inserted_id


@pytest.mark.unit
class TestViewCountTracker:
    def test_increments_view_count(self, seeded_context, product_id):
        tracker = ViewCountTracker(seeded_context)

        futures = [tracker.track_view(product_id) for _ in range(4)]
        for future in futures:
            future.result(timeout=5)
        tracker.shutdown()

        assert seeded_context.products.find_one({"_id": product_id})["viewCount"] == 7

    def test_failure_is_logged_not_raised(self):
        context = MagicMock()
        context.products.update_one.side_effect = ServerSelectionTimeoutError("no server")
        logger = MagicMock(spec=logging.Logger)
        tracker = ViewCountTracker(context, logger=logger)

        future = tracker.track_view("product-1")
        assert future.result(timeout=5) is None
        tracker.shutdown()

        assert "Failed to increment view count" in logger.error.call_args[0][0]

    def test_closed_pool_returns_none(self, seeded_context, product_id):
        tracker = ViewCountTracker(seeded_context, logger=MagicMock(spec=logging.Logger))
        tracker.shutdown()

        assert tracker.track_view(product_id) is None
        assert seeded_context.products.find_one({"_id": product_id})["viewCount"] == 3
