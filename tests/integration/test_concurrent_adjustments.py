"""Concurrent quantity adjustments are serialized by the write transaction."""

import asyncio

from src.core.exceptions import InsufficientStockError


class TestConcurrentAdjustments:
    async def test_no_lost_updates(self, item_service, history_service, widget, user_actor):
        await asyncio.gather(
            *(item_service.adjust_quantity(widget.id, 1, "MANUAL_UPDATE", user_actor) for _ in range(12))
        )

        assert (await item_service.get(widget.id)).quantity == 22
        history = await history_service.list_by_item(widget.id)
        assert len(history) == 13
        assert sum(entry.change for entry in history) == 22

    async def test_oversell_race_never_goes_negative(
        self, item_service, history_service, widget, user_actor
    ):
        results = await asyncio.gather(
            *(item_service.adjust_quantity(widget.id, -1, "SOLD", user_actor) for _ in range(15)),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 5
        assert all(isinstance(f, InsufficientStockError) for f in failures)
        assert (await item_service.get(widget.id)).quantity == 0
        sold = [e for e in await history_service.list_by_item(widget.id) if e.change < 0]
        assert len(sold) == 10
