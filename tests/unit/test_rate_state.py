import asyncio

import pytest

from netpay.rates import DEFAULT_GHANA_TAX_RATES, RateTable, RateTableHolder

OLDER = RateTable(mandatory_rate=0.05, brackets=[{"limit": None, "rate": 0.1}], period_label="older", provenance="test")
NEWER = RateTable(mandatory_rate=0.06, brackets=[{"limit": None, "rate": 0.2}], period_label="newer", provenance="test")


class _GatedProvider:
    def __init__(self, table: RateTable):
        self.table = table
        self.release = asyncio.Event()

    async def fetch_current(self) -> RateTable:
        await self.release.wait()
        return self.table


def test_holder_starts_with_default():
    holder = RateTableHolder()
    assert holder.current == DEFAULT_GHANA_TAX_RATES
    assert holder.loading is False
    assert holder.refreshed_at is None


def test_stale_ticket_is_discarded():
    holder = RateTableHolder()
    first = holder.begin()
    second = holder.begin()
    assert holder.loading is True

    assert holder.apply(second, NEWER) is True
    assert holder.apply(first, OLDER) is False
    assert holder.current == NEWER
    assert holder.loading is False


@pytest.mark.asyncio
async def test_late_older_refresh_does_not_win():
    holder = RateTableHolder()
    slow = _GatedProvider(OLDER)
    fast = _GatedProvider(NEWER)

    first = asyncio.create_task(holder.refresh(slow))
    second = asyncio.create_task(holder.refresh(fast))
    await asyncio.sleep(0)
    assert holder.loading is True

    fast.release.set()
    await second
    slow.release.set()
    await first

    assert holder.current == NEWER
    assert holder.loading is False
    assert holder.refreshed_at is not None
