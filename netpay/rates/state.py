from __future__ import annotations

import itertools
import logging
from datetime import datetime, timezone
from typing import Protocol

from netpay.rates.defaults import DEFAULT_GHANA_TAX_RATES
from netpay.rates.models import RateTable

logger = logging.getLogger("netpay.rates")


class RateTableProvider(Protocol):
    async def fetch_current(self) -> RateTable:
        ...


class RateTableHolder:
    """The rate table the presentation layer is currently showing.

    Each refresh takes a ticket from a monotonically increasing counter; a
    completion is applied only if its ticket is still the newest, so an older
    fetch that resolves late cannot overwrite a newer one.
    """

    def __init__(self, initial: RateTable = DEFAULT_GHANA_TAX_RATES):
        self.current = initial
        self.refreshed_at: datetime | None = None
        self._tickets = itertools.count(1)
        self._latest = 0
        self._in_flight: set[int] = set()

    @property
    def loading(self) -> bool:
        return bool(self._in_flight)

    def begin(self) -> int:
        ticket = next(self._tickets)
        self._latest = ticket
        self._in_flight.add(ticket)
        return ticket

    def apply(self, ticket: int, table: RateTable) -> bool:
        self._in_flight.discard(ticket)
        if ticket != self._latest:
            logger.info("Discarding stale rate table from refresh #%s (latest #%s)", ticket, self._latest)
            return False
        self.current = table
        self.refreshed_at = datetime.now(timezone.utc)
        return True

    async def refresh(self, provider: RateTableProvider) -> RateTable:
        ticket = self.begin()
        try:
            table = await provider.fetch_current()
        finally:
            self._in_flight.discard(ticket)
        self.apply(ticket, table)
        return self.current


__all__ = ["RateTableHolder", "RateTableProvider"]
