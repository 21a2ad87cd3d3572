from typing import Any, Dict, List, Optional

from storefront.services.http_client import HttpError
from storefront.services.rates.base import RateTableProvider


class ScriptedFetcher:
    """Async fetcher returning queued payloads; exceptions in the queue are raised.

    The last item repeats once the queue is down to one entry.
    """

    def __init__(self, *responses: Any):
        self._responses: List[Any] = list(responses)
        self.calls = 0

    async def __call__(self) -> Dict[str, Any]:
        self.calls += 1
        item = self._responses[0] if len(self._responses) == 1 else self._responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


class StubRateProvider(RateTableProvider):
    def __init__(self, table: Optional[Dict[str, float]] = None, fail: bool = False):
        self.table = table or {}
        self.fail = fail
        self.calls = 0

    async def fetch_table(self) -> Dict[str, float]:
        self.calls += 1
        if self.fail:
            raise HttpError("upstream down")
        return dict(self.table)
