from __future__ import annotations

import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

LoadingCallback = Callable[[bool, Optional[str]], None]


class LoadingObservers:
    """Loading-state broadcast owned by a PreferenceStore.

    Callbacks run in subscription order. A callback that raises is logged and
    skipped; the remaining subscribers are still notified.
    """

    def __init__(self) -> None:
        self._callbacks: List[LoadingCallback] = []

    def subscribe(self, callback: LoadingCallback) -> Callable[[], None]:
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                pass  # already unsubscribed

        return unsubscribe

    def notify(self, loading: bool, message: Optional[str] = None) -> None:
        for callback in list(self._callbacks):
            try:
                callback(loading, message)
            except Exception:
                logger.exception("loading observer failed")
