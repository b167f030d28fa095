# loading/state_store.py
"""
Per-source loading state with synchronous publish/subscribe.
"""

import logging
from dataclasses import replace
from typing import Callable, Dict, List

from .models import LoadingState, IDLE_STATE

logger = logging.getLogger(__name__)

Listener = Callable[[LoadingState], None]


class Subscription:
    """Handle returned by ``subscribe``; calling it unsubscribes (idempotent)."""

    def __init__(self, store: "LoadingStateStore", source: str, listener: Listener):
        self._store = store
        self.source = source
        self.listener = listener
        self.active = True

    def __call__(self) -> None:
        self.unsubscribe()

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self._store._remove(self)


class LoadingStateStore:
    """Holds one LoadingState per source and notifies subscribers on change."""

    def __init__(self):
        self._states: Dict[str, LoadingState] = {}
        self._subscriptions: Dict[str, List[Subscription]] = {}

    def get_state(self, source: str) -> LoadingState:
        """Current state, idle if the source was never seen."""
        return self._states.get(source, IDLE_STATE)

    def get_all_states(self) -> Dict[str, LoadingState]:
        return dict(self._states)

    def subscribe(self, source: str, listener: Listener) -> Subscription:
        """
        Register a listener for state changes of ``source``.

        Listeners are called synchronously, in subscription order, with the
        merged state.

        Returns:
            Subscription handle; call it to unsubscribe
        """
        subscription = Subscription(self, source, listener)
        self._subscriptions.setdefault(source, []).append(subscription)
        return subscription

    def set_state(self, source: str, **changes) -> LoadingState:
        """Merge ``changes`` into the state of ``source`` and notify."""
        state = replace(self.get_state(source), **changes)
        self._states[source] = state
        self._notify(source, state)
        return state

    def reset(self, source: str) -> LoadingState:
        """Back to idle, notifying subscribers."""
        return self.set_state(
            source, is_loading=False, is_loaded=False, error=None, last_updated=None
        )

    def clear(self) -> None:
        """Forget every state. Subscriptions are kept."""
        self._states.clear()

    def _notify(self, source: str, state: LoadingState) -> None:
        # Copy so listeners may unsubscribe while being notified
        for subscription in list(self._subscriptions.get(source, [])):
            if not subscription.active:
                continue
            try:
                subscription.listener(state)
            except Exception:
                logger.exception(f"Loading state listener failed for {source}")

    def _remove(self, subscription: Subscription) -> None:
        subscriptions = self._subscriptions.get(subscription.source)
        if not subscriptions:
            return
        if subscription in subscriptions:
            subscriptions.remove(subscription)
        if not subscriptions:
            del self._subscriptions[subscription.source]
