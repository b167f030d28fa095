from datetime import datetime

from backend.core.ingestion.loading import LoadingStateStore, LoadingState


# ---------------------------------------------------------------------------
# Defaults and merging
# ---------------------------------------------------------------------------

def test_unseen_source_is_idle():
    store = LoadingStateStore()
    state = store.get_state("ac-vote-share")

    assert state == LoadingState()
    assert state.status == "idle"
    assert store.get_all_states() == {}


def test_set_state_merges_partial_update():
    store = LoadingStateStore()
    store.set_state("src", is_loading=True)
    state = store.set_state("src", error="boom")

    assert state.is_loading is True
    assert state.error == "boom"
    assert store.get_state("src") == state


def test_status_names():
    assert LoadingState(is_loading=True).status == "loading"
    assert LoadingState(is_loaded=True).status == "loaded"
    assert LoadingState(error="x").status == "error"


def test_to_dict_serializes_timestamp():
    now = datetime(2025, 1, 2, 3, 4, 5)
    data = LoadingState(is_loaded=True, last_updated=now).to_dict()

    assert data["status"] == "loaded"
    assert data["last_updated"] == "2025-01-02T03:04:05"


# ---------------------------------------------------------------------------
# Subscriptions
# ---------------------------------------------------------------------------

def test_listeners_notified_in_subscription_order():
    store = LoadingStateStore()
    calls = []
    store.subscribe("src", lambda state: calls.append(("first", state.is_loading)))
    store.subscribe("src", lambda state: calls.append(("second", state.is_loading)))
    store.subscribe("other", lambda state: calls.append(("other", state.is_loading)))

    store.set_state("src", is_loading=True)

    assert calls == [("first", True), ("second", True)]


def test_unsubscribe_is_idempotent():
    store = LoadingStateStore()
    calls = []
    unsubscribe = store.subscribe("src", calls.append)

    unsubscribe()
    unsubscribe()
    unsubscribe.unsubscribe()
    store.set_state("src", is_loading=True)

    assert calls == []


def test_listener_may_unsubscribe_while_notified():
    store = LoadingStateStore()
    calls = []

    def once(state):
        calls.append("once")
        handle()

    handle = store.subscribe("src", once)
    store.subscribe("src", lambda state: calls.append("always"))

    store.set_state("src", is_loading=True)
    store.set_state("src", is_loading=False)

    assert calls == ["once", "always", "always"]


def test_failing_listener_does_not_block_others():
    store = LoadingStateStore()
    calls = []

    def broken(state):
        raise RuntimeError("listener bug")

    store.subscribe("src", broken)
    store.subscribe("src", calls.append)

    store.set_state("src", is_loaded=True)

    assert len(calls) == 1


def test_reset_and_clear():
    store = LoadingStateStore()
    store.set_state("a", is_loaded=True, error="x")
    store.set_state("b", is_loaded=True)

    assert store.reset("a") == LoadingState()

    store.clear()
    assert store.get_all_states() == {}
