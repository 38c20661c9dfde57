from __future__ import annotations

from taskstream.watch import WatchEvent, InMemoryWatchSource, owner_equals, assignee_contains


def _recorder() -> tuple[list[WatchEvent], object]:
    events: list[WatchEvent] = []
    return events, events.append


def test_predicates_match_owner_and_assignee() -> None:
    doc = {"ownerUid": "alice", "assigneeUids": ["bob"]}
    assert owner_equals("alice").matches(doc)
    assert not owner_equals("bob").matches(doc)
    assert assignee_contains("bob").matches(doc)
    assert not assignee_contains("alice").matches(doc)
    assert not assignee_contains("bob").matches({"ownerUid": "alice", "assigneeUids": "bob"})
    assert not owner_equals("alice").matches(None)


def test_write_notifies_subscriptions_matching_before_or_after() -> None:
    source = InMemoryWatchSource()
    bob_events, bob_cb = _recorder()
    source.subscribe(assignee_contains("bob"), bob_cb)

    source.put("t1", {"ownerUid": "alice", "assigneeUids": ["bob"]})
    # Unassigning bob is still a change in bob's view.
    source.put("t1", {"ownerUid": "alice", "assigneeUids": []})
    source.put("t1", {"ownerUid": "alice", "assigneeUids": ["carol"]})

    assert len(bob_events) == 2
    assert all(event.error is None for event in bob_events)


def test_delete_notifies_and_missing_delete_is_silent() -> None:
    source = InMemoryWatchSource()
    events, cb = _recorder()
    source.subscribe(owner_equals("alice"), cb)

    source.put("t1", {"ownerUid": "alice", "assigneeUids": []})
    assert source.delete("t1") == 1
    assert source.delete("t1") == 0
    assert source.get("t1") is None
    assert len(events) == 2


def test_fail_delivers_error_events() -> None:
    source = InMemoryWatchSource()
    events, cb = _recorder()
    source.subscribe(owner_equals("alice"), cb)

    boom = RuntimeError("boom")
    assert source.fail(owner_equals("alice"), boom) == 1
    assert events[0].error is boom
    assert events[0].predicate == owner_equals("alice")


def test_cancel_is_idempotent() -> None:
    source = InMemoryWatchSource()
    events, cb = _recorder()
    cancel = source.subscribe(owner_equals("alice"), cb)
    assert source.subscription_count == 1

    cancel()
    cancel()
    assert source.subscription_count == 0
    assert source.fire(owner_equals("alice")) == 0
    assert events == []


def test_callback_cancelling_another_subscription_mid_delivery() -> None:
    source = InMemoryWatchSource()
    seen: list[str] = []
    cancels: dict[str, object] = {}

    def first(_event: WatchEvent) -> None:
        seen.append("first")
        cancels["second"]()

    cancels["first"] = source.subscribe(owner_equals("alice"), first)
    cancels["second"] = source.subscribe(owner_equals("alice"), lambda _e: seen.append("second"))

    assert source.fire(owner_equals("alice")) == 1
    assert seen == ["first"]


def test_failing_callback_does_not_block_others() -> None:
    source = InMemoryWatchSource()
    events, cb = _recorder()

    def broken(_event: WatchEvent) -> None:
        raise RuntimeError("handler bug")

    source.subscribe(owner_equals("alice"), broken)
    source.subscribe(owner_equals("alice"), cb)
    assert source.fire(owner_equals("alice")) == 2
    assert len(events) == 1
