import logging

from resourcekit.common.disposable import Disposable, DisposableCollection
from resourcekit.common.event import Emitter


def test_fire_reaches_every_listener():
    emitter: Emitter[int] = Emitter()
    first, second = [], []
    emitter.event(first.append)
    emitter.event.subscribe(second.append)
    emitter.fire(1)
    assert first == [1]
    assert second == [1]


def test_disposed_subscription_stops_delivery():
    emitter: Emitter[None] = Emitter()
    received = []
    handle = emitter.event(received.append)
    handle.dispose()
    handle.dispose()
    emitter.fire(None)
    assert received == []
    assert emitter.listener_count == 0


def test_failing_listener_is_logged_and_others_still_run(caplog):
    emitter: Emitter[str] = Emitter()
    received = []

    def broken(_):
        raise RuntimeError("listener bug")

    emitter.event(broken)
    emitter.event(received.append)
    with caplog.at_level(logging.ERROR, logger="resourcekit.common.event"):
        emitter.fire("x")
    assert received == ["x"]
    assert any("listener" in r.getMessage() for r in caplog.records)


def test_disposed_emitter_ignores_new_listeners():
    emitter: Emitter[None] = Emitter()
    emitter.dispose()
    received = []
    emitter.event(received.append)
    emitter.fire(None)
    assert received == []


def test_disposable_collection_disposes_in_reverse_order():
    order = []
    collection = DisposableCollection(Disposable(lambda: order.append(1)))
    collection.push(Disposable(lambda: order.append(2)))
    assert len(collection) == 2
    collection.dispose()
    collection.dispose()
    assert order == [2, 1]


def test_push_after_dispose_disposes_immediately():
    collection = DisposableCollection()
    collection.dispose()
    item = Disposable()
    collection.push(item)
    assert item.disposed


def test_removing_from_collection_does_not_dispose():
    collection = DisposableCollection()
    item = Disposable()
    remove = collection.push(item)
    remove.dispose()
    collection.dispose()
    assert not item.disposed
