from dodge.controls import InputSource, InputEvent, ACTION_CONFIRM
from dodge.entities import LEFT


def test_events_fan_out_to_subscribers():
    source = InputSource()
    a, b = [], []
    source.subscribe(a.append)
    source.subscribe(b.append)
    source.press(LEFT)
    source.trigger(ACTION_CONFIRM)
    assert a == b == [InputEvent("direction", LEFT, True), InputEvent("action", ACTION_CONFIRM)]


def test_unsubscribe_is_idempotent_and_final():
    source = InputSource()
    seen = []
    sub = source.subscribe(seen.append)
    assert sub.active
    sub.unsubscribe()
    sub.unsubscribe()
    assert not sub.active
    assert source.subscriber_count == 0
    source.release(LEFT)
    assert seen == []


def test_handler_may_unsubscribe_during_dispatch():
    source = InputSource()
    seen = []
    subs = []

    def once(event):
        seen.append(event)
        subs[0].unsubscribe()

    subs.append(source.subscribe(once))
    source.trigger(ACTION_CONFIRM)
    source.trigger(ACTION_CONFIRM)
    assert len(seen) == 1
