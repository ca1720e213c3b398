from safr.services import EventEmitter


def test_emit_calls_listeners_in_order():
    emitter = EventEmitter("test")
    calls = []
    emitter.subscribe(lambda payload: calls.append(("a", payload)))
    emitter.subscribe(lambda payload: calls.append(("b", payload)))

    emitter.emit(1)
    emitter.emit(2)

    assert calls == [("a", 1), ("b", 1), ("a", 2), ("b", 2)]


def test_unsubscribe():
    emitter = EventEmitter()
    calls = []
    unsubscribe = emitter.subscribe(calls.append)
    assert len(emitter) == 1

    unsubscribe()
    emitter.emit("ignored")

    assert calls == []
    assert len(emitter) == 0


def test_listener_can_unsubscribe_while_emitting():
    emitter = EventEmitter()
    calls = []
    unsubscribe_first = None

    def first(payload):
        calls.append("first")
        unsubscribe_first()

    unsubscribe_first = emitter.subscribe(first)
    emitter.subscribe(lambda payload: calls.append("second"))

    emitter.emit(None)
    emitter.emit(None)

    assert calls == ["first", "second", "second"]


def test_failing_listener_does_not_stop_the_rest():
    emitter = EventEmitter()
    calls = []

    def broken(payload):
        raise RuntimeError("boom")

    emitter.subscribe(broken)
    emitter.subscribe(calls.append)

    emitter.emit("payload")

    assert calls == ["payload"]
