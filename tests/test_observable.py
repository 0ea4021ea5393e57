from smzsync.observable import Observable


def test_publish_reaches_subscribers_in_order():
    calls = []
    obs = Observable()
    obs.subscribe(lambda o: calls.append(("first", o)))
    obs.subscribe(lambda o: calls.append(("second", o)))
    message = "got Hookshot from remote"
    obs.publish(message)
    assert calls == [("first", message), ("second", message)]


def test_unsubscribe_stops_delivery():
    received = []
    kept = []
    obs = Observable()

    def observer(o):
        received.append(o)

    obs.subscribe(observer)
    obs.subscribe(kept.append)
    obs.unsubscribe(observer)
    obs.publish("event")
    assert received == []
    assert kept == ["event"]


def test_unsubscribe_unknown_observer_keeps_others():
    kept = []
    obs = Observable()
    obs.subscribe(kept.append)
    obs.unsubscribe(lambda o: None)
    obs.publish(1)
    assert kept == [1]


def test_publish_without_subscribers_delivers_nothing():
    seen = []
    obs = Observable()
    obs.publish("nobody")
    obs.subscribe(seen.append)
    assert seen == []


def test_duplicate_subscription_receives_twice_until_unsubscribed():
    got = []
    obs = Observable()
    obs.subscribe(got.append)
    obs.subscribe(got.append)
    obs.publish("x")
    assert got == ["x", "x"]
    obs.unsubscribe(got.append)
    obs.publish("y")
    assert got == ["x", "x"]