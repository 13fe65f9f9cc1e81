from keytimer.ticker import QtTickSource


def test_start_is_idempotent(qapp):
    calls = []
    source = QtTickSource(interval_ms=1000)
    source.start(lambda: calls.append(1))
    source.start(lambda: calls.append(2))
    assert source.is_active

    source._timer.timeout.emit()
    assert calls == [2]

    source.stop()
    assert not source.is_active


def test_stop_drops_callback(qapp):
    calls = []
    source = QtTickSource()
    source.start(lambda: calls.append(1))
    source.stop()
    source._timer.timeout.emit()
    assert calls == []
