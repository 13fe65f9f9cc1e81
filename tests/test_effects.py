import logging

import pytest

from keytimer.effects import EffectDispatcher, EffectType, describe_duration, notification_text


@pytest.mark.parametrize(
    "seconds, expected",
    [(90, "1 min 30 sec"), (120, "2 min"), (45, "45 sec"), (0, "0 sec"), (3599, "59 min 59 sec")],
)
def test_describe_duration(seconds, expected):
    assert describe_duration(seconds) == expected


def test_notification_text():
    title, body = notification_text(180)
    assert title == "Timer finished"
    assert body == "Your 3 min timer has finished"


def test_dispatch_runs_selected_handler():
    calls = []
    d = EffectDispatcher(EffectType.NOTIFIER)
    d.register(EffectType.NOTIFIER, lambda s: calls.append(("notifier", s)))
    d.register(EffectType.POPUP, lambda s: calls.append(("popup", s)))

    d.dispatch(60)
    d.effect_type = EffectType.POPUP
    d(30)

    assert calls == [("notifier", 60), ("popup", 30)]


@pytest.mark.parametrize("effect", [EffectType.CARDS, EffectType.SNOW])
def test_animation_effects_fall_back_to_popup(effect, caplog):
    calls = []
    d = EffectDispatcher(effect)
    d.register(EffectType.POPUP, calls.append)

    with caplog.at_level(logging.INFO, logger="keytimer.effects"):
        d.dispatch(5)

    assert calls == [5]
    assert "using 'popup'" in caplog.text


def test_no_handler_logs_warning(caplog):
    d = EffectDispatcher(EffectType.SNOW)
    with caplog.at_level(logging.WARNING, logger="keytimer.effects"):
        d.dispatch(5)
    assert "no effect handler" in caplog.text


def test_handler_errors_are_absorbed(caplog):
    def boom(_seconds):
        raise RuntimeError("tray gone")

    d = EffectDispatcher(EffectType.POPUP)
    d.register(EffectType.POPUP, boom)

    with caplog.at_level(logging.ERROR, logger="keytimer.effects"):
        d.dispatch(10)

    assert "'popup' effect failed" in caplog.text
    assert "tray gone" in caplog.text


def test_accepts_plain_strings():
    d = EffectDispatcher("snow")
    assert d.effect_type is EffectType.SNOW
