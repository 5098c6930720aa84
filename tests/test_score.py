import pytest

from brickfall.game.score import Score


def test_add_and_reset():
    score = Score()
    assert score.value == 0
    score.add(50)
    score.add(200)
    assert score.value == 250
    score.reset()
    assert score.value == 0


def test_listeners_fire_once_per_change_in_order():
    score = Score()
    calls = []
    score.subscribe(lambda v: calls.append(("a", v)))
    score.subscribe(lambda v: calls.append(("b", v)))
    score.add(50)
    score.reset()
    assert calls == [("a", 50), ("b", 50), ("a", 0), ("b", 0)]


def test_zero_add_still_notifies():
    score = Score()
    seen = []
    score.subscribe(seen.append)
    score.add(0)
    assert seen == [0]


def test_unsubscribe():
    score = Score()
    seen = []
    unsubscribe = score.subscribe(seen.append)
    score.add(10)
    unsubscribe()
    unsubscribe()
    score.add(10)
    assert seen == [10]
    assert score.value == 20


def test_negative_amount_rejected():
    score = Score()
    with pytest.raises(ValueError):
        score.add(-1)
    assert score.value == 0
