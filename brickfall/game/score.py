"""Score ledger with change notifications."""

from __future__ import annotations

from typing import Callable

ScoreListener = Callable[[int], None]


class Score:
    """Non-negative score counter.

    Listeners registered with subscribe() are called with the new value
    exactly once per add() or reset(), in the order they subscribed.
    """

    def __init__(self) -> None:
        self._value: int = 0
        self._listeners: list[ScoreListener] = []

    @property
    def value(self) -> int:
        return self._value

    def add(self, amount: int) -> None:
        """Increase the score.

        Raises:
            ValueError: If amount is negative.
        """
        if amount < 0:
            raise ValueError(f"Score amount must be non-negative, got {amount}")
        self._value += int(amount)
        self._notify()

    def reset(self) -> None:
        self._value = 0
        self._notify()

    def subscribe(self, listener: ScoreListener) -> Callable[[], None]:
        """Register a listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._value)

    def __int__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"Score({self._value})"
