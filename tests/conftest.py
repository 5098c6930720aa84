"""Shared fixtures for the engine tests."""

from __future__ import annotations

import itertools

import pytest

from brickfall.game.board import Board, BoardConfig
from brickfall.game.pieces import Brick


class ScriptedSupply:
    """Deals bricks from a fixed cycle; the preview is always `preview`."""

    def __init__(self, bricks: list[Brick], preview: Brick = Brick.O) -> None:
        self._bricks = itertools.cycle(bricks)
        self.preview = preview
        self.dealt: list[Brick] = []

    def current(self) -> Brick:
        brick = next(self._bricks)
        self.dealt.append(brick)
        return brick

    def peek_next(self) -> Brick:
        return self.preview


@pytest.fixture
def make_board():
    """Build a board dealing a scripted brick sequence and start a game."""

    def _make(bricks: list[Brick], **config) -> Board:
        board = Board(BoardConfig(**config), ScriptedSupply(bricks))
        board.new_game()
        return board

    return _make
