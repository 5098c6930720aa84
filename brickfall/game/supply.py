"""
Brick supplies: where the falling bricks come from.

A supply answers two questions:
  - current():   which brick to spawn now.
  - peek_next(): which brick to show in the preview.

The two calls draw independently of each other, so the preview is not
guaranteed to be the brick that spawns next.
"""

from __future__ import annotations

import enum
import random

from brickfall.game.pieces import ALL_BRICKS, RESTRICTED_BRICKS, Brick


class SupplyKind(enum.Enum):
    """Closed set of supply variants."""
    UNRESTRICTED = "unrestricted"
    RESTRICTED = "restricted"


_BRICKS_BY_KIND: dict[SupplyKind, tuple[Brick, ...]] = {
    SupplyKind.UNRESTRICTED: ALL_BRICKS,
    SupplyKind.RESTRICTED: RESTRICTED_BRICKS,
}


class GameMode(enum.Enum):
    """Game modes offered by the front end.

    The engine only cares which supply a mode selects; CLASSIC and
    CHALLENGE differ in speed policy, which lives outside the engine.
    """
    CLASSIC = "classic"
    CHALLENGE = "challenge"
    RELAX = "relax"


_SUPPLY_BY_MODE: dict[GameMode, SupplyKind] = {
    GameMode.CLASSIC: SupplyKind.UNRESTRICTED,
    GameMode.CHALLENGE: SupplyKind.UNRESTRICTED,
    GameMode.RELAX: SupplyKind.RESTRICTED,
}


class BrickSupply:
    """Uniform random brick source over a fixed set of kinds.

    Attributes:
        kind: Which variant this supply is.
        bricks: The kinds this supply draws from.
    """

    def __init__(
        self,
        kind: SupplyKind = SupplyKind.UNRESTRICTED,
        rng: random.Random | int | None = None,
    ) -> None:
        """Create a supply.

        Args:
            kind: Supply variant.
            rng: A random.Random to draw from, or a seed for a new one.
        """
        self.kind = SupplyKind(kind)
        self.bricks = _BRICKS_BY_KIND[self.kind]
        if isinstance(rng, random.Random):
            self._rng = rng
        else:
            self._rng = random.Random(rng)

    @classmethod
    def unrestricted(cls, rng: random.Random | int | None = None) -> BrickSupply:
        return cls(SupplyKind.UNRESTRICTED, rng)

    @classmethod
    def restricted(cls, rng: random.Random | int | None = None) -> BrickSupply:
        return cls(SupplyKind.RESTRICTED, rng)

    def current(self) -> Brick:
        """Draw the brick to spawn now."""
        return self._rng.choice(self.bricks)

    def peek_next(self) -> Brick:
        """Draw a brick for the preview. Does not affect current()."""
        return self._rng.choice(self.bricks)

    def __repr__(self) -> str:
        return f"BrickSupply(kind={self.kind.value})"


def parse_mode(mode: GameMode | str) -> GameMode:
    """Convert a mode name such as 'relax' into a GameMode.

    Raises:
        ValueError: If the name is not a known mode.
    """
    if isinstance(mode, GameMode):
        return mode
    try:
        return GameMode(str(mode).lower())
    except ValueError:
        choices = ", ".join(m.value for m in GameMode)
        raise ValueError(f"Unknown game mode: {mode!r} (expected one of: {choices})") from None


def supply_for_mode(
    mode: GameMode | str,
    rng: random.Random | int | None = None,
) -> BrickSupply:
    """Build the supply a new game in the given mode should use."""
    return BrickSupply(_SUPPLY_BY_MODE[parse_mode(mode)], rng)
