"""Units of the skirmish board: stats, movement, combat and the roster."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional

CELL = 32
MAX_ENERGY = 10
HEAL_AMOUNT = 5
MEDIC_REACH = 1.5
SNIPE_DAMAGE = 5
SNIPE_COST = 3
SNIPE_REACH = 5.0
_HIT_MARGIN = 5


class Faction(Enum):
    ALLY = "ally"
    ENEMY = "enemy"


class Kind(Enum):
    COMMON = "common"
    MEDIC = "medic"
    SCOUT = "scout"
    SNIPER = "sniper"


_KIND_LABELS = {
    Kind.COMMON: "Infantry",
    Kind.MEDIC: "Medic",
    Kind.SNIPER: "Sniper",
}


class ActionRefused(Exception):
    """Raised when a unit cannot carry out the requested order."""


class AttackResult(Enum):
    MISSED = "missed"
    HIT = "hit"
    KILLED = "killed"


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def snap_to_grid(value) -> int:
    """Return the centre coordinate of the grid cell holding ``value``."""
    return _trunc_div(int(value), CELL) * CELL + CELL // 2


def grid_distance(x1, y1, x2, y2) -> float:
    """Euclidean distance in whole cells between two board points."""
    dx = _trunc_div(int(x2) - int(x1), CELL)
    dy = _trunc_div(int(y2) - int(y1), CELL)
    return math.sqrt(dx * dx + dy * dy)


@dataclass(eq=False)
class Character:
    """A unit on the board; ``x`` and ``y`` are its centre."""

    name: str
    kind: Kind
    faction: Faction
    life: int
    energy: int
    atk: int
    movement: int
    agility: int
    reach: float
    x: int
    y: int
    width: int = 33
    height: int = 33
    home_x: int = field(default=0, init=False)
    home_y: int = field(default=0, init=False)
    dead: bool = field(default=False, init=False)
    round_moved: bool = field(default=True, init=False)
    round_done: bool = field(default=True, init=False)
    roster: Optional[Roster] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.x = snap_to_grid(self.x)
        self.y = snap_to_grid(self.y)
        self.home_x = self.x
        self.home_y = self.y

    def kind_label(self) -> str:
        try:
            return _KIND_LABELS[self.kind]
        except KeyError:
            raise ValueError(f"no label for kind {self.kind.value}") from None

    def right(self) -> int:
        return self.x + self.width // 2

    def top(self) -> int:
        return self.y - self.height // 2

    def attack_range(self) -> int:
        return int(self.reach)

    def contains(self, x, y) -> bool:
        """Whether a point lies inside the unit's clickable core."""
        half_w = self.width // 2
        half_h = self.height // 2
        return (
            self.x - half_w + _HIT_MARGIN < x < self.x + half_w - _HIT_MARGIN
            and self.y - half_h + _HIT_MARGIN < y < self.y + half_h - _HIT_MARGIN
        )

    def path_to(self, x, y) -> list[tuple[int, int]]:
        """Pixel steps toward the cell holding (x, y): diagonal first, then straight."""
        tx, ty = snap_to_grid(x), snap_to_grid(y)
        cx, cy = self.x, self.y
        steps = []
        while (cx, cy) != (tx, ty):
            if cx != tx:
                cx += 1 if tx > cx else -1
            if cy != ty:
                cy += 1 if ty > cy else -1
            steps.append((cx, cy))
        return steps

    def move_to(self, x, y) -> list[tuple[int, int]]:
        """Walk to the cell holding (x, y), spending one energy; return the steps taken."""
        steps = self.path_to(x, y)
        self.x, self.y = snap_to_grid(x), snap_to_grid(y)
        if self.energy > 0:
            self.energy -= 1
        return steps

    def distance_to(self, other: Character) -> float:
        return grid_distance(self.x, self.y, other.x, other.y)

    def _die(self) -> None:
        self.dead = True
        if self.roster is not None:
            self.roster.remove(self)

    def attack(self, target: Character, rng=None) -> AttackResult:
        """Strike ``target``; the target dodges with a chance set by its agility."""
        rng = random if rng is None else rng
        if self.energy == 0:
            raise ActionRefused("not enough energy")
        if target is self:
            raise ActionRefused("cannot attack yourself")
        if target.faction == self.faction:
            raise ActionRefused("cannot attack an ally")
        if self.distance_to(target) > self.reach:
            raise ActionRefused("target out of range")
        missed = rng.randrange(100) <= target.agility - 1
        self.round_done = True
        self.energy -= 1
        if missed:
            return AttackResult.MISSED
        if self.atk >= target.life:
            target._die()
            return AttackResult.KILLED
        target.life -= self.atk
        return AttackResult.HIT

    def action(self, target: Character) -> str:
        """Perform the kind's special action on ``target`` and describe the outcome."""
        if self.kind is Kind.MEDIC:
            return self._heal(target)
        if self.kind is Kind.SNIPER:
            return self._snipe(target)
        raise ActionRefused("no special action")

    def _heal(self, target: Character) -> str:
        if self.energy < 1:
            raise ActionRefused("not enough energy")
        if self.distance_to(target) > MEDIC_REACH:
            raise ActionRefused("target out of range")
        if target.faction != self.faction:
            raise ActionRefused("cannot target an enemy")
        target.life += HEAL_AMOUNT
        self.energy -= 1
        self.round_done = True
        return "healed yourself" if target is self else "healed an ally"

    def _snipe(self, target: Character) -> str:
        if self.energy < SNIPE_COST:
            raise ActionRefused("not enough energy")
        if self.distance_to(target) > SNIPE_REACH:
            raise ActionRefused("target out of range")
        if target is self:
            raise ActionRefused("do not hurt yourself")
        if target.faction == self.faction:
            raise ActionRefused("cannot target an ally")
        if target.life > SNIPE_DAMAGE:
            target.life -= SNIPE_DAMAGE
        else:
            target._die()
        self.energy -= SNIPE_COST
        self.round_done = True
        return "wounded an enemy"


class Roster:
    """The living units on the board, in the order they were added."""

    def __init__(self, characters: Iterable[Character] = ()) -> None:
        self._members: list[Character] = []
        for character in characters:
            self.add(character)

    def __iter__(self) -> Iterator[Character]:
        return iter(list(self._members))

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, character: object) -> bool:
        return any(member is character for member in self._members)

    def add(self, character: Character) -> Character:
        self._members.append(character)
        character.roster = self
        return character

    def remove(self, character: Character) -> None:
        for index, member in enumerate(self._members):
            if member is character:
                del self._members[index]
                character.roster = None
                return

    def of(self, faction: Faction) -> list[Character]:
        return [c for c in self._members if c.faction == faction]

    def allies(self) -> list[Character]:
        return self.of(Faction.ALLY)

    def enemies(self) -> list[Character]:
        return self.of(Faction.ENEMY)

    def hovered(self, x, y) -> Optional[Character]:
        return next((c for c in self._members if c.contains(x, y)), None)

    def set_round(self, faction: Faction, finished: bool) -> None:
        """Mark a faction's round finished, or open a new one and restore energy.

        Enemy units always get a fresh round, whatever ``finished`` says.
        """
        for character in self.of(faction):
            if finished and faction is Faction.ALLY:
                character.round_moved = True
                character.round_done = True
            else:
                character.round_moved = False
                character.round_done = False
                if character.energy < MAX_ENERGY:
                    character.energy += 1

    def all_done(self, faction: Faction) -> bool:
        return all(c.round_done for c in self.of(faction))