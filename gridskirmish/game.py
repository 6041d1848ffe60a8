"""Turn flow of a skirmish: unit selection, orders, turn changes and the enemy AI."""

from __future__ import annotations

import random
from enum import Enum
from typing import Optional, Union

from .characters import (
    CELL,
    ActionRefused,
    AttackResult,
    Character,
    Faction,
    Kind,
    Roster,
    grid_distance,
    snap_to_grid,
)
from .ui import Command, CommandButton, GameState

BOUNDARY_LEFT = 11 * CELL - 1
BOUNDARY_RIGHT = 28 * CELL + 1
BOUNDARY_TOP = 5 * CELL - 1
BOUNDARY_BOTTOM = 19 * CELL + 1

COMMAND_WIDTH = 50
COMMAND_HEIGHT = 100
PANEL_GAP = 20

ENEMY_MOVEMENT = 10

# life, energy, atk, movement, agility, reach
_PROFILES = {
    Kind.COMMON: (10, 5, 4, 3, 20, 2.0),
    Kind.MEDIC: (6, 4, 4, 2, 50, 1.0),
    Kind.SNIPER: (15, 10, 4, 4, 30, 3.0),
}

_UNIT_NAMES = {
    Kind.COMMON: "Infantry",
    Kind.MEDIC: "Medic",
    Kind.SNIPER: "Sniper",
}

# kind, columns behind the front line, rows (in steps of two cells)
_FORMATION = (
    (Kind.COMMON, 0, (0, 1, 2, 3, 4, 5)),
    (Kind.MEDIC, 1, (1, 2.5, 4)),
    (Kind.SNIPER, 2, (0, 5)),
)

# Cells beside a target that an enemy tries to reach, in order of preference.
_APPROACHES = ((0, 2), (2, 0), (0, -2), (-2, 0))

_WAITING_STATES = {
    Command.MOVE: GameState.WAITING_FOR_MOVE_TARGET,
    Command.ATTACK: GameState.WAITING_FOR_ATTACK_TARGET,
    Command.ACTION: GameState.WAITING_FOR_ACTION_TARGET,
}


class Mode(Enum):
    TWO_PLAYER = "two_player"
    SINGLE_PLAYER = "single_player"


def create_roster() -> Roster:
    """Build the standard line-up: eleven units a side facing each other."""
    roster = Roster()
    sides = (
        (Faction.ALLY, "Ally", 512, -1, None),
        (Faction.ENEMY, "Enemy", 736, 1, ENEMY_MOVEMENT),
    )
    for faction, prefix, front, direction, movement_override in sides:
        for kind, column, rows in _FORMATION:
            life, energy, atk, movement, agility, reach = _PROFILES[kind]
            for number, row in enumerate(rows, 1):
                roster.add(
                    Character(
                        name=f"{prefix} {_UNIT_NAMES[kind]} {number}",
                        kind=kind,
                        faction=faction,
                        life=life,
                        energy=energy,
                        atk=atk,
                        movement=movement if movement_override is None else movement_override,
                        agility=agility,
                        reach=reach,
                        x=front + direction * 64 * column,
                        y=int(160 + 64 * row),
                    )
                )
    return roster


def in_bounds(x, y) -> bool:
    """Whether a point lies inside the area units may move to in a two-player game."""
    return BOUNDARY_LEFT <= x <= BOUNDARY_RIGHT and BOUNDARY_TOP <= y <= BOUNDARY_BOTTOM


Outcome = Union[AttackResult, ActionRefused]


class Game:
    """The state of a running match, driven by mouse input."""

    def __init__(self, mode: Mode = Mode.TWO_PLAYER, roster: Optional[Roster] = None, rng=None) -> None:
        self.mode = mode
        self.roster = create_roster() if roster is None else roster
        self.rng = random.Random() if rng is None else rng
        self.state = GameState.IDLE
        self.faction = Faction.ALLY
        self.current: Optional[Character] = None
        self.button: Optional[CommandButton] = None
        self.last_enemy_turn: list[tuple[Character, Character, Outcome]] = []
        self.roster.set_round(self.faction, False)

    def _selected(self) -> Character:
        if self.current is None:
            raise RuntimeError("no unit is selected")
        return self.current

    def _open_commands(self) -> None:
        unit = self._selected()
        self.button = CommandButton(
            COMMAND_WIDTH, COMMAND_HEIGHT, unit.right() + PANEL_GAP, unit.top()
        )
        self.state = GameState.SHOW_COMMAND

    def _close_commands(self, state: GameState) -> None:
        self.button = None
        self.state = state

    def hover(self, x, y) -> Optional[Character]:
        """Track the unit under the pointer while no order is in progress."""
        if self.state is GameState.IDLE:
            self.current = self.roster.hovered(x, y)
        return self.current

    def left_click(self, x, y):
        """Handle a left click according to the current state and return its outcome."""
        if self.state is GameState.IDLE:
            unit = self.hover(x, y)
            if unit is None or unit.round_done:
                return None
            if self.mode is Mode.SINGLE_PLAYER and unit.faction is not Faction.ALLY:
                return None
            self._open_commands()
            return unit
        if self.state is GameState.SHOW_COMMAND:
            command = self.button.command_at(x, y) if self.button is not None else None
            return None if command is None else self.choose_command(command)
        if self.state is GameState.WAITING_FOR_MOVE_TARGET:
            return self.try_move(x, y)
        if self.state is GameState.WAITING_FOR_ATTACK_TARGET:
            return self.try_attack(x, y)
        if self.state is GameState.WAITING_FOR_ACTION_TARGET:
            return self.try_action(x, y)
        return None

    def right_click(self) -> GameState:
        """Close the command box, or go back to it from target selection."""
        if self.state is GameState.SHOW_COMMAND:
            self._close_commands(GameState.IDLE)
        elif self.state in _WAITING_STATES.values():
            self._open_commands()
        return self.state

    def choose_command(self, command: Command) -> GameState:
        """Apply an entry of the open command box and return the new state."""
        if self.state is not GameState.SHOW_COMMAND:
            raise RuntimeError("no command box is open")
        unit = self._selected()
        if command is Command.MOVE and unit.round_moved:
            return self.state
        if command in _WAITING_STATES:
            self._close_commands(_WAITING_STATES[command])
        elif command is Command.STANDBY:
            unit.round_done = True
            self._close_commands(GameState.IDLE)
        else:
            self._close_commands(GameState.IDLE)
        return self.state

    def try_move(self, x, y) -> list[tuple[int, int]]:
        """Move the selected unit to the cell holding (x, y); return the steps walked."""
        unit = self._selected()
        tx, ty = snap_to_grid(x), snap_to_grid(y)
        distance = grid_distance(unit.x, unit.y, tx, ty)
        occupant = self.roster.hovered(tx, ty)
        if self.mode is Mode.TWO_PLAYER and not in_bounds(tx, ty):
            raise ActionRefused("beyond the movement boundary")
        if unit.energy <= 0:
            raise ActionRefused("not enough energy")
        if distance > unit.movement:
            raise ActionRefused("out of movement range")
        if occupant is not None:
            raise ActionRefused("cannot move there")
        steps = unit.move_to(tx, ty)
        unit.round_moved = True
        self._open_commands()
        return steps

    def try_attack(self, x, y) -> Optional[AttackResult]:
        """Attack the unit in the cell holding (x, y), if there is one."""
        unit = self._selected()
        target = self.roster.hovered(snap_to_grid(x), snap_to_grid(y))
        if target is None:
            return None
        result = unit.attack(target, self.rng)
        self._close_commands(GameState.IDLE)
        return result

    def try_action(self, x, y) -> Optional[str]:
        """Use the selected unit's special action on the unit at (x, y), if there is one."""
        unit = self._selected()
        target = self.roster.hovered(snap_to_grid(x), snap_to_grid(y))
        if target is None:
            return None
        outcome = unit.action(target)
        self._close_commands(GameState.IDLE)
        return outcome

    def advance_turn(self) -> Optional[Faction]:
        """End the turn once every unit of the acting side is done.

        Returns the side that acts next, or None when the turn goes on.
        """
        if not self.roster.all_done(self.faction):
            return None
        if self.mode is Mode.TWO_PLAYER:
            self.roster.set_round(self.faction, True)
            self.faction = Faction.ENEMY if self.faction is Faction.ALLY else Faction.ALLY
            self.roster.set_round(self.faction, False)
        else:
            self.last_enemy_turn = self.enemy_turn()
            self.roster.set_round(Faction.ALLY, False)
        return self.faction

    def _strike(self, attacker: Character, target: Character) -> tuple[Character, Character, Outcome]:
        try:
            outcome: Outcome = attacker.attack(target, self.rng)
        except ActionRefused as refusal:
            outcome = refusal
        return attacker, target, outcome

    def _find_target(self, enemy: Character) -> Optional[tuple[Character, list[float]]]:
        for ally in self.roster.allies():
            distances = [
                grid_distance(enemy.x, enemy.y, ally.x + ox * CELL, ally.y + oy * CELL)
                for ox, oy in _APPROACHES
            ]
            if min(distances) <= enemy.movement:
                return ally, distances
        return None

    def enemy_turn(self) -> list[tuple[Character, Character, Outcome]]:
        """Let every enemy close in on the first reachable ally and strike it.

        Returns each blow as (attacker, target, outcome); a struck ally with
        energy left hits back.
        """
        self.roster.set_round(Faction.ENEMY, False)
        events: list[tuple[Character, Character, Outcome]] = []
        for enemy in self.roster.enemies():
            if enemy.dead:
                continue
            found = self._find_target(enemy)
            if found is not None:
                target, distances = found
                nearest = min(distances)
                strike = False
                if enemy.energy >= 2:
                    if nearest != 2.0:
                        ox, oy = _APPROACHES[distances.index(nearest)]
                        enemy.move_to(target.x + ox * CELL, target.y + oy * CELL)
                    strike = True
                elif enemy.energy == 1 and nearest == 2.0:
                    strike = True
                if strike:
                    events.append(self._strike(enemy, target))
                    if not target.dead and target.energy > 0:
                        events.append(self._strike(target, enemy))
            enemy.round_done = True
        self.roster.set_round(Faction.ENEMY, False)
        return events