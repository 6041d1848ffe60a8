# gridskirmish

gridskirmish is a small turn-based tactics game on a square grid of
32-pixel cells. Two factions, allies and enemies, each field eleven units:
six infantry, three medics and two snipers. The factions take turns. During
its turn a unit can move, attack or use its special action. When every unit
of the acting faction has finished, the other side plays.

## Installing

```
pip install .
```

The game window is drawn with pygame. To run the tests:

```
pip install ".[test]"
pytest
```

## Playing

```
gridskirmish
```

Options:

- `--background PATH`: an image to scale over the battlefield. Without one
  the field is a plain green.
- `--menu-background PATH`: an image behind the main menu.
- `--seed N`: seed for the random numbers behind dodge rolls, so that a
  match can be replayed.

Units are drawn as coloured squares, blue for allies and red for enemies.
Each square carries the first letter of the unit's kind: C, M or S.

The main menu has four buttons:

- **Two players**: both factions are played from the same mouse. Units may
  only move inside the central part of the board.
- **Single player**: you control the allies, and the computer plays the
  enemy turn.
- **How to play**: this has no effect. There is no help screen.
- **Quit**: closes the window.

### Controls

- Hover over a unit to see its stats panel: class, life, attack, range,
  energy, agility and movement. In single-player mode the panel shows
  attack as a spread of two either side and leaves out range.
- Left-click a unit that has not finished its turn to open its command box.
  The entries are Move, Attack, Action, Standby and Quit. In single-player
  mode only allied units can be selected.
- After Move, Attack or Action, a grid appears. Left-click a target cell or
  unit. Right-click to go back to the command box.
- Standby ends the unit's turn. Right-click, or choose Quit, to close the
  command box without acting.
- A refused order shows its reason in a message box for a moment.

### Rules

- **Moving** costs one energy. A unit can move once per turn, up to its
  movement in whole cells, and only onto a free cell. After a move the
  command box opens again, so the unit can still attack or act.
- **Attacking** costs one energy and ends the unit's turn. It reaches
  targets within attack range, counted in whole cells. A unit cannot attack
  itself or an ally. The target dodges with a chance in percent equal to
  its agility. A hit deals the attacker's attack value. A hit that would
  take the target's life to zero or below kills it, and the unit leaves the
  board.
- **Medics** heal an ally within 1.5 cells, or themselves, for 5 life.
  This costs one energy and ends their turn.
- **Snipers** deal 5 damage to an enemy up to 5 cells away. A target with
  5 life or less is killed. This costs three energy and ends their turn.
- **Infantry** have no special action.
- At the start of its faction's turn, each unit regains one energy, up to
  a maximum of 10.

| Kind     | Life | Energy | Attack | Movement | Agility | Range |
|----------|------|--------|--------|----------|---------|-------|
| Infantry | 10   | 5      | 4      | 3        | 20      | 2     |
| Medic    | 6    | 4      | 4      | 2        | 50      | 1     |
| Sniper   | 15   | 10     | 4      | 4        | 30      | 3     |

Enemy units have a movement of 10 in both modes.

### The computer's turn

In single-player mode, each enemy in turn looks for the first ally whose
neighbourhood it can reach. That neighbourhood is one of the four cells two
cells above, beside or below the ally. With at least two energy the enemy
walks there and attacks. It does not walk if it already stands exactly two
cells away. With one energy it only attacks from two cells away. An ally
that survives the blow and still has energy strikes back.

## Using the engine

The rules work without a window, so you can script matches or try out
tactics:

```python
import random

from gridskirmish.characters import ActionRefused
from gridskirmish.game import Game, Mode

game = Game(mode=Mode.SINGLE_PLAYER, rng=random.Random(1))
ally = game.roster.allies()[0]
enemy = game.roster.enemies()[0]
print(ally.kind_label(), ally.life, ally.distance_to(enemy))
try:
    ally.attack(enemy, game.rng)
except ActionRefused as refusal:
    print("refused:", refusal)  # refused: target out of range
```

The modules:

- `gridskirmish.characters`: `Character`, `Roster`, the `Faction` and
  `Kind` enums, `AttackResult`, `ActionRefused`, `snap_to_grid` and
  `grid_distance`.
- `gridskirmish.game`: `Game`, which drives a match from mouse input. Its
  methods are `hover`, `left_click`, `right_click`, `choose_command`,
  `try_move`, `try_attack`, `try_action`, `advance_turn` and `enemy_turn`.
  The module also has `create_roster`, `in_bounds` and `Mode`.
- `gridskirmish.ui`: `Button`, `CommandButton`, the `Command` and
  `GameState` enums, `draw_text` and `draw_grid`.
- `gridskirmish.app`: the window, `main`, `menu_buttons`, `menu_choice_at`,
  `stat_lines` and `MenuChoice`.

Refused orders raise `ActionRefused`. The message it carries is the one the
game shows on screen.

## What it does not do

- There is no help screen behind the menu's **How to play** button.
- A match never ends by itself. There is no victory check, even when one
  side has no units left. Close the window to stop playing.
- After a match the program exits; it does not return to the menu.
- Matches cannot be saved or loaded.