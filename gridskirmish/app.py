"""The game window: main menu, the board view and the event loop."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

import pygame

from .characters import ActionRefused, AttackResult, Character, Faction
from .game import Game, Mode
from .ui import WHITE, Button, GameState, draw_grid, draw_text

WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 736
FPS = 100
FONT_SIZE = 22

BUTTON_WIDTH = 200
BUTTON_HEIGHT = 50
BUTTON_SPACING = 20

PANEL_GAP = 20
PANEL_WIDTH = 130
PANEL_HEIGHT = 170
LINE_HEIGHT = 20

MESSAGE_LEFT = 560
MESSAGE_TOP = 288
MESSAGE_MIN_WIDTH = 155
MESSAGE_HEIGHT = 62
MESSAGE_PADDING = 20
MESSAGE_MS = 700

STEPS_PER_FRAME = 4

MENU_COLOUR = (40, 60, 90)
FIELD_COLOUR = (110, 150, 90)
FACTION_COLOURS = {
    Faction.ALLY: (40, 90, 200),
    Faction.ENEMY: (200, 50, 40),
}

_TARGET_STATES = {
    GameState.WAITING_FOR_MOVE_TARGET,
    GameState.WAITING_FOR_ATTACK_TARGET,
    GameState.WAITING_FOR_ACTION_TARGET,
}

_ATTACK_MESSAGES = {
    AttackResult.MISSED: "Missed!",
    AttackResult.HIT: "Target hit",
    AttackResult.KILLED: "Target hit",
}


class MenuChoice(Enum):
    """Entries of the main menu, with the caption of their buttons."""

    TWO_PLAYER = "Two players"
    SINGLE_PLAYER = "Single player"
    HELP = "How to play"
    QUIT = "Quit"


def menu_buttons() -> list[Button]:
    """The main menu's buttons, stacked and centred in the window."""
    choices = list(MenuChoice)
    total_height = len(choices) * BUTTON_HEIGHT + (len(choices) - 1) * BUTTON_SPACING
    start_y = (WINDOW_HEIGHT - total_height) // 2
    left = (WINDOW_WIDTH - BUTTON_WIDTH) // 2
    return [
        Button(
            BUTTON_WIDTH,
            BUTTON_HEIGHT,
            left,
            start_y + index * (BUTTON_HEIGHT + BUTTON_SPACING),
            choice.value,
        )
        for index, choice in enumerate(choices)
    ]


def menu_choice_at(buttons, x, y) -> Optional[MenuChoice]:
    """The menu entry whose button holds (x, y), if any."""
    by_text = {choice.value: choice for choice in MenuChoice}
    for button in buttons:
        if button.contains(x, y) and button.text in by_text:
            return by_text[button.text]
    return None


def stat_lines(character: Character, mode: Mode) -> list[str]:
    """The lines of a unit's stat panel; single-player shows attack as a spread."""
    if mode is Mode.SINGLE_PLAYER:
        return [
            f"Class: {character.kind_label()}",
            f"Life: {character.life}",
            f"Attack: {character.atk - 2}-{character.atk + 2}",
            f"Energy: {character.energy}",
            f"Agility: {character.agility}",
            f"Movement: {character.movement}",
        ]
    return [
        f"Class: {character.kind_label()}",
        f"Life: {character.life}",
        f"Attack: {character.atk}",
        f"Range: {character.attack_range()}",
        f"Energy: {character.energy}",
        f"Agility: {character.agility}",
        f"Movement: {character.movement}",
    ]


def _load_background(path: Optional[Path], colour) -> pygame.Surface:
    surface = pygame.Surface((WINDOW_WIDTH, WINDOW_HEIGHT))
    surface.fill(colour)
    if path is not None:
        image = pygame.image.load(str(path))
        surface.blit(pygame.transform.scale(image, (WINDOW_WIDTH, WINDOW_HEIGHT)), (0, 0))
    return surface


def _run_menu(screen, font, clock, background, buttons) -> MenuChoice:
    """Show the menu until a choice that leaves it is made."""
    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return MenuChoice.QUIT
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                choice = menu_choice_at(buttons, *event.pos)
                if choice is not None and choice is not MenuChoice.HELP:
                    return choice
        screen.blit(background, (0, 0))
        for button in buttons:
            button.draw(screen, font)
        pygame.display.flip()
        clock.tick(FPS)


@dataclass
class _MatchView:
    """Screen-side state of a match: the message box and the walking animation."""

    game: Game
    font: pygame.font.Font
    background: pygame.Surface
    message: Optional[str] = None
    message_until: int = 0
    walker: Optional[Character] = None
    walk: list = field(default_factory=list)

    @property
    def busy(self) -> bool:
        return bool(self.walk) or self.message is not None

    def say(self, text: str) -> None:
        self.message = text
        self.message_until = pygame.time.get_ticks() + MESSAGE_MS

    def click(self, pos) -> None:
        try:
            outcome = self.game.left_click(*pos)
        except ActionRefused as refusal:
            self.say(str(refusal).capitalize())
            return
        if isinstance(outcome, AttackResult):
            self.say(_ATTACK_MESSAGES[outcome])
        elif isinstance(outcome, str):
            self.say(outcome.capitalize())
        elif isinstance(outcome, list) and outcome:
            self.walker = self.game.current
            self.walk = outcome

    def tick(self) -> None:
        if self.walk:
            del self.walk[:STEPS_PER_FRAME]
            if not self.walk:
                self.walker = None
        if self.message is not None and pygame.time.get_ticks() >= self.message_until:
            self.message = None

    def _draw_unit(self, screen, unit: Character) -> None:
        x, y = unit.x, unit.y
        if unit is self.walker and self.walk:
            x, y = self.walk[0]
        rect = pygame.Rect(x - unit.width // 2, y - unit.height // 2, unit.width, unit.height)
        pygame.draw.rect(screen, FACTION_COLOURS[unit.faction], rect)
        letter = self.font.render(unit.kind.value[0].upper(), True, WHITE)
        screen.blit(letter, letter.get_rect(center=rect.center))

    def _draw_panel(self, screen, unit: Character) -> None:
        left = unit.right() + PANEL_GAP
        top = unit.top() - PANEL_GAP
        pygame.draw.rect(screen, WHITE, pygame.Rect(left, top, PANEL_WIDTH + 1, PANEL_HEIGHT + 1))
        for row, line in enumerate(stat_lines(unit, self.game.mode)):
            draw_text(screen, line, left, top + row * LINE_HEIGHT, self.font)

    def _draw_message(self, screen) -> None:
        width, _ = self.font.size(self.message)
        box = pygame.Rect(
            MESSAGE_LEFT,
            MESSAGE_TOP,
            max(MESSAGE_MIN_WIDTH, width + 2 * MESSAGE_PADDING),
            MESSAGE_HEIGHT,
        )
        pygame.draw.rect(screen, WHITE, box)
        draw_text(screen, self.message, MESSAGE_LEFT + MESSAGE_PADDING, MESSAGE_TOP + MESSAGE_PADDING, self.font)

    def render(self, screen) -> None:
        screen.blit(self.background, (0, 0))
        for unit in self.game.roster:
            self._draw_unit(screen, unit)
        if self.game.state in _TARGET_STATES:
            draw_grid(screen)
        current = self.game.current
        if self.game.state is GameState.IDLE and current is not None and current in self.game.roster:
            self._draw_panel(screen, current)
        if self.game.button is not None:
            self.game.button.draw(screen, self.font)
        if self.message is not None:
            self._draw_message(screen)


def _run_match(screen, font, clock, background, mode: Mode, rng) -> None:
    """Play a match until the window is closed."""
    view = _MatchView(Game(mode=mode, rng=rng), font, background)
    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return
            if view.busy:
                continue
            if event.type == pygame.MOUSEMOTION:
                view.game.hover(*event.pos)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                view.click(event.pos)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 3:
                view.game.right_click()
        if not view.walk:
            before = view.game.faction
            if view.game.advance_turn() is not None and mode is Mode.SINGLE_PLAYER:
                blows = len(view.game.last_enemy_turn)
                view.say(f"Enemy turn: {blows} blows")
            elif view.game.faction is not before:
                view.say(f"{view.game.faction.value.capitalize()} turn")
        view.tick()
        view.render(screen)
        pygame.display.flip()
        clock.tick(FPS)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the game window and run the menu and the chosen match."""
    parser = argparse.ArgumentParser(prog="gridskirmish", description="Turn-based grid skirmish.")
    parser.add_argument("--background", type=Path, help="image for the battlefield")
    parser.add_argument("--menu-background", type=Path, help="image behind the main menu")
    parser.add_argument("--seed", type=int, help="seed for dodge rolls")
    args = parser.parse_args(argv)

    import random

    rng = random.Random(args.seed)
    pygame.init()
    try:
        screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption("Grid Skirmish")
        font = pygame.font.Font(None, FONT_SIZE)
        clock = pygame.time.Clock()
        menu_background = _load_background(args.menu_background, MENU_COLOUR)
        field_background = _load_background(args.background, FIELD_COLOUR)
        choice = _run_menu(screen, font, clock, menu_background, menu_buttons())
        if choice is MenuChoice.QUIT:
            return 0
        mode = Mode.TWO_PLAYER if choice is MenuChoice.TWO_PLAYER else Mode.SINGLE_PLAYER
        _run_match(screen, font, clock, field_background, mode, rng)
        return 0
    finally:
        pygame.quit()