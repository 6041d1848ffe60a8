"""Buttons, text and grid drawing for the board window."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import pygame

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
ROW_HEIGHT = 20
GRID_CELL = 32
GRID_ROWS = 22
GRID_COLUMNS = 39


class GameState(Enum):
    IDLE = "idle"
    SHOW_COMMAND = "show_command"
    DONE_MOVE = "done_move"
    WAITING_FOR_MOVE_TARGET = "waiting_for_move_target"
    WAITING_FOR_ATTACK_TARGET = "waiting_for_attack_target"
    WAITING_FOR_ACTION_TARGET = "waiting_for_action_target"


class Command(Enum):
    """Entries of a unit's command box, top to bottom."""

    MOVE = "Move"
    ATTACK = "Attack"
    ACTION = "Action"
    STANDBY = "Standby"
    QUIT = "Quit"


def draw_text(surface, text, x, y, font) -> pygame.Rect:
    """Draw black text on white at (x, y) and return the area covered."""
    image = font.render(text, True, BLACK, WHITE)
    return surface.blit(image, (x, y))


def draw_grid(surface) -> None:
    """Draw the movement grid lines across the whole surface."""
    width, height = surface.get_size()
    for row in range(1, GRID_ROWS + 1):
        y = GRID_CELL * row
        pygame.draw.line(surface, BLACK, (0, y), (width, y), 1)
    for column in range(1, GRID_COLUMNS + 1):
        x = GRID_CELL * column
        pygame.draw.line(surface, BLACK, (x, 0), (x, height), 1)


@dataclass
class Button:
    width: int
    height: int
    left: int
    top: int
    text: str = ""

    def _rect(self) -> pygame.Rect:
        return pygame.Rect(self.left, self.top, self.width + 1, self.height + 1)

    def contains(self, x, y) -> bool:
        return (
            self.left < x < self.left + self.width
            and self.top < y < self.top + self.height
        )

    def draw(self, surface, font) -> None:
        pygame.draw.rect(surface, WHITE, self._rect())
        draw_text(surface, self.text, self.left, self.top, font)


@dataclass
class CommandButton(Button):
    """A unit's command box: one row per command."""

    def command_at(self, x, y) -> Optional[Command]:
        if not self.left < x < self.left + self.width:
            return None
        commands = list(Command)
        for index, command in enumerate(commands):
            low = self.top + index * ROW_HEIGHT
            high = (
                self.top + self.height
                if index == len(commands) - 1
                else low + ROW_HEIGHT
            )
            if low < y < high:
                return command
        return None

    def draw(self, surface, font) -> pygame.Surface:
        """Draw the box and return a copy of what it covered, for erasing it later."""
        background = surface.copy()
        pygame.draw.rect(surface, WHITE, self._rect())
        commands = list(Command)
        for index, command in enumerate(commands):
            draw_text(surface, command.value, self.left, self.top + index * ROW_HEIGHT, font)
        for index in range(1, len(commands)):
            y = self.top + index * ROW_HEIGHT
            pygame.draw.line(surface, BLACK, (self.left, y), (self.left + self.width, y), 3)
        return background