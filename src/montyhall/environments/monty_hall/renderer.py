"""renderer.py

A minimal PyGame renderer for a Monty Hall round.

Usage (inside an env):
    self.renderer = MontyHallPygameRenderer(n_doors, metadata, render_mode)
    ...
    rgb = self.renderer.render(round_state)   # returns np.ndarray if render_mode=="rgb_array"
    self.renderer.close()                     # clean-up
"""
from .state import DoorContent, Phase, RoundState

from typing import Literal

import numpy as np

_BG_COLOR = (30, 30, 30)
_CLOSED_COLOR = (160, 160, 160)
_CHOSEN_COLOR = (80, 160, 240)
_OPEN_COLOR = (240, 240, 240)
_WIN_COLOR = (46, 204, 113)
_LOSE_COLOR = (231, 76, 60)
_TEXT_COLOR = (230, 230, 230)


class MontyHallPygameRenderer:
    def __init__(
        self,
        n_doors: int,
        metadata: dict,
        render_mode: Literal["human", "rgb_array"],
    ):
        """Self-contained PyGame renderer for a Monty Hall round.

        Args:
            n_doors (int): Total number of doors to draw (60 x 100 px rectangle + padding).
            metadata (dict): Environment metadata containing *at minimum* the key ``"render_fps"``.
            render_mode ( Literal["human", "rgb_array"]): Determines how the renderer behaves, in human, will draw in
                PyGame and in rgb_array will simply return the array.
        """
        import pygame # Lazily imported, as and when required

        self._pygame = pygame
        self._n_doors = n_doors
        self._fps = metadata["render_fps"]
        self._mode = render_mode

        pygame.init()
        pygame.font.init()

        width = n_doors * 80 + 20
        height = 190

        self._font = pygame.font.SysFont(None, 36)
        self._font_small = pygame.font.SysFont(None, 22)
        self._surface = pygame.Surface((width, height))

        self._window = None
        if render_mode == "human":
            self._window = pygame.display.set_mode((width, height))
            pygame.display.set_caption("Monty Hall")

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                 Public API                                       #
    # ──────────────────────────────────────────────────────────────────────────────── #
    def render(self, state: RoundState) -> None | np.ndarray:
        """ Render *one* frame of the current round.

        Args:
            state (RoundState): the round to draw; door contents are only shown where the player may see them

        Returns:
            np.ndarray: if the renderer is instantiated with ``render_mode=rgb_array``, e.g. for video capture,
            which consists of a RGB uint8 array of shape ``(H, W, 3)``
        """
        self._draw_frame(state)

        if self._mode == "human":
            self._pygame.event.pump()
            self._window.blit(self._surface, (0, 0))
            self._pygame.display.flip()
            self._pygame.time.delay(int(1000 / self._fps))
            return None

        # rgb_array
        arr = self._pygame.surfarray.array3d(self._surface)  # (W,H,3)
        return np.transpose(arr, (1, 0, 2))  # (H,W,3)

    def close(self) -> None:
        """ Cleans up resources of the renderer, intended for environment exit"""
        self._pygame.quit()
        self._pygame = self._window = self._surface = self._font = self._font_small = None

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                 Private helpers                                  #
    # ──────────────────────────────────────────────────────────────────────────────── #
    def _status_text(self, state: RoundState) -> str:
        match state.phase:
            case Phase.SELECTING:
                return "Select a door"
            case Phase.REVEALED:
                return f"Door {state.revealed_door + 1} has a goat. Stay or switch?"
            case Phase.DECIDED:
                action = "switched" if state.switched else "stayed"
                return f"You {action} and {'won' if state.won else 'lost'}!"

    def _draw_frame(self, state: RoundState) -> None:
        """ Internal helper that draws one complete frame onto ``self._surface``, using coloured rectangles and text.

        Args:
            state (RoundState): the round to draw
        """
        pg = self._pygame
        self._surface.fill(_BG_COLOR)

        for idx, content in enumerate(state.doors):
            x = 10 + idx * 80
            y = 20
            rect = pg.Rect(x, y, 60, 100)

            if state.is_visible(idx):
                pg.draw.rect(self._surface, _OPEN_COLOR, rect)
                symbol = "C" if content is DoorContent.PRIZE else "G"
                txt = self._font.render(symbol, True, (0, 0, 0))
                self._surface.blit(txt, txt.get_rect(center=rect.center))
            elif idx == state.selected_door:
                pg.draw.rect(self._surface, _CHOSEN_COLOR, rect)
            else:
                pg.draw.rect(self._surface, _CLOSED_COLOR, rect)

            border = (0, 0, 0)
            if state.phase is Phase.DECIDED and idx == state.selected_door:
                border = _WIN_COLOR if state.won else _LOSE_COLOR
            pg.draw.rect(self._surface, border, rect, width=3)

            label = self._font_small.render(str(idx + 1), True, _TEXT_COLOR)
            self._surface.blit(label, label.get_rect(center=(rect.centerx, rect.bottom + 14)))

        status = self._font_small.render(self._status_text(state), True, _TEXT_COLOR)
        self._surface.blit(status, (10, 160))
