# gridpath/app/viewer.py
#!/usr/bin/env python3
"""
Pathfinding Viewer: Dijkstra and A* side by side, replayed step by step.

- Keyboard:
    [1]/[2]/[3]  -> switch map
    [SPACE]      -> run/pause (searches once, then replays the recorded visits)
    [N]/[B]      -> step forward / step back
    [R]          -> reset
    [M]          -> toggle auto/step mode
    [V]          -> cycle alternative routes
    [C]          -> clear walls
    [S]/[E]      -> put start / end under the mouse
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit
- Mouse: left click toggles a wall, right click toggles weighted terrain.

Mode:
- ENV: GRIDPATH_MODE=auto|step
- CLI: --mode=auto|step
"""

import sys
import time
import logging
from typing import Dict, List, Optional, Tuple

import pygame

from gridpath import config
from gridpath.core import (SEARCHES, Alternative, CoordinationContext, Lattice, Replay,
                           SearchKind, generate_alternatives, get_search)
from gridpath.core.maps import load_map
from gridpath.core.types import Cell
from gridpath.logger import configure_logging

logger = logging.getLogger(__name__)

PANEL_W = 360            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 24
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
GRASS_GREEN = (144, 238, 144)
ASPHALT_GRAY= (200,200,200)
NEON_CYAN_A = (0,150,255,110)
NEON_MAG_A  = (255,0,120,90)
NEON_MINT   = (0,255,200)
ALT_GOLD    = (255,210,0)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)

KINDS = (SearchKind.DIJKSTRA, SearchKind.ASTAR)


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        if self.hover:
            bg = (46, 50, 60, 230)
        else:
            bg = (36, 40, 48, 220)
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)
        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- one board per algorithm ----------
class Session:
    """A search run on its own clone of the edited lattice, plus its replay cursor."""

    def __init__(self, kind: SearchKind, lattice: Lattice, context: CoordinationContext):
        self.kind = kind
        self.lattice = lattice.clone()
        self.search = get_search(kind, self.lattice)
        self.result = self.search.run(record_visits=True)
        self.replay = Replay(self.lattice, self.result, kind.value, context)

    @property
    def name(self) -> str:
        return self.search.name


# ---------- Viewer ----------
class Viewer:
    def __init__(self, lattice: Lattice, map_key: str = "custom"):
        pygame.init()

        self.lattice = lattice
        self.selected_map_key = map_key
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        cs = self._auto_cell_size(lattice)
        win_w = GRID_MARGIN*3 + 2*lattice.cols*cs + PANEL_W
        win_h = max(GRID_MARGIN*2 + lattice.rows*cs, 600)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption(f"Pathfinding — {map_key}")

        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)

        self.mode = config.resolve_mode()
        self.context = CoordinationContext()
        self.sessions: Dict[SearchKind, Session] = {}
        self.alternatives: List[Alternative] = []
        self.alt_index = -1

        self.running = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = config.STEPS_PER_SEC
        self.state = "Idle"
        self._last_step_t = 0.0

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Integer cell_size that fits two boards next to each other."""
        cols, rows = self.lattice.cols, self.lattice.rows
        avail_w = max(1, win_w - PANEL_W - 3 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(6, min(avail_w // (2 * cols), avail_h // rows)))

        board_w = cols * self.cell_size
        board_h = rows * self.cell_size
        top_y = max(GRID_MARGIN, (win_h - board_h) // 2)
        self._origins = {
            SearchKind.DIJKSTRA: (GRID_MARGIN, top_y),
            SearchKind.ASTAR: (2 * GRID_MARGIN + board_w, top_y),
        }
        right = 3 * GRID_MARGIN + 2 * board_w
        self._right_band = pygame.Rect(right, 0, max(PANEL_W, win_w - right), win_h)
        self._build_buttons()

    def _auto_cell_size(self, lattice: Lattice) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(10, min(CELL_SIZE_DEFAULT, target_h // max(1, lattice.rows)))

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Tuple[int, int]]:
        """(row, col) under a screen position, on either board."""
        cs = self.cell_size
        for ox, oy in self._origins.values():
            col = (pos[0] - ox) // cs
            row = (pos[1] - oy) // cs
            if pos[0] >= ox and pos[1] >= oy and self.lattice.in_bounds(row, col):
                return row, col
        return None

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick()
            self._draw()
            self.clock.tick(60)

    def _tick(self):
        t0 = time.time()
        if t0 - self._last_step_t >= 1.0 / max(1, self.steps_per_sec):
            self._last_step_t = t0
            self._do_step()

    # ---------- search sessions ----------
    def _start(self) -> bool:
        if self.lattice.start is None or self.lattice.end is None:
            self.state = "Set start and end"
            logger.warning("Start and end must both be set before searching")
            return False
        self.context = CoordinationContext()
        self.context.on_both_finished(self._on_both_finished)
        self.sessions = {k: Session(k, self.lattice, self.context) for k in KINDS}
        for s in self.sessions.values():
            logger.info("%s: visited=%d path=%d cost=%s", s.name, len(s.result.visited),
                        len(s.result.path), s.result.total_cost)
        self.state = "Running"
        return True

    def _on_both_finished(self):
        self.running = False
        found = [s.result.path_found for s in self.sessions.values()]
        self.state = "Done" if all(found) else "No path"

    def _do_step(self):
        if not self.sessions and not self._start():
            self.running = False
            return
        for s in self.sessions.values():
            s.replay.next_step()
        if self.context.all_finished:
            self.running = False

    def _back_step(self):
        if not self.sessions:
            return
        self.running = False
        for s in self.sessions.values():
            s.replay.prev_step()
        self.state = "Paused"

    def _toggle_run(self):
        if self.mode == "step":
            self._do_step()
            return
        if self.sessions and self.context.all_finished:
            return
        self.running = not self.running
        if self.running and not self.sessions and not self._start():
            self.running = False
            return
        self.state = "Running" if self.running else "Paused"

    def _reset(self):
        self.running = False
        self.state = "Idle"
        self.sessions = {}
        self.context = CoordinationContext()
        self.alternatives = []
        self.alt_index = -1

    def _toggle_mode(self):
        self.mode = "step" if self.mode == "auto" else "auto"
        self._reset()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(120, self.steps_per_sec + dv)))

    def _cycle_alternatives(self):
        if not self.alternatives:
            self.alternatives = generate_alternatives(
                self.lattice, lambda lat: get_search(SearchKind.DIJKSTRA, lat))
            if not self.alternatives:
                self.state = "No path"
                return
            self.alt_index = 0
        else:
            self.alt_index = (self.alt_index + 1) % len(self.alternatives)

    @property
    def selected_alternative(self) -> Optional[Alternative]:
        if 0 <= self.alt_index < len(self.alternatives):
            return self.alternatives[self.alt_index]
        return None

    # ---------- editing ----------
    def _edit(self, pos: Tuple[int, int], action: str):
        hit = self.cell_at(pos)
        if hit is None:
            return
        row, col = hit
        cell = self.lattice.cells[row][col]
        if action == "wall":
            changed = self.lattice.toggle_wall(row, col)
        elif action == "weight":
            w = 1 if cell.is_weighted else config.WEIGHTED_CELL_COST
            changed = not cell.is_wall and self.lattice.set_weight(row, col, w)
        elif action == "start":
            changed = self.lattice.set_start(row, col)
        elif action == "end":
            changed = self.lattice.set_end(row, col)
        else:
            changed = False
        if changed:
            self._reset()

    def _switch_map(self, key: str):
        if key not in config.MAP_FILES:
            return
        try:
            lattice = load_map(config.MAP_FILES[key])
        except (OSError, ValueError) as ex:
            logger.warning("Failed to load map %s: %s", key, ex)
            return
        self.lattice = lattice
        self.selected_map_key = key
        pygame.display.set_caption(f"Pathfinding — {key}")
        self._reset()
        self._layout(*self.screen.get_size())

    # ---------- events ----------
    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                self._on_key(e.key)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type == pygame.MOUSEMOTION:
                for b in self._buttons:
                    b.handle_mouse(e)
            elif e.type == pygame.MOUSEBUTTONDOWN:
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                if e.button == 1:
                    self._edit(e.pos, "wall")
                elif e.button == 3:
                    self._edit(e.pos, "weight")

    def _on_key(self, key: int):
        if key == pygame.K_SPACE:
            self._toggle_run()
        elif key == pygame.K_n:
            self._do_step()
        elif key == pygame.K_b:
            self._back_step()
        elif key == pygame.K_r:
            self._reset()
        elif key == pygame.K_m:
            self._toggle_mode()
        elif key == pygame.K_v:
            self._cycle_alternatives()
        elif key == pygame.K_c:
            self.lattice.clear_walls(); self._reset()
        elif key == pygame.K_s:
            self._edit(pygame.mouse.get_pos(), "start")
        elif key == pygame.K_e:
            self._edit(pygame.mouse.get_pos(), "end")
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self._bump_speed(+5)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
            self._bump_speed(-5)
        elif key == pygame.K_1:
            self._switch_map("01_open_field")
        elif key == pygame.K_2:
            self._switch_map("02_two_routes")
        elif key == pygame.K_3:
            self._switch_map("03_weighted_grass")

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        for kind in KINDS:
            self._draw_board(kind)
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = tuple(int(top[i] + (bot[i]-top[i]) * t) for i in range(3))
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _cell_rect(self, kind: SearchKind, cell: Cell) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._origins[kind]
        return pygame.Rect(ox + cell.col*cs, oy + cell.row*cs, cs, cs)

    def _draw_board(self, kind: SearchKind):
        cs = self.cell_size
        session = self.sessions.get(kind)
        lattice = session.lattice if session else self.lattice

        visited_s = pygame.Surface((cs, cs), pygame.SRCALPHA); visited_s.fill(NEON_MAG_A)
        current_s = pygame.Surface((cs, cs), pygame.SRCALPHA); current_s.fill(NEON_CYAN_A)

        for cell in lattice.cells_iter():
            rect = self._cell_rect(kind, cell)
            if cell.is_wall:
                pygame.draw.rect(self.screen, BLACK, rect)
            elif cell.is_weighted:
                pygame.draw.rect(self.screen, GRASS_GREEN, rect)
            else:
                pygame.draw.rect(self.screen, ASPHALT_GRAY, rect)
            if cell.is_current:
                self.screen.blit(current_s, rect.topleft)
            elif cell.is_visited:
                self.screen.blit(visited_s, rect.topleft)
            pygame.draw.rect(self.screen, BLACK, rect, 1)

        if session and session.replay.path_shown:
            self._draw_path(kind, session.result.path, NEON_MINT, 5)
        alt = self.selected_alternative
        if alt is not None:
            self._draw_path(kind, alt.path, ALT_GOLD, 3)

        if lattice.start is not None:
            self._draw_badge(kind, lattice.start, BLUE, "S")
        if lattice.end is not None:
            self._draw_badge(kind, lattice.end, RED, "G")

        ox, oy = self._origins[kind]
        title = self.font.render(SEARCHES[kind].name, True, TEXT_LIGHT)
        self.screen.blit(title, (ox, max(0, oy - title.get_height() - 2)))

    def _draw_path(self, kind: SearchKind, path: List[Cell], color, width: int):
        if len(path) < 2:
            return
        pts = [self._cell_rect(kind, c).center for c in path]
        pygame.draw.lines(self.screen, color, False, pts, width)

    def _draw_badge(self, kind: SearchKind, cell: Cell, color, label: str):
        center = self._cell_rect(kind, cell).center
        pygame.draw.circle(self.screen, color, center, max(4, self.cell_size//2 - 2))
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=center))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 300  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8
        half = (w - 8) // 2

        def add(label, cb, rect=None):
            self._buttons.append(UIButton(label, rect or pygame.Rect(x, y, w, h), cb))

        add("Run / Pause", self._toggle_run); y += h + gap
        add("Step Back", self._back_step, pygame.Rect(x, y, half, h))
        add("Step Once", self._do_step, pygame.Rect(x + half + 8, y, half, h)); y += h + gap
        add("Reset", self._reset); y += h + gap
        add("Speed -", lambda: self._bump_speed(-5), pygame.Rect(x, y, half, h))
        add("Speed +", lambda: self._bump_speed(+5), pygame.Rect(x + half + 8, y, half, h)); y += h + gap
        add("Mode: auto / step", self._toggle_mode); y += h + gap
        add("Alternatives", self._cycle_alternatives)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band
        card = pygame.Surface((rb.width - 20, 280), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line("Metrics", big=True, color=ACCENT_GOLD)
        for kind in KINDS:
            s = self.sessions.get(kind)
            if s is None:
                line(f"{SEARCHES[kind].name}: -")
                continue
            cost = s.result.total_cost if s.replay.path_shown else "-"
            line(f"{s.name}: visited {s.replay.visited_count}/{len(s.result.visited)}")
            line(f"   path {s.replay.path_length}  cost {cost}")

        line("-" * 26)
        line(f"Map: {self.selected_map_key}")
        line(f"Mode: {self.mode}   Speed: {self.steps_per_sec} steps/s")
        line(f"State: {self.state}")
        alt = self.selected_alternative
        if alt is not None:
            line(f"{alt.label}: cost {alt.total_cost}", color=ALT_GOLD)

        for b in self._buttons:
            b.draw(self.screen, self.font_small)


# ---------- main ----------
def main():
    configure_logging()
    key = config.DEFAULT_MAP
    try:
        lattice = load_map(config.MAP_FILES[key])
    except (OSError, ValueError) as ex:
        logger.warning("Failed to load default map (%s); using an empty lattice", ex)
        key = "custom"
        lattice = Lattice(config.DEFAULT_ROWS, config.DEFAULT_COLS)
        lattice.set_start(config.DEFAULT_ROWS // 2, 2)
        lattice.set_end(config.DEFAULT_ROWS // 2, config.DEFAULT_COLS - 3)
    Viewer(lattice, key).run()


if __name__ == "__main__":
    main()
