import pygame
import pygame.gfxdraw

from drive_mad import config
from drive_mad.controller import GamePhase


def lane_marker_offset(frame):
    return (frame * config.DASH_SCROLL) % (config.DASH_LENGTH + config.DASH_GAP)


class RoadRenderer:
    """Draws the road and every car on it. Reads the state, never writes it."""

    def __init__(self, surface, field):
        self.surface = surface
        self.field = field

    def render(self, state):
        self._draw_road(state.frame)
        self._draw_pickups(state.pickups)
        self._draw_obstacles(state.obstacles)
        self._draw_player(state.player)

    def _draw_road(self, frame):
        f = self.field
        left, right = int(f.left_edge), int(f.right_edge)
        h = int(f.height)

        self.surface.fill(config.COLOR_GRASS)
        pygame.draw.rect(self.surface, config.COLOR_ROAD, (left - 20, 0, right - left + 40, h))

        # Dashed lane lines, scrolling with the frame counter
        start_y = -lane_marker_offset(frame)
        period = config.DASH_LENGTH + config.DASH_GAP
        for i in range(1, f.lane_count):
            lx = int(f.left_edge + i * f.lane_width)
            y = start_y
            while y < h + 40:
                pygame.draw.line(
                    self.surface, config.COLOR_LANE_LINE,
                    (lx, y), (lx, y + config.DASH_LENGTH), 4,
                )
                y += period

        # Border edges
        pygame.draw.rect(self.surface, config.COLOR_BORDER, (left - 12, 0, 12, h))
        pygame.draw.rect(self.surface, config.COLOR_BORDER, (right, 0, 12, h))

    def _draw_pickups(self, pickups):
        for p in pickups:
            cx = int(p.x + p.size / 2)
            cy = int(p.y + p.size / 2)
            r = int(p.size / 2)
            pygame.gfxdraw.filled_circle(self.surface, cx, cy, r, config.COLOR_PICKUP)
            pygame.gfxdraw.aacircle(self.surface, cx, cy, r, config.COLOR_PICKUP)
            # Fuel can glyph
            pygame.draw.rect(self.surface, config.COLOR_PICKUP_MARK, (cx - 5, cy - 6, 10, 12), 2)
            pygame.draw.line(self.surface, config.COLOR_PICKUP_MARK, (cx + 5, cy - 4), (cx + 8, cy - 7), 2)

    def _draw_obstacles(self, obstacles):
        for o in obstacles:
            x, y, w, h = int(o.x), int(o.y), int(o.w), int(o.h)
            pygame.draw.rect(self.surface, o.color, (x, y, w, h))
            pygame.draw.rect(self.surface, config.COLOR_WHEEL, (x + 6, y + 6, w - 12, 18))

    def _draw_player(self, p):
        x, y, w, h = int(p.x), int(p.y), int(p.w), int(p.h)
        pygame.draw.rect(self.surface, config.COLOR_PLAYER, (x, y, w, h))
        # Roof
        pygame.draw.rect(self.surface, config.COLOR_WINDOW, (x + 6, y + 10, w - 12, h - 32))
        # Wheels
        pygame.draw.rect(self.surface, config.COLOR_WHEEL, (x + 6, y + h - 12, 14, 8))
        pygame.draw.rect(self.surface, config.COLOR_WHEEL, (x + w - 20, y + h - 12, 14, 8))


class HudOverlay:
    """Score readouts, banners, the game-over panel and the touch buttons."""

    BUTTON_SIZE = 64

    def __init__(self, surface, field):
        self.surface = surface
        self.field = field
        self.font_ui = pygame.font.SysFont("monospace", 18, bold=True)
        self.font_msg = pygame.font.SysFont("monospace", 34, bold=True)
        self.readout = None
        self.final_score = None
        self.held = {"left": False, "right": False}

        size = self.BUTTON_SIZE
        bottom = int(field.height) - size - 12
        self.buttons = {
            "left": pygame.Rect(12, bottom, size, size),
            "right": pygame.Rect(int(field.width) - size - 12, bottom, size, size),
        }

    def button_at(self, pos):
        for name, rect in self.buttons.items():
            if rect.collidepoint(pos):
                return name
        return None

    # GameListener
    def on_readout(self, readout):
        self.readout = readout
        self.draw()

    def on_phase_changed(self, old, new, final_score):
        if new is GamePhase.GAME_OVER:
            self.final_score = final_score
        elif new in (GamePhase.IDLE, GamePhase.RUNNING):
            self.final_score = None

    def draw(self):
        if self.readout is None:
            return
        r = self.readout
        self._blit_text(f"Score: {r.score}", (10, 10))
        self._blit_text(f"Best: {r.high_score}", (10, 32))
        speed = self.font_ui.render(f"Speed x{r.speed}", True, config.COLOR_TEXT)
        self.surface.blit(speed, (int(self.field.width) - speed.get_width() - 10, 10))

        self._draw_buttons()

        if r.phase is GamePhase.IDLE:
            self._draw_panel("DRIVE MAD", "Enter to start")
        elif r.phase is GamePhase.PAUSED:
            self._draw_panel("PAUSED", "P to resume")
        elif r.phase is GamePhase.GAME_OVER:
            score = r.score if self.final_score is None else self.final_score
            self._draw_panel("GAME OVER", f"Score {score}  -  T to try again")

    def _blit_text(self, text, pos):
        surf = self.font_ui.render(text, True, config.COLOR_TEXT)
        self.surface.blit(surf, pos)

    def _draw_buttons(self):
        for name, rect in self.buttons.items():
            color = config.COLOR_BUTTON_HELD if self.held.get(name) else config.COLOR_BUTTON
            pygame.draw.rect(self.surface, color, rect, border_radius=10)
            cx, cy = rect.center
            d = -1 if name == "left" else 1
            tip = (cx + d * 14, cy)
            pts = [tip, (cx - d * 10, cy - 14), (cx - d * 10, cy + 14)]
            pygame.gfxdraw.aapolygon(self.surface, pts, config.COLOR_TEXT)
            pygame.gfxdraw.filled_polygon(self.surface, pts, config.COLOR_TEXT)

    def _draw_panel(self, title, subtitle):
        w, h = int(self.field.width), int(self.field.height)
        panel = pygame.Surface((w - 60, 130), pygame.SRCALPHA)
        panel.fill((*config.COLOR_PANEL, 220))
        rect = panel.get_rect(center=(w // 2, h // 2))
        self.surface.blit(panel, rect)

        title_surf = self.font_msg.render(title, True, config.COLOR_TEXT)
        self.surface.blit(title_surf, title_surf.get_rect(center=(w // 2, rect.centery - 22)))
        sub_surf = self.font_ui.render(subtitle, True, config.COLOR_TEXT)
        self.surface.blit(sub_surf, sub_surf.get_rect(center=(w // 2, rect.centery + 28)))

