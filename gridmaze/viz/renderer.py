import pygame
from gridmaze.core.grid import Grid

class Renderer:
    """Pan/zoom window over a finished grid. Mouse wheel zooms, drag pans."""

    COLOR_BG = (10, 10, 10)
    COLOR_CELL = (40, 40, 40)
    COLOR_WALL = (200, 200, 200)
    COLOR_SOLUTION = (230, 20, 20)
    COLOR_START = (40, 180, 70)
    COLOR_END = (100, 120, 255)

    def __init__(self, grid: Grid, width=1280, height=720, title=None):
        self.grid = grid
        self.screen_width = width
        self.screen_height = height
        self.title = title or grid.summary()

        # Camera
        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1
        self.min_cell_size = 0.001
        self.max_cell_size = 100.0

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire grid on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        zoom_x = available_w / self.grid.width
        zoom_y = available_h / self.grid.height

        # Taking minimum zoom to fit both dimensions
        self.cell_size = min(zoom_x, zoom_y)
        # Small grids fit at large cell sizes, zooming in must still work
        self.max_cell_size = max(100.0, self.cell_size * 10)

        # Center
        total_maze_w = self.grid.width * self.cell_size
        total_maze_h = self.grid.height * self.cell_size

        self.offset_x = (self.screen_width - total_maze_w) / 2
        self.offset_y = (self.screen_height - total_maze_h) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"gridmaze - {self.title}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)

        # Initial fit
        self.fit_to_screen()

    def world_to_screen(self, wx, wy):
        sx = wx * self.cell_size + self.offset_x
        sy = wy * self.cell_size + self.offset_y
        return sx, sy

    def screen_to_world(self, sx, sy):
        wx = (sx - self.offset_x) / self.cell_size
        wy = (sy - self.offset_y) / self.cell_size
        return int(wx), int(wy)

    def zoom_at(self, mx, my, zoom_in: bool):
        """Zoom keeping the world point under (mx, my) fixed on screen."""
        wx = (mx - self.offset_x) / self.cell_size
        wy = (my - self.offset_y) / self.cell_size

        if zoom_in:
            self.cell_size *= self.zoom_speed
        else:
            self.cell_size /= self.zoom_speed
        self.cell_size = max(self.min_cell_size, min(self.max_cell_size, self.cell_size))

        self.offset_x = mx - wx * self.cell_size
        self.offset_y = my - wy * self.cell_size

    def visible_range(self):
        """Cell range (start_x, start_y, end_x, end_y) currently on screen."""
        start_x = max(0, int((-self.offset_x) / self.cell_size))
        start_y = max(0, int((-self.offset_y) / self.cell_size))
        end_x = min(self.grid.width, int((self.screen_width - self.offset_x) / self.cell_size) + 1)
        end_y = min(self.grid.height, int((self.screen_height - self.offset_y) / self.cell_size) + 1)
        return start_x, start_y, end_x, end_y

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.MOUSEWHEEL:
                mx, my = pygame.mouse.get_pos()
                self.zoom_at(mx, my, event.y > 0)

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]: # Left or Right drag
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)
        start_x, start_y, end_x, end_y = self.visible_range()
        size = int(self.cell_size) + 1
        draw_walls = self.cell_size > 4.0
        grid = self.grid

        # 1. Cell backgrounds
        for y in range(start_y, end_y):
            for x in range(start_x, end_x):
                idx = y * grid.width + x
                state = grid.states[idx]
                if state == Grid.EXCLUDED:
                    continue
                px, py = self.world_to_screen(x, y)
                if idx == grid.start_index:
                    color = self.COLOR_START
                elif idx == grid.end_index:
                    color = self.COLOR_END
                elif state == Grid.SOLUTION:
                    color = self.COLOR_SOLUTION
                else:
                    color = self.COLOR_CELL
                pygame.draw.rect(self.surface, color, (int(px), int(py), size, size))

        # 2. Walls
        if draw_walls:
            for y in range(start_y, end_y):
                for x in range(start_x, end_x):
                    idx = y * grid.width + x
                    if grid.states[idx] == Grid.EXCLUDED:
                        continue
                    cell = grid.cells[idx]
                    px, py = self.world_to_screen(x, y)
                    px, py = int(px), int(py)

                    if cell & Grid.WALL_BOTTOM:
                        pygame.draw.line(self.surface, self.COLOR_WALL, (px, py + size), (px + size, py + size), 1)
                    if cell & Grid.WALL_RIGHT:
                        pygame.draw.line(self.surface, self.COLOR_WALL, (px + size, py), (px + size, py + size), 1)
                    if cell & Grid.WALL_TOP:
                        pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px + size, py), 1)
                    if cell & Grid.WALL_LEFT:
                        pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px, py + size), 1)

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        info = [
            f"FPS: {fps}",
            f"Size: {self.grid.width}x{self.grid.height} ({len(self.grid):,})",
            f"Seed: {self.grid.seed}",
            f"Zoom: {self.cell_size:.2f}",
        ]

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self):
        while self.running:
            self.handle_input()
            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()
            self.clock.tick(60)

        pygame.quit()
