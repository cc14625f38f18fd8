from dataclasses import dataclass

# Speed is counted in frames per move: smaller = faster
INITIAL_SPEED = 10
MIN_SPEED = 2
GAME_OVER_SPEED = 10

# Human play
FPS = 60
WINDOW_SCALE = 2
WINDOW_NAME = "Snake Game"


@dataclass(frozen=True)
class GameConfig:
    """Grid dimensions in cells, plus the pixel size of one cell."""

    grid_width: int = 64
    grid_height: int = 48
    tile_size: int = 5
    food_avoids_snake: bool = False

    def __post_init__(self):
        for name in ("grid_width", "grid_height", "tile_size"):
            value = getattr(self, name)
            if int(value) != value or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

    @classmethod
    def from_screen(cls, width, height, tile_size, food_avoids_snake=False):
        return cls(width // tile_size, height // tile_size, tile_size, food_avoids_snake)

    @property
    def screen_width(self):
        return self.grid_width * self.tile_size

    @property
    def screen_height(self):
        return self.grid_height * self.tile_size

    @property
    def center(self):
        return self.grid_width // 2, self.grid_height // 2


CLASSIC = GameConfig.from_screen(320, 240, 5)
COMPACT = GameConfig.from_screen(160, 120, 3)

PRESETS = {
    "classic": CLASSIC,
    "compact": COMPACT,
}
