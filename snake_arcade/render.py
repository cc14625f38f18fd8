import cv2
import numpy as np

from snake_arcade.config import WINDOW_NAME, WINDOW_SCALE
from snake_arcade.game import Direction

# BGR colors, OpenCV order
BACKGROUND = (0, 0, 0)
SNAKE_COLOR = (0, 255, 0)
FOOD_COLOR = (0, 0, 255)
TEXT_COLOR = (255, 255, 255)
FONT = cv2.FONT_HERSHEY_PLAIN
FONT_SCALE = 0.8

# OpenCV key codes (arrows as reported by waitKey on Linux) and WASD
KEY_LEFT, KEY_UP, KEY_RIGHT, KEY_DOWN = 81, 82, 83, 84
KEY_ESC = 27
KEYS = {
    KEY_LEFT: Direction.LEFT,
    KEY_RIGHT: Direction.RIGHT,
    KEY_DOWN: Direction.DOWN,
    KEY_UP: Direction.UP,
    ord("a"): Direction.LEFT,
    ord("d"): Direction.RIGHT,
    ord("s"): Direction.DOWN,
    ord("w"): Direction.UP,
}
# Uppercase R (82) collides with the Up arrow once masked to 8 bits
RESTART_KEYS = {ord("r")}
QUIT_KEYS = {KEY_ESC, ord("q")}


def key_to_intent(key):
    """Direction for an OpenCV key code, or None when the key does not steer."""
    return KEYS.get(key)


def _draw_tile(img, point, tile, color):
    x, y = point.x * tile, point.y * tile
    cv2.rectangle(img, (x, y), (x + tile - 1, y + tile - 1), color, -1)


def _draw_centered(img, text, y):
    (w, _), _ = cv2.getTextSize(text, FONT, FONT_SCALE, 1)
    x = max(0, (img.shape[1] - w) // 2)
    cv2.putText(img, text, (x, y), FONT, FONT_SCALE, TEXT_COLOR, 1, cv2.LINE_AA)


def draw_frame(game, img=None):
    """Draw the current game state onto a BGR image (allocated if needed)."""
    config = game.config
    shape = (config.screen_height, config.screen_width, 3)
    if img is None or img.shape != shape:
        img = np.zeros(shape, dtype=np.uint8)
    img[:] = BACKGROUND

    tile = config.tile_size
    for point in game.snake.body:
        # Heads past the wall are only transient, nothing to draw there
        if game.in_bounds(point):
            _draw_tile(img, point, tile, SNAKE_COLOR)
    _draw_tile(img, game.food.position, tile, FOOD_COLOR)

    if game.game_over:
        mid = config.screen_height // 2
        _draw_centered(img, "Game Over", mid)
        _draw_centered(img, "Press 'R' to restart", mid + 16)

    cv2.putText(img, f"Score: {game.score}", (5, config.screen_height - 5),
                FONT, FONT_SCALE, TEXT_COLOR, 1, cv2.LINE_AA)
    return img


def show_frame(img, window=WINDOW_NAME, scale=WINDOW_SCALE):
    if scale != 1:
        img = cv2.resize(img, None, fx=scale, fy=scale, interpolation=cv2.INTER_NEAREST)
    cv2.imshow(window, img)
