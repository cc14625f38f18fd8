import cv2

from snake_arcade.config import CLASSIC, FPS, WINDOW_NAME, WINDOW_SCALE
from snake_arcade.game import Game
from snake_arcade.render import QUIT_KEYS, RESTART_KEYS, draw_frame, key_to_intent, show_frame


def run(config=CLASSIC, seed=None, scale=WINDOW_SCALE, fps=FPS, window=WINDOW_NAME):
    """
    Play Snake in an OpenCV window. Arrow keys / WASD to steer,
    R to restart after a game over, ESC or q to quit.

    Returns the last score.
    """
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps!r}")
    game = Game(config, seed=seed)
    frame_ms = max(1, 1000 // fps)
    pending = None  # last direction key, kept until a move consumes it
    img = None
    best = 0

    cv2.namedWindow(window)
    try:
        while True:
            img = draw_frame(game, img)
            show_frame(img, window, scale)

            key = cv2.waitKey(frame_ms) & 0xFF
            if key in QUIT_KEYS:
                break

            intent = key_to_intent(key)
            if intent is not None:
                pending = intent

            was_over = game.game_over
            moved = game.update(pending, restart=key in RESTART_KEYS)
            if moved:
                pending = None

            if game.game_over and not was_over:
                best = max(best, game.score)
                print(f"Game over ({game.collision}) - score: {game.score}  best: {best}")
            elif was_over and not game.game_over:
                pending = None
                print("Restarted")
    finally:
        cv2.destroyAllWindows()

    return game.score
