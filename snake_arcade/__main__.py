"""
Snake arcade command line.

Examples:
  python -m snake_arcade play
  python -m snake_arcade play --preset compact --seed 7
  python -m snake_arcade train --timesteps 20000 --iterations 5
  python -m snake_arcade watch models/PPO/100000.zip
"""

import argparse
import sys

import cv2

from snake_arcade.config import FPS, PRESETS, WINDOW_SCALE, GameConfig


def positive_int(value):
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_config(args):
    base = PRESETS[args.preset]
    width, height = args.grid if args.grid else (base.grid_width, base.grid_height)
    tile = args.tile if args.tile is not None else base.tile_size
    return GameConfig(width, height, tile, food_avoids_snake=args.avoid_snake)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='snake-arcade',
        description='Minimal Snake arcade game',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    # Grid options shared by every subcommand
    grid = argparse.ArgumentParser(add_help=False)
    grid.add_argument(
        '--preset',
        choices=sorted(PRESETS),
        default='classic',
        help='Grid preset: classic 320x240 @5px, compact 160x120 @3px (default: classic)'
    )
    grid.add_argument(
        '--grid',
        type=int,
        nargs=2,
        metavar=('WIDTH', 'HEIGHT'),
        help='Grid size in cells, overrides the preset'
    )
    grid.add_argument(
        '--tile',
        type=positive_int,
        help='Tile size in pixels, overrides the preset'
    )
    grid.add_argument(
        '--avoid-snake',
        action='store_true',
        help='Never spawn food on a cell occupied by the snake'
    )

    seeded = argparse.ArgumentParser(add_help=False)
    seeded.add_argument(
        '--seed',
        type=int,
        help='Random seed for food placement and the agent'
    )

    sub = parser.add_subparsers(dest='command', required=True)

    play = sub.add_parser('play', parents=[grid, seeded], help='Play with the keyboard')
    play.add_argument('--scale', type=positive_int, default=WINDOW_SCALE,
                      help=f'Window scale factor (default: {WINDOW_SCALE})')
    play.add_argument('--fps', type=positive_int, default=FPS,
                      help=f'Frames per second (default: {FPS})')

    train = sub.add_parser('train', parents=[grid, seeded], help='Train a PPO agent')
    train.add_argument('--timesteps', type=int, default=10_000,
                       help='Timesteps per checkpoint (default: 10000)')
    train.add_argument('--iterations', type=int, default=10,
                       help='Number of checkpoints (default: 10)')
    train.add_argument('--models-dir', default='models/PPO')
    train.add_argument('--log-dir', default='logs')
    train.add_argument('--max-steps', type=int, default=5000,
                       help='Episode truncation limit (default: 5000)')

    watch = sub.add_parser('watch', parents=[grid, seeded], help='Watch a trained agent play')
    watch.add_argument('model', help='Path to a saved PPO .zip checkpoint')
    watch.add_argument('--episodes', type=int, default=3)

    sub.add_parser('check', parents=[grid], help='Validate the Gymnasium environment')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        if args.command == 'play':
            from snake_arcade.human_play import run
            run(config, seed=args.seed, scale=args.scale, fps=args.fps)
        elif args.command == 'train':
            from snake_arcade.train import train
            train(config, timesteps=args.timesteps, iterations=args.iterations,
                  models_dir=args.models_dir, log_dir=args.log_dir, max_steps=args.max_steps,
                  seed=args.seed)
        elif args.command == 'watch':
            from snake_arcade.train import watch
            watch(args.model, config, episodes=args.episodes, seed=args.seed)
        elif args.command == 'check':
            from snake_arcade.train import check
            check(config)
            print("Environment OK")
    except KeyboardInterrupt:
        print("\nCancelled by user")
        return 1
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except cv2.error as e:
        print(f"Window error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
