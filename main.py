# main.py
import argparse

from config import AppConfig
from runners.run_bot import main as bot
from runners.run_snake import main as snake

def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("mode", choices=["bot", "headless", "play"])
    p.add_argument("--games", type=int, default=None)
    p.add_argument("--fps", type=int, default=None)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-path", default=None)
    return p.parse_args()

def main():
    args = parse_args()
    overrides = {k: v for k, v in {
        "games": args.games, "fps": args.fps, "seed": args.seed, "log_path": args.log_path,
    }.items() if v is not None}
    cfg = AppConfig().with_(**overrides)

    if args.mode == "bot":
        bot(cfg)
    elif args.mode == "headless":
        bot(cfg, headless=True)
    elif args.mode == "play":
        snake(cfg)

if __name__ == "__main__":
    main()
