"""
Entry point for the SignAI camera assistant.

Usage examples:
    python sign_server.py                       # debug window, keyboard controls
    python sign_server.py --mode headless       # no window, commits logged and published
    python sign_server.py --cooldown 500 --language fr
"""

from __future__ import annotations

import argparse


def build_overrides(args: argparse.Namespace) -> dict:
    """Command line values that take precedence over config.json."""
    overrides: dict = {}
    if args.cooldown is not None:
        overrides["stabilizer"] = {"cooldown_ms": args.cooldown}
    if args.camera is not None:
        overrides["camera"] = {"index": args.camera}
    if args.publish is not None:
        overrides["network"] = {"publish": args.publish or None}
    if args.language is not None:
        overrides["translation"] = {"target": args.language}
    if args.no_speech:
        overrides["speech"] = {"enabled": False}
    return overrides


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="SignAI sign-language-to-text assistant")
    parser.add_argument(
        "--mode",
        choices=("full", "headless"),
        default="full",
        help="'full' shows the debug window with keyboard controls, 'headless' only logs and publishes.",
    )
    parser.add_argument("--config", default="config.json", help="JSON config file, hot-reloaded.")
    parser.add_argument("--cooldown", type=int, help="Milliseconds between committed gestures.")
    parser.add_argument("--camera", type=int, help="Camera index for OpenCV.")
    parser.add_argument(
        "--publish",
        help="ZeroMQ bind address for gesture events; empty string disables publishing.",
    )
    parser.add_argument("--language", help="Translation target language code (e.g. es, fr, hi).")
    parser.add_argument("--no-speech", action="store_true", help="Disable text-to-speech.")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)
    if args.cooldown is not None and args.cooldown < 0:
        parser.error("--cooldown must be >= 0")
    return args


def main(argv=None) -> None:
    args = parse_args(argv)

    from signai.helpers import setup_logging
    from signai.main_loop import main as run_main_loop

    setup_logging(args.log_level)
    run_main_loop(
        build_overrides(args),
        config_path=args.config,
        headless=args.mode == "headless",
    )


if __name__ == "__main__":
    main()
