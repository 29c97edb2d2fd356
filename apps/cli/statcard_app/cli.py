"""CLI entrypoints for card rendering, hashing and similarity checks."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from statcard_core import CardService, decode_record, load_config, save_config, with_overrides
from statcard_core.config import CardConfig, config_path
from statcard_core.logging_setup import configure_logging
from statcard_renderer import SIMILAR_THRESHOLD, PillowBackend, StatCardError, hamming_distance


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str, ensure_ascii=False))


def _load(args: argparse.Namespace) -> CardConfig:
    cfg = load_config(Path(args.config).expanduser() if args.config else None)
    return with_overrides(cfg, assets=args.assets, fonts=args.fonts)


def _read_record(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).expanduser().read_text(encoding="utf-8")


def cmd_render(args: argparse.Namespace) -> int:
    service = CardService(_load(args))
    try:
        request = decode_record(_read_record(args.record))
    except (StatCardError, OSError) as exc:
        _print_json({"success": False, "error": str(exc), "output_path": None})
        return 1

    result = service.render(request)
    _print_json({"success": result.ok, "error": result.error, "output_path": result.output_path})
    return 0 if result.ok else 1


def cmd_hash(args: argparse.Namespace) -> int:
    try:
        image = PillowBackend().load(Path(args.image))
    except StatCardError as exc:
        _print_json({"success": False, "error": str(exc), "image": args.image})
        return 1
    full = image.perceptual_hash()
    payload = {"image": args.image, "hash": full}
    if args.length:
        payload["random_hash"] = image.random_hash(args.length)
    _print_json(payload)
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    if args.hashes:
        hash_a, hash_b = args.first, args.second
    else:
        backend = PillowBackend()
        try:
            hash_a = backend.load(Path(args.first)).perceptual_hash()
            hash_b = backend.load(Path(args.second)).perceptual_hash()
        except StatCardError as exc:
            _print_json({"success": False, "error": str(exc)})
            return 1

    distance = hamming_distance(hash_a, hash_b)
    _print_json(
        {
            "distance": distance,
            "comparable": distance >= 0,
            "similar": 0 <= distance <= args.threshold,
            "threshold": args.threshold,
        }
    )
    return 0 if distance >= 0 else 2


def cmd_config(args: argparse.Namespace) -> int:
    path = Path(args.path).expanduser() if args.path else config_path()
    if args.config_cmd == "init":
        written = save_config(CardConfig(), path)
        _print_json({"written": written})
        return 0
    _print_json(asdict(load_config(path)))
    return 0


def _add_config_options(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--config", default=None, help="Settings file (defaults to the per-user config)")
    cmd.add_argument("--assets", default=None, help="Override the asset root directory")
    cmd.add_argument("--fonts", default=None, help="Override the font root directory")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="statcard", description="Stat card renderer and image tools")
    sub = parser.add_subparsers(dest="command", required=True)

    render_cmd = sub.add_parser("render", help="Render a card from a positional record")
    render_cmd.add_argument("--record", default="-", help="Record file, or - for stdin")
    _add_config_options(render_cmd)
    render_cmd.set_defaults(func=cmd_render)

    hash_cmd = sub.add_parser("hash", help="Print the perceptual hash of an image")
    hash_cmd.add_argument("image")
    hash_cmd.add_argument("--length", type=int, default=0, help="Also print a random slice of this length")
    hash_cmd.set_defaults(func=cmd_hash)

    compare_cmd = sub.add_parser("compare", help="Hamming distance between two images or hashes")
    compare_cmd.add_argument("first")
    compare_cmd.add_argument("second")
    compare_cmd.add_argument("--hashes", action="store_true", help="Treat arguments as hash strings")
    compare_cmd.add_argument("--threshold", type=float, default=SIMILAR_THRESHOLD)
    compare_cmd.set_defaults(func=cmd_compare)

    config_cmd = sub.add_parser("config", help="Show or initialize settings")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    for name, text in (("show", "Print effective settings"), ("init", "Write default settings")):
        c = config_sub.add_parser(name, help=text)
        c.add_argument("--path", default=None)
        c.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(console=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
