from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from devblog.config import DEFAULT_CONFIG_PATH, ConfigError, SiteConfig
from devblog.models.post import ContentError
from devblog.services.compose_converter import ComposeConverter, Direction
from devblog.services.content_service import ContentService
from devblog.services.feed_service import FeedService

logger = logging.getLogger("devblog")


class _NoopScheduler:
    """The CLI converts synchronously and never debounces."""

    def schedule(self, delay_ms, callback):  # noqa: ARG002
        return None

    def cancel(self, handle) -> None:  # noqa: ARG002
        return None


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _cmd_gui(config: SiteConfig, _args: argparse.Namespace) -> int:
    from devblog.ui.main_window import MainWindow

    window = MainWindow(config)
    window.mainloop()
    return 0


def _cmd_feed(config: SiteConfig, args: argparse.Namespace) -> int:
    posts = ContentService(config.content_dir).load_all()
    feed = FeedService(config.title, config.description, config.site_url)
    if args.output == "-":
        sys.stdout.write(feed.render(posts) + "\n")
        return 0
    feed.write(posts, Path(args.output) if args.output else config.feed_path)
    return 0


def _guess_direction(path: Path, text: str) -> Direction:
    if path.suffix.lower() in (".yml", ".yaml"):
        return Direction.MANIFEST_TO_COMMANDS
    if text.lstrip().startswith("docker "):
        return Direction.COMMANDS_TO_MANIFEST
    return Direction.MANIFEST_TO_COMMANDS


def _cmd_convert(_config: SiteConfig, args: argparse.Namespace) -> int:
    path = Path(args.file)
    text = sys.stdin.read() if args.file == "-" else path.read_text(encoding="utf-8")
    if args.to == "commands":
        direction = Direction.MANIFEST_TO_COMMANDS
    elif args.to == "manifest":
        direction = Direction.COMMANDS_TO_MANIFEST
    else:
        direction = _guess_direction(path, text)
    converter = ComposeConverter(_NoopScheduler(), initial_manifest="")
    result = converter.convert(direction, text)
    if not result.ok:
        sys.stderr.write(f"{result.error}\n")
        return 1
    sys.stdout.write(result.text + "\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="devblog", description="Blog tools and Docker widgets")
    parser.add_argument(
        "--config", type=Path, default=DEFAULT_CONFIG_PATH, help="site config (JSON)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("gui", help="open the desktop window (default)")

    feed = sub.add_parser("feed", help="write the RSS feed")
    feed.add_argument("-o", "--output", default=None, help="output file, '-' for stdout")

    convert = sub.add_parser("convert", help="convert a compose file or docker run commands")
    convert.add_argument("file", help="input file, '-' for stdin")
    convert.add_argument("--to", choices=("commands", "manifest"), default=None)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    handlers = {"gui": _cmd_gui, "feed": _cmd_feed, "convert": _cmd_convert}
    try:
        config = SiteConfig.load(args.config)
        return handlers[args.command or "gui"](config, args)
    except (ConfigError, ContentError, OSError, UnicodeDecodeError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
