# main.py
from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QCoreApplication
from rich.color import ColorSystem
from rich.console import Console

from app.errors import AppError, WordSourceError
from app.settings import Settings, load_settings
from app.state import SessionState
from app.themes import Palette, get_theme, theme_names
from services.prompt_builder import generate_prompt
from services.typing_engine import TypingEngine
from ui.terminal import TerminalHost, raw_terminal
from utils.file_handler import load_words

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_CONFIG = Path("typesprint.json")

_COLOR_SYSTEMS = {
    "standard": ColorSystem.STANDARD,
    "256": ColorSystem.EIGHT_BIT,
    "truecolor": ColorSystem.TRUECOLOR,
    "windows": ColorSystem.WINDOWS,
}


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    # stdout is the test screen, so logs go to stderr and/or a file
    stderr = logging.StreamHandler(sys.stderr)
    stderr.setLevel(logging.INFO if verbose else logging.WARNING)
    handlers: List[logging.Handler] = [stderr]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        logging.critical("Unhandled exception", exc_info=(exctype, value, tb))
        sys.exit(1)

    sys.excepthook = excepthook


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="typesprint",
        description="Timed typing test in the terminal.",
    )
    parser.add_argument("-t", "--time", type=int, dest="time_limit",
                        help="test length in seconds (default 30)")
    parser.add_argument("-w", "--words", type=int, dest="word_count",
                        help="number of words in the prompt (default 50)")
    parser.add_argument("--word-list", dest="word_list",
                        help="word list name under words/ or a path to a JSON file")
    parser.add_argument("--width", type=int, dest="terminal_width",
                        help="characters per line before wrapping at a space (default 70)")
    parser.add_argument("--theme", choices=theme_names(), help="colour theme")
    parser.add_argument("--no-color", action="store_true", help="disable colours")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG,
                        help="JSON settings file (default ./typesprint.json)")
    parser.add_argument("--log-file", help="also write logs to this file")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def resolve_settings(args: argparse.Namespace) -> Settings:
    settings = load_settings(args.config).merged(
        time_limit=args.time_limit,
        word_count=args.word_count,
        word_list=args.word_list,
        terminal_width=args.terminal_width,
        theme=args.theme,
    )
    if args.no_color:
        settings = settings.merged(color=False)
    return settings.validate()


def make_palette(settings: Settings) -> Palette:
    theme = get_theme(settings.theme)
    if not settings.color:
        return Palette.plain()
    # rich honours NO_COLOR and non-tty output here
    detected = Console(file=sys.stdout).color_system
    return Palette.from_theme(theme, _COLOR_SYSTEMS.get(detected) if detected else None)


def initial_session(settings: Settings) -> SessionState:
    words = load_words(settings.word_list)
    prompt = generate_prompt(words, settings.word_count)
    return SessionState.new(prompt, time_limit=settings.time_limit)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    try:
        settings = resolve_settings(args)
        palette = make_palette(settings)
        session = initial_session(settings)
    except WordSourceError as e:
        logging.error("failed to get words: %s", e)
        return 1
    except AppError as e:
        logging.error("error: %s", e)
        return 1

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    app.setApplicationName("typesprint")

    in_fd = sys.stdin.fileno()
    host = TerminalHost(
        TypingEngine(session),
        palette,
        width=settings.terminal_width,
        out=sys.stdout,
        in_fd=in_fd,
    )
    host.finished.connect(app.quit)

    with raw_terminal(in_fd):
        host.start()
        app.exec()
    return 0


if __name__ == "__main__":
    sys.exit(main())
