"""Command-line front door for explorersharp.

Parses CLI options, binds an ``ExplorerSession`` to the workspace root and
dispatches to the tree/listing/hide/open commands.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from .explorer_model import build_config_watch_signature, build_tree_watch_signature
from .runtime import ExplorerSession, ListingScheduler, WatchRefreshContext
from .runtime import config
from .source_preview import DEFAULT_STYLE
from .tree_view import available_theme_names, build_tree_rows, expand_tree, render_tree, resolve_theme

CLEAR_SCREEN = "\033[H\033[2J"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _positive_float(value: str) -> float:
    """argparse type for positive float values."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def _on_off(value: str) -> bool:
    """argparse type for ``on``/``off`` switches."""
    normalized = value.strip().lower()
    if normalized in {"on", "true", "yes", "1"}:
        return True
    if normalized in {"off", "false", "no", "0"}:
        return False
    raise argparse.ArgumentTypeError(f"expected on/off, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="explorersharp",
        description="Browse a workspace with hidden folders and flattened directory chains.",
    )
    parser.add_argument("--root", default=None, help="Workspace root. Defaults to current directory.")
    parser.add_argument("--config", default=None, help="Settings file (default: per-user config dir).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug diagnostics to stderr.")
    commands = parser.add_subparsers(dest="command", required=True)

    tree = commands.add_parser("tree", help="Print the presented tree.")
    tree.add_argument("--depth", type=_positive_int, default=None, help="Levels to expand (default: all).")
    tree.add_argument("--no-color", action="store_true", help="Disable color output.")
    tree.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    tree.add_argument("--watch", action="store_true", help="Re-print whenever files or settings change.")
    tree.add_argument("--interval", type=_positive_float, default=0.5, help="Watch poll interval in seconds.")

    ls = commands.add_parser("ls", help="List presented children of one directory.")
    ls.add_argument("path", nargs="?", default=None, help="Directory relative to the root.")

    hide = commands.add_parser("hide", help="Hide a folder.")
    hide.add_argument("path", help="Folder path (relative to the root or absolute).")

    unhide = commands.add_parser("unhide", help="Unhide a folder; prompts when no path is given.")
    unhide.add_argument("path", nargs="?", default=None, help="Hidden folder to restore.")

    commands.add_parser("unhide-all", help="Unhide every hidden folder.")
    commands.add_parser("hidden", help="List hidden folders.")

    open_cmd = commands.add_parser("open", help="Print a file with syntax highlighting.")
    open_cmd.add_argument("path", help="File path (relative to the root or absolute).")
    open_cmd.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name.")
    open_cmd.add_argument("--no-color", action="store_true", help="Disable color output.")

    settings = commands.add_parser("config", help="Show or change flattening settings.")
    settings.add_argument("--flatten-single-file", type=_on_off, default=None, metavar="on|off")
    settings.add_argument("--flatten-single-child", type=_on_off, default=None, metavar="on|off")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def prompt_for_folder(hidden: list[str]) -> str | None:
    """Ask on stdin which hidden folder to restore; ``None`` when cancelled."""
    for index, folder in enumerate(hidden, start=1):
        sys.stdout.write(f"{index:>3}  {folder}\n")
    sys.stdout.flush()
    try:
        answer = input("Select a folder to unhide: ").strip()
    except EOFError:
        return None
    if not answer:
        return None
    if answer.isdigit():
        index = int(answer)
        return hidden[index - 1] if 1 <= index <= len(hidden) else None
    return answer if answer in hidden else None


def render_session_tree(session: ExplorerSession, scheduler: ListingScheduler, args: argparse.Namespace) -> str:
    """List and render the tree for the current refresh generation."""
    theme = resolve_theme(args.theme, no_color=args.no_color)
    rows = build_tree_rows(expand_tree(scheduler, args.depth))
    return render_tree(session.root.name or str(session.root), rows, theme)


def _run_tree(session: ExplorerSession, args: argparse.Namespace) -> None:
    scheduler = ListingScheduler(session.list_children)
    unsubscribe = session.subscribe(scheduler.advance_generation)
    try:
        sys.stdout.write(render_session_tree(session, scheduler, args))
        sys.stdout.flush()
        if not args.watch:
            return

        context = WatchRefreshContext()
        config_path = session.config_path or config.CONFIG_PATH
        while True:
            refreshed = context.maybe_refresh(
                session.root,
                config_path,
                session.refresh,
                build_tree_watch_signature=build_tree_watch_signature,
                build_config_watch_signature=build_config_watch_signature,
                monotonic=time.monotonic,
                poll_seconds=args.interval,
            )
            if refreshed:
                sys.stdout.write(CLEAR_SCREEN + render_session_tree(session, scheduler, args))
                sys.stdout.flush()
            time.sleep(args.interval)
    except KeyboardInterrupt:
        pass
    finally:
        unsubscribe()
        scheduler.shutdown(wait=False)


def _run_ls(session: ExplorerSession, args: argparse.Namespace) -> None:
    location = None
    if args.path:
        location = session.resolve_file(args.path)
        if not location.is_dir():
            raise SystemExit(f"Not a directory: {args.path}")
    for node in session.list_location(location):
        name = f"{node.label}/" if node.is_directory else node.label
        line = f"{name}\t{node.logical_path}"
        if node.origin_folder is not None:
            line += f"\t(from {node.origin_folder})"
        sys.stdout.write(line + "\n")


def _run_settings(session: ExplorerSession, args: argparse.Namespace) -> None:
    if args.flatten_single_file is not None:
        config.save_flatten_single_file(args.flatten_single_file, session.config_path)
    if args.flatten_single_child is not None:
        config.save_flatten_single_child(args.flatten_single_child, session.config_path)
    settings = session.settings()
    sys.stdout.write(f"flatten_single_file_directories: {'on' if settings.flatten_single_file else 'off'}\n")
    sys.stdout.write(f"flatten_single_child_directories: {'on' if settings.flatten_single_child else 'off'}\n")


def main(argv: list[str] | None = None, default_root: Path | None = None) -> None:
    """Parse CLI arguments and run one explorersharp command.

    ``default_root`` is primarily for tests; when omitted the current working
    directory is the workspace root.
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if default_root is None:
        default_root = Path.cwd()
    root = Path(args.root or default_root)
    if not root.is_dir():
        raise SystemExit(f"Workspace root not found: {root}")
    config_path = Path(args.config) if args.config else None
    session = ExplorerSession(root, config_path=config_path)

    if args.command == "tree":
        _run_tree(session, args)
    elif args.command == "ls":
        _run_ls(session, args)
    elif args.command == "hide":
        if not session.hide_folder(Path(args.path)):
            sys.stdout.write(f"Nothing to hide for {args.path}\n")
    elif args.command == "unhide":
        target = Path(args.path) if args.path else None
        message = session.unhide_folder(target, pick=prompt_for_folder)
        if message:
            sys.stdout.write(message + "\n")
    elif args.command == "unhide-all":
        session.unhide_all()
    elif args.command == "hidden":
        for folder in session.hidden_folders():
            sys.stdout.write(folder + "\n")
    elif args.command == "open":
        path = session.resolve_file(args.path)
        if not path.is_file():
            raise SystemExit(f"File not found: {args.path}")
        sys.stdout.write(session.open_file(path, style=args.style, no_color=args.no_color))
    elif args.command == "config":
        _run_settings(session, args)


if __name__ == "__main__":
    main()
