"""TileWeaver - edit tile weights and regenerate tiled output."""

import argparse
import asyncio
import logging
import shutil
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError
import yaml

from tileweaver.config import (
    EditorSettings,
    SAMPLE_DOCUMENT,
    load_settings,
    resolve_config_path,
)
from tileweaver.core.errors import TileWeaverError
from tileweaver.logging_config import setup_logging

logger = logging.getLogger("tileweaver.main")


def parse_assignment(text: str) -> tuple[str, float]:
    """Parse a NAME=VALUE weight assignment."""
    name, sep, value = text.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got {text!r}")
    try:
        return name.strip(), float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Weight for {name.strip()!r} is not a number: {value!r}")


def build_session(settings: EditorSettings, progress=None):
    """Create a session wired to the document store and a tiled generator."""
    from tileweaver.generation import TiledGenerator
    from tileweaver.services import EditSession
    from tileweaver.storage import DocumentStore

    store = DocumentStore(settings.resources_dir, settings.document_name)
    generator = TiledGenerator(
        width=settings.output_width,
        height=settings.output_height,
        seed=settings.seed,
        max_retries=settings.max_retries,
        progress=progress,
    )
    return EditSession(settings, store, generator=generator)


def init_document(settings: EditorSettings) -> int:
    """Copy the bundled sample document into the resources directory.

    Returns:
        Exit code
    """
    target = settings.document_path
    if target.exists():
        print(f"Warning: Overwriting existing document at {target}")

    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(SAMPLE_DOCUMENT, target)

    print(f"Sample tileset written to {target}")
    print()
    print("Run 'tileweaver --list' to see tile weights")
    print("Run 'tileweaver' to edit them")
    return 0


def list_tiles(settings: EditorSettings) -> int:
    """Print every tile and its weight.

    Returns:
        Exit code
    """
    session = build_session(settings)
    count = session.load()

    print(f"Tiles ({count}):")
    width = max((len(name) for name in session.registry.names), default=0)
    for record in session.registry:
        print(f"  {record.name:<{width}}  {record.weight}")
    return 0


async def set_weights(settings: EditorSettings, assignments: list[tuple[str, float]]) -> int:
    """Apply weight edits and write the document once.

    Returns:
        Exit code
    """
    session = build_session(settings)
    session.load()

    status = 0
    for name, value in assignments:
        try:
            weight = session.set_weight(name, value)
        except KeyError:
            print(f"Error: No tile named {name!r}")
            status = 1
            continue
        print(f"  {name}: {weight}")

    session.close()
    if session.saver.last_error is not None:
        print(f"Error: {session.saver.last_error}")
        return 1
    return status


def regenerate_headless(settings: EditorSettings) -> int:
    """Regenerate once and print the output.

    Returns:
        Exit code
    """
    from tqdm import tqdm
    from tileweaver.observe.tui.widgets.output_view import get_tile_render

    total = settings.output_width * settings.output_height
    pbar = tqdm(total=total, desc="  Generating", unit="cells")
    last_progress = [0]

    def update_progress(current: int, total: int) -> None:
        if current < last_progress[0]:
            # A retry started from scratch
            pbar.reset()
            last_progress[0] = 0
        delta = current - last_progress[0]
        if delta > 0:
            pbar.update(delta)
            last_progress[0] = current

    session = build_session(settings, progress=update_progress)
    session.load()
    try:
        produced = session.regenerate()
    finally:
        pbar.close()

    print(f"Generated {produced} tiles")
    print()
    for row in session.generator.as_rows():
        print("".join(get_tile_render(name)[0] if name else " " for name in row))
    return 0


async def run_tui_mode(settings: EditorSettings) -> int:
    """Run the editor TUI.

    Returns:
        Exit code
    """
    from tileweaver.observe.tui import run_tui

    if not settings.document_path.exists():
        print(f"Error: No tile document at {settings.document_path}")
        print("Run with --init to create one from the bundled sample.")
        return 1

    session = build_session(settings)
    try:
        await run_tui(session)
    finally:
        session.close()
    return 0


def main() -> int:
    """Main entry point for TileWeaver."""
    # Load environment variables first
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="TileWeaver - edit tile weights for a tiled WFC generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tileweaver                        # Edit weights in the TUI
  tileweaver --init                 # Write the sample tileset
  tileweaver --list                 # Show tile weights
  tileweaver --set grass=15 sand=2  # Edit weights without the TUI
  tileweaver --regenerate --seed 7  # Generate once and print
        """,
    )
    parser.add_argument("--config", type=Path, help="Settings file (default: $TILEWEAVER_CONFIG or ./tileweaver.yaml)")
    parser.add_argument("--resources", type=Path, help="Directory holding tile documents")
    parser.add_argument("--document", help="Document name, without the .xml suffix")
    parser.add_argument("--data", type=Path, help="Data directory for logs")
    parser.add_argument(
        "--init",
        action="store_true",
        help="Write the bundled sample document (caution: overwrites existing)",
    )
    parser.add_argument("--list", action="store_true", help="List tiles and weights and exit")
    parser.add_argument(
        "--set",
        type=parse_assignment,
        nargs="+",
        metavar="NAME=VALUE",
        help="Set primary weights and save",
    )
    parser.add_argument("--regenerate", action="store_true", help="Generate once and print the output")
    parser.add_argument("--width", type=int, help="Output width in cells")
    parser.add_argument("--height", type=int, help="Output height in cells")
    parser.add_argument("--seed", type=int, help="Random seed for generation")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to console",
    )

    args = parser.parse_args()

    try:
        settings = load_settings(resolve_config_path(args.config)).with_overrides(
            resources_dir=args.resources,
            document_name=args.document,
            data_dir=args.data,
            output_width=args.width,
            output_height=args.height,
            seed=args.seed,
        )
    except (ValidationError, yaml.YAMLError) as e:
        print(f"Error: Invalid settings: {e}")
        return 2

    tui_mode = not (args.init or args.list or args.set or args.regenerate)

    # Setup logging; the TUI owns the terminal so console logging stays off
    console_level = logging.DEBUG if args.debug else logging.WARNING
    log_path = setup_logging(settings.data_dir, console_level=console_level, console=not tui_mode)

    if not tui_mode:
        from tileweaver import __version__
        print(f"TileWeaver v{__version__}")
        print(f"Document: {settings.document_path.absolute()}")
        print(f"Log file: {log_path}")
        print()

    try:
        if args.init:
            return init_document(settings)

        if args.list:
            return list_tiles(settings)

        if args.set:
            status = asyncio.run(set_weights(settings, args.set))
            if status or not args.regenerate:
                return status

        if args.regenerate:
            return regenerate_headless(settings)

        # Default: TUI mode
        return asyncio.run(run_tui_mode(settings))

    except TileWeaverError as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
