#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Stream Inspection CLI - inspect serialized instruction streams

Usage:
    python scripts/stream_cli.py summary stream.json
    python scripts/stream_cli.py check stream.json --strict
    python scripts/stream_cli.py replay stream.json --container content_left
"""

import sys
import argparse
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.logging_config import setup_logger
from config.settings import settings
from core.layout import ResolvedInstruction, StreamReplayer
from core.stream import (
    Container,
    InstructionKind,
    InstructionStream,
    StreamDecodeError,
    StreamError,
    StreamValidator,
)

logger = setup_logger('docstream.cli', level=settings.log_level, log_file=settings.log_file)


def load_stream(path: str) -> InstructionStream:
    """Read and decode a stream JSON file"""
    try:
        json_str = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise StreamDecodeError(f"{path} is not UTF-8 text: {e}") from e
    return InstructionStream.from_json(json_str)


def describe(resolved: ResolvedInstruction) -> str:
    """One-line description of a resolved entry"""
    instruction = resolved.instruction
    kind = instruction.kind
    state = resolved.state

    if kind is InstructionKind.SIMPLE_TEXT:
        text = instruction.text if len(instruction.text) <= 40 else instruction.text[:37] + "..."
        detail = f"{text!r} [{state.font}, {state.text_color}]"
    elif kind is InstructionKind.ATTRIBUTED_TEXT:
        detail = f"{instruction.text.text[:40]!r} [self-styled]"
    elif kind is InstructionKind.FONT:
        detail = str(instruction.font)
    elif kind is InstructionKind.TEXT_COLOR:
        detail = str(instruction.color)
    elif kind is InstructionKind.COLUMN_SECTION:
        detail = f"enable {instruction.columns}" if instruction.enabled else "disable"
    elif kind is InstructionKind.INDENTATION:
        detail = f"{'left' if instruction.left else 'right'}={instruction.indentation}"
    elif kind is InstructionKind.IMAGE_ROW:
        detail = f"{len(instruction.images)} images, spacing={instruction.spacing}"
    else:
        detail = ""

    layout = f"indent={state.left_indent:g}/{state.right_indent:g}"
    if state.columns:
        layout += f" columns={state.columns}"
    if state.absolute_offset is not None:
        layout += f" offset={state.absolute_offset:g}"

    return f"{resolved.index:>5}  {resolved.container.value:<15} {kind.value:<16} {detail}  ({layout})"


def cmd_summary(args):
    """Show stream statistics"""
    stream = load_stream(args.file)

    print("\n" + "="*70)
    print(f"STREAM: {args.file}")
    print("="*70)
    print(f"   Version: {stream.metadata.version}")
    print(f"   Created: {stream.metadata.created_at or '-'}")
    print(f"   Entries: {len(stream)}")

    print("\nBy kind:")
    for kind, count in sorted(stream.get_statistics().items()):
        print(f"   {kind:<18} {count}")

    print("\nBy container:")
    for container in stream.containers():
        print(f"   {container.value:<18} {len(stream.for_container(container))}")

    print("="*70 + "\n")
    return 0


def cmd_check(args):
    """Run hand-off diagnostics"""
    stream = load_stream(args.file)
    errors = StreamValidator(strict=args.strict).validate(stream)

    if not errors:
        print(f"OK: {len(stream)} entries, no diagnostics")
        return 0

    print(f"{len(errors)} diagnostic(s):")
    for error in errors:
        print(f"   - {error}")

    return 1 if args.strict else 0


def cmd_replay(args):
    """Print every entry with its resolved state"""
    stream = load_stream(args.file)
    result = StreamReplayer().replay(stream)

    entries = result.entries
    if args.container:
        entries = result.for_container(Container(args.container))

    for resolved in entries:
        print(describe(resolved))

    if result.implicitly_closed:
        closed = ", ".join(c.value for c in result.implicitly_closed)
        print(f"\nColumn sections closed at end of content: {closed}")
    if result.ignored_disables:
        print(f"Unmatched disable_columns at: {result.ignored_disables}")

    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Inspect serialized layout instruction streams",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Summary command
    summary_parser = subparsers.add_parser('summary', help='Show stream statistics')
    summary_parser.add_argument('file', help='Stream JSON file')

    # Check command
    check_parser = subparsers.add_parser('check', help='Run stream diagnostics')
    check_parser.add_argument('file', help='Stream JSON file')
    check_parser.add_argument('--strict', action='store_true', help='Exit 1 on any diagnostic')

    # Replay command
    replay_parser = subparsers.add_parser('replay', help='Print resolved per-container state')
    replay_parser.add_argument('file', help='Stream JSON file')
    replay_parser.add_argument('--container', choices=[c.value for c in Container], help='Only this container')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Route to command handlers
    commands = {
        'summary': cmd_summary,
        'check': cmd_check,
        'replay': cmd_replay,
    }

    try:
        return commands[args.command](args)
    except (OSError, StreamError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
