"""
Command-line interface for the agricultural document classifier.

Usage:
    python -m app classify --title "Maize guide" --file guide.txt [--month 4]
    python -m app classify-source --source-id <id>
"""

import argparse
import asyncio
import json
import sys
from datetime import UTC, datetime
from typing import List, Optional

from app.config import get_settings
from app.services.document_classifier import classify_document


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="agri-classifier",
        description="Agricultural document classifier CLI"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Local classification, no database access
    classify_parser = subparsers.add_parser(
        "classify",
        help="Classify a document and print the result as JSON"
    )
    classify_parser.add_argument(
        "--title",
        "-t",
        type=str,
        default="",
        help="Document title"
    )
    source = classify_parser.add_mutually_exclusive_group()
    source.add_argument(
        "--content",
        "-c",
        type=str,
        default=None,
        help="Document text"
    )
    source.add_argument(
        "--file",
        "-f",
        type=str,
        default=None,
        help="Read document text from a UTF-8 file"
    )
    classify_parser.add_argument(
        "--month",
        "-m",
        type=int,
        choices=range(1, 13),
        default=None,
        metavar="{1..12}",
        help="Calendar month for the season signal (default: current month)"
    )

    # Classify a stored source and write the metadata back
    source_parser = subparsers.add_parser(
        "classify-source",
        help="Classify a stored source and save the result to its metadata"
    )
    source_parser.add_argument(
        "--source-id",
        "-s",
        type=str,
        required=True,
        help="ID of the source row"
    )

    return parser


def classify_command(args: argparse.Namespace) -> int:
    """
    Execute the local classify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        int: Exit code (0 for success, 1 for error)
    """
    content = args.content or ""
    if args.file:
        try:
            with open(args.file, encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: Cannot read {args.file}: {e}", file=sys.stderr)
            return 1

    result = classify_document(args.title, content, month=args.month)
    print(json.dumps(result.to_metadata(), ensure_ascii=False, indent=2))
    return 0


async def classify_source_command(args: argparse.Namespace) -> int:
    """
    Classify a stored source and persist the result.

    Args:
        args: Parsed command-line arguments

    Returns:
        int: Exit code (0 for success, 1 for error)
    """
    from app.db.sources import SourceUpdateError, get_source_text, update_source_classification
    from app.db.supabase_client import get_supabase_client

    try:
        get_settings()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        print("\nMake sure you have a .env file with:", file=sys.stderr)
        print("  SUPABASE_URL=https://your-project.supabase.co", file=sys.stderr)
        print("  SUPABASE_KEY=your_key", file=sys.stderr)
        return 1

    try:
        client = get_supabase_client()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    stored = await get_source_text(client, args.source_id)
    if stored is None:
        print(f"Error: Source not found: {args.source_id}", file=sys.stderr)
        return 1

    title = stored.get("title") or ""
    content = stored.get("content") or stored.get("summary") or title
    result = classify_document(title, content)

    try:
        await update_source_classification(
            client,
            args.source_id,
            result,
            classified_at=datetime.now(UTC).isoformat(),
        )
    except SourceUpdateError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_metadata(), ensure_ascii=False, indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "classify":
        return classify_command(args)
    elif args.command == "classify-source":
        return asyncio.run(classify_source_command(args))
    else:
        print(f"Unknown command: {args.command}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
