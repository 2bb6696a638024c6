"""Kaggle dataset CLI entry points.

This module exposes download, listing, and CSV parsing commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Sequence

from core.dataset_ref import DatasetRef
from core.errors import KaggleError
from ingest.csv_reader import parse_csv_file
from store.dataset_sdk import KaggleClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="kaggle-datasets",
        description="Download, inspect, and parse Kaggle datasets",
    )
    parser.add_argument("--download-root", help="Directory for archives and extracted datasets")
    parser.add_argument("--cache-root", help="Directory for parsed-result cache files")
    parser.add_argument("--credentials-file", help="Path to a kaggle.json credentials file")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument(
        "--cache-only",
        action="store_true",
        help="Serve only from local cache and never access the network",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_download_command(subparsers)
    _add_files_command(subparsers)
    _add_view_command(subparsers)
    _add_parse_csv_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None, client: KaggleClient | None = None) -> int:
    """Run the CLI.

    Args:
        argv: Optional argument vector.
        client: Optional prebuilt client, mainly for tests.

    Returns:
        Process exit code; 1 when a client error is reported on stderr.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return _dispatch_command(parser, args, client)
    except KaggleError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1


def _dispatch_command(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    client: KaggleClient | None,
) -> int:
    if args.command == "parse-csv":
        return _run_parse_csv_command(args)
    client = client or _build_client(args)
    if args.command == "download":
        return _run_download_command(client, args)
    if args.command == "files":
        return _run_files_command(client, args)
    if args.command == "view":
        return _run_view_command(client, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(args: argparse.Namespace) -> KaggleClient:
    """Build SDK client from global CLI options.

    Args:
        args: Parsed CLI args.

    Returns:
        Configured SDK client.
    """
    return KaggleClient(
        credentials_file=args.credentials_file,
        download_root=args.download_root,
        cache_root=args.cache_root,
        timeout_seconds=args.timeout,
        cache_only=args.cache_only,
    )


def _run_download_command(client: KaggleClient, args: argparse.Namespace) -> int:
    """Handle download command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    ref = DatasetRef.parse(args.dataset)
    result = client.download_dataset(
        ref.owner,
        ref.name,
        use_cache=args.use_cache,
        parse_csv=args.parse_csv,
        force_cache=args.force_cache,
    )
    if result is None:
        return 0
    if isinstance(result, Path):
        print(result)
        return 0
    _print_json(result)
    return 0


def _run_files_command(client: KaggleClient, args: argparse.Namespace) -> int:
    """Handle files command."""
    ref = DatasetRef.parse(args.dataset)
    _print_json(client.dataset_files(ref.owner, ref.name))
    return 0


def _run_view_command(client: KaggleClient, args: argparse.Namespace) -> int:
    """Handle view command."""
    ref = DatasetRef.parse(args.dataset)
    _print_json(client.view_dataset(ref.owner, ref.name))
    return 0


def _run_parse_csv_command(args: argparse.Namespace) -> int:
    """Handle parse-csv command; no credentials are needed."""
    _print_json(parse_csv_file(args.path))
    return 0


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _add_download_command(subparsers: Any) -> None:
    """Register download subcommand."""
    parser = subparsers.add_parser("download", help="Download and extract a dataset")
    parser.add_argument("dataset", help="Dataset path, owner/name")
    parser.add_argument(
        "--use-cache",
        action="store_true",
        help="Reuse parsed cache files and extracted directories",
    )
    parser.add_argument(
        "--parse-csv",
        action="store_true",
        help="Parse extracted CSV files and print records as JSON",
    )
    parser.add_argument(
        "--force-cache",
        action="store_true",
        help="With --cache-only, fail when the dataset is not cached",
    )


def _add_files_command(subparsers: Any) -> None:
    """Register files subcommand."""
    parser = subparsers.add_parser("files", help="List remote dataset files")
    parser.add_argument("dataset", help="Dataset path, owner/name")


def _add_view_command(subparsers: Any) -> None:
    """Register view subcommand."""
    parser = subparsers.add_parser("view", help="Show remote dataset metadata")
    parser.add_argument("dataset", help="Dataset path, owner/name")


def _add_parse_csv_command(subparsers: Any) -> None:
    """Register parse-csv subcommand."""
    parser = subparsers.add_parser("parse-csv", help="Parse a local CSV file into JSON records")
    parser.add_argument("path", help="Path to a .csv file")
