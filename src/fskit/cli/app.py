"""CLI application entry point and command routing for fskit.

This module is the **sole error boundary** for the entire application.
It catches :class:`~fskit.exceptions.FskitError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here; validation belongs to the command
  descriptor and every capability call to the dispatcher.
* Operation output is written to stdout as plain text; diagnostics go
  to stderr through the Rich console.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from fskit.cli import exit_codes
from fskit.cli.console import console, echo, escape
from fskit.config import ENV_PREFIX, LEVEL_NAMES, Settings
from fskit.core.models import DiskRecord, FileContents, FileKind, RawRequest, Segment
from fskit.exceptions import FskitError, UsageError
from fskit.utils.logging import configure_logging, level_for_verbosity
from fskit.version import __version__

logger = logging.getLogger(__name__)

_REQUEST_FLAGS: tuple[str, ...] = (
    "segment",
    "action",
    "file_type",
    "name",
    "archive_name",
    "text",
)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``fskit --segment SEG --action ACT [flags]``: run one operation
    * ``fskit doctor``: environment diagnostics
    * ``fskit --version``
    """
    parser = argparse.ArgumentParser(
        prog="fskit",
        description="Disk info, file management and ZIP archiving.",
        epilog=(
            "examples:\n"
            "  fskit --segment disk --action info --name C\n"
            "  fskit --segment file --action create --file-type json --name data\n"
            "  fskit --segment archive --action empty --archive-name backup\n"
            "  fskit --segment archive --action archive --archive-name backup --name data.json"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug).",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default=None,
        help="Optional sub-command; only 'doctor' is recognised.",
    )
    parser.add_argument(
        "-s",
        "--segment",
        choices=[segment.value for segment in Segment],
        default=None,
        help="Operation family.",
    )
    parser.add_argument(
        "--action",
        default=None,
        help="disk: info | file: create, read, write, delete | archive: empty, archive",
    )
    parser.add_argument(
        "--file-type",
        choices=[kind.value for kind in FileKind],
        default=None,
        help="File flavour; json and xml names gain their suffix.",
    )
    parser.add_argument("--name", default=None, help="Disk, file, or file to archive.")
    parser.add_argument("--archive-name", default=None, help="ZIP archive (.zip is appended).")
    parser.add_argument("--text", default=None, help="Text to append (file write).")
    return parser


def _to_raw_request(args: argparse.Namespace) -> RawRequest:
    """Lift parsed flags into the core's untyped request model."""
    return RawRequest(
        segment=Segment(args.segment) if args.segment is not None else None,
        action=args.action,
        file_kind=FileKind(args.file_type) if args.file_type is not None else None,
        name=args.name,
        archive_name=args.archive_name,
        text=args.text,
    )


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _render_disk(record: DiskRecord) -> None:
    echo(f"Name: {record.name}")
    echo(f"File System: {record.file_system}")
    echo(f"Size: {record.available_gib:.2f}/{record.total_gib:.2f} GiB")
    echo(f"Tag: {record.mount_point}")


def _render_contents(contents: FileContents) -> None:
    echo(f"{contents.path}:\n{contents.text}")


def _handle_request(raw: RawRequest, settings: Settings) -> int:
    """Dispatch a single operation against the local machine.

    Flow:
    1. Instantiate infra adapters + the core dispatcher.
    2. Validate and dispatch the request (one collaborator call).
    3. Render read/disk outcomes to stdout; mutations print nothing.
    """
    from fskit.core.dispatcher import Dispatcher
    from fskit.infra.local_files import LocalFileStore
    from fskit.infra.psutil_disks import PsutilDiskEnumerator
    from fskit.infra.zip_archives import ZipArchiveStore

    dispatcher = Dispatcher(
        files=LocalFileStore(encoding=settings.encoding),
        disks=PsutilDiskEnumerator(),
        archives=ZipArchiveStore(),
    )
    outcome = dispatcher.dispatch_request(raw)

    if isinstance(outcome, DiskRecord):
        _render_disk(outcome)
    elif isinstance(outcome, FileContents):
        _render_contents(outcome)
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from fskit.cli.doctor import run_doctor

    return run_doctor()


def _given_flags(args: argparse.Namespace) -> list[str]:
    """Return the request flags present on the command line, as typed."""
    return [
        "--" + flag.replace("_", "-")
        for flag in _REQUEST_FLAGS
        if getattr(args, flag) is not None
    ]


def _load_settings() -> Settings:
    """Read :class:`Settings`, reporting bad values as usage errors."""
    try:
        return Settings()
    except ValidationError as exc:
        error = exc.errors()[0]
        variable = ENV_PREFIX + str(error["loc"][0]).upper()
        hint = (
            f"Use one of: {', '.join(LEVEL_NAMES)}"
            if error["loc"][0] == "log_level"
            else "Use a codec name Python understands, e.g. utf-8."
        )
        raise UsageError(f"Invalid {variable}: {error['msg']}", hint=hint) from exc


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the fskit CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    FskitError
        Propagated to :func:`cli`, which renders it.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = _load_settings()
    configure_logging(level_for_verbosity(settings.log_level, args.verbose))

    if args.command is not None:
        if args.command.lower() != "doctor":
            raise UsageError(
                f"Unknown command '{args.command}'.",
                hint="Use 'fskit doctor' or the --segment/--action flags.",
            )
        given = _given_flags(args)
        if given:
            raise UsageError(
                f"doctor does not accept {', '.join(given)}.",
                hint="Run 'fskit doctor' on its own.",
            )
        return _handle_doctor()

    if not _given_flags(args):
        parser.print_help()
        return exit_codes.SUCCESS

    return _handle_request(_to_raw_request(args), settings)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def _report(label: str, exc: FskitError) -> None:
    console.print(f"[bold red]{label}:[/bold red] {escape(exc.describe())}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")


def cli(argv: list[str] | None = None) -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage, and never exits 0
    after a failed operation.
    """
    try:
        code = main(argv)
        sys.exit(code)
    except UsageError as exc:
        _report("Usage error", exc)
        sys.exit(exit_codes.USAGE_ERROR)
    except FskitError as exc:
        logger.debug("Operation failed", exc_info=exc)
        _report("Error", exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
