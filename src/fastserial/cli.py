"""CLI implementation for fastserial."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from . import read_value_sync, dumps
from .core.model import DecodeOutcome, EncodeFailure, FormatKind, JSONOptions, PlistOptions
from .core.util import outcome_asdict
from .io import AlwaysReachable

app = typer.Typer(add_completion=False, help="Read JSON or property list payloads from files and URLs.")


def iter_sources(files: list[str]) -> list[str]:
    """Get list of sources from files argument or stdin."""
    files = files or []
    if "-" in files:
        # stdin mode
        stdin_lines = [ln.strip() for ln in sys.stdin if ln.strip()]
        if not stdin_lines:
            return []
        return stdin_lines
    elif files:
        return list(files)
    return []


def _failure_message(src: str, res: DecodeOutcome) -> str:
    return f"{src}: {outcome_asdict(res)['error']}"


@app.command()
def main(
    files: list[str] = typer.Argument(None, help="Files or URLs to read, or '-' for stdin"),
    to: FormatKind = typer.Option(FormatKind.JSON, "--to", help="Output format"),
    indent: Optional[int] = typer.Option(None, "--indent", min=0, help="Indent JSON output by N spaces"),
    sort_keys: bool = typer.Option(False, "--sort-keys", help="Sort dictionary keys in the output"),
    descape: bool = typer.Option(False, "--descape", help="Undo literal \\\" \\n \\r \\0 \\\\ escapes before decoding"),
    charset: str = typer.Option("utf-8", "--charset", help="Charset of local files"),
    no_reachability_check: bool = typer.Option(False, "--no-reachability-check", help="Fetch URLs without probing the host first"),
    jsonl: bool = typer.Option(False, "--jsonl", help="Emit one JSON record per source"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to PATH instead of stdout"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log diagnostics to stderr"),
):
    """Decode each source as JSON (falling back to PLIST) and re-encode it."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    sources = iter_sources(files)
    if not sources:
        typer.echo("No input files given.", err=True)
        raise typer.Exit(code=1)

    reachability = AlwaysReachable() if no_reachability_check else None
    options = (JSONOptions(indent=indent, sort_keys=sort_keys) if to is FormatKind.JSON
               else PlistOptions(sort_keys=sort_keys))

    failed = False
    # open output sink
    sink = open(output, "w", encoding="utf-8") if output else sys.stdout
    try:
        for src in sources:
            res = read_value_sync(src, None, charset=charset, descape=descape, reachability=reachability)
            if jsonl:
                sink.write(json.dumps(outcome_asdict(res, source=src)))
                sink.write("\n")
                failed = failed or not res.success
                continue

            if not res.success:
                typer.echo(_failure_message(src, res), err=True)
                failed = True
                continue
            try:
                text = dumps(res.value, to, options)
            except EncodeFailure as e:
                typer.echo(f"{src}: {e}", err=True)
                failed = True
                continue
            sink.write(text)
            if not text.endswith("\n"):
                sink.write("\n")
    finally:
        if output:
            sink.close()

    # exit code
    if failed:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
