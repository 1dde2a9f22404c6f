"""Typer CLI entrypoint for codecheck."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal, cast

import typer

from apps.cli.format_human import render_check_summary
from apps.cli.io import (
    STDIN_MARKER,
    dump_json,
    read_input_text,
    write_json_atomic,
    write_text_atomic,
)
from core.codes.models import CheckReply
from core.orchestrator.pipeline import check_text
from core.render.messages import GREETING_MESSAGE, PING_MESSAGE

app = typer.Typer(help="Code list checker CLI", rich_markup_mode=None)
OutputFormat = Literal["human", "json"]

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FALLBACK = 2


@app.callback()
def cli_callback() -> None:
    """CLI root callback to keep `codecheck check` as explicit command form."""


@app.command("check")
def check_command(
    input_path: Annotated[
        str,
        typer.Option("--input", help="Text file with one code per line, or - for stdin."),
    ] = STDIN_MARKER,
    output_format: Annotated[str, typer.Option("--format")] = "human",
    out: Annotated[
        Path | None,
        typer.Option("--out", dir_okay=False, help="Also write the result to this file."),
    ] = None,
    summary: Annotated[
        bool, typer.Option("--summary", help="Print a key=value summary after the report.")
    ] = False,
    force: Annotated[
        bool, typer.Option("--force", help="Overwrite --out when it already exists.")
    ] = False,
) -> None:
    """Classify a code list and print the invalid/duplicate/unique report."""

    normalized_format = output_format.lower().strip()
    if normalized_format not in {"human", "json"}:
        typer.echo("ERROR: --format must be one of: human, json.", err=True)
        raise typer.Exit(code=EXIT_USAGE)
    format_typed = cast(OutputFormat, normalized_format)

    if out is not None and out.exists() and not force:
        typer.echo(f"ERROR: output already exists: {out} (use --force to overwrite).", err=True)
        raise typer.Exit(code=EXIT_USAGE)

    try:
        text = read_input_text(input_path, typer.get_text_stream("stdin"))
    except ValueError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_USAGE) from exc

    reply = check_text(text)
    payload: dict[str, Any] | None = None
    if format_typed == "json":
        payload = _build_json_payload(reply)
        rendered = dump_json(payload)
    else:
        rendered = reply.text
        if summary and reply.output is not None:
            rendered = f"{rendered}\n\n{render_check_summary(reply.output)}"

    typer.echo(rendered)

    if out is not None:
        try:
            if payload is not None:
                write_json_atomic(out, payload)
            else:
                write_text_atomic(out, rendered + "\n")
        except OSError as exc:
            typer.echo(f"ERROR: failed to write {out}: {exc}", err=True)
            raise typer.Exit(code=EXIT_USAGE) from exc

    raise typer.Exit(code=EXIT_OK if reply.ok else EXIT_FALLBACK)


@app.command("start")
def start_command() -> None:
    """Print the greeting and usage help."""

    typer.echo(GREETING_MESSAGE)


@app.command("ping")
def ping_command() -> None:
    """Print the heartbeat reply."""

    typer.echo(PING_MESSAGE)


def _build_json_payload(reply: CheckReply) -> dict[str, Any]:
    if reply.output is None:
        return {"ok": False, "message": reply.text}

    output = reply.output
    return {
        "ok": True,
        "report": output.report,
        "summary": output.summary.model_dump(mode="json"),
        "has_duplicates": output.grouping.has_duplicates,
        "invalid_entries": [
            entry.model_dump(mode="json") for entry in output.validation.invalid_entries
        ],
        "duplicate_groups": [
            {
                "code": code,
                "marker": output.grouping.markers[code],
                "count": output.grouping.count_map[code],
                "indices": [
                    entry.index
                    for entry in output.validation.valid_entries
                    if entry.code == code
                ],
            }
            for code in output.grouping.groups_in_order
        ],
        "unique_codes": output.grouping.unique_codes,
    }


def main() -> None:
    """Console script entrypoint."""

    app()


if __name__ == "__main__":
    main()
