from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from docsgen.config import DocsConfig, OutputFormat
from docsgen.errors import DocsGenError
from docsgen.orchestrator.pipeline import parse_repo, run_generate


app = typer.Typer(no_args_is_help=True, add_completion=False)

console = Console()


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _resolve_root(root: str) -> Path:
    root_path = Path(root).expanduser().resolve()
    if not root_path.exists():
        raise typer.BadParameter(f"Path does not exist: {root_path}")
    if not root_path.is_dir():
        raise typer.BadParameter(f"Path is not a directory: {root_path}")
    return root_path


def _load_config(**overrides) -> DocsConfig:
    try:
        return DocsConfig(**overrides)
    except ValidationError as exc:
        msgs = "; ".join(f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors())
        raise typer.BadParameter(msgs) from exc


def _fail(exc: DocsGenError) -> None:
    console.print(f"[bold red]error:[/bold red] {exc}")
    raise typer.Exit(code=1)


@app.command()
def generate(
    root: str = typer.Argument(".", help="Directory to scan for annotated handlers"),
    pattern: Optional[str] = typer.Option(None, help="File name glob (default: *.py)"),
    output: Optional[OutputFormat] = typer.Option(None, help="Output format"),
    filename: Optional[str] = typer.Option(None, help="Output file name (extension added if missing)"),
    out_dir: Optional[str] = typer.Option(None, help="Directory to write into (default: cwd)"),
    log_level: Optional[str] = typer.Option(None, help="Logging level"),
) -> None:
    root_path = _resolve_root(root)
    overrides = {
        k: v
        for k, v in {
            "pattern": pattern,
            "output": output,
            "filename": filename,
            "log_level": log_level,
        }.items()
        if v is not None
    }
    config = _load_config(**overrides)
    _setup_logging(config.log_level)

    try:
        result = run_generate(root_path, config, out_dir=Path(out_dir).expanduser() if out_dir else None)
    except DocsGenError as exc:
        _fail(exc)

    console.print(f"[bold green]docsgen[/bold green] generate: {root_path}")
    console.print(f"Files parsed: {result.files_scanned}")
    console.print(f"Endpoints found: [bold]{len(result.endpoints)}[/bold]")
    for e in result.endpoints[:50]:
        console.print(f"  {e.method:<6} {e.path:<35} -> {e.handler}")
    if len(result.endpoints) > 50:
        console.print(f"  … and {len(result.endpoints) - 50} more")
    console.print(f"[bold green]Wrote[/bold green] {config.output.value} docs to: {result.output_path}")


@app.command()
def endpoints(
    root: str = typer.Argument(".", help="Directory to scan for annotated handlers"),
    pattern: Optional[str] = typer.Option(None, help="File name glob (default: *.py)"),
    format: str = typer.Option("table", help="Output format: table|json"),
) -> None:
    root_path = _resolve_root(root)
    config = _load_config(**({"pattern": pattern} if pattern else {}))
    _setup_logging(config.log_level)

    try:
        _, found = parse_repo(root_path, config)
    except DocsGenError as exc:
        _fail(exc)

    if format.lower() == "json":
        # plain print so the output stays machine-readable
        typer.echo(json.dumps([e.to_dict() for e in found], indent=2))
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("METHOD", no_wrap=True)
    table.add_column("PATH")
    table.add_column("HANDLER")
    table.add_column("PARAMS")
    table.add_column("RESPONSE")

    for e in found:
        params = ", ".join(f"{p.name}:{p.type}{'' if p.required else '?'}" for p in e.parameters)
        table.add_row(e.method, e.path, e.handler, params, e.response_type_name)

    console.print(f"[bold]Endpoints:[/bold] {len(found)}")
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
