from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from interfacery.config import Settings, load_settings
from interfacery.domain.models import MethodSignature, Parameter, ReturnValue
from interfacery.errors import InterfaceryError
from interfacery.extractors.document import load_signature_document
from interfacery.inference.endpoint import infer_endpoint
from interfacery.orchestrator.pipeline import (
    bind_interface,
    collect_interfaces,
    run_generate_from_source,
)
from interfacery.render.renderer import default_template_text

app = typer.Typer(no_args_is_help=True, add_completion=False)

console = Console()


def _fail(e: InterfaceryError) -> NoReturn:
    console.print(f"[bold red]error[/bold red]: {escape(str(e))}")
    raise typer.Exit(code=1)


def _load_settings() -> Settings:
    try:
        return load_settings()
    except InterfaceryError as e:
        _fail(e)


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(None, help="Logging level (default: INTERFACERY_LOG_LEVEL or INFO)"),
) -> None:
    level = (log_level or _load_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _resolve_src(src: Optional[str], signatures: Optional[str]) -> Path:
    if signatures is None and src is None:
        raise typer.BadParameter("give a source path or --signatures FILE")
    if src is None:
        return Path(".").resolve()
    src_path = Path(src).expanduser().resolve()
    if not src_path.exists():
        raise typer.BadParameter(f"Source path does not exist: {src_path}")
    return src_path


@app.command()
def generate(
    src: Optional[str] = typer.Argument(None, help="Go source tree or file to scan"),
    dest_dir: Optional[str] = typer.Option(None, help="Output directory (default: INTERFACERY_DEST_DIR)"),
    interface: Optional[str] = typer.Option(None, help="Only this interface"),
    template: Optional[str] = typer.Option(None, help="Custom Jinja2 template file"),
    prefix: Optional[str] = typer.Option(None, help="Route prefix, e.g. /api/v1"),
    signatures: Optional[str] = typer.Option(None, help="JSON/YAML signature document instead of Go sources"),
    dry_run: bool = typer.Option(False, help="Render but do not write files"),
) -> None:
    settings = _load_settings()
    src_path = _resolve_src(src, signatures)
    out_dir = Path(dest_dir).expanduser() if dest_dir else settings.dest_dir

    try:
        result = run_generate_from_source(
            src_path,
            out_dir,
            settings=settings,
            interface_name=interface,
            route_prefix=prefix,
            template_path=Path(template).expanduser() if template else None,
            signatures_path=Path(signatures).expanduser() if signatures else None,
            dry_run=dry_run,
        )
    except InterfaceryError as e:
        _fail(e)

    console.print(f"[bold green]interfacery[/bold green] generate: {escape(str(src_path))}")
    if not signatures:
        console.print(f"Go files scanned: {result.files_scanned}")
    console.print(f"Interfaces rendered: {len(result.outputs)}")
    console.print(f"Endpoints: [bold]{result.endpoint_count}[/bold]")
    for out in result.outputs:
        target = out.output_path or "(dry run)"
        console.print(f"  {escape(out.interface.interface_name):<30} -> {escape(target)}")

    if result.skipped_members:
        console.print(f"Skipped members: {len(result.skipped_members)}")
    if result.failures:
        console.print(f"[yellow]Skipped methods: {len(result.failures)}[/yellow]")
        for f in result.failures:
            console.print(f"  {escape(f.interface_name)}.{escape(f.method_name)}: {escape(f.reason)}")


@app.command()
def endpoints(
    src: Optional[str] = typer.Argument(None, help="Go source tree or file to scan"),
    interface: Optional[str] = typer.Option(None, help="Only this interface"),
    prefix: Optional[str] = typer.Option(None, help="Route prefix, e.g. /api/v1"),
    signatures: Optional[str] = typer.Option(None, help="JSON/YAML signature document instead of Go sources"),
    format: str = typer.Option("table", help="Output format: table|json"),
) -> None:
    settings = _load_settings()
    src_path = _resolve_src(src, signatures)
    config = settings.inference_config(route_prefix=prefix)

    fmt = format.lower().strip()
    if fmt not in ("table", "json"):
        raise typer.BadParameter("format must be one of: table, json")

    try:
        if signatures:
            interfaces = load_signature_document(Path(signatures).expanduser())
            if interface:
                interfaces = [i for i in interfaces if i.interface_name == interface]
        else:
            interfaces = collect_interfaces(
                src_path, interface_name=interface, ignore_dirs=settings.ignore_dirs
            ).interfaces
    except InterfaceryError as e:
        _fail(e)

    rows = []
    for iface in interfaces:
        bindings, _ = bind_interface(iface, config)
        for b in bindings:
            rows.append(
                {
                    "interface": iface.interface_name,
                    "method": b.name,
                    "http_method": b.http_method,
                    "url_path": b.url_path,
                    "path_params": list(b.path_params),
                    "query_params": list(b.query_params),
                    "request_type": b.request_type,
                    "response_type": b.response_type,
                    "handler_name": b.handler_name,
                }
            )

    if fmt == "json":
        typer.echo(json.dumps(rows, indent=2))
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("METHOD", no_wrap=True)
    table.add_column("PATH")
    table.add_column("HANDLER")
    table.add_column("REQUEST")
    table.add_column("RESPONSE")

    for r in rows:
        table.add_row(
            r["http_method"],
            escape(r["url_path"]),
            escape(f"{r['interface']}.{r['handler_name']}"),
            escape(r["request_type"] or "-"),
            escape(r["response_type"] or "-"),
        )

    console.print(f"[bold]Endpoints:[/bold] {len(rows)}")
    console.print(table)


def _parse_param(spec: str, index: int) -> Parameter:
    name, sep, typ = spec.partition(":")
    if not sep:
        # bare type: unnamed parameter
        return Parameter(name=f"arg{index}", type_expr=name.strip())
    if not name.strip() or not typ.strip():
        raise typer.BadParameter(f"expected name:type, got {spec!r}")
    return Parameter(name=name.strip(), type_expr=typ.strip())


@app.command()
def infer(
    name: str = typer.Argument(..., help="Method name, e.g. GetOrderByUserIDAndOrderID"),
    param: List[str] = typer.Option([], "--param", "-p", help="Parameter as name:type (repeatable)"),
    ret: List[str] = typer.Option([], "--return", "-r", help="Return type (repeatable)"),
    prefix: Optional[str] = typer.Option(None, help="Route prefix, e.g. /api/v1"),
) -> None:
    """Infer the endpoint for a single method signature."""
    settings = _load_settings()
    sig = MethodSignature(
        name=name,
        parameters=tuple(_parse_param(p, i) for i, p in enumerate(param)),
        returns=tuple(ReturnValue(type_expr=t) for t in ret),
    )
    try:
        d = infer_endpoint(sig, settings.inference_config(route_prefix=prefix))
    except InterfaceryError as e:
        _fail(e)

    console.print(f"{d.http_method} {escape(d.url_path)}")
    console.print(f"  handler:  {escape(d.handler_name)}")
    console.print(f"  path:     {escape(', '.join(d.path_params) or '-')}")
    console.print(f"  query:    {escape(', '.join(d.query_params) or '-')}")
    console.print(f"  request:  {escape(d.request_type or '-')}")
    console.print(f"  response: {escape(d.response_type or '-')}")
    if d.unresolved_tokens:
        console.print(f"  [yellow]unresolved:[/yellow] {escape(', '.join(d.unresolved_tokens))}")


@app.command()
def template() -> None:
    """Print the bundled default handler template."""
    typer.echo(default_template_text(), nl=False)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
