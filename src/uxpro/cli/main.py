"""uxpro command-line interface.

Wraps the search tools so agents and humans can query the design knowledge
base from a shell:

* ``uxpro search DOMAIN QUERY`` searches one domain index.
* ``uxpro search-all QUERY`` runs the unified, classifier-driven search.
* ``uxpro styles|components|patterns QUERY`` run the merged searches.
* ``uxpro stack`` and ``uxpro platform`` look up framework and platform guidelines.
* ``uxpro design-system QUERY`` composes a complete design system.
* ``uxpro detect QUERY`` shows what the classifiers make of a query.
* ``uxpro stats`` and ``uxpro validate-data`` inspect the loaded data.

Every tool command accepts ``--format json|text``. JSON output uses the
envelope from ``uxpro.output.ToolOutputFormatter``; commands exit with status
1 when the tool returned an error.
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import click

from uxpro.core.classifiers import (
    classify_page_intent,
    detect_domains,
    detect_platform_intent,
    detect_stacks,
)
from uxpro.core.design_system import DesignSystem, build_design_system
from uxpro.core.domains import DOMAIN_SPECS
from uxpro.core.error_handling import (
    ConfigurationError,
    DataLoadError,
    IndexingError,
    SearchError,
    configure_logging,
    log_error,
)
from uxpro.core.indexer import build_from_data_dir, validate_data_dir
from uxpro.core.search import (
    SearchContext,
    SearchHit,
    get_data_stats,
    list_available_platforms,
    list_available_stacks,
    search_all,
    search_components,
    search_domain,
    search_patterns,
    search_platforms,
    search_stack,
    search_styles,
)
from uxpro.core.settings import get_data_dir, get_ranking_config, load_config
from uxpro.output import ToolOutputFormatter

_TITLE_COLUMNS = (
    "Style Category",
    "Product Type",
    "Font Pairing Name",
    "Data Type",
    "Issue",
    "Icon Name",
    "Pattern Name",
    "Guideline",
    "Pattern",
)


def _title(data: Dict[str, Any]) -> str:
    for column in _TITLE_COLUMNS:
        if data.get(column):
            return str(data[column])
    return "(untitled)"


def _render_text_results(hits: List[SearchHit]) -> str:
    """Human readable rendering for search hits."""
    lines: List[str] = []
    for idx, hit in enumerate(hits, start=1):
        kind = hit.data.get("_domain") or hit.data.get("type", "")
        lines.append(f"{idx}. {_title(hit.data)} [{kind}] (score {hit.score:.2f})")
        keywords = hit.data.get("Keywords")
        if keywords:
            lines.append(f"   {keywords}")
    if hits and hits[0].data.get("_detected_domains"):
        detected = ", ".join(
            f"{d['domain']} {d['confidence']:.2f}" for d in hits[0].data["_detected_domains"]
        )
        lines.append(f"Detected domains: {detected}")
    return "\n".join(lines) if lines else "No results found."


def _render_text(payload: Any) -> str:
    if isinstance(payload, SearchError):
        return f"Error: {payload.error}"
    if isinstance(payload, DesignSystem):
        return payload.guide
    if isinstance(payload, dict):
        return "\n".join(f"{key}: {json.dumps(value)}" for key, value in payload.items())
    return _render_text_results(list(payload))


def _emit(tool: str, payload: Any, query: Optional[str], elapsed: float, output: str) -> None:
    """Print ``payload`` in the requested format; exit 1 for tool errors."""
    if output == "json":
        body = payload.to_dict() if isinstance(payload, DesignSystem) else payload
        click.echo(ToolOutputFormatter().format(tool, body, query=query, elapsed_seconds=elapsed))
    else:
        click.echo(_render_text(payload))
    if isinstance(payload, SearchError):
        raise click.exceptions.Exit(1)


def _run(ctx: click.Context, tool: str, query: Optional[str], output: str, call: Callable[[SearchContext], Any]) -> None:
    search_ctx = _load_context(ctx)
    start = time.perf_counter()
    payload = call(search_ctx)
    _emit(tool, payload, query, time.perf_counter() - start, output.lower())


def _load_context(ctx: click.Context) -> SearchContext:
    """Build the search indexes once per invocation."""
    if ctx.obj.get("search_context") is None:
        try:
            ctx.obj["search_context"] = build_from_data_dir(
                ctx.obj["data_dir"], ctx.obj["ranking"]
            )
        except IndexingError as e:
            raise click.ClickException(f"{e} (data directory: {ctx.obj['data_dir']})")
    return ctx.obj["search_context"]


def _format_option(func):
    return click.option(
        "--format",
        "output",
        type=click.Choice(["text", "json"], case_sensitive=False),
        default="text",
        show_default=True,
        help="Output format for tool responses.",
    )(func)


def _limit_option(default: Optional[int]):
    return click.option(
        "--limit",
        "limit",
        type=int,
        default=default,
        show_default=default is not None,
        help="Maximum number of results.",
    )


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    help="Path to a YAML configuration file (defaults to the packaged config).",
)
@click.option(
    "--data-dir",
    "data_dir",
    type=click.Path(path_type=Path, file_okay=False),
    help="Directory holding the design CSV files (defaults to the packaged dataset).",
)
@click.option("--verbose", is_flag=True, help="Show diagnostic logging on stderr.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], data_dir: Optional[Path], verbose: bool) -> None:
    """uxpro - search UI/UX design knowledge from the command line."""

    ctx.ensure_object(dict)
    try:
        config = load_config(config_path)
        ranking = get_ranking_config(config)
    except ConfigurationError as e:
        raise click.UsageError(str(e))

    configure_logging(verbose or bool((config.get("logging") or {}).get("verbose", False)))
    ctx.obj["config"] = config
    ctx.obj["ranking"] = ranking
    ctx.obj["data_dir"] = get_data_dir(str(data_dir) if data_dir else None, config)
    ctx.obj["search_context"] = None


@cli.command()
@click.argument("domain", type=click.Choice([spec.name for spec in DOMAIN_SPECS]))
@click.argument("query")
@_limit_option(None)
@_format_option
@click.pass_context
def search(ctx: click.Context, domain: str, query: str, limit: Optional[int], output: str) -> None:
    """Search one design domain for ``QUERY``."""

    _run(ctx, f"search_{domain}", query, output, lambda sc: search_domain(sc, domain, query, limit))


@cli.command("search-all")
@click.argument("query")
@_limit_option(10)
@_format_option
@click.pass_context
def search_all_command(ctx: click.Context, query: str, limit: int, output: str) -> None:
    """Search every domain, reranked by the detected domains."""

    _run(ctx, "search_all", query, output, lambda sc: search_all(sc, query, limit))


@cli.command()
@click.argument("query")
@click.option("--domain", type=click.Choice(["style", "color", "typography", "prompt"]))
@_limit_option(5)
@_format_option
@click.pass_context
def styles(ctx: click.Context, query: str, domain: Optional[str], limit: int, output: str) -> None:
    """Visual design search: styles, colors, typography and prompts."""

    _run(ctx, "search_styles", query, output, lambda sc: search_styles(sc, query, domain, limit))


@cli.command()
@click.argument("query")
@click.option("--type", "kind", type=click.Choice(["icon", "chart"]))
@_limit_option(5)
@_format_option
@click.pass_context
def components(ctx: click.Context, query: str, kind: Optional[str], limit: int, output: str) -> None:
    """Component search: icons and charts."""

    _run(ctx, "search_components", query, output, lambda sc: search_components(sc, query, kind, limit))


@cli.command()
@click.argument("query")
@click.option("--type", "kind", type=click.Choice(["layout", "ux", "product"]))
@_limit_option(5)
@_format_option
@click.pass_context
def patterns(ctx: click.Context, query: str, kind: Optional[str], limit: int, output: str) -> None:
    """Pattern search: landing layouts, UX guidelines and product types."""

    _run(ctx, "search_patterns", query, output, lambda sc: search_patterns(sc, query, kind, limit))


@cli.command()
@click.argument("stack_name")
@click.argument("query")
@_limit_option(None)
@_format_option
@click.pass_context
def stack(ctx: click.Context, stack_name: str, query: str, limit: Optional[int], output: str) -> None:
    """Search framework guidelines for ``STACK_NAME``."""

    _run(ctx, "search_stack", query, output, lambda sc: search_stack(sc, stack_name, query, limit))


@cli.command()
@click.argument("platform_name")
@click.argument("query")
@_limit_option(None)
@_format_option
@click.pass_context
def platform(ctx: click.Context, platform_name: str, query: str, limit: Optional[int], output: str) -> None:
    """Search mobile platform guidelines (ios, android)."""

    _run(
        ctx, "search_platforms", query, output,
        lambda sc: search_platforms(sc, platform_name, query, limit),
    )


@cli.command("design-system")
@click.argument("query")
@click.option("--style", help="Preferred style, e.g. glassmorphism.")
@click.option("--mode", type=click.Choice(["light", "dark"]))
@click.option(
    "--platform",
    "target",
    type=click.Choice(["web", "ios", "android", "mobile", "cross-platform"]),
    help="Skip platform detection.",
)
@_limit_option(1)
@_format_option
@click.pass_context
def design_system(
    ctx: click.Context,
    query: str,
    style: Optional[str],
    mode: Optional[str],
    target: Optional[str],
    limit: int,
    output: str,
) -> None:
    """Compose a complete design system for ``QUERY``."""

    _run(
        ctx, "design_system", query, output,
        lambda sc: build_design_system(sc, query, style=style, mode=mode, max_results=limit, platform=target),
    )


@cli.command()
@click.argument("query")
@_format_option
@click.pass_context
def detect(ctx: click.Context, query: str, output: str) -> None:
    """Show the domain, stack, platform and page-intent classification of ``QUERY``."""

    ranking = ctx.obj["ranking"]
    start = time.perf_counter()
    payload = {
        "domains": [d.to_dict() for d in detect_domains(query, ranking)],
        "stacks": [s.to_dict() for s in detect_stacks(query, ranking)],
        "platform": detect_platform_intent(query, ranking).to_dict(),
        "page_intent": classify_page_intent(query).to_dict(),
    }
    _emit("detect", payload, query, time.perf_counter() - start, output.lower())


@cli.command()
@_format_option
@click.pass_context
def stats(ctx: click.Context, output: str) -> None:
    """Print record counts for the loaded data."""

    search_ctx = _load_context(ctx)
    payload = get_data_stats(search_ctx)
    payload["available_stacks"] = list_available_stacks()
    payload["available_platforms"] = list_available_platforms()
    _emit("stats", payload, None, 0.0, output.lower())


@cli.command("validate-data")
@click.pass_context
def validate_data(ctx: click.Context) -> None:
    """Check every CSV file for rows that do not match their header."""

    data_dir: Path = ctx.obj["data_dir"]
    try:
        reports = validate_data_dir(data_dir)
    except DataLoadError as e:
        raise click.ClickException(str(e))

    total_rows = 0
    total_errors = 0
    for report in reports:
        status = "OK" if report.ok else "FAIL"
        click.echo(f"{status} {report.file}: {report.rows} rows, {len(report.errors)} errors")
        for error in report.errors:
            click.echo(f"   {error}")
        total_rows += report.rows
        total_errors += len(report.errors)

    click.echo(f"Total: {len(reports)} files, {total_rows} rows, {total_errors} errors")
    if total_errors:
        log_error("Data validation failed", data_dir=str(data_dir), errors=total_errors)
        raise click.ClickException("Validation failed; fix the CSV errors above")
