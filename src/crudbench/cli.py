"""Command-line interface for crudbench.

Subcommands:
    crudbench run       Run the workloads and print the report
    crudbench show      Display the report of a saved run
    crudbench export    Export a saved run to JSON, CSV or Markdown
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import click

from crudbench import __version__
from crudbench.insights import HEAVY_LABEL, LIGHT_LABEL, TOTAL_LABEL
from crudbench.logging import get_logger, setup_logging
from crudbench.report import Report, build_report
from crudbench.results import BenchRun, load_run
from crudbench.stats import InvalidInputError


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """crudbench: time Lightweight, Medium and Heavy CRUD workloads."""


def _label_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the --light-label, --heavy-label and --total-label options."""
    func = click.option(
        "--total-label",
        default=TOTAL_LABEL,
        show_default=True,
        help="Label excluded from the consistency comparison.",
    )(func)
    func = click.option(
        "--heavy-label",
        default=HEAVY_LABEL,
        show_default=True,
        help="Label used as the ratio numerator.",
    )(func)
    func = click.option(
        "--light-label",
        default=LIGHT_LABEL,
        show_default=True,
        help="Label used as the ratio denominator.",
    )(func)
    return func


def _build_report_or_exit(
    run: BenchRun,
    *,
    light_label: str,
    heavy_label: str,
    total_label: str,
) -> Report:
    try:
        return build_report(run, light=light_label, heavy=heavy_label, total_label=total_label)
    except InvalidInputError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc


def _load_run_or_exit(run_file: str) -> BenchRun:
    try:
        return load_run(Path(run_file))
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------


@main.command()
@click.option(
    "--profile",
    "profile_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML profile defining the workloads.",
)
@click.option(
    "--workload",
    "inline_workloads",
    type=str,
    multiple=True,
    help="Inline workload: 'label=command' or 'label:key=value,...' (repeatable).",
)
@click.option("--iterations", type=int, default=None, help="Measured iterations (default: 5).")
@click.option("--warmup", type=int, default=None, help="Warm-up iterations (default: 0).")
@click.option(
    "--timeout",
    type=int,
    default=None,
    help="Per-workload timeout in seconds (default: 600).",
)
@click.option("--name", type=str, default=None, help="Human-readable benchmark name.")
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Save the raw samples to this JSON file.",
)
@click.option("-v", "--verbose", is_flag=True, help="Show detailed output.")
@click.option("-q", "--quiet", is_flag=True, help="Only show warnings and errors.")
@click.option("--log-file", type=click.Path(path_type=Path), default=None)
def run(  # noqa: PLR0913
    profile_path: str | None,
    inline_workloads: tuple[str, ...],
    iterations: int | None,
    warmup: int | None,
    timeout: int | None,
    name: str | None,
    output_path: str | None,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """Run the workloads repeatedly and report their latency.

    \b
    Examples:
        # From a YAML profile
        crudbench run --profile crud-tiers.yaml --iterations 5

        # Inline workloads
        crudbench run \\
            --workload "Lightweight=npx ts-node src/lightweight.ts" \\
            --workload "Medium=npx ts-node src/medium.ts" \\
            --workload "Heavy=npx ts-node src/heavy.ts" \\
            -o results/run.json
    """
    from crudbench.collector import SampleCollector, WorkloadFailedError, command_workload
    from crudbench.config import (
        BenchConfig,
        config_from_profile,
        load_profile,
        parse_inline_workload,
        validate_config,
    )
    from crudbench.display import format_report
    from crudbench.results import save_run

    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)
    log = get_logger("cli")

    cli_overrides: dict[str, object] = {
        "name": name,
        "iterations": iterations,
        "warmup": warmup,
        "timeout": timeout,
        "output_path": output_path,
    }

    try:
        if profile_path:
            config = config_from_profile(
                load_profile(Path(profile_path)), cli_overrides=cli_overrides
            )
        else:
            config = BenchConfig(
                name=name or "",
                iterations=iterations if iterations is not None else 5,
                warmup=warmup if warmup is not None else 0,
                timeout=timeout if timeout is not None else 600,
                output_path=Path(output_path) if output_path else None,
            )

        for spec in inline_workloads:
            wl = parse_inline_workload(spec)
            config.workloads[wl.name] = wl
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc

    errors = validate_config(config)
    for w in (e for e in errors if e.severity == "warning"):
        log.warning("Config warning: %s: %s", w.field, w.message)
    fatal = [e for e in errors if e.severity == "error"]
    if fatal:
        click.echo("Error: Invalid benchmark configuration:", err=True)
        for e in fatal:
            click.echo(f"  {e.field}: {e.message}", err=True)
        raise SystemExit(1)

    collector = SampleCollector(
        {
            label: command_workload(wl, timeout=config.timeout)
            for label, wl in config.workloads.items()
        },
        iterations=config.iterations,
        warmup=config.warmup,
        total_label=config.total_label,
    )

    try:
        bench_run = collector.collect(name=config.name, description=config.description)
    except WorkloadFailedError as exc:
        click.echo(f"Error: Benchmark failed: {exc}", err=True)
        raise SystemExit(1) from exc
    except KeyboardInterrupt:
        click.echo("\nBenchmark interrupted.", err=True)
        raise SystemExit(130)  # noqa: B904

    if config.output_path is not None:
        save_run(config.output_path, bench_run)

    report = _build_report_or_exit(
        bench_run,
        light_label=config.light_label,
        heavy_label=config.heavy_label,
        total_label=config.total_label,
    )

    click.echo()
    click.echo(format_report(report, light=config.light_label, heavy=config.heavy_label))
    click.echo()
    if config.output_path is not None:
        click.echo(f"Results saved to: {config.output_path}")
    click.echo("Benchmark completed successfully!")


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------


@main.command("show")
@click.argument("run_file", type=click.Path(exists=True, dir_okay=False))
@_label_options
def show(run_file: str, light_label: str, heavy_label: str, total_label: str) -> None:
    """Display the report of a saved run.

    RUN_FILE is a JSON file written by ``crudbench run --output``.
    """
    from crudbench.display import format_report

    report = _build_report_or_exit(
        _load_run_or_exit(run_file),
        light_label=light_label,
        heavy_label=heavy_label,
        total_label=total_label,
    )
    click.echo(format_report(report, light=light_label, heavy=heavy_label))


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------


@main.command("export")
@click.argument("run_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json", "csv", "csv-summary", "markdown"]),
    default="json",
    show_default=True,
    help="Export format.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (default: stdout).",
)
@_label_options
def export(
    run_file: str,
    fmt: str,
    output: str | None,
    light_label: str,
    heavy_label: str,
    total_label: str,
) -> None:
    """Export a saved run for external analysis.

    \b
    Examples:
        crudbench export results/run.json --format json > stats.json
        crudbench export results/run.json --format csv > samples.csv
        crudbench export results/run.json --format markdown -o report.md
    """
    from crudbench.export import (
        export_csv,
        export_csv_summary,
        export_json,
        export_markdown,
    )

    bench_run = _load_run_or_exit(run_file)

    if fmt == "csv":
        text = export_csv(bench_run.samples)
    else:
        report = _build_report_or_exit(
            bench_run,
            light_label=light_label,
            heavy_label=heavy_label,
            total_label=total_label,
        )
        if fmt == "json":
            text = export_json(report.stats, report.insights)
        elif fmt == "csv-summary":
            text = export_csv_summary(report)
        else:
            text = export_markdown(report, light=light_label, heavy=heavy_label)

    if output:
        Path(output).write_text(text)
        click.echo(f"Exported to {output}")
    else:
        click.echo(text)
