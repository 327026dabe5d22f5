from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="loadgate", help="Check load-test statistics against assertions")


@app.command()
def check(
    config: str = typer.Argument(help="Path to check YAML config"),
    output_dir: str = typer.Option("runs", help="Output directory for run results"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    parallel: int = typer.Option(
        1,
        "--parallel",
        "-p",
        min=1,
        max=100,
        help="Number of assertions to evaluate in parallel",
    ),
):
    """Evaluate assertions against the statistics of a completed run."""
    from expandvars import UnboundVariable
    from pydantic import ValidationError

    from loadgate.config import load_config
    from loadgate.runner import CheckRunner

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)

    try:
        check_config = load_config(config_path)
        outcome = CheckRunner(
            config=check_config,
            output_dir=Path(output_dir),
            verbose=verbose,
            parallel=parallel,
        ).execute()
    except (ValidationError, UnboundVariable, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for result in outcome.results:
        status = "PASS" if result.passed else "FAIL"
        typer.echo(
            f"  {status}  {result.message} (actual: {list(result.actual_values)})"
        )

    summary = outcome.summary
    typer.echo(f"{summary.passed}/{summary.total} assertion(s) passed")
    typer.echo(f"Results: {outcome.run_dir}")
    if not verbose:
        typer.echo(f"Debug log: {outcome.run_dir / 'debug.log'}")

    # Exit with non-zero if any assertion failed
    if not outcome.all_passed:
        raise typer.Exit(1)


@app.command()
def schema(
    out: str = typer.Option(
        "schemas/loadgate.schema.json", help="Output path for the JSON Schema"
    ),
):
    """Write the JSON Schema of the check YAML format."""
    from loadgate.schema import write_json_schema

    out_path = Path(out)
    write_json_schema(out_path)
    typer.echo(f"Wrote schema: {out_path}")
