import logging
import math
from pathlib import Path

import click
from pydantic import ValidationError

from hedgecalc.config import Settings
from hedgecalc.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _load_state(path: str):
    from hedgecalc.snapshot import from_json

    try:
        return from_json(Path(path).read_text(encoding="utf-8"))
    except ValidationError as e:
        raise click.ClickException(f"Invalid snapshot {path}: {e}") from e


def _write_state(state, path: str):
    from hedgecalc.snapshot import to_json

    Path(path).write_text(to_json(state, indent=2), encoding="utf-8")
    click.echo(f"Snapshot written to {path}")


def _fmt_pct(value: float) -> str:
    return "n/a" if math.isnan(value) else f"{value:.2f}%"


def _echo_totals(results):
    from hedgecalc.analysis.summary import summarize_totals

    totals = summarize_totals(results)
    click.echo(f"Total Cost with Hedging:    {totals['hedged_cost']:,.2f}")
    click.echo(f"Total Cost without Hedging: {totals['unhedged_cost']:,.2f}")
    click.echo(f"Total P&L:                  {totals['delta_pnl']:,.2f}")
    click.echo(f"Cost Reduction:             {_fmt_pct(totals['cost_reduction_pct'])}")


def _echo_results(results):
    click.echo(
        f"{'Month':<16}{'Forward':>12}{'Real':>12}{'Strategy':>12}"
        f"{'Payoff':>12}{'Hedged':>18}{'Unhedged':>18}{'Delta P&L':>16}"
    )
    for row in results:
        click.echo(
            f"{row.label:<16}{row.forward:>12.2f}{row.real_price:>12.2f}"
            f"{row.strategy_price:>12.2f}{row.total_payoff:>12.2f}"
            f"{row.hedged_cost:>18,.2f}{row.unhedged_cost:>18,.2f}{row.delta_pnl:>16,.2f}"
        )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool):
    """Hedgecalc - option hedging calculator"""
    setup_logging()
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command()
@click.option("--state", "-s", "state_path", required=True, type=click.Path(exists=True),
              help="Snapshot JSON file")
@click.option("--output", "-o", "output_path", default=None, help="Write recomputed snapshot here")
def project(state_path: str, output_path: str | None):
    """Recompute the monthly projection for a saved snapshot."""
    from hedgecalc.state import make_rng, recompute

    settings = Settings()
    state = recompute(_load_state(state_path), make_rng(settings))

    if state.results is None:
        click.echo("No strategy legs defined, nothing to project.")
    else:
        _echo_results(state.results)
        click.echo()
        _echo_totals(state.results)

    if output_path:
        _write_state(state, output_path)


@cli.command()
@click.option("--state", "-s", "state_path", required=True, type=click.Path(exists=True),
              help="Snapshot JSON file")
def payoff(state_path: str):
    """Print the strategy payoff curve at a one-year maturity."""
    from hedgecalc.analysis.payoff import build_payoff_curve

    state = _load_state(state_path)
    if not state.strategy:
        click.echo("No strategy legs defined.")
        return

    points = build_payoff_curve(state.strategy, state.params.spot_price, state.params.interest_rate)
    click.echo(f"{'Price':>12}{'Payoff':>14}")
    for point in points:
        click.echo(f"{point.price:>12.2f}{point.payoff:>14.4f}")


@cli.command()
def scenarios():
    """List the built-in stress-test scenarios."""
    from hedgecalc.analysis.scenarios import default_scenarios
    from hedgecalc.models import ForwardBasis, RealBasis

    for key, sc in default_scenarios().items():
        if isinstance(sc.basis, ForwardBasis):
            basis = f"forward basis {sc.basis.value * 100:.1f}%"
        elif isinstance(sc.basis, RealBasis):
            basis = f"real basis {sc.basis.value * 100:.1f}%"
        else:
            basis = "no curve shift"
        click.echo(
            f"{key:<18}{sc.name:<30}vol {sc.volatility * 100:.1f}%  drift {sc.drift * 100:.1f}%  "
            f"shock {sc.price_shock * 100:.1f}%  {basis}"
        )


@cli.command()
@click.argument("scenario_key")
@click.option("--state", "-s", "state_path", required=True, type=click.Path(exists=True),
              help="Snapshot JSON file")
@click.option("--output", "-o", "output_path", default=None, help="Write stressed snapshot here")
def stress(scenario_key: str, state_path: str, output_path: str | None):
    """Apply a stress-test scenario and print the resulting totals."""
    from hedgecalc.state import apply_stress_test, make_rng

    state = _load_state(state_path)
    if scenario_key not in state.scenarios:
        raise click.BadParameter(
            f"Unknown scenario {scenario_key!r} (choose from {', '.join(state.scenarios)})",
            param_hint="SCENARIO_KEY",
        )

    state = apply_stress_test(state, scenario_key, make_rng(Settings()))
    click.echo(f"Scenario: {state.scenarios[scenario_key].name}")
    if state.results is None:
        click.echo("No strategy legs defined, nothing to project.")
    else:
        _echo_totals(state.results)

    if output_path:
        _write_state(state, output_path)


@cli.command()
@click.option("--state", "-s", "state_path", required=True, type=click.Path(exists=True),
              help="Snapshot JSON file")
def summary(state_path: str):
    """Print yearly and total statistics of the snapshot's results."""
    from hedgecalc.analysis.summary import summarize_by_year

    state = _load_state(state_path)
    if not state.results:
        click.echo("No results in snapshot. Run `project` first.")
        return

    click.echo(f"{'Year':<8}{'Hedged':>18}{'Unhedged':>18}{'P&L':>16}{'Reduction':>12}")
    for year, data in summarize_by_year(state.results).items():
        click.echo(
            f"{year:<8}{data['hedged_cost']:>18,.2f}{data['unhedged_cost']:>18,.2f}"
            f"{data['delta_pnl']:>16,.2f}{_fmt_pct(data['cost_reduction_pct']):>12}"
        )
    click.echo()
    _echo_totals(state.results)


@cli.command()
def serve():
    """Start the HTTP API."""
    import uvicorn

    from hedgecalc.web.app import create_app

    settings = Settings()
    click.echo(f"Serving on {settings.api_host}:{settings.api_port}")
    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    cli()
