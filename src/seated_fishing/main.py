"""CLI startup entrypoint for seated fishing bonuses."""

from __future__ import annotations

import typer
from rich import print

from seated_fishing.cli import CliQueryHandler
from seated_fishing.config import BonusConfig, describe_config, settings
from seated_fishing.models import GridPosition
from seated_fishing.scenario import Scenario, ScenarioError, load_scenario
from seated_fishing.settings_store import JsonSettingsStore
from seated_fishing.telemetry.logging import LoggingTelemetry, configure_logging

app = typer.Typer(help="Seated fishing bonus engine")


@app.callback()
def _main(log_level: str = typer.Option(None, help="Override the configured log level")) -> None:
    configure_logging(log_level or settings.log_level)


def _build_store(config_file: str | None) -> JsonSettingsStore:
    return JsonSettingsStore(config_file or settings.config_path)


def _load_scenario(scenario_file: str | None) -> Scenario:
    path = scenario_file or settings.scenario_path
    if not path:
        raise typer.BadParameter("Provide --scenario or set SEATED_FISHING_SCENARIO_PATH")
    try:
        return load_scenario(path)
    except ScenarioError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _build_handler(scenario_file: str | None, config_file: str | None) -> CliQueryHandler:
    return CliQueryHandler(_load_scenario(scenario_file), _build_store(config_file).load())


@app.command()
def start() -> None:
    """Show runtime configuration."""
    print(
        {
            "app_name": settings.app_name,
            "log_level": settings.log_level,
            "config_path": settings.config_path,
            "scenario_path": settings.scenario_path,
        }
    )


@app.command("show-config")
def show_config(config_file: str = typer.Option(None, help="Path to the bonus settings JSON file")) -> None:
    config = _build_store(config_file).load()
    print({"config": config.model_dump(), "summary": describe_config(config)})


@app.command("set-config")
def set_config(
    key: str = typer.Argument(..., help="Bonus config field, e.g. max_distance"),
    value: str = typer.Argument(..., help="New value"),
    config_file: str = typer.Option(None, help="Path to the bonus settings JSON file"),
) -> None:
    """Validate and persist a single bonus config field."""
    store = _build_store(config_file)
    try:
        config = store.load().updated(**{key: value})
    except ValueError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)
    store.save(config)
    print({"updated": {key: getattr(config, key)}, "path": str(store.path)})


@app.command("check-seat")
def check_seat(
    seat_x: int = typer.Option(..., help="Seat X"),
    seat_z: int = typer.Option(..., help="Seat Z"),
    target_x: int = typer.Option(..., help="Fishing target X"),
    target_z: int = typer.Option(..., help="Fishing target Z"),
    layer: int = typer.Option(0, help="Map layer"),
    scenario: str = typer.Option(None, help="Path to a scenario JSON file"),
    config_file: str = typer.Option(None, help="Path to the bonus settings JSON file"),
) -> None:
    handler = _build_handler(scenario, config_file)
    print(handler.check_seat(GridPosition(seat_x, seat_z, layer), GridPosition(target_x, target_z, layer)))


@app.command("find-seat")
def find_seat(
    actor: str = typer.Option(..., help="Actor id from the scenario"),
    ref_x: int = typer.Option(..., help="Reference X to search around"),
    ref_z: int = typer.Option(..., help="Reference Z to search around"),
    target_x: int = typer.Option(..., help="Fishing target X"),
    target_z: int = typer.Option(..., help="Fishing target Z"),
    layer: int = typer.Option(0, help="Map layer"),
    scenario: str = typer.Option(None, help="Path to a scenario JSON file"),
    config_file: str = typer.Option(None, help="Path to the bonus settings JSON file"),
) -> None:
    handler = _build_handler(scenario, config_file)
    try:
        seat, report = handler.find_seat(actor, GridPosition(ref_x, ref_z, layer), GridPosition(target_x, target_z, layer))
    except ScenarioError as exc:
        raise typer.BadParameter(str(exc)) from exc

    print({"find_seat": report})
    if seat is None:
        raise typer.Exit(code=1)


@app.command()
def simulate(
    actor: str = typer.Option(..., help="Actor id from the scenario"),
    target_x: int = typer.Option(..., help="Fishing target X"),
    target_z: int = typer.Option(..., help="Fishing target Z"),
    layer: int = typer.Option(0, help="Map layer"),
    ticks: int = typer.Option(1000, min=0, help="Ticks the fishing step would take unseated"),
    catch_size: int = typer.Option(10, min=0, help="Stack size of the unseated catch"),
    break_threshold: float = typer.Option(0.35, min=0.0, help="Mental break threshold to adjust"),
    scenario: str = typer.Option(None, help="Path to a scenario JSON file"),
    config_file: str = typer.Option(None, help="Path to the bonus settings JSON file"),
) -> None:
    """Run one fishing activity through every bonus hook and report what changed."""
    handler = _build_handler(scenario, config_file)
    telemetry = LoggingTelemetry(enabled=settings.telemetry_enabled)
    try:
        report = handler.simulate(
            actor,
            GridPosition(target_x, target_z, layer),
            ticks=ticks,
            catch_size=catch_size,
            break_threshold=break_threshold,
            telemetry=telemetry,
        )
    except ScenarioError as exc:
        raise typer.BadParameter(str(exc)) from exc
    print({"simulate": report})


@app.command()
def bonuses(
    comfort: float = typer.Option(..., min=0.0, max=1.0, help="Seat comfort rating"),
    config_file: str = typer.Option(None, help="Path to the bonus settings JSON file"),
) -> None:
    """Show the quality multiplier and every channel's effective value for a seat comfort."""
    config: BonusConfig = _build_store(config_file).load()
    print(CliQueryHandler.bonuses(comfort, config))


if __name__ == "__main__":
    app()
