"""Command line interface for running tagsteps provisioning steps."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
import yaml

from tagsteps import get_gateway, get_repository, load_config
from tagsteps.contracts import OutcomeKind
from tagsteps.errors import TagStepsError
from tagsteps.persistence import Instance
from tagsteps.process import ProcessContext
from tagsteps.steps import STEPS, run_step

app = typer.Typer(help="CLI for TAG provisioning steps")

# Command groups
step_app = typer.Typer(help="Commands for running provisioning steps")
instance_app = typer.Typer(help="Commands for inspecting instances")

app.add_typer(step_app, name="step")
app.add_typer(instance_app, name="instance")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="Logging level (default: from config)"),
) -> None:
    """tagsteps CLI entry point."""
    level = (log_level or load_config().log_level).upper()
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def _collect_parameters(params_file: Optional[Path], param: Optional[List[str]]) -> Dict[str, Any]:
    parameters: Dict[str, Any] = {}
    if params_file is not None:
        with open(params_file) as f:
            parameters.update(yaml.safe_load(f) or {})
    for item in param or []:
        if "=" not in item:
            raise typer.BadParameter(f"Expected KEY=VALUE, got: {item}")
        key, value = item.split("=", 1)
        # lists such as channel ids are given in YAML flow style: [a, b]
        parameters[key] = yaml.safe_load(value) if value.startswith("[") else value
    return parameters


@step_app.command("list")
def step_list() -> None:
    """List the available steps."""
    for name, step_cls in STEPS.items():
        typer.echo(f"{name}\t{step_cls.name}")


@step_app.command("run")
def step_run(
    step_name: str,
    params_file: Optional[Path] = typer.Option(None, "--params-file", help="YAML file with input parameters"),
    param: Optional[List[str]] = typer.Option(None, "--param", "-p", help="Input parameter as KEY=VALUE"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config YAML"),
) -> None:
    """
    Run one provisioning step against the configured store and gateway.

    Prints the signal sent to the orchestrator. Exits with code 1 when the
    step reports an error.

    Example:
        tagsteps step run deactivate-scanner --params-file scan.yaml
        tagsteps step run update-monitoring-state -p InstanceId=abc -p "TAG Element=TAG 1"
    """
    step_cls = STEPS.get(step_name)
    if step_cls is None:
        typer.secho(f"Unknown step: {step_name}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    config = load_config(str(config_path) if config_path else None)
    parameters = _collect_parameters(params_file, param)
    repository = get_repository(config=config) if config_path else get_repository()
    step = step_cls(repository, get_gateway(config=config), config)
    context = ProcessContext(parameters)

    outcome = run_step(step, context)
    signal = context.signal.value if context.signal else "none"
    typer.echo(f"{step.name}: {outcome.kind.value} (signal: {signal})")
    if outcome.detail:
        typer.echo(f"Detail: {outcome.detail}")
    if outcome.kind == OutcomeKind.ERROR:
        raise typer.Exit(code=1)


@instance_app.command("list")
def instance_list() -> None:
    """List all instances with their current status."""
    repo = get_repository()
    instances = repo.list_instances()
    if not instances:
        typer.echo("No instances found")
        return
    for instance in instances:
        typer.echo(f"{instance.id}\t{instance.definition}\t{instance.status}")


@instance_app.command("show")
def instance_show(instance_id: str) -> None:
    """Show an instance with its fields and transition history."""
    repo = get_repository()
    instance = repo.read_by_id(instance_id)
    if instance is None:
        typer.echo("Instance not found")
        raise typer.Exit(code=1)
    typer.echo(f"Instance {instance.id}: {instance.status}")
    if instance.fields:
        typer.echo(f"Fields: {json.dumps(instance.fields)}")
    for record in instance.history:
        typer.echo(
            f"- {record.transition}: {record.from_status} -> {record.to_status}"
            + (f" ({record.applied_at})" if record.applied_at else "")
        )


@instance_app.command("create")
def instance_create(
    instance_id: str,
    status: str = typer.Option(..., help="Initial status"),
    definition: str = typer.Option("", help="Definition name"),
    fields: Optional[str] = typer.Option(None, help="JSON object with instance fields"),
) -> None:
    """Create an instance in the configured store."""
    repo = get_repository()
    repo.create_instance(
        Instance(
            id=instance_id,
            definition=definition,
            status=status,
            fields=json.loads(fields) if fields else {},
        )
    )
    typer.echo(f"Created instance {instance_id} ({status})")


@instance_app.command("transition")
def instance_transition(instance_id: str, transition: str) -> None:
    """Request a named status transition on an instance."""
    repo = get_repository()
    try:
        instance = repo.request_transition(instance_id, transition)
    except TagStepsError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(f"Instance {instance.id}: {instance.status}")


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
