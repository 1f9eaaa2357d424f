"""
Main CLI entry point for modelmove.

This module defines the command-line interface using Typer. Every input of the
move command can also be supplied through the matching GitHub Actions input
variable (INPUT_<NAME>), so the CLI runs unchanged as an action step.
"""

from pathlib import Path
from typing import Any, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from modelmove import config
from modelmove.models.move_models import MigrationOutcome, MigrationRequest, StepName
from modelmove.models.resource_models import ResourceKind
from modelmove.runtime.move_runtime import MoveRuntime
from modelmove.runtime.probe_runtime import ProbeRuntime
from modelmove.services.settings_service import SettingsService
from modelmove.utils.log import configure_logging

# Initialize rich console for beautiful output
console = Console()

# Create the main Typer application
app = typer.Typer(
    name="modelmove",
    help="modelmove - Move a versioned Azure ML model from a workspace into a registry",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

STEP_DESCRIPTIONS = {
    StepName.VALIDATE_INPUTS: "Validating inputs",
    StepName.CHECK_SOURCE_RESOURCE_GROUP: "Checking source resource group",
    StepName.CHECK_DESTINATION_RESOURCE_GROUP: "Checking destination resource group",
    StepName.CHECK_SOURCE_WORKSPACE: "Checking source workspace",
    StepName.CHECK_DESTINATION_REGISTRY: "Checking destination registry",
    StepName.CHECK_MODEL_IN_SOURCE_WORKSPACE: "Checking model in source workspace",
    StepName.MOVE_MODEL: "Moving model",
}


def _action_input(name: str, help_text: str) -> Any:
    return typer.Option(
        None,
        f"--{name.replace('_', '-')}",
        envvar=config.action_input_env(name),
        help=help_text,
        show_envvar=True,
    )


def _positive_timeout(value: Optional[float]) -> Optional[float]:
    if value is not None and value <= 0:
        raise typer.BadParameter(f"Timeout {value} must be a positive number of seconds")
    return value


def _report_failure(message: str) -> NoReturn:
    """Print the failure, annotate the workflow run when under GitHub Actions, and exit 1."""
    console.print(f"❌ Action failed: [red]{escape(message)}[/red]")
    if config.running_in_github_actions():
        typer.echo(f"::error::❌ Action failed: {message}")
    raise typer.Exit(1)


def _print_summary(outcome: MigrationOutcome) -> None:
    table = Table(title="Model Move Summary")
    table.add_column("Step", style="cyan")
    table.add_column("Result", style="green")

    for record in outcome.steps:
        result = "✅ passed" if record.passed else "[red]❌ failed[/red]"
        table.add_row(STEP_DESCRIPTIONS[record.step], result)

    console.print(table)


# Version callback
def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        from modelmove import __version__
        console.print(f"modelmove version: [bold green]{__version__}[/bold green]")
        raise typer.Exit()

@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose output",
    ),
) -> None:
    """modelmove - check Azure ML resources and share a model into a registry."""
    # Set global verbosity level
    configure_logging(verbose)

@app.command()
def move(
    source_registry_name: Optional[str] = _action_input(
        "source_registry_name", "Source registry name; when set, the model is checked in the source workspace first"
    ),
    source_workspace_name: Optional[str] = _action_input(
        "source_workspace_name", "Workspace holding the model"
    ),
    source_resource_group: Optional[str] = _action_input(
        "source_resource_group", "Resource group of the source workspace"
    ),
    destination_resource_group: Optional[str] = _action_input(
        "destination_resource_group", "Destination resource group"
    ),
    destination_registry_name: Optional[str] = _action_input(
        "destination_registry_name", "Registry receiving the model"
    ),
    destination_registry_resource_group: Optional[str] = _action_input(
        "destination_registry_resource_group", "Resource group of the destination registry"
    ),
    model_name: Optional[str] = _action_input("model_name", "Name of the model"),
    model_version: Optional[str] = _action_input("model_version", "Version of the model"),
    config_file: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="YAML file with default values for the inputs",
    ),
    az_path: Optional[str] = typer.Option(
        None,
        "--az-path",
        help="Path or name of the az executable",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each az command (default: no limit)",
        callback=_positive_timeout,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable detailed logging",
    ),
) -> None:
    """
    Move a model version from a workspace into a registry.

    This command checks that the resource groups, the source workspace and the
    destination registry exist, then shares the model into the registry. The
    first failed check stops the run.
    """
    if verbose:
        configure_logging(verbose)

    try:
        settings_service = SettingsService(verbose=verbose)
        settings = settings_service.load_settings(config_file) if config_file else None

        options = settings_service.merge(settings, {
            "source_registry_name": source_registry_name,
            "source_workspace_name": source_workspace_name,
            "source_resource_group": source_resource_group,
            "destination_resource_group": destination_resource_group,
            "destination_registry_name": destination_registry_name,
            "destination_registry_resource_group": destination_registry_resource_group,
            "model_name": model_name,
            "model_version": model_version,
            "az_path": az_path,
            "timeout": timeout,
        })

        runtime = MoveRuntime(
            verbose=verbose,
            az_path=options.pop("az_path", None),
            timeout=options.pop("timeout", None) or config.get_command_timeout(),
        )
        request = MigrationRequest.from_options(options)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Moving model...", total=None)

            def on_step(step: StepName) -> None:
                progress.update(task, description=f"{STEP_DESCRIPTIONS[step]}...")

            outcome = runtime.move(request, on_step=on_step)

            progress.update(task, description="Move finished")

    except Exception as e:
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        _report_failure(str(e))

    if verbose:
        _print_summary(outcome)

    if not outcome.succeeded:
        _report_failure(outcome.message)

    console.print(f"✅ {escape(outcome.message)}")

@app.command()
def probe(
    kind: ResourceKind = typer.Argument(..., help="Kind of resource to look up"),
    name: str = typer.Argument(..., help="Name of the resource"),
    resource_group: Optional[str] = typer.Option(
        None,
        "-g",
        "--resource-group",
        help="Resource group (defaults to NAME for resource groups)",
    ),
    workspace_name: Optional[str] = typer.Option(
        None,
        "--workspace-name",
        help="Workspace holding the model",
    ),
    registry_name: Optional[str] = typer.Option(
        None,
        "--registry-name",
        help="Registry holding the model",
    ),
    model_version: Optional[str] = typer.Option(
        None,
        "--model-version",
        help="Model version",
    ),
    az_path: Optional[str] = typer.Option(
        None,
        "--az-path",
        help="Path or name of the az executable",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for the az command (default: no limit)",
        callback=_positive_timeout,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable detailed logging",
    ),
) -> None:
    """
    Check whether a single resource exists.

    Exits with status 0 when the resource exists and 1 otherwise.
    """
    if verbose:
        configure_logging(verbose)

    try:
        runtime = ProbeRuntime(
            verbose=verbose,
            az_path=az_path,
            timeout=timeout or config.get_command_timeout(),
        )
        verdict = runtime.probe(
            kind,
            name,
            resource_group=resource_group,
            workspace_name=workspace_name,
            registry_name=registry_name,
            version=model_version,
        )
    except Exception as e:
        console.print(f"❌ Error probing {kind.value}: [red]{escape(str(e))}[/red]")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        raise typer.Exit(1)

    if verdict.exists:
        console.print(f"✅ {kind.value} [bold green]{escape(name)}[/bold green] exists")
        if verbose:
            console.print(verdict.diagnostic, markup=False)
        return

    console.print(f"❌ {kind.value} [red]{escape(name)}[/red] not found")
    console.print(verdict.diagnostic, markup=False)
    raise typer.Exit(1)

if __name__ == "__main__":
    app()
