"""
Cookfetch CLI - configure command.

Points the chef-solo settings file at the combined tree.
"""

import typer
from rich.console import Console

from cookfetch.cli.errors import handle_error
from cookfetch.cli.fetch import get_config, get_project_dir, get_solo_config
from cookfetch.core.messages import ConsoleMessages
from cookfetch.core.pipeline import ConfigureProvisionerStage, PipelineContext

console = Console()


def configure(ctx: typer.Context) -> None:
    """
    Fill unset chef-solo paths from the combined tree and cookbook order.

    Customised paths are kept. Runs even when fetching is disabled.

    Examples:
        cookfetch configure
    """
    project_dir = get_project_dir(ctx)
    config = get_config(project_dir)

    solo = get_solo_config(project_dir, config)
    context = PipelineContext(
        project_dir=project_dir,
        config=config,
        messages=ConsoleMessages(console),
        provisioner=solo,
    )
    try:
        ConfigureProvisionerStage().execute(context)
        solo.save()
    except OSError as e:
        raise typer.Exit(handle_error(e))

    console.print(f"roles_path:     {solo.roles_path}", highlight=False)
    console.print(f"data_bags_path: {solo.data_bags_path}", highlight=False)
    console.print(f"cookbooks_path: {', '.join(solo.cookbooks_path)}", highlight=False)
