"""
Cookfetch CLI - fetch, link and lifecycle commands.
"""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from cookfetch.cli.errors import ExitCode, handle_error, print_missing_order_file_error
from cookfetch.core.config import FetcherConfig, load_config
from cookfetch.core.errors import CookfetchError
from cookfetch.core.links import LINKED_SUBDIRS, LinkReport, OverlayLinker
from cookfetch.core.messages import ConsoleMessages
from cookfetch.core.order import OrderStore
from cookfetch.core.pipeline import (
    FetchCheckoutsStage,
    LifecycleSlot,
    PipelineContext,
    build_default_host,
)
from cookfetch.core.provisioner import ChefSoloConfigFile

console = Console()


def get_project_dir(ctx: typer.Context) -> Path:
    """Project directory chosen on the command line, or the cwd."""
    obj = ctx.obj or {}
    project_dir: Path | None = obj.get("project_dir")
    return (project_dir or Path.cwd()).resolve()


def get_config(project_dir: Path) -> FetcherConfig:
    """Load configuration, exiting with a user error if it is invalid."""
    try:
        return load_config(project_dir, use_cache=False)
    except ValidationError as e:
        raise typer.Exit(handle_error(e))


def get_solo_config(project_dir: Path, config: FetcherConfig) -> ChefSoloConfigFile:
    """Load the chef-solo settings file, exiting with a user error if it is invalid."""
    try:
        return ChefSoloConfigFile(project_dir / config.provisioner_file)
    except ValidationError as e:
        raise typer.Exit(handle_error(e))


def print_link_summary(report: LinkReport) -> None:
    """Show how many links each combined subdirectory received."""
    table = Table(title="Combined tree", show_header=True, header_style="bold")
    table.add_column("Directory")
    table.add_column("Links", justify="right")

    for subdir in LINKED_SUBDIRS:
        count = sum(1 for key in report.links if key.startswith(f"{subdir}/"))
        table.add_row(subdir, str(count))

    console.print(table)
    if report.overridden:
        console.print(f"[dim]{len(report.overridden)} files overridden by later checkouts[/dim]")


def run(
    ctx: typer.Context,
    slot: LifecycleSlot = typer.Option(
        LifecycleSlot.BEFORE_PROVISION,
        "--slot",
        help="Lifecycle slot to run",
    ),
) -> None:
    """
    Run the fetch and configure stages registered at a lifecycle slot.

    Fetches and syncs checkouts (unless disabled), rebuilds the combined
    tree, then points the chef-solo settings file at it.

    Examples:
        cookfetch run
        cookfetch run --slot before_start
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

    def save_provisioner(context: PipelineContext) -> PipelineContext:
        solo.save()
        return context

    try:
        context = build_default_host().run(slot, context, continuation=save_provisioner)
    except (CookfetchError, OSError) as e:
        raise typer.Exit(handle_error(e))

    if context.link_report is not None:
        print_link_summary(context.link_report)
    console.print(f"[green]✓[/green] {slot.value} complete")


def fetch(
    ctx: typer.Context,
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Manifest URL (overrides configuration)",
    ),
) -> None:
    """
    Fetch the checkout manifest, sync checkouts and rebuild the combined tree.

    Examples:
        cookfetch fetch
        cookfetch fetch --url https://config.example.com/checkouts.csv
    """
    project_dir = get_project_dir(ctx)
    config = get_config(project_dir)
    if url is not None:
        config = config.model_copy()
        config.url = url

    context = PipelineContext(
        project_dir=project_dir,
        config=config,
        messages=ConsoleMessages(console),
    )

    try:
        context = FetchCheckoutsStage().execute(context)
    except (CookfetchError, OSError) as e:
        raise typer.Exit(handle_error(e))

    if context.skipped:
        return

    console.print(f"[green]✓[/green] Synced {len(context.sync_results)} checkouts")
    if context.link_report is not None:
        print_link_summary(context.link_report)


def link(ctx: typer.Context) -> None:
    """
    Rebuild the combined tree from the recorded cookbook order.

    Does not touch the network or the checkouts.

    Examples:
        cookfetch link
    """
    project_dir = get_project_dir(ctx)
    config = get_config(project_dir)

    cookbooks = OrderStore(project_dir / config.order_file).read()
    if cookbooks is None:
        print_missing_order_file_error(config.order_file)
        raise typer.Exit(ExitCode.USER_ERROR)

    linker = OverlayLinker(
        project_dir,
        checkouts_dir=config.checkouts_dir,
        combined_dir=config.combined_dir,
        link_root=config.link_root,
        messages=ConsoleMessages(console),
    )
    try:
        report = linker.link(cookbooks)
    except (CookfetchError, OSError) as e:
        raise typer.Exit(handle_error(e))

    print_link_summary(report)


def order(ctx: typer.Context) -> None:
    """
    Show the recorded cookbook order, lowest precedence first.

    Examples:
        cookfetch order
    """
    project_dir = get_project_dir(ctx)
    config = get_config(project_dir)

    cookbooks = OrderStore(project_dir / config.order_file).read()
    if cookbooks is None:
        print_missing_order_file_error(config.order_file)
        raise typer.Exit(ExitCode.USER_ERROR)

    for index, path in enumerate(cookbooks, start=1):
        console.print(f"{index:>3}  {path}", highlight=False)
