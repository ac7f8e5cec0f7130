"""Command-line entrypoint for the MIRA provider."""

import functools

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mira_provider import __version__
from mira_provider.config import get_settings
from mira_provider.errors import MiraClientError
from mira_provider.integrations.mira import AssignmentMode, MiraClient
from mira_provider.services.allocated_subnet import AllocatedSubnetResource, AllocatedSubnetState
from mira_provider.services.data_sources import AvailableSubnetsDataSource, SubnetRecordDataSource
from mira_provider.services.lifecycle import Operation, ensure_supported
from mira_provider.services.provider import configure_client
from mira_provider.utils.logger import setup_logging

console = Console()


def handle_errors(fn):
    """Print MIRA failures and invalid settings, then exit non-zero."""

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except (MiraClientError, ValidationError) as e:
            console.print(f"[bold red]Error:[/bold red] {type(e).__name__}: {escape(str(e))}", soft_wrap=True)
            raise SystemExit(1)

    return wrapper


def build_client(strict: bool = False) -> MiraClient:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format, settings.log_file_path)
    if strict:
        settings = settings.model_copy(update={"mira_assignment_mode": AssignmentMode.STRICT})
    return configure_client(settings)


@click.group()
@click.version_option(version=__version__, prog_name="mira")
def cli():
    """Allocate subnets from the MIRA IPAM service."""
    pass


@cli.command()
@click.option("-r", "--range", "request_range", required=True, help="Range to search for free subnets")
@click.option("-m", "--mask", "request_mask", required=True, help="Subnet mask of the range")
@handle_errors
def available(request_range, request_mask):
    """List free subnets inside a range."""
    with build_client() as client:
        data = AvailableSubnetsDataSource(client).read(request_range, request_mask)

    table = Table(title=f"Free subnets in {request_range} / {request_mask}")
    table.add_column("#", style="dim")
    table.add_column("Subnet", style="cyan")
    for index, subnet in enumerate(data["payload"]):
        table.add_row(str(index), subnet)
    console.print(table)


@cli.command()
@click.option("-r", "--range", "request_range", required=True, help="Range to assign a subnet from")
@click.option("-m", "--mask", "request_mask", required=True, help="Subnet mask of the range")
@click.option("--address-id", required=True, help="Site id of the physical location")
@click.option("--comment", required=True, help="What the subnet is used for")
@click.option("-n", "--name", "subnet_name", required=True, help="Subnet name, usually matching the comment")
@click.option("-t", "--template", required=True, help="Deployment template, e.g. U25_DEV_GCP")
@click.option("--strict", is_flag=True, help="Fail if MIRA does not confirm the assignment")
@handle_errors
def assign(request_range, request_mask, address_id, comment, subnet_name, template, strict):
    """Claim the first free subnet in a range."""
    state = AllocatedSubnetState(
        addressid=address_id,
        comment=comment,
        requestrange=request_range,
        requestmask=request_mask,
        subnetname=subnet_name,
        template=template,
    )
    with build_client(strict=strict) as client:
        state = AllocatedSubnetResource(client).apply(Operation.CREATE, state)

    console.print(
        f"[bold green]Assigned:[/bold green] {state.miraassignedsubnet} / {state.miraassignedsubnetmask}",
        soft_wrap=True,
    )
    console.print(f"Resource id: [bold]{state.id}[/bold]", soft_wrap=True)


@cli.command()
@click.argument("address")
@handle_errors
def lookup(address):
    """Show the MIRA record of the subnet containing ADDRESS."""
    with build_client() as client:
        data = SubnetRecordDataSource(client).read(address)

    table = Table(title=f"Subnet record for {address}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    for key, value in data.items():
        table.add_row(key, str(value))
    console.print(table)


@cli.command()
@click.argument("resource_id")
@handle_errors
def update(resource_id):
    """Change an allocation (not supported)."""
    ensure_supported(Operation.UPDATE)


@cli.command()
@click.argument("resource_id")
@handle_errors
def delete(resource_id):
    """Release an allocation (not supported)."""
    ensure_supported(Operation.DELETE)


if __name__ == "__main__":
    cli()
