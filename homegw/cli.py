"""Typer CLI entrypoint."""

from __future__ import annotations

import json
import logging
from typing import Any

import typer

from homegw.core.errors import GatewayError
from homegw.core.service import GatewayService

app = typer.Typer(help="Smart-home gateway: discover devices and send them commands")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _build_service() -> GatewayService:
    service = GatewayService()
    for warning in getattr(service, "load_warnings", ()):
        typer.echo(f"Warning: {warning}", err=True)
    return service


def _fail(exc: GatewayError) -> typer.Exit:
    typer.echo(f"Error: [{exc.reason}] {exc}", err=True)
    return typer.Exit(code=1)


def _parse_arg(raw: str | None) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _format_state(state: Any) -> str:
    return ", ".join(f"{key}={value}" for key, value in state.to_dict().items())


@app.command("discover")
def discover() -> None:
    """Scan the network and list devices, marking those already added."""
    try:
        service = _build_service()
        devices = service.discover()
        if not devices:
            typer.echo("No devices found on the network")
            return
        for item in devices:
            device = item.device
            marker = "added" if item.added else "new"
            typer.echo(f"{device.identifier} {device.type} {device.address}:{device.port} [{marker}]")
    except GatewayError as exc:
        raise _fail(exc) from None


@app.command("list")
def list_saved() -> None:
    """List devices added to the gateway."""
    try:
        service = _build_service()
        records = service.list_saved()
        if not records:
            typer.echo("No devices added")
            return
        for record in records:
            typer.echo(f"{record.device.identifier} {record.name} ({record.device.type})")
    except GatewayError as exc:
        raise _fail(exc) from None


@app.command("show")
def show(uuid: str) -> None:
    """Show a saved device."""
    try:
        service = _build_service()
        record = service.get_saved(uuid)
        typer.echo(json.dumps({"name": record.name, "device": record.device.to_dict()}, indent=2))
    except GatewayError as exc:
        raise _fail(exc) from None


@app.command("add")
def add(name: str, uuid: str) -> None:
    """Add a discovered device under NAME."""
    try:
        service = _build_service()
        record = service.add_device(name, uuid)
        typer.echo(f"Added {record.device.identifier} as '{record.name}'")
    except GatewayError as exc:
        raise _fail(exc) from None


@app.command("remove")
def remove(uuid: str) -> None:
    """Remove a saved device."""
    try:
        service = _build_service()
        record = service.remove_device(uuid)
        typer.echo(f"Removed {record.device.identifier} ('{record.name}')")
    except GatewayError as exc:
        raise _fail(exc) from None


@app.command("rename")
def rename(uuid: str, name: str) -> None:
    """Rename a saved device."""
    try:
        service = _build_service()
        record = service.rename_device(uuid, name)
        typer.echo(f"Renamed {record.device.identifier} to '{record.name}'")
    except GatewayError as exc:
        raise _fail(exc) from None


@app.command("actions")
def actions(uuid: str) -> None:
    """List the actions a device supports."""
    try:
        service = _build_service()
        names = service.list_actions(uuid)
        typer.echo(f"Actions for {uuid}: {', '.join(names)}")
    except GatewayError as exc:
        raise _fail(exc) from None


@app.command("status")
def status(uuid: str) -> None:
    """Print the current state of a device."""
    try:
        service = _build_service()
        state = service.get_status(uuid)
        typer.echo(_format_state(state))
    except GatewayError as exc:
        raise _fail(exc) from None


@app.command("perform")
def perform(
    uuid: str,
    action: str,
    arg: str | None = typer.Argument(None, help="Action argument; parsed as JSON when possible"),
) -> None:
    """Perform ACTION on a device and print the resulting state.

    ARG is parsed as JSON (so 22 is a number) and falls back to a plain string.
    """
    try:
        service = _build_service()
        result = service.perform_action(uuid, action, _parse_arg(arg))
        value = getattr(result.value, "value", result.value)
        typer.echo(f"{result.action} on {result.identifier} -> {value}")
        typer.echo(_format_state(result.state))
    except GatewayError as exc:
        raise _fail(exc) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
