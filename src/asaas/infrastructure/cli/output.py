"""Shared helpers for the CLI commands."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import click
from pydantic import ValidationError as SettingsError

from asaas.application.client import AsaasClient
from asaas.domain.exceptions import AsaasError
from asaas.infrastructure import bootstrap


def open_client() -> AsaasClient:
    try:
        return bootstrap.asaas_client()
    except SettingsError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")


def run(call: Callable[[AsaasClient], dict[str, Any]]) -> None:
    """Run *call* against a configured client and print its result as JSON."""
    with open_client() as client:
        try:
            result = call(client)
        except AsaasError as exc:
            raise click.ClickException(str(exc))
    click.echo(json.dumps(result, indent=2, ensure_ascii=False))


def drop_empty(values: dict[str, Any]) -> dict[str, Any]:
    """Keep only the options the user actually passed."""
    return {key: value for key, value in values.items() if value is not None}
