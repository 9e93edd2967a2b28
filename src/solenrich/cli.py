"""
solenrich CLI
Command-line access to the shared lookup cache.
"""

import asyncio
import json
import sys
from collections.abc import Awaitable, Callable
from typing import Any, Optional

import click
from rich.console import Console
from rich.table import Table

from solenrich.cache import Cache
from solenrich.config import configure_logging, get_settings


console = Console()


def _run(ctx: click.Context, action: Callable[[Cache], Awaitable[Any]]) -> Any:
    """Open a cache from the CLI options, run one action, and close it."""

    async def runner() -> Any:
        async with Cache(
            url=ctx.obj["url"],
            token=ctx.obj["token"],
            prefix=ctx.obj["prefix"],
            timeout=ctx.obj["timeout"],
        ) as cache:
            return await action(cache)

    return asyncio.run(runner())


def _warn_if_local(backend_name: str) -> None:
    """Warn that in-memory writes do not outlive this process."""
    if backend_name == "memory":
        console.print(
            "[yellow]Warning: no remote cache configured; the in-memory "
            "store is local to this process and is discarded on exit[/yellow]"
        )


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return raw


@click.group()
@click.option("--url", "-u", default=None, help="Remote cache URL (default: settings)")
@click.option("--token", "-t", default=None, help="Remote cache token (default: settings)")
@click.option("--log-level", default=None, help="Logging level")
@click.pass_context
def cli(ctx, url: Optional[str], token: Optional[str], log_level: Optional[str]):
    """solenrich - inspect the shared lookup cache."""
    settings = get_settings()
    configure_logging(log_level)
    ctx.ensure_object(dict)
    ctx.obj["url"] = url if url is not None else settings.upstash_redis_rest_url
    ctx.obj["token"] = token if token is not None else settings.upstash_redis_rest_token
    ctx.obj["prefix"] = settings.cache_prefix
    ctx.obj["timeout"] = settings.cache_socket_timeout


@cli.command()
@click.pass_context
def backend(ctx):
    """Show which cache backend is selected."""

    async def action(cache: Cache) -> str:
        return cache.backend_name

    name = _run(ctx, action)
    console.print(f"Backend: [cyan]{name}[/cyan]")


@cli.command()
@click.argument("key")
@click.pass_context
def get(ctx, key: str):
    """Print the cached value for KEY."""

    async def action(cache: Cache) -> Any:
        return await cache.get(key)

    value = _run(ctx, action)
    if value is None:
        console.print(f"[yellow]{key}: not cached[/yellow]")
        sys.exit(1)
    console.print(json.dumps(value, indent=2))


@cli.command(name="set")
@click.argument("key")
@click.argument("value")
@click.option("--ttl", default=300, show_default=True, help="Time-to-live in seconds")
@click.pass_context
def set_(ctx, key: str, value: str, ttl: int):
    """Cache VALUE (JSON, or a plain string) under KEY."""

    async def action(cache: Cache) -> str:
        await cache.set(key, _parse_value(value), ttl)
        return cache.backend_name

    _warn_if_local(_run(ctx, action))
    console.print(f"[green]Cached {key} for {ttl}s[/green]")


@cli.command()
@click.argument("key")
@click.pass_context
def delete(ctx, key: str):
    """Invalidate KEY."""

    async def action(cache: Cache) -> str:
        await cache.delete(key)
        return cache.backend_name

    _warn_if_local(_run(ctx, action))
    console.print(f"[green]Deleted {key}[/green]")


@cli.command()
@click.pass_context
def health(ctx):
    """Check the cache backend round-trip."""

    async def action(cache: Cache) -> dict[str, Any]:
        return await cache.health_check()

    status = _run(ctx, action)

    table = Table(title="Cache Health")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for field_name, field_value in status.items():
        table.add_row(field_name, str(field_value))
    console.print(table)

    if not status["healthy"]:
        sys.exit(1)


def main() -> None:
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
