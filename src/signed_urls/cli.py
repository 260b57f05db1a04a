"""signed-urls CLI - Issue and check signed URLs."""

import sys
from urllib.parse import urlsplit

import click
from rich.console import Console
from rich.table import Table

from signed_urls.canonical import canonicalize, parse_query, split_signature
from signed_urls.common.errors import ConfigError, SignatureRejected
from signed_urls.common.logging import setup_logging
from signed_urls.common.settings import get_settings
from signed_urls.signer import UrlSigner

console = Console()


def _parse_params(values: tuple[str, ...]) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got '{item}'", param_hint="--param")
        pairs.append((key, value))
    return pairs


@click.group()
@click.option(
    "--secret",
    envvar="SIGNED_URLS_SECRET",
    default=None,
    help="Signing secret (defaults to SIGNED_URLS_SECRET)",
)
@click.pass_context
def cli(ctx: click.Context, secret: str | None) -> None:
    """signed-urls CLI - Sign and verify URLs with a shared secret."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    ctx.ensure_object(dict)
    ctx.obj["signer"] = UrlSigner(secret if secret is not None else settings.secret)


@cli.command("sign")
@click.argument("path")
@click.option("--param", "-p", "params", multiple=True, help="Query parameter as key=value")
@click.pass_context
def sign_cmd(ctx: click.Context, path: str, params: tuple[str, ...]) -> None:
    """Build a signed URL for PATH."""
    signer: UrlSigner = ctx.obj["signer"]
    pairs = _parse_params(params)

    try:
        url = signer.build(path, pairs)
    except ConfigError as exc:
        console.print(f"[red]Error: {exc.message}[/red]")
        sys.exit(1)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--param") from exc

    click.echo(url)


@cli.command("verify")
@click.argument("url")
@click.pass_context
def verify_cmd(ctx: click.Context, url: str) -> None:
    """Verify the signature carried by URL."""
    signer: UrlSigner = ctx.obj["signer"]

    try:
        signer.verify_url(url)
    except ConfigError as exc:
        console.print(f"[red]Error: {exc.message}[/red]")
        sys.exit(1)
    except SignatureRejected as exc:
        console.print(f"[red]✗ {exc.message}[/red]")
        sys.exit(1)

    console.print("[green]✓ Signature is valid[/green]")


@cli.command("inspect")
@click.argument("url")
def inspect_cmd(url: str) -> None:
    """Show the canonical form a URL is signed over."""
    parts = urlsplit(url)
    signature, others = split_signature(parse_query(parts.query))

    table = Table(title="Query Parameters")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in sorted(others, key=lambda pair: pair[0]):
        table.add_row(key, value)
    console.print(table)

    console.print("Canonical form:", style="bold")
    click.echo(canonicalize(parts.path, others))
    if signature is None:
        console.print("[yellow]No signature parameter[/yellow]")
    else:
        click.echo(f"signature: {signature}")


@cli.command("serve")
def serve_cmd() -> None:
    """Run the demo server guarded by signed URLs."""
    from signed_urls.app import main as run_app

    run_app()


def main() -> None:
    """CLI entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
