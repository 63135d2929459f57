"""NovelAI CLI - Main commands."""
import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from novelapy.core.exceptions import NovelAIException

app = typer.Typer(
    name="novelapy",
    help="NovelAI client helpers",
    add_completion=False
)
console = Console()


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


@app.command()
def fit(
    width: int = typer.Argument(..., help="Requested width"),
    height: int = typer.Argument(..., help="Requested height"),
):
    """Fit a requested size to the sizes the API accepts."""
    from novelapy.core.image import Size, resize_input

    size = resize_input(Size(width, height))
    console.print(f"{size.width}x{size.height}")


@app.command()
def key(
    email: str = typer.Option(None, "--email", "-e", envvar="NOVELAI_EMAIL", help="Account email"),
    password: str = typer.Option(None, "--password", "-p", envvar="NOVELAI_PASSWORD", help="Account password"),
    encryption: bool = typer.Option(False, "--encryption", help="Derive the encryption key instead"),
):
    """Derive the access key (or encryption key) for an account."""
    from novelapy.core.crypto import derive_access_key, derive_encryption_key

    if not email:
        email = typer.prompt("Email")
    if not password:
        password = typer.prompt("Password", hide_input=True)

    derive = derive_encryption_key if encryption else derive_access_key
    try:
        console.print(run_async(derive(email, password)))
    except NovelAIException as e:
        console.print(f"[red]Key derivation failed: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def login(
    token: Optional[str] = typer.Option(None, "--token", "-t", envvar="NOVELAI_TOKEN", help="Persistent API token"),
    email: Optional[str] = typer.Option(None, "--email", "-e", envvar="NOVELAI_EMAIL", help="Account email"),
    password: Optional[str] = typer.Option(None, "--password", "-p", envvar="NOVELAI_PASSWORD", help="Account password"),
    endpoint: str = typer.Option("https://api.novelai.net", "--endpoint", help="API endpoint"),
):
    """Login and print the access token and subscription."""
    from novelapy import NovelAIClient, APIConfig

    if token:
        config = APIConfig.from_token(token, endpoint=endpoint)
    else:
        if not email:
            email = typer.prompt("Email")
        if not password:
            password = typer.prompt("Password", hide_input=True)
        config = APIConfig.from_credentials(email, password, endpoint=endpoint)

    async def do_login():
        async with NovelAIClient(config) as novelai:
            access_token = await novelai.login()
            subscription = await novelai.get_subscription()
            return access_token, subscription

    try:
        access_token, subscription = run_async(do_login())
    except NovelAIException as e:
        console.print(f"[red]Login failed: {e}[/red]")
        raise typer.Exit(1)

    table = Table(show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Access token", access_token)
    table.add_row("Tier", str(subscription.tier))
    table.add_row("Active", "yes" if subscription.active else "no")
    table.add_row("Image generation", "yes" if subscription.can_generate_images else "no")
    console.print(table)


@app.command()
def probe(
    source: str = typer.Argument(..., help="Image URL or data URI"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Request timeout in seconds"),
    strict: bool = typer.Option(False, "--strict", help="Reject content types outside the allow-list"),
):
    """Download an image and show the size it would be generated at."""
    from novelapy import NovelAIClient, APIConfig, DownloadConfig
    from novelapy.core.image import probe_format, probe_size

    config = APIConfig(download=DownloadConfig(strict_content_type=strict))

    async def do_probe():
        async with NovelAIClient(config) as novelai:
            return await novelai.prepare_image(source, timeout=timeout)

    try:
        data, fitted = run_async(do_probe())
        original = probe_size(data)
        mime = probe_format(data)
    except NovelAIException as e:
        console.print(f"[red]Download failed: {e}[/red]")
        raise typer.Exit(1)

    table = Table()
    table.add_column("Type", style="cyan")
    table.add_column("Bytes", justify="right")
    table.add_column("Original")
    table.add_column("Fitted", style="green")
    table.add_row(mime, f"{len(data):,}", str(original), str(fitted))
    console.print(table)


def main():
    app()


if __name__ == "__main__":
    main()
