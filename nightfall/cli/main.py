"""Nightfall CLI - Main commands."""
import asyncio
import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

from nightfall.core.api.config import API_KEY_ENV, API_URL

app = typer.Typer(
    name="nightfall",
    help="Nightfall scanning CLI",
    add_completion=False
)
console = Console()


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def load_policy(policy_file: Optional[Path]) -> Optional[dict]:
    """Read an inline policy from a JSON file."""
    if policy_file is None:
        return None
    try:
        return json.loads(policy_file.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not read policy file {policy_file}: {e}[/red]")
        raise typer.Exit(1)


def make_client(api_key: Optional[str], base_url: str, concurrency: int = 1):
    """Create a client, turning configuration errors into a CLI exit."""
    from nightfall import NightfallClient, NightfallConfigError

    try:
        config = NightfallClient.create_config(
            api_key=api_key,
            base_url=base_url,
            file_upload_concurrency=concurrency
        )
        return NightfallClient(config=config)
    except NightfallConfigError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)


@app.command("scan-file")
def scan_file(
    file_path: Path = typer.Argument(..., help="Local file to scan", exists=True, dir_okay=False),
    policy_uuid: str = typer.Option(None, "--policy-uuid", "-p", help="Stored policy UUID"),
    policy_file: Path = typer.Option(None, "--policy-file", "-f", help="Inline policy as a JSON file"),
    metadata: str = typer.Option("", "--metadata", "-m", help="Request metadata echoed with results"),
    timeout: float = typer.Option(None, "--timeout", "-t", help="Seconds allowed for the whole scan"),
    concurrency: int = typer.Option(1, "--concurrency", "-c", help="Parallel chunk uploads (1-100)"),
    api_key: str = typer.Option(None, "--api-key", envvar=API_KEY_ENV, help="Nightfall API key"),
    base_url: str = typer.Option(API_URL, "--base-url", help="API base URL"),
):
    """Upload a file and trigger an asynchronous scan."""
    from nightfall import NightfallException
    from nightfall.core.upload.models import UploadProgress

    policy = load_policy(policy_file)
    if policy is None and not policy_uuid:
        console.print("[red]Provide --policy-uuid or --policy-file[/red]")
        raise typer.Exit(1)

    async def do_scan():
        async with make_client(api_key, base_url, concurrency) as nightfall:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console
            ) as progress:
                task = progress.add_task(f"Uploading {file_path.name}", total=100)

                def on_progress(p: UploadProgress):
                    progress.update(task, completed=p.percentage)

                try:
                    result = await nightfall.scan_file_path(
                        file_path,
                        policy_uuid=policy_uuid,
                        policy=policy,
                        request_metadata=metadata,
                        timeout=timeout,
                        progress_callback=on_progress
                    )
                except NightfallException as e:
                    console.print(f"[red]Scan failed: {e}[/red]")
                    raise typer.Exit(1)

            console.print(f"[green]Scan started:[/green] {result.id}")
            if result.message:
                console.print(result.message)

    run_async(do_scan())


@app.command("scan-text")
def scan_text(
    text: List[str] = typer.Argument(..., help="Text items to scan"),
    policy_uuid: List[str] = typer.Option(None, "--policy-uuid", "-p", help="Stored policy UUID (repeatable)"),
    policy_file: Path = typer.Option(None, "--policy-file", "-f", help="Inline policy as a JSON file"),
    api_key: str = typer.Option(None, "--api-key", envvar=API_KEY_ENV, help="Nightfall API key"),
    base_url: str = typer.Option(API_URL, "--base-url", help="API base URL"),
):
    """Scan inline text and print the findings."""
    from nightfall import NightfallException, ScanTextRequest

    policy = load_policy(policy_file)
    request = ScanTextRequest(payload=list(text), policy=policy, policy_uuids=policy_uuid or None)

    async def do_scan():
        async with make_client(api_key, base_url) as nightfall:
            try:
                result = await nightfall.scan_text(request)
            except NightfallException as e:
                console.print(f"[red]Scan failed: {e}[/red]")
                raise typer.Exit(1)

        if not result.finding_count:
            console.print("[green]No findings[/green]")
            return

        table = Table()
        table.add_column("Item", justify="right")
        table.add_column("Detector", style="cyan")
        table.add_column("Confidence")
        table.add_column("Finding")

        for index, findings in enumerate(result.findings):
            for finding in findings:
                detector = finding.get("detector") or {}
                table.add_row(
                    str(index),
                    detector.get("name", ""),
                    finding.get("confidence", ""),
                    finding.get("redactedFinding") or finding.get("finding", "")
                )

        console.print(table)

    run_async(do_scan())


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
