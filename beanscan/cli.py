import json
import sys
from pathlib import Path

import typer

from beanscan.archive.loader import load_archive
from beanscan.archive.model import ArchiveKind
from beanscan.config import ScanConfig
from beanscan.discovery.consumers import ClassCollector, DescriptorCollector
from beanscan.discovery.scanner import discover
from beanscan.errors import BeanscanError
from beanscan.logger import setup_logger


app = typer.Typer(
    name="beanscan",
    help="beanscan: discover bean descriptors and class files in Java archives",
    add_completion=False,
)

@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log warnings and errors",
    ),
):

    setup_logger(verbose=verbose, quiet=quiet)

@app.command()
def scan(
    archive_file: Path = typer.Argument(
        ...,
        help="Archive to scan (.war or .jar)",
    ),
    marker: str = typer.Option(
        "beans.xml",
        "--marker",
        "-m",
        help="Marker descriptor file name",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the discovery result as JSON",
    ),
):

    try:
        config = ScanConfig(marker_name=marker)
        archive = load_archive(archive_file)

        registry = DescriptorCollector()
        indexer = ClassCollector()

        stats = discover(
            archive,
            registry=registry,
            indexer=indexer,
            config=config,
        )

        if as_json:
            typer.echo(
                json.dumps(
                    {
                        "archive": archive.name,
                        "kind": archive.kind.value,
                        "descriptors": registry.urls,
                        "archives_scanned": stats.archives_scanned,
                        "classes_fed": stats.classes_fed,
                        "bytes_read": indexer.bytes_read,
                    },
                    indent=2,
                )
            )
            return

        typer.echo(f"Scanned {archive.name} ({archive.kind.value})")
        if archive.kind is ArchiveKind.UNSUPPORTED:
            typer.secho(
                f"Unsupported archive type: {archive.name} (only .war and .jar are scanned)",
                fg=typer.colors.YELLOW,
            )
        elif not registry.urls:
            typer.secho(
                f"No {config.marker_name} found; no classes scanned",
                fg=typer.colors.YELLOW,
            )
        for url in registry.urls:
            typer.echo(f" - descriptor: {url}")
        typer.echo(
            f" - {stats.archives_scanned} archive(s) scanned, "
            f"{stats.classes_fed} class(es) fed, {indexer.bytes_read} bytes read"
        )

    except BeanscanError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        sys.exit(exc.exit_code)


@app.command()
def inspect(
    archive_file: Path = typer.Argument(..., help="Archive to list"),
):
    """List the entries of an archive, descending into nested archives."""

    try:
        archive = load_archive(archive_file)
    except BeanscanError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        sys.exit(exc.exit_code)

    _print_tree(archive, indent="")


def _print_tree(archive, indent: str) -> None:
    typer.echo(f"{indent}{archive.name} [{archive.kind.value}]")
    for path in archive:
        typer.echo(f"{indent}  {path}")
        node = archive.get(path)
        if node.is_archive:
            _print_tree(node.asset.archive, indent + "    ")


def run_cli() -> None:
    app()


if __name__ == "__main__":
    run_cli()
