import sys
from pathlib import Path
from typing import List, Optional

import typer

from appwrap.appdir.assembler import reset_workspace
from appwrap.config import DEFAULT_ICON_PATH, BuildConfig, PackageSpec
from appwrap.context import BuildContext
from appwrap.errors import AppwrapError
from appwrap.logger import setup_logger
from appwrap.pipeline import run_pipeline
from appwrap.tools.provision import ensure_tool


app = typer.Typer(
    name="appwrap",
    help="appwrap: package a prebuilt Linux executable as an AppImage",
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
):

    setup_logger(verbose=verbose)


@app.command()
def build(
    name: str = typer.Option(..., "--name", "-n", help="Application name"),
    binary: Optional[Path] = typer.Option(
        None,
        "--binary",
        "-b",
        help="Prebuilt executable (default: target/release/<name>)",
    ),
    icon: Path = typer.Option(
        DEFAULT_ICON_PATH,
        "--icon",
        "-i",
        help="Icon asset; a placeholder is generated when it is missing",
    ),
    icon_name: Optional[str] = typer.Option(
        None,
        "--icon-name",
        help="Desktop entry Icon key (default: the application name)",
    ),
    category: List[str] = typer.Option(
        ["Utility"],
        "--category",
        "-c",
        help="Desktop entry category (can be passed multiple times)",
    ),
    work_dir: Optional[Path] = typer.Option(
        None,
        "--work-dir",
        "-w",
        help="Directory holding inputs, the cached tool and the staging AppDir",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory receiving the AppImage (default: the work directory)",
    ),
    require_icon: bool = typer.Option(
        False,
        "--require-icon/--allow-placeholder-icon",
        help="Fail instead of generating a placeholder icon",
    ),
    keep_appdir: bool = typer.Option(
        False,
        "--keep-appdir/--remove-appdir",
        help="Leave the assembled AppDir after a successful build",
    ),
    extract_and_run: bool = typer.Option(
        True,
        "--extract-and-run/--no-extract-and-run",
        help="Set APPIMAGE_EXTRACT_AND_RUN so the image runs without FUSE",
    ),
):

    try:
        typer.echo(f"Building AppImage for {name}")

        spec = PackageSpec(
            app_name=name,
            binary_path=binary,
            icon_path=icon,
            icon_name=icon_name,
            categories=category,
        )
        config = BuildConfig(
            icon_policy="require" if require_icon else "placeholder",
            keep_appdir=keep_appdir,
            extract_and_run=extract_and_run,
        )
        context = BuildContext.create(
            spec,
            config=config,
            work_dir=work_dir,
            output_dir=output_dir,
        )

        result = run_pipeline(context)

        typer.echo("Build complete!")
        typer.echo(f"Image created at: {result.artifact}")

    except AppwrapError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        sys.exit(exc.exit_code)


@app.command("fetch-tool")
def fetch_tool(
    work_dir: Optional[Path] = typer.Option(None, "--work-dir", "-w"),
):

    try:
        context = BuildContext.create(
            PackageSpec(app_name="appwrap"),
            work_dir=work_dir,
        )
        tool = ensure_tool(context)
        typer.echo(f"Packaging tool ready at: {tool}")

    except AppwrapError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        sys.exit(exc.exit_code)


@app.command()
def clean(
    name: str = typer.Option(..., "--name", "-n"),
    work_dir: Optional[Path] = typer.Option(None, "--work-dir", "-w"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o"),
):

    try:
        context = BuildContext.create(
            PackageSpec(app_name=name),
            work_dir=work_dir,
            output_dir=output_dir,
        )
        reset_workspace(context)
        typer.echo(f"Removed {context.staging_dir} and {context.artifact_path}")

    except AppwrapError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        sys.exit(exc.exit_code)


def run_cli() -> None:
    app()


if __name__ == "__main__":
    run_cli()
