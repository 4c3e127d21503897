# src/gimps/cli.py

import sys
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console

from . import __version__
from .config import load_config
from .errors import GimpsError
from .core.gimps import Gimps
from .files import cleanup_args, go_mod_root, is_generated_file, list_files, module_name
from .log import setup_logging

# CLI argument/option definitions
PATHS = typer.Argument(None, help="Go files or directories to process", show_default=False)
CONFIG_FILE = typer.Option(
    None, "--config", "-c", help="Path to the config file (default: .gimps.yaml in the module root)"
)
STDOUT = typer.Option(False, "--stdout", "-s", help="Print output to stdout instead of updating the source file(s)")
DRY_RUN = typer.Option(False, "--dry-run", "-d", help="Do not update files")
SHOW_DIFF = typer.Option(False, "--diff", help="Show a diff for every changed file")
VERBOSE = typer.Option(False, "--verbose", "-v", help="List all instead of just changed files")
SHOW_VERSION = typer.Option(False, "--version", "-V", help="Show version and exit")

USAGE = "Usage: gimps [--stdout] [--dry-run] [--config=(autodetect)] FILE_OR_DIRECTORY[, ...]"

app = typer.Typer(name="gimps", help="Group, sort and alias the imports of Go files", add_completion=False)
console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def fail(message: str) -> NoReturn:
    err_console.print(message, style="red", markup=False, soft_wrap=True)
    raise typer.Exit(1)


@app.command()
def main(
    paths: Optional[List[str]] = PATHS,
    config_file: Optional[Path] = CONFIG_FILE,
    stdout: bool = STDOUT,
    dry_run: bool = DRY_RUN,
    show_diff: bool = SHOW_DIFF,
    verbose: bool = VERBOSE,
    show_version: bool = SHOW_VERSION,
):
    """Rewrite the import section of Go files."""
    if show_version:
        console.print(f"gimps {__version__}")
        return

    if not paths:
        fail(USAGE)

    logger = setup_logging(verbose)
    inputs = cleanup_args(paths)

    # finding the module root is best effort, an explicit config and project name work without it
    module_root = go_mod_root(inputs[0])

    try:
        config = load_config(config_file, module_root)
    except GimpsError as e:
        fail(f"Failed to load config file {config_file or '(autodetect)'}: {e}")

    if not config.project_name:
        if module_root is None:
            fail("Failed to auto-detect module root: no go.mod found")

        name = module_name(module_root)
        if name is None:
            fail(f"Failed to auto-detect project name based on the first given file ({inputs[0]})")
        config.project_name = name

    try:
        gimps = Gimps(config, dry_run=dry_run or stdout)
    except GimpsError as e:
        fail(f"Failed to initialize: {e}")

    root = module_root or Path.cwd()

    for start in inputs:
        try:
            filenames = list_files(start, root, config.exclude)
        except OSError as e:
            fail(f"Failed to process {start}: {e}")

        for filename in filenames:
            if config.detect_generated_files:
                try:
                    generated = is_generated_file(filename)
                except (GimpsError, OSError) as e:
                    fail(f"Cannot check if file {filename} is generated: {e}")

                if generated:
                    logger.debug("Skipping generated file %s", filename)
                    continue

            rel_path = _relative(filename, root)
            if verbose:
                logger.info("> %s", rel_path)

            result = gimps.process_file(filename, diff_path=Path(rel_path))
            if not result:
                fail(result.message)

            if stdout:
                sys.stdout.write(result.data.decode("utf-8"))
                continue

            if result.changed:
                if verbose:
                    logger.info("! %s", rel_path)
                else:
                    logger.info("Fixed %s", rel_path)

                if show_diff:
                    # tabs must reach the output unexpanded
                    sys.stdout.write(result.diff)


def _relative(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    app()
