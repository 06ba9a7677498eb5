"""CLI parser for rexcompat."""

import os
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from typing_extensions import Annotated

from rexcompat.data_providers.chunk_processor import (
    ChunkResult,
    process_build_dir,
    process_chunk,
    read_source,
    write_source,
)
from rexcompat.data_providers.detection import count_unsupported
from rexcompat.data_providers.patch_manager import PatchConfigError, PatchManager
from rexcompat.presentation.formatter import CompatFormatter
from rexcompat.ui.views.compat_view import CompatApp
from rexcompat.utils.log import setup_logging

app = typer.Typer(no_args_is_help=True)
console = Console()

EscapeDepth = Annotated[
    int,
    typer.Option(
        "--escape-depth",
        min=1,
        max=2,
        help="Backslashes spelling one regex backslash inside RegExp string arguments",
    ),
]


def is_stdin_a_tty() -> bool:
    """Check if stdin is a TTY."""
    return sys.stdin.isatty()


def read_input_file(path: Path) -> str:
    try:
        return read_source(path)
    except FileNotFoundError:
        print(f"Error: File '{path}' not found.")
        raise typer.Exit(code=1)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Cannot read '{path}': {e}")
        raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Rewrite modern regex syntax for engines without lookbehind or named groups."""
    setup_logging(verbose)


@app.command()
def transform(
    files: Annotated[Optional[List[Path]], typer.Argument(help="Source files (stdin when omitted)")] = None,
    in_place: Annotated[bool, typer.Option("--in-place", help="Write results back to the files")] = False,
    escape_depth: EscapeDepth = 2,
) -> None:
    """Rewrite regex literals and RegExp calls in source files."""
    if not files:
        if is_stdin_a_tty():
            print("Error: No input provided. Pipe source to rexcompat or pass files.")
            raise typer.Exit(code=1)
        result = process_chunk(sys.stdin.read(), "<stdin>", escape_depth)
        sys.stdout.write(result.code)
        return

    for path in files:
        result = process_chunk(read_input_file(path), str(path), escape_depth)
        if in_place:
            if result.changed:
                write_source(path, result.code)
        else:
            sys.stdout.write(result.code)


@app.command()
def bundle(
    build_dir: Annotated[Path, typer.Argument(help="Build output directory")],
    glob: Annotated[str, typer.Option("--glob", help="Output units to process")] = "**/*.js",
    escape_depth: EscapeDepth = 2,
) -> None:
    """Rewrite every bundled output unit under BUILD_DIR in place."""
    if not build_dir.is_dir():
        print(f"Error: Directory '{build_dir}' not found.")
        raise typer.Exit(code=1)

    results = process_build_dir(build_dir, glob, escape_depth)
    touched = [result for result in results if result.before.total]
    if touched:
        console.print(CompatFormatter.create_coverage_table(touched))
    print(f"Processed {len(results)} unit(s), {sum(r.changed for r in results)} rewritten.")


@app.command()
def patch(
    root: Annotated[Path, typer.Option("--root", help="Project root holding node_modules")] = Path("."),
    config: Annotated[Optional[Path], typer.Option("--config", help="Patch table (JSON)")] = None,
) -> None:
    """Apply the known-pattern patch table to installed packages."""
    try:
        manager = PatchManager(config)
    except PatchConfigError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)

    report = manager.apply(root)
    console.print(CompatFormatter.create_patch_table(report))
    print(f"Patching complete! {report.patched_count} file(s) modified.")


@app.command()
def check(
    files: Annotated[List[Path], typer.Argument(help="Files to inspect")],
    strict: Annotated[bool, typer.Option("--strict", help="Exit 1 when constructs remain")] = False,
) -> None:
    """Report unsupported constructs without rewriting anything."""
    results = []
    for path in files:
        code = read_input_file(path)
        counts = count_unsupported(code)
        results.append(ChunkResult(unit_name=str(path), code=code, before=counts, after=counts))

    console.print(CompatFormatter.create_coverage_table(results))
    remaining = sum(result.after.total for result in results)
    print(f"{remaining} unsupported construct(s) found.")
    if strict and remaining:
        raise typer.Exit(code=1)


@app.command()
def preview(
    initial_pattern: Annotated[Optional[str], typer.Option("--pattern", "-p", help="Initial pattern")] = None,
    input_file: Annotated[Optional[Path], typer.Option("--input", "-i", help="Sample text file")] = None,
) -> None:
    """Open the interactive rewrite preview."""
    input_content = ""
    if input_file:
        input_content = read_input_file(input_file)
    elif not is_stdin_a_tty():
        input_content = sys.stdin.read()

        # Reopen stdin as tty for Textual
        if sys.platform != "win32":
            tty = open("/dev/tty", "r")
            os.dup2(tty.fileno(), 0)
            sys.stdin = os.fdopen(0, "r")

    tui = CompatApp(input_content, initial_pattern=initial_pattern)
    tui.run()


if __name__ == "__main__":
    app()
