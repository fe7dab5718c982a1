"""
Main CLI entry point for refln-converter using Click.

Usage:
    refln-converter convert [options] CIF_FILE MTZ_FILE
    refln-converter convert [options] CIF_FILE --dir DIRECTORY
    refln-converter print-spec
    refln-converter blocks CIF_FILE
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional

import click

from reflconv import __version__
from reflconv.config import ConversionOptions
from reflconv.conversion import BatchDriver, CifToMtz, ConversionResult
from reflconv.enums import ExitCode, OutputFormat
from reflconv.errors import ReflconvError, SpecSyntaxError, WriteError
from reflconv.parsers import CifReflnParser
from reflconv.spec import ConversionSpec, default_spec, load_spec


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("reflconv").setLevel(level)


class Config:
    """Shared configuration for CLI commands."""

    def __init__(self) -> None:
        self.verbose = False
        self.debug = False


pass_config = click.make_pass_decorator(Config, ensure=True)


def _print_spec(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(default_spec().format(), nl=False)
    ctx.exit(0)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.version_option(version=__version__, prog_name="refln-converter")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """Convert SF-mmCIF reflection data to MTZ."""
    ctx.ensure_object(Config)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    setup_logging(verbose=verbose, debug=debug)


@cli.command("print-spec")
def print_spec() -> None:
    """Print the default conversion spec.

    The output can be edited and passed back with convert --spec.
    """
    click.echo(default_spec().format(), nl=False)


@cli.command()
@click.argument("cif_file", type=click.Path(exists=True, allow_dash=True))
@click.argument("mtz_file", required=False, type=click.Path())
@click.option("--block", "-b", "block_name", help="mmCIF block to convert")
@click.option(
    "--dir",
    "-d",
    "output_dir",
    type=click.Path(file_okay=False),
    help="Output directory; converts every block to DIR/<block-name>.mtz",
)
@click.option("--spec", "spec_file", type=click.Path(), help="Conversion spec file")
@click.option(
    "--print-spec",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_print_spec,
    help="Print default spec and exit",
)
@click.option("--title", help="MTZ title")
@click.option("--history", "-H", multiple=True, help="Add a history line (repeatable)")
@click.option("--unmerged", "-u", is_flag=True, help="Write unmerged MTZ file(s)")
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.AUTO.value,
    show_default=True,
    help="Output format (auto: by file suffix, MTZ unless .parquet)",
)
@click.option("--skip-validation", is_flag=True, help="Skip pre-write dataset checks")
@click.option("--json", "as_json", is_flag=True, help="Output result as JSON")
@pass_config
def convert(
    config: Config,
    cif_file: str,
    mtz_file: Optional[str],
    block_name: Optional[str],
    output_dir: Optional[str],
    spec_file: Optional[str],
    title: Optional[str],
    history: tuple[str, ...],
    unmerged: bool,
    output_format: str,
    skip_validation: bool,
    as_json: bool,
) -> None:
    """Convert reflection blocks of CIF_FILE.

    First variant: converts the first block of CIF_FILE, or the block
    specified with --block, to MTZ_FILE.

    Second variant: converts each block of CIF_FILE to one file
    (block-name.mtz) in the --dir DIRECTORY.

    If CIF_FILE is -, the input is read from stdin.

    Example:
        refln-converter convert r1abcsf.ent.gz 1abc.mtz
    """
    logger = logging.getLogger("convert")

    if (mtz_file is None) == (output_dir is None):
        raise click.UsageError("Give either MTZ_FILE or --dir DIRECTORY (not both)")

    spec = _load_spec(spec_file)

    options = ConversionOptions(
        title=title,
        history=list(history),
        force_unmerged=unmerged,
        skip_validation=skip_validation,
        output_format=OutputFormat(output_format),
    )

    logger.info(f"Reading {cif_file} ...")
    try:
        tables = CifReflnParser().parse(cif_file)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(f"Error reading {cif_file}: {e}")

    driver = BatchDriver(CifToMtz(spec, options))

    if output_dir is not None:
        if block_name:
            logger.warning(f"--block {block_name} is ignored with --dir")
        report = driver.convert_all(tables, output_dir)
        if as_json:
            click.echo(json.dumps(report.to_dict(), indent=2))
        else:
            for result in report.results:
                _print_result(result)
            for name, error in report.failures.items():
                click.echo(click.style(f"ERROR: {name}: {error}", fg="red"), err=True)
        sys.exit(int(report.exit_code))

    try:
        result = driver.convert_one(tables, mtz_file, block_name)
    except WriteError as e:
        click.echo(click.style(f"ERROR writing {e.path}: {e.reason}", fg="red"), err=True)
        sys.exit(int(ExitCode.WRITE_ERROR))
    except ReflconvError as e:
        click.echo(click.style(f"ERROR: {e}", fg="red"), err=True)
        sys.exit(int(ExitCode.BLOCK_ERROR))

    if as_json:
        click.echo(
            json.dumps(
                {
                    "block": result.block_name,
                    "output": str(result.output_path),
                    "reflections": result.dataset.nreflections,
                    "columns": result.dataset.column_labels,
                    "non_numeric_values": len(result.diagnostics),
                    "warnings": result.warnings,
                },
                indent=2,
            )
        )
    else:
        _print_result(result)
    logger.info("Done.")


@cli.command()
@click.argument("cif_file", type=click.Path(exists=True, allow_dash=True))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_config
def blocks(config: Config, cif_file: str, as_json: bool) -> None:
    """List reflection blocks in CIF_FILE.

    Shows, for each block, which reflection loop it has, how many
    reflections, and whether it would be converted as merged data.

    Example:
        refln-converter blocks r1abcsf.ent.gz
    """
    try:
        tables = CifReflnParser().parse(cif_file)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(f"Error reading {cif_file}: {e}")

    if as_json:
        output = [
            {
                "block": t.block_name,
                "category": t.category or None,
                "reflections": t.length,
                "merged": t.is_merged,
                "spacegroup": t.spacegroup,
                "cell": list(t.cell.as_tuple()),
                "tags": t.tags,
            }
            for t in tables
        ]
        click.echo(json.dumps(output, indent=2))
        return

    for t in tables:
        click.echo(f"Block: {t.block_name}")
        if not t.has_loop:
            click.echo("  Reflection loop: Not found")
            continue
        kind = "merged" if t.is_merged else "unmerged"
        click.echo(f"  Reflection loop: {t.category} ({kind})")
        click.echo(f"  Reflections: {t.length}")
        click.echo(f"  Space group: {t.spacegroup or 'Not found'}")
        click.echo(f"  Cell: {t.cell}")


def _load_spec(spec_file: Optional[str]) -> ConversionSpec:
    """Load the spec, exiting with the spec error code on failure."""
    if spec_file is None:
        return default_spec()
    try:
        return load_spec(spec_file)
    except (SpecSyntaxError, FileNotFoundError, UnicodeDecodeError) as e:
        click.echo(f"Problem with spec: {e}", err=True)
        sys.exit(int(ExitCode.SPEC_ERROR))


def _print_result(result: ConversionResult) -> None:
    """Print a summary of one converted block."""
    click.echo(result.summary())


def app(args: Optional[list[str]] = None) -> int:
    """
    Main application entry point (for testing).

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success)
    """
    try:
        code = cli(args, standalone_mode=False)
        return code if isinstance(code, int) else 0
    except click.ClickException as e:
        e.show()
        return 1
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
