import json
import logging
from pathlib import Path

import click

from .pipeline import CodeGeneratorConfig, DiscriminatedUnionError, OutputMode, PipelineGenerator, ReferenceStyle
from .pipeline.syntax import ManifestParser, parse_sources

logger = logging.getLogger(__name__)


def collect_sources(paths: tuple[str, ...], file_suffix: str = ".g.cs") -> dict[str, str]:
    """Read every input .cs file; directories are searched recursively.

    Previously generated files (``*.g.cs``) found in directories are skipped.
    """
    sources: dict[str, str] = {}
    for path in map(Path, paths):
        if path.is_dir():
            files = sorted(p for p in path.rglob("*.cs") if not p.name.endswith(file_suffix))
        else:
            files = [path]
        for file in files:
            sources[str(file)] = file.read_text(encoding="utf-8")
    logger.debug("Collected %s source files", len(sources))
    return sources


@click.command()
@click.option("--manifest", "-m", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--style", "-s", default=None, type=click.Choice([s.value for s in ReferenceStyle]))
@click.option("--case-name-helpers", is_flag=True, default=False, help="Emit MatchName / MapNames helpers")
@click.option("--no-generation-comment", is_flag=True, default=False, help="Omit the <auto-generated/> header")
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite existing output files")
@click.option("--no-validate", is_flag=True, default=False, help="Skip reparsing generated code before writing")
@click.option("--attribute-source", is_flag=True, default=False, help="Also emit the marker attribute declaration")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.option("--dry-run", is_flag=True, default=False, help="Print generated file names without writing")
@click.argument("paths", nargs=-1, type=click.Path(exists=True, resolve_path=True))
@click.argument("output_dir", type=click.Path(file_okay=False, resolve_path=True))
def discriminated_unions(
    manifest,
    config,
    style,
    case_name_helpers,
    no_generation_comment,
    force,
    no_validate,
    attribute_source,
    verbose,
    dry_run,
    paths,
    output_dir,
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if config is not None:
        with open(config) as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    # CLI flags override the config file
    if style is not None:
        config.reference_style = ReferenceStyle(style)
    if case_name_helpers:
        config.case_name_helpers = True
    if no_generation_comment:
        config.add_generation_comment = False
    if force:
        config.output.mode = OutputMode.FORCE
    if no_validate:
        config.output.validate_before_write = False
    if attribute_source:
        config.emit_attribute_source = True

    if not paths and manifest is None:
        raise click.UsageError("Provide at least one C# source path or --manifest")

    try:
        units = parse_sources(collect_sources(paths, config.file_suffix))
        if manifest is not None:
            with open(manifest) as f:
                units.extend(ManifestParser().parse(json.load(f)))

        codegen = PipelineGenerator(config)
        sources = codegen.generate_from_units(units)
        if dry_run:
            for source in sources:
                click.echo(source.file_name)
            return
        written = codegen.write(sources, Path(output_dir))
    except DiscriminatedUnionError as e:
        raise click.ClickException(str(e)) from e

    logger.info("Generated %s files in %s", len(written), output_dir)
