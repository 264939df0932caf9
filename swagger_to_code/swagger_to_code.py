import json
import logging
from pathlib import Path

import click
import yaml

from .cli_utils import reconstruct_command_line
from .pipeline import CompilationError, CompilerConfig, PipelineGenerator, SortParams


def load_config(path: str | None) -> CompilerConfig:
    """Load the configuration file (JSON or YAML), or the defaults."""
    if path is None:
        return CompilerConfig()
    with open(path, encoding="utf-8") as f:
        if Path(path).suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f)
    return CompilerConfig.from_dict(data)


@click.command()
@click.argument("swagger_file", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--output", "-o", default="src/app/api", type=click.Path(file_okay=False, resolve_path=True), help="Output directory")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True), help="JSON or YAML configuration file")
@click.option("--include-tags", default=None, type=str, help="Comma-separated tags of the services to generate")
@click.option("--exclude-tags", default=None, type=str, help="Comma-separated tags of the services to skip")
@click.option("--keep-unused-models", is_flag=True, default=False, help="Generate models not used by any service")
@click.option("--min-params-for-container", default=None, type=int, help="Number of parameters from which a parameters container is used")
@click.option("--sort-params", default=None, type=click.Choice([SortParams.ASC.value, SortParams.DESC.value, SortParams.NONE.value]))
@click.option("--default-tag", default=None, type=str, help="Tag of operations declaring none")
@click.option("--prefix", default=None, type=str, help="Prefix of the module and configuration classes")
@click.option("--templates", default=None, type=click.Path(exists=True, file_okay=False, resolve_path=True), help="Directory of templates overriding the bundled ones")
@click.option("--generate-examples", is_flag=True, default=False, help="Generate an example file for each model declaring an example")
@click.option("--verbose", "-v", is_flag=True, default=False)
def swagger_to_code(
    swagger_file,
    output,
    config,
    include_tags,
    exclude_tags,
    keep_unused_models,
    min_params_for_container,
    sort_params,
    default_tag,
    prefix,
    templates,
    generate_examples,
    verbose,
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(config)
    except CompilationError as e:
        raise click.ClickException(str(e)) from e

    # Command line options override the configuration file
    if include_tags is not None:
        config.include_tags = include_tags
    if exclude_tags is not None:
        config.exclude_tags = exclude_tags
    if keep_unused_models:
        config.ignore_unused_models = False
    if min_params_for_container is not None:
        config.min_params_for_container = min_params_for_container
    if sort_params is not None:
        config.sort_params = sort_params
    if default_tag is not None:
        config.default_tag = default_tag
    if prefix is not None:
        config.prefix = prefix
    if templates is not None:
        config.templates = templates
    if generate_examples:
        config.generate_examples = True
    config.command_line = reconstruct_command_line(swagger_to_code)

    try:
        PipelineGenerator(config).generate_file(swagger_file, output)
    except CompilationError as e:
        raise click.ClickException(str(e)) from e
