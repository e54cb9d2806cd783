import json
import logging
from pathlib import Path

import click

from .cli_utils import configure_logging
from .pipeline import TARGETS, AstLoader, AtomicWriter, CodeGeneratorConfig, CodegenError, OutputMode, PipelineGenerator
from .pipeline.schema_ast import ScopedName

logger = logging.getLogger(__name__)


@click.command()
@click.option("--target", "-t", required=True, type=click.Choice(TARGETS))
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--api-module", default=None, type=str, help="Module of the API struct (service and endpoints targets)")
@click.option("--api-name", default="ApiRequests", type=str, help="Name of the API struct")
@click.option("--force", is_flag=True, default=False, help="Overwrite the output file if it exists")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", type=click.Path(resolve_path=True))
def adl_to_code(target, config, api_module, api_name, force, verbose, paths, output):
    configure_logging(verbose)

    if config is not None:
        with open(config) as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    # CLI flag overrides config file if set
    if force:
        config.output.mode = OutputMode.FORCE

    api = ScopedName(api_module, api_name) if api_module else None

    try:
        modules = AstLoader().load_files([Path(p) for p in paths])
        codegen = PipelineGenerator(target, modules, config, api)
        out = codegen.generate()
        AtomicWriter(config.output).write(Path(output), out)
    except (CodegenError, FileExistsError, ValueError) as e:
        raise click.ClickException(str(e)) from e
