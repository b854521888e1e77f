"""Export command implementation"""

from pathlib import Path

import click

from ...api.exceptions import ExportToolError
from ...api.exporter import Exporter, load_descriptor
from ...constants import ExportMode, PackageFormat
from ...services.config_service import ConfigService
from ..utils.output import format_export_error, format_export_result


@click.command()
@click.argument('descriptor', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--format', '-f', 'package_format',
    type=click.Choice([f.value for f in PackageFormat]),
    default=PackageFormat.RAM.value,
    help='Package format'
)
@click.option(
    '--mode', '-m',
    type=click.Choice([m.value for m in ExportMode]),
    default=ExportMode.ONLINE.value,
    help='Export mode (offline bundles all images)'
)
@click.option(
    '--output', '-o',
    type=click.Path(file_okay=False, path_type=Path),
    default=Path('dist'),
    help='Output directory (default: dist/)'
)
@click.option(
    '--staging', '-s',
    type=click.Path(file_okay=False, path_type=Path),
    help='Staging directory (default: <output>/<app name>)'
)
@click.option(
    '--config', '-c', 'config_path',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Configuration file (default: .app-export.yaml)'
)
@click.option(
    '--dependent-image', '-i', 'dependent_images',
    multiple=True,
    help='Local image archived with components (can be specified multiple times)'
)
@click.pass_context
def export(ctx, descriptor, package_format, mode, output, staging, config_path, dependent_images):
    """Export an application descriptor into a package

    Examples:
        app-export export app.yaml --format ram --mode offline
        app-export export app.json -f cpk -o /data/packages
    """
    try:
        config = ConfigService(config_path).load_config()
        exporter = Exporter(config=config)
        result = exporter.export(
            load_descriptor(descriptor),
            output,
            package_format=package_format,
            mode=mode,
            staging_dir=staging,
            dependent_images=dependent_images,
        )
    except ExportToolError as e:
        format_export_error(e)
        ctx.exit(1)

    format_export_result(result, package_format, mode)
