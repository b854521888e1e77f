"""Validate command implementation"""

from pathlib import Path

import click

from ...api.exceptions import ValidationError
from ...api.exporter import load_descriptor
from ...core.validation_engine import ValidationEngine
from ..utils.output import format_validation_result, print_error


@click.command()
@click.argument('descriptor', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def validate(ctx, descriptor):
    """Validate an application descriptor file"""
    try:
        data = load_descriptor(descriptor)
    except ValidationError as e:
        print_error(str(e))
        ctx.exit(1)

    result = ValidationEngine().validate_descriptor(data)
    format_validation_result(result)
    if not result.is_valid:
        ctx.exit(1)
