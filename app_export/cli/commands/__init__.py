"""CLI commands"""

from . import export
from . import validate

__all__ = [
    "export",
    "validate",
]
