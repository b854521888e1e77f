# app_export/cli/utils/output.py
"""Output formatting utilities"""

from rich.console import Console
from rich.panel import Panel

from ...constants import EMOJI_SUCCESS, EMOJI_ERROR, EMOJI_WARNING, EMOJI_PACKAGE
from ...core.validation_engine import ValidationResult
from ...models import ExportResult
from ...utils.file_utils import format_size

console = Console()


def print_success(message: str) -> None:
    console.print(f"[green]{EMOJI_SUCCESS}[/green] {message}")


def print_error(message: str) -> None:
    console.print(f"[red]{EMOJI_ERROR}[/red] {message}")


def print_warning(message: str) -> None:
    console.print(f"[yellow]{EMOJI_WARNING}[/yellow] {message}")


def format_export_result(result: ExportResult, package_format: str, mode: str) -> None:
    """Format and display export result"""
    lines = [
        f"[green]{EMOJI_SUCCESS}[/green] Package created successfully!",
        "",
        f"[bold]Format:[/bold] {package_format}",
        f"[bold]Mode:[/bold] {mode}",
        f"[bold]Package:[/bold] {result.package_path}",
    ]

    if result.package_path.exists():
        lines.append(f"[bold]Size:[/bold] {format_size(result.package_size)}")

    console.print(Panel("\n".join(lines), title=f"{EMOJI_PACKAGE} Export Result", border_style="green"))


def format_export_error(error: Exception) -> None:
    """Format and display export failure"""
    code = getattr(error, "error_code", None)
    title = f"Export Error ({code})" if code else "Export Error"
    console.print(Panel(
        f"[red]{EMOJI_ERROR} Export failed:[/red] {error}",
        title=title,
        border_style="red"
    ))


def format_validation_result(result: ValidationResult) -> None:
    """Format and display descriptor validation"""
    for error in result.errors:
        print_error(error)
    for warning in result.warnings:
        print_warning(warning)
    if result.is_valid:
        print_success("Descriptor is valid")
