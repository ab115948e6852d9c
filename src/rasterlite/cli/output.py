"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Rasterlite[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_image_info(image_path: str, width: int, height: int, channels: int, stride: int) -> None:
    """Print decoded image information.

    Args:
        image_path: Path to the image file
        width: Width in pixels
        height: Height in pixels
        channels: Samples per pixel
        stride: Bytes per row
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(image_path, style="bold")
    console.print(line1)
    console.print(
        f"  {width}x{height} {SYM_DOT} {channels} channels {SYM_DOT} stride {stride:,} bytes"
    )


def print_image_table(rows: list[tuple[str, int, int, int, int]]) -> None:
    """Print several images as one table.

    Args:
        rows: (path, width, height, channels, stride) per image
    """
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Image", overflow="fold")
    table.add_column("Size", justify="right", no_wrap=True)
    table.add_column("Channels", justify="right")
    table.add_column("Stride", justify="right")
    for path, width, height, channels, stride in rows:
        table.add_row(Text(path), f"{width}x{height}", str(channels), f"{stride:,}")
    console.print(table)


def print_paths(paths: list[str]) -> None:
    """Print matched paths, one per line."""
    for path in paths:
        console.print(Text(path), soft_wrap=True)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    width: int,
    height: int,
    channels: int,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total processing time in seconds
        width: Output width in pixels
        height: Output height in pixels
        channels: Output samples per pixel
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    console.print(f"  {width}x{height} {SYM_DOT} {channels} channels")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
