"""CLI application entry point for rasterlite.

This module provides the main CLI interface using Typer.
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from rasterlite import __version__
from rasterlite.cli.output import (
    console,
    print_error,
    print_header,
    print_image_info,
    print_image_table,
    print_paths,
    print_step,
    print_success,
)
from rasterlite.config import LoggingConfig, RasterSettings
from rasterlite.core import copy_make_border, cvt_color, get_text_size, put_text, rectangle, resize
from rasterlite.domain import BorderType, Buffer, ColorSpace, Point, Size
from rasterlite.exceptions import (
    EmptyBufferError,
    ImageLoadError,
    ImageSaveError,
    RasterError,
    UnsupportedColorSpaceError,
)
from rasterlite.io import ImageReader, ImageWriter, glob_paths
from rasterlite.utils import OperationLogger, configure_logging

# Create the Typer app
app = typer.Typer(
    name="rasterlite",
    help="Inspect, convert, pad, resize and annotate raster images.",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass
class AppState:
    """Per-invocation state shared by all commands."""

    settings: RasterSettings
    quiet: bool
    operations: OperationLogger


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Rasterlite[/bold blue] v{__version__}")
        raise typer.Exit()


def parse_color_space(name: str) -> ColorSpace:
    """Parse a color space name (case-insensitive).

    Raises:
        UnsupportedColorSpaceError: If the name is unknown
    """
    try:
        return ColorSpace(name.strip().lower())
    except ValueError:
        raise UnsupportedColorSpaceError(name) from None


def parse_border_type(name: str) -> BorderType:
    """Parse a border type name; ``reflect101`` and ``reflect-101`` are accepted."""
    key = name.strip().lower().replace("-", "_")
    if key == "reflect101":
        key = "reflect_101"
    return BorderType(key)


def parse_color(text: str) -> tuple[int, ...]:
    """Parse ``"255,0,0"`` into channel values.

    Raises:
        ValueError: If a component is not an integer or there are more than four
    """
    parts = [p.strip() for p in text.split(",") if p.strip()]
    if not parts or len(parts) > 4:
        raise ValueError(f"expected 1-4 comma-separated values, got '{text}'")
    return tuple(int(p) for p in parts)


def _state(ctx: typer.Context) -> AppState:
    return ctx.obj


@contextmanager
def _reported_errors(state: AppState) -> Iterator[None]:
    """Turn rasterlite errors into a printed message and exit code 1."""
    try:
        yield
    except ImageLoadError as e:
        state.operations.log_image_error(e.path, e)
        print_error(f"Could not load image: {e.reason}")
        raise typer.Exit(code=1)
    except ImageSaveError as e:
        state.operations.log_image_error(e.path, e)
        print_error(f"Could not save image: {e.reason}")
        raise typer.Exit(code=1)
    except RasterError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def _load(state: AppState, path: Path, flag: ColorSpace = ColorSpace.UNCHANGED) -> Buffer:
    if not state.quiet:
        print_step("Loading image")
    try:
        buf = ImageReader(path).load(flag)
    except FileNotFoundError:
        raise ImageLoadError(str(path), "file not found") from None
    state.operations.log_image_loaded(str(path), buf.width, buf.height, buf.channels)
    return buf


def _save(state: AppState, buf: Buffer, output: Path, operation: str, started: float) -> None:
    if buf.is_empty():
        raise EmptyBufferError(operation)
    ImageWriter(output, state.settings.codec).save(buf)

    duration = time.perf_counter() - started
    size_bytes = output.stat().st_size
    state.operations.log_image_written(str(output), size_bytes, duration * 1000)

    if not state.quiet:
        print_success(
            output_path=str(output),
            file_size=_format_file_size(output),
            total_time_s=duration,
            width=buf.width,
            height=buf.height,
            channels=buf.channels,
        )


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Inspect, convert, pad, resize and annotate raster images."""
    settings = RasterSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    ctx.obj = AppState(settings=settings, quiet=quiet, operations=OperationLogger(logger))

    if not quiet:
        print_header(__version__)


@app.command()
def info(
    ctx: typer.Context,
    images: Annotated[
        list[Path],
        typer.Argument(
            help="Image files to inspect",
            show_default=False,
        ),
    ],
) -> None:
    """Print size, channel count and row stride of decoded images.

    Example:
        rasterlite info photo.png scan.jpg
    """
    state = _state(ctx)
    state.operations.start()
    rows = []

    for path in images:
        try:
            buf = ImageReader(path).load()
        except FileNotFoundError as e:
            state.operations.log_image_error(str(path), e)
            print_error(f"Input file not found: {path}")
            continue
        except ImageLoadError as e:
            state.operations.log_image_error(str(path), e)
            print_error(f"Could not load image: {e.reason}")
            continue
        state.operations.log_image_loaded(str(path), buf.width, buf.height, buf.channels)
        rows.append((str(path), buf.width, buf.height, buf.channels, buf.stride))

    state.operations.finish()

    if len(rows) == 1:
        print_image_info(*rows[0])
    elif rows:
        print_image_table(rows)

    if state.operations.stats.failed_count:
        raise typer.Exit(code=1)


@app.command()
def convert(
    ctx: typer.Context,
    input_image: Annotated[
        Path,
        typer.Argument(
            help="Path to input image",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Argument(
            help="Output path (default: {name}-{space}.{ext})",
            show_default=False,
        ),
    ] = None,
    to_space: Annotated[
        str,
        typer.Option(
            "--to",
            "-t",
            help="Target layout (gray|rgb|bgr|rgba|bgra|unchanged)",
        ),
    ] = "rgb",
    from_space: Annotated[
        str,
        typer.Option(
            "--from",
            "-f",
            help="Source layout (auto infers it from the channel count)",
        ),
    ] = "auto",
) -> None:
    """Convert an image to another channel layout.

    Samples are written in the order they are stored, so a BGR result is
    saved with red and blue exchanged.

    Example:
        rasterlite convert photo.png --to gray
    """
    state = _state(ctx)
    with _reported_errors(state):
        dst_space = parse_color_space(to_space)
        src_space = parse_color_space(from_space)
        output_path = output or ImageWriter.get_derived_path(input_image, dst_space.value)

        started = time.perf_counter()
        src = _load(state, input_image)
        if not state.quiet:
            print_step(f"Converting to {dst_space.value}")
        result = cvt_color(src, dst_space, src_space)
        _save(state, result, output_path, "convert", started)


@app.command()
def border(
    ctx: typer.Context,
    input_image: Annotated[
        Path,
        typer.Argument(
            help="Path to input image",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Argument(
            help="Output path (default: {name}-border.{ext})",
            show_default=False,
        ),
    ] = None,
    top: Annotated[int, typer.Option("--top", help="Rows added above", min=0)] = 0,
    bottom: Annotated[int, typer.Option("--bottom", help="Rows added below", min=0)] = 0,
    left: Annotated[int, typer.Option("--left", help="Columns added on the left", min=0)] = 0,
    right: Annotated[int, typer.Option("--right", help="Columns added on the right", min=0)] = 0,
    border_type: Annotated[
        str,
        typer.Option(
            "--type",
            help="Border policy (constant|replicate|reflect|reflect_101)",
        ),
    ] = "constant",
    value: Annotated[
        str,
        typer.Option(
            "--value",
            help="Fill value for constant borders, e.g. 0,0,0",
        ),
    ] = "0",
) -> None:
    """Pad an image with a border.

    Example:
        rasterlite border photo.png --top 8 --bottom 8 --type reflect_101
    """
    state = _state(ctx)
    try:
        policy = parse_border_type(border_type)
    except ValueError:
        print_error(
            f"Invalid border type: {border_type}",
            details="Valid values: constant, replicate, reflect, reflect_101",
        )
        raise typer.Exit(code=1)
    try:
        fill = parse_color(value)
    except ValueError as e:
        print_error(f"Invalid border value: {e}")
        raise typer.Exit(code=1)

    with _reported_errors(state):
        output_path = output or ImageWriter.get_derived_path(input_image, "border")
        started = time.perf_counter()
        src = _load(state, input_image)
        if not state.quiet:
            print_step(f"Adding {policy.value} border")
        result = copy_make_border(src, top, bottom, left, right, policy, fill)
        _save(state, result, output_path, "border", started)


@app.command(name="resize")
def resize_command(
    ctx: typer.Context,
    input_image: Annotated[
        Path,
        typer.Argument(
            help="Path to input image",
            show_default=False,
        ),
    ],
    width: Annotated[int, typer.Option("--width", "-W", help="Output width", min=1)],
    height: Annotated[int, typer.Option("--height", "-H", help="Output height", min=1)],
    output: Annotated[
        Path | None,
        typer.Argument(
            help="Output path (default: {name}-{w}x{h}.{ext})",
            show_default=False,
        ),
    ] = None,
) -> None:
    """Resample an image to a new size with bilinear interpolation.

    Example:
        rasterlite resize photo.png --width 320 --height 240
    """
    state = _state(ctx)
    with _reported_errors(state):
        output_path = output or ImageWriter.get_derived_path(input_image, f"{width}x{height}")
        started = time.perf_counter()
        src = _load(state, input_image)
        if not state.quiet:
            print_step(f"Resizing to {width}x{height}")
        result = resize(src, Size(width, height))
        _save(state, result, output_path, "resize", started)


@app.command()
def annotate(
    ctx: typer.Context,
    input_image: Annotated[
        Path,
        typer.Argument(
            help="Path to input image",
            show_default=False,
        ),
    ],
    text: Annotated[str, typer.Option("--text", help="Text to draw")],
    output: Annotated[
        Path | None,
        typer.Argument(
            help="Output path (default: {name}-annotated.{ext})",
            show_default=False,
        ),
    ] = None,
    x: Annotated[int, typer.Option("--x", help="Left end of the baseline")] = 0,
    y: Annotated[int, typer.Option("--y", help="Baseline row")] = 40,
    scale: Annotated[
        float | None,
        typer.Option("--scale", help="Glyph scale factor (default from settings)", min=1.0),
    ] = None,
    thickness: Annotated[
        int | None,
        typer.Option("--thickness", help="Glyph dilation (default from settings)", min=1),
    ] = None,
    color: Annotated[
        str | None,
        typer.Option("--color", help="Text color, e.g. 255,0,0,255 (alpha blends)"),
    ] = None,
    bottom_left: Annotated[
        bool,
        typer.Option("--bottom-left", help="Measure --y upward from the bottom row"),
    ] = False,
    box: Annotated[
        bool,
        typer.Option("--box", help="Outline the measured text box"),
    ] = False,
) -> None:
    """Draw text onto an image.

    Example:
        rasterlite annotate photo.png --text "Hello" --x 10 --y 50 --box
    """
    state = _state(ctx)
    text_config = state.settings.text
    font_scale = scale if scale is not None else text_config.font_scale
    weight = thickness if thickness is not None else text_config.thickness
    try:
        fg = parse_color(color) if color is not None else text_config.color
    except ValueError as e:
        print_error(f"Invalid color: {e}")
        raise typer.Exit(code=1)

    with _reported_errors(state):
        output_path = output or ImageWriter.get_derived_path(input_image, "annotated")
        started = time.perf_counter()
        img = _load(state, input_image)
        if not state.quiet:
            print_step("Drawing text")

        put_text(img, text, Point(x, y), font_scale, fg, weight, bottom_left)

        if box:
            # Glyph cells start one line height above the first baseline row;
            # thickness grows them right and down only.
            size, _ = get_text_size(text, font_scale)
            line_height = get_text_size(" ", font_scale)[0].height
            grow = max(1, weight) - 1
            top_y = (img.height - y if bottom_left else y) - line_height
            rectangle(
                img,
                Point(x, top_y),
                Point(x + size.width - 1 + grow, top_y + size.height - 1 + grow),
                fg,
            )

        _save(state, img, output_path, "annotate", started)


@app.command()
def find(
    ctx: typer.Context,
    pattern: Annotated[
        str,
        typer.Argument(
            help="Wildcard pattern, e.g. 'images/**/*.png'",
            show_default=False,
        ),
    ],
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Let ** match nested directories"),
    ] = False,
) -> None:
    """List files and directories matching a wildcard pattern.

    Example:
        rasterlite find "shots/**/*.png" --recursive
    """
    _state(ctx)
    matches = glob_paths(pattern, recursive=recursive)
    print_paths(matches)
    if not matches:
        raise typer.Exit(code=1)


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
        if size_bytes < 1024:
            return f"{size_bytes} B"
        elif size_bytes < 1024 * 1024:
            return f"{size_bytes / 1024:.0f} KB"
        else:
            return f"{size_bytes / (1024 * 1024):.1f} MB"
    except OSError:
        return "unknown"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
