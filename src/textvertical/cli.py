"""CLI interface for vertical text rendering."""

import json
import logging
from pathlib import Path
from typing import Any, Callable

import click

from textvertical.api.builder import (
    create_measurer,
    create_surface,
    plan_vertical_text,
    render_vertical_text,
)
from textvertical.config import build_options, load_options
from textvertical.fonts import resolve_font


@click.group()
@click.version_option(package_name="text-vertical")
@click.option("-v", "--verbose", is_flag=True, help="Log layout and font decisions to stderr.")
def main(verbose: bool) -> None:
    """Lay out short text top-to-bottom in a fixed box, with ellipsis truncation."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def layout_options(command: Callable) -> Callable:
    """Options shared by every command that lays text out."""
    options = [
        click.option("--width", type=int, help="Box width in pixels (required unless set in --config)."),
        click.option("--height", type=int, help="Box height in pixels (required unless set in --config)."),
        click.option("--font-family", type=str, help="CSS-style font family list."),
        click.option("--font-size", type=float, help="Font size in pixels (default: 12)."),
        click.option("--font-weight", type=int, help="Font weight 100-900 (default: 400)."),
        click.option("--line-height", type=float, help="Line height in pixels (default: 14)."),
        click.option("--fill", "fill_style", type=str, help="Text color, e.g. '#000' or 'red'."),
        click.option("--ellipsis", type=str, help="Marker for clipped text (default: '...')."),
        click.option("--google-fonts", is_flag=True, help="Download missing fonts from Google Fonts."),
        click.option(
            "--config",
            type=click.Path(exists=True, path_type=Path),
            help="TOML file with option values (top level or [text] table).",
        ),
        click.option(
            "--measurement",
            type=click.Choice(["surface", "harfbuzz"], case_sensitive=False),
            default="surface",
            help="Measure glyphs with the output's own metrics or with HarfBuzz.",
        ),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def _collect_options(config: Path | None, values: dict[str, Any]) -> dict[str, Any]:
    """Merge config file values with command-line overrides (CLI wins)."""
    merged = load_options(config) if config else {}
    # An unset flag must not override the config file
    values["google_fonts"] = values.get("google_fonts") or None
    merged.update({key: value for key, value in values.items() if value is not None})
    return merged


@main.command()
@click.argument("text")
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    help="Output file. Defaults to vertical.<format> in the current directory.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["png", "pdf"], case_sensitive=False),
    help="Output format. Defaults to the output file's extension, else png.",
)
@click.option("--data-uri", is_flag=True, help="Print a base64 data URI instead of writing a file.")
@layout_options
def render(
    text: str,
    output: Path | None,
    output_format: str | None,
    data_uri: bool,
    config: Path | None,
    measurement: str,
    **values: Any,
) -> None:
    """
    Render TEXT top-to-bottom into a WIDTH x HEIGHT image or PDF.

    Characters that do not fit are replaced by an ellipsis.
    """
    try:
        options = build_options(_collect_options(config, values))

        if output_format is None:
            suffix = output.suffix.lower().lstrip(".") if output else ""
            output_format = suffix if suffix in ("png", "pdf") else "png"
        output_format = output_format.lower()

        result = render_vertical_text(
            text, options, output=output_format, measurement=measurement.lower()
        )

        if data_uri:
            click.echo(result.to_data_uri())
            return

        output = output or Path(f"vertical.{output_format}")
        result.save(output)

        drawn = result.plan.end_index
        status = f"truncated to {drawn} of {len(text)} characters" if result.truncated else f"{drawn} characters"
        click.echo(f"✓ Rendered {status} to: {output}")

    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@main.command()
@click.argument("text")
@click.option("--json", "as_json", is_flag=True, help="Print the plan as JSON.")
@layout_options
def plan(text: str, as_json: bool, config: Path | None, measurement: str, **values: Any) -> None:
    """Print the layout plan for TEXT without rendering it."""
    try:
        options = build_options(_collect_options(config, values))

        font = resolve_font(options.font_family, options.font_weight, allow_google=options.google_fonts)
        surface = create_surface(options, "png", font)
        measurer = create_measurer(measurement.lower(), surface, font, options.font_size)
        layout_plan = plan_vertical_text(text, measurer, options)

    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(layout_plan.to_dict(), ensure_ascii=False, indent=2))
        return

    click.echo(f"Font: {options.font_description} -> {font.name}")
    click.echo(
        f"Box: {options.width}x{options.height}, content height {layout_plan.content_height:g}, "
        f"start y {layout_plan.start_y:g}, truncated: {'yes' if layout_plan.truncated else 'no'}"
    )
    for element in layout_plan.elements:
        click.echo(f"  {element.kind.value:<9} {element.content!r:<8} x={element.x:g} y={element.y:.2f}")


if __name__ == "__main__":
    main()
