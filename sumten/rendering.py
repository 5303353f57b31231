"""
Rendering Utilities

Draws grids and solution steps as PNG images: the cells about to be
cleared are highlighted on the grid they are cleared from.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from .solver import Grid, Solution

logger = logging.getLogger(__name__)

# Layout
CELL_SIZE = 32
PADDING = 8
HEADER_HEIGHT = 24

# Colors
BACKGROUND = "#f5f5f5"
TILE_FILL = "#ffffff"
EMPTY_FILL = "#e0e0e0"
HIGHLIGHT_FILL = "#ffcc80"
GRID_LINE = "#9e9e9e"
TEXT_COLOR = "#333333"
HIGHLIGHT_TEXT = "#e65100"


def _load_font(size: int):
    """Load a TrueType font, falling back to PIL's built-in font."""
    try:
        return ImageFont.truetype("arial.ttf", size)
    except OSError:
        return ImageFont.load_default()


def render_grid(
    grid: Grid,
    highlighted: Optional[Iterable[Tuple[int, int]]] = None,
    caption: str = "",
    cell_size: int = CELL_SIZE
) -> Image.Image:
    """
    Draw a grid, optionally highlighting some cells.

    Args:
        grid: Grid to draw
        highlighted: (row, col) positions to highlight
        caption: Text drawn above the grid
        cell_size: Side of one cell in pixels

    Returns:
        RGB PIL Image
    """
    marked: Set[Tuple[int, int]] = set(highlighted or ())
    width = PADDING * 2 + grid.cols * cell_size
    height = PADDING * 2 + HEADER_HEIGHT + grid.rows * cell_size

    image = Image.new("RGB", (max(width, 1), max(height, 1)), BACKGROUND)
    draw = ImageDraw.Draw(image)
    font = _load_font(cell_size // 2)

    if caption:
        draw.text((PADDING, PADDING), caption, fill=TEXT_COLOR, font=_load_font(12))

    top = PADDING + HEADER_HEIGHT
    values = grid.to_list()
    for r, row in enumerate(values):
        for c, value in enumerate(row):
            x0 = PADDING + c * cell_size
            y0 = top + r * cell_size
            is_marked = (r, c) in marked

            if is_marked:
                fill = HIGHLIGHT_FILL
            elif value == 0:
                fill = EMPTY_FILL
            else:
                fill = TILE_FILL
            draw.rectangle([x0, y0, x0 + cell_size, y0 + cell_size],
                           fill=fill, outline=GRID_LINE)

            if value != 0:
                text = str(value)
                left, upper, right, lower = draw.textbbox((0, 0), text, font=font)
                draw.text(
                    (x0 + (cell_size - (right - left)) // 2 - left,
                     y0 + (cell_size - (lower - upper)) // 2 - upper),
                    text,
                    fill=HIGHLIGHT_TEXT if is_marked else TEXT_COLOR,
                    font=font,
                )

    return image


def render_solution(
    solution: Solution,
    output_dir: Union[str, Path],
    cell_size: int = CELL_SIZE
) -> List[Path]:
    """
    Write one PNG per step, each showing the grid before the step with the
    step's cells highlighted, plus a final image of the end state.

    Args:
        solution: Solution to draw
        output_dir: Directory for the images (created if missing)
        cell_size: Side of one cell in pixels

    Returns:
        Paths of the written images, in step order
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths: List[Path] = []
    for index, step in enumerate(solution.steps):
        caption = (f"Step {index + 1}/{solution.move_count}: {step.selection_type}, "
                   f"{step.cell_count} cells, +{step.score}")
        image = render_grid(solution.grid_before(index), step.positions, caption, cell_size)
        path = output_dir / f"step_{index + 1:03d}.png"
        image.save(path, "PNG")
        paths.append(path)

    caption = f"Final: score {solution.total_score}, {solution.remaining} remaining"
    final_path = output_dir / "final.png"
    render_grid(solution.final_grid, caption=caption, cell_size=cell_size).save(final_path, "PNG")
    paths.append(final_path)

    logger.info(f"Rendered {len(paths)} images to {output_dir}")
    return paths
