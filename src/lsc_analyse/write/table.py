from __future__ import annotations

from pathlib import Path

from lsc_analyse.shading.grid import GainGrid


def render_table_header(grid: GainGrid) -> str:
    """Render the gain grid as a C source table for the camera firmware."""

    lines = ["uint8_t ls_grid[] = {"]
    for ch in grid.channels:
        lines.append(f"//{ch.name} - Ch {ch.physical_index}")
        for row in ch.rows:
            regular = "".join(f"{gain}, " for gain in row[:-1])
            lines.append(f"{regular}{row[-1]},")
    lines.append("};")
    lines.append(f"uint32_t ref_transform = {grid.ref_transform};")
    lines.append(f"uint32_t grid_width = {grid.grid_width};")
    lines.append(f"uint32_t grid_height = {grid.grid_height};")
    return "\n".join(lines) + "\n"


def render_sample_table(grid: GainGrid) -> str:
    """One ``x y gain channel`` line per sample, for plotting tools."""

    return "".join(f"{s.grid_x} {s.grid_y} {s.gain} {s.channel}\n" for s in grid.samples())


def write_table_header(path: Path, grid: GainGrid) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_table_header(grid), encoding="ascii")


def write_sample_table(path: Path, grid: GainGrid) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_sample_table(grid), encoding="ascii")
