"""Drawing backends for a computed layout."""

from pathlib import Path

import pydot

from config import ICON_HEIGHT, ICON_WIDTH
from models import Box, Gender, Layout, Line

FILL_COLORS = {
    Gender.MALE: "#b8cee6",
    Gender.FEMALE: "#feccf0",
    Gender.UNKNOWN: "#f3dbb6",
}
FOCAL_STROKE = "navy"

# Graphviz positions are in points, node sizes in inches
POINTS_PER_INCH = 72.0


def draw_layout(layout: Layout, output_path: Path | None = None, dpi: int = 100):
    """
    Draw a layout with matplotlib, one canvas unit per pixel at `dpi`.

    Args:
        layout: Result of a render pass
        output_path: File to save (PNG, SVG or PDF, picked from the extension).
            If None, displays interactively.
        dpi: Resolution used to map canvas units to figure inches
    """
    import matplotlib.pyplot as plt
    from matplotlib.patches import FancyBboxPatch

    fig = plt.figure(figsize=(layout.width / dpi, layout.height / dpi), dpi=dpi)
    ax = fig.add_axes((0, 0, 1, 1))
    ax.set_xlim(0, layout.width)
    # Canvas y grows downwards
    ax.set_ylim(layout.height, 0)
    ax.axis("off")

    for command in layout.commands:
        if isinstance(command, Line):
            ax.plot(
                [command.x1, command.x2],
                [command.y1, command.y2],
                color="black",
                linewidth=1,
            )
            continue

        ax.add_patch(
            FancyBboxPatch(
                (command.x, command.y),
                command.width,
                command.height,
                boxstyle="round,pad=0,rounding_size=5",
                facecolor=FILL_COLORS[command.style],
                edgecolor=FOCAL_STROKE if command.is_focal else "black",
                linewidth=3 if command.is_focal else 1,
            )
        )
        _draw_box_text(ax, command, layout.illustrated)

    if output_path:
        output_path = Path(output_path)
        ext = output_path.suffix.lower().lstrip(".")
        if ext not in ("png", "svg", "pdf"):
            ext = "png"
        fig.savefig(output_path, format=ext, dpi=dpi)
        plt.close(fig)
        print(f"Tree saved to {output_path}")
    else:
        plt.show()


def _draw_box_text(ax, box: Box, illustrated: bool) -> None:
    from matplotlib.patches import Rectangle

    # Leave the icon slot free in illustrated boxes
    text_x = box.x + (ICON_WIDTH + 6 if illustrated else 3)
    ax.text(
        text_x,
        box.y + 3,
        box.label,
        fontsize=8,
        verticalalignment="top",
        clip_on=True,
    )
    if box.detail:
        ax.text(
            text_x,
            box.y + box.height / 2 + 2,
            box.detail,
            fontsize=7,
            verticalalignment="top",
            clip_on=True,
        )
    if illustrated:
        # Icon slot; image loading is left to the host application
        ax.add_patch(
            Rectangle(
                (box.x + 5, box.y + 5),
                ICON_WIDTH,
                min(ICON_HEIGHT, box.height - 10),
                fill=False,
                edgecolor="gray",
                linewidth=0.5,
            )
        )


# ============================================================================
# Graphviz
# ============================================================================


def layout_to_dot(layout: Layout) -> pydot.Dot:
    """
    Convert a layout to a Graphviz graph with every position pinned.

    Boxes become fixed-size nodes placed at their centers; each line becomes an
    undirected edge between two invisible point nodes. Render with
    `neato -n2` so Graphviz keeps the coordinates as given.
    """
    P = pydot.Dot("familytree", graph_type="graph")
    P.set("splines", "line")
    P.set("bb", f"0,0,{layout.width:g},{layout.height:g}")

    def pos(x: float, y: float) -> str:
        # Graphviz y grows upwards
        return f"{x:g},{layout.height - y:g}!"

    for i, command in enumerate(layout.commands):
        if isinstance(command, Line):
            ends = (f"line{i}_a", f"line{i}_b")
            for name, (x, y) in zip(
                ends, ((command.x1, command.y1), (command.x2, command.y2))
            ):
                P.add_node(
                    pydot.Node(
                        name,
                        shape="point",
                        width="0.01",
                        style="invis",
                        pos=pos(x, y),
                    )
                )
            P.add_edge(pydot.Edge(ends[0], ends[1], color="black"))
            continue

        label = command.label if not command.detail else f"{command.label}\\n{command.detail}"
        P.add_node(
            pydot.Node(
                f"box{i}",
                label=label,
                shape="box",
                style="rounded,filled",
                fillcolor=FILL_COLORS[command.style],
                color=FOCAL_STROKE if command.is_focal else "black",
                penwidth="3" if command.is_focal else "1",
                fixedsize="true",
                width=f"{command.width / POINTS_PER_INCH:.4f}",
                height=f"{command.height / POINTS_PER_INCH:.4f}",
                fontsize="10",
                pos=pos(command.x + command.width / 2, command.y + command.height / 2),
                tooltip=command.id,
            )
        )

    return P


def write_dot(layout: Layout, output_path: Path) -> None:
    """Write raw DOT for .dot/.gv files, otherwise render through neato -n2."""
    output_path = Path(output_path)
    P = layout_to_dot(layout)
    ext = output_path.suffix.lower().lstrip(".")
    if ext in ("dot", "gv"):
        P.write(str(output_path), format="raw")
    else:
        P.write(str(output_path), prog=["neato", "-n2"], format=ext or "png")
    print(f"Graph saved to {output_path}")
