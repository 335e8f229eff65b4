"""
1) Load person records from a JSON or GEDCOM file.
2) Build the genealogy graph and reject cyclic ancestry.
3) Lay out the tree around the focal person.
4) Draw the layout (matplotlib) and/or export it to Graphviz (pydot),
   or print the focal person's relatives instead.
"""

import argparse
from pathlib import Path
import sys

from config import SizeMode, configure_logging, default_size_mode
from graph import GenealogyGraph
from parsing import load_records
from plotting import draw_layout, write_dot
from validation import load_graph
from view import TreeView


def print_relatives(graph: GenealogyGraph, person_id: str) -> None:
    """Print the relatives report for one person."""
    person = graph.person(person_id)
    print(f"{person.long_name} ({person.id})")
    sections = [
        ("Parents", graph.parents(person_id)),
        ("Partners", graph.partners(person_id)),
        ("Children", graph.sort_by_birth_date(graph.children(person_id))),
        # Siblings keep their multiplicity: full siblings are listed once per shared parent
        ("Siblings", graph.siblings(person_id)),
        ("Uncles and aunts", graph.uncles(person_id)),
        ("Cousins", graph.cousins(person_id)),
        ("Nephews and nieces", graph.nephews(person_id)),
    ]
    for title, ids in sections:
        names = ", ".join(graph.person(pid).name for pid in ids) or "-"
        print(f"  {title}: {names}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Draw a family tree centered on one person."
    )
    parser.add_argument("input", type=Path, help="Person records (.json) or GEDCOM file (.ged).")
    parser.add_argument("-f", "--focal", help="Id of the person to center on (default: first person).")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--compact",
        dest="mode",
        action="store_const",
        const=SizeMode.COMPACT,
        help="Text-only boxes.",
    )
    mode.add_argument(
        "--illustrated",
        dest="mode",
        action="store_const",
        const=SizeMode.ILLUSTRATED,
        help="Taller boxes with icon and birth-death line.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Image to write (png, svg or pdf). Shows the tree interactively if omitted.",
    )
    parser.add_argument("--dot", type=Path, help="Also write the layout as Graphviz (.dot, or any neato format).")
    parser.add_argument("--relatives", action="store_true", help="Print relatives instead of drawing.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        mode = args.mode or default_size_mode()

        print(f"Loading records: {args.input}")
        records = load_records(args.input)
        print(f"  Found {len(records)} person records")

        print("Building graph...")
        graph = load_graph(records)
        print(f"  Graph has {len(graph)} persons and {len(graph.families())} families")
        if not len(graph):
            print("No persons to draw", file=sys.stderr)
            return 1

        focal_id = args.focal or graph.persons()[0].id
        if args.relatives:
            print_relatives(graph, focal_id)
            return 0

        print(f"Laying out tree around {focal_id} ({mode.value})...")
        view = TreeView(graph, mode)
        layout = view.select_focal(focal_id)
        print(
            f"  Canvas {layout.width:g}x{layout.height:g}, "
            f"{len(layout.boxes)} boxes, {len(layout.lines)} lines"
        )

        if args.dot:
            write_dot(layout, args.dot)
        if args.output or not args.dot:
            draw_layout(layout, args.output)
    except (ValueError, OSError) as e:
        # Unknown focal ids and cyclic input are ValueErrors too
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("Done!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
