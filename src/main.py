"""
1) Load persons and parent links from a GEDCOM file or a JSON data set.
2) Store them in SQLite.
3) Build the fan chart for the chosen root and depth from the stored data.
4) Validate the root's ancestry for cycles, dangling ids and role mismatches.
5) Plot the fan chart.
"""

import argparse
from pathlib import Path

from config import DEFAULT_CONFIG
from controller import FanChartController
from database import SqliteFamilyStore, create_database, store_data
from errors import FanChartError
from parsing import coerce_id, load_dataset_json, load_gedcom, parse_generations
from plotting import plot_fan_chart
from validation import validate_links


def load_input(path: Path):
    """Return (persons, links, root_id) from a .ged or .json file."""
    if path.suffix.lower() == ".json":
        return load_dataset_json(path)
    persons, links = load_gedcom(path)
    return persons, links, None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an ancestor fan chart.")
    parser.add_argument("input", type=Path, help="GEDCOM (.ged) or JSON data set (.json).")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("fan_chart.png"),
        help="Path to output image (default: fan_chart.png).",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=Path("family_tree.db"),
        help="SQLite file the data is stored in (default: family_tree.db).",
    )
    parser.add_argument("--root", help="Id of the root person (default: stored root).")
    parser.add_argument(
        "-g",
        "--generations",
        default=str(DEFAULT_CONFIG.default_generations),
        help=f"Generations to draw (1..{DEFAULT_CONFIG.max_generations}).",
    )
    parser.add_argument("--width", type=float, default=DEFAULT_CONFIG.default_width)
    parser.add_argument("--height", type=float, default=DEFAULT_CONFIG.default_height)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    generations = parse_generations(
        args.generations,
        default=DEFAULT_CONFIG.default_generations,
        maximum=DEFAULT_CONFIG.max_generations,
    )

    # Delete existing database to ensure fresh start
    if args.db.exists():
        args.db.unlink()
        print(f"Deleted existing database: {args.db}")

    print(f"Loading: {args.input}")
    persons, links, root_id = load_input(args.input)
    print(f"  Found {len(persons)} persons and {len(links)} parent links")

    print(f"Storing data in SQLite: {args.db}")
    conn = create_database(args.db)
    store_data(conn, persons, links, root_id)

    store = SqliteFamilyStore(conn, root_id=coerce_id(args.root))
    print(f"Building fan chart for {store.get_root_id()} ({generations} generations)...")
    try:
        controller = FanChartController.from_store(
            store, width=args.width, height=args.height, generations=generations
        )
    except FanChartError as e:
        print(f"  Error: {e}")
        conn.close()
        return 1

    model = controller.render_model()
    print(f"  {model.visible_count} visible persons")
    for warning in model.warnings:
        print(f"    - {warning}")

    print("Validating ancestry...")
    warnings = validate_links(
        store.list_persons(), store.list_parent_links(), controller.root_id, generations
    )
    if warnings:
        print(f"  Found {len(warnings)} validation warnings:")
        for w in warnings[:10]:  # Show first 10 warnings
            print(f"    - {w}")
        if len(warnings) > 10:
            print(f"    ... and {len(warnings) - 10} more")
    else:
        print("  No validation issues found")

    print(f"Plotting fan chart to: {args.output}")
    plot_fan_chart(model, args.output)

    conn.close()
    print("Done!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
