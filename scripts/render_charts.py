#!/usr/bin/env python3
"""
Render a statistical chart to SVG.

Records are read from a JSON or YAML file (a list, or a mapping with a
"records" key). Without --data, a reproducible sample dataset is generated
for the chosen chart type.

Usage:
    # Bar chart from generated sample data
    python scripts/render_charts.py --chart bar --output output/bar.svg

    # Treemap from a product file, with settings overrides
    python scripts/render_charts.py --chart treemap --data products.yaml \\
        --settings config/charts.yaml --width 900 --height 600

    # Every chart type into one directory
    python scripts/render_charts.py --chart all --output-dir output/charts
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from statcharts.canvas import Canvas
from statcharts.config import load_settings_safe
from statcharts.data import (
    RECORD_MODELS,
    ChartType,
    generate_monthly_records,
    generate_product_records,
    generate_sales_records,
    load_records,
)
from statcharts.lifecycle import ChartView, Container

logger = logging.getLogger(__name__)

SAMPLE_GENERATORS = {
    ChartType.BAR: generate_sales_records,
    ChartType.LINE: generate_monthly_records,
    ChartType.RADAR: generate_product_records,
    ChartType.TREEMAP: generate_product_records,
}


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Render bar, line, radar or treemap charts to SVG",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--chart",
        type=str,
        choices=[t.value for t in ChartType] + ["all"],
        default="all",
        help="Chart type to render (default: all)",
    )

    parser.add_argument(
        "--data",
        type=str,
        default=None,
        help="JSON or YAML file with records (default: generated sample data)",
    )

    parser.add_argument(
        "--settings",
        type=str,
        default=None,
        help="YAML file with theme and per-chart settings overrides",
    )

    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output SVG path for a single chart (default: <output-dir>/<chart>.svg)",
    )

    parser.add_argument(
        "--output-dir",
        type=str,
        default="output/charts",
        help="Directory for output SVG files (default: output/charts)",
    )

    parser.add_argument("--width", type=float, default=800.0, help="Canvas width (default: 800)")
    parser.add_argument("--height", type=float, default=500.0, help="Canvas height (default: 500)")
    parser.add_argument("--seed", type=int, default=42, help="Seed for sample data (default: 42)")

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    return parser.parse_args()


def render_chart(chart_type: ChartType, args: argparse.Namespace, output_path: Path) -> None:
    """Lay out one chart and write it as SVG."""
    if args.data:
        records = load_records(args.data, RECORD_MODELS[chart_type])
    else:
        records = SAMPLE_GENERATORS[chart_type](seed=args.seed)

    settings = load_settings_safe(args.settings)
    view = ChartView(chart_type, Container(args.width, args.height), records, settings=settings)
    canvas = Canvas(args.width, args.height, theme=settings.theme)
    view.mount(canvas)

    if view.last_error is not None:
        raise view.last_error

    canvas.save_svg(output_path)
    print(f"  {chart_type.value}: {len(records)} records, {len(canvas)} elements -> {output_path}")


def main():
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    chart_types = list(ChartType) if args.chart == "all" else [ChartType(args.chart)]
    output_dir = Path(args.output_dir)

    try:
        for chart_type in chart_types:
            if args.output and len(chart_types) == 1:
                output_path = Path(args.output)
            else:
                output_path = output_dir / f"{chart_type.value}.svg"
            render_chart(chart_type, args, output_path)
    except KeyboardInterrupt:
        print("\nCancelled by user")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
