#!/usr/bin/env python3
"""Quick start example for statcharts.

Lays out a bar chart from sample data, simulates a hover and a click, then
resizes the view and prints the SVG size.

Usage:
    python examples/quick_start.py
"""

from statcharts import Canvas, ChartType, ChartView, Container, ResizeEvents
from statcharts.data import generate_sales_records


def main() -> None:
    """Run a quick interaction demo."""
    print("=" * 60)
    print("statcharts - Quick Start Demo")
    print("=" * 60)

    records = generate_sales_records(seed=42)
    resize_events = ResizeEvents()
    view = ChartView(
        ChartType.BAR,
        Container(width=640, height=400),
        records,
        resize_events=resize_events,
        notifier=lambda n: print(f"  Notification: {n.message}"),
    )

    with view.activated(Canvas()) as active:
        bars = active.geometry.in_group("bar")
        print(f"\nDrew {len(bars)} bars, {len(active.canvas)} elements in total")

        first = bars[0]
        active.interaction.pointer_enter(first.id, first.x + 1, first.y + 1)
        tooltip = active.canvas.tooltip
        print(f"\nHovering {first.id}: tooltip at ({tooltip.x:g}, {tooltip.y:g})")
        for line in tooltip.lines:
            print(f"  {line}")

        print("\nClicking:")
        active.interaction.click(first.id)

        active.container.width = 900
        resize_events.emit()
        print(f"\nAfter resize: bar width {active.geometry.in_group('bar')[0].width:.1f}px")
        print(f"SVG length: {len(active.canvas.to_svg())} characters")

    print(f"\nSubscribers after teardown: {resize_events.subscriber_count}")


if __name__ == "__main__":
    main()
