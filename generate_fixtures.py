#!/usr/bin/env python3
"""
Fixture Generator for Snatch Assistant Tests

Turns an ASCII tile layout into a JSON fixture of letter observations, the
same shape the tile detector and letter recognizer produce.

Layout files have one row per line, '.' for an empty cell. Words separated
by at least one empty cell end up as separate words.

Usage:
    python generate_fixtures.py layouts/table1.txt                 # writes tests/fixtures/table1.json
    python generate_fixtures.py layouts/table1.txt --gap 2         # tiles 2px apart
    python generate_fixtures.py layouts/table1.txt --expect PET RAM
"""

import argparse
import sys
from pathlib import Path

from letter_graph import build_letter_graph, extract_words
from letter_node import observations_from_layout, save_observations


def get_fixture_path(layout_path):
    """Get the fixture JSON path for a layout file."""
    fixture_dir = Path(__file__).parent / "tests" / "fixtures"
    fixture_dir.mkdir(parents=True, exist_ok=True)
    return fixture_dir / f"{Path(layout_path).stem}.json"


def read_layout(layout_path):
    with open(layout_path, 'r') as f:
        return [line.rstrip('\n') for line in f if line.strip()]


def generate_fixture(layout_path, output=None, tile_size=40.0, gap=2.0, expected_words=None):
    """
    Build and save a fixture for one layout.

    Args:
        layout_path: ASCII layout file
        output: Fixture path (default: tests/fixtures/<layout name>.json)
        tile_size: Tile edge length in pixels
        gap: Space between neighbouring cells in pixels
        expected_words: Words the layout should read as. Defaults to what
                        the bounding-box strategy extracts now.

    Returns:
        Path of the written fixture
    """
    rows = read_layout(layout_path)
    observations = observations_from_layout(rows, tile_size=tile_size, gap=gap)

    if not expected_words:
        expected_words = extract_words(build_letter_graph(observations))
        print(f"No expected words given, using extracted: {expected_words}")

    fixture_path = Path(output) if output else get_fixture_path(layout_path)
    save_observations(fixture_path, observations,
                      layout=rows,
                      tile_size=tile_size,
                      gap=gap,
                      expected_words=[''.join(sorted(word.upper())) for word in expected_words])
    print(f"Saved fixture with {len(observations)} tiles to {fixture_path}")
    return fixture_path


def main():
    parser = argparse.ArgumentParser(description='Generate observation fixtures from ASCII layouts')
    parser.add_argument('layouts', nargs='+', help='Layout files to convert')
    parser.add_argument('--output', type=str, default=None, help='Output path (single layout only)')
    parser.add_argument('--tile-size', type=float, default=40.0, help='Tile edge length in pixels')
    parser.add_argument('--gap', type=float, default=2.0, help='Space between neighbouring cells')
    parser.add_argument('--expect', nargs='*', default=None, help='Expected words on the table')

    args = parser.parse_args()

    if args.output and len(args.layouts) > 1:
        print("Error: --output only works with a single layout")
        sys.exit(1)

    for layout_path in args.layouts:
        if not Path(layout_path).exists():
            print(f"Error: Layout not found: {layout_path}")
            continue
        generate_fixture(layout_path, args.output, args.tile_size, args.gap, args.expect)


if __name__ == "__main__":
    main()
