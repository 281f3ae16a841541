#!/usr/bin/env python3
"""
summarize_graph.py - Build the skill graph from data files and print a summary.

Reads the four curriculum inputs (plus an optional progress snapshot) and
reports graph size, depth distribution, edge reduction and ready-now skills.

Expected files in --data-dir:
  edges.json      [{"source": "ADT 1", "target": "ADT 2"}, ...]
  skills.json     {"ADT 1": "description", ...}
  appendixA.json  {"ADT 2": ["ADT 1", "COG 3 (or COG 4)"], ...}
  appendixB.json  {"ADT 2": ["notes"], ...}

Usage:
  python scripts/summarize_graph.py --data-dir data
  python scripts/summarize_graph.py --data-dir data --progress progress.json --reduce --remove-not-started
"""

import argparse
import json
import logging
import sys
from collections import Counter
from pathlib import Path

# Project root for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from fishgraph.engine import SkillGraph
from fishgraph.schemas import OffOffDisplay
from fishgraph.utils import find_settings, load_settings

logger = logging.getLogger(__name__)

DATA_FILES = {
    "edges": "edges.json",
    "skills": "skills.json",
    "appendix_a": "appendixA.json",
    "appendix_b": "appendixB.json",
}


def load_json(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_inputs(data_dir: Path) -> dict:
    """Load the four data files; raises FileNotFoundError naming the missing one."""
    inputs = {}
    for key, filename in DATA_FILES.items():
        path = data_dir / filename
        if not path.exists():
            raise FileNotFoundError(f"Data file not found: {path}")
        inputs[key] = load_json(path)
    return inputs


def summarize(graph: SkillGraph, progress_state: dict, remove: bool, reduce_edges: bool) -> list[str]:
    """Render the summary as lines of text."""
    view = graph.active_view(
        progress_state,
        off_off_display=OffOffDisplay.REMOVE if remove else OffOffDisplay.DIM,
        transitive_reduction=reduce_edges,
    )
    depth_counts = Counter(node.progression_depth for node in graph.nodes)

    lines = [
        f"Skills: {len(graph.nodes)} ({len(view.nodes)} active)",
        view.edge_summary(),
        "Depth distribution: " + ", ".join(
            f"{depth}:{count}" for depth, count in sorted(depth_counts.items())
        ),
        view.status_summary(),
    ]

    ready = view.ready_list(graph.settings.ready_list_limit)
    lines.append(f"{len(ready)} ready in current view")
    for node_id in ready:
        lines.append(f"  {node_id:<10} {view.metrics.score_label(node_id)}")

    if graph.diagnostics.skipped:
        lines.append(f"Skipped prerequisite tokens: {len(graph.diagnostics)}")
    if graph.dropped_edges:
        lines.append(f"Dropped edges with unknown skills: {len(graph.dropped_edges)}")
    return lines


def main():
    parser = argparse.ArgumentParser(
        description="Build the prerequisite graph and print a summary"
    )
    parser.add_argument("--data-dir", type=Path, default=PROJECT_ROOT / "data",
                        help="Directory with edges/skills/appendix JSON files")
    parser.add_argument("--progress", type=Path, default=None,
                        help="Progress snapshot JSON (skill_id -> status)")
    parser.add_argument("--settings", type=Path, default=None,
                        help="Engine settings YAML (default: <data-dir>/fishgraph.yaml if present)")
    parser.add_argument("--reduce", action="store_true",
                        help="Apply transitive reduction to visible edges")
    parser.add_argument("--remove-not-started", action="store_true",
                        help="Hide not-started skills instead of dimming them")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

    try:
        settings = load_settings(args.settings or find_settings(args.data_dir))
        inputs = load_inputs(args.data_dir)
        progress_state = load_json(args.progress) if args.progress else {}
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.error(str(e))
        sys.exit(1)

    if not isinstance(progress_state, dict):
        logger.warning("Progress snapshot is not an object; treating every skill as not started")
        progress_state = {}

    graph = SkillGraph.build(settings=settings, **inputs)
    for line in summarize(graph, progress_state, args.remove_not_started, args.reduce or settings.transitive_reduction):
        print(line)


if __name__ == "__main__":
    main()
