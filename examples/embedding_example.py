#!/usr/bin/env python3
"""
builderdocs Embedding Example
=============================

Demonstrates generating a reference without entry points:
- Explicit factory registration with StaticRegistry
- Graph inspection (memoized nodes, reference cycles)
- Rendering the pages into a directory

The documented API is the sample API shipped with the tests.

Usage:
    python examples/embedding_example.py [output_dir]
"""

import sys
from pathlib import Path

_root = Path(__file__).parent.parent

# Add src and the sample API to path
sys.path.insert(0, str(_root / "src"))
sys.path.insert(0, str(_root / "tests" / "fixtures"))

from builderdocs import (
    DocGraphBuilder,
    MarkdownRenderer,
    ReferenceGenerator,
    SourceIndex,
    StaticRegistry,
)
from builderdocs.introspection import type_name
from sample_api.actions import LogProcessorFactory, SetActionFactory
from sample_api.cycles import ForkBuilder
from sample_api.http import JsonBodyFactory, TextBodyFactory
from sample_api.steps import LogStepFactory, StepCatalog


def main():
    output_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("build/sample-reference")

    registry = StaticRegistry([
        SetActionFactory(),
        LogProcessorFactory(),
        JsonBodyFactory(),
        TextBodyFactory(),
        LogStepFactory(),
    ])
    builder = DocGraphBuilder(SourceIndex([_root / "tests" / "fixtures"]), registry)

    print("1. Collecting the reference...")
    reference = ReferenceGenerator(builder, catalog=StepCatalog).collect()
    print(f"   steps:      {', '.join(sorted(reference.steps.keys()))}")
    print(f"   actions:    {', '.join(reference.actions.params.keys())}")
    print(f"   processors: {', '.join(reference.processors.params.keys())}")

    print("\n2. Describing a self-referencing builder...")
    builder.describe(ForkBuilder)
    for cycle in builder.graph.cycles():
        print("   cycle: " + " -> ".join(type_name(t) for t in cycle + cycle[:1]))
    print(f"   {len(builder.graph)} types described once each")

    print("\n3. Rendering...")
    written = MarkdownRenderer(output_dir, title="Sample API").render(reference)
    for path in written:
        print(f"   [OK] {path}")


if __name__ == "__main__":
    main()
