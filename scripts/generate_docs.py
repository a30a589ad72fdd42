#!/usr/bin/env python3
"""
Generate the builder reference of a project checkout.

Generates:
- index.md with steps, actions and processors
- One page per step, action and processor

Usage:
    python scripts/generate_docs.py --catalog mypkg.steps.StepCatalog src docs/reference
    python scripts/generate_docs.py --config builderdocs.yaml
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from builderdocs.cli import main


if __name__ == "__main__":
    sys.exit(main())
