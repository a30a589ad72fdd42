"""
builderdocs Command Line
========================

Usage:
    builderdocs --catalog mypkg.steps.StepCatalog src/ docs/reference
    builderdocs --config builderdocs.yaml
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from builderdocs.config import load_config
from builderdocs.documentation import MarkdownRenderer
from builderdocs.generator import DocGraphBuilder, ReferenceGenerator
from builderdocs.introspection import EntryPointRegistry, SourceIndex
from builderdocs.vocabulary import Vocabulary, VocabularyError, import_dotted

logger = logging.getLogger("builderdocs.cli")

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="builderdocs",
        description="Generate a linked markdown reference from a fluent builder API.",
        epilog="Examples:\n"
               "  builderdocs --catalog mypkg.steps.StepCatalog src docs/reference\n"
               "  builderdocs --config builderdocs.yaml\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Source directories followed by the output directory.",
    )
    parser.add_argument(
        "--config",
        default="builderdocs.yaml",
        help="YAML configuration file (default: builderdocs.yaml, if present).",
    )
    parser.add_argument(
        "--catalog",
        default=None,
        help="Dotted path of the step catalog class.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log debug diagnostics.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Log errors only.")
    return parser


def setup_logging(config: dict, verbose: bool = False, quiet: bool = False) -> None:
    level = _LEVELS.get(str(config.get("logging", {}).get("console_verbosity", "info")).lower(), logging.INFO)
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    # griffe warns about untyped docstring parameters
    if not verbose:
        logging.getLogger("griffe").setLevel(logging.ERROR)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    setup_logging(config, args.verbose, args.quiet)

    source_dirs = list(config["sources"].get("dirs") or [])
    output_dir = config["output"]["dir"]
    if args.paths:
        source_dirs = args.paths[:-1] or source_dirs
        output_dir = args.paths[-1]

    catalog_path = args.catalog or config["catalog"].get("step_catalog")
    try:
        vocabulary = Vocabulary.from_config(config)
        catalog = import_dotted(catalog_path) if catalog_path else None
    except (ImportError, AttributeError) as e:
        logger.error(f"Cannot import configured class: {e}")
        return 1
    except VocabularyError as e:
        logger.error(str(e))
        return 1

    sources = SourceIndex(source_dirs, config["sources"].get("fallback_to_module_file", True))
    builder = DocGraphBuilder(sources, EntryPointRegistry(), vocabulary)
    try:
        reference = ReferenceGenerator(builder, catalog=catalog).collect()
    except VocabularyError as e:
        logger.error(f"Builder vocabulary violated: {e}")
        return 1

    output = config["output"]
    renderer = MarkdownRenderer(
        Path(output_dir),
        title=output.get("title", "Reference"),
        link_suffix=output.get("link_suffix", ".html"),
    )
    renderer.render(reference)
    return 0


if __name__ == "__main__":
    sys.exit(main())
