"""
builderdocs Documentation Output
================================

Render a collected reference as linked markdown pages.

Usage:
    from builderdocs.documentation import MarkdownRenderer

    MarkdownRenderer(Path("docs/reference")).render(reference)
"""

from builderdocs.documentation.renderer import NO_DESCRIPTION, MarkdownRenderer

__all__ = ["MarkdownRenderer", "NO_DESCRIPTION"]
