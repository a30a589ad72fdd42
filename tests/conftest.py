"""Ensure src/ is on sys.path so that ``import builderdocs`` resolves to
``src/builderdocs/`` without installation, and make the sample builder API
under ``tests/fixtures/`` importable as ``sample_api``.
"""

import sys
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parent.parent
FIXTURES = _root / "tests" / "fixtures"

for _path in (str(_root / "src"), str(FIXTURES)):
    if _path not in sys.path:
        sys.path.insert(0, _path)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def sources(fixtures_dir):
    from builderdocs.introspection import SourceIndex

    return SourceIndex([fixtures_dir])


@pytest.fixture
def registry():
    from builderdocs.introspection import StaticRegistry
    from sample_api.actions import LogProcessorFactory, SetActionFactory
    from sample_api.http import JsonBodyFactory, TextBodyFactory
    from sample_api.steps import LogStepFactory

    return StaticRegistry([
        SetActionFactory(),
        LogProcessorFactory(),
        JsonBodyFactory(),
        TextBodyFactory(),
        LogStepFactory(),
    ])


@pytest.fixture
def builder(sources, registry):
    from builderdocs.generator import DocGraphBuilder

    return DocGraphBuilder(sources, registry)
