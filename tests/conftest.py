"""
Pytest configuration and shared fixtures for choreolib tests.

Provides markers and fixtures that write project and trajectory files into a
temporary deploy directory.
"""

import json
import os
import sys
import logging
from pathlib import Path
from typing import Any, Callable

import pytest

# Add the parent directory to Python path so we can import the package modules
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from choreolib.config import SPEC_VERSION
from choreolib.loader import ChoreoLoader
from choreolib.trajectory import Trajectory
from tests.utils import swerve

logger = logging.getLogger(__name__)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: fast unit tests")
    config.addinivalue_line("markers", "integration: tests that touch the filesystem through the loader")


# ============================================================================
# TRAJECTORY FIXTURES
# ============================================================================

@pytest.fixture
def line_trajectory() -> Trajectory:
    """Samples at t=0,1,2 moving along +X: x=0,10,20."""
    return Trajectory("line", [swerve(0.0, 0.0), swerve(1.0, 10.0), swerve(2.0, 20.0)])


# ============================================================================
# DEPLOY DIRECTORY FIXTURES
# ============================================================================

@pytest.fixture
def deploy_dir(tmp_path: Path) -> Path:
    """Deploy directory containing a single swerve project file."""
    project = {"name": "test", "version": SPEC_VERSION, "type": "Swerve"}
    (tmp_path / "test.chor").write_text(json.dumps(project))
    return tmp_path


@pytest.fixture
def write_trajectory(deploy_dir: Path) -> Callable[..., Path]:
    """Write a .traj document (dict or raw text) into the deploy directory."""

    def _write(name: str, document: Any) -> Path:
        path = deploy_dir / f"{name}.traj"
        text = document if isinstance(document, str) else json.dumps(document)
        path.write_text(text)
        logger.debug(f"Wrote {path}")
        return path

    return _write


@pytest.fixture
def loader(deploy_dir: Path) -> ChoreoLoader:
    return ChoreoLoader(deploy_dir)
