"""
Root conftest.py for the catalog search project.

Makes the catalog_search package importable when tests run from a
source checkout without an editable install.
"""

import sys
from pathlib import Path


def pytest_configure(config):
    """Add the repository root to sys.path."""
    root_dir = Path(__file__).parent
    if str(root_dir) not in sys.path:
        sys.path.insert(0, str(root_dir))
