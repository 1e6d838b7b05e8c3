"""Pytest configuration for the DazzleChain test suite.

Makes the project root importable when tests are run without installing the
package, and registers the markers used by run_tests.py.
"""

import os
import sys

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: long-running test, excluded by run_tests.py")
