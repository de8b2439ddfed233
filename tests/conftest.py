"""
Pytest configuration for the subsonic-remote test suite.

Puts the src directory on the Python path so the tests run against the
working tree without an install.
"""
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
src_dir = project_root / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))
