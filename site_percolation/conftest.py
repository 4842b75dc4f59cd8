# conftest.py
#
# Puts the repository root on sys.path so that both ``site_percolation`` and
# the root-level ``runner`` wrapper import without a package install.
#
# Usage:
#   pytest site_percolation/tests -v

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
