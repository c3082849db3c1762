"""Pytest configuration for the structbridge test suite."""

import sys
from pathlib import Path

# Add repository root to path so the package imports without installation
sys.path.insert(0, str(Path(__file__).parent.parent))
