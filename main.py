#!/usr/bin/env python3
"""
Placekeeper Application Launcher

This is the main entry point for the Placekeeper agent.
It launches the application from the src/placekeeper package.
"""

import sys
from pathlib import Path

# Add the src directory to Python path so we can import from placekeeper
project_root = Path(__file__).parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

from placekeeper.main import main

if __name__ == "__main__":
    sys.exit(main())
