#!/usr/bin/env python3
"""
ATM Console Entry Point

Starts an interactive ATM session on the terminal.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from atm_console.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
