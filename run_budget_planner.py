#!/usr/bin/env python3
"""Direct launcher for the WealthSync Budget Planner.

This script launches Streamlit with ``budget_planner/Home.py`` as the app
entry point.
"""

import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.resolve()
entry_point = project_root / "budget_planner" / "Home.py"

if __name__ == "__main__":
    sys.exit(
        subprocess.run(
            [sys.executable, "-m", "streamlit", "run", str(entry_point)],
            cwd=project_root,
        ).returncode
    )
