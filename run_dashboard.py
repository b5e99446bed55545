#!/usr/bin/env python3
"""Launcher for the Finance Tracker dashboard.

Runs ``streamlit run finance_tracker/dashboard.py`` with the project root on
the import path so the app can import the package.
"""

import os
import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.resolve()
dashboard_path = project_root / "finance_tracker" / "dashboard.py"

if __name__ == "__main__":
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(project_root), env.get("PYTHONPATH")]))
    subprocess.run(
        [sys.executable, "-m", "streamlit", "run", str(dashboard_path), *sys.argv[1:]],
        cwd=project_root,
        env=env,
    )
