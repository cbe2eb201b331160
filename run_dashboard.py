#!/usr/bin/env python
"""
Launch the glucose dashboard with Streamlit.

    glucose-dashboard [streamlit options]

Extra arguments are passed to ``streamlit run`` after the app path, so
``glucose-dashboard --server.port 8502`` works as expected.
"""

import importlib.util
import subprocess
import sys
from pathlib import Path
from typing import List, Optional


def find_app() -> Path:
    """Path of the Streamlit script inside the installed package."""
    spec = importlib.util.find_spec("glucose_dashboard")
    if spec is None or spec.origin is None:
        raise FileNotFoundError("glucose_dashboard package is not installed")
    return Path(spec.origin).parent / "app.py"


def build_command(app_path: Path, extra_args: Optional[List[str]] = None) -> List[str]:
    return [
        sys.executable, "-m", "streamlit", "run", str(app_path),
        "--browser.gatherUsageStats", "false",
        *(extra_args or []),
    ]


def main(argv: Optional[List[str]] = None) -> int:
    app_path = find_app()
    if not app_path.exists():
        print(f"glucose-dashboard: {app_path} not found", file=sys.stderr)
        return 1

    args = sys.argv[1:] if argv is None else argv
    return subprocess.run(build_command(app_path, args)).returncode


if __name__ == "__main__":
    sys.exit(main())
