"""
System utilities for finding executables.
"""

import shutil
import sys
from pathlib import Path


def find_tool(name: str) -> str:
    """Find executable, checking venv first.

    Args:
        name: Tool name (e.g., "yt-dlp")

    Returns:
        Path to executable
    """
    venv = Path(sys.prefix) / "bin" / name
    if venv.exists():
        return str(venv)

    return shutil.which(name) or name
