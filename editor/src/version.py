"""Application version module.

Installed: reads the version of the installed feedback-editor distribution.
From source: VERSION file at the project root plus git commit count since the
last tag.
"""

import subprocess
from pathlib import Path

DISTRIBUTION_NAME = "feedback-editor"

# editor/src/version.py -> project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def get_version() -> str:
    """Get the application version string (e.g. '0.1.12')."""
    source_version = _dev_version()
    if source_version is not None:
        return source_version
    try:
        from importlib.metadata import version, PackageNotFoundError
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "0.0.0"


def _dev_version():
    """VERSION file + commits since last tag, or None outside a source checkout."""
    version_file = _PROJECT_ROOT / "VERSION"
    try:
        major_minor = version_file.read_text().strip()
    except FileNotFoundError:
        return None

    try:
        result = subprocess.run(
            ['git', 'describe', '--tags', '--long'],
            capture_output=True, text=True, check=False,
            cwd=str(_PROJECT_ROOT),
        )
    except FileNotFoundError:
        return f"{major_minor}.0"  # git not installed

    if result.returncode == 0:
        # Format: v0.1-5-gabcdef  ->  parts[-2] = commit count
        parts = result.stdout.strip().rsplit('-', 2)
        if len(parts) == 3:
            return f"{major_minor}.{parts[1]}"
    return f"{major_minor}.0"
