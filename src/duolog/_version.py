"""
Version information for duolog (dual-channel diagnostics).

This file is the canonical source for version numbers.
The __version__ string carries build metadata (branch, build number,
date, commit hash) after the base version.

Format: MAJOR.MINOR.PATCH[-PHASE]_BRANCH_BUILD-YYYYMMDD-COMMITHASH
Example: 0.1.0-beta_main_7-20261019-5e2f0a91
"""

# Version components - edit these for version bumps
MAJOR = 0
MINOR = 1
PATCH = 0
PHASE = "beta"  # None, "alpha", "beta", "rc1", etc.

# Build metadata - updated at release time
__version__ = "0.1.0-beta_main_7-20261019-5e2f0a91"
__app_name__ = "duolog"


def get_version():
    """Return the full version string including branch and build info."""
    return __version__


def get_base_version():
    """Return the semantic version string (MAJOR.MINOR.PATCH[-PHASE])."""
    if "_" in __version__:
        return __version__.split("_")[0]
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    if PHASE:
        base = f"{base}-{PHASE}"
    return base


def get_pip_version():
    """
    Return PEP 440 compliant version for pip/setuptools.

    - Main branch: 0.1.0-beta_main_7-20261019-hash -> 0.1.0b0
    - Other branches: 0.1.0-beta_dev_7-20261019-hash -> 0.1.0b0.dev7
    """
    base = f"{MAJOR}.{MINOR}.{PATCH}"

    phase_map = {"alpha": "a0", "beta": "b0"}
    if PHASE:
        base += phase_map.get(PHASE, PHASE)

    if "_" not in __version__:
        return base

    parts = __version__.split("_")
    branch = parts[1] if len(parts) > 1 else "unknown"
    if branch == "main":
        return base

    build_info = "_".join(parts[2:]) if len(parts) > 2 else ""
    build_num = build_info.split("-")[0] if "-" in build_info else "0"
    return f"{base}.dev{build_num}"


# For convenience in imports
VERSION = get_version()
BASE_VERSION = get_base_version()
PIP_VERSION = get_pip_version()
