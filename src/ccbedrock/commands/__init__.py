"""
CCBEDROCK Commands Package.

This package contains the install and uninstall flows, each in its own module,
sequenced by the CLI according to the selected mode.
"""

from .install import render_install_summary, run_install
from .uninstall import render_uninstall_summary, run_uninstall

__all__ = ["run_install", "render_install_summary", "run_uninstall", "render_uninstall_summary"]
