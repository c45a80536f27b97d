# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
CCBEDROCK - Claude Code + AWS Bedrock bootstrap.

A Python CLI tool that configures Claude Code to route its model calls through
AWS Bedrock. Writes ~/.claude/settings.json and a shell-sourceable environment
snippet, optionally wires the snippet into your shell rc file, and can cleanly
uninstall everything it wrote.
"""

__version__ = "1.0.0"
TOOL_NAME = "ccbedrock"
