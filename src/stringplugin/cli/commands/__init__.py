"""CLI commands for stringplugin.

This package contains the implementation of CLI commands:
    - bundle: Resolve the string flag and report the input plugin
    - version: Show version information
"""
