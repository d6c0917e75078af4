"""Command-line interface for stringplugin.

This module provides the `stringplugin` CLI, enabling users to:
    - Resolve the string import configuration with `stringplugin bundle`
    - Show version information with `stringplugin version`
"""
