"""Bundler input plugin that imports text files as strings.

The bundler hands every module it loads to its input plugins. This plugin
claims files matching its include globs and turns their content into a module
whose default export is the file text.

Example:
    plugin = string({"include": ["**/*.html"]})
    plugin.transform("<p>hi</p>", "views/page.html")
    # {"code": 'export default "<p>hi</p>";', "map": {"mappings": ""}}
"""

import json
import re
from collections.abc import Mapping
from functools import lru_cache
from pathlib import PurePath
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StringPluginOptions(BaseModel):
    """Options for the string plugin.

    Attributes:
        include: Glob patterns of files to import as strings.
        exclude: Glob patterns of files to skip even when included.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    include: list[str]
    exclude: list[str] = Field(default_factory=list)


@lru_cache(maxsize=256)
def _compile_glob(pattern: str) -> re.Pattern[str]:
    """Translate a glob into a regex where only ``**`` crosses directories."""
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("^" + "".join(parts) + "$")


def _normalize(path: str | PurePath) -> str:
    if isinstance(path, PurePath):
        return path.as_posix()
    return str(path).replace("\\", "/")


class StringPlugin:
    """Input plugin turning matching files into string modules."""

    name = "string"

    def __init__(self, options: StringPluginOptions) -> None:
        self.options = options

    def filter(self, path: str | PurePath) -> bool:
        """Return True if the file at ``path`` is handled by this plugin."""
        normalized = _normalize(path)
        if any(_compile_glob(p).match(normalized) for p in self.options.exclude):
            return False
        return any(_compile_glob(p).match(normalized) for p in self.options.include)

    def transform(self, code: str, path: str | PurePath) -> dict[str, Any] | None:
        """Transform file content into a module exporting it as a string.

        Returns:
            Dict with the generated ``code`` and an empty source ``map``, or
            None when the file is not handled by this plugin.
        """
        if not self.filter(path):
            return None

        return {
            "code": f"export default {json.dumps(code)};",
            "map": {"mappings": ""},
        }

    def __repr__(self) -> str:
        return (
            f"StringPlugin(include={self.options.include!r}, "
            f"exclude={self.options.exclude!r})"
        )


def string(options: StringPluginOptions | Mapping[str, Any]) -> StringPlugin:
    """Create a configured string plugin.

    Args:
        options: Plugin options, validated into StringPluginOptions.

    Raises:
        pydantic.ValidationError: If the options are malformed.
    """
    if not isinstance(options, StringPluginOptions):
        options = StringPluginOptions.model_validate(dict(options))
    return StringPlugin(options)
