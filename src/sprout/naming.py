"""npm package-name rules applied to new project names."""

from __future__ import annotations

import re
from urllib.parse import quote

MAX_NAME_LENGTH = 214
BLOCKED_NAMES = frozenset({"node_modules", "favicon.ico"})
NODE_BUILTIN_NAMES = frozenset(
    {
        "assert",
        "buffer",
        "child_process",
        "cluster",
        "console",
        "crypto",
        "dgram",
        "dns",
        "events",
        "fs",
        "http",
        "http2",
        "https",
        "module",
        "net",
        "os",
        "path",
        "process",
        "querystring",
        "readline",
        "stream",
        "string_decoder",
        "timers",
        "tls",
        "tty",
        "url",
        "util",
        "v8",
        "vm",
        "worker_threads",
        "zlib",
    }
)
_SCOPED_NAME_RE = re.compile(r"^@([^/]+)/(.+)$")
_SPECIAL_CHARS_RE = re.compile(r"[~'!()*]")


def name_errors(name: str) -> list[str]:
    """Return every npm naming rule ``name`` breaks.

    Args:
        name: Candidate package name.

    Returns:
        Human-readable problems; empty when the name is valid.

    Example:
        >>> name_errors("my-app")
        []
        >>> name_errors("MyApp")
        ['name can no longer contain capital letters']
    """
    errors: list[str] = []
    if not name:
        return ["name length must be greater than zero"]
    if name.startswith("."):
        errors.append("name cannot start with a period")
    if name.startswith("_"):
        errors.append("name cannot start with an underscore")
    if name.strip() != name:
        errors.append("name cannot contain leading or trailing spaces")
    if name.lower() in BLOCKED_NAMES:
        errors.append(f"{name} is a blocked name")
    if name in NODE_BUILTIN_NAMES:
        errors.append(f"{name} is a core module name")
    if len(name) > MAX_NAME_LENGTH:
        errors.append(f"name can no longer contain more than {MAX_NAME_LENGTH} characters")
    if name.lower() != name:
        errors.append("name can no longer contain capital letters")
    if _SPECIAL_CHARS_RE.search(name.split("/")[-1]):
        errors.append('name can no longer contain special characters ("~\'!()*")')
    if not _is_url_safe(name):
        errors.append("name can only contain URL-friendly characters")
    return errors


def _is_url_safe(name: str) -> bool:
    if quote(name, safe="~'!()*") == name:
        return True
    match = _SCOPED_NAME_RE.match(name)
    if match is None:
        return False
    scope, package = match.groups()
    return quote(scope, safe="~'!()*") == scope and quote(package, safe="~'!()*") == package


def dependency_clash(name: str, dependencies: list[str]) -> str | None:
    """Return the dependency ``name`` would shadow, if any.

    Example:
        >>> dependency_clash("react", ["react", "react-dom"])
        'react'
        >>> dependency_clash("my-app", ["react"]) is None
        True
    """
    for dependency in sorted(dependencies):
        if dependency == name:
            return dependency
    return None
