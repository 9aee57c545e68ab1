"""Package labels and query expressions."""
from __future__ import annotations

import os
from pathlib import PurePath

ROOT_SCOPE = "//"


def package_label(workspace: str | os.PathLike[str], document: str | os.PathLike[str]) -> str:
    """Return the package label of the BUILD file ``document``.

    The label is the document's directory relative to ``workspace``, always
    with forward slashes, prefixed with ``//``. A BUILD file at the workspace
    root yields the bare ``//``.

    Examples:
        >>> package_label("/w", "/w/a/b/BUILD")
        '//a/b'
        >>> package_label("/w", "/w/BUILD")
        '//'
    """
    relative = os.path.relpath(os.fspath(document), os.fspath(workspace))
    rel_dir = os.path.dirname(relative)
    if rel_dir in ("", os.curdir):
        return ROOT_SCOPE
    return ROOT_SCOPE + PurePath(rel_dir).as_posix()


def rules_in_package(label: str) -> str:
    """Expression selecting the rules declared directly in ``label``.

    Not recursive: rules of subpackages are excluded.
    """
    return f"kind(rule, {label}:all)"


__all__ = ["ROOT_SCOPE", "package_label", "rules_in_package"]
