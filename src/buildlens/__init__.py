"""
buildlens - Bazel BUILD file actions for editors

buildlens finds the workspace that owns a BUILD file, queries Bazel for the
rules declared in that file's package, and turns each rule into a
"Build <target>" / "Test <target>" command descriptor.
"""

__version__ = "0.2.0"
__all__ = ["__version__"]
