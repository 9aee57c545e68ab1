"""Cache utilities for test isolation."""
from __future__ import annotations


def reset_buildlens_caches() -> None:
    """Reset module-level caches that might persist state between tests."""
    from buildlens.core.config.cache import clear_all_caches
    from buildlens.core.log import reset_logging_for_tests

    clear_all_caches()
    reset_logging_for_tests()
