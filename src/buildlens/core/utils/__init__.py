"""Shared utilities for buildlens core modules."""
