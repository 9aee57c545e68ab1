"""Core library for buildlens (workspace resolution, query, code lens)."""
