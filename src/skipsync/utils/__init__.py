"""Utility modules for skipsync."""
