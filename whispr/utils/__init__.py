"""Utility modules for Whispr."""
