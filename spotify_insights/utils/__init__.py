"""
Shared helpers for presenting tracks and statistics.
"""
