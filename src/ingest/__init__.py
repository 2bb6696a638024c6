"""Dataset download pipeline.

This module resolves cache hits, materializes fetched archives, and
parses extracted CSV files into records.
"""
