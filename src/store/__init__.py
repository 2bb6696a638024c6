"""Local disk persistence layer.

This module stores downloaded archives, extraction directories, and
parsed-result cache files. It also hosts the SDK facade.
"""
