"""Remote Kaggle API access.

This module issues authenticated requests against the Kaggle API.
It maps HTTP and transport failures onto typed client errors.
"""
