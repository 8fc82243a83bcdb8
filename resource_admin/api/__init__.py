# ================================
# API PACKAGE INITIALIZATION (api/__init__.py)
# ================================

"""
API Package

Resource routers plus the JSON endpoints for column preferences and navigation
"""

API_VERSION = "1.0.0"
API_TITLE = "Resource Admin API"

__all__ = ["API_VERSION", "API_TITLE"]
