# ================================
# RESOURCE ADMIN PACKAGE (__init__.py)
# ================================

"""
Resource Admin

Declarative CRUD admin resources served as Inertia pages over FastAPI
"""

__version__ = "1.0.0"
