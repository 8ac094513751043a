"""
Module: store

Purpose:
    Persistence for projects and their generated tests.

Key Classes:
    - ProjectStore: JSON file store with locked updates
    - Project: Master pool plus generated tests
    - StoreError: Store failures
"""

from .project_store import Project, ProjectStore, StoreError, STORE_SCHEMA_VERSION

__all__ = [
    "Project",
    "ProjectStore",
    "StoreError",
    "STORE_SCHEMA_VERSION",
]
