"""
Adapters Package

- storage: pictures written under UPLOAD_PATH and served at UPLOAD_URL_PREFIX

Database access is handled by shared/db/session.py.

Usage:
======
    from src.shared.adapters.storage import LocalImageStorage
"""
