"""Infrastructure layer — manifest files on disk.

This layer may import from domain and config.
It must never import from services.
"""
