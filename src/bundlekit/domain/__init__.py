"""Domain layer — versions, manifests, and bundle identity.

This layer depends only on the standard library and never logs.
It must never import from infrastructure, config, or services.
"""
