"""Service layer — bundle operations returning ServiceResult.

Services may import from domain, infrastructure, and config.
"""
