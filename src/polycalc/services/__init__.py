"""Service layer -- operations returning ServiceResult.

Services may import from parsing, domain, infrastructure, and config.
They must never import from commands or output.
"""
