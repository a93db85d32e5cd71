"""Domain layer -- polynomial values.

This layer depends only on the standard library.
It must never import from parsing, services, infrastructure, commands, or config.
"""
