"""Domain layer — the FEEN codec itself.

This layer depends only on the standard library.
It must never import from services, config, output, or commands.
"""
