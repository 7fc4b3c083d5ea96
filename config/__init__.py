"""Top-level package for Django configuration.

Settings modules for each environment live in ``config.settings``; WSGI and
ASGI entry points sit next to this file.
"""
