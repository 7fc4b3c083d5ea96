"""Catalog app package.

Read-only catalog of bookable stays and meal offerings. Administrators
maintain it; the accommodation engine only reads it, one snapshot per
request.
"""
