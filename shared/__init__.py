"""
Shared Kernel

Base classes and utilities shared across the accommodation, catalog and
user contexts: domain building blocks, money and date value objects,
the unit of work, the message bus and artifact storage.
"""
