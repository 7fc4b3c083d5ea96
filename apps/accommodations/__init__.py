"""Accommodations app package.

Owns the accommodation booking lifecycle: creating a participant's single
confirmed booking, amending it after a payment proof was recorded while
keeping a write-once snapshot of the original payment, and the admin
payment review transitions. Totals are always recomputed from catalog
prices; client-supplied totals are never stored.
"""
