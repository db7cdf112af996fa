"""
Shared Kernel

Pieces used by more than one app: the ``DateRange`` value object, the
domain error types, the unit of work that wraps booking writes and the
DRF exception handler that renders domain errors.
"""
