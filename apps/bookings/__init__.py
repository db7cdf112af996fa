"""Bookings app package.

This app encapsulates the booking domain: the booking ledger, the
blocked-date register, the availability calendar shown to guests and the
admission controller that is the only way a new booking gets created.
Admission runs the conflict check and the insert in one transaction with
the apartment row locked, so overlapping requests cannot both succeed.
"""
