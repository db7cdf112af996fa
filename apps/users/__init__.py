"""Users app package.

Back-office authentication for the booking site. Admin accounts are
ordinary ``django.contrib.auth`` users with ``is_staff`` set; this app
issues JWTs for them and exposes the admin capability check used by the
booking and catalog services.
"""
