from __future__ import annotations

import logging

from django.db import transaction  # type: ignore

from apps.users.permissions import ensure_admin

from .models import SiteSetting

logger = logging.getLogger(__name__)


@transaction.atomic
def update_settings(values: dict[str, str], *, actor) -> dict[str, str]:
    """Insert or overwrite each given key; keys not mentioned are left alone."""

    ensure_admin(actor)
    for key, value in values.items():
        SiteSetting.objects.update_or_create(key=key, defaults={"value": value})
    logger.info("Settings %s updated by %s", ", ".join(sorted(values)), actor.get_username())
    return SiteSetting.as_dict()
