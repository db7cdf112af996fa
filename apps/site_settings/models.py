"""Site settings store."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class SiteSetting(models.Model):
    """A free-text setting such as the cancellation policy or check-in time."""

    key = models.CharField(max_length=100, unique=True)
    value = models.TextField(blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Site setting")
        verbose_name_plural = _("Site settings")
        ordering = ["key"]

    def __str__(self) -> str:
        return self.key

    @classmethod
    def as_dict(cls) -> dict[str, str]:
        return dict(cls.objects.values_list("key", "value"))
