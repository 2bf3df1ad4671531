"""
Scoped key-value settings store shared across the CMS.
"""
import logging

from django.core.cache import cache
from django.db import models
from django.utils.text import capfirst

from ..conf import blog_settings

logger = logging.getLogger(__name__)

_MISSING = object()


class RefinerySettingQuerySet(models.QuerySet):
    def update(self, **kwargs):
        """Bulk update, dropping the cached values of the touched settings."""
        keys = [
            RefinerySetting.cache_key(name, scoping)
            for name, scoping in self.values_list("name", "scoping")
        ]
        rows = super().update(**kwargs)
        cache.delete_many(keys)
        return rows


class RefinerySetting(models.Model):
    """
    A single CMS setting.

    Settings are identified by name within an optional scoping
    (e.g. ``comments_allowed`` in the ``blog`` scoping). Values are stored
    as JSON so booleans and numbers keep their type.
    """

    name = models.CharField(max_length=255)
    scoping = models.CharField(max_length=255, blank=True, default="")
    value = models.JSONField(null=True, blank=True)
    restricted = models.BooleanField(
        default=False,
        help_text="Only superusers may edit restricted settings",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = RefinerySettingQuerySet.as_manager()

    class Meta:
        ordering = ["scoping", "name"]
        constraints = [
            models.UniqueConstraint(
                fields=["name", "scoping"],
                name="refinery_setting_unique_name_scoping",
            ),
        ]

    def __str__(self):
        if self.scoping:
            return f"{self.scoping}: {self.title}"
        return self.title

    @property
    def title(self):
        """Human readable version of the setting name."""
        return capfirst(self.name.replace("_", " "))

    @staticmethod
    def cache_key(name, scoping=None):
        return f"refinery_setting:{scoping or ''}:{name}"

    @classmethod
    def _lookup(cls, name, scoping):
        """Return the stored value or _MISSING, going through the cache."""
        key = cls.cache_key(name, scoping)
        value = cache.get(key, _MISSING)
        if value is not _MISSING:
            return value

        setting = cls.objects.filter(name=name, scoping=scoping or "").first()
        if setting is None:
            return _MISSING
        cache.set(key, setting.value, blog_settings.SETTINGS_CACHE_TIMEOUT)
        return setting.value

    @classmethod
    def get(cls, name, scoping=None):
        """Return the value of a setting, or None if it does not exist."""
        value = cls._lookup(str(name), scoping)
        return None if value is _MISSING else value

    @classmethod
    def set(cls, name, value, scoping=None, restricted=False):
        """
        Create or update a setting and return its value.

        Also accepts the options-hash form::

            RefinerySetting.set("comments_allowed", {"scoping": "blog", "value": True})
        """
        if isinstance(value, dict) and "value" in value:
            options = value
            value = options["value"]
            scoping = options.get("scoping", scoping)
            restricted = options.get("restricted", restricted)

        setting, created = cls.objects.update_or_create(
            name=str(name),
            scoping=scoping or "",
            defaults={"value": value, "restricted": restricted},
        )
        logger.info(
            "%s setting %s (scoping=%r) = %r",
            "Created" if created else "Updated",
            setting.name,
            setting.scoping,
            value,
        )
        return setting.value

    @classmethod
    def find_or_set(cls, name, default, scoping=None, restricted=False):
        """Return the stored value, storing ``default`` first if it is missing."""
        value = cls._lookup(str(name), scoping)
        if value is _MISSING:
            return cls.set(name, default, scoping=scoping, restricted=restricted)
        return value
