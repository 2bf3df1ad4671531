"""
Validating base model for refinery-blog.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import models

logger = logging.getLogger(__name__)


class ValidatedModel(models.Model):
    """
    Model that validates itself before every save.

    An invalid instance is not written: save() returns False and the
    field errors are available on ``instance.errors``.
    """

    # Text fields that must hold more than whitespace.
    presence_fields = ()

    class Meta:
        abstract = True

    @property
    def errors(self):
        """Field errors from the last validation run."""
        return getattr(self, "_validation_errors", {})

    def clean(self):
        super().clean()
        errors = {}
        for name in self.presence_fields:
            value = getattr(self, name)
            if isinstance(value, str) and value and not value.strip():
                errors[name] = "This field cannot be blank."
        if errors:
            raise ValidationError(errors)

    def is_valid(self):
        """Run full_clean() and record the errors instead of raising."""
        try:
            self.full_clean()
        except ValidationError as exc:
            self._validation_errors = exc.message_dict
            return False
        self._validation_errors = {}
        return True

    def save(self, *args, validate=True, **kwargs):
        if validate and not self.is_valid():
            logger.info(
                "Not saving invalid %s: %s",
                self.__class__.__name__,
                self.errors,
            )
            return False
        super().save(*args, **kwargs)
        return True
