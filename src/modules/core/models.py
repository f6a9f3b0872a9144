"""Base abstract models shared by the domain modules.

Provides:
- ``BaseModel``: auto-increment integer PK + created_at / updated_at timestamps.
- ``ActivatableModel``: Extends BaseModel with soft delete via an ``is_active`` flag.

Design decisions:
- The active/inactive state lives on the row as an explicit boolean tag.
  ``objects`` returns ALL records (unfiltered); read paths call ``.active()``
  themselves so the predicate is always visible at the call site.
- ``deactivate()`` / ``restore()`` are idempotent and always refresh
  ``updated_at`` when they change state.
- ``save()`` guard ensures ``updated_at`` is included when ``update_fields``
  is specified (Django skips ``auto_now`` fields otherwise).
"""

from __future__ import annotations

from django.db import models

# ---------------------------------------------------------------------------
# BaseModel
# ---------------------------------------------------------------------------


class BaseModel(models.Model):
    """Abstract base with integer PK and timestamp bookkeeping."""

    id = models.BigAutoField(primary_key=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        """Ensure ``updated_at`` is refreshed even when ``update_fields`` is passed."""
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)


# ---------------------------------------------------------------------------
# Soft delete infrastructure
# ---------------------------------------------------------------------------


class ActiveQuerySet(models.QuerySet):
    """QuerySet with active/inactive helpers."""

    def active(self) -> ActiveQuerySet:
        """Return only active (not soft-deleted) records."""
        return self.filter(is_active=True)

    def inactive(self) -> ActiveQuerySet:
        """Return only soft-deleted records."""
        return self.filter(is_active=False)


class ActiveManager(models.Manager.from_queryset(ActiveQuerySet)):
    """Manager that exposes ``.active()`` / ``.inactive()`` on the queryset."""


class ActivatableModel(BaseModel):
    """Abstract model with soft delete via an ``is_active`` flag.

    - ``objects`` is **unfiltered** (returns all rows).
    - Use ``Model.objects.active()`` to exclude soft-deleted rows.
    - ``deactivate()`` performs the soft delete; rows are never removed.
    """

    is_active = models.BooleanField(default=True, db_index=True)

    objects = ActiveManager()

    class Meta:
        abstract = True

    @property
    def is_deleted(self) -> bool:
        """Computed: ``True`` when the record has been soft-deleted."""
        return not self.is_active

    def deactivate(self) -> bool:
        """Soft-delete this instance.

        Returns ``False`` (and writes nothing) if it was already inactive.
        """
        if not self.is_active:
            return False
        self.is_active = False
        self.save(update_fields=["is_active"])
        return True

    def restore(self) -> bool:
        """Bring a soft-deleted record back. No-op if already active."""
        if self.is_active:
            return False
        self.is_active = True
        self.save(update_fields=["is_active"])
        return True
