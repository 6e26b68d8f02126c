"""
Company model — the tenant, plus the tenant-scoped QuerySet every model uses.
"""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class TenantQuerySet(models.QuerySet):
    """
    QuerySet for tenant-owned rows.

    Services start every query from ``Model.objects.for_company(company)``,
    so there is no service-level path that reads another tenant's rows.
    """

    def for_company(self, company):
        return self.filter(company=company)

    def alive(self):
        """Rows not soft-deleted (models without deleted_at are all alive)."""
        if any(f.name == 'deleted_at' for f in self.model._meta.get_fields()):
            return self.filter(deleted_at__isnull=True)
        return self


class SoftDeleteMixin(models.Model):
    """Soft delete: rows are hidden by deleted_at, never removed."""

    deleted_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        verbose_name=_('Excluído em'),
    )

    class Meta:
        abstract = True

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self):
        self.deleted_at = timezone.now()
        self.save(update_fields=['deleted_at', 'updated_at'])

    def restore(self):
        self.deleted_at = None
        self.save(update_fields=['deleted_at', 'updated_at'])


class Company(models.Model):
    """A tenant. Every stock and sales row belongs to exactly one Company."""

    name = models.CharField(max_length=200, verbose_name=_('Nome'))
    document = models.CharField(
        max_length=30,
        blank=True,
        default='',
        verbose_name=_('Documento'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Empresa')
        verbose_name_plural = _('Empresas')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name
