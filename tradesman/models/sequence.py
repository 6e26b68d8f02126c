"""
DocumentSequence model — per-tenant document number series.
"""

from django.db import models, transaction
from django.utils.translation import gettext_lazy as _

from tradesman.models.enums import SequenceKind


class DocumentSequence(models.Model):
    """
    Number series for one document kind of one company.

    allocate() locks this row with select_for_update, reads next_number,
    increments it and returns prefix + zero-padded number. The lock is held
    until the surrounding transaction commits, so two concurrent quotes can
    never be given the same number.
    """

    company = models.ForeignKey(
        'tradesman.Company',
        on_delete=models.CASCADE,
        related_name='document_sequences',
        verbose_name=_('Empresa'),
    )
    kind = models.CharField(
        max_length=20,
        choices=SequenceKind.choices,
        verbose_name=_('Tipo de documento'),
    )
    prefix = models.CharField(max_length=20, blank=True, default='', verbose_name=_('Prefixo'))
    next_number = models.PositiveIntegerField(default=1, verbose_name=_('Próximo número'))
    width = models.PositiveSmallIntegerField(default=6, verbose_name=_('Dígitos'))

    class Meta:
        verbose_name = _('Sequência de documentos')
        verbose_name_plural = _('Sequências de documentos')
        constraints = [
            models.UniqueConstraint(
                fields=['company', 'kind'],
                name='unique_document_sequence',
            )
        ]

    def __str__(self) -> str:
        return f"{self.company_id} {self.kind}"

    def format(self, number: int) -> str:
        return f"{self.prefix}{str(number).zfill(self.width)}"

    @transaction.atomic
    def allocate(self) -> str:
        """Allocate the next number without duplicates."""
        series = type(self).objects.select_for_update().get(pk=self.pk)

        current = series.next_number
        series.next_number = current + 1
        series.save(update_fields=['next_number'])

        self.next_number = series.next_number
        return series.format(current)
