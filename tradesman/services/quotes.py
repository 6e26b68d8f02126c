"""
Quotes — create, edit, status lifecycle, duplicate and read.

Conversion into an order lives in services.conversion; it is the only path
into CONVERTED.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from decimal import Decimal

from django.db.models import Q, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from tradesman.conf import tradesman_settings
from tradesman.exceptions import NotFoundError, ValidationError
from tradesman.models import DiscountType, Quote, QuoteItem, QuoteStatus, SequenceKind
from tradesman.pricing import DocumentTotals, compute_document, to_money
from tradesman.protocols.permissions import (
    QUOTES_CREATE,
    QUOTES_DELETE,
    QUOTES_READ,
    QUOTES_UPDATE,
)
from tradesman.services.base import TradeService, pk_of
from tradesman.services.documents import (
    check_discount,
    document_stats,
    get_customer,
    persisted_totals,
    validate_lines,
    write_lines,
)
from tradesman.services.ledger import user_or_none
from tradesman.services.numbering import next_number
from tradesman.services.pagination import Page, paginate

logger = logging.getLogger('tradesman')

QUOTE_TRANSITIONS: dict[str, tuple[str, ...]] = {
    QuoteStatus.DRAFT: (QuoteStatus.SENT, QuoteStatus.EXPIRED),
    QuoteStatus.SENT: (QuoteStatus.APPROVED, QuoteStatus.REJECTED, QuoteStatus.EXPIRED),
    QuoteStatus.APPROVED: (QuoteStatus.CONVERTED,),
    QuoteStatus.REJECTED: (QuoteStatus.SENT,),
    QuoteStatus.EXPIRED: (QuoteStatus.SENT,),
    QuoteStatus.CONVERTED: (),
}

EDITABLE_FIELDS = {
    'customer', 'title', 'description', 'valid_until', 'payment_terms',
    'delivery_terms', 'observations', 'discount', 'discount_type', 'items',
}


def can_transition(current: str, target: str) -> bool:
    return target in QUOTE_TRANSITIONS.get(current, ())


def _clean_title(title) -> str:
    title = (title or '').strip()
    if not title or len(title) > 200:
        raise ValidationError('TITLE_REQUIRED', title=title)
    return title


def _check_validity(valid_until) -> None:
    if valid_until is None or valid_until < timezone.localdate():
        raise ValidationError('INVALID_VALIDITY', valid_until=valid_until)


class QuoteService(TradeService):
    """Quote lifecycle."""

    def _get(self, company, quote, lock: bool = False) -> Quote:
        qs = Quote.objects.for_company(company).alive()
        if lock:
            qs = qs.select_for_update()
        found = qs.filter(pk=pk_of(quote)).first()
        if found is None:
            raise NotFoundError('QUOTE_NOT_FOUND', quote_id=pk_of(quote))
        return found

    # ══════════════════════════════════════════════════════════════
    # WRITE
    # ══════════════════════════════════════════════════════════════

    def create(self, company, user, customer, title: str, valid_until, items,
               discount=0, discount_type: str = DiscountType.PERCENTAGE,
               description: str = '', payment_terms: str = '',
               delivery_terms: str = '', observations: str = '') -> Quote:
        """
        Create a DRAFT quote with an ORC- number and stored totals.

        Raises:
            ForbiddenError: Without quotes:create
            NotFoundError: Customer or a product missing
            ValidationError: Blocked customer, inactive product, bad line,
                bad discount, validity in the past
        """
        self._require(user, QUOTES_CREATE)

        title = _clean_title(title)

        with self.uow.atomic():
            customer = get_customer(company, customer)
            lines = validate_lines(company, items, DiscountType.PERCENTAGE)
            _check_validity(valid_until)
            discount = to_money(check_discount(discount, discount_type))

            quote = Quote.objects.create(
                company=company,
                number=next_number(company, SequenceKind.QUOTE),
                customer=customer,
                title=title,
                description=(description or '').strip(),
                valid_until=valid_until,
                payment_terms=(payment_terms or '').strip(),
                delivery_terms=(delivery_terms or '').strip(),
                observations=(observations or '').strip(),
                discount=discount,
                discount_type=discount_type,
                status=QuoteStatus.DRAFT,
                created_by=user_or_none(user),
            )
            totals = write_lines(quote, QuoteItem, 'quote', lines, discount, discount_type)
            quote.save()

            logger.info(
                "quote.created",
                extra={
                    "company_id": company.pk,
                    "quote_id": quote.pk,
                    "number": quote.number,
                    "total": str(totals.total),
                },
            )
            return quote

    def update(self, company, user, quote, **changes) -> Quote:
        """
        Edit a quote. Replacing items, or changing the document discount,
        recomputes every total.

        Raises:
            ValidationError('QUOTE_LOCKED'): Quote already CONVERTED
        """
        self._require(user, QUOTES_UPDATE)

        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError('INVALID_FIELDS', fields=sorted(unknown))

        with self.uow.atomic():
            quote = self._get(company, quote, lock=True)
            if quote.status == QuoteStatus.CONVERTED:
                raise ValidationError('QUOTE_LOCKED', quote_id=quote.pk)

            if 'customer' in changes:
                quote.customer = get_customer(company, changes['customer'])
            if 'title' in changes:
                quote.title = _clean_title(changes['title'])
            if 'valid_until' in changes:
                _check_validity(changes['valid_until'])
                quote.valid_until = changes['valid_until']
            for field in ('description', 'payment_terms', 'delivery_terms', 'observations'):
                if field in changes:
                    setattr(quote, field, (changes[field] or '').strip())

            discount_type = changes.get('discount_type', quote.discount_type)
            discount = changes.get('discount', quote.discount)
            discount = to_money(check_discount(discount, discount_type))

            if changes.get('items') is not None:
                lines = validate_lines(company, changes['items'], DiscountType.PERCENTAGE)
                write_lines(quote, QuoteItem, 'quote', lines, discount, discount_type)
            elif 'discount' in changes or 'discount_type' in changes:
                quote.discount = discount
                quote.discount_type = discount_type
                quote.apply_totals(persisted_totals(quote))

            quote.save()
            logger.info(
                "quote.updated",
                extra={"quote_id": quote.pk, "fields": sorted(changes)},
            )
            return quote

    def delete(self, company, user, quote) -> None:
        """
        Soft-delete a quote.

        Raises:
            ValidationError('QUOTE_NOT_DELETABLE'): APPROVED or CONVERTED
        """
        self._require(user, QUOTES_DELETE)

        with self.uow.atomic():
            quote = self._get(company, quote, lock=True)
            if quote.status in (QuoteStatus.APPROVED, QuoteStatus.CONVERTED):
                raise ValidationError('QUOTE_NOT_DELETABLE', quote_id=quote.pk, status=quote.status)
            quote.soft_delete()
            logger.info("quote.deleted", extra={"quote_id": quote.pk})

    def restore(self, company, user, quote) -> Quote:
        """
        Undo a soft delete. A live quote is returned unchanged.

        Raises:
            ForbiddenError: Without quotes:update
            NotFoundError('QUOTE_NOT_FOUND'): No such quote in the tenant
        """
        self._require(user, QUOTES_UPDATE)

        with self.uow.atomic():
            found = (
                Quote.objects.for_company(company)
                .select_for_update()
                .filter(pk=pk_of(quote))
                .first()
            )
            if found is None:
                raise NotFoundError('QUOTE_NOT_FOUND', quote_id=pk_of(quote))
            if found.is_deleted:
                found.restore()
                logger.info("quote.restored", extra={"quote_id": found.pk})
            return found

    def update_status(self, company, user, quote, status: str, reason: str = '') -> Quote:
        """
        Move a quote along its lifecycle.

        CONVERTED is refused here even from APPROVED; only convert_to_order
        sets it, together with the order it creates.

        Raises:
            ValidationError('INVALID_STATUS_TRANSITION')
            ValidationError('QUOTE_EXPIRED'): Approving past valid_until
        """
        self._require(user, QUOTES_UPDATE)

        if status not in QuoteStatus.values or status == QuoteStatus.CONVERTED:
            raise ValidationError('INVALID_STATUS_TRANSITION', target=status)

        with self.uow.atomic():
            quote = self._get(company, quote, lock=True)
            current = quote.status

            if not can_transition(current, status):
                raise ValidationError('INVALID_STATUS_TRANSITION', current=current, target=status)
            if status == QuoteStatus.APPROVED and quote.is_past_validity:
                raise ValidationError('QUOTE_EXPIRED', quote_id=quote.pk, valid_until=quote.valid_until)

            quote.stamp_status(status)
            if reason:
                quote.observations = '\n'.join(filter(None, [quote.observations, reason]))
            quote.save()

            logger.info(
                "quote.status_changed",
                extra={"quote_id": quote.pk, "from": current, "to": status},
            )
            return quote

    def duplicate(self, company, user, quote, title: str | None = None,
                  customer=None, valid_until=None) -> Quote:
        """
        Copy a quote into a new DRAFT with a new number.

        Lines are re-priced, so the copy's totals come from the calculator
        and not from the source row.
        """
        self._require(user, QUOTES_CREATE)

        with self.uow.atomic():
            source = self._get(company, quote)
            target_customer = (
                get_customer(company, customer, allow_blocked=True)
                if customer is not None else source.customer
            )
            if valid_until is None:
                valid_until = timezone.localdate() + timedelta(days=tradesman_settings.QUOTE_VALIDITY_DAYS)

            copy = Quote.objects.create(
                company=company,
                number=next_number(company, SequenceKind.QUOTE),
                customer=target_customer,
                title=_clean_title(title or f"{source.title} (Cópia)"),
                description=source.description,
                valid_until=valid_until,
                payment_terms=source.payment_terms,
                delivery_terms=source.delivery_terms,
                observations=source.observations,
                discount=source.discount,
                discount_type=source.discount_type,
                status=QuoteStatus.DRAFT,
                created_by=user_or_none(user),
            )

            rows = []
            for row in source.items.all():
                clone = QuoteItem(
                    quote=copy,
                    product_id=row.product_id,
                    quantity=row.quantity,
                    unit_price=row.unit_price,
                    discount=row.discount,
                    discount_type=row.discount_type,
                    observations=row.observations,
                    sort_order=row.sort_order,
                )
                rows.append(clone)
            totals = compute_document([r.as_line() for r in rows], copy.discount, copy.discount_type)
            for clone, lt in zip(rows, totals.lines):
                clone.apply_totals(lt)
            QuoteItem.objects.bulk_create(rows)

            copy.apply_totals(totals)
            copy.save()

            logger.info(
                "quote.duplicated",
                extra={"quote_id": copy.pk, "source_id": source.pk, "number": copy.number},
            )
            return copy

    # ══════════════════════════════════════════════════════════════
    # READ
    # ══════════════════════════════════════════════════════════════

    def get(self, company, user, quote) -> Quote:
        self._require(user, QUOTES_READ)
        return self._get(company, quote)

    def list(self, company, user, status=None, customer=None, search: str | None = None,
             page: int = 1, limit: int | None = None) -> Page[Quote]:
        self._require(user, QUOTES_READ)
        qs = Quote.objects.for_company(company).alive().select_related('customer')
        if status:
            qs = qs.filter(status=status)
        if customer is not None:
            qs = qs.filter(customer_id=pk_of(customer))
        if search:
            qs = qs.filter(Q(title__icontains=search) | Q(number__icontains=search))
        return paginate(qs.order_by('-created_at', '-id'), page, limit)

    def totals(self, company, user, quote) -> DocumentTotals:
        """Totals recomputed from the persisted lines."""
        self._require(user, QUOTES_READ)
        return persisted_totals(self._get(company, quote))

    def stats(self, company, user) -> dict:
        """
        Dashboard numbers over live quotes.

        Returns:
            dict with total, by_status, total_value, average_value,
            this_month, approved_value and conversion_rate (percent of
            decided quotes that were approved or converted)
        """
        self._require(user, QUOTES_READ)
        qs = Quote.objects.for_company(company).alive()

        result = document_stats(qs, QuoteStatus.values)
        won = qs.filter(status__in=[QuoteStatus.APPROVED, QuoteStatus.CONVERTED])
        result['approved_value'] = to_money(won.aggregate(v=Coalesce(Sum('total'), Decimal('0')))['v'])

        by_status = result['by_status']
        won_count = by_status[QuoteStatus.APPROVED] + by_status[QuoteStatus.CONVERTED]
        decided = won_count + by_status[QuoteStatus.REJECTED]
        result['conversion_rate'] = (
            (Decimal(won_count) * 100 / decided).quantize(Decimal('0.01')) if decided else Decimal('0')
        )
        return result
