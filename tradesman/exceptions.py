"""
Exceptions for Tradesman.

All errors are TradeError subclasses with a structured code for programmatic
handling. The subclass tells the caller the *kind* of failure; the code tells
exactly which rule was broken.
"""

from decimal import Decimal
from typing import Any


class BaseError(Exception):
    """
    Error with a stable code, a human-readable message and context data.

    Usage:
        raise NotFoundError('PRODUCT_NOT_FOUND', product_id=42)
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.data!r})"

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }


class TradeError(BaseError):
    """
    Root of the Tradesman error taxonomy.

    Usage:
        try:
            trade.ledger.stock_out(company, user, product, Decimal('6'))
        except InsufficientStockError as e:
            print(f"Só tem {e.available} disponível")

    Attributes:
        kind: Failure family (NotFound, Validation, ...)
        http_status: Suggested status for an HTTP boundary
    """

    kind = 'Internal'
    http_status = 500

    _default_messages = {
        'PRODUCT_NOT_FOUND': 'Produto não encontrado',
        'LOCATION_NOT_FOUND': 'Localização não encontrada',
        'STOCK_ITEM_NOT_FOUND': 'Produto não encontrado no estoque',
        'RESERVATION_NOT_FOUND': 'Reserva não encontrada',
        'QUOTE_NOT_FOUND': 'Orçamento não encontrado',
        'ORDER_NOT_FOUND': 'Ordem de serviço não encontrada',
        'CUSTOMER_NOT_FOUND': 'Cliente não encontrado',
        'INVALID_QUANTITY': 'Quantidade deve ser maior que zero',
        'INVALID_COST': 'Custo unitário não pode ser negativo',
        'INVALID_PRICE': 'Preço unitário não pode ser negativo',
        'INVALID_DISCOUNT': 'Desconto inválido',
        'INVALID_DATES': 'Data de fim deve ser posterior à data de início',
        'INVALID_VALIDITY': 'Data de validade não pode ser anterior a hoje',
        'ITEMS_REQUIRED': 'Documento deve ter pelo menos um item',
        'TITLE_REQUIRED': 'Título é obrigatório',
        'INVALID_FIELDS': 'Campos não editáveis',
        'INVALID_PRIORITY': 'Prioridade inválida',
        'SAME_LOCATION': 'Localização de origem e destino não podem ser iguais',
        'NO_OP_ADJUSTMENT': 'Nova quantidade é igual à quantidade atual',
        'ADJUSTMENT_BELOW_RESERVED': 'Nova quantidade é menor que a quantidade reservada',
        'LOCATION_REQUIRED': 'Localização de origem e destino são obrigatórias',
        'INVALID_STATUS_TRANSITION': 'Transição de status inválida',
        'RESERVATION_NOT_ACTIVE': 'Apenas reservas ativas podem ser canceladas',
        'QUOTE_NOT_APPROVED': 'Apenas orçamentos aprovados podem ser convertidos em OS',
        'QUOTE_ALREADY_CONVERTED': 'Este orçamento já foi convertido em OS',
        'QUOTE_EXPIRED': 'Não é possível aprovar um orçamento expirado',
        'QUOTE_LOCKED': 'Orçamentos convertidos em OS não podem ser editados',
        'QUOTE_NOT_DELETABLE': 'Orçamentos aprovados ou convertidos não podem ser excluídos',
        'ORDER_LOCKED': 'Não é possível editar uma ordem finalizada ou cancelada',
        'ORDER_NOT_DELETABLE': 'Não é possível excluir uma ordem em andamento',
        'CUSTOMER_BLOCKED': 'Cliente está bloqueado',
        'PRODUCT_INACTIVE': 'Produto está inativo',
        'LOCATION_CODE_TAKEN': 'Já existe uma localização com este código',
        'INVALID_LOCATION': 'Código e nome da localização são obrigatórios',
        'LOCATION_NOT_EMPTY': 'Não é possível excluir localização que possui produtos em estoque',
        'INSUFFICIENT_STOCK': 'Quantidade insuficiente em estoque',
        'PERMISSION_DENIED': 'Usuário não tem permissão para esta operação',
        'INTEGRITY_CONFLICT': 'Conflito de dados',
        'TRANSIENT_FAILURE': 'Falha temporária no banco de dados, tente novamente',
        'INTERNAL_ERROR': 'Erro interno do servidor',
    }


class NotFoundError(TradeError):
    """Referenced entity absent or soft-deleted within the tenant."""

    kind = 'NotFound'
    http_status = 404


class ValidationError(TradeError):
    """Malformed or semantically invalid input."""

    kind = 'Validation'
    http_status = 400


class InsufficientStockError(TradeError):
    """Requested quantity exceeds available (non-reserved) quantity."""

    kind = 'InsufficientStock'
    http_status = 409

    @property
    def available(self) -> Decimal:
        """Shortcut for data['available']."""
        return self.data.get('available', Decimal('0'))

    @property
    def requested(self) -> Decimal:
        """Shortcut for data['requested']."""
        return self.data.get('requested', Decimal('0'))


class ForbiddenError(TradeError):
    kind = 'Forbidden'
    http_status = 403


class ConflictError(TradeError):
    kind = 'Conflict'
    http_status = 409


class TransientError(TradeError):
    """Store timeout or deadlock. Retry the whole operation, never a sub-step."""

    kind = 'TransientFailure'
    http_status = 503


class InternalError(TradeError):
    kind = 'Internal'
    http_status = 500
