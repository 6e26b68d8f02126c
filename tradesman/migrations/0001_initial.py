"""
Initial migration for Tradesman models.
"""

from decimal import Decimal
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


DISCOUNT_TYPES = [('FIXED', 'Valor fixo'), ('PERCENTAGE', 'Percentual')]
MOVEMENT_TYPES = [('IN', 'Entrada'), ('OUT', 'Saída'), ('ADJUSTMENT', 'Ajuste'), ('TRANSFER', 'Transferência')]


def money(verbose_name):
    return models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=14, verbose_name=verbose_name)


class Migration(migrations.Migration):
    """Create Tradesman models."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Company',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200, verbose_name='Nome')),
                ('document', models.CharField(blank=True, default='', max_length=30, verbose_name='Documento')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Empresa',
                'verbose_name_plural': 'Empresas',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Customer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True, verbose_name='Excluído em')),
                ('name', models.CharField(max_length=200, verbose_name='Nome')),
                ('document', models.CharField(blank=True, default='', max_length=30, verbose_name='Documento')),
                ('status', models.CharField(choices=[('ACTIVE', 'Ativo'), ('BLOCKED', 'Bloqueado')], default='ACTIVE', max_length=20, verbose_name='Status')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='customers', to='tradesman.company', verbose_name='Empresa')),
            ],
            options={
                'verbose_name': 'Cliente',
                'verbose_name_plural': 'Clientes',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True, verbose_name='Excluído em')),
                ('name', models.CharField(max_length=200, verbose_name='Nome')),
                ('code', models.CharField(max_length=50, verbose_name='Código')),
                ('status', models.CharField(choices=[('ACTIVE', 'Ativo'), ('INACTIVE', 'Inativo')], default='ACTIVE', max_length=20, verbose_name='Status')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='products', to='tradesman.company', verbose_name='Empresa')),
            ],
            options={
                'verbose_name': 'Produto',
                'verbose_name_plural': 'Produtos',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['company', 'code'], name='product_code_idx')],
            },
        ),
        migrations.CreateModel(
            name='StockLocation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True, verbose_name='Excluído em')),
                ('code', models.CharField(help_text='Identificador único na empresa (ex: DEP-01)', max_length=50, verbose_name='Código')),
                ('name', models.CharField(max_length=100, verbose_name='Nome')),
                ('description', models.TextField(blank=True, default='', verbose_name='Descrição')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativa')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='stock_locations', to='tradesman.company', verbose_name='Empresa')),
            ],
            options={
                'verbose_name': 'Localização',
                'verbose_name_plural': 'Localizações',
                'ordering': ['code'],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('deleted_at__isnull', True)), fields=('company', 'code'), name='unique_live_location_code'),
                ],
            },
        ),
        migrations.CreateModel(
            name='DocumentSequence',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('kind', models.CharField(choices=[('quote', 'Orçamento'), ('order', 'Ordem de Serviço')], max_length=20, verbose_name='Tipo de documento')),
                ('prefix', models.CharField(blank=True, default='', max_length=20, verbose_name='Prefixo')),
                ('next_number', models.PositiveIntegerField(default=1, verbose_name='Próximo número')),
                ('width', models.PositiveSmallIntegerField(default=6, verbose_name='Dígitos')),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='document_sequences', to='tradesman.company', verbose_name='Empresa')),
            ],
            options={
                'verbose_name': 'Sequência de documentos',
                'verbose_name_plural': 'Sequências de documentos',
                'constraints': [
                    models.UniqueConstraint(fields=('company', 'kind'), name='unique_document_sequence'),
                ],
            },
        ),
        migrations.CreateModel(
            name='StockItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=14, verbose_name='Quantidade')),
                ('reserved_quantity', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=14, verbose_name='Quantidade reservada')),
                ('unit_cost', models.DecimalField(decimal_places=4, default=Decimal('0'), max_digits=14, verbose_name='Custo unitário')),
                ('min_stock', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=14, verbose_name='Estoque mínimo')),
                ('max_stock', models.DecimalField(blank=True, decimal_places=3, max_digits=14, null=True, verbose_name='Estoque máximo')),
                ('last_movement_at', models.DateTimeField(blank=True, null=True, verbose_name='Última movimentação')),
                ('last_movement_type', models.CharField(blank=True, choices=MOVEMENT_TYPES, default='', max_length=20, verbose_name='Tipo da última movimentação')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='stock_items', to='tradesman.company', verbose_name='Empresa')),
                ('location', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='stock_items', to='tradesman.stocklocation', verbose_name='Localização')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='stock_items', to='tradesman.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Item de estoque',
                'verbose_name_plural': 'Itens de estoque',
                'permissions': [
                    ('stock_read', 'Consultar estoque'),
                    ('stock_write', 'Movimentar estoque'),
                    ('stock_adjust', 'Ajustar estoque'),
                    ('stock_transfer', 'Transferir estoque'),
                    ('stock_reserve', 'Reservar estoque'),
                    ('stock_manage_locations', 'Gerenciar localizações'),
                ],
                'indexes': [
                    models.Index(fields=['company', 'product'], name='stock_item_product_idx'),
                    models.Index(fields=['company', 'location'], name='stock_item_location_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('company', 'product', 'location'), name='unique_stock_item_coordinate'),
                    models.UniqueConstraint(condition=models.Q(('location__isnull', True)), fields=('company', 'product'), name='unique_unlocated_stock_item'),
                ],
            },
        ),
        migrations.CreateModel(
            name='StockMovement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type', models.CharField(choices=MOVEMENT_TYPES, db_index=True, max_length=20, verbose_name='Tipo')),
                ('quantity', models.DecimalField(decimal_places=3, max_digits=14, verbose_name='Quantidade')),
                ('unit_cost', models.DecimalField(blank=True, decimal_places=4, max_digits=14, null=True, verbose_name='Custo unitário')),
                ('total_cost', models.DecimalField(blank=True, decimal_places=4, max_digits=16, null=True, verbose_name='Custo total')),
                ('batch_number', models.CharField(blank=True, default='', max_length=50, verbose_name='Lote')),
                ('expiration_date', models.DateField(blank=True, null=True, verbose_name='Data de validade')),
                ('reason', models.CharField(blank=True, default='', max_length=255, verbose_name='Motivo')),
                ('reference', models.CharField(blank=True, default='', help_text='Ex: número da nota fiscal, pedido de compra', max_length=100, verbose_name='Referência')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Observações')),
                ('metadata', models.JSONField(blank=True, default=dict, verbose_name='Metadados')),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Data/Hora')),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='stock_movements', to='tradesman.company', verbose_name='Empresa')),
                ('destination_location', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='incoming_movements', to='tradesman.stocklocation', verbose_name='Localização de destino')),
                ('location', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='movements', to='tradesman.stocklocation', verbose_name='Localização')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='stock_movements', to='tradesman.product', verbose_name='Produto')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Movimentação',
                'verbose_name_plural': 'Movimentações',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['company', 'product', 'created_at'], name='movement_product_idx'),
                    models.Index(fields=['company', 'type'], name='movement_type_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='StockBatch',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('batch_number', models.CharField(max_length=50, verbose_name='Código do Lote')),
                ('quantity', models.DecimalField(decimal_places=3, max_digits=14, verbose_name='Quantidade')),
                ('unit_cost', models.DecimalField(blank=True, decimal_places=4, max_digits=14, null=True, verbose_name='Custo unitário')),
                ('expiration_date', models.DateField(blank=True, db_index=True, help_text='Último dia em que o lote pode ser vendido/utilizado', null=True, verbose_name='Data de Validade')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='stock_batches', to='tradesman.company', verbose_name='Empresa')),
                ('location', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='batches', to='tradesman.stocklocation', verbose_name='Localização')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='stock_batches', to='tradesman.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Lote',
                'verbose_name_plural': 'Lotes',
                'ordering': ['expiration_date', 'created_at'],
                'indexes': [
                    models.Index(fields=['company', 'product', 'location'], name='batch_coordinate_idx'),
                    models.Index(fields=['company', 'batch_number'], name='batch_number_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='StockReservation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.DecimalField(decimal_places=3, max_digits=14, verbose_name='Quantidade')),
                ('status', models.CharField(choices=[('ACTIVE', 'Ativa'), ('EXPIRED', 'Expirada'), ('CANCELLED', 'Cancelada'), ('FULFILLED', 'Atendida')], db_index=True, default='ACTIVE', max_length=20, verbose_name='Status')),
                ('reference_type', models.CharField(blank=True, choices=[('QUOTE', 'Orçamento'), ('ORDER', 'Ordem de Serviço'), ('OTHER', 'Outro')], default='', max_length=20, verbose_name='Tipo de Referência')),
                ('reference_id', models.CharField(blank=True, default='', max_length=64, verbose_name='ID da Referência')),
                ('reason', models.CharField(blank=True, default='', max_length=255, verbose_name='Motivo')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Observações')),
                ('expires_at', models.DateTimeField(blank=True, db_index=True, help_text='Se não atendida até esta data, será liberada automaticamente', null=True, verbose_name='Expira em')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='stock_reservations', to='tradesman.company', verbose_name='Empresa')),
                ('location', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='reservations', to='tradesman.stocklocation', verbose_name='Localização')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='stock_reservations', to='tradesman.product', verbose_name='Produto')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Reserva',
                'verbose_name_plural': 'Reservas',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'expires_at'], name='reservation_expiry_idx'),
                    models.Index(fields=['company', 'product', 'status'], name='reservation_product_idx'),
                    models.Index(fields=['reference_type', 'reference_id'], name='reservation_reference_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Quote',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True, verbose_name='Excluído em')),
                ('number', models.CharField(max_length=30, verbose_name='Número')),
                ('title', models.CharField(max_length=255, verbose_name='Título')),
                ('description', models.TextField(blank=True, default='', verbose_name='Descrição')),
                ('payment_terms', models.TextField(blank=True, default='', verbose_name='Condições de pagamento')),
                ('observations', models.TextField(blank=True, default='', verbose_name='Observações')),
                ('discount', money('Desconto')),
                ('subtotal', money('Subtotal')),
                ('items_discount', money('Descontos dos itens')),
                ('discount_value', money('Valor do desconto')),
                ('total', money('Total')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('status', models.CharField(choices=[('DRAFT', 'Rascunho'), ('SENT', 'Enviado'), ('APPROVED', 'Aprovado'), ('REJECTED', 'Rejeitado'), ('EXPIRED', 'Expirado'), ('CONVERTED', 'Convertido')], db_index=True, default='DRAFT', max_length=20, verbose_name='Status')),
                ('discount_type', models.CharField(choices=DISCOUNT_TYPES, default='PERCENTAGE', max_length=20, verbose_name='Tipo de desconto')),
                ('valid_until', models.DateField(verbose_name='Válido até')),
                ('delivery_terms', models.TextField(blank=True, default='', verbose_name='Condições de entrega')),
                ('sent_at', models.DateTimeField(blank=True, null=True, verbose_name='Enviado em')),
                ('approved_at', models.DateTimeField(blank=True, null=True, verbose_name='Aprovado em')),
                ('rejected_at', models.DateTimeField(blank=True, null=True, verbose_name='Rejeitado em')),
                ('converted_at', models.DateTimeField(blank=True, null=True, verbose_name='Convertido em')),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='quotes', to='tradesman.company', verbose_name='Empresa')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Criado por')),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='quotes', to='tradesman.customer', verbose_name='Cliente')),
            ],
            options={
                'verbose_name': 'Orçamento',
                'verbose_name_plural': 'Orçamentos',
                'ordering': ['-created_at'],
                'permissions': [
                    ('quotes_create', 'Criar orçamentos'),
                    ('quotes_read', 'Consultar orçamentos'),
                    ('quotes_update', 'Editar orçamentos'),
                    ('quotes_delete', 'Excluir orçamentos'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('company', 'number'), name='unique_quote_number'),
                ],
            },
        ),
        migrations.CreateModel(
            name='QuoteItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.DecimalField(decimal_places=3, max_digits=14, verbose_name='Quantidade')),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=14, verbose_name='Preço unitário')),
                ('discount', money('Desconto')),
                ('subtotal', money('Subtotal')),
                ('discount_value', money('Valor do desconto')),
                ('total', money('Total')),
                ('observations', models.TextField(blank=True, default='', verbose_name='Observações')),
                ('sort_order', models.PositiveIntegerField(default=0, verbose_name='Ordem')),
                ('discount_type', models.CharField(choices=DISCOUNT_TYPES, default='PERCENTAGE', max_length=20, verbose_name='Tipo de desconto')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='tradesman.product', verbose_name='Produto')),
                ('quote', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='tradesman.quote', verbose_name='Orçamento')),
            ],
            options={
                'verbose_name': 'Item do orçamento',
                'verbose_name_plural': 'Itens do orçamento',
                'ordering': ['sort_order', 'id'],
            },
        ),
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True, verbose_name='Excluído em')),
                ('number', models.CharField(max_length=30, verbose_name='Número')),
                ('title', models.CharField(max_length=255, verbose_name='Título')),
                ('description', models.TextField(blank=True, default='', verbose_name='Descrição')),
                ('payment_terms', models.TextField(blank=True, default='', verbose_name='Condições de pagamento')),
                ('observations', models.TextField(blank=True, default='', verbose_name='Observações')),
                ('discount', money('Desconto')),
                ('subtotal', money('Subtotal')),
                ('items_discount', money('Descontos dos itens')),
                ('discount_value', money('Valor do desconto')),
                ('total', money('Total')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('status', models.CharField(choices=[('PENDING', 'Pendente'), ('IN_PROGRESS', 'Em andamento'), ('PAUSED', 'Pausada'), ('COMPLETED', 'Concluída'), ('CANCELLED', 'Cancelada')], db_index=True, default='PENDING', max_length=20, verbose_name='Status')),
                ('priority', models.CharField(choices=[('LOW', 'Baixa'), ('MEDIUM', 'Média'), ('HIGH', 'Alta'), ('URGENT', 'Urgente')], default='MEDIUM', max_length=10, verbose_name='Prioridade')),
                ('discount_type', models.CharField(choices=DISCOUNT_TYPES, default='FIXED', max_length=20, verbose_name='Tipo de desconto')),
                ('expected_start_date', models.DateTimeField(blank=True, null=True, verbose_name='Início previsto')),
                ('expected_end_date', models.DateTimeField(blank=True, null=True, verbose_name='Fim previsto')),
                ('actual_start_date', models.DateTimeField(blank=True, null=True, verbose_name='Início real')),
                ('actual_end_date', models.DateTimeField(blank=True, null=True, verbose_name='Fim real')),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='orders', to='tradesman.company', verbose_name='Empresa')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Criado por')),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='tradesman.customer', verbose_name='Cliente')),
                ('quote', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='tradesman.quote', verbose_name='Orçamento de origem')),
            ],
            options={
                'verbose_name': 'Ordem de Serviço',
                'verbose_name_plural': 'Ordens de Serviço',
                'ordering': ['-created_at'],
                'permissions': [
                    ('orders_create', 'Criar ordens de serviço'),
                    ('orders_read', 'Consultar ordens de serviço'),
                    ('orders_update', 'Editar ordens de serviço'),
                    ('orders_delete', 'Excluir ordens de serviço'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('company', 'number'), name='unique_order_number'),
                ],
            },
        ),
        migrations.CreateModel(
            name='OrderItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.DecimalField(decimal_places=3, max_digits=14, verbose_name='Quantidade')),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=14, verbose_name='Preço unitário')),
                ('discount', money('Desconto')),
                ('subtotal', money('Subtotal')),
                ('discount_value', money('Valor do desconto')),
                ('total', money('Total')),
                ('observations', models.TextField(blank=True, default='', verbose_name='Observações')),
                ('sort_order', models.PositiveIntegerField(default=0, verbose_name='Ordem')),
                ('discount_type', models.CharField(choices=DISCOUNT_TYPES, default='FIXED', max_length=20, verbose_name='Tipo de desconto')),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='tradesman.order', verbose_name='Ordem de Serviço')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='tradesman.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Item da ordem',
                'verbose_name_plural': 'Itens da ordem',
                'ordering': ['sort_order', 'id'],
            },
        ),
    ]
