"""initial schema

Revision ID: 3f1c2b7d9e01
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c2b7d9e01'
down_revision = None
branch_labels = None
depends_on = None

ACTIVE = sa.text('archived_on IS NULL')

TABLES = (
    'product_roots',
    'product_images',
    'products',
    'product_options',
    'product_option_values',
    'product_variant_bridge',
    'discounts',
    'webhooks',
    'users',
)


def _housekeeping():
    return [
        sa.Column('created_on', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_on', sa.DateTime(timezone=True), nullable=True),
        sa.Column('archived_on', sa.DateTime(timezone=True), nullable=True),
    ]


def _dimensions():
    return [
        sa.Column(name, sa.Float(), nullable=False)
        for name in (
            'product_weight', 'product_height', 'product_width', 'product_length',
            'package_weight', 'package_height', 'package_width', 'package_length',
        )
    ]


def _money(name):
    return sa.Column(name, sa.Numeric(12, 2), nullable=False)


def _active_unique(name, table, columns):
    op.create_index(
        name, table, columns, unique=True,
        postgresql_where=ACTIVE, sqlite_where=ACTIVE,
    )


def upgrade():
    op.create_table(
        'product_roots',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('subtitle', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('sku_prefix', sa.String(length=50), nullable=False),
        sa.Column('manufacturer', sa.String(length=255), nullable=False),
        sa.Column('brand', sa.String(length=255), nullable=False),
        sa.Column('taxable', sa.Boolean(), nullable=False),
        _money('cost'),
        sa.Column('quantity_per_package', sa.Integer(), nullable=False),
        sa.Column('primary_image_id', sa.Integer(), nullable=True),
        sa.Column('available_on', sa.DateTime(timezone=True), nullable=False),
        *_dimensions(),
        *_housekeeping(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_product_roots_sku_prefix', 'product_roots', ['sku_prefix'])
    _active_unique('uq_product_roots_active_sku_prefix', 'product_roots', ['sku_prefix'])

    op.create_table(
        'product_images',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_root_id', sa.Integer(), nullable=False),
        sa.Column('thumbnail_url', sa.String(length=1024), nullable=False),
        sa.Column('main_url', sa.String(length=1024), nullable=False),
        sa.Column('original_url', sa.String(length=1024), nullable=False),
        sa.Column('source_url', sa.String(length=1024), nullable=False),
        *_housekeeping(),
        sa.ForeignKeyConstraint(['product_root_id'], ['product_roots.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_product_images_product_root_id', 'product_images', ['product_root_id'])

    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_root_id', sa.Integer(), nullable=False),
        sa.Column('primary_image_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('subtitle', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('option_summary', sa.Text(), nullable=False),
        sa.Column('sku', sa.String(length=255), nullable=False),
        sa.Column('upc', sa.String(length=50), nullable=False),
        sa.Column('manufacturer', sa.String(length=255), nullable=False),
        sa.Column('brand', sa.String(length=255), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('quantity_per_package', sa.Integer(), nullable=False),
        sa.Column('taxable', sa.Boolean(), nullable=False),
        _money('price'),
        sa.Column('on_sale', sa.Boolean(), nullable=False),
        _money('sale_price'),
        _money('cost'),
        sa.Column('available_on', sa.DateTime(timezone=True), nullable=False),
        *_dimensions(),
        *_housekeeping(),
        sa.ForeignKeyConstraint(['product_root_id'], ['product_roots.id']),
        sa.ForeignKeyConstraint(['primary_image_id'], ['product_images.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_products_product_root_id', 'products', ['product_root_id'])
    op.create_index('ix_products_sku', 'products', ['sku'])
    _active_unique('uq_products_active_sku', 'products', ['sku'])

    op.create_table(
        'product_options',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_root_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        *_housekeeping(),
        sa.ForeignKeyConstraint(['product_root_id'], ['product_roots.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_product_options_product_root_id', 'product_options', ['product_root_id'])
    _active_unique(
        'uq_product_options_active_name', 'product_options', ['product_root_id', 'name']
    )

    op.create_table(
        'product_option_values',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_option_id', sa.Integer(), nullable=False),
        sa.Column('value', sa.String(length=50), nullable=False),
        *_housekeeping(),
        sa.ForeignKeyConstraint(['product_option_id'], ['product_options.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_product_option_values_product_option_id',
        'product_option_values',
        ['product_option_id'],
    )
    _active_unique(
        'uq_product_option_values_active_value',
        'product_option_values',
        ['product_option_id', 'value'],
    )

    op.create_table(
        'product_variant_bridge',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('product_option_value_id', sa.Integer(), nullable=False),
        *_housekeeping(),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.ForeignKeyConstraint(['product_option_value_id'], ['product_option_values.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_product_variant_bridge_product_id', 'product_variant_bridge', ['product_id'])
    op.create_index(
        'ix_product_variant_bridge_product_option_value_id',
        'product_variant_bridge',
        ['product_option_value_id'],
    )

    op.create_table(
        'discounts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('discount_type', sa.String(length=20), nullable=False),
        _money('amount'),
        sa.Column('starts_on', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_on', sa.DateTime(timezone=True), nullable=True),
        sa.Column('requires_code', sa.Boolean(), nullable=False),
        sa.Column('code', sa.String(length=100), nullable=False),
        sa.Column('limited_use', sa.Boolean(), nullable=False),
        sa.Column('number_of_uses', sa.Integer(), nullable=False),
        sa.Column('login_required', sa.Boolean(), nullable=False),
        *_housekeeping(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'webhooks',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('url', sa.String(length=1024), nullable=False),
        sa.Column('event_type', sa.String(length=50), nullable=False),
        sa.Column('content_type', sa.String(length=50), nullable=False),
        *_housekeeping(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_webhooks_event_type', 'webhooks', ['event_type'])

    op.create_table(
        'webhook_execution_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('webhook_id', sa.Integer(), nullable=False),
        sa.Column('status_code', sa.Integer(), nullable=False),
        sa.Column('succeeded', sa.Boolean(), nullable=False),
        sa.Column('executed_on', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['webhook_id'], ['webhooks.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_webhook_execution_logs_webhook_id', 'webhook_execution_logs', ['webhook_id']
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False),
        sa.Column('password_last_changed_on', sa.DateTime(timezone=True), nullable=True),
        *_housekeeping(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_username', 'users', ['username'])
    _active_unique('uq_users_active_username', 'users', ['username'])

    for table in TABLES:
        op.create_index(f'ix_{table}_archived_on', table, ['archived_on'])


def downgrade():
    op.drop_table('users')
    op.drop_table('webhook_execution_logs')
    op.drop_table('webhooks')
    op.drop_table('discounts')
    op.drop_table('product_variant_bridge')
    op.drop_table('product_option_values')
    op.drop_table('product_options')
    op.drop_table('products')
    op.drop_table('product_images')
    op.drop_table('product_roots')
