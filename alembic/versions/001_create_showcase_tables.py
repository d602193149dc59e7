"""Create showcase tables: vehicles, vehicle_photos, customer_inquiries

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None

PHOTO_SLOTS = (
    'front_corner', 'driver_side', 'rear_corner', 'passenger_side',
    'interior_front', 'interior_rear', 'damage', 'undercarriage', 'additional',
)


def upgrade() -> None:
    # Create vehicles table
    op.create_table(
        'vehicles',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('stock_number', sa.String(length=50), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('make', sa.String(length=50), nullable=False),
        sa.Column('model', sa.String(length=50), nullable=False),
        sa.Column('trim', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('mileage', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('price', sa.Float(), nullable=False, server_default='0'),
        sa.Column('exterior_color', sa.String(length=50), nullable=False, server_default=''),
        sa.Column('interior_color', sa.String(length=50), nullable=False, server_default=''),
        sa.Column('transmission', sa.String(length=50), nullable=False, server_default=''),
        sa.Column('engine', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('features', sa.JSON(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('status', sa.Enum('active', 'sold', 'removed', name='vehiclestatus'), nullable=False, server_default='active'),
        sa.Column('assigned_salesperson', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_vehicles_stock_number'), 'vehicles', ['stock_number'], unique=True)
    op.create_index(op.f('ix_vehicles_status'), 'vehicles', ['status'], unique=False)

    # Create vehicle_photos table
    op.create_table(
        'vehicle_photos',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('vehicle_id', sa.String(length=36), nullable=False),
        sa.Column('photo_type', sa.Enum(*PHOTO_SLOTS, name='photoslot'), nullable=False),
        sa.Column('photo_url', sa.String(length=1000), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['vehicle_id'], ['vehicles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_vehicle_photos_vehicle_id'), 'vehicle_photos', ['vehicle_id'], unique=False)
    op.create_index(op.f('ix_vehicle_photos_photo_type'), 'vehicle_photos', ['photo_type'], unique=False)

    # Create customer_inquiries table
    op.create_table(
        'customer_inquiries',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('vehicle_id', sa.String(length=36), nullable=True),
        sa.Column('customer_name', sa.String(length=120), nullable=False),
        sa.Column('customer_email', sa.String(length=255), nullable=False),
        sa.Column('customer_phone', sa.String(length=40), nullable=False, server_default=''),
        sa.Column('message', sa.Text(), nullable=False, server_default=''),
        sa.Column('assigned_salesperson', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['vehicle_id'], ['vehicles.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_customer_inquiries_vehicle_id'), 'customer_inquiries', ['vehicle_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_customer_inquiries_vehicle_id'), table_name='customer_inquiries')
    op.drop_table('customer_inquiries')
    op.drop_index(op.f('ix_vehicle_photos_photo_type'), table_name='vehicle_photos')
    op.drop_index(op.f('ix_vehicle_photos_vehicle_id'), table_name='vehicle_photos')
    op.drop_table('vehicle_photos')
    op.drop_index(op.f('ix_vehicles_status'), table_name='vehicles')
    op.drop_index(op.f('ix_vehicles_stock_number'), table_name='vehicles')
    op.drop_table('vehicles')

    # Drop enum types (PostgreSQL)
    sa.Enum(name='photoslot').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='vehiclestatus').drop(op.get_bind(), checkfirst=True)
