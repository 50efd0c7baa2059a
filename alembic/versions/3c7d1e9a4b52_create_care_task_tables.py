"""create_care_task_tables

Revision ID: 3c7d1e9a4b52
Revises:
Create Date: 2026-10-17 09:12:44.218530

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision: str = '3c7d1e9a4b52'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

maintenance_level_enum = postgresql.ENUM('Low', 'Medium', 'High', name='maintenance_level_enum', create_type=False)
growth_rate_enum = postgresql.ENUM('Fast', 'Slow', name='growth_rate_enum', create_type=False)
climate_region_enum = postgresql.ENUM('Coastal', 'Mountains', 'Piedmont', name='climate_region_enum', create_type=False)
task_type_enum = postgresql.ENUM(
    'Water', 'Fertilize', 'Harvest', 'Prune', 'Inspect',
    'Mulch', 'Propagate', 'Transplant', 'Log', 'Weed',
    name='task_type_enum', create_type=False,
)


def upgrade() -> None:
    bind = op.get_bind()
    for enum in (maintenance_level_enum, growth_rate_enum, climate_region_enum, task_type_enum):
        enum.create(bind, checkfirst=True)

    op.create_table(
        'plants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('common_name', sa.String(length=200), nullable=False),
        sa.Column('scientific_name', sa.String(length=200), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('maintenance', maintenance_level_enum, nullable=True),
        sa.Column('growth_rate', growth_rate_enum, nullable=True),
        sa.Column('prefers_cool_season', sa.Boolean(), nullable=False),
        sa.Column('bloom_months', sa.JSON(), nullable=True),
        sa.Column('harvest_months', sa.JSON(), nullable=True),
        sa.Column('propagation_methods', sa.JSON(), nullable=True),
        sa.Column('problems', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_plants_common_name', 'plants', ['common_name'])
    op.create_index('ix_plants_scientific_name', 'plants', ['scientific_name'])

    op.create_table(
        'gardens',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('soil_texture', sa.String(length=50), nullable=True),
        sa.Column('elevation_ft', sa.Float(), nullable=True),
        sa.Column('urban_index', sa.Float(), nullable=True),
        sa.Column('maintenance', maintenance_level_enum, nullable=True),
        sa.Column('county', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'county_climates',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('county', sa.String(length=100), nullable=False),
        sa.Column('region', climate_region_enum, nullable=False),
        sa.Column('last_frost_doy', sa.Integer(), nullable=True),
        sa.Column('first_frost_doy', sa.Integer(), nullable=True),
        sa.Column('avg_annual_precip_mm', sa.Float(), nullable=True),
        sa.Column('usda_zone_min', sa.String(length=5), nullable=True),
        sa.Column('usda_zone_max', sa.String(length=5), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_county_climates_county', 'county_climates', ['county'], unique=True)

    op.create_table(
        'user_plants',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('garden_id', sa.Integer(), nullable=False),
        sa.Column('plant_id', sa.Integer(), nullable=False),
        sa.Column('nickname', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['garden_id'], ['gardens.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['plant_id'], ['plants.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_plants_garden_id', 'user_plants', ['garden_id'])
    op.create_index('ix_user_plants_plant_id', 'user_plants', ['plant_id'])

    op.create_table(
        'plant_tasks',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_plant_id', sa.String(length=36), nullable=False),
        sa.Column('task_type', task_type_enum, nullable=False),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_plant_id'], ['user_plants.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_plant_tasks_user_plant_id', 'plant_tasks', ['user_plant_id'])
    op.create_index('ix_plant_tasks_due_date', 'plant_tasks', ['due_date'])


def downgrade() -> None:
    op.drop_index('ix_plant_tasks_due_date', table_name='plant_tasks')
    op.drop_index('ix_plant_tasks_user_plant_id', table_name='plant_tasks')
    op.drop_table('plant_tasks')
    op.drop_index('ix_user_plants_plant_id', table_name='user_plants')
    op.drop_index('ix_user_plants_garden_id', table_name='user_plants')
    op.drop_table('user_plants')
    op.drop_index('ix_county_climates_county', table_name='county_climates')
    op.drop_table('county_climates')
    op.drop_table('gardens')
    op.drop_index('ix_plants_scientific_name', table_name='plants')
    op.drop_index('ix_plants_common_name', table_name='plants')
    op.drop_table('plants')

    bind = op.get_bind()
    for enum in (task_type_enum, climate_region_enum, growth_rate_enum, maintenance_level_enum):
        enum.drop(bind, checkfirst=True)
