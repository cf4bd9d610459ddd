"""add medical_records and system_config

Revision ID: 20261019_000000
Revises: 20261018_000000
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000000'
down_revision: Union[str, None] = '20261018_000000'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'medical_records',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('doctor_id', sa.Integer(), nullable=False),
        sa.Column('chief_complaint', sa.String(length=255), nullable=False),
        sa.Column('symptoms', sa.Text(), nullable=True),
        sa.Column('diagnosis', sa.Text(), nullable=True),
        sa.Column('treatment', sa.Text(), nullable=True),
        sa.Column('prescription', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('follow_up_date', sa.Date(), nullable=True),
        sa.Column('blood_pressure', sa.String(length=20), nullable=True),
        sa.Column('heart_rate', sa.Integer(), nullable=True),
        sa.Column('temperature', sa.Float(), nullable=True),
        sa.Column('weight', sa.Float(), nullable=True),
        sa.Column('height', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['patient_id'], ['patients.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['doctor_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_medical_records_id', 'medical_records', ['id'])
    op.create_index('idx_medical_records_patient', 'medical_records', ['patient_id'])
    op.create_index('idx_medical_records_created', 'medical_records', ['created_at'])

    # Single row keyed 'system'; no default row is inserted
    op.create_table(
        'system_config',
        sa.Column('id', sa.String(length=20), nullable=False),
        sa.Column('clinic_name', sa.String(length=255), nullable=False),
        sa.Column('clinic_address', sa.String(length=500), nullable=True),
        sa.Column('doctor_name', sa.String(length=255), nullable=False),
        sa.Column('doctor_specialty', sa.String(length=255), nullable=True),
        sa.Column('doctor_phone', sa.String(length=50), nullable=True),
        sa.Column('doctor_email', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    op.drop_table('system_config')

    op.drop_index('idx_medical_records_created', table_name='medical_records')
    op.drop_index('idx_medical_records_patient', table_name='medical_records')
    op.drop_index('ix_medical_records_id', table_name='medical_records')
    op.drop_table('medical_records')
