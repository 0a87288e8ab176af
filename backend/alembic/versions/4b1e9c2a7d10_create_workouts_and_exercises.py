"""create workouts + exercises

Revision ID: 4b1e9c2a7d10
Revises:
Create Date: 2026-10-17 09:12:40.118204

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1e9c2a7d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

WORKOUT_TYPES = ('UPPER', 'LOWER', 'PUSH', 'PULL', 'LEGS', 'FULL_BODY')


def upgrade() -> None:
    # 1) workouts table; type is a checked string, not a native enum
    op.create_table(
        'workouts',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('workout_type', sa.Enum(*WORKOUT_TYPES, name='workout_type', native_enum=False,
                                          create_constraint=True, length=16), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('raw_text', sa.Text(), nullable=False),
        sa.Column('phone_number', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_workouts_date', 'workouts', ['date'])

    # 2) exercises table
    op.create_table(
        'exercises',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('workout_id', sa.String(length=36), sa.ForeignKey('workouts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('exercise_name', sa.String(length=200), nullable=False),
        sa.Column('weight', sa.Float(), nullable=True),
        sa.Column('reps', sa.Integer(), nullable=True),
        sa.Column('sets', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('order_in_workout', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('sets >= 1', name='ck_exercises_sets_positive'),
        sa.CheckConstraint('weight IS NULL OR weight > 0', name='ck_exercises_weight_positive'),
        sa.CheckConstraint('reps IS NULL OR reps > 0', name='ck_exercises_reps_positive'),
        sa.UniqueConstraint('workout_id', 'order_in_workout', name='uq_exercises_workout_order'),
    )
    op.create_index('ix_exercises_workout_id', 'exercises', ['workout_id'])
    op.create_index('ix_exercises_exercise_name', 'exercises', ['exercise_name'])


def downgrade() -> None:
    # drop child table first
    op.drop_index('ix_exercises_exercise_name', table_name='exercises')
    op.drop_index('ix_exercises_workout_id', table_name='exercises')
    op.drop_table('exercises')

    op.drop_index('ix_workouts_date', table_name='workouts')
    op.drop_table('workouts')
