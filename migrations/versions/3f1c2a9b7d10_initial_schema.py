"""Initial schema: profiles, gyms, memberships, classes, bookings, workouts, progress

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c2a9b7d10'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=150), nullable=False),
        sa.Column('avatar_url', sa.String(length=500)),
        sa.Column('phone', sa.String(length=40)),
        sa.Column('gender', sa.String(length=10)),
        sa.Column('date_of_birth', sa.Date()),
        sa.Column('height_cm', sa.Float()),
        sa.Column('fitness_level', sa.String(length=20)),
        sa.Column('fitness_goals', sa.JSON()),
        sa.Column('onboarding_completed', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("gender IN ('male','female','other')", name='ck_users_gender'),
        sa.CheckConstraint(
            "fitness_level IN ('beginner','intermediate','advanced')", name='ck_users_fitness_level'
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table(
        'gyms',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('slug', sa.String(length=150), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('country', sa.String(length=100), nullable=False),
        sa.Column('phone', sa.String(length=40)),
        sa.Column('email', sa.String(length=255)),
        sa.Column('latitude', sa.Float()),
        sa.Column('longitude', sa.Float()),
        sa.Column('description', sa.Text()),
        sa.Column('amenities', sa.JSON()),
        sa.Column('images', sa.JSON()),
        sa.Column('opening_hours', sa.JSON()),
        sa.Column('capacity', sa.Integer()),
        sa.Column('current_occupancy', sa.Integer()),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )
    op.create_index('ix_gyms_city', 'gyms', ['city'])
    op.create_index('ix_gyms_is_active', 'gyms', ['is_active'])

    op.create_table(
        'memberships',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('gym_id', sa.String(length=36), sa.ForeignKey('gyms.id'), nullable=False),
        sa.Column('home_gym_id', sa.String(length=36), sa.ForeignKey('gyms.id')),
        sa.Column('plan_type', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('monthly_fee', sa.Numeric(10, 2)),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('qr_code', sa.String(length=255)),
        sa.Column('access_all_locations', sa.Boolean(), nullable=False),
        sa.Column('auto_renew', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("plan_type IN ('basic','premium','vip')", name='ck_memberships_plan_type'),
        sa.CheckConstraint(
            "status IN ('active','paused','expired','cancelled')", name='ck_memberships_status'
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_memberships_user_id', 'memberships', ['user_id'])
    op.create_index('ix_memberships_status', 'memberships', ['status'])
    op.create_index('idx_memberships_user_status', 'memberships', ['user_id', 'status'])

    op.create_table(
        'check_ins',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('gym_id', sa.String(length=36), sa.ForeignKey('gyms.id'), nullable=False),
        sa.Column('membership_id', sa.String(length=36), sa.ForeignKey('memberships.id'), nullable=False),
        sa.Column('checked_in_at', sa.DateTime(), nullable=False),
        sa.Column('checked_out_at', sa.DateTime()),
        sa.Column('duration_minutes', sa.Integer()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_check_ins_user_id', 'check_ins', ['user_id'])
    op.create_index('ix_check_ins_checked_in_at', 'check_ins', ['checked_in_at'])
    op.create_index(
        'uq_check_ins_one_open_per_user', 'check_ins', ['user_id'], unique=True,
        postgresql_where=sa.text('checked_out_at IS NULL'),
        sqlite_where=sa.text('checked_out_at IS NULL'),
    )

    op.create_table(
        'classes',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('gym_id', sa.String(length=36), sa.ForeignKey('gyms.id'), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('max_capacity', sa.Integer(), nullable=False),
        sa.Column('difficulty', sa.String(length=20)),
        sa.Column('instructor_name', sa.String(length=150)),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_classes_gym_id', 'classes', ['gym_id'])
    op.create_index('ix_classes_category', 'classes', ['category'])

    op.create_table(
        'class_schedules',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('gym_id', sa.String(length=36), sa.ForeignKey('gyms.id'), nullable=False),
        sa.Column('class_id', sa.String(length=36), sa.ForeignKey('classes.id'), nullable=False),
        sa.Column('scheduled_at', sa.DateTime(), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('spots_remaining', sa.Integer(), nullable=False),
        sa.Column('is_cancelled', sa.Boolean(), nullable=False),
        sa.CheckConstraint('spots_remaining >= 0', name='ck_class_schedules_spots_non_negative'),
        sa.CheckConstraint('spots_remaining <= capacity', name='ck_class_schedules_spots_within_capacity'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_class_schedules_gym_id', 'class_schedules', ['gym_id'])
    op.create_index('ix_class_schedules_class_id', 'class_schedules', ['class_id'])
    op.create_index('ix_class_schedules_scheduled_at', 'class_schedules', ['scheduled_at'])

    op.create_table(
        'bookings',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('class_schedule_id', sa.String(length=36), sa.ForeignKey('class_schedules.id'), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('booked_at', sa.DateTime(), nullable=False),
        sa.Column('cancelled_at', sa.DateTime()),
        sa.CheckConstraint(
            "status IN ('confirmed','waitlist','cancelled','attended')", name='ck_bookings_status'
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_bookings_user_id', 'bookings', ['user_id'])
    op.create_index('ix_bookings_class_schedule_id', 'bookings', ['class_schedule_id'])
    op.create_index('idx_bookings_waitlist_order', 'bookings', ['class_schedule_id', 'status', 'booked_at'])
    op.create_index(
        'uq_bookings_one_active_per_user_schedule', 'bookings', ['user_id', 'class_schedule_id'], unique=True,
        postgresql_where=sa.text("status IN ('confirmed','waitlist')"),
        sqlite_where=sa.text("status IN ('confirmed','waitlist')"),
    )

    op.create_table(
        'exercises',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('exercise_type', sa.String(length=50), nullable=False),
        sa.Column('muscle_groups', sa.JSON()),
        sa.Column('equipment', sa.JSON()),
        sa.Column('difficulty', sa.String(length=20)),
        sa.Column('instructions', sa.JSON()),
        sa.Column('image_url', sa.String(length=500)),
        sa.Column('video_url', sa.String(length=500)),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_exercises_name', 'exercises', ['name'])

    op.create_table(
        'workouts',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('workout_type', sa.String(length=50)),
        sa.Column('estimated_duration_minutes', sa.Float(), nullable=False),
        sa.Column('difficulty', sa.String(length=20), nullable=False),
        sa.Column('target_muscles', sa.JSON()),
        sa.Column('exercises', sa.JSON()),
        sa.Column('is_template', sa.Boolean(), nullable=False),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "difficulty IN ('beginner','intermediate','advanced')", name='ck_workouts_difficulty'
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_workouts_user_id', 'workouts', ['user_id'])
    op.create_index('ix_workouts_is_public', 'workouts', ['is_public'])

    op.create_table(
        'workout_sessions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('workout_id', sa.String(length=36), sa.ForeignKey('workouts.id')),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('notes', sa.Text()),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('started_at', sa.DateTime(), nullable=False),
        sa.Column('completed_at', sa.DateTime()),
        sa.Column('duration_minutes', sa.Integer()),
        sa.Column('total_sets', sa.Integer()),
        sa.Column('total_reps', sa.Integer()),
        sa.Column('total_volume', sa.Float()),
        sa.CheckConstraint(
            "status IN ('in_progress','completed','cancelled')", name='ck_workout_sessions_status'
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_workout_sessions_user_id', 'workout_sessions', ['user_id'])
    op.create_index('ix_workout_sessions_completed_at', 'workout_sessions', ['completed_at'])
    op.create_index('idx_workout_sessions_user_completed', 'workout_sessions', ['user_id', 'completed_at'])
    op.create_index(
        'uq_workout_sessions_one_in_progress_per_user', 'workout_sessions', ['user_id'], unique=True,
        postgresql_where=sa.text("status = 'in_progress'"),
        sqlite_where=sa.text("status = 'in_progress'"),
    )

    op.create_table(
        'workout_logs',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('session_id', sa.String(length=36), sa.ForeignKey('workout_sessions.id'), nullable=False),
        sa.Column('exercise_id', sa.String(length=36), sa.ForeignKey('exercises.id'), nullable=False),
        sa.Column('set_number', sa.Integer(), nullable=False),
        sa.Column('reps', sa.Integer()),
        sa.Column('weight', sa.Float()),
        sa.Column('duration_seconds', sa.Float()),
        sa.Column('notes', sa.Text()),
        sa.Column('completed_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_workout_logs_session_id', 'workout_logs', ['session_id'])

    op.create_table(
        'goals',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('type', sa.String(length=30), nullable=False),
        sa.Column('target_value', sa.Float(), nullable=False),
        sa.Column('current_value', sa.Float(), nullable=False),
        sa.Column('unit', sa.String(length=20), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('target_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("status IN ('active','completed','abandoned')", name='ck_goals_status'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_goals_user_id', 'goals', ['user_id'])

    op.create_table(
        'body_metrics',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('recorded_at', sa.DateTime(), nullable=False),
        sa.Column('weight', sa.Float()),
        sa.Column('weight_unit', sa.String(length=10)),
        sa.Column('body_fat', sa.Float()),
        sa.Column('muscle_mass', sa.Float()),
        sa.Column('bmi', sa.Float()),
        sa.Column('measurements', sa.JSON()),
        sa.Column('notes', sa.String(length=500)),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_body_metrics_user_id', 'body_metrics', ['user_id'])
    op.create_index('ix_body_metrics_recorded_at', 'body_metrics', ['recorded_at'])
    op.create_index('idx_body_metrics_user_recorded', 'body_metrics', ['user_id', 'recorded_at'])


def downgrade():
    for table in (
        'body_metrics', 'goals', 'workout_logs', 'workout_sessions', 'workouts', 'exercises',
        'bookings', 'class_schedules', 'classes', 'check_ins', 'memberships', 'gyms', 'users',
    ):
        op.drop_table(table)
