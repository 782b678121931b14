from marshmallow import Schema, fields, validate

from fitclub.extensions import ma

DIFFICULTIES = ("beginner", "intermediate", "advanced")


class WorkoutExerciseSchema(Schema):
    exercise_id = fields.String(data_key="exerciseId", required=True)
    order_index = fields.Integer(data_key="orderIndex", required=True, validate=validate.Range(min=0))
    sets = fields.Integer(validate=validate.Range(min=1), allow_none=True)
    reps = fields.Integer(validate=validate.Range(min=1), allow_none=True)
    duration = fields.Integer(validate=validate.Range(min=1), allow_none=True)
    weight = fields.Float(validate=validate.Range(min=0), allow_none=True)
    rest_seconds = fields.Integer(data_key="restSeconds", validate=validate.Range(min=0), allow_none=True)
    notes = fields.String(allow_none=True)


class WorkoutCreateSchema(ma.Schema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=150))
    description = fields.String(allow_none=True)
    workout_type = fields.String(data_key="workoutType", allow_none=True)
    estimated_duration_minutes = fields.Float(
        data_key="estimatedDurationMinutes", required=True, validate=validate.Range(min=0, min_inclusive=False)
    )
    difficulty = fields.String(required=True, validate=validate.OneOf(DIFFICULTIES))
    target_muscles = fields.List(fields.String(), data_key="targetMuscles", load_default=list)
    exercises = fields.List(fields.Nested(WorkoutExerciseSchema), load_default=list)
    is_template = fields.Boolean(data_key="isTemplate", load_default=False)
    is_public = fields.Boolean(data_key="isPublic", load_default=False)


class WorkoutFilterSchema(ma.Schema):
    workout_type = fields.String(data_key="type", load_default=None)
    templates_only = fields.Boolean(data_key="templates", load_default=False)


class ExerciseFilterSchema(ma.Schema):
    exercise_type = fields.String(data_key="type", load_default=None)
    muscle_group = fields.String(data_key="muscleGroup", load_default=None)
    search = fields.String(load_default=None)


class SessionStartSchema(ma.Schema):
    workout_id = fields.String(data_key="workoutId", load_default=None)
    notes = fields.String(load_default=None)


class LogSetSchema(ma.Schema):
    exercise_id = fields.String(data_key="exerciseId", required=True, validate=validate.Length(min=1))
    set_number = fields.Integer(data_key="setNumber", required=True, validate=validate.Range(min=1))
    reps = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=0))
    weight = fields.Float(load_default=None, allow_none=True, validate=validate.Range(min=0))
    duration_seconds = fields.Float(data_key="durationSeconds", load_default=None, allow_none=True,
                                    validate=validate.Range(min=0))
    notes = fields.String(load_default=None, allow_none=True)


class SessionCompleteSchema(ma.Schema):
    notes = fields.String(load_default=None, allow_none=True)


class HistoryFilterSchema(ma.Schema):
    start_date = fields.Date(data_key="startDate", load_default=None)
    end_date = fields.Date(data_key="endDate", load_default=None)


workout_create_schema = WorkoutCreateSchema()
workout_filter_schema = WorkoutFilterSchema()
exercise_filter_schema = ExerciseFilterSchema()
session_start_schema = SessionStartSchema()
log_set_schema = LogSetSchema()
session_complete_schema = SessionCompleteSchema()
history_filter_schema = HistoryFilterSchema()
