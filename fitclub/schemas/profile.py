from marshmallow import fields, validate

from fitclub.extensions import ma

FITNESS_LEVELS = ("beginner", "intermediate", "advanced")
GENDERS = ("male", "female", "other")


class ProfileUpdateSchema(ma.Schema):
    full_name = fields.String(data_key="fullName", validate=validate.Length(min=2, max=150))
    avatar_url = fields.Url(data_key="avatarUrl", allow_none=True)
    phone = fields.String(validate=validate.Length(max=40), allow_none=True)
    gender = fields.String(validate=validate.OneOf(GENDERS), allow_none=True)
    date_of_birth = fields.Date(data_key="dateOfBirth", allow_none=True)
    height_cm = fields.Float(data_key="heightCm", validate=validate.Range(min=50, max=300), allow_none=True)
    fitness_level = fields.String(data_key="fitnessLevel", validate=validate.OneOf(FITNESS_LEVELS), allow_none=True)
    fitness_goals = fields.List(fields.String(), data_key="fitnessGoals")


class OnboardingSchema(ProfileUpdateSchema):
    fitness_level = fields.String(data_key="fitnessLevel", required=True, validate=validate.OneOf(FITNESS_LEVELS))
    fitness_goals = fields.List(fields.String(), data_key="fitnessGoals", required=True,
                                validate=validate.Length(min=1))


profile_update_schema = ProfileUpdateSchema()
onboarding_schema = OnboardingSchema()
