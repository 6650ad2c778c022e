"""Forms for the profile blueprint."""

from flask_wtf import FlaskForm  # type: ignore
from wtforms import DateField, SelectField, StringField, SubmitField
from wtforms.validators import Email, Length, Optional, Regexp

from olympiad.constants import MAX_CLASS_NUMBER, MIN_CLASS_NUMBER

CLASS_CHOICES = [("", "Select class")] + [
    (str(i), f"Grade {i}") for i in range(MIN_CLASS_NUMBER, MAX_CLASS_NUMBER + 1)
]


class ProfileForm(FlaskForm):
    """Participant profile form.

    Every field is optional here; completeness is only enforced when
    registering for a tournament.
    """

    last_name = StringField("Last name *", validators=[Optional(), Length(max=100)])
    first_name = StringField("First name *", validators=[Optional(), Length(max=100)])
    middle_name = StringField(
        "Middle name *", validators=[Optional(), Length(max=100)]
    )
    birth_date = DateField("Date of birth *", validators=[Optional()])
    city = StringField("City *", validators=[Optional(), Length(max=100)])
    school = StringField("School *", validators=[Optional(), Length(max=200)])
    class_number = SelectField("Class *", choices=CLASS_CHOICES, default="")
    parent_name = StringField(
        "Parent full name *", validators=[Optional(), Length(max=200)]
    )
    teacher_name = StringField(
        "Mathematics teacher full name *", validators=[Optional(), Length(max=200)]
    )
    tutor_name = StringField(
        "Club teacher / tutor", validators=[Optional(), Length(max=200)]
    )
    phone = StringField("Phone", validators=[Optional(), Length(max=20)])
    email = StringField("Email", validators=[Optional(), Email()])
    telegram_username = StringField(
        "Telegram (@username)",
        validators=[
            Optional(),
            Regexp(
                r"^@?[A-Za-z0-9_]{5,32}$",
                message="Telegram username must be 5-32 letters, digits or underscores",
            ),
        ],
        render_kw={"placeholder": "@username"},
    )
    submit = SubmitField("Save profile")


class TournamentRegistrationForm(FlaskForm):
    """Button-only form for registering for a tournament."""

    submit = SubmitField("Register")
