"""Forms for the auth blueprint."""

from flask_wtf import FlaskForm  # type: ignore
from wtforms import SubmitField


class DemoLoginForm(FlaskForm):
    """Button-only form that signs in with the demo account."""

    submit = SubmitField("Demo sign-in")
