"""Forms for the feedback blueprint."""

from wtforms import IntegerField, SelectField, TextAreaField
from wtforms.validators import DataRequired, NumberRange, Optional

from tourneyhub.core.constants import FEEDBACK_TYPES
from tourneyhub.core.forms import ApiForm, strip_value


class FeedbackForm(ApiForm):
    """Form for sending feedback about the app."""

    type = SelectField(
        "Type",
        choices=[(t, t.capitalize()) for t in FEEDBACK_TYPES],
        default="general",
        validate_choice=True,
    )
    rating = IntegerField(
        "Rating",
        default=5,
        validators=[Optional(), NumberRange(min=1, max=5)],
    )
    message = TextAreaField(
        "Feedback",
        filters=[strip_value],
        validators=[
            DataRequired(message="Please write your feedback before submitting.")
        ],
    )
