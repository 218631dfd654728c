"""Forms for the user blueprint."""

from wtforms import StringField
from wtforms.validators import DataRequired

from tourneyhub.core.forms import ApiForm, strip_value


class GameDetailsForm(ApiForm):
    """Form for editing the in-game name and UID."""

    inGameName = StringField(
        "In-Game Name",
        filters=[strip_value],
        validators=[DataRequired(message="Please enter your In-Game Name")],
    )
    inGameUID = StringField(
        "In-Game UID",
        filters=[strip_value],
        validators=[DataRequired(message="Please enter your UID")],
    )
