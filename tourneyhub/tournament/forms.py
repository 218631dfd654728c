"""Forms for the tournament blueprint."""

from wtforms import IntegerField, StringField
from wtforms.validators import DataRequired, InputRequired, NumberRange, Optional

from tourneyhub.core.forms import ApiForm, strip_value, whole_number


class BookSlotForm(ApiForm):
    """Form for booking a slot."""

    slotNumber = IntegerField(
        "Slot",
        validators=[
            InputRequired(message="Please select a slot"),
            whole_number("Please select a slot"),
            NumberRange(min=1, message="Please select a slot"),
        ],
    )
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


class RoomReleaseForm(ApiForm):
    """Form for publishing a tournament's room ID and password."""

    roomId = StringField("Room ID", filters=[strip_value], validators=[Optional()])
    password = StringField("Password", filters=[strip_value], validators=[Optional()])

    def validate(self, extra_validators=None):
        """Require at least one of the two fields."""
        if not super().validate(extra_validators):
            return False
        if not self.roomId.data and not self.password.data:
            self.roomId.errors = ["Room ID or password is required."]
            return False
        return True
