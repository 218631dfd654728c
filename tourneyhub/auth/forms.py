"""Forms for the auth blueprint."""

from wtforms import PasswordField, StringField
from wtforms.validators import DataRequired, Email, EqualTo, Length, Regexp

from tourneyhub.core.forms import ApiForm, strip_value


class RegisterForm(ApiForm):
    """Registration form."""

    email = StringField(
        "Email",
        filters=[strip_value],
        validators=[
            DataRequired(message="All fields are required."),
            Email(message="Please enter a valid email address."),
        ],
    )
    password = PasswordField(
        "Password",
        validators=[
            DataRequired(message="All fields are required."),
            Length(min=6, message="Password must be at least 6 characters."),
            EqualTo("confirmPassword", message="Passwords do not match."),
        ],
    )
    confirmPassword = PasswordField(
        "Confirm Password",
        validators=[DataRequired(message="All fields are required.")],
    )
    inGameName = StringField(
        "In-Game Name",
        filters=[strip_value],
        validators=[DataRequired(message="All fields are required.")],
    )
    inGameUID = StringField(
        "In-Game UID",
        filters=[strip_value],
        validators=[
            DataRequired(message="All fields are required."),
            Regexp(r"^\d+$", message="In-Game UID must be numeric."),
        ],
    )
    phoneNumber = StringField(
        "Phone Number",
        filters=[strip_value],
        validators=[
            DataRequired(message="All fields are required."),
            Regexp(r"^[0-9]{10,15}$", message="Please enter a valid phone number."),
        ],
    )
