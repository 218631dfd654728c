"""Base form for the JSON API."""

from flask_wtf import FlaskForm
from wtforms.validators import ValidationError


class ApiForm(FlaskForm):
    """A form bound to JSON or multipart request bodies.

    Requests are authenticated with bearer ID tokens, not cookies, so the
    session-bound CSRF token is not used.
    """

    class Meta:
        csrf = False


def strip_value(value):
    """Coerce a submitted value to a trimmed string."""
    if value is None:
        return None
    return str(value).strip()


def whole_number(message):
    """Reject fractional or boolean JSON numbers that ``IntegerField`` would truncate."""

    def _whole_number(form, field):
        raw = field.raw_data[0] if field.raw_data else None
        if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
            raise ValidationError(message)

    return _whole_number
