"""Forms for the wallet blueprint."""

from flask_wtf.file import FileAllowed, FileField
from wtforms import IntegerField, StringField
from wtforms.validators import DataRequired, InputRequired, NumberRange, Optional, URL

from tourneyhub.core.forms import ApiForm, strip_value, whole_number


class DepositForm(ApiForm):
    """Form for a deposit request: an amount and a payment proof."""

    amount = IntegerField(
        "Amount",
        validators=[
            InputRequired(message="Please enter a valid amount"),
            whole_number("Please enter a valid amount"),
            NumberRange(min=1, message="Please enter a valid amount"),
        ],
    )
    proof = FileField(
        "Payment Proof",
        validators=[
            Optional(),
            FileAllowed(["jpg", "jpeg", "png", "webp"], "Images only!"),
        ],
    )
    proofUrl = StringField(
        "Payment Proof URL",
        filters=[strip_value],
        validators=[Optional(), URL(message="Please upload payment proof")],
    )


class WithdrawForm(ApiForm):
    """Form for a withdrawal request."""

    amount = IntegerField(
        "Amount",
        validators=[
            InputRequired(message="Please enter a valid amount"),
            whole_number("Please enter a valid amount"),
        ],
    )
    accountNumber = StringField(
        "Account Number",
        filters=[strip_value],
        validators=[DataRequired(message="Please enter your account number")],
    )
    accountType = StringField(
        "Account Type",
        filters=[strip_value],
        validators=[
            DataRequired(message="Please enter account type (EasyPaisa/JazzCash)")
        ],
    )
    accountName = StringField(
        "Account Holder Name",
        filters=[strip_value],
        validators=[DataRequired(message="Please enter account holder name")],
    )
