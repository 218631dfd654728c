"""Utility functions for the application."""

import smtplib

from flask import current_app, jsonify, render_template
from flask_mail import Message

from .core.constants import SMTP_AUTH_ERROR_CODE
from .extensions import mail


class EmailError(Exception):
    """Base class for email errors."""

    pass


def send_email(to, subject, template, **kwargs):
    """Send an email to a recipient.

    Raises:
        EmailError: If sending the email fails.
    """
    msg = Message(
        subject,
        recipients=[to],
        html=render_template(template, **kwargs),
        sender=current_app.config["MAIL_DEFAULT_SENDER"],
    )
    try:
        mail.send(msg)
    except smtplib.SMTPAuthenticationError as e:
        if e.smtp_code == SMTP_AUTH_ERROR_CODE:
            raise EmailError(
                "Authentication failed. Google requires you to use an App Password. "
                "Please verify your MAIL_USERNAME and MAIL_PASSWORD settings."
            ) from e
        raise EmailError(f"SMTP Authentication failed: {e}") from e
    except Exception as e:
        raise EmailError(f"Failed to send email: {e}") from e


def form_error_response(form):
    """Build a 400 JSON response from a failed form validation."""
    errors = {name: messages for name, messages in form.errors.items() if messages}
    first = next(iter(errors.values()), ["Validation failed."])[0]
    return jsonify({"error": first, "errors": errors}), 400


def sanitize_env(value, strip_spaces=False):
    """Strip surrounding quotes (and optionally spaces) from an env value."""
    if value is None:
        return None
    value = value.strip().strip('"').strip("'")
    if strip_spaces:
        value = value.replace(" ", "")
    return value
