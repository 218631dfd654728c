"""Upload of deposit payment proofs to Cloudinary."""

from __future__ import annotations

import time
from typing import Any

import requests
from werkzeug.utils import secure_filename

from tourneyhub.core.constants import CLOUDINARY_UPLOAD_URL, UPLOAD_TIMEOUT_SECONDS
from tourneyhub.errors import UploadError


def _error_message(response: requests.Response) -> str:
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"HTTP {response.status_code}"


def upload_proof(
    file: Any,
    cloud_name: str | None,
    upload_preset: str | None,
    timeout: int = UPLOAD_TIMEOUT_SECONDS,
) -> str:
    """Upload an image with an unsigned preset and return its ``secure_url``.

    Raises:
        UploadError: If uploads are not configured or the upload fails.
    """
    if not cloud_name or not upload_preset:
        raise UploadError("Payment proof uploads are not configured.")

    filename = secure_filename(getattr(file, "filename", None) or "") or (
        f"proof_{int(time.time() * 1000)}.jpg"
    )
    mimetype = getattr(file, "mimetype", None) or "image/jpeg"
    stream = getattr(file, "stream", file)

    try:
        response = requests.post(
            CLOUDINARY_UPLOAD_URL.format(cloud_name=cloud_name),
            files={"file": (filename, stream, mimetype)},
            data={"upload_preset": upload_preset},
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise UploadError(f"Failed to upload payment proof: {e}") from e

    if not response.ok:
        raise UploadError(f"Failed to upload payment proof: {_error_message(response)}")

    try:
        secure_url = response.json().get("secure_url")
    except ValueError:
        secure_url = None
    if not secure_url:
        raise UploadError("Failed to upload payment proof: no URL returned.")
    return str(secure_url)
