import base64
import binascii
import logging

from flask import current_app, render_template, request, flash, Response
from flask_login import login_required
from werkzeug.exceptions import RequestEntityTooLarge

from . import main_bp
from services.image_editor import (
    ALLOWED_MIME_TYPES,
    EDITED_IMAGE_FILENAME,
    ImageEditError,
    edit_image,
    make_client,
)

logger = logging.getLogger(__name__)

TOO_LARGE_MESSAGE = "הקובץ גדול מדי. אנא העלה תמונה עד 5MB."


def _render(result=None, prompt="", status=200):
    return render_template(
        "studio.html",
        result=result,
        prompt=prompt,
        active_tab="ai",
    ), status


@main_bp.route("/studio", methods=["GET", "POST"])
@login_required
def studio():
    if request.method == "GET":
        return _render()

    try:
        upload = request.files.get("image")
        prompt = (request.form.get("prompt") or "").strip()
    except RequestEntityTooLarge:
        flash(TOO_LARGE_MESSAGE, "error")
        return _render(status=413)

    if upload is None or not upload.filename or not prompt:
        flash("אנא העלה תמונה והכנס הנחיה לעריכה.", "error")
        return _render(prompt=prompt, status=400)

    image_bytes = upload.read()
    if len(image_bytes) > current_app.config["MAX_IMAGE_BYTES"]:
        flash(TOO_LARGE_MESSAGE, "error")
        return _render(prompt=prompt, status=400)

    mime_type = upload.mimetype
    if mime_type not in ALLOWED_MIME_TYPES:
        flash("סוג קובץ לא נתמך. ניתן להעלות PNG, JPEG או WEBP.", "error")
        return _render(prompt=prompt, status=400)

    try:
        client = make_client(current_app.config.get("OPENAI_API_KEY"))
        result = edit_image(
            client,
            image_bytes,
            mime_type,
            prompt,
            model=current_app.config["IMAGE_MODEL"],
        )
    except ImageEditError as e:
        logger.error(f"Studio edit failed: {e}")
        flash("אירעה שגיאה בעיבוד התמונה. נסה שנית מאוחר יותר.", "error")
        return _render(prompt=prompt, status=502)

    if not result.ok:
        if result.message:
            flash(f'המודל החזיר טקסט במקום תמונה: "{result.message}"', "error")
        else:
            flash("לא התקבלה תמונה מהמודל. אנא נסה שנית עם הנחיה שונה.", "error")

    return _render(result=result, prompt=prompt)


@main_bp.route("/studio/download", methods=["POST"])
@login_required
def download_edited_image():
    # the edited image round-trips through the page, nothing is stored server side
    try:
        payload = base64.b64decode(request.form.get("image_b64") or "", validate=True)
    except (binascii.Error, ValueError):
        payload = b""
    if not payload:
        flash("אין תמונה להורדה.", "error")
        return _render(status=400)

    return Response(
        payload,
        mimetype="image/png",
        headers={"Content-Disposition": f"attachment; filename={EDITED_IMAGE_FILENAME}"},
    )
