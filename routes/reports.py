import io
import logging

from flask import current_app, flash, redirect, send_file, url_for
from flask_login import current_user, login_required

from . import main_bp
from services.courses import stats_for_user
from services.report import build_report_pdf, report_filename

logger = logging.getLogger(__name__)


@main_bp.route("/report.pdf")
@login_required
def download_report():
    records, stats = stats_for_user(current_user)
    try:
        pdf = build_report_pdf(
            current_user,
            records,
            stats,
            font_path=current_app.config.get("REPORT_FONT_PATH"),
        )
    except Exception as e:
        logger.error(f"PDF generation failed for user {current_user.id}: {e}")
        flash("אירעה שגיאה ביצירת ה-PDF. אנא נסה שנית.", "error")
        return redirect(url_for("main.dashboard"))

    return send_file(
        io.BytesIO(pdf),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=report_filename(current_user.display_name),
    )
