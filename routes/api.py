from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from routes.tools import current_what_if_entries, read_shield_args
from services.courses import stats_for_user
from services.what_if import simulate

api_bp = Blueprint("api", __name__, url_prefix="/api")


@api_bp.route("/stats")
@login_required
def stats():
    records, result = stats_for_user(current_user)
    payload = result.to_dict()
    payload["course_count"] = len(records)
    payload["total_credits_needed"] = current_user.total_credits_needed
    return jsonify(payload)


@api_bp.route("/what-if")
@login_required
def what_if():
    records, real = stats_for_user(current_user)
    entries = current_what_if_entries()
    simulated = simulate(records, entries, current_user.total_credits_needed)
    return jsonify(
        {
            "entries": [{"grade": e.grade, "credits": e.credits, "name": e.name} for e in entries],
            "average": real.average,
            "simulated_average": simulated.average,
            "simulated": simulated.to_dict(),
        }
    )


@api_bp.route("/shield")
def shield():
    return jsonify(read_shield_args(request.args).to_dict())
