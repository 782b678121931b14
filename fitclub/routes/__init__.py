from flask import Blueprint, jsonify

from fitclub.utils.timeutils import isoformat, utcnow

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "timestamp": isoformat(utcnow())})


def register_blueprints(app):
    from .auth import auth_bp
    from .classes import classes_bp
    from .gyms import gyms_bp
    from .memberships import memberships_bp
    from .progress import goals_bp, metrics_bp
    from .workouts import workouts_bp

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(gyms_bp, url_prefix="/api/gyms")
    app.register_blueprint(memberships_bp, url_prefix="/api/memberships")
    app.register_blueprint(workouts_bp, url_prefix="/api/workouts")
    app.register_blueprint(classes_bp, url_prefix="/api/classes")
    app.register_blueprint(goals_bp, url_prefix="/api/goals")
    app.register_blueprint(metrics_bp, url_prefix="/api/metrics")
