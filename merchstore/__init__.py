from flask import Flask, jsonify
from werkzeug.exceptions import MethodNotAllowed

from .config import Config
from .extensions import db, cors, migrate
from .store import OrderStore
from .utils.api import api_error


def create_app(overrides: dict | None = None):
    app = Flask(__name__, instance_relative_config=True)

    app.config.from_object(Config)
    Config.init_app(app)
    if overrides:
        app.config.update(overrides)

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    # Register blueprints
    from .order import bp as order_bp; app.register_blueprint(order_bp)
    from .admin import bp as admin_bp; app.register_blueprint(admin_bp)

    from .cli import register_cli
    register_cli(app)

    @app.errorhandler(MethodNotAllowed)
    def method_not_allowed(e):
        r = jsonify(api_error("method not allowed"))
        r.status_code = 405
        allowed = sorted(m for m in (e.valid_methods or []) if m not in ("HEAD", "OPTIONS"))
        r.headers["Allow"] = ", ".join(allowed)
        return r

    @app.get("/")
    def health():
        return jsonify(ok=True, msg="API running")

    with app.app_context():
        db.create_all()
        app.extensions["order_store"] = OrderStore(db.session)

    return app
