import os
from decimal import Decimal

from .catalog import PRICE_IN_EURO


class Config:
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_SORT_KEYS = False
    MAX_CONTENT_LENGTH = 1 * 1024 * 1024
    ENV = os.getenv("FLASK_ENV", "development")

    # shared secret for the admin dashboard; unset disables the admin endpoints
    ADMIN_PORTAL_PASSWORD = os.getenv("ADMIN_PORTAL_PASSWORD") or None
    UNIT_SALE_PRICE = Decimal(os.getenv("UNIT_SALE_PRICE", str(PRICE_IN_EURO)))
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

    @staticmethod
    def init_app(app):
        if not os.getenv("DATABASE_URL"):
            os.makedirs(app.instance_path, exist_ok=True)
            app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{os.path.join(app.instance_path, 'app.db')}"
        else:
            app.config["SQLALCHEMY_DATABASE_URI"] = os.getenv("DATABASE_URL")
