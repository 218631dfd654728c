"""Initialize the Flask app and its extensions."""

import json
import os

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials, firestore
from flask import Flask, current_app, g, request
from werkzeug.middleware.proxy_fix import ProxyFix

from .core import constants
from .extensions import mail
from .utils import sanitize_env


def _load_config(app):
    """Load configuration from the environment."""
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        MAIL_SERVER=os.environ.get("MAIL_SERVER") or "smtp.gmail.com",
        MAIL_PORT=int(os.environ.get("MAIL_PORT") or 587),
        MAIL_USE_TLS=(os.environ.get("MAIL_USE_TLS") or "true").lower()
        in ["true", "1", "t"],
        MAIL_USE_SSL=(os.environ.get("MAIL_USE_SSL") or "false").lower()
        in ["true", "1", "t"],
        MAIL_USERNAME=sanitize_env(os.environ.get("MAIL_USERNAME")),
        MAIL_PASSWORD=sanitize_env(
            os.environ.get("MAIL_PASSWORD"), strip_spaces=True
        ),
        MAIL_DEFAULT_SENDER=os.environ.get("MAIL_DEFAULT_SENDER")
        or "noreply@tourneyhub.app",
        CLOUDINARY_CLOUD_NAME=os.environ.get("CLOUDINARY_CLOUD_NAME")
        or os.environ.get("EXPO_PUBLIC_CLOUDINARY_CLOUD_NAME"),
        CLOUDINARY_UPLOAD_PRESET=os.environ.get("CLOUDINARY_UPLOAD_PRESET")
        or os.environ.get("EXPO_PUBLIC_CLOUDINARY_UPLOAD_PRESET"),
        UPLOAD_TIMEOUT=int(
            os.environ.get("UPLOAD_TIMEOUT") or constants.UPLOAD_TIMEOUT_SECONDS
        ),
        FEEDBACK_EMAIL=os.environ.get("FEEDBACK_EMAIL"),
        STARTING_COINS=int(
            os.environ.get("STARTING_COINS") or constants.STARTING_COINS
        ),
        MIN_WITHDRAWAL=int(
            os.environ.get("MIN_WITHDRAWAL") or constants.MIN_WITHDRAWAL
        ),
        LEADERBOARD_SIZE=int(
            os.environ.get("LEADERBOARD_SIZE") or constants.LEADERBOARD_SIZE
        ),
    )


def _init_firebase(app):
    """Initialize the Firebase Admin SDK from env, file or default credentials."""
    cred = None
    project_id = None

    # First, try to load from environment variable (for production)
    cred_json = os.environ.get("FIREBASE_CREDENTIALS_JSON")
    if cred_json:
        try:
            cred_info = json.loads(cred_json)
            project_id = cred_info.get("project_id")
            cred = credentials.Certificate(cred_info)
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")

    # If env var fails or is not present, try loading from file (for local dev)
    if not cred:
        cred_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)), "firebase_credentials.json"
        )
        if os.path.exists(cred_path):
            try:
                with open(cred_path, "r") as f:
                    cred_info = json.load(f)
                project_id = cred_info.get("project_id")
                cred = credentials.Certificate(cred_path)
            except (json.JSONDecodeError, ValueError) as e:
                app.logger.error(f"Error loading credentials from file: {e}")

    if not cred:
        try:
            cred = credentials.ApplicationDefault()
            project_id = os.environ.get("FIREBASE_PROJECT_ID")
        except Exception as e:
            app.logger.error(
                f"Could not find any valid credentials (env, file, or default): {e}"
            )

    if cred and not firebase_admin._apps:
        try:
            options = {"projectId": project_id} if project_id else None
            firebase_admin.initialize_app(cred, options)
        except ValueError:
            # This can happen if the app is already initialized, which is fine.
            app.logger.info("Firebase app already initialized.")


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    _load_config(app)
    if test_config:
        app.config.update(test_config)

    # Initialize Firebase Admin SDK only if not in testing mode
    if not app.config.get("TESTING"):
        _init_firebase(app)

    mail.init_app(app)

    # Register blueprints
    from . import auth as auth_bp

    app.register_blueprint(auth_bp.bp)

    from . import tournament as tournament_bp

    app.register_blueprint(tournament_bp.bp)

    from . import wallet as wallet_bp

    app.register_blueprint(wallet_bp.bp)

    from . import updates as updates_bp

    app.register_blueprint(updates_bp.bp)

    from . import user as user_bp

    app.register_blueprint(user_bp.bp)

    from . import feedback as feedback_bp

    app.register_blueprint(feedback_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    @app.route("/health")
    def health_check():
        """Perform a simple health check."""
        return {"status": "ok"}, 200

    @app.before_request
    def load_user_from_token():
        """Verify the bearer ID token, if any, and load the user into g."""
        g.user = None
        g.uid = None
        header = request.headers.get("Authorization", "")
        if not header.startswith("Bearer "):
            return

        id_token = header[len("Bearer ") :].strip()
        try:
            decoded = firebase_auth.verify_id_token(id_token)
        except Exception as e:
            current_app.logger.warning(f"Rejected ID token: {e}")
            return

        uid = decoded["uid"]
        g.uid = uid
        g.token_email = decoded.get("email")
        try:
            db = firestore.client()
            user_doc = db.collection(constants.USERS_COLLECTION).document(uid).get()
            if user_doc.exists:
                g.user = user_doc.to_dict()
                g.user["uid"] = uid
            else:
                current_app.logger.warning(
                    f"User {uid} has a valid token but no Firestore profile."
                )
        except Exception as e:
            current_app.logger.error(f"Error loading user {uid}: {e}")

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
