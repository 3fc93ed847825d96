from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from flask_socketio import SocketIO

# Initialize extensions
db = SQLAlchemy()
jwt = JWTManager()
socketio = SocketIO(cors_allowed_origins=["http://localhost:3000", "http://localhost:3001"])


def create_app(config_object='skillswap.config.Config'):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Initialize extensions
    db.init_app(app)
    jwt.init_app(app)
    socketio.init_app(app)

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({'status': 'healthy'}), 200

    # Create tables if they don't exist
    with app.app_context():
        create_tables()

    # Import and register Blueprints
    from skillswap.profile_routes import profile_bp
    from skillswap.match_routes import match_bp
    from skillswap.agreement_routes import agreement_bp
    from skillswap import events  # noqa: F401  registers Socket.IO handlers

    app.register_blueprint(profile_bp, url_prefix='/profile')
    app.register_blueprint(match_bp, url_prefix='/match')
    app.register_blueprint(agreement_bp, url_prefix='/agreements')

    return app


def create_tables():
    from skillswap import models  # noqa: F401  registers the tables on db.metadata

    db.create_all()
