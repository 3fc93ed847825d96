from flask_cors import CORS
from skillswap import create_app, socketio
import os
from skillswap.config import Config

# Create Flask app instance
app = create_app()

# Dynamically configure CORS
CORS(app, resources={
    r"/*": {
        "origins": Config.CORS_ORIGINS,
        "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        "allow_headers": ["Authorization", "Content-Type"],
        "expose_headers": ["Authorization"],
        "supports_credentials": True,
    }
})

# Log the environment and allowed CORS origins
print(f"[INFO] Running in {'production' if os.getenv('FLASK_ENV') == 'production' else 'development'} mode")
print(f"[INFO] Allowed CORS Origins: {Config.CORS_ORIGINS}")

if __name__ == '__main__':
    debug_mode = Config.DEBUG
    print(f"[INFO] Debug mode is {'on' if debug_mode else 'off'}")
    socketio.run(app, debug=debug_mode, host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
