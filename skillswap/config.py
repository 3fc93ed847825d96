import os
from dotenv import load_dotenv

# Load environment variables from .env (only for local development)
if os.getenv("FLASK_ENV") != "production":
    load_dotenv()
    print("[DEBUG] Loaded .env file for local development.")

class Config:
    """Base configuration."""

    # General settings
    SECRET_KEY = os.getenv("SECRET_KEY", "default-secret-key")

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///skillswap.db")
    print(f"[DEBUG] DATABASE_URL scheme: {SQLALCHEMY_DATABASE_URI.split(':', 1)[0]}")

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Tokens are issued by the identity provider; we only verify them
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "default-jwt-secret-key")
    JWT_DECODE_AUDIENCE = os.getenv("JWT_DECODE_AUDIENCE") or None
    JWT_TOKEN_LOCATION = ["headers"]

    # Match refinement (OpenAI-style chat completions endpoint)
    AI_GATEWAY_URL = os.getenv("AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1/chat/completions")
    AI_API_KEY = os.getenv("AI_API_KEY")
    AI_MODEL = os.getenv("AI_MODEL", "google/gemini-2.5-flash")
    AI_TIMEOUT = float(os.getenv("AI_TIMEOUT", "10"))
    print(f"[DEBUG] AI_GATEWAY_URL: {AI_GATEWAY_URL}")
    print(f"[DEBUG] AI refinement enabled: {bool(AI_API_KEY)}")

    MATCH_REFINE_MAX_POOL = int(os.getenv("MATCH_REFINE_MAX_POOL", "10"))
    MATCH_REFINE_TOP_N = int(os.getenv("MATCH_REFINE_TOP_N", "5"))

    REPUTATION_POINTS_PER_EXCHANGE = int(os.getenv("REPUTATION_POINTS_PER_EXCHANGE", "10"))

    # CORS configuration
    CORS_ORIGINS = [
        origin.strip() for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin.strip()
    ]
    print(f"[DEBUG] Processed CORS_ORIGINS: {CORS_ORIGINS}")

    # Debug mode
    DEBUG = os.getenv("FLASK_ENV") != "production"
    print(f"[DEBUG] FLASK_ENV: {os.getenv('FLASK_ENV')}")


class TestConfig(Config):
    """In-memory database, no external AI calls."""

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length"
    JWT_DECODE_AUDIENCE = None
    AI_API_KEY = None
