import os

class Settings:
    """Configuration de l'application, lue dynamiquement depuis les variables d'environnement."""

    @property
    def app_name(self) -> str:
        return "Course des Traîne-Savates API"

    @property
    def environment(self) -> str:
        env = os.getenv("ENV", "").lower()
        if env in ("prod", "production"):
            return "production"
        return "development"

    @property
    def cors_origin(self) -> str:
        return os.getenv("CORS_ORIGIN", "http://localhost:5173")

    @property
    def jwt_secret(self) -> str:
        secret = os.getenv("JWT_SECRET", "")
        if not secret and self.environment == "production":
            raise RuntimeError("JWT_SECRET est obligatoire en production")
        return secret or "dev-secret-change-me"

    @property
    def session_cookie_name(self) -> str:
        return os.getenv("SESSION_COOKIE_NAME", "ts_admin_session")

    @property
    def session_ttl_hours(self) -> int:
        try:
            return int(os.getenv("SESSION_TTL_HOURS", "12"))
        except ValueError:
            return 12

    @property
    def admin_email(self) -> str:
        return os.getenv("ADMIN_EMAIL", "").strip().lower()

    @property
    def admin_password(self) -> str:
        return os.getenv("ADMIN_PASSWORD", "")

    @property
    def frontend_url(self) -> str:
        return os.getenv("FRONTEND_URL", "")

    @property
    def revalidate_secret(self) -> str:
        return os.getenv("REVALIDATE_SECRET", "")

    @property
    def notification_emails(self) -> list[str]:
        raw = os.getenv("NOTIFICATION_EMAILS", "")
        return [item.strip() for item in raw.split(",") if item.strip()]


# Instance unique de Settings (sans cache, les valeurs sont relues à chaque accès)
_settings_instance = None

def get_settings() -> Settings:
    """Retourne l'instance de Settings."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance

def clear_settings_cache():
    """Réinitialise l'instance de settings."""
    global _settings_instance
    _settings_instance = None
