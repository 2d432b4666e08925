import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parents[1]


def _env_bool(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes"}


class Settings:
    app_name: str = "Food Truck Manager"

    # SQLite file; DATABASE_URL wins when both are set
    db_path: str = os.getenv("DB_PATH", "foodtruck.db")
    database_url: str = os.getenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
    database_echo: bool = _env_bool("DATABASE_ECHO")

    # Client bundle (index.html, db-helpers.js, sw.js) and uploaded files
    static_dir: str = os.getenv("STATIC_DIR", str(PACKAGE_DIR / "static"))
    upload_dir: str = os.getenv("UPLOAD_DIR", str(Path(static_dir) / "uploads"))
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

    # Auth
    jwt_secret: str = os.getenv("JWT_SECRET", "change-me-in-production")
    jwt_lifetime_seconds: int = int(os.getenv("JWT_LIFETIME_SECONDS", str(60 * 60 * 12)))

    # Server; HTTPS is used only when both files exist
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    ssl_certfile: str = os.getenv("SSL_CERTFILE", "certs/cert.pem")
    ssl_keyfile: str = os.getenv("SSL_KEYFILE", "certs/key.pem")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_origins: list[str] = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
    ]

    @property
    def database_file(self) -> Path:
        """Filesystem path of the SQLite database behind `database_url`."""
        marker = ":///"
        if marker not in self.database_url:
            raise ValueError(f"Not a file-based database URL: {self.database_url}")
        return Path(self.database_url.split(marker, 1)[1])

    @property
    def tls_enabled(self) -> bool:
        return Path(self.ssl_certfile).is_file() and Path(self.ssl_keyfile).is_file()


settings = Settings()
