# dakarmarket/config.py
import os


def _normalize_database_url(raw_url: str, instance_path: str = "") -> str:
    """
    Provedores de Postgres entregam DATABASE_URL como:
      - postgres://...  (precisa trocar para postgresql+psycopg://)
    Além disso, força SSL quando o driver é psycopg.
    """
    if not raw_url:
        # SQLite local padrão (arquivo em instance/dakarmarket.db)
        return f"sqlite:///{os.path.join(instance_path, 'dakarmarket.db')}"
    url = raw_url
    if url.startswith("postgres://"):
        url = "postgresql+psycopg://" + url[len("postgres://"):]
    elif url.startswith("postgresql://"):
        url = "postgresql+psycopg://" + url[len("postgresql://"):]
    if url.startswith("postgresql+psycopg://") and "sslmode=" not in url:
        sep = "&" if "?" in url else "?"
        url = f"{url}{sep}sslmode=require"
    return url


def _split_csv(value: str):
    return [item.strip() for item in (value or "").split(",") if item.strip()]


class Config:
    """Configuração lida do ambiente no momento da criação do app."""

    def __init__(self, instance_path: str = ""):
        self.SECRET_KEY = os.getenv("SECRET_KEY", "dakarmarket_dev_secret")
        self.SQLALCHEMY_DATABASE_URI = _normalize_database_url(
            os.getenv("DATABASE_URL", ""), instance_path
        )
        self.SQLALCHEMY_TRACK_MODIFICATIONS = False
        self.SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}
        self.CORS_ORIGINS = _split_csv(
            os.getenv("CORS_ORIGINS", "https://dakarmarket.sn,https://www.dakarmarket.sn")
        )
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.NOTIFY_WEBHOOK_URL = os.getenv("NOTIFY_WEBHOOK_URL", "")
        self.NOTIFY_WEBHOOK_TIMEOUT = float(os.getenv("NOTIFY_WEBHOOK_TIMEOUT", "5"))
        self.PRODUCTS_MAX_PER_PAGE = int(os.getenv("PRODUCTS_MAX_PER_PAGE", "50"))

    def as_dict(self):
        return {k: v for k, v in vars(self).items() if k.isupper()}
