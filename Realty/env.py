"""
Environment configuration for the Realty project.

Every value that differs between deployments is declared here and read
from the environment (or a local .env file). Realty/settings.py turns these
into Django settings.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Django
    django_secret_key: str = "django-insecure-dev-only-change-me"
    django_debug: bool = True
    django_allowed_hosts: str = "localhost,127.0.0.1"
    django_log_level: str = "INFO"

    # Database; SQLite unless another engine is named
    database_engine: str = "django.db.backends.sqlite3"
    database_name: str = ""
    database_user: str = "realty"
    database_password: str = ""
    database_host: str = "localhost"
    database_port: str = "5432"

    # Celery
    celery_broker_url: str = "redis://localhost:6379/0"
    celery_task_always_eager: bool = False
    celery_publish_max_retries: int = 2

    # Dotted path to a callable taking a Certificate and returning a document URL
    certificate_renderer: str = ""

    @property
    def allowed_hosts(self) -> List[str]:
        return [host.strip() for host in self.django_allowed_hosts.split(",") if host.strip()]

    @property
    def uses_sqlite(self) -> bool:
        return self.database_engine == "django.db.backends.sqlite3"


@lru_cache(maxsize=1)
def get_env() -> EnvSettings:
    return EnvSettings()
