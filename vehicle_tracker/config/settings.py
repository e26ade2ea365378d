# vehicle_tracker/config/settings.py
from urllib.parse import quote_plus

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # explicit URL wins over the DB_* parts (sqlite in tests, postgres in prod)
    db_url: str | None = Field(default=None, validation_alias=AliasChoices("DATABASE_URL", "db_url"))

    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "vehicle_tracker"
    db_user: str = "postgres"
    db_password: str = ""

    environment: str = "development"
    debug: bool = True

    # signing secrets are optional here: the token codec refuses to work
    # without them, startup does not
    access_token_secret: str | None = None
    refresh_token_secret: str | None = None
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "vehicle-tracker-api"

    access_token_minutes: int = 15
    refresh_token_days: int = 7

    password_min_length: int = 8
    password_hash_iterations: int = 600_000

    db_echo: bool = False

    refresh_cookie_name: str = "refreshToken"
    client_url: str = "http://localhost:3000"

    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator(
        "db_host",
        "db_name",
        "db_user",
        "db_password",
        "access_token_secret",
        "refresh_token_secret",
        mode="before",
    )
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            v = v.strip().strip('"').strip("'")
        return v

    @property
    def database_url(self) -> str:
        if self.db_url:
            return self.db_url

        user = quote_plus(self.db_user)
        password = quote_plus(self.db_password)
        return f"postgresql+psycopg2://{user}:{password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def refresh_cookie_max_age(self) -> int:
        return self.refresh_token_days * 24 * 60 * 60
