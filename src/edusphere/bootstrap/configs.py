from dataclasses import dataclass
from os import environ
from urllib.parse import quote_plus

from edusphere.infrastructure.log.main import LoggingLevel

TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class MissingConfigError(ValueError):
    names: tuple[str, ...]

    @property
    def title(self) -> str:
        return f"Required environment variables are missing: {', '.join(self.names)}"

    def __str__(self) -> str:
        return self.title


@dataclass(frozen=True)
class MongoDBConfig:
    host: str
    port: int
    user: str
    password: str
    db_name: str
    use_transactions: bool = False

    @property
    def uri(self) -> str:
        return (
            f"mongodb://{quote_plus(self.user)}:{quote_plus(self.password)}"
            f"@{self.host}:{self.port}/"
        )


@dataclass(frozen=True)
class AuthConfig:
    secret_key: str
    algorithm: str = "HS256"


@dataclass(frozen=True)
class Config:
    database: MongoDBConfig
    auth: AuthConfig
    log_level: LoggingLevel = "INFO"
    log_json: bool = False


def _require(*names: str) -> dict[str, str]:
    values = {name: environ.get(name) for name in names}
    missing = tuple(name for name, value in values.items() if not value)
    if missing:
        raise MissingConfigError(missing)
    return {name: value for name, value in values.items() if value}


def _flag(name: str) -> bool:
    return environ.get(name, "false").strip().lower() in TRUE_VALUES


def load_database_config() -> MongoDBConfig:
    values = _require(
        "MONGO_HOST",
        "MONGO_PORT",
        "MONGO_INITDB_ROOT_USERNAME",
        "MONGO_INITDB_ROOT_PASSWORD",
        "MONGO_DB_NAME",
    )

    return MongoDBConfig(
        host=values["MONGO_HOST"],
        port=int(values["MONGO_PORT"]),
        user=values["MONGO_INITDB_ROOT_USERNAME"],
        password=values["MONGO_INITDB_ROOT_PASSWORD"],
        db_name=values["MONGO_DB_NAME"],
        use_transactions=_flag("MONGO_TRANSACTIONS"),
    )


def load_auth_config() -> AuthConfig:
    values = _require("JWT_SECRET_KEY")
    return AuthConfig(
        secret_key=values["JWT_SECRET_KEY"],
        algorithm=environ.get("JWT_ALGORITHM", "HS256"),
    )


def load_log_level() -> LoggingLevel:
    level = environ.get("LOG_LEVEL", "INFO").upper()
    if level not in LOGGING_LEVELS:
        return "INFO"
    return level  # type: ignore[return-value]


def load_settings() -> Config:
    return Config(
        database=load_database_config(),
        auth=load_auth_config(),
        log_level=load_log_level(),
        log_json=_flag("LOG_JSON"),
    )
