from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

from models.enums import UnknownTypePolicy


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "EVzone Access Core"
    ENV: str = "development"
    LOG_LEVEL: str = Field("INFO", description="Level for the 'evzone' logger")

    # -------------------------------------------------
    # Station type classification
    # -------------------------------------------------
    # "allow": a station whose type string cannot be classified passes
    #          type/scope checks (legacy dashboard behaviour).
    # "deny":  such a station fails type/scope checks for any actor whose
    #          capability or scope actually restricts the type.
    UNKNOWN_STATION_TYPE_POLICY: UnknownTypePolicy = Field(
        UnknownTypePolicy.allow,
        description="Outcome of type/scope checks for unclassifiable station types",
    )

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    model_config = SettingsConfigDict(case_sensitive=True)


# Instantiate settings
settings = Settings()
