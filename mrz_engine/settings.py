from pydantic_settings import BaseSettings, SettingsConfigDict


class MRZSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MRZ_", extra="forbid")

    unknown_issuing_state: str = "Unknown"
    log_level: str = "INFO"
    json_logs: bool = True


settings = MRZSettings()
