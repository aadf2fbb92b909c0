from pydantic_settings import BaseSettings, SettingsConfigDict


class SnapflowBaseSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SNAPSHOT_TESTING_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )
