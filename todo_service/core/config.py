from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from fastapi import Depends
from typing_extensions import Annotated


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TODO_", env_file=".env", extra="ignore")

    db_file_path: str = "todo.db"
    host: str = "127.0.0.1"
    port: int = 8888
    call_timeout_seconds: float = 2.0  # applies to every remote call
    log_level: str = "INFO"

    @property
    def server_url(self) -> str:
        return f"http://{self.host}:{self.port}"


@lru_cache
def get_settings() -> Settings:
    return Settings()


SettingsDep = Annotated[Settings, Depends(get_settings)]
