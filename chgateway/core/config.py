from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ClickHouse HTTP interface
    CLICKHOUSE_URL: str = "http://127.0.0.1:8123/"
    CLICKHOUSE_DATABASE: str = "default"
    TABLE_NAME: str = "clickhouse_sec"
    RESPONSE_FORMAT: str = "JSON"

    # Web servers
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    META_PORT: int = 1111
    META_DATA_TEXT: str = "flag{clickhouse}"

    LOG_LEVEL: str = "INFO"

    # This tells Pydantic to read from the .env file
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def qualified_table(self) -> str:
        return f"{self.CLICKHOUSE_DATABASE}.{self.TABLE_NAME}"


# Create a single instance of the settings to use everywhere
settings = Settings()
