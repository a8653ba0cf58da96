from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    books_api_url: str = "https://www.googleapis.com/books/v1/volumes"

    # HTTP timeouts in milliseconds. The read timeout applies to each read,
    # not to the whole transfer.
    connect_timeout_ms: int = 15000
    read_timeout_ms: int = 10000

    default_max_results: int = 10

    # The body is read line by line and the lines are concatenated without
    # their terminators. That is fine for the single-line payloads the API
    # returns but corrupts pretty-printed JSON. Set PRESERVE_LINE_BREAKS=true
    # to read the body text unmodified.
    preserve_line_breaks: bool = False

    log_level: str = "INFO"


settings = Settings()
