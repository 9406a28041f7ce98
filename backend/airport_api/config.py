from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # App Settings
    app_name: str = "Airport Reference API"
    env: str = "development"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    # Database
    database_url: str
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # Reference data import
    reference_workbook_path: str = "Database.xlsx"
    import_on_startup: bool = True
    import_chunk_size: int = 500

    # CORS
    cors_origins: str = ""  # Comma-separated production origins

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
