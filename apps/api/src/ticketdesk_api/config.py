from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    # API Configuration
    api_title: str = "TicketDesk API"
    api_version: str = "0.1.0"
    api_description: str = "Ticket management with resource capacity planning"

    # Server Configuration
    host: str = "0.0.0.0"  # nosec B104
    port: int = 8000
    debug: bool = False

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///./ticketdesk.db", description="SQLite or PostgreSQL URL"
    )

    # Capacity planning
    default_window_days: int = Field(
        default=14,
        ge=1,
        description="Length of the capacity window when no deadline is given",
    )

    # Environment
    environment: str = Field(
        default="development", pattern="^(development|staging|production|test)$"
    )

    # CORS Configuration
    cors_origins: list[str] | str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins, list or comma-separated",
    )

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL format"""
        if not v.startswith(("sqlite://", "postgresql://", "postgres://")):
            raise ValueError("Database URL must be a SQLite or PostgreSQL connection string")
        return v

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list, supporting both list and comma-separated string"""
        if isinstance(self.cors_origins, str):
            return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
        return self.cors_origins

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )


# Global settings instance
settings = Settings()
