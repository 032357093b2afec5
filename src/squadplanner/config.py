from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SQUADPLANNER_",
        case_sensitive=False,
    )

    # App
    env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    db_url: str = "sqlite+aiosqlite:///./squadplanner.db"

    # Calendar: every activity is authored in the organisation's timezone
    org_timezone: str = "Europe/Paris"  # decides which calendar day "today" is
    org_display_offset: str = "UTC+1"  # fixed offset slot labels are authored in
    default_viewer_timezone: str = "UTC+1"

    # Hourly grid, organisation-local (14..23 -> 2 PM to 11 PM)
    slot_first_hour: int = 14
    slot_count: int = 10

    # Access windows
    player_weeks_ahead: int = 3
    schedule_max_week_offset: int = 2


def get_settings() -> Settings:
    return Settings()
