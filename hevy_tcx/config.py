from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Responses to requests under this prefix are inspected for workout records
    hevy_workout_url_prefix: str = "https://api.hevyapp.com/workout/"
    hevy_api_key: str = ""
    hevy_auth_token: str = ""
    http_timeout_seconds: float = 30.0

    relay_message_tag: str = "HEVY_WORKOUT_DATA_FOUND"
    # Export control is shown only while the page location contains this marker
    workout_page_marker: str = "hevy.com/workout/"
    visibility_poll_seconds: float = 1.0

    tcx_sport: str = "Other"
    tcx_creator_name: str = "Hevy"
    tcx_author_name: str = "matthewhuie/hevy-workout-tcx"
    export_filename_prefix: str = "hevy-workout-"
    unknown_workout_id: str = "UNKNOWN-ID"

    # File-based variant (CLI), resolved against the working directory
    input_filename: str = "input.json"
    output_filename: str = "output.tcx"

    cors_origins: str = "https://hevy.com,https://www.hevy.com"
    debug: bool = False

    @property
    def cors_origin_list(self) -> list[str]:
        """CORS origins as a list; empty setting allows any origin."""
        origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        return origins or ["*"]


settings = Settings()
