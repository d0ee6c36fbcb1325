from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False
    LOG_LEVEL: str = "INFO"

    # =================================================================
    # UPLOAD POLICY - mirrors the limits enforced by the upload form
    # =================================================================
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024  # 10MB
    ALLOWED_UPLOAD_EXTENSIONS: list[str] = [".csv"]

    # =================================================================
    # LIST VIEWS
    # =================================================================
    DEFAULT_PAGE_SIZE: int = 10
    PAGE_SIZE_OPTIONS: list[int] = [10, 25, 50, 100]

    # =================================================================
    # EXPORTS
    # =================================================================
    CSV_EXPORT_FILENAME: str = "message-fatigue-analysis.csv"
    REPORT_FILENAME: str = "message-fatigue-report.html"
    REPORT_TITLE: str = "Message Fatigue Analysis Report"

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def get_upload_limits(self) -> dict:
        """
        Get the upload validation policy.
        Extensions are normalized to lowercase with a leading dot.
        """
        extensions = []
        for ext in self.ALLOWED_UPLOAD_EXTENSIONS:
            ext = ext.strip().lower()
            if not ext:
                continue
            extensions.append(ext if ext.startswith(".") else f".{ext}")

        return {
            "max_bytes": self.MAX_UPLOAD_BYTES,
            "max_megabytes": round(self.MAX_UPLOAD_BYTES / (1024 * 1024), 2),
            "extensions": extensions,
        }


settings = Settings()
