import os

from dotenv import load_dotenv

load_dotenv()


class LandingConfig:
    # ===== MAPS PROVIDER =====
    GOOGLE_MAPS_API_KEY: str = os.getenv("GOOGLE_MAPS_API_KEY", "")
    MAPS_COUNTRY: str = os.getenv("MAPS_COUNTRY", "ru")
    MAPS_LANGUAGE: str = os.getenv("MAPS_LANGUAGE", "ru")
    MAPS_HTTP_TIMEOUT: float = float(os.getenv("MAPS_HTTP_TIMEOUT", "10"))

    # ===== PLACE PICKER =====
    SEARCH_DEBOUNCE_MS: int = int(os.getenv("SEARCH_DEBOUNCE_MS", "300"))
    DEFAULT_CENTER_LAT: float = 55.751244  # Moscow
    DEFAULT_CENTER_LNG: float = 37.618423
    DEFAULT_ZOOM: int = 13
    SELECTED_ZOOM: int = 15
    CONTACT_FORM_ANCHOR: str = "#contact-form"

    # ===== SESSIONS =====
    SESSION_TIMEOUT_MINUTES: int = int(os.getenv("SESSION_TIMEOUT_MINUTES", "30"))
    SESSION_SWEEP_INTERVAL_SECONDS: int = int(
        os.getenv("SESSION_SWEEP_INTERVAL_SECONDS", "300")
    )

    # ===== INTAKE =====
    INTAKE_BUFFER_SIZE: int = int(os.getenv("INTAKE_BUFFER_SIZE", "100"))

    # ===== TERMS =====
    TERMS_URL: str = "https://law.2gis.ru/platform-manager"
    PRICE_LABEL: str = "Купить за 1500 руб."
