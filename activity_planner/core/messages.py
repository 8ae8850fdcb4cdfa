"""
User-facing validation messages in the supported locales.
"""

from activity_planner.core.models import DEFAULT_LOCALE

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "required_field": "{label} is required",
        "postcode": "Invalid UK postcode format",
        "date_format": "Invalid date format",
        "time_format": "Invalid time format",
        "unknown_type": "Unknown event type: {record_type}",
    },
    "tr": {
        "required_field": "{label} zorunludur",
        "postcode": "Geçersiz İngiltere posta kodu biçimi",
        "date_format": "Geçersiz tarih biçimi",
        "time_format": "Geçersiz saat biçimi",
        "unknown_type": "Bilinmeyen etkinlik türü: {record_type}",
    },
}


def message(key: str, locale: str = DEFAULT_LOCALE, **params: str) -> str:
    """Format a message, falling back to English for unknown locales."""
    catalogue = MESSAGES.get(locale, MESSAGES[DEFAULT_LOCALE])
    return catalogue[key].format(**params)
