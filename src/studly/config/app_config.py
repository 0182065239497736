# ♥♥─── App Config ───────────────────────────────────────────────────────────────
from __future__ import annotations

from pydantic import ValidationError

from studly.custom_logger import log

from .app_config_model import ApplicationSettings

# ─── Factory Function And Cached Instance ─────────────────────────────────────
_cached_settings: ApplicationSettings | None = None


# ─── Get Settings ─────────────────────────────────────────────────────────────
def get_application_settings() -> ApplicationSettings:
    """Create, validate and cache the :class:`ApplicationSettings` instance.

    :returns: The initialized settings.
    :raises SystemExit: If configuration loading or validation fails.
    """
    global _cached_settings  # noqa: PLW0603

    if _cached_settings is not None:
        return _cached_settings

    log.debug("Initializing application configuration...")

    try:
        app_settings_instance = ApplicationSettings()
    except ValidationError as e:
        log.critical("Application configuration validation failed.")
        error_details = "\n".join([f"  - {err['loc']}: {err['msg']} (input was: {err.get('input', 'N/A')})" for err in e.errors()])
        log.error("Validation error details:\n{}", error_details)
        error = "FATAL: Application configuration error. Please check your config files."
        raise SystemExit(error) from e
    except OSError as e:
        log.critical("Could not prepare the storage directories: {}", e)
        error = "FATAL: Storage directories could not be created."
        raise SystemExit(error) from e

    log.debug("Data Directory: {}", app_settings_instance.storage.get_data_directory())
    log.debug("Attachments Directory: {}", app_settings_instance.storage.get_attachments_directory())
    _cached_settings = app_settings_instance

    return _cached_settings


def get_settings() -> ApplicationSettings:
    """Convenient alias for :func:`get_application_settings`."""
    return get_application_settings()
