"""Check that a settings file passed for one kind is not really the other."""

import logging
import os

logger = logging.getLogger(__name__)

APP_SETTINGS = "app_settings"
APP_CONFIG = "app_config"


def validate_config_file_type(file_path: str, declared_kind: str) -> bool:
    """Warn when a file's extension contradicts the kind it was passed as.

    Returns False on a mismatch. Parsing proceeds either way, using the
    parser the extension selects.
    """
    extension = os.path.splitext(file_path)[1].lower()
    if declared_kind == APP_SETTINGS and extension == ".config":
        logger.warning(
            "JD0001: app settings override received a %s file path. "
            "Consider passing it as an app config instead. "
            "Proceeding with parsing as XML configuration.",
            extension,
        )
        return False
    if declared_kind == APP_CONFIG and extension == ".json":
        logger.warning(
            "JD0001: app config override received a %s file path. "
            "Consider passing it as app settings instead. "
            "Proceeding with parsing as JSON configuration.",
            extension,
        )
        return False
    return True
