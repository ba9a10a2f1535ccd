"""Configuration processing for fixture parsing."""

import logging
from typing import Any

import homeassistant.helpers.config_validation as cv
import voluptuous as vol

log = logging.getLogger(__name__)

# Configuration constants
CONF_VALIDATE_DMX_RANGES = "validate_dmx_ranges"
CONF_VALIDATE_DMX_RANGES_DEFAULT = True
CONF_WARN_HELP_WANTED = "warn_help_wanted"
CONF_WARN_HELP_WANTED_DEFAULT = True

OPTIONS_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_VALIDATE_DMX_RANGES, default=CONF_VALIDATE_DMX_RANGES_DEFAULT): cv.boolean,
        vol.Optional(CONF_WARN_HELP_WANTED, default=CONF_WARN_HELP_WANTED_DEFAULT): cv.boolean,
    }
)


def process_options(options: dict[str, Any] | None = None) -> dict[str, Any]:
    """
    Validates parser options and fills in the defaults.
    :param options: The raw options, None for all defaults.
    :return: The validated options.
    :raises vol.Invalid: If an option is unknown or has the wrong type.
    """
    processed = OPTIONS_SCHEMA(options or {})
    log.debug("Parser options: %s", processed)
    return processed
