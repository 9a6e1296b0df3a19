"""
pdfparse_lib/config.py: Reads layout tuning settings from an optional INI
file, falling back to the defaults in constants.py.
"""
import configparser
import logging

from .constants import LAYOUT_DEFAULTS

log = logging.getLogger("pdfparse.config")


class ConfigService:
    """Manages reading layout settings from a pdfparse config file."""

    def __init__(self, config_path: str | None = None):
        self.config_path = config_path
        self.defaults = {"Layout": dict(LAYOUT_DEFAULTS)}

    def get_settings(self) -> dict:
        """Reads settings from the config file, applying defaults if missing."""
        config = configparser.ConfigParser()
        for section, values in self.defaults.items():
            config[section] = {k: str(v) for k, v in values.items()}

        if self.config_path and not config.read(self.config_path):
            log.info("Config file not found at %s. Using defaults.", self.config_path)

        return self._config_to_dict(config)

    def get_layout_settings(self) -> dict:
        """Returns the [Layout] section with every value as a float."""
        layout = self.get_settings()["Layout"]
        settings = {}
        for key, value in layout.items():
            if key not in LAYOUT_DEFAULTS:
                log.warning("Ignoring unknown layout setting '%s'.", key)
                continue
            try:
                settings[key] = float(value)
            except ValueError:
                raise ValueError(
                    f"Invalid value for layout setting '{key}': {value!r}"
                ) from None
        log.debug("Layout settings: %s", settings)
        return settings

    def _config_to_dict(self, config: configparser.ConfigParser) -> dict:
        """Converts a ConfigParser object to a nested dictionary."""
        return {s: dict(config.items(s)) for s in config.sections()}
