"""Configuration loader for lxc-creator."""

import re
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from lxccreator.errors import CreatorError
from lxccreator.models import CreatorSettings

LOCALE_RE = re.compile(r"[A-Za-z0-9_.@-]+")


class ConfigLoader:
    """Loads YAML configuration files for host settings and CLI defaults."""

    DEFAULT_PATHS = ("/etc/lxc-creator.yml", ".lxc-creator.yml")
    SETTINGS_KEYS = {field.name for field in fields(CreatorSettings)}
    CLI_KEYS = {"log_dir", "language", "ui", "verbose", "dry_run"}
    SUPPORTED_KEYS = SETTINGS_KEYS | CLI_KEYS

    def find_default(self, cwd: Optional[str] = None) -> Optional[str]:
        base = Path(cwd or ".")
        for candidate in self.DEFAULT_PATHS:
            path = base / candidate
            if path.is_file():
                return str(path)
        return None

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        path = Path(config_path)
        if not path.exists():
            raise CreatorError(f"Config file not found: {config_path}")

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise CreatorError(f"Invalid config file '{config_path}': {exc}") from exc

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise CreatorError("Config file must contain a YAML mapping at the root.")

        unknown = sorted(set(parsed.keys()) - self.SUPPORTED_KEYS)
        if unknown:
            unknown_list = ", ".join(unknown)
            raise CreatorError(f"Unknown configuration keys: {unknown_list}")

        return parsed

    def to_settings(self, values: Dict[str, Any]) -> CreatorSettings:
        settings_values = {key: value for key, value in values.items() if key in self.SETTINGS_KEYS}

        locales = settings_values.get("locales")
        if locales is not None:
            if isinstance(locales, str):
                locales = [locales]
            if not isinstance(locales, (list, tuple)) or not locales:
                raise CreatorError("`locales` must be a non-empty list of locale names.")
            for locale in locales:
                if not isinstance(locale, str) or not LOCALE_RE.fullmatch(locale):
                    raise CreatorError(f"Invalid locale name in configuration: {locale!r}")
            settings_values["locales"] = tuple(locales)

        default_locale = settings_values.get("default_locale")
        if default_locale is not None and (
            not isinstance(default_locale, str) or not LOCALE_RE.fullmatch(default_locale)
        ):
            raise CreatorError(f"Invalid default locale in configuration: {default_locale!r}")

        settings = CreatorSettings(**settings_values)
        if not settings.default_locale:
            settings.default_locale = settings.locales[0]

        if settings.id_min < 1 or settings.id_min > settings.id_max:
            raise CreatorError(
                f"Invalid container ID range: {settings.id_min}-{settings.id_max}."
            )
        return settings
