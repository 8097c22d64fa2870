"""Configuration loading for pluginhelp."""

from pluginhelp.lib.config.settings import HelpConfig, load_config

__all__ = ["HelpConfig", "load_config"]
