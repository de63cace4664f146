"""
Configuration management for Interactcord.

- **app_configuration.py**: YAML configuration loader for global settings: the
  home guild, presence activity, handler modules to discover, the language
  bundle directory and cooldown validation. Falls back gracefully on missing or
  malformed config files.
"""
