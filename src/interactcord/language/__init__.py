"""
Localized strings for Interactcord.

- **language_utils.py**: Cached lookup of YAML language bundles per locale, with
  key fallback and locale maps for command publication.
"""
