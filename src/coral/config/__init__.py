# topmark:header:start
#
#   project      : Coral
#   file         : __init__.py
#   file_relpath : src/coral/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration and logging for Coral.

Modules:
    - [`coral.config.keys`][coral.config.keys]: TOML section and key names.
    - [`coral.config.loaders`][coral.config.loaders]: tomlkit-based file loading and
      runtime defaults.
    - [`coral.config.model`][coral.config.model]: `MutableConfig` builder and frozen
      `Config` snapshot, with layered discovery.
    - [`coral.config.logging`][coral.config.logging]: the Coral logger class.

This package module intentionally imports nothing: `coral.config.logging` is
imported by every layer, and must not drag the config model along.
"""
