"""
Interactcord - Discord command and interaction dispatch

Interactcord turns slash commands and context-menu interactions into plain
handler classes and takes care of everything around them.

Core Components:

- **Handlers**: ``SlashCommand`` and ``ContextInteraction`` base classes carrying
  localized names, flags, permissions, option trees and an optional cooldown
- **Registry**: Discovers handlers through an explicit registration table and
  builds global and home-guild command metadata for publication
- **Dispatcher**: Routes inbound interactions to handlers and answers the ones
  it cannot delegate itself
- **Cooldowns**: Per-user, per-channel and per-guild windows kept in memory
- **Languages**: YAML language bundles with cached per-locale lookup
- **Interactive Console**: Live administration for status, handler listing,
  republishing and graceful restart/shutdown

Usage:
    from interactcord.main import main
    main()  # Starts the bot with console interface
"""
