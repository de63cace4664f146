"""
Handler definitions, discovery and dispatch.

- **base.py**: ``SlashCommand`` and ``ContextInteraction`` base classes
- **registry.py**: ``@register_handler`` table, discovery and metadata publication
- **dispatcher.py**: Event routing with cooldown enforcement
- **commands/**, **interactions/**: Built-in handlers
"""
