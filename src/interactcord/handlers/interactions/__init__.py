"""Built-in context-menu interactions. Each module registers its handlers on import."""
