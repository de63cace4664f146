"""Built-in slash commands. Each module registers its handlers on import."""
