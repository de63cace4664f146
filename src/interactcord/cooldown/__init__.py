"""
Handler rate limiting.

- **cooldown_engine.py**: In-memory cooldown windows per user, channel and guild.
"""
