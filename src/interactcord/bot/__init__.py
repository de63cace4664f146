"""
Discord runtime for Interactcord.

- **interaction_bot.py**: py-cord bot that feeds application-command
  interactions to the dispatcher and sends its responses
- **publisher.py**: Uploads the global and home-guild command metadata
- **cogs/events_listener.py**: Publishes metadata when the bot is ready
"""
