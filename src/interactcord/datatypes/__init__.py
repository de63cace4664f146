"""
Value types shared across Interactcord.

- **discord_datatypes.py**: Discord locale codes and snowflake normalisation
- **cooldown_datatypes.py**: Cooldown value type with its unit and scope enums
- **command_datatypes.py**: Published application-command metadata and option trees
- **interaction_datatypes.py**: Inbound interaction events and dispatch responses
"""
