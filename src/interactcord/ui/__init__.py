"""
Developer console for Interactcord.

- **console.py**: prompt_toolkit console for status, handler listing,
  republishing, restart and shutdown.
"""
