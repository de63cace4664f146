"""
Cogs package for Interactcord.
Each module defines a cog class and a setup function to register it with the bot.
The cogs are loaded explicitly in interaction_bot.create_bot to avoid dynamic imports.
"""
