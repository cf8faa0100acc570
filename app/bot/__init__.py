"""Telegram bot implementation package.

Contains all Telegram bot specific functionality including command handlers,
the content pipeline, album buffering, outbound delivery and user-facing
message templates.
"""
