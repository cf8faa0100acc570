"""Shortener Relay Bot Application Package.

A Telegram bot that rewrites links in messages through the PowerURLShortener
API, wraps the result with a per-chat header and footer, and relays it back to
the chat and to an optional auto-post channel.

The application follows a modular architecture with separate concerns for:
- Bot handlers and message relaying
- Link extraction, shortening and substitution
- Album (media group) reassembly
- Per-chat settings persistence
"""
