"""External integration services package.

Contains the PowerURLShortener API client and the per-chat settings store.
"""
