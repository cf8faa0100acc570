"""Telegram bot message templates and constants.

Contains all user-facing message templates, command menu descriptions and
error messages. Centralizes message management for consistent wording across
commands and the relay pipeline.
"""

# Command menu shown by Telegram clients
BOT_COMMANDS = [
    ("start", "Show welcome message and instructions"),
    ("api", "Set your PowerURLShortener API token (/api YOUR_TOKEN)"),
    ("add_header", "Set custom text to appear before shortened content"),
    ("add_footer", "Set custom text to appear after shortened content"),
    ("set_channel", "Set a channel for auto-posting (ID, @username, or link)"),
    ("remove_channel", "Disable auto-posting to a channel"),
    ("balance", "Check your balance and clicks on PowerURLShortener"),
    ("my_channel", "Show your currently set auto-post channel"),
]

START_MESSAGE = (
    "😇 *Welcome, {name}!*\n\n"
    "🔗 *PowerURLShortener Bot* helps you shorten any valid URL easily using the "
    "[powerurlshortener.link](https://powerurlshortener.link) API service.\n\n"
    "To shorten a URL, just send it directly in the chat — the bot will return a shortened version.\n\n"
    "📌 *How to Use Me:*\n"
    "1. Register at [powerurlshortener.link](https://powerurlshortener.link)\n"
    "2. Get your API key from:\n"
    "   👉 [https://powerurlshortener.link/member/tools/api](https://powerurlshortener.link/member/tools/api)\n"
    "3. Set it using: `/api <your_api>`\n\n"
    "⚠️ *Links must start with* `http://`, `https://` or `www.`\n\n"
    "🧩 *Commands:*\n"
    "➕ `/api` — Set your API token\n"
    "➕ `/add_header` — Add custom header\n"
    "➕ `/add_footer` — Add custom footer\n"
    "➕ `/balance` — Check your balance\n"
    "➕ `/set_channel` — Set auto-post channel\n"
    "➕ `/remove_channel` — Remove auto-post channel\n"
    "➕ `/my_channel` — Show my current auto-post channel"
)

# Token
TOKEN_SAVED = "✅ API token saved."
TOKEN_USAGE = "✍️ Please send your API token after the command: `/api YOUR_API_TOKEN`"
TOKEN_MISSING = (
    "⚠️ Your API token is not set. Please set it using `/api YOUR_API_TOKEN` "
    "to use the URL shortening features."
)

# Header / footer
HEADER_USAGE = "✍️ Please enter header text after /add_header"
FOOTER_USAGE = "✍️ Please enter footer text after /add_footer"
HEADER_SAVED = "✅ Header saved (link not shortened):\n\n{text}"
FOOTER_SAVED = "✅ Footer saved (link not shortened):\n\n{text}"

# Channel
CHANNEL_INVALID = (
    "⚠️ Please provide a valid channel ID, @username, or a Telegram channel invite link "
    "(e.g., `-1001234567890`, `@MyChannel`, or `https://t.me/+invite_hash`)."
)
CHANNEL_SET = (
    "✅ Channel set to: `{channel}`. Please ensure I am an *administrator* in this channel "
    "with permission to post messages."
)
CHANNEL_REMOVED = "✅ Channel removed."
CHANNEL_NOT_SET = "ℹ️ No channel was set."
CHANNEL_CURRENT = "📢 Your current auto-post channel: `{channel}`"
CHANNEL_NONE = "No auto-post channel is set."
CHANNEL_DELIVERY_FAILED = (
    "⚠️ Sorry! I couldn't send the message to your auto-post channel. Please ensure the ID "
    "is correct and I have the necessary permissions (e.g., admin rights to post messages)."
)

# Balance
BALANCE_LINE = "💰 Balance: ${balance}\n👁️ Clicks: {clicks}"
BALANCE_API_ERROR = "❌ Failed to fetch balance: {message}"
BALANCE_API_ERROR_DEFAULT = (
    "Invalid API token or an unexpected error occurred on the shortening service."
)
BALANCE_UNAVAILABLE = (
    "🚫 Failed to fetch balance. This could be due to a network issue or the API being "
    "temporarily unavailable. Please try again later."
)
