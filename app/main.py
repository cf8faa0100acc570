"""Application entry point.

Main module that initializes and runs the Telegram bot application. Handles both
webhook mode (for production deployment on Railway) and polling mode (for local
development). Configures logging and registers bot handlers for commands and
message processing.
"""

import logging

from telegram import BotCommand
from telegram.ext import Application, CommandHandler, MessageHandler, filters

from .bot.handlers import (
    add_footer,
    add_header,
    balance,
    handle_message,
    my_channel,
    remove_channel,
    set_channel,
    set_token,
    start,
)
from .bot.messages import BOT_COMMANDS
from .config import config
from .core.container import container

# Logging
logging.basicConfig(
    format="%(asctime)s - %(levelname)s - %(message)s",
    level=getattr(logging, config.bot.log_level.upper(), logging.INFO),
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


async def initialize_resources(application: Application) -> None:
    """Initialize application resources."""
    container.dispatcher().attach_bot(application.bot)

    store = container.settings_store()
    logger.info(f"Settings store ready at {getattr(store, 'db_path', 'memory')}")

    try:
        await application.bot.set_my_commands(
            [BotCommand(command, description) for command, description in BOT_COMMANDS]
        )
    except Exception as e:
        logger.warning(f"Failed to register bot commands: {e}")


def main() -> None:
    """Main application entry point.

    Initializes the Telegram bot application with proper configuration,
    registers command and message handlers, and starts the bot in either
    webhook mode (production) or polling mode (development).

    Raises:
        RuntimeError: If BOT_TOKEN environment variable is not set.
    """
    if not config.bot.bot_token:
        raise RuntimeError("Set BOT_TOKEN environment variable")

    # Create application
    app = Application.builder().token(config.bot.bot_token).build()

    async def post_init(application: Application) -> None:
        await initialize_resources(application)

    app.post_init = post_init

    # Add handlers
    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("api", set_token))
    app.add_handler(CommandHandler("add_header", add_header))
    app.add_handler(CommandHandler("add_footer", add_footer))
    app.add_handler(CommandHandler("set_channel", set_channel))
    app.add_handler(CommandHandler("remove_channel", remove_channel))
    app.add_handler(CommandHandler("my_channel", my_channel))
    app.add_handler(CommandHandler("balance", balance))

    app.add_handler(
        MessageHandler(
            (filters.TEXT | filters.PHOTO | filters.VIDEO) & ~filters.COMMAND, handle_message
        )
    )

    # Run in webhook or polling mode
    if config.bot.use_webhook:
        path = f"/{config.bot.bot_token}"
        webhook_url = f"https://{config.bot.webhook_domain}{path}"
        logger.info(f"Starting webhook at {webhook_url}")

        app.run_webhook(
            listen=config.bot.listen_host,
            port=config.bot.port,
            url_path=path,
            webhook_url=webhook_url,
        )
    else:
        logger.warning("No public domain found; falling back to long-polling")
        app.run_polling()


if __name__ == "__main__":
    main()
