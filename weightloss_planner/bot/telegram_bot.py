"""Entry point for the weight-loss planner Telegram bot.

This module initialises the Telegram application, registers the commands
and starts polling.  The question-by-question form that collects a plan
request lives in ``weightloss_planner.bot.handlers.plan_form``.

To use this bot, set the environment variable ``TELEGRAM_BOT_TOKEN`` or
populate ``config.json`` accordingly.  The application will not perform
any network requests until a valid token is provided.
"""

from __future__ import annotations

import logging
import warnings

from colorama import Fore, Style
from colorama import init as colorama_init
from telegram import Update
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    ConversationHandler,
    MessageHandler,
    filters,
)

from telegram.warnings import PTBUserWarning

from .handlers import plan_form
from ..core import messages
from ..core.config import language, log_level, telegram_bot_token

logger = logging.getLogger(__name__)

warnings.filterwarnings("ignore", category=PTBUserWarning)


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Respond to /start with a welcome message."""
    await update.message.reply_text(messages.text("welcome", language()))


async def handle_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log unexpected errors raised by handlers."""
    logger.exception("Unhandled error: %s", context.error)


def build_application(token: str) -> Application:
    """Create the application with all handlers registered."""
    application = Application.builder().token(token).build()

    plan_conv = ConversationHandler(
        entry_points=[CommandHandler("plan", plan_form.start_plan)],
        states={
            plan_form.CHOICE: [
                CallbackQueryHandler(plan_form.receive_choice, pattern="^form:")
            ],
            plan_form.NUMBER: [
                MessageHandler(filters.TEXT & ~filters.COMMAND, plan_form.receive_number)
            ],
        },
        fallbacks=[CommandHandler("cancel", plan_form.cancel)],
        allow_reentry=True,
    )

    application.add_handler(plan_conv)
    application.add_handler(CommandHandler("start", start))
    application.add_error_handler(handle_error)
    return application


def main() -> None:
    """Main entry point.  Instantiate the bot and run polling."""
    colorama_init()
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=log_level(),
    )
    token = telegram_bot_token()
    token_msg = (
        f"{Fore.GREEN}configured{Style.RESET_ALL}"
        if token
        else f"{Fore.RED}missing{Style.RESET_ALL}"
    )
    logger.info("Telegram token: %s", token_msg)
    logger.info("Reply language: %s", language())
    if not token:
        logger.warning("TELEGRAM_BOT_TOKEN is not set; bot will not start.")
        return
    build_application(token).run_polling()


if __name__ == "__main__":
    main()
