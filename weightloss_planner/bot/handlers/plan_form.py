from __future__ import annotations

import logging

from pydantic import ValidationError
from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import ContextTypes, ConversationHandler

from ...core import messages
from ...core.config import language
from ...core.logic import compute
from ...core.schema import ACTIVITY_LEVELS, PlanInput, PlanResult
from ...core.utils import parse_int, parse_number

logger = logging.getLogger(__name__)

# Conversation states: buttons or a typed number
(CHOICE, NUMBER) = range(2)

# Order of form questions and the values used when the user sends "-"
FORM_ORDER = [
    ("sex", "male"),
    ("age_years", 30),
    ("height_cm", 170),
    ("weight_kg", 70),
    ("activity_factor", 1.2),
    ("target_days", 30),
    ("target_loss_kg", 3),
]
CHOICE_FIELDS = {"sex", "activity_factor"}
INT_FIELDS = {"age_years", "target_days"}
SKIP = "-"


def _keyboard(field: str, lang: str) -> InlineKeyboardMarkup:
    """Return the selection buttons for ``sex`` or ``activity_factor``."""
    if field == "sex":
        rows = [
            [InlineKeyboardButton(messages.sex_label(s, lang), callback_data=f"form:sex:{s}")]
            for s in ("male", "female")
        ]
    else:
        rows = [
            [
                InlineKeyboardButton(
                    f"{messages.activity_label(level.key, lang)} ({level.factor})",
                    callback_data=f"form:activity_factor:{level.factor}",
                )
            ]
            for level in ACTIVITY_LEVELS
        ]
    return InlineKeyboardMarkup(rows)


async def _ask(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Send the question for the current step and return the matching state."""
    lang = context.user_data.get("language")
    field, default = FORM_ORDER[context.user_data["step"]]
    if field in CHOICE_FIELDS:
        await update.effective_message.reply_text(
            messages.question(field, lang), reply_markup=_keyboard(field, lang)
        )
        return CHOICE
    await update.effective_message.reply_text(
        f"{messages.question(field, lang)} {messages.default_hint(default, lang)}"
    )
    return NUMBER


def summarise_input(plan_input: PlanInput, lang: str | None = None) -> str:
    """Return a one-line echo of the collected answers."""
    level = next(
        (lv for lv in ACTIVITY_LEVELS if lv.factor == plan_input.activity_factor), None
    )
    activity = messages.activity_label(level.key, lang) if level else plan_input.activity_factor
    return (
        f"{messages.sex_label(plan_input.sex, lang)}, {plan_input.age_years}, "
        f"{plan_input.height_cm:g} cm, {plan_input.weight_kg:g} kg, {activity}, "
        f"{plan_input.target_loss_kg:g} kg / {plan_input.target_days}"
    )


async def start_plan(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Entry point for the plan form conversation."""
    if update.callback_query:
        await update.callback_query.answer()
    context.user_data.clear()
    context.user_data["language"] = language()
    context.user_data["form"] = {}
    context.user_data["step"] = 0
    logger.info("Plan form started for user %s", update.effective_user.id)
    return await _ask(update, context)


async def _advance(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    step = context.user_data["step"] + 1
    if step < len(FORM_ORDER):
        context.user_data["step"] = step
        return await _ask(update, context)
    return await finish_plan(update, context)


async def receive_choice(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Store the button pressed for ``sex`` or ``activity_factor``."""
    query = update.callback_query
    await query.answer()
    field, _default = FORM_ORDER[context.user_data["step"]]
    parts = query.data.split(":", 2)
    # Buttons from an earlier question stay clickable in the chat
    if len(parts) != 3 or parts[1] != field:
        return CHOICE
    value = parts[2]
    if field == "activity_factor":
        value = float(value)
    elif value not in ("male", "female"):
        return CHOICE
    context.user_data["form"][field] = value
    return await _advance(update, context)


async def receive_number(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Store a typed numeric answer, or ask again if it is not a number."""
    field, default = FORM_ORDER[context.user_data["step"]]
    text = update.message.text.strip()
    if text == SKIP:
        value = default
    elif field in INT_FIELDS:
        value = parse_int(text)
    else:
        value = parse_number(text)
    if value is None:
        await update.message.reply_text(
            messages.text("retry", context.user_data.get("language"))
        )
        return NUMBER
    context.user_data["form"][field] = value
    return await _advance(update, context)


async def finish_plan(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Run the calculation on the collected answers and show the outcome."""
    lang = context.user_data.get("language")
    form = context.user_data.get("form", {})
    context.user_data.clear()
    try:
        plan_input = PlanInput(**form)
    except ValidationError as exc:
        logger.exception("Plan input validation failed: %s", exc)
        await update.effective_message.reply_text(messages.text("retry", lang))
        return ConversationHandler.END
    outcome = compute(plan_input)
    if isinstance(outcome, PlanResult):
        logger.info(
            "Plan for user %s: target=%s safe=%s feasibility=%s",
            update.effective_user.id,
            outcome.daily_calorie_target,
            outcome.is_safe,
            outcome.feasibility,
        )
        reply = messages.render_result(outcome, lang)
    else:
        reply = messages.render_failure(outcome, lang)
    await update.effective_message.reply_text(
        summarise_input(plan_input, lang) + "\n\n" + reply
    )
    return ConversationHandler.END


async def cancel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    lang = context.user_data.get("language")
    context.user_data.clear()
    await update.effective_message.reply_text(messages.text("cancelled", lang))
    return ConversationHandler.END
