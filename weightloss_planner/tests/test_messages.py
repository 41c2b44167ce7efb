from weightloss_planner.core import messages
from weightloss_planner.core.logic import compute
from weightloss_planner.core.schema import NonPositiveInput, PlanInput, UnsafeTargetLoss


def plan(**overrides):
    data = dict(
        weight_kg=70, height_cm=170, age_years=30, sex="male",
        activity_factor=1.2, target_days=30, target_loss_kg=3,
    )
    data.update(overrides)
    return compute(PlanInput(**data))


def test_safe_result_japanese():
    text = messages.render_result(plan(), "ja")
    assert "1671 kcal/日" in text
    assert "2005 kcal/日" in text
    assert "720 kcal/日" in text
    assert "3kgの減量には総計 21600 kcal" in text
    assert "1285 kcal/日" in text
    assert "⚠️" not in text


def test_unsafe_result_suggests_timeline():
    text = messages.render_result(plan(target_loss_kg=8, target_days=20), "en")
    assert "-875 kcal/day" in text
    assert "below the healthy minimum of 1200 kcal" in text
    assert "lose 8 kg in 72 days" in text
    assert "No plan" not in text


def test_infeasible_result_has_no_timeline():
    result = plan(sex="female", weight_kg=30, height_cm=100, age_years=90, target_loss_kg=1)
    text = messages.render_result(result, "en")
    assert "No plan keeps you" in text
    assert "Safer plan" not in text


def test_failure_messages():
    assert messages.render_failure(NonPositiveInput(), "ja") == "すべての値は正の値である必要があります"
    assert "10.5kg" in messages.render_failure(UnsafeTargetLoss(limit_kg=10.5), "ja")
    assert "(12.0 kg)" in messages.render_failure(UnsafeTargetLoss(limit_kg=12), "en")


def test_unknown_language_falls_back_to_japanese():
    assert messages.text("cancelled", "xx") == messages.text("cancelled", "ja")
    assert messages.activity_label("sedentary", None).startswith("座り仕事")


def test_every_activity_level_has_labels():
    for lang in messages.LANGUAGES:
        for key in ("sedentary", "light", "moderate", "active", "very_active"):
            assert messages.activity_label(key, lang)
