from itertools import combinations

from forefix.catalog import RULES, Category
from forefix.diagnostics import REPORT_TITLE, Risk, evaluate, risk_for, score_for


def all_selections(category: Category):
    ids = list(RULES[category])
    for size in range(1, len(ids) + 1):
        yield from combinations(ids, size)


def test_heating_and_battery_on_mobile():
    report = evaluate(Category.MOBILE, ["heating", "battery"])
    assert report.risk is Risk.MEDIUM
    assert report.score == 50
    assert report.actions == (
        "Close heavy apps",
        "Remove phone case",
        "Avoid charging while using",
        "Lower brightness",
        "Limit background apps",
        "Check battery health",
    )
    assert report.reason == "Device overheating, Battery degradation"
    assert report.title == REPORT_TITLE


def test_heavy_selection_floors_score_at_ten():
    report = evaluate(Category.MOBILE, ["heating", "restart", "battery", "storage", "ram"])
    assert report.risk is Risk.HIGH
    assert report.score == 10


def test_ids_from_other_categories_are_ignored():
    report = evaluate(Category.WEBAPP, ["restart", "blue_screen", "login_fail", "data_loss"])
    assert report.reason == "Authentication failure, Data integrity issue"
    assert report.risk is Risk.MEDIUM
    assert report.score == 40
    assert report.actions == (
        "Verify auth service status",
        "Reset user credentials",
        "Restore from backup",
        "Audit database writes",
    )


def test_only_unknown_ids_give_clean_report():
    report = evaluate(Category.LAPTOP, ["heating", "no_such_symptom"])
    assert report.reason == ""
    assert report.actions == ()
    assert report.risk is Risk.LOW
    assert report.score == 100


def test_shared_actions_are_listed_once_in_first_seen_order():
    report = evaluate(Category.MOBILE, ["slow", "ram"])
    assert report.actions == ("Clear cache", "Restart device", "Uninstall unused apps", "Limit background apps")


def test_risk_thresholds():
    assert risk_for(0) is Risk.LOW
    assert risk_for(4) is Risk.LOW
    assert risk_for(5) is Risk.MEDIUM
    assert risk_for(9) is Risk.MEDIUM
    assert risk_for(10) is Risk.HIGH


def test_score_formula():
    assert score_for(0) == 100
    assert score_for(3) == 70
    assert score_for(9) == 10
    assert score_for(25) == 10


def test_score_and_risk_agree_with_weights_for_every_selection():
    for category in Category:
        rules = RULES[category]
        for selection in all_selections(category):
            total = sum(rules[symptom_id].severity_weight for symptom_id in selection)
            report = evaluate(category, selection)
            assert report.score == max(10, 100 - 10 * total)
            assert 10 <= report.score <= 100
            assert report.risk is risk_for(total)
            assert len(report.actions) == len(set(report.actions))


def test_report_dict_round_trip_keeps_fields():
    report = evaluate(Category.LAPTOP, ["fan", "wifi"])
    data = report.to_dict()
    assert data["risk"] == "LOW"
    assert data["score"] == 60
    assert type(report).from_dict(data) == report
