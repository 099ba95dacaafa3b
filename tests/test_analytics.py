from datetime import date

from timerecording import analytics


def test_parse_order_filter_accepts_string_and_list():
    assert analytics.parse_order_filter(" 990005, 290002,,990005") == ["990005", "290002"]
    assert analytics.parse_order_filter(["1,2", "3"]) == ["1", "2", "3"]
    assert analytics.parse_order_filter(None) == []


def test_compliance_uses_roster_targets():
    rows = analytics.compliance([("Akin Uslucan", 36), ("Aleksandar Semi", 38), ("Unknown Person", 41)])

    assert [r["name"] for r in rows] == ["Unknown Person", "Aleksandar Semi", "Akin Uslucan"]
    akin = rows[2]
    assert akin["short_name"] == "A. Uslucan"
    assert akin["target"] == 35.0
    assert akin["met"] is True
    assert rows[1]["difference"] == -2.0
    assert rows[1]["met"] is False
    assert rows[0]["target"] == 40.0


def test_compliance_target_override():
    rows = analytics.compliance([("Akin Uslucan", 36)], targets={"Akin Uslucan": 38})

    assert rows[0]["met"] is False


def test_weekly_breakdown_groups_iso_weeks():
    rows = analytics.weekly_breakdown(
        [
            ("A", date(2026, 1, 6), 4.0),
            ("A", date(2026, 1, 5), 3.0),
            ("A", date(2026, 1, 12), 8.0),
        ]
    )

    assert rows == [
        {"name": "A", "week_key": "2026-W02", "week_start": date(2026, 1, 5), "week_hours": 7.0},
        {"name": "A", "week_key": "2026-W03", "week_start": date(2026, 1, 12), "week_hours": 8.0},
    ]


def test_weekend_hours_share():
    rows = analytics.weekend_hours([("A", date(2026, 1, 3), 2.0), ("A", date(2026, 1, 5), 8.0)])

    assert rows == [{"name": "A", "weekend_hours": 2.0, "total_hours": 10.0, "weekend_share": 20.0}]


def test_billable_ratio_handles_missing_values():
    rows = analytics.billable_ratio([("B", None, None), ("A", 30.0, 10.0)])

    assert rows[0]["name"] == "A"
    assert rows[0]["billable_share"] == 75.0
    assert rows[1]["billable_share"] == 0.0


def test_week_over_week_fills_empty_weeks():
    daily = [
        ("x", date(2026, 1, 6), 10.0),
        ("y", date(2026, 1, 20), 15.0),
        ("x", date(2025, 12, 30), 99.0),
    ]

    rows = analytics.week_over_week(daily, anchor=date(2026, 1, 21), weeks=3)

    assert [r["week_key"] for r in rows] == ["2026-W02", "2026-W03", "2026-W04"]
    assert [r["hours"] for r in rows] == [10.0, 0.0, 15.0]
    assert [r["delta"] for r in rows] == [None, -10.0, 15.0]
    assert [r["change_pct"] for r in rows] == [None, -100.0, None]


def test_pareto_cumulative_share():
    rows = analytics.pareto([("b", 3.0), ("a", 6.0), ("c", 1.0)])

    assert [(r["name"], r["cumulative_pct"]) for r in rows] == [("a", 60.0), ("b", 90.0), ("c", 100.0)]


def test_labour_cost_uses_hourly_rates():
    hours = [("280003", "Akin Uslucan", 10.0), ("280003", "X", 2.0), ("290001", "Akin Uslucan", 1.0)]

    rows = analytics.labour_cost(hours)
    assert rows[0] == {"name": "280003", "hours": 12.0, "cost": 600.0}
    assert rows[1]["cost"] == 50.0

    overridden = analytics.labour_cost(hours, rates={"X": 100})
    assert overridden[0]["cost"] == 700.0


def test_labour_cost_limit():
    hours = [(str(280000 + i), "A", float(i + 1)) for i in range(12)]

    assert len(analytics.labour_cost(hours)) == analytics.TOP_LIMIT


def test_personal_summary():
    daily = [
        (date(2026, 1, 12), 8.0),
        (date(2026, 1, 14), 6.0),
        (date(2026, 1, 5), 7.0),
        (date(2025, 12, 30), 5.0),
    ]

    summary = analytics.personal_summary("Akin Uslucan", daily, today=date(2026, 1, 14))

    assert summary["weekly_target"] == 35.0
    assert summary["daily_target"] == 7.0
    assert [d["day"] for d in summary["current_week"]][:3] == ["Mo.", "Di.", "Mi."]
    assert summary["current_week"][2]["is_today"] is True
    assert summary["current_week_hours"] == 14.0
    assert [h["week_key"] for h in summary["history"]] == ["2026-W01", "2026-W02"]
    assert summary["ytd_adherence"] == 30.0
