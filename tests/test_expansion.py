from datetime import date
from types import SimpleNamespace

from shiftdesk.services import expansion


def template(**overrides):
    fields = dict(
        day_of_week=1,
        start_minutes=540,
        end_minutes=1020,
        role="Nurse",
        required_skills=["triage"],
        location="North Wing",
        team=None,
        min_employees=2,
        max_employees=3,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_mondays_in_two_weeks():
    drafts = expansion.expand(template(), date(2024, 1, 1), date(2024, 1, 14))
    assert [draft.date for draft in drafts] == [date(2024, 1, 1), date(2024, 1, 8)]


def test_sundays_across_a_month():
    dates = list(expansion.matching_dates(0, date(2024, 1, 1), date(2024, 1, 31)))
    assert dates == [date(2024, 1, 7), date(2024, 1, 14), date(2024, 1, 21), date(2024, 1, 28)]


def test_range_without_the_weekday_yields_nothing():
    assert expansion.expand(template(day_of_week=0), date(2024, 1, 1), date(2024, 1, 5)) == []


def test_single_day_range_on_the_weekday():
    assert list(expansion.matching_dates(1, date(2024, 1, 8), date(2024, 1, 8))) == [date(2024, 1, 8)]


def test_drafts_copy_template_fields():
    drafts = expansion.expand(
        template(day_of_week=5, start_minutes=1320, end_minutes=360, team="Nights"),
        date(2024, 1, 1),
        date(2024, 1, 7),
    )

    assert len(drafts) == 1
    draft = drafts[0]
    assert draft.date == date(2024, 1, 5)
    assert draft.is_overnight
    assert draft.required_skills == ("triage",)
    assert draft.team == "Nights"
    assert (draft.min_employees, draft.max_employees) == (2, 3)
    assert draft.status == "OPEN"
