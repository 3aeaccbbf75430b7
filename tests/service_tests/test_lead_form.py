import pytest

from config.categories import FOOD_CATEGORIES
from exceptions.custom_exceptions import BusinessValidationException
from models.landing_model import Lead
from services.lead_form import (
    CATEGORIES_REQUIRED,
    EMAIL_INVALID,
    EMAIL_REQUIRED,
    PLACE_BLANK,
    LeadForm,
    default_categories,
    is_valid_email,
)
from services.lead_intake import LeadIntake


def _fill(form: LeadForm, place="Central Park", email="user@example.com"):
    form.set_place(place)
    form.set_email(email)


def test_defaults_select_every_category(lead_form: LeadForm):
    assert list(lead_form.draft.categories) == list(FOOD_CATEGORIES)
    assert all(lead_form.draft.categories.values())
    assert lead_form.draft.place == ""
    assert lead_form.draft.email == ""
    assert lead_form.dialog_open is False


def test_valid_form_can_submit(lead_form: LeadForm):
    _fill(lead_form)
    assert lead_form.can_submit() is True


@pytest.mark.parametrize("place", ["", "   ", "\t\n"])
def test_blank_place_blocks_submit(lead_form: LeadForm, place: str):
    _fill(lead_form, place=place)
    assert lead_form.can_submit() is False


def test_no_categories_blocks_submit(lead_form: LeadForm):
    _fill(lead_form)
    lead_form.set_all_categories(False)

    assert lead_form.can_submit() is False
    assert lead_form.field_errors().categories == CATEGORIES_REQUIRED


@pytest.mark.parametrize(
    "email",
    ["foo@bar", "nospace here@x.com", "", "user@example.c", "@example.com", "user@example.com\n"],
)
def test_malformed_email_blocks_submit(lead_form: LeadForm, email: str):
    _fill(lead_form, email=email)
    assert lead_form.can_submit() is False


@pytest.mark.parametrize("email", ["user@example.com", "USER.Name+tag@Sub.Example.RU", "a_b%c@x-y.io"])
def test_email_pattern_is_case_insensitive(email: str):
    assert is_valid_email(email) is True


def test_toggle_flips_only_that_category(lead_form: LeadForm):
    lead_form.toggle_category("Бары")

    expected = default_categories()
    expected["Бары"] = False
    assert lead_form.draft.categories == expected

    lead_form.toggle_category("Бары")
    assert lead_form.draft.categories == default_categories()


def test_toggle_unknown_category_is_rejected(lead_form: LeadForm):
    with pytest.raises(BusinessValidationException):
        lead_form.toggle_category("Шаурмичные")

    assert lead_form.draft.categories == default_categories()


def test_single_category_is_enough(lead_form: LeadForm):
    _fill(lead_form)
    lead_form.set_all_categories(False)
    lead_form.toggle_category("Кофейни")

    assert lead_form.can_submit() is True


def test_field_errors_only_for_touched_fields(lead_form: LeadForm):
    assert lead_form.field_errors().model_dump(exclude_none=True) == {}

    lead_form.set_email("")
    lead_form.set_place("  ")
    errors = lead_form.field_errors()
    assert errors.email == EMAIL_REQUIRED
    assert errors.place == PLACE_BLANK

    lead_form.set_email("foo@bar")
    assert lead_form.field_errors().email == EMAIL_INVALID


def test_submit_opens_dialog_without_mutating_draft(lead_form: LeadForm, intake):
    _fill(lead_form)
    lead_form.toggle_category("Бары")
    before = lead_form.draft.model_copy(deep=True)

    lead = lead_form.submit()

    assert lead_form.dialog_open is True
    assert lead_form.draft == before
    assert list(intake.captured) == [lead]
    assert lead.place == "Central Park"
    assert "Бары" not in lead.categories
    assert len(lead.categories) == len(FOOD_CATEGORIES) - 1


def test_invalid_submit_keeps_dialog_closed(lead_form: LeadForm, intake):
    lead_form.set_place("Central Park")

    with pytest.raises(BusinessValidationException) as exc_info:
        lead_form.submit()

    assert lead_form.dialog_open is False
    assert len(intake.captured) == 0
    assert exc_info.value.details == {"email": EMAIL_REQUIRED}


def test_dismiss_closes_dialog_scrolls_top_and_resets(lead_form: LeadForm):
    _fill(lead_form)
    lead_form.submit()

    scroll = lead_form.dismiss_confirmation()

    assert scroll.target == "top"
    assert scroll.behavior == "smooth"
    assert lead_form.dialog_open is False
    assert lead_form.draft.place == ""
    assert lead_form.draft.email == ""
    assert lead_form.draft.categories == default_categories()


def test_selected_place_overwrites_hand_edited_field(lead_form: LeadForm):
    lead_form.set_place("my own text")
    lead_form.receive_selected_place("Red Square, Moscow, Russia")
    assert lead_form.draft.place == "Red Square, Moscow, Russia"

    lead_form.receive_selected_place("")
    assert lead_form.draft.place == "Red Square, Moscow, Russia"


def test_snapshot_is_detached_copy(lead_form: LeadForm):
    state = lead_form.snapshot()
    lead_form.toggle_category("Бары")

    assert state.draft.categories["Бары"] is True
    assert state.can_submit is False


def test_dismiss_without_open_dialog_keeps_draft(lead_form: LeadForm):
    _fill(lead_form)
    lead_form.toggle_category("Бары")
    before = lead_form.draft.model_copy(deep=True)

    assert lead_form.dismiss_confirmation() is None

    assert lead_form.dialog_open is False
    assert lead_form.draft == before
    assert lead_form.draft.place == "Central Park"
    assert lead_form.field_errors().model_dump(exclude_none=True) == {}


def test_intake_buffer_stays_bounded():
    intake = LeadIntake(buffer_size=3)
    leads = [
        Lead(place=f"Place {i}", email=f"user{i}@example.com", categories=["Бары"])
        for i in range(10)
    ]

    for lead in leads:
        intake.submit(lead)

    assert len(intake.captured) == 3
    assert list(intake.captured) == leads[-3:]
    assert intake.last_captured() == leads[-1]
