"""
Lead form state and validation.

Validation is synchronous and runs on every change. The submit control is
enabled only while ``can_submit`` holds; ``submit`` checks it again.
"""

import re
from typing import Dict, Optional, Set

import structlog

from config.categories import FOOD_CATEGORIES
from exceptions.custom_exceptions import BusinessValidationException
from models.landing_model import FieldErrors, Lead, LeadDraft, LeadFormState, ScrollDirective
from services.lead_intake import LeadIntake

logger = structlog.get_logger(__name__)

EMAIL_PATTERN = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE | re.ASCII)

PLACE_REQUIRED = "Укажите место"
PLACE_BLANK = "Поле не может быть пустым"
EMAIL_REQUIRED = "Укажите email"
EMAIL_INVALID = "Неверный формат email"
CATEGORIES_REQUIRED = "Выберите хотя бы одну категорию"


def default_categories() -> Dict[str, bool]:
    return {name: True for name in FOOD_CATEGORIES}


def is_valid_email(value: Optional[str]) -> bool:
    return bool(value) and EMAIL_PATTERN.fullmatch(value) is not None


def can_submit(draft: LeadDraft) -> bool:
    has_category = any(draft.categories.values())
    return has_category and is_valid_email(draft.email) and bool(draft.place.strip())


class LeadForm:
    def __init__(self, intake: LeadIntake, selected_place: str = "") -> None:
        self._intake = intake
        self.draft = LeadDraft(place=selected_place, categories=default_categories())
        self.dialog_open = False
        self._touched: Set[str] = set()

    def set_place(self, text: str) -> None:
        self.draft.place = text
        self._touched.add("place")

    def set_email(self, text: str) -> None:
        self.draft.email = text
        self._touched.add("email")

    def toggle_category(self, name: str) -> bool:
        if name not in self.draft.categories:
            raise BusinessValidationException(
                f"Unknown category '{name}'", details={"category": name}
            )
        self.draft.categories[name] = not self.draft.categories[name]
        return self.draft.categories[name]

    def set_all_categories(self, value: bool) -> None:
        for name in self.draft.categories:
            self.draft.categories[name] = value

    def receive_selected_place(self, address: str) -> None:
        # A new map selection always overwrites the field, edited or not
        if address:
            self.draft.place = address
            self._touched.add("place")

    def can_submit(self) -> bool:
        return can_submit(self.draft)

    def field_errors(self) -> FieldErrors:
        errors = FieldErrors()
        if "place" in self._touched:
            if not self.draft.place:
                errors.place = PLACE_REQUIRED
            elif not self.draft.place.strip():
                errors.place = PLACE_BLANK
        if "email" in self._touched:
            if not self.draft.email:
                errors.email = EMAIL_REQUIRED
            elif not is_valid_email(self.draft.email):
                errors.email = EMAIL_INVALID
        if not any(self.draft.categories.values()):
            errors.categories = CATEGORIES_REQUIRED
        return errors

    def submit(self) -> Lead:
        if not self.can_submit():
            self._touched.update(("place", "email"))
            raise BusinessValidationException(
                "Form is incomplete",
                details=self.field_errors().model_dump(exclude_none=True),
            )

        lead = Lead(
            place=self.draft.place.strip(),
            email=self.draft.email,
            categories=[name for name, checked in self.draft.categories.items() if checked],
        )
        self._intake.submit(lead)
        self.dialog_open = True
        return lead

    def dismiss_confirmation(self) -> Optional[ScrollDirective]:
        # Only a shown confirmation can be dismissed; the draft survives otherwise
        if not self.dialog_open:
            return None
        self.dialog_open = False
        self.draft = LeadDraft(categories=default_categories())
        self._touched.clear()
        return ScrollDirective(target="top")

    def snapshot(self) -> LeadFormState:
        return LeadFormState(
            draft=self.draft.model_copy(deep=True),
            errors=self.field_errors(),
            can_submit=self.can_submit(),
            dialog_open=self.dialog_open,
        )
