"""
Form builder wizard: owns the configuration and hands each step a
snapshot, the ``apply_change`` callback and navigation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from calcbuilder.formbuilder.canvas import FormCanvas
from calcbuilder.formbuilder.configuration import ConfigurationStore, FormConfiguration
from calcbuilder.formbuilder.details import validate_details
from calcbuilder.formbuilder.drag_drop import FieldPalette, InMemoryDragCoordinator
from calcbuilder.formbuilder.service_selection import ServiceSelectionStep
from calcbuilder.formbuilder.zip_validation import ZipCodeValidationStep

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WizardStep:
    key: str
    title: str


DETAILS_STEP = WizardStep("details", "Form Details")
ZIP_STEP = WizardStep("zip_validation", "ZIP Code Validation")
SERVICES_STEP = WizardStep("services", "Service Selection")
FIELDS_STEP = WizardStep("fields", "Custom Form Builder")
PREVIEW_STEP = WizardStep("preview", "Preview & Test")


def build_steps(config: FormConfiguration) -> list[WizardStep]:
    """The ZIP step is offered only when the configuration has ZIP areas."""
    steps = [DETAILS_STEP]
    if config.zip_areas:
        steps.append(ZIP_STEP)
    steps.extend([SERVICES_STEP, FIELDS_STEP, PREVIEW_STEP])
    return steps


class FormBuilderWizard:
    def __init__(
        self,
        initial: Union[FormConfiguration, Mapping[str, Any], None] = None,
        coordinator: Optional[InMemoryDragCoordinator] = None,
    ):
        self.store = ConfigurationStore(initial)
        self.coordinator = coordinator or InMemoryDragCoordinator()
        # Step list is fixed for the lifetime of the wizard
        self.steps = build_steps(self.store.snapshot())
        self.current_step = 1

    @property
    def config(self) -> FormConfiguration:
        return self.store.snapshot()

    @property
    def current(self) -> WizardStep:
        return self.steps[self.current_step - 1]

    @property
    def is_last_step(self) -> bool:
        return self.current_step == len(self.steps)

    def update_config(self, partial: Mapping[str, Any]) -> FormConfiguration:
        return self.store.apply_change(partial)

    def go_next(self) -> None:
        if self.current_step < len(self.steps):
            self.current_step += 1

    def go_previous(self) -> None:
        if self.current_step > 1:
            self.current_step -= 1

    def go_to(self, step_number: int) -> None:
        if not 1 <= step_number <= len(self.steps):
            raise ValueError(f"Step must be between 1 and {len(self.steps)}")
        self.current_step = step_number
        logger.debug(f"Wizard jumped to step {step_number} ({self.current.key})")

    def step_state(self, step_number: int) -> str:
        if step_number == self.current_step:
            return "current"
        return "complete" if step_number < self.current_step else "pending"

    def submit_details(self) -> Dict[str, str]:
        """Advance past the details step unless name/slug are invalid."""
        errors = validate_details(self.store.snapshot())
        if not errors:
            self.go_next()
        else:
            logger.info(f"Details step blocked: {', '.join(sorted(errors))}")
        return errors

    def mount_zip_step(self) -> ZipCodeValidationStep:
        return ZipCodeValidationStep(
            self.store.snapshot(),
            apply_change=self.store.apply_change,
            go_next=self.go_next,
            go_previous=self.go_previous,
        )

    def mount_service_step(self) -> ServiceSelectionStep:
        return ServiceSelectionStep(
            self.store.snapshot(),
            apply_change=self.store.apply_change,
            go_next=self.go_next,
            go_previous=self.go_previous,
        )

    def palette(self) -> FieldPalette:
        return FieldPalette(self.coordinator)

    def canvas(self) -> FormCanvas:
        return FormCanvas(self.store.snapshot().fields, self.store.apply_change, self.coordinator)

    def render(self) -> dict[str, Any]:
        return {
            "current_step": self.current_step,
            "is_last_step": self.is_last_step,
            "steps": [
                {"number": n, "key": s.key, "title": s.title, "state": self.step_state(n)}
                for n, s in enumerate(self.steps, start=1)
            ],
        }
