"""
Service selection step of the form-builder wizard.

Offers the company's configured ``services`` as toggles. Every toggle writes
``{"selectedServiceIds": [...]}`` back through ``apply_change``; like the ZIP
step, the selection is read from the configuration only at construction.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from calcbuilder.formbuilder.configuration import FormConfiguration

logger = logging.getLogger(__name__)

ApplyChange = Callable[[Mapping[str, Any]], Any]
Navigate = Callable[[], Any]


class ServiceSelectionStep:
    """Checkbox list choosing which services the booking form offers."""

    title = "Select a service to display in your booking form"

    def __init__(
        self,
        config: FormConfiguration,
        apply_change: ApplyChange,
        go_next: Navigate,
        go_previous: Navigate,
    ):
        self.available_services = [dict(s) for s in config.services]
        self.selected = list(config.selected_service_ids)
        self._apply_change = apply_change
        self._go_next = go_next
        self._go_previous = go_previous

    def is_selected(self, service_id: str) -> bool:
        return service_id in self.selected

    def toggle(self, service_id: str) -> list[str]:
        """Add or remove ``service_id``, keeping selection order."""
        if service_id in self.selected:
            self.selected = [s for s in self.selected if s != service_id]
        else:
            self.selected = self.selected + [service_id]
        logger.debug(f"Selected services: {self.selected}")
        self._apply_change({"selectedServiceIds": list(self.selected)})
        return self.selected

    @property
    def can_continue(self) -> bool:
        return bool(self.selected)

    def previous(self) -> None:
        self._go_previous()

    def next(self) -> bool:
        """Advance when at least one service is selected."""
        if not self.can_continue:
            return False
        self._go_next()
        return True

    def render(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "services": [
                {"id": s.get("id"), "name": s.get("name", ""), "selected": self.is_selected(s.get("id"))}
                for s in self.available_services
            ],
            "preview_options": [
                s.get("name", "") for s in self.available_services if self.is_selected(s.get("id"))
            ],
            "empty_hint": "No services found. Add services in Settings." if not self.available_services else None,
            "can_continue": self.can_continue,
        }
