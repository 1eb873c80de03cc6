"""
Calculator persistence and form-builder operations.

Each operation loads the stored configuration into a ConfigurationStore,
runs the form-builder component against it and persists the result.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from calcbuilder.formbuilder.canvas import CANVAS_ID
from calcbuilder.formbuilder.configuration import (
    ConfigurationStore, FormConfiguration, InvalidConfigurationError, PlacedField, normalize_keys
)
from calcbuilder.formbuilder.details import SLUG_PATTERN, validate_details
from calcbuilder.formbuilder.field_catalog import get_field_type
from calcbuilder.formbuilder.wizard import FormBuilderWizard
from calcbuilder.formbuilder.zip_validation import ZipCodeValidationStep
from calcbuilder.models.calculator import Calculator, CalculatorStatus
from calcbuilder.models.tenant import Tenant
from calcbuilder.schemas.calculator import CalculatorCreate

logger = logging.getLogger(__name__)


class CalculatorServiceError(Exception):
    """Custom exception for calculator operations"""
    pass


class CalculatorNotFoundError(CalculatorServiceError):
    pass


class SlugConflictError(CalculatorServiceError):
    pass


def _noop() -> None:
    pass


class CalculatorService:
    """Service for building and publishing tenant calculators"""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise CalculatorServiceError(f"Failed to {action}: {e}") from e

    def _check_slug(self, tenant_id: UUID, slug: str, exclude_id: Optional[UUID] = None) -> None:
        if not SLUG_PATTERN.match(slug):
            raise CalculatorServiceError(f"Invalid URL slug: {slug!r}")
        query = self.db.query(Calculator).filter(Calculator.tenant_id == tenant_id, Calculator.slug == slug)
        if exclude_id is not None:
            query = query.filter(Calculator.id != exclude_id)
        if query.first():
            raise SlugConflictError(f"Calculator slug already in use: {slug}")

    def _persist(self, calculator: Calculator, config: FormConfiguration, action: str) -> Calculator:
        # The row's slug and status always mirror the stored configuration
        if config.status != calculator.status:
            raise CalculatorServiceError("Status changes go through publish")
        if config.slug != calculator.slug:
            self._check_slug(calculator.tenant_id, config.slug, exclude_id=calculator.id)
            logger.info(f"Renaming calculator slug {calculator.slug} -> {config.slug}")
            calculator.slug = config.slug
        calculator.config = config.to_wire()
        calculator.name = config.name or calculator.name
        calculator.description = config.description or None
        calculator.updated_at = datetime.now(timezone.utc)
        self._commit(action)
        self.db.refresh(calculator)
        return calculator

    def create(self, data: CalculatorCreate) -> Calculator:
        tenant = self.db.get(Tenant, data.tenant_id)
        if tenant is None:
            raise CalculatorNotFoundError(f"Tenant not found: {data.tenant_id}")

        slug = data.resolved_slug()
        if not slug:
            raise CalculatorServiceError("Could not derive a URL slug from the calculator name")
        self._check_slug(tenant.id, slug)

        try:
            config = FormConfiguration.from_wire(data.config)
        except InvalidConfigurationError as e:
            raise CalculatorServiceError(str(e)) from e

        updates: Dict[str, Any] = {
            "name": data.name,
            "slug": slug,
            "description": data.description or config.description,
            "status": CalculatorStatus.DRAFT.value,
        }
        # New calculators start from the company's service area
        if not config.zip_areas and tenant.get_zip_areas():
            updates["zip_areas"] = tenant.get_zip_areas()
        config = ConfigurationStore(config).apply_change(updates)

        calculator = Calculator(
            tenant_id=tenant.id,
            slug=slug,
            name=data.name,
            description=data.description,
            status=CalculatorStatus.DRAFT.value,
            config=config.to_wire(),
            created_by=data.created_by,
        )
        self.db.add(calculator)
        self._commit("create calculator")
        self.db.refresh(calculator)
        logger.info(f"Created calculator {tenant.slug}/{slug}")
        return calculator

    def get(self, calculator_id: UUID) -> Calculator:
        calculator = self.db.get(Calculator, calculator_id)
        if calculator is None:
            raise CalculatorNotFoundError(f"Calculator not found: {calculator_id}")
        return calculator

    def list_for_tenant(self, tenant_id: UUID) -> List[Calculator]:
        return (
            self.db.query(Calculator)
            .filter(Calculator.tenant_id == tenant_id)
            .order_by(Calculator.slug)
            .all()
        )

    def configuration(self, calculator_id: UUID) -> FormConfiguration:
        return FormConfiguration.from_wire(self.get(calculator_id).config)

    def wizard(self, calculator_id: UUID) -> FormBuilderWizard:
        return FormBuilderWizard(self.configuration(calculator_id))

    def apply_change(self, calculator_id: UUID, partial: Mapping[str, Any]) -> Calculator:
        """Merge ``partial`` into the stored configuration (last write wins per key)."""
        calculator = self.get(calculator_id)
        store = ConfigurationStore(calculator.config)
        try:
            if "status" in normalize_keys(partial):
                raise CalculatorServiceError("Calculators are published through publish, not a config change")
            config = store.apply_change(partial)
        except InvalidConfigurationError as e:
            raise CalculatorServiceError(str(e)) from e
        return self._persist(calculator, config, "update calculator configuration")

    def save_draft(self, calculator_id: UUID, wizard: FormBuilderWizard) -> Calculator:
        """Persist the wizard's current configuration without publishing it."""
        calculator = self.get(calculator_id)
        config = wizard.config
        if config.status != calculator.status:
            config = wizard.update_config({"status": calculator.status})
        calculator = self._persist(calculator, config, "save draft")
        logger.info(f"Saved draft of calculator {calculator.slug}")
        return calculator

    def publish(self, calculator_id: UUID) -> Calculator:
        calculator = self.get(calculator_id)
        config = FormConfiguration.from_wire(calculator.config)
        errors = validate_details(config)
        if errors:
            raise CalculatorServiceError(
                "Cannot publish: " + "; ".join(f"{k}: {v}" for k, v in sorted(errors.items()))
            )

        config = ConfigurationStore(config).apply_change({"status": CalculatorStatus.PUBLISHED.value})
        calculator.status = CalculatorStatus.PUBLISHED.value
        calculator.published_at = datetime.now(timezone.utc)
        calculator = self._persist(calculator, config, "publish calculator")
        logger.info(f"Published calculator {calculator.slug}")
        return calculator

    def update_zip_validation(self, calculator_id: UUID, enabled: bool, raw_input: str) -> Dict[str, Any]:
        """
        Drive the ZIP validation step to the given editor state and persist
        the derived ``zipAreas``.
        """
        calculator = self.get(calculator_id)
        store = ConfigurationStore(calculator.config)
        step = ZipCodeValidationStep(
            store.snapshot(),
            apply_change=store.apply_change,
            go_next=_noop,
            go_previous=_noop,
        )
        step.set_raw_input(raw_input)
        step.set_enabled(enabled)
        self._persist(calculator, store.snapshot(), "update ZIP validation")
        return step.render()

    def drop_field(self, calculator_id: UUID, field_type: str) -> PlacedField:
        """Drag a palette token onto the canvas."""
        get_field_type(field_type)
        wizard = self.wizard(calculator_id)
        canvas = wizard.canvas()
        token = next(t for t in wizard.palette().tokens() if t.id == field_type)
        token.begin_drag()
        placed = wizard.coordinator.drop(CANVAS_ID)
        self._persist(self.get(calculator_id), wizard.config, "place field")
        logger.debug(f"Canvas now holds {len(canvas.fields)} field(s)")
        return placed

    def move_field(self, calculator_id: UUID, old_index: int, new_index: int) -> List[PlacedField]:
        wizard = self.wizard(calculator_id)
        fields = wizard.canvas().move(old_index, new_index)
        self._persist(self.get(calculator_id), wizard.config, "reorder fields")
        return fields

    def delete_field(self, calculator_id: UUID, index: int) -> PlacedField:
        wizard = self.wizard(calculator_id)
        removed = wizard.canvas().delete(index)
        self._persist(self.get(calculator_id), wizard.config, "delete field")
        return removed
