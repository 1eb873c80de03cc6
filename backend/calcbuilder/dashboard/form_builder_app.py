"""
Calculator Builder operator dashboard.

Pure UI layer over the form-builder core:
    - FormBuilderWizard       -> owns the configuration, steps and navigation
    - FieldPalette / canvas   -> element palette and placed fields
    - ZipCodeValidationStep   -> ZIP code restriction editor
    - ServiceSelectionStep    -> services offered on the booking form
    - preview helpers         -> field preview, ZIP check and test price
    - CalculatorService       -> loads / saves / publishes calculators

The wizard lives in st.session_state for the selected calculator and is only
written back to the database on "Save Draft" or "Publish".

Usage:
    streamlit run backend/calcbuilder/dashboard/form_builder_app.py
"""

from dotenv import load_dotenv
load_dotenv()

import streamlit as st

from calcbuilder.core.database_utils import create_all_tables, get_db_session
from calcbuilder.formbuilder.canvas import CANVAS_ID
from calcbuilder.formbuilder.details import generate_slug
from calcbuilder.formbuilder.preview import calculate_test_price, preview_fields, zip_accepted
from calcbuilder.formbuilder.wizard import DETAILS_STEP, FIELDS_STEP, SERVICES_STEP, ZIP_STEP
from calcbuilder.schemas.calculator import CalculatorCreate
from calcbuilder.services.calculator_service import CalculatorService, CalculatorServiceError
from calcbuilder.services.tenant_admin import TenantAdminService

st.set_page_config(page_title="Calculator Builder", layout="wide")

create_all_tables()


# ---------------------------------------------------------------------------
# Sidebar - tenant & calculator selection
# ---------------------------------------------------------------------------
with get_db_session() as db:
    _tenants = [(t.id, t.name) for t in TenantAdminService(db).list_tenants(active_only=True)]

with st.sidebar:
    st.title("Calculator Builder")
    if not _tenants:
        st.info("No tenants yet. Run `python -m calcbuilder.scripts.create_test_tenant`.")
        st.stop()

    _tenant_labels = [name for _, name in _tenants]
    _tenant_label = st.selectbox("Company", _tenant_labels, key="tenant_selector")
    _tenant_id = _tenants[_tenant_labels.index(_tenant_label)][0]

    with get_db_session() as db:
        _calcs = [(c.id, c.name, c.status) for c in CalculatorService(db).list_for_tenant(_tenant_id)]

    st.divider()
    _new_name = st.text_input("New calculator name", key="new_calc_name")
    if st.button("Create calculator", disabled=not _new_name.strip()):
        try:
            with get_db_session() as db:
                calc = CalculatorService(db).create(
                    CalculatorCreate(tenant_id=_tenant_id, name=_new_name, slug=generate_slug(_new_name))
                )
                st.session_state["calculator_id"] = calc.id
                # Point the picker at the new calculator before it is drawn
                st.session_state["calc_selector"] = f"{calc.name} ({calc.status})"
            st.session_state.pop("wizard", None)
            st.rerun()
        except CalculatorServiceError as e:
            st.error(str(e))

    if _calcs:
        _calc_labels = [f"{name} ({status})" for _, name, status in _calcs]
        _calc_label = st.selectbox("Calculator", _calc_labels, key="calc_selector")
        _calc_id = _calcs[_calc_labels.index(_calc_label)][0]
        if st.session_state.get("calculator_id") != _calc_id:
            st.session_state["calculator_id"] = _calc_id
            st.session_state.pop("wizard", None)
    else:
        st.caption("No calculators yet. Create one above.")
        st.stop()

calculator_id = st.session_state["calculator_id"]

# Mounted step editors and their widget state
_STEP_STATE_KEYS = ("zip_step", "zip_enabled", "zip_raw_input", "service_step")


def _unmount_steps():
    for key in _STEP_STATE_KEYS:
        st.session_state.pop(key, None)
    for key in [k for k in st.session_state if str(k).startswith("service_toggle_")]:
        st.session_state.pop(key, None)


if "wizard" not in st.session_state:
    with get_db_session() as db:
        st.session_state["wizard"] = CalculatorService(db).wizard(calculator_id)
    _unmount_steps()

wizard = st.session_state["wizard"]
config = wizard.config


# ---------------------------------------------------------------------------
# Header - save / publish and step progress
# ---------------------------------------------------------------------------
_head, _actions = st.columns([3, 1])
with _head:
    st.header(config.name or "New Form Builder")
    st.caption(config.description or "Create a custom booking calculator")
with _actions:
    if st.button("Save Draft", use_container_width=True):
        try:
            with get_db_session() as db:
                CalculatorService(db).save_draft(calculator_id, wizard)
            st.toast("Draft saved")
        except CalculatorServiceError as e:
            st.error(str(e))
    if wizard.is_last_step:
        if st.button(
            "Published" if config.status == "published" else "Publish",
            disabled=config.status == "published",
            type="primary",
            use_container_width=True,
        ):
            try:
                with get_db_session() as db:
                    service = CalculatorService(db)
                    service.save_draft(calculator_id, wizard)
                    service.publish(calculator_id)
                    st.session_state["wizard"] = service.wizard(calculator_id)
                _unmount_steps()
                st.rerun()
            except CalculatorServiceError as e:
                st.error(str(e))

_progress = wizard.render()
for _col, _step in zip(st.columns(len(_progress["steps"])), _progress["steps"]):
    _marker = {"complete": "✓", "current": "●", "pending": str(_step["number"])}[_step["state"]]
    if _col.button(f"{_marker} {_step['title']}", key=f"step_{_step['number']}", use_container_width=True):
        _unmount_steps()
        wizard.go_to(_step["number"])
        st.rerun()

st.divider()


def _nav(prev: bool = True, label: str = "Continue", on_next=None, on_prev=None, disabled: bool = False):
    left, right = st.columns(2)
    if prev and left.button("Previous", key="nav_prev"):
        _unmount_steps()
        (on_prev or wizard.go_previous)()
        st.rerun()
    if right.button(label, key="nav_next", type="primary", disabled=disabled):
        _unmount_steps()
        (on_next or wizard.go_next)()
        st.rerun()


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------
current = wizard.current

if current == DETAILS_STEP:
    st.subheader("Create New Calculator")
    name = st.text_input("Calculator Name *", value=config.name)
    slug = st.text_input("URL Slug *", value=config.slug or generate_slug(name))
    description = st.text_area("Description", value=config.description)
    if (name, slug, description) != (config.name, config.slug, config.description):
        wizard.update_config({"name": name, "slug": slug, "description": description})

    def _submit():
        errors = wizard.submit_details()
        st.session_state["detail_errors"] = errors

    for message in st.session_state.get("detail_errors", {}).values():
        st.error(message)
    _nav(prev=False, on_next=_submit)

elif current == ZIP_STEP:
    # Mounted once per visit to the step
    if st.session_state.get("zip_step") is None:
        st.session_state["zip_step"] = wizard.mount_zip_step()
    zip_step = st.session_state["zip_step"]

    st.subheader(zip_step.title)
    st.checkbox(
        "Enable ZIP code validation",
        value=zip_step.enabled,
        key="zip_enabled",
        on_change=lambda: zip_step.set_enabled(st.session_state["zip_enabled"]),
    )
    view = zip_step.render()
    if zip_step.enabled:
        st.text_input(
            "Allowed ZIP codes (comma separated)",
            value=zip_step.raw_input,
            key="zip_raw_input",
            on_change=lambda: zip_step.set_raw_input(st.session_state["zip_raw_input"]),
        )
        if view["zip_areas"]:
            st.markdown("\n".join(f"- {z}" for z in view["zip_areas"]))
    st.caption(view["hint"])
    if zip_step.is_stale(wizard.config):
        st.warning("ZIP codes were changed elsewhere; reopen this step to reload them.")
    _nav(on_prev=zip_step.previous, on_next=zip_step.next)

elif current == SERVICES_STEP:
    if st.session_state.get("service_step") is None:
        st.session_state["service_step"] = wizard.mount_service_step()
    service_step = st.session_state["service_step"]
    view = service_step.render()

    services_col, preview_col = st.columns([1, 2])
    with services_col:
        st.markdown("#### Services")
        if view["empty_hint"]:
            st.info(view["empty_hint"])
        for service in view["services"]:
            st.checkbox(
                service["name"],
                value=service["selected"],
                key=f"service_toggle_{service['id']}",
                on_change=service_step.toggle,
                args=(service["id"],),
            )
    with preview_col:
        st.subheader(view["title"])
        st.caption("Pricing, add-ons and frequency are managed in Settings.")
        st.selectbox("Booking form preview", ["Select service"] + view["preview_options"], disabled=True)
    _nav(
        label="Continue to Custom Form",
        on_prev=service_step.previous,
        on_next=service_step.next,
        disabled=not view["can_continue"],
    )

elif current == FIELDS_STEP:
    palette_col, canvas_col = st.columns([1, 3])
    canvas = wizard.canvas()

    with palette_col:
        palette = wizard.palette()
        st.markdown(f"#### {palette.title}")
        for token in palette.tokens():
            if st.button(token.descriptor.label, key=f"palette_{token.id}", use_container_width=True):
                token.begin_drag()
                wizard.coordinator.drop(CANVAS_ID)
                st.rerun()

    with canvas_col:
        view = canvas.render()
        if view["empty_hint"]:
            st.info(view["empty_hint"])
        for i, field in enumerate(view["fields"]):
            label_col, up_col, down_col, del_col = st.columns([6, 1, 1, 1])
            label_col.markdown(f"**{field['label']}** · `{field['type']}`")
            if up_col.button("↑", key=f"up_{field['id']}", disabled=i == 0):
                canvas.move(i, i - 1)
                st.rerun()
            if down_col.button("↓", key=f"down_{field['id']}", disabled=i == len(view["fields"]) - 1):
                canvas.move(i, i + 1)
                st.rerun()
            if del_col.button("✕", key=f"del_{field['id']}"):
                canvas.delete(i)
                st.rerun()
    _nav()

else:
    st.subheader(current.title)
    preview_tab, test_tab = st.tabs(["Preview", "Test Calculator"])

    with preview_tab:
        for field in preview_fields(config):
            st.markdown(f"- **{field['label']}** `{field['key']}`")

    with test_tab:
        inputs_col, results_col = st.columns(2)
        with inputs_col:
            test_zip = st.text_input("ZIP Code", value="41107", max_chars=5)
            service_keys = [s.get("key") for s in config.services]
            test_service = st.selectbox("Service", [None] + service_keys)
            test_area = st.number_input("Area (m²)", min_value=0, value=75)
            frequency_keys = [f.get("key") for f in config.frequency_multipliers]
            test_frequency = st.selectbox("Frequency", [None] + frequency_keys)
        with results_col:
            if zip_accepted(config, test_zip):
                st.success(f"ZIP code {test_zip} is accepted")
            else:
                st.error(f"ZIP code {test_zip} is outside the service area")
            price = calculate_test_price(config, test_service, test_area, test_frequency)
            st.metric("Test price", f"{price} kr")

    with st.expander("Configuration"):
        st.json(config.to_wire())
    if not wizard.is_last_step:
        _nav()
    elif st.button("Previous", key="nav_prev"):
        wizard.go_previous()
        st.rerun()
