"""
Unit Tests for the form builder wizard and the details step
"""
import pytest

from calcbuilder.formbuilder.canvas import CANVAS_ID
from calcbuilder.formbuilder.configuration import FormConfiguration
from calcbuilder.formbuilder.details import clean_slug, generate_slug, validate_details
from calcbuilder.formbuilder.wizard import FormBuilderWizard, build_steps


class TestBuildSteps:

    def test_without_zip_areas(self):
        titles = [s.title for s in build_steps(FormConfiguration())]
        assert titles == ['Form Details', 'Service Selection', 'Custom Form Builder', 'Preview & Test']

    def test_with_zip_areas(self):
        titles = [s.title for s in build_steps(FormConfiguration(zip_areas=['41107']))]
        assert titles[1] == 'ZIP Code Validation'
        assert len(titles) == 5

    def test_steps_fixed_for_wizard_lifetime(self):
        wizard = FormBuilderWizard({'zipAreas': ['41107']})
        wizard.update_config({'zipAreas': []})
        assert len(wizard.steps) == 5


class TestNavigation:

    def test_next_and_previous_clamp(self):
        wizard = FormBuilderWizard()
        wizard.go_previous()
        assert wizard.current_step == 1
        for _ in range(10):
            wizard.go_next()
        assert wizard.current_step == 4
        assert wizard.is_last_step

    def test_go_to(self):
        wizard = FormBuilderWizard()
        wizard.go_to(3)
        assert wizard.current.title == 'Custom Form Builder'
        assert [wizard.step_state(n) for n in range(1, 5)] == ['complete', 'complete', 'current', 'pending']
        with pytest.raises(ValueError):
            wizard.go_to(0)
        with pytest.raises(ValueError):
            wizard.go_to(5)

    def test_render(self):
        rendered = FormBuilderWizard().render()
        assert rendered['current_step'] == 1
        assert rendered['steps'][0] == {
            'number': 1, 'key': 'details', 'title': 'Form Details', 'state': 'current'
        }


class TestDetailsStep:

    def test_submit_blocks_on_missing_name(self):
        wizard = FormBuilderWizard()
        errors = wizard.submit_details()
        assert errors == {
            'name': 'Calculator name is required',
            'slug': 'URL slug is required',
        }
        assert wizard.current_step == 1

    def test_submit_advances_when_valid(self):
        wizard = FormBuilderWizard()
        wizard.update_config({'name': 'Hemstädning', 'slug': 'hemstadning'})
        assert wizard.submit_details() == {}
        assert wizard.current_step == 2

    def test_invalid_slug(self):
        errors = validate_details(FormConfiguration(name='Calc', slug='Bad Slug'))
        assert errors == {'slug': 'Slug can only contain lowercase letters, numbers, and hyphens'}

    @pytest.mark.parametrize('name,slug', [
        ('Städproffs Stockholm AB', 'stadproffs-stockholm-ab'),
        ('Hemstäd  Malmö!', 'hemstad-malmo'),
        ('  Rengöring -- Plus ', 'rengoring-plus'),
        ('Café Städ', 'cafe-stad'),
        ('', ''),
    ])
    def test_generate_slug(self, name, slug):
        assert generate_slug(name) == slug

    def test_clean_slug(self):
        assert clean_slug('My Slug!!') == 'myslug'
        assert clean_slug('-week--ly-') == 'week-ly'


class TestStepsShareTheStore:

    def test_zip_step_writes_into_wizard_config(self):
        wizard = FormBuilderWizard({'zipAreas': ['41107']})
        wizard.go_to(2)
        step = wizard.mount_zip_step()
        step.set_raw_input('41107, 41121, 41254')
        assert wizard.config.zip_areas == ['41107', '41121', '41254']

        step.set_enabled(False)
        assert wizard.config.zip_areas == []

        step.next()
        assert wizard.current.title == 'Service Selection'
        step.previous()
        assert wizard.current.title == 'ZIP Code Validation'

    def test_canvas_writes_into_wizard_config(self):
        wizard = FormBuilderWizard()
        canvas = wizard.canvas()
        token = wizard.palette().tokens()[0]
        token.begin_drag()
        wizard.coordinator.drop(CANVAS_ID)
        assert [f.type for f in wizard.config.fields] == ['text']
        assert canvas.fields == wizard.config.fields
