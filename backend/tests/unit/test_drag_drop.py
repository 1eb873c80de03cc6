"""
Unit Tests for the field catalog, palette, drag coordination and canvas
"""
import dataclasses

import pytest

from calcbuilder.formbuilder.canvas import CANVAS_ID, FormCanvas, array_move, generate_field
from calcbuilder.formbuilder.drag_drop import (
    DragCoordinator, DragDropError, DraggableFieldToken, FieldPalette, InMemoryDragCoordinator
)
from calcbuilder.formbuilder.field_catalog import (
    FIELD_TYPES, FieldTypeDescriptor, UnknownFieldTypeError, get_field_type
)


class RecordingCoordinator(DragCoordinator):
    """Alternative coordinator implementation used to check the interface"""

    def __init__(self):
        self.started = []
        self._active = None

    @property
    def active(self):
        return self._active

    def begin_drag(self, source_id, data=None):
        self.started.append((source_id, data))

    def end_drag(self):
        pass

    def on_drop(self, source_id, target_id):
        return (source_id, target_id)


class TestFieldCatalog:

    def test_catalog_order(self):
        assert [f.type for f in FIELD_TYPES] == [
            'text', 'checkbox', 'date', 'time', 'dropdown', 'slider',
            'zipCode', 'serviceSelector', 'group', 'divider',
        ]

    def test_lookup(self):
        assert get_field_type('zipCode').label == 'ZIP Code'

    def test_unknown_type(self):
        with pytest.raises(UnknownFieldTypeError):
            get_field_type('signature')

    def test_descriptor_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            FIELD_TYPES[0].label = 'Changed'


class TestFieldPalette:

    @pytest.mark.parametrize('size', [0, 1, 3, len(FIELD_TYPES)])
    def test_one_token_per_entry_in_order(self, size):
        catalog = FIELD_TYPES[:size]
        palette = FieldPalette(InMemoryDragCoordinator(), catalog)
        rendered = palette.render()['tokens']
        assert [t['id'] for t in rendered] == [f.type for f in catalog]
        assert [t['label'] for t in rendered] == [f.label for f in catalog]

    def test_default_catalog(self):
        palette = FieldPalette(InMemoryDragCoordinator())
        assert palette.render()['title'] == 'Elements'
        assert len(palette.tokens()) == len(FIELD_TYPES)

    def test_custom_catalog(self):
        catalog = [FieldTypeDescriptor('rating', 'Rating')]
        assert FieldPalette(InMemoryDragCoordinator(), catalog).render()['tokens'] == [
            {'id': 'rating', 'label': 'Rating', 'lifted': False}
        ]


class TestDraggableFieldToken:

    def test_begin_drag_announces_type(self):
        coordinator = RecordingCoordinator()
        DraggableFieldToken(get_field_type('date'), coordinator).begin_drag()
        assert coordinator.started == [('date', {'from_palette': True})]

    def test_lifted_only_while_dragging(self):
        coordinator = InMemoryDragCoordinator()
        tokens = FieldPalette(coordinator).tokens()
        text, checkbox = tokens[0], tokens[1]

        text.begin_drag()
        assert text.is_lifted
        assert not checkbox.is_lifted
        assert text.render()['lifted'] is True

        coordinator.end_drag()
        assert not text.is_lifted


class TestInMemoryDragCoordinator:

    def test_drop_without_drag(self):
        with pytest.raises(DragDropError):
            InMemoryDragCoordinator().drop(CANVAS_ID)

    def test_drop_on_unknown_target_ends_session(self):
        coordinator = InMemoryDragCoordinator()
        coordinator.begin_drag('text')
        with pytest.raises(DragDropError):
            coordinator.drop('sidebar')
        assert coordinator.active is None

    def test_drop_dispatches_payload(self):
        coordinator = InMemoryDragCoordinator()
        received = []
        coordinator.register_drop_target('bin', lambda source, data: received.append((source, data)))
        coordinator.begin_drag('slider', {'from_palette': True})
        coordinator.drop('bin')
        assert received == [('slider', {'from_palette': True})]
        assert coordinator.active is None


class TestFormCanvas:

    def setup_method(self):
        self.changes = []
        self.coordinator = InMemoryDragCoordinator()
        self.canvas = FormCanvas([], self.changes.append, self.coordinator)

    def _drop(self, field_type):
        DraggableFieldToken(get_field_type(field_type), self.coordinator).begin_drag()
        return self.coordinator.drop(CANVAS_ID)

    def test_palette_drop_adds_field(self):
        placed = self._drop('text')
        assert placed.type == 'text'
        assert placed.label == 'Text'
        assert placed.id.startswith('text_')
        assert self.changes[-1] == {'fields': [placed.model_dump()]}
        assert self.canvas.render()['empty_hint'] is None

    def test_empty_canvas_hint(self):
        assert self.canvas.render()['empty_hint'] == 'Drag fields here to build your form'

    def test_non_palette_drop_ignored(self):
        self.coordinator.begin_drag('text_123')
        assert self.coordinator.drop(CANVAS_ID) is None
        assert self.canvas.fields == []
        assert self.changes == []

    def test_move_and_delete(self):
        first = self._drop('text')
        second = self._drop('date')
        third = self._drop('divider')

        self.canvas.move(2, 0)
        assert [f.id for f in self.canvas.fields] == [third.id, first.id, second.id]

        self.canvas.move_onto(second.id, third.id)
        assert [f.id for f in self.canvas.fields] == [second.id, third.id, first.id]

        removed = self.canvas.delete(1)
        assert removed.id == third.id
        assert [f['id'] for f in self.changes[-1]['fields']] == [second.id, first.id]

    def test_move_same_position_does_not_write(self):
        self._drop('text')
        writes = len(self.changes)
        self.canvas.move(0, 0)
        assert len(self.changes) == writes

    def test_index_errors(self):
        self._drop('text')
        with pytest.raises(IndexError):
            self.canvas.move(0, 3)
        with pytest.raises(IndexError):
            self.canvas.delete(5)


class TestHelpers:

    def test_array_move(self):
        assert array_move(['a', 'b', 'c', 'd'], 0, 2) == ['b', 'c', 'a', 'd']
        assert array_move(['a', 'b', 'c'], 2, 0) == ['c', 'a', 'b']

    def test_generate_field_ids_are_unique(self):
        ids = {generate_field('checkbox').id for _ in range(50)}
        assert len(ids) == 50

    def test_generate_field_label(self):
        assert generate_field('zipCode').label == 'ZipCode'

    def test_generate_field_unknown_type(self):
        with pytest.raises(UnknownFieldTypeError):
            generate_field('signature')
