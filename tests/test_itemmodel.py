import pytest

from corplayer.itemmodel import ItemModel, ModelIndex


def test_default_index_is_invalid_and_has_no_data():
    index = ModelIndex()
    assert not index.is_valid
    assert index.data(1) is None
    assert index == ModelIndex()


def test_append_and_read_back():
    model = ItemModel()
    index = model.append_row({1: "a", 2: "b"})
    assert model.row_count() == 1
    assert index == model.index(0, 0)
    assert index.data(1) == "a"
    assert model.data(index, 2) == "b"
    assert model.data(index, 3) is None


def test_out_of_range_index_is_invalid():
    model = ItemModel(column_count=2)
    model.append_row({})
    validity = [bool(model.index(row, column).is_valid) for row, column in [(1, 0), (0, 2), (0, 1)]]
    assert validity == [False, False, True]


def test_columns_share_row_data():
    model = ItemModel(column_count=2)
    model.append_row({5: "value"})
    assert model.index(0, 1).data(5) == "value"


def test_set_data_emits_change_once():
    events = []
    model = ItemModel()
    index = model.append_row({1: "old"})
    model.data_changed.connect(lambda tl, br, roles: events.append((tl, br, roles)))
    assert model.set_data(index, "new", 1) is True
    assert model.set_data(index, "new", 1) is True
    assert events == [(index, index, [1])]
    assert index.data(1) == "new"


def test_set_data_rejects_foreign_or_invalid_index():
    model = ItemModel()
    other = ItemModel()
    foreign = other.append_row({})
    model.append_row({})
    assert model.set_data(ModelIndex(), 1, 1) is False
    assert model.set_data(foreign, 1, 1) is False
    assert other.data(foreign, 1) is None


def test_indexes_of_different_models_differ():
    a, b = ItemModel(), ItemModel()
    assert a.append_row({}) != b.append_row({})


def test_column_count_must_be_positive():
    with pytest.raises(ValueError):
        ItemModel(column_count=0)