import pytest

from recommender.data_loader import load_interactions
from recommender.errors import MalformedRecordError
from recommender.store import InteractionStore


def test_missing_file_falls_back_to_demo_data(tmp_path):
    records = load_interactions(tmp_path / "nope.csv")
    assert {"user_id": 101, "item_id": "A"} in records
    assert len(records) == 7


def test_reads_csv_and_ignores_extra_columns(tmp_path):
    path = tmp_path / "interactions.csv"
    path.write_text("user_id,item_id,rating\n1,10,5.0\n1,11,3.0\n2,10,4.0\n")
    records = load_interactions(path)
    assert records == [
        {"user_id": 1, "item_id": 10},
        {"user_id": 1, "item_id": 11},
        {"user_id": 2, "item_id": 10},
    ]
    assert type(records[0]["user_id"]) is int


def test_reads_tab_separated_files(tmp_path):
    path = tmp_path / "interactions.tsv"
    path.write_text("user_id\titem_id\nalice\tbook\n")
    assert load_interactions(path, sep="\t") == [{"user_id": "alice", "item_id": "book"}]


def test_missing_columns_raise(tmp_path):
    path = tmp_path / "interactions.csv"
    path.write_text("user,item\n1,10\n")
    with pytest.raises(ValueError, match="must contain columns"):
        load_interactions(path)


def test_empty_cells_are_left_to_the_store(tmp_path):
    path = tmp_path / "interactions.csv"
    path.write_text("user_id,item_id\n1,a\n2,\n3,c\n")
    records = load_interactions(path)
    assert records[1] == {"user_id": 2, "item_id": None}

    with pytest.raises(MalformedRecordError):
        InteractionStore.load(records)
    store = InteractionStore.load(records, on_malformed="skip")
    assert store.all_users() == {1, 3}
    assert store.skipped == 1


def test_ids_keep_their_text_when_a_numeric_column_has_blanks(tmp_path):
    path = tmp_path / "interactions.csv"
    path.write_text("user_id,item_id\n1,10\n2,\n1,007\n3,10.0\n")
    records = load_interactions(path)
    assert records == [
        {"user_id": 1, "item_id": 10},
        {"user_id": 2, "item_id": None},
        {"user_id": 1, "item_id": "007"},
        {"user_id": 3, "item_id": "10.0"},
    ]
    assert type(records[0]["item_id"]) is int
