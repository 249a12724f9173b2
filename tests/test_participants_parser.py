import json

import pytest

from meetpoint.analysis.types import GeoPoint, Participant
from meetpoint.parsers.participants import (
    ParticipantFileError,
    load_participants,
    parse_participants,
)

ROWS = [
    {"name": "A", "lat": 37.5665, "lng": 126.978, "weight": 2},
    {"name": "B", "lat": 37.5, "lng": 127.0},
    {"lat": 37.51, "lng": 127.1, "weight": 0.5},
]


def write_json(tmp_path, data, name="people.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_json_list(tmp_path):
    people = load_participants(write_json(tmp_path, ROWS))
    assert people == [
        Participant("A", GeoPoint(37.5665, 126.978), 2.0),
        Participant("B", GeoPoint(37.5, 127.0), 1.0),
        Participant("", GeoPoint(37.51, 127.1), 0.5),
    ]


def test_json_object_with_participants_key(tmp_path):
    path = write_json(tmp_path, {"participants": ROWS})
    assert len(load_participants(path)) == 3


def test_json_is_parsed_lazily(tmp_path):
    records = parse_participants(write_json(tmp_path, ROWS))
    first = next(records)
    assert (first.name, first.lat, first.lng, first.weight) == ("A", 37.5665, 126.978, 2.0)


def test_csv(tmp_path):
    path = tmp_path / "people.csv"
    path.write_text(
        "Name, Lat, Lng, Weight\n"
        "A, 37.5665, 126.978, 2\n"
        "\n"
        "B,37.5,127.0,\n"
        ",37.51,127.1,0.5\n",
        encoding="utf-8",
    )
    people = load_participants(path)
    assert [p.name for p in people] == ["A", "B", ""]
    assert people[0].location == GeoPoint(37.5665, 126.978)
    assert [p.weight for p in people] == [2.0, 1.0, 0.5]


def test_csv_missing_column(tmp_path):
    path = tmp_path / "people.csv"
    path.write_text("name,lat\nA,37.5\n", encoding="utf-8")
    with pytest.raises(ParticipantFileError, match="lng"):
        load_participants(path)


def test_csv_bad_row_reports_line(tmp_path):
    path = tmp_path / "people.csv"
    path.write_text("name,lat,lng\nA,37.5,127.0\nB,north,127.0\n", encoding="utf-8")
    with pytest.raises(ParticipantFileError, match="line 3"):
        load_participants(path)


@pytest.mark.parametrize(
    "row",
    [
        {"lat": 91, "lng": 0},
        {"lat": 0, "lng": -181},
        {"lat": 0, "lng": 0, "weight": -1},
        {"lng": 0},
    ],
)
def test_invalid_json_entries(tmp_path, row):
    with pytest.raises(ParticipantFileError, match="entry 1"):
        load_participants(write_json(tmp_path, [row]))


def test_malformed_json(tmp_path):
    path = tmp_path / "people.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(ParticipantFileError, match="invalid JSON"):
        load_participants(path)


def test_json_wrong_shape(tmp_path):
    with pytest.raises(ParticipantFileError, match="expected a list"):
        load_participants(write_json(tmp_path, {"people": ROWS}))


def test_unsupported_extension(tmp_path):
    path = tmp_path / "people.txt"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ParticipantFileError, match="unsupported"):
        parse_participants(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_participants(tmp_path / "nope.json")
