import json
from types import SimpleNamespace

import pytest

import poses
from HandData import (
    INDEX_TIP,
    NUM_LANDMARKS,
    WRIST,
    HandData,
    HandFrame,
    InvalidHandFrame,
    LandmarkPoint,
)


def points(n=NUM_LANDMARKS):
    return [(i / 100.0, i / 50.0, -i / 1000.0) for i in range(n)]


def test_from_tuples():
    frame = HandFrame.from_landmarks(points())
    assert len(frame) == NUM_LANDMARKS
    assert frame[INDEX_TIP] == LandmarkPoint(0.08, 0.16, -0.008)


def test_from_pairs_defaults_z():
    frame = HandFrame.from_landmarks([(0.1, 0.2)] * NUM_LANDMARKS)
    assert frame[WRIST].z == 0.0


def test_from_dicts_and_objects():
    dicts = [{"x": x, "y": y, "z": z} for x, y, z in points()]
    objects = [SimpleNamespace(x=x, y=y, z=z) for x, y, z in points()]
    assert HandFrame.from_landmarks(dicts) == HandFrame.from_landmarks(objects)


def test_unwraps_landmark_list():
    wrapped = SimpleNamespace(landmark=[SimpleNamespace(x=x, y=y, z=z) for x, y, z in points()])
    assert HandFrame.from_landmarks(wrapped) == HandFrame.from_landmarks(points())


def test_frame_passes_through():
    frame = HandFrame.from_landmarks(points())
    assert HandFrame.from_landmarks(frame) is frame


@pytest.mark.parametrize(
    "landmarks",
    [
        None,
        42,
        points(0),
        points(20),
        points(22),
        [{"x": 0.1}] * NUM_LANDMARKS,
        ["ab"] * NUM_LANDMARKS,
        [(0.1,)] * NUM_LANDMARKS,
        [{"x": None, "y": 0.5}] * NUM_LANDMARKS,
        [(0.5, "n/a", 0.0)] * NUM_LANDMARKS,
        [SimpleNamespace(x=0.5, y=0.5, z=None)] * NUM_LANDMARKS,
    ],
)
def test_invalid_landmarks_raise(landmarks):
    with pytest.raises(InvalidHandFrame):
        HandFrame.from_landmarks(landmarks)


def test_invalid_frame_is_value_error():
    with pytest.raises(ValueError):
        HandFrame([LandmarkPoint(0.0, 0.0)] * 3)


def test_frame_is_hashable_and_round_trips_to_list():
    frame = poses.open_palm()
    assert hash(frame) == hash(poses.open_palm())
    assert HandFrame.from_landmarks(frame.to_list()) == frame
    assert "wrist=(0.500, 0.800" in repr(frame)


def test_empty_hand_to_dict():
    data = HandData().to_dict()
    assert data["letter"] == ""
    assert data["stable_letter"] is None
    assert data["display_letter"] is None
    assert data["fingers"] is None
    assert data["wrist"] == {"x": 0.0, "y": 0.0, "z": 0.0}
    json.dumps(data)


def test_to_dict_reports_wrist():
    h = HandData()
    h.frame = poses.open_palm()
    assert h.to_dict()["wrist"] == {"x": 0.5, "y": 0.8, "z": 0.0}


def test_non_numeric_coordinate_message():
    with pytest.raises(InvalidHandFrame, match="non-numeric"):
        HandFrame.from_landmarks([(0.5, "n/a", 0.0)] * NUM_LANDMARKS)
    with pytest.raises(InvalidHandFrame, match="missing key"):
        HandFrame.from_landmarks([{"x": 0.1}] * NUM_LANDMARKS)
