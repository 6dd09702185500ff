import pytest

import poses
from HandData import HandFrame
from HandFeatures import FingerState, HandFeatureExtractor


@pytest.fixture
def extractor():
    return HandFeatureExtractor()


def test_open_palm_flags(extractor):
    f = extractor.extract(poses.open_palm())
    assert f.fingers == FingerState(True, True, True, True, True)
    assert f.extended_count == 5
    assert not f.fingers.four_curled
    assert f.palm_size == pytest.approx(0.22)
    assert not f.pointing_sideways
    assert not f.pointing_down


def test_fist_flags(extractor):
    f = extractor.extract(poses.fist_thumb_over())
    assert f.fingers == FingerState(False, False, False, False, False)
    assert f.fingers.four_curled
    assert f.extended_count == 0


def test_only_ignores_thumb(extractor):
    with_thumb = extractor.extract(poses.l_shape()).fingers
    without_thumb = extractor.extract(poses.hooked_index()).fingers
    assert with_thumb.thumb and not without_thumb.thumb
    assert with_thumb.only("index")
    assert without_thumb.only("index")
    assert not with_thumb.only("index", "middle")


def test_thumb_extended_when_splayed_off_palm(extractor):
    # tip is right of the IP joint but further from the index knuckle
    f = extractor.extract(poses.thumb_between_v())
    assert f.fingers.thumb


def test_direction_flags(extractor):
    sideways = extractor.extract(poses.index_sideways())
    assert sideways.pointing_sideways and not sideways.pointing_down

    down = extractor.extract(poses.index_down())
    assert down.pointing_sideways and down.pointing_down

    straight_down = extractor.extract(poses.two_down())
    assert straight_down.pointing_down and not straight_down.pointing_sideways


def test_normalized_distances(extractor):
    f = extractor.extract(poses.circle())
    assert f.thumb_index_dist == pytest.approx(0.02)
    assert f.thumb_index_norm == pytest.approx(0.02 / 0.22)

    spread = extractor.extract(poses.two_spread())
    assert spread.index_middle_norm > 0.25
    together = extractor.extract(poses.two_together())
    assert together.index_middle_norm < 0.25


def test_extend_margin_is_configurable(extractor):
    assert extractor.extract(poses.hooked_index()).fingers.index
    extractor.configure(extend_margin=0.05)
    assert not extractor.extract(poses.hooked_index()).fingers.index
    extractor.configure()
    assert extractor.extend_margin == 0.05


def test_same_frame_same_features(extractor):
    frame = poses.crossed()
    assert extractor.extract(frame) == extractor.extract(frame)


def test_degenerate_palm_rejected(extractor):
    assert extractor.extract(HandFrame.from_landmarks([(0.3, 0.3)] * 21)) is None


@pytest.mark.parametrize(
    "landmarks",
    [
        None,
        [],
        [(0.1, 0.2)] * 20,
        [(0.1, 0.2)] * 22,
        42,
        [{"x": None, "y": 0.5}] * 21,
        [(0.5, "n/a", 0.0)] * 21,
    ],
)
def test_unusable_input_rejected(extractor, landmarks):
    assert extractor.extract(landmarks) is None
