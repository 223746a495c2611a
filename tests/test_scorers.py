import pytest

from pose_types import PostureMode, PostureStatus
from scorers import SittingScorer, StandingScorer, StandingThresholds
from scorers.base import status_for_score

from _helpers import sitting_frame, standing_frame


def test_status_bands():
    assert status_for_score(100) == PostureStatus.GOOD
    assert status_for_score(75) == PostureStatus.GOOD
    assert status_for_score(74) == PostureStatus.FAIR
    assert status_for_score(50) == PostureStatus.FAIR
    assert status_for_score(49) == PostureStatus.POOR
    assert status_for_score(0) == PostureStatus.POOR


class TestSittingScorer:
    def test_neutral_posture_scores_full_marks(self):
        result = SittingScorer().score(sitting_frame())
        assert result.score == 100
        assert result.status == PostureStatus.GOOD
        assert result.message == "Excellent sitting posture!"
        assert result.posture_mode == PostureMode.SITTING
        assert result.forward_head_angle == pytest.approx(0.0)
        assert result.shoulder_hip_angle is None
        assert result.metrics == {
            "earShoulderAlignment": pytest.approx(0.0),
            "noseShoulderAlignment": pytest.approx(0.0),
        }

    def test_forward_head_is_fair(self):
        result = SittingScorer().score(sitting_frame(ear_x=0.6))
        assert result.score == 70
        assert result.status == PostureStatus.FAIR
        assert result.message == "Head too far forward"
        assert result.metrics["earShoulderAlignment"] == pytest.approx(0.1)
        # atan2(0.1, 0.2)
        assert result.forward_head_angle == pytest.approx(26.565, abs=1e-3)

    def test_backward_head_is_also_penalised(self):
        result = SittingScorer().score(sitting_frame(ear_x=0.4))
        assert result.score == 70
        assert result.forward_head_angle == pytest.approx(-26.565, abs=1e-3)

    def test_small_head_offset_is_tolerated(self):
        assert SittingScorer().score(sitting_frame(ear_x=0.54)).score == 100

    def test_combined_penalties_are_poor(self):
        # 100 - 30 (head x) - 20 (head depth) - 6 (nose lean)
        result = SittingScorer().score(sitting_frame(ear_x=0.6, ear_z=-0.1, nose_x=0.62))
        assert result.score == 44
        assert result.status == PostureStatus.POOR
        assert result.message == "Slouching - sit up straight!"
        assert result.metrics["noseShoulderAlignment"] == pytest.approx(0.12)

    def test_ear_behind_shoulder_in_depth_is_not_penalised(self):
        assert SittingScorer().score(sitting_frame(ear_z=0.1)).score == 100

    def test_shoulder_imbalance(self):
        result = SittingScorer().score(sitting_frame(left_shoulder_y=0.4, right_shoulder_y=0.5))
        assert result.score == 90

    def test_score_is_clamped_at_zero(self):
        result = SittingScorer().score(sitting_frame(ear_x=1.0, ear_z=-0.5, nose_x=1.0))
        assert result.score == 0
        assert result.status == PostureStatus.POOR


class TestStandingScorer:
    def test_shoulders_behind_hips_is_excellent(self):
        result = StandingScorer().score(standing_frame(shoulder_z=0.05, hip_z=0.0))
        assert result.score == 100
        assert result.status == PostureStatus.GOOD
        assert result.message == "Excellent posture!"
        assert result.posture_mode == PostureMode.STANDING
        assert result.forward_head_angle is None
        assert result.metrics == {"hipAlignment": pytest.approx(0.05)}

    def test_aligned_shoulders_score_eighty(self):
        assert StandingScorer().score(standing_frame()).score == 80

    def test_lean_at_upper_boundary_uses_slight_lean_tier(self):
        # 80 - 0.02 * 400
        result = StandingScorer().score(standing_frame(shoulder_z=0.02, hip_z=0.0))
        assert result.score == 72
        assert result.status == PostureStatus.FAIR
        assert result.message == "Sit up straighter"

    def test_significant_slouch(self):
        # 60 - 0.05 * 600
        result = StandingScorer().score(standing_frame(shoulder_z=0.0, hip_z=0.05))
        assert result.score == 30
        assert result.status == PostureStatus.POOR
        assert result.message == "Slouching detected!"
        assert result.metrics["hipAlignment"] == pytest.approx(-0.05)

    def test_deep_slouch_floors_at_zero(self):
        assert StandingScorer().score(standing_frame(shoulder_z=-0.2, hip_z=0.0)).score == 0

    def test_horizontal_offset_penalty(self):
        result = StandingScorer().score(standing_frame(shoulder_z=0.05, shoulder_x=0.55))
        assert result.score == 90

    def test_shoulder_hip_angle_is_measured_from_image_vertical(self):
        # Shoulders straight above hips: y grows downward, so the angle is 180.
        result = StandingScorer().score(standing_frame())
        assert result.shoulder_hip_angle == pytest.approx(180.0)
        leaning = StandingScorer().score(standing_frame(shoulder_x=0.8))
        assert 0.0 <= leaning.shoulder_hip_angle < 180.0

    def test_custom_thresholds(self):
        scorer = StandingScorer(StandingThresholds(upright_lean=-0.01))
        assert scorer.score(standing_frame()).score == 100
