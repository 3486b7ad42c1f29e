"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from bodytrace.config import (
    BodytraceSettings,
    CurveType,
    DedupConfig,
    MaskConfig,
    PathConfig,
    ProcessingConfig,
    SingletonPolicy,
    get_default_settings,
)


class TestDefaults:
    """Tests for default settings."""

    def test_defaults(self) -> None:
        settings = get_default_settings()
        assert settings.mask.threshold == 0.5
        assert settings.mask.fallback_threshold is None
        assert settings.trace.max_steps == 5000
        assert settings.trace.min_points == 11
        assert settings.simplify.tolerance == 2.0
        assert settings.dedup.overlap_threshold == 0.7
        assert settings.dedup.singleton_policy is SingletonPolicy.DROP
        assert settings.path.curve_type is CurveType.QUADRATIC
        assert settings.processing.frame_stride == 1
        assert settings.logging.log_file is None


class TestValidation:
    """Tests for field validation."""

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_range(self, threshold: float) -> None:
        with pytest.raises(ValidationError):
            MaskConfig(threshold=threshold)

    def test_overlap_range(self) -> None:
        with pytest.raises(ValidationError):
            DedupConfig(overlap_threshold=1.2)

    def test_stride_positive(self) -> None:
        with pytest.raises(ValidationError):
            ProcessingConfig(frame_stride=0)

    def test_curve_type_from_string(self) -> None:
        assert PathConfig(curve_type="straight").curve_type is CurveType.STRAIGHT  # type: ignore[arg-type]

    def test_unknown_curve_type(self) -> None:
        with pytest.raises(ValidationError):
            PathConfig(curve_type="cubic")  # type: ignore[arg-type]


class TestSerialization:
    """Tests for settings round trips used by worker processes."""

    def test_json_dump_round_trip(self) -> None:
        settings = BodytraceSettings.model_validate(
            {
                "dedup": {"singleton_policy": "keep"},
                "path": {"curve_type": "straight", "precision": 3},
                "processing": {"frame_stride": 3},
            }
        )
        dumped = settings.model_dump(mode="json")
        assert dumped["dedup"]["singleton_policy"] == "keep"
        assert dumped["path"]["curve_type"] == "straight"

        restored = BodytraceSettings.model_validate(dumped)
        assert restored == settings
