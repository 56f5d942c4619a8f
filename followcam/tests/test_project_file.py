"""Tests for app.project_file — JSON project load / save."""

import json

import pytest

from app.config import DEFAULT_SETTINGS, CameraSettings
from app.models import Geometry, Sample, ZoomRegion
from app.exporter import sample_transforms
from app.project_file import PROJ_EXT, ProjectData, load_project, parse_project, save_project


# ── Helpers ─────────────────────────────────────────────────────────


@pytest.fixture
def project(auto_region: ZoomRegion) -> ProjectData:
    return ProjectData(
        regions={auto_region.id: auto_region},
        samples=[
            Sample(timestamp=0.0, x=100, y=200),
            Sample(timestamp=0.5, x=110, y=210, type="click", pressed=True),
            Sample(timestamp=1.0, x=120, y=220),
        ],
        recording=Geometry(2560, 1440),
        video=Geometry(1920, 1080),
    )


def _write(tmp_path, data) -> str:
    path = tmp_path / "project.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


# ── save / load ─────────────────────────────────────────────────────


class TestSaveLoad:
    def test_roundtrip(self, tmp_path, project: ProjectData) -> None:
        path = save_project(str(tmp_path / "demo.json"), project)
        loaded = load_project(path)
        assert loaded.regions == project.regions
        assert loaded.samples == project.samples
        assert loaded.recording == project.recording
        assert loaded.video == project.video
        assert loaded.settings == DEFAULT_SETTINGS

    def test_extension_added(self, tmp_path, project: ProjectData) -> None:
        path = save_project(str(tmp_path / "demo"), project)
        assert path.endswith(PROJ_EXT)

    def test_default_settings_not_written(self, project: ProjectData) -> None:
        assert "cameraSettings" not in project.to_dict()

    def test_custom_settings_roundtrip(self, tmp_path, project: ProjectData) -> None:
        project.settings = CameraSettings(pan_smoothing=0.3)
        loaded = load_project(save_project(str(tmp_path / "demo.json"), project))
        assert loaded.settings.pan_smoothing == 0.3

    def test_video_defaults_to_recording(self, tmp_path) -> None:
        path = _write(tmp_path, {"recordingGeometry": {"width": 1280, "height": 720}})
        loaded = load_project(path)
        assert loaded.video is None
        assert loaded.video_dimensions == Geometry(1280, 720)
        assert loaded.samples == []
        assert loaded.regions == {}


# ── Errors ──────────────────────────────────────────────────────────


class TestLoadErrors:
    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ValueError, match="not found"):
            load_project(str(tmp_path / "nope.json"))

    def test_not_json(self, tmp_path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Not a valid project file"):
            load_project(str(path))

    def test_not_an_object(self, tmp_path) -> None:
        with pytest.raises(ValueError):
            load_project(_write(tmp_path, [1, 2, 3]))

    def test_missing_recording_geometry(self, tmp_path) -> None:
        with pytest.raises(ValueError, match="recordingGeometry"):
            load_project(_write(tmp_path, {"metadata": []}))

    def test_malformed_sample(self, tmp_path) -> None:
        data = {"recordingGeometry": {"width": 10, "height": 10}, "metadata": [{"x": 1}]}
        with pytest.raises(ValueError, match="Malformed"):
            load_project(_write(tmp_path, data))

    def test_malformed_regions(self, tmp_path) -> None:
        data = {"recordingGeometry": {"width": 10, "height": 10}, "zoomRegions": ["r1"]}
        with pytest.raises(ValueError, match="Malformed"):
            load_project(_write(tmp_path, data))


# ── parse_project ───────────────────────────────────────────────────


class TestParseProject:
    def test_region_id_from_key(self) -> None:
        data = {
            "recordingGeometry": {"width": 100, "height": 100},
            "zoomRegions": {"r7": {"startTime": 1, "duration": 2, "zoomLevel": 2}},
        }
        project = parse_project(data)
        assert project.regions["r7"].id == "r7"

    def test_out_of_order_samples_sorted(self, caplog) -> None:
        data = {
            "recordingGeometry": {"width": 100, "height": 100},
            "metadata": [
                {"timestamp": 1.0, "x": 1, "y": 1},
                {"timestamp": 0.5, "x": 2, "y": 2},
            ],
        }
        with caplog.at_level("WARNING"):
            project = parse_project(data)
        assert [s.timestamp for s in project.samples] == [0.5, 1.0]
        assert "out of order" in caplog.text

    def test_invalid_settings_ignored(self, caplog) -> None:
        data = {
            "recordingGeometry": {"width": 100, "height": 100},
            "cameraSettings": ["not", "a", "dict"],
        }
        with caplog.at_level("WARNING"):
            project = parse_project(data)
        assert project.settings == DEFAULT_SETTINGS

    @pytest.mark.parametrize(
        "overrides",
        [{"referenceFrameInterval": 0}, {"panSmoothing": "fast"}, {"convergencePower": -2}],
    )
    def test_bad_settings_fall_back_to_defaults(
        self, overrides: dict, auto_region: ZoomRegion, caplog
    ) -> None:
        data = {
            "recordingGeometry": {"width": 1920, "height": 1080},
            "metadata": [{"timestamp": i / 10, "x": 900, "y": 500} for i in range(50)],
            "zoomRegions": {auto_region.id: auto_region.to_dict()},
            "cameraSettings": overrides,
        }
        with caplog.at_level("WARNING"):
            project = parse_project(data)
        assert project.settings == DEFAULT_SETTINGS
        assert "Ignoring invalid cameraSettings" in caplog.text

        # The whole region, hold phase included, samples without raising
        track = sample_transforms(
            project.regions, project.samples, project.recording,
            Geometry(1920, 1080), fps=10,
        )
        assert track.scale.max() == pytest.approx(2.0)

    def test_camel_case_settings_applied(self) -> None:
        data = {
            "recordingGeometry": {"width": 100, "height": 100},
            "cameraSettings": {"panSmoothing": 0.4, "seekThreshold": 1},
        }
        settings = parse_project(data).settings
        assert settings.pan_smoothing == 0.4
        assert settings.seek_threshold == 1.0
