"""Project file management — read / write camera projects as JSON.

A project file holds everything the camera needs:
  - metadata           — pointer samples (timestamp in seconds, x, y, ...)
  - zoomRegions        — mapping of region id → region
  - recordingGeometry  — pixel space of the samples
  - videoDimensions    — size of the recorded video (defaults to recordingGeometry)
  - cameraSettings     — optional overrides of the tuning constants
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import DEFAULT_SETTINGS, CameraSettings
from .models import Geometry, Sample, ZoomRegion

logger = logging.getLogger(__name__)

PROJ_EXT = ".json"


@dataclass
class ProjectData:
    """Parsed contents of a project file."""
    regions: Dict[str, ZoomRegion]
    samples: List[Sample]
    recording: Geometry
    video: Optional[Geometry] = None
    settings: CameraSettings = field(default_factory=lambda: DEFAULT_SETTINGS)

    @property
    def video_dimensions(self) -> Geometry:
        return self.video if self.video is not None else self.recording

    def to_dict(self) -> dict:
        data = {
            "metadata": [s.to_dict() for s in self.samples],
            "zoomRegions": {rid: r.to_dict() for rid, r in self.regions.items()},
            "recordingGeometry": self.recording.to_dict(),
        }
        if self.video is not None:
            data["videoDimensions"] = self.video.to_dict()
        if self.settings != DEFAULT_SETTINGS:
            data["cameraSettings"] = self.settings.to_dict()
        return data


def save_project(output_path: str, project: ProjectData) -> str:
    """Write *project* as JSON.  Returns the final output path."""
    if not output_path.lower().endswith(PROJ_EXT):
        output_path += PROJ_EXT
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(project.to_dict(), f, indent=2)
    return output_path


def parse_project(data: dict) -> ProjectData:
    """Build :class:`ProjectData` from an already-decoded project dict.

    Raises ``ValueError`` if a required section is missing or malformed.
    """
    if "recordingGeometry" not in data:
        raise ValueError("Project is missing recordingGeometry")

    try:
        recording = Geometry.from_dict(data["recordingGeometry"])
        video = Geometry.from_dict(data["videoDimensions"]) if "videoDimensions" in data else None
        samples = [Sample.from_dict(m) for m in data.get("metadata", [])]
        regions = {
            str(rid): ZoomRegion.from_dict({**r, "id": r.get("id", rid)})
            for rid, r in data.get("zoomRegions", {}).items()
        }
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Malformed project data: {exc}") from exc

    settings = DEFAULT_SETTINGS
    if "cameraSettings" in data:
        try:
            settings = CameraSettings.from_dict(data["cameraSettings"])
        except ValueError as exc:
            logger.warning("Ignoring invalid cameraSettings: %s", exc)

    if any(b.timestamp < a.timestamp for a, b in zip(samples, samples[1:])):
        logger.warning("Samples were out of order, sorting %d samples by timestamp", len(samples))
        samples.sort(key=lambda s: s.timestamp)

    for region in regions.values():
        if region.duration <= 0:
            logger.warning("Zoom region %s has non-positive duration", region.id)

    return ProjectData(
        regions=regions,
        samples=samples,
        recording=recording,
        video=video,
        settings=settings,
    )


def load_project(input_path: str) -> ProjectData:
    """Read and parse a project file.

    Raises ``ValueError`` if the file is missing, not JSON, or malformed.
    """
    if not os.path.isfile(input_path):
        raise ValueError(f"Project file not found: {input_path}")

    with open(input_path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Not a valid project file: {input_path}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Not a valid project file: {input_path}")

    project = parse_project(data)
    logger.info(
        "Loaded project %s: %d samples, %d zoom regions",
        os.path.basename(input_path), len(project.samples), len(project.regions),
    )
    return project
