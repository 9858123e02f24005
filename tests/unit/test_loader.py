import json
import logging

import pytest

from choreolib.config import SPEC_VERSION
from choreolib.loader import ChoreoLoader, load_trajectory_string
from choreolib.trajectory import DriveType, EventMarker, ProjectFile, SwerveSample
from choreolib.utils.errors import ChoreoConfigError, TrajectoryLoadError
from tests.utils import sample_dict, trajectory_document

SWERVE_PROJECT = ProjectFile(version=SPEC_VERSION, type="Swerve")


def _doc_text(**kwargs) -> str:
    kwargs.setdefault("samples", [sample_dict(0.0), sample_dict(1.0, 1.0)])
    return json.dumps(trajectory_document("auto", **kwargs))


# ----- project file -----

@pytest.mark.integration
def test_load_project_is_memoized(deploy_dir, loader):
    project = loader.load_project()
    assert project == ProjectFile(version=SPEC_VERSION, type="Swerve", name="test")
    assert project.drive_type is DriveType.SWERVE

    # Later edits on disk are not picked up
    (deploy_dir / "test.chor").write_text(json.dumps({"version": "v1", "type": "Differential"}))
    assert loader.load_project() is project


@pytest.mark.integration
def test_load_project_missing(tmp_path):
    with pytest.raises(ChoreoConfigError, match="Could not find project file"):
        ChoreoLoader(tmp_path).load_project()


@pytest.mark.integration
def test_load_project_multiple(deploy_dir, loader):
    (deploy_dir / "other.chor").write_text(json.dumps({"version": SPEC_VERSION, "type": "Swerve"}))
    with pytest.raises(ChoreoConfigError, match="multiple project files"):
        loader.load_project()


@pytest.mark.integration
def test_load_project_wrong_version(tmp_path):
    (tmp_path / "p.chor").write_text(json.dumps({"version": "v2024.0.0", "type": "Swerve"}))
    with pytest.raises(ChoreoConfigError, match="Wrong version v2024.0.0"):
        ChoreoLoader(tmp_path).load_project()


@pytest.mark.integration
def test_load_project_unparseable(tmp_path):
    (tmp_path / "p.chor").write_text("{not json")
    with pytest.raises(ChoreoConfigError, match="Could not parse project file"):
        ChoreoLoader(tmp_path).load_project()


def test_project_drive_type_unknown():
    assert ProjectFile(version=SPEC_VERSION, type="Tank").drive_type is None


# ----- trajectory documents -----

def test_load_trajectory_string_builds_swerve_trajectory():
    traj = load_trajectory_string(_doc_text(splits=[0]), SWERVE_PROJECT)
    assert traj.name == "auto"
    assert all(isinstance(s, SwerveSample) for s in traj.samples)
    assert [s.t for s in traj.samples] == [0.0, 1.0]
    assert traj.splits == (0,)


@pytest.mark.parametrize(
    "splits,expected",
    [([], (0,)), ([3, 5], (0, 3, 5)), ([0, 2], (0, 2))],
)
def test_splits_always_start_at_zero(splits, expected):
    traj = load_trajectory_string(_doc_text(splits=splits), SWERVE_PROJECT)
    assert traj.splits == expected


def test_invalid_event_markers_are_discarded():
    events = [
        {"event": "intake", "timestamp": 0.5},
        {"event": "", "timestamp": 0.7},
        {"event": "late", "timestamp": -0.1},
        {"name": "shoot", "from": {"target": 3, "targetTimestamp": 0.75, "offset": {"exp": "0.25 s", "val": 0.25}}},
        {"name": "orphan", "from": {"target": None, "targetTimestamp": None, "offset": {"val": 0.0}}},
        "garbage",
    ]
    traj = load_trajectory_string(_doc_text(events=events), SWERVE_PROJECT)
    assert list(traj.events) == [EventMarker(0.5, "intake"), EventMarker(1.0, "shoot")]
    assert all(e.timestamp >= 0 and e.event for e in traj.events)


def test_trajectory_version_mismatch_is_fatal():
    with pytest.raises(ChoreoConfigError, match="auto.traj: Wrong version"):
        load_trajectory_string(_doc_text(version="v2024.0.0"), SWERVE_PROJECT)


def test_differential_project_is_unsupported():
    project = ProjectFile(version=SPEC_VERSION, type="Differential")
    with pytest.raises(ChoreoConfigError, match="Differential samples are not supported"):
        load_trajectory_string(_doc_text(), project)


def test_unknown_project_type_is_rejected():
    project = ProjectFile(version=SPEC_VERSION, type="Tank")
    with pytest.raises(ChoreoConfigError, match="Unknown project type: Tank"):
        load_trajectory_string(_doc_text(), project)


@pytest.mark.parametrize(
    "document",
    [
        [],
        {"version": SPEC_VERSION},
        {"name": "auto", "version": SPEC_VERSION, "events": []},
        {"name": "auto", "version": SPEC_VERSION, "trajectory": {"splits": []}},
        {"name": "auto", "version": SPEC_VERSION, "trajectory": {"splits": ["x"], "samples": []}},
        {"name": "auto", "version": SPEC_VERSION, "trajectory": {"splits": [0, 2.7], "samples": []}},
        {"name": "auto", "version": SPEC_VERSION, "trajectory": {"splits": [0, True], "samples": []}},
        {"name": "auto", "version": SPEC_VERSION, "trajectory": {"splits": [0, -2], "samples": []}},
        {"name": "auto", "version": SPEC_VERSION, "trajectory": {"splits": [0, 3, 1], "samples": []}},
        {"name": "auto", "version": SPEC_VERSION, "trajectory": {"splits": 3, "samples": []}},
        {"name": "auto", "version": SPEC_VERSION, "trajectory": {"samples": [{"t": "soon"}]}},
        {"name": "auto", "version": SPEC_VERSION, "trajectory": {"samples": [1, 2]}},
    ],
)
def test_malformed_document_shape(document):
    with pytest.raises(TrajectoryLoadError):
        load_trajectory_string(json.dumps(document), SWERVE_PROJECT)


def test_swerve_forces_are_normalized_at_load():
    samples = [sample_dict(0.0, fx=None, fy=[1, 2]), sample_dict(1.0, fx=[1, 2, 3, 4])]
    traj = load_trajectory_string(_doc_text(samples=samples), SWERVE_PROJECT)
    assert traj.samples[0].fx.tolist() == [0.0] * 4
    assert traj.samples[0].fy.tolist() == [0.0] * 4
    assert traj.samples[1].fx.tolist() == [1.0, 2.0, 3.0, 4.0]


# ----- loading from the deploy directory -----

@pytest.mark.integration
@pytest.mark.parametrize("name", ["auto", "auto.traj"])
def test_load_trajectory_with_or_without_extension(loader, write_trajectory, name):
    write_trajectory("auto", trajectory_document("auto", [sample_dict(0.0), sample_dict(2.0, 4.0)]))
    traj = loader.load_trajectory(name)
    assert traj is not None
    assert traj.name == "auto"
    assert traj.sample_at(1.0).x == pytest.approx(2.0)


@pytest.mark.integration
def test_missing_trajectory_file_is_recoverable(loader, caplog):
    with caplog.at_level(logging.ERROR, logger="choreolib.loader"):
        assert loader.load_trajectory("nope") is None
    assert "Could not find trajectory file" in caplog.text


@pytest.mark.integration
def test_unparseable_trajectory_file_is_recoverable(loader, write_trajectory, caplog):
    write_trajectory("broken", '{"name": "broken", ')
    with caplog.at_level(logging.ERROR, logger="choreolib.loader"):
        assert loader.load_trajectory("broken") is None
    assert "Could not parse trajectory file" in caplog.text


@pytest.mark.integration
def test_undecodable_trajectory_file_is_recoverable(loader, deploy_dir, caplog):
    (deploy_dir / "bad.traj").write_bytes(b'{"name": "bad\xff\xfe"}')
    with caplog.at_level(logging.ERROR, logger="choreolib.loader"):
        assert loader.load_trajectory("bad") is None
    assert "Could not read trajectory file" in caplog.text


@pytest.mark.integration
def test_undecodable_project_file(tmp_path):
    (tmp_path / "p.chor").write_bytes(b'{"version": "\xff"}')
    with pytest.raises(ChoreoConfigError, match="Could not parse project file"):
        ChoreoLoader(tmp_path).load_project()


@pytest.mark.integration
def test_malformed_trajectory_file_is_recoverable(loader, write_trajectory):
    write_trajectory("shape", {"name": "shape", "version": SPEC_VERSION})
    assert loader.load_trajectory("shape") is None


@pytest.mark.integration
def test_trajectory_version_mismatch_propagates_from_file(loader, write_trajectory):
    write_trajectory("old", trajectory_document("old", [sample_dict(0.0)], version="v2024.0.0"))
    with pytest.raises(ChoreoConfigError):
        loader.load_trajectory("old")


@pytest.mark.integration
def test_missing_project_file_is_fatal_for_trajectory_load(tmp_path):
    (tmp_path / "auto.traj").write_text(json.dumps(trajectory_document("auto", [sample_dict(0.0)])))
    with pytest.raises(ChoreoConfigError):
        ChoreoLoader(tmp_path).load_trajectory("auto")


def test_default_directory_comes_from_config(monkeypatch, tmp_path):
    monkeypatch.setattr("choreolib.loader.CHOREO_DIR", tmp_path)
    assert ChoreoLoader().directory == tmp_path
    assert ChoreoLoader().trajectory_path("a.traj") == tmp_path / "a.traj"
