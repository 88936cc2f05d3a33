"""Tests for the kube-mirror command line tool."""

from pathlib import Path

import pytest
import yaml

from kube_mirror.tool.kube_mirror import main

MEMORY_CONFIG = """\
fallback:
  type: memory
indexes:
  - kind: Widget
    group: example.com
    version: v1
    keys:
      - path: spec.name
    unique: true
"""

WIDGETS = [
    {
        "apiVersion": "example.com/v1",
        "kind": "Widget",
        "metadata": {"name": "foo", "namespace": "default", "uid": "abc123"},
        "spec": {"name": "foo"},
    },
    {
        "apiVersion": "example.com/v1",
        "kind": "Widget",
        "metadata": {"name": "bar", "namespace": "default", "uid": "def456"},
        "spec": {"name": "bar"},
    },
]


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(MEMORY_CONFIG)
    return path


@pytest.fixture
def manifest_file(tmp_path: Path) -> Path:
    path = tmp_path / "widgets.yaml"
    path.write_text(yaml.dump_all(WIDGETS))
    return path


def test_ensure_indexes(config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test the ensure-indexes command."""
    main(["ensure-indexes", "--config", str(config_file)])
    assert capsys.readouterr().out == "Indexes ensured\n"


def test_apply(
    config_file: Path, manifest_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test applying objects from a file."""
    main(["apply", "--config", str(config_file), str(manifest_file)])
    assert capsys.readouterr().out == "Applied 2 add event(s)\n"


def test_apply_delete(
    config_file: Path, manifest_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test applying a delete event for objects without documents."""
    main(
        [
            "apply",
            "--config",
            str(config_file),
            "--event",
            "delete",
            str(manifest_file),
        ]
    )
    assert capsys.readouterr().out == "Applied 2 delete event(s)\n"


def test_unknown_fallback(
    tmp_path: Path, manifest_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test an unknown fallback type stops the command."""
    config_file = tmp_path / "bad-config.yaml"
    config_file.write_text("fallback:\n  type: unknown-xyz\n")
    with pytest.raises(SystemExit) as exc_info:
        main(["apply", "--config", str(config_file), str(manifest_file)])
    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert "kube-mirror error: " in captured.err
    assert "unknown fallback type: 'unknown-xyz'" in captured.err


def test_invalid_manifest(
    tmp_path: Path, config_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test objects without a uid are rejected."""
    manifest_file = tmp_path / "invalid.yaml"
    manifest_file.write_text(
        yaml.dump({"apiVersion": "v1", "kind": "Pod", "metadata": {"name": "p"}})
    )
    with pytest.raises(SystemExit) as exc_info:
        main(["apply", "--config", str(config_file), str(manifest_file)])
    assert exc_info.value.code == 1
    assert "missing metadata.uid" in capsys.readouterr().err


def test_missing_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test a missing configuration file stops the command."""
    with pytest.raises(SystemExit) as exc_info:
        main(["ensure-indexes", "--config", str(tmp_path / "missing.yaml")])
    assert exc_info.value.code == 1
    assert "Unable to read configuration" in capsys.readouterr().err


def test_invalid_metadata(
    tmp_path: Path, config_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test objects whose metadata is not a mapping are reported as errors."""
    manifest_file = tmp_path / "invalid.yaml"
    manifest_file.write_text(
        yaml.dump({"apiVersion": "v1", "kind": "Pod", "metadata": "oops"})
    )
    with pytest.raises(SystemExit) as exc_info:
        main(["apply", "--config", str(config_file), str(manifest_file)])
    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert "kube-mirror error: " in captured.err
    assert "metadata is not a mapping" in captured.err
