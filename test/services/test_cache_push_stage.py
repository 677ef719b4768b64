from unittest.mock import MagicMock
import pytest
from flake_ci.errors import ConfigurationError, ToolExecutionError
from flake_ci.models import BuildResultManifest, CacheConfiguration, RunConfiguration
from flake_ci.services import CachePushStage


@pytest.fixture
def manifest(tmp_path):
    path = tmp_path / "omci-x86_64-linux.json"
    path.write_text('{"result": {}}')
    return BuildResultManifest(path=str(path))


@pytest.fixture
def stage():
    svc = CachePushStage(MagicMock())
    svc.logger = MagicMock()
    return svc


def config_with(cachix):
    return RunConfiguration(system="x86_64-linux", cachix=cachix)


@pytest.mark.parametrize("cachix,missing", [
    (CacheConfiguration(cache="acme"), "prefix"),
    (CacheConfiguration(cache="acme", prefix=""), "prefix"),
    (CacheConfiguration(prefix="pr-1"), "cache"),
    (CacheConfiguration(prefix="pr-1", cache=""), "cache"),
    (CacheConfiguration(), "prefix"),
])
def test_push_requires_fields(stage, manifest, cachix, missing):
    with pytest.raises(ConfigurationError) as exc:
        stage.push(config_with(cachix), manifest)
    assert exc.value.field == missing
    assert str(exc.value) == f"{missing} is required and cannot be empty"
    assert not stage.cachix.push.called


def test_push(stage, manifest):
    stage.push(config_with(CacheConfiguration(cache="acme", prefix="pr-1", names="pkgA,pkgB")), manifest)
    stage.cachix.push.assert_called_once_with(
        subflake="ROOT", prefix="pr-1", cache="acme", names="pkgA,pkgB", results='{"result": {}}'
    )


@pytest.mark.parametrize("names,expected", [
    (None, None),
    ("", None),
    ("   ", None),
    (["pkgA", "pkgB"], "pkgA,pkgB"),
    ([], None),
])
def test_push_names_allow_list(stage, manifest, names, expected):
    stage.push(config_with(CacheConfiguration(cache="acme", prefix="pr-1", names=names)), manifest)
    assert stage.cachix.push.call_args.kwargs["names"] == expected


def test_push_missing_manifest(stage, tmp_path):
    with pytest.raises(ToolExecutionError, match="missing.json is not readable"):
        stage.push(
            config_with(CacheConfiguration(cache="acme", prefix="pr-1")),
            BuildResultManifest(path=str(tmp_path / "missing.json")),
        )
    assert not stage.cachix.push.called


def test_manifest_read_error_keeps_cause(tmp_path):
    manifest = BuildResultManifest(path=str(tmp_path))
    with pytest.raises(ToolExecutionError) as exc:
        manifest.read()
    assert isinstance(exc.value.__cause__, OSError)
    assert exc.value.command == ["om", "ci", "run"]
    assert exc.value.returncode is None
