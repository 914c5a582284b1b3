"""Tests for composing the build fingerprint and the cache verdict."""

import re
import shutil
import zipfile
from pathlib import Path
from typing import Any

import pytest

from codegen_gate.compute_fingerprint import compute_fingerprint
from codegen_gate.errors import InvalidSchemaArtifactError
from codegen_gate.fingerprint_cache import FingerprintCache
from codegen_gate.fingerprint_result import FingerprintResult
from codegen_gate.template_tree_digest import template_tree_digest


@pytest.fixture
def inputs(tmp_path: Path) -> dict[str, Path]:
    """Fixture providing a complete set of generation inputs."""
    project = tmp_path / "project"
    templates = project / "Template" / "CodeTemplates" / "EFCore"
    templates.mkdir(parents=True)
    (templates / "EntityType.t4").write_text("<#@ template #>entity")
    (templates / "DbContext.t4").write_text("<#@ template #>context")
    (project / "efcpt-config.json").write_text('{"names": {"root-namespace": "App"}}')
    (project / "efcpt.renaming.json").write_text("[]")
    artifact = project / "Db.dacpac"
    with zipfile.ZipFile(artifact, "w") as archive:
        archive.writestr("model.xml", "<DataSchemaModel />")
    return {
        "project": project,
        "config": project / "efcpt-config.json",
        "renaming": project / "efcpt.renaming.json",
        "template": project / "Template",
        "artifact": artifact,
        "cache": project / "obj" / "efcpt" / "fingerprint.txt",
    }


def run(inputs: dict[str, Path], **kwargs: Any) -> FingerprintResult:
    """Compute the fingerprint for the fixture inputs."""
    options: dict[str, Any] = {"schema_artifact_path": str(inputs["artifact"])}
    options.update(kwargs)
    return compute_fingerprint(
        str(inputs["config"]),
        str(inputs["renaming"]),
        str(inputs["template"]),
        str(inputs["cache"]),
        **options,
    )


def test_first_run_changed_then_unchanged(inputs: dict[str, Path]) -> None:
    """Verify the cache verdict across two runs with unchanged inputs."""
    first = run(inputs)
    second = run(inputs)

    assert re.match(r"^[0-9a-f]{16}$", first.fingerprint)
    assert first.has_changed
    assert first.previous_fingerprint is None
    assert not second.has_changed
    assert second.fingerprint == first.fingerprint
    assert inputs["cache"].read_text() == first.fingerprint


@pytest.mark.parametrize(
    "target",
    [
        "config",
        "renaming",
        "template/CodeTemplates/EFCore/EntityType.t4",
    ],
)
def test_single_byte_change_alters_fingerprint(
    inputs: dict[str, Path], target: str
) -> None:
    """Verify that changing any one input file changes the fingerprint."""
    before = run(inputs).fingerprint
    if target.startswith("template/"):
        path = inputs["template"] / target.removeprefix("template/")
    else:
        path = inputs[target]
    data = bytearray(path.read_bytes())
    data[-1] ^= 0x01
    path.write_bytes(bytes(data))

    after = run(inputs)
    assert after.fingerprint != before
    assert after.has_changed


def test_new_template_file_alters_fingerprint(inputs: dict[str, Path]) -> None:
    """Verify that adding a template file changes the fingerprint."""
    before = run(inputs).fingerprint
    (inputs["template"] / "extra.t4").write_text("x")
    assert run(inputs).fingerprint != before


def test_fingerprint_independent_of_location(
    inputs: dict[str, Path], tmp_path: Path
) -> None:
    """Verify that the same content elsewhere yields the same fingerprint."""
    copy = tmp_path / "elsewhere" / "deep" / "project"
    shutil.copytree(inputs["project"], copy)
    moved = {k: copy / v.relative_to(inputs["project"]) for k, v in inputs.items()}
    moved["project"] = copy

    assert run(inputs).fingerprint == run(moved).fingerprint


def test_missing_optional_inputs_give_empty_segments(tmp_path: Path) -> None:
    """Verify graceful degradation when inputs are absent."""
    result = compute_fingerprint(
        str(tmp_path / "none.json"),
        str(tmp_path / "none-renaming.json"),
        str(tmp_path / "no-templates"),
        str(tmp_path / "cache.txt"),
        schema_artifact_path=str(tmp_path / "none.dacpac"),
    )
    assert len(result.fingerprint) == 16
    assert result.has_changed


def test_connection_string_mode_uses_schema_fingerprint(
    inputs: dict[str, Path],
) -> None:
    """Verify that connection-string mode hashes the supplied fingerprint."""
    a = run(inputs, use_connection_string_mode=True, schema_fingerprint="AAAA")
    b = run(inputs, use_connection_string_mode=True, schema_fingerprint="BBBB")
    c = run(inputs, use_connection_string_mode=True, schema_fingerprint="BBBB")
    assert a.fingerprint != b.fingerprint
    assert b.fingerprint == c.fingerprint
    assert not c.has_changed


def test_invalid_artifact_is_fatal(inputs: dict[str, Path]) -> None:
    """Verify that a present but malformed artifact is not silently ignored."""
    inputs["artifact"].write_text("not a zip")
    with pytest.raises(InvalidSchemaArtifactError):
        run(inputs)


def test_cache_compare_ignores_case(inputs: dict[str, Path]) -> None:
    """Verify that an upper-cased cached value still counts as unchanged."""
    first = run(inputs)
    inputs["cache"].write_text(first.fingerprint.upper() + "\n")
    assert not run(inputs).has_changed


def test_template_tree_digest_sorted(tmp_path: Path) -> None:
    """Verify the digest is sorted by forward-slash relative path."""
    (tmp_path / "b").mkdir()
    (tmp_path / "b" / "z.t4").write_text("z")
    (tmp_path / "a.t4").write_text("a")
    (tmp_path / "c.t4").write_text("c")
    rels = [rel for rel, _ in template_tree_digest(str(tmp_path))]
    assert rels == ["a.t4", "b/z.t4", "c.t4"]
    assert template_tree_digest(str(tmp_path / "missing")) == []


def test_fingerprint_cache_roundtrip(tmp_path: Path) -> None:
    """Verify that the cache stores and reloads one value."""
    cache = FingerprintCache(tmp_path / "nested" / "fp.txt")
    assert cache.load() is None
    cache.save("0123456789abcdef")
    assert cache.load() == "0123456789abcdef"


def test_unreadable_cache_counts_as_absent(inputs: dict[str, Path]) -> None:
    """Verify that a cache file with invalid UTF-8 is treated as missing."""
    inputs["cache"].parent.mkdir(parents=True, exist_ok=True)
    inputs["cache"].write_bytes(b"\xff\xfe\x00garbage")
    result = run(inputs)
    assert result.has_changed
    assert result.previous_fingerprint is None
    assert FingerprintCache(inputs["cache"]).load() == result.fingerprint
