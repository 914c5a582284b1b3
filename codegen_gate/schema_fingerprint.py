"""Schema-based fingerprint of a zip-packaged database schema artifact.

Schema packages embed the absolute path they were built from in their model
metadata. Hashing the archive as-is would give different results on every
machine, so only the schema-relevant entries are read and the path metadata
is reduced to bare file names before hashing.
"""

import logging
import os
import re
import zipfile

from codegen_gate.content_hash import hash_string
from codegen_gate.errors import InvalidSchemaArtifactError
from codegen_gate.normalize_sql import normalize_sql
from codegen_gate.path_utils import file_name

logger = logging.getLogger(__name__)

MODEL_ENTRY = "model.xml"
PRE_DEPLOY_ENTRY = "predeploy.sql"
POST_DEPLOY_ENTRY = "postdeploy.sql"

PATH_METADATA_NAMES = ("FileName", "AssemblySymbolsName")


def _metadata_re(name: str) -> re.Pattern[str]:
    return re.compile(rf'(<Metadata\s+Name="{name}"\s+Value=")([^"]+)(")')


PATH_METADATA_RES = tuple(_metadata_re(n) for n in PATH_METADATA_NAMES)


def scrub_model_paths(model_xml: str) -> str:
    """Replace path-valued metadata with the last segment of each path.

    ``<Metadata Name="FileName" Value="C:\\build\\Db.dacpac" />`` becomes
    ``<Metadata Name="FileName" Value="Db.dacpac" />``.
    """
    for pattern in PATH_METADATA_RES:
        model_xml = pattern.sub(
            lambda m: f"{m.group(1)}{file_name(m.group(2))}{m.group(3)}", model_xml
        )
    return model_xml


def compute_schema_fingerprint(artifact_path: str) -> str:
    """Compute the fingerprint of a schema artifact.

    Raises ``FileNotFoundError`` when the artifact is missing and
    ``InvalidSchemaArtifactError`` when it is not a zip or lacks ``model.xml``.
    """
    if not os.path.isfile(artifact_path):
        raise FileNotFoundError(f"Schema artifact not found: {artifact_path}")

    try:
        with zipfile.ZipFile(artifact_path) as archive:
            model = _read_entry(archive, MODEL_ENTRY)
            if model is None:
                msg = f"Schema artifact does not contain {MODEL_ENTRY}: {artifact_path}"
                raise InvalidSchemaArtifactError(msg)
            pre_deploy = _read_entry(archive, PRE_DEPLOY_ENTRY)
            post_deploy = _read_entry(archive, POST_DEPLOY_ENTRY)
    except zipfile.BadZipFile as exc:
        msg = f"Schema artifact is not a valid zip package: {artifact_path}"
        raise InvalidSchemaArtifactError(msg) from exc

    content = (
        _segment("model", scrub_model_paths(model))
        + _segment("pre", normalize_sql(pre_deploy))
        + _segment("post", normalize_sql(post_deploy))
    )
    fingerprint = hash_string(content)
    logger.debug("Schema fingerprint for %s: %s", artifact_path, fingerprint)
    return fingerprint


def _segment(label: str, text: str) -> str:
    return f"{label}\0{text}\n"


def _read_entry(archive: zipfile.ZipFile, name: str) -> str | None:
    """Read a zip entry as UTF-8 text, or None when the entry is absent.

    Bytes that are not valid UTF-8 (scripts saved in a legacy code page) are
    escaped rather than rejected, so distinct bytes still hash differently.
    """
    try:
        info = archive.getinfo(name)
    except KeyError:
        return None
    with archive.open(info) as stream:
        return stream.read().decode("utf-8-sig", errors="backslashreplace")
