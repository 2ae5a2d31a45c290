"""Path-addressed artifact stores.

The publisher only needs ``put``. Two stores are provided: an in-memory one
and one that mirrors registry paths onto a local directory.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

import yaml
from pydantic import BaseModel

from rest_service_importer.errors import StoreWriteError

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "/"
META_SUFFIX = ".meta.yaml"


class Resource(BaseModel):
    """A stored registry resource."""

    media_type: str
    properties: dict[str, str] = {}
    content: bytes = b""
    uuid: str | None = None


class ArtifactStore(Protocol):
    def put(self, path: str, resource: Resource) -> None: ...


class InMemoryStore:
    """Keeps resources in a dict keyed by registry path."""

    def __init__(self):
        self.resources: dict[str, Resource] = {}

    def put(self, path: str, resource: Resource) -> None:
        self.resources[path] = resource.model_copy(deep=True)

    def get(self, path: str) -> Resource | None:
        return self.resources.get(path)

    def paths(self) -> list[str]:
        return list(self.resources)


class FileSystemStore:
    """Writes each resource as a content file plus a YAML metadata sidecar.

    Registry path ``/a/b/c`` becomes ``<root>/a/b/c`` and
    ``<root>/a/b/c.meta.yaml``.
    """

    def __init__(self, root: Path):
        self.root = root

    def put(self, path: str, resource: Resource) -> None:
        target = self._target(path)
        meta = {
            "media_type": resource.media_type,
            "uuid": resource.uuid,
            "properties": dict(resource.properties),
        }
        staged: list[Path] = []
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            content_tmp = _stage(target, resource.content, staged)
            meta_tmp = _stage(target, yaml.safe_dump(meta, sort_keys=False).encode("utf-8"), staged)
            # Content is replaced last so a readable resource always has its metadata
            os.replace(meta_tmp, _meta_path(target))
            os.replace(content_tmp, target)
        except OSError as e:
            for tmp in staged:
                tmp.unlink(missing_ok=True)
            raise StoreWriteError(path, str(e)) from e
        logger.debug("Wrote %d bytes to %s", len(resource.content), target)

    def get(self, path: str) -> Resource | None:
        target = self._target(path)
        meta_path = _meta_path(target)
        if not target.is_file() or not meta_path.is_file():
            return None
        meta = yaml.safe_load(meta_path.read_text(encoding="utf-8")) or {}
        return Resource(content=target.read_bytes(), **meta)

    def _target(self, path: str) -> Path:
        parts = [p for p in path.split(PATH_SEPARATOR) if p]
        if not parts or any(p in (".", "..") for p in parts):
            raise StoreWriteError(path, "invalid registry path")
        return self.root.joinpath(*parts)


def _meta_path(target: Path) -> Path:
    return target.with_name(target.name + META_SUFFIX)


def _stage(target: Path, data: bytes, staged: list[Path]) -> Path:
    """Write data to a temporary sibling of target and record it in staged."""
    fd, name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    tmp = Path(name)
    staged.append(tmp)
    with os.fdopen(fd, "wb") as f:
        f.write(data)
    return tmp
