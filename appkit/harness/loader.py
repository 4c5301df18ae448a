"""
Loading of app directories.

An app directory holds the module exporting the app descriptor (``app.py``
by default) and its metadata document (``metadata.json``).
"""

import importlib.util
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any, Optional, Union

from appkit.core.config import get_settings
from appkit.core.exceptions import AppLoadError
from appkit.models.descriptor import normalize_id
from appkit.models.metadata import MetadataDocument

logger = logging.getLogger(__name__)


@dataclass
class LoadedApp:
    """An app module and its metadata document, as read from disk."""

    directory: Path
    module_path: Path
    metadata_path: Path
    module: ModuleType
    descriptor: Any
    metadata_raw: Any

    @property
    def metadata(self) -> MetadataDocument:
        """Typed view of the metadata document; raises if it is malformed."""
        return MetadataDocument.model_validate(self.metadata_raw)


def resolve_app_dir(directory: Union[str, Path, None]) -> Path:
    """
    Resolve and check an app directory argument.

    Raises:
        AppLoadError: If the argument is missing or does not name a directory
    """
    if not directory:
        raise AppLoadError("Missing required argument: --dir <folder-containing-app>")

    path = Path(directory)
    if not path.is_absolute():
        path = Path.cwd() / path

    if not path.exists():
        raise AppLoadError(f"Directory not found: {path}", path=str(path))
    if not path.is_dir():
        raise AppLoadError(f"Not a directory: {path}", path=str(path))

    return path


def _required_file(directory: Path, filename: str) -> Path:
    path = directory / filename
    if not path.is_file():
        raise AppLoadError(f"Missing {filename} in directory: {directory}", path=str(directory))
    return path


def _import_module(module_path: Path) -> ModuleType:
    module_name = f"appkit_app_{normalize_id(module_path.parent.name).replace('-', '_') or 'app'}"

    # the app directory goes on sys.path for the duration of the import
    app_dir = str(module_path.parent)
    added = app_dir not in sys.path
    if added:
        sys.path.insert(0, app_dir)

    try:
        spec = importlib.util.spec_from_file_location(module_name, module_path)
        if spec is None or spec.loader is None:
            raise AppLoadError(f"Cannot import {module_path}", path=str(module_path))

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(module_name, None)
            raise AppLoadError(f"Failed to import {module_path}: {e}", path=str(module_path)) from e
    finally:
        if added and app_dir in sys.path:
            sys.path.remove(app_dir)

    return module


def _read_metadata(metadata_path: Path) -> Any:
    try:
        with open(metadata_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise AppLoadError(f"Invalid JSON in {metadata_path}: {e}", path=str(metadata_path)) from e


def load_app_dir(directory: Union[str, Path, None], attribute: Optional[str] = None) -> LoadedApp:
    """
    Load the app module and metadata document from a directory.

    A module that does not export the descriptor attribute still loads; the
    missing descriptor is reported by the conformance checks.

    Args:
        directory: Directory containing the app module and metadata document
        attribute: Module attribute holding the descriptor (defaults to settings)

    Raises:
        AppLoadError: If the directory or either file is missing, the module
            fails to import, or the metadata is not valid JSON
    """
    settings = get_settings()
    path = resolve_app_dir(directory)
    module_path = _required_file(path, settings.APP_MODULE_FILE)
    metadata_path = _required_file(path, settings.METADATA_FILE)

    logger.info(f"Loading app from {path}")

    module = _import_module(module_path)
    metadata_raw = _read_metadata(metadata_path)
    descriptor = getattr(module, attribute or settings.APP_ATTRIBUTE, None)

    if descriptor is None:
        logger.warning(f"{module_path} does not export '{attribute or settings.APP_ATTRIBUTE}'")

    return LoadedApp(
        directory=path,
        module_path=module_path,
        metadata_path=metadata_path,
        module=module,
        descriptor=descriptor,
        metadata_raw=metadata_raw,
    )
