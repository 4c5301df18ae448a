"""
Conformance checks for integration apps.

Each check is an independent predicate over the loaded descriptor or
metadata document that yields zero or more violations. Every check runs on
every app, so a report lists all problems at once. A check that raises is
recorded as a violation of that check.
"""

import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from pydantic import ValidationError

from appkit.core.config import Settings, get_settings
from appkit.core.exceptions import ContractViolationError
from appkit.models.metadata import MetadataDocument
from appkit.models.schema import missing_required_properties, schema_errors
from .loader import LoadedApp, load_app_dir

logger = logging.getLogger(__name__)

_MISSING = object()

Finding = Union[str, Tuple[str, str]]


@dataclass
class Violation:
    """A single failed expectation."""
    check: str
    message: str
    location: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"check": self.check, "message": self.message, "location": self.location}


@dataclass
class ConformanceReport:
    """Result of running every conformance check against one app."""
    directory: Optional[str]
    app_id: Optional[str]
    violations: List[Violation] = field(default_factory=list)
    checks_run: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.violations

    def failed_checks(self) -> List[str]:
        seen: List[str] = []
        for violation in self.violations:
            if violation.check not in seen:
                seen.append(violation.check)
        return seen

    def to_dict(self) -> Dict[str, Any]:
        return {
            "directory": self.directory,
            "app_id": self.app_id,
            "valid": self.valid,
            "checks_run": len(self.checks_run),
            "violations": [v.to_dict() for v in self.violations],
        }

    def raise_for_violations(self) -> None:
        """Raise ContractViolationError if any check failed."""
        if self.violations:
            raise ContractViolationError(
                f"App '{self.app_id}' has {len(self.violations)} contract violation(s)",
                violations=[v.to_dict() for v in self.violations]
            )


def _sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _features(descriptor: Any) -> List[str]:
    features = getattr(descriptor, "features", None)
    return list(features) if _sequence(features) else []


# -- descriptor checks -----------------------------------------------------

def check_exported(descriptor: Any, settings: Settings) -> Iterable[Finding]:
    if descriptor is None:
        yield f"app module must export the descriptor as '{settings.APP_ATTRIBUTE}'"


def check_name(descriptor: Any, settings: Settings) -> Iterable[Finding]:
    name = getattr(descriptor, "name", _MISSING)
    if name is _MISSING:
        yield "name is missing"
    elif not isinstance(name, str):
        yield f"name must be a string, got {type(name).__name__}"
    elif not name.strip():
        yield "name must not be empty"


def _check_enumeration(descriptor: Any, attribute: str, allowed: List[str]) -> Iterable[Finding]:
    value = getattr(descriptor, attribute, _MISSING)
    if value is _MISSING:
        yield f"{attribute} is missing"
        return
    if not _sequence(value):
        yield f"{attribute} must be a list, got {type(value).__name__}"
        return
    for index, item in enumerate(value):
        if item not in allowed:
            yield (
                f"{attribute} contains '{item}', expected one of: {', '.join(allowed)}",
                f"{attribute}.{index}"
            )


def check_categories(descriptor: Any, settings: Settings) -> Iterable[Finding]:
    return _check_enumeration(descriptor, "categories", settings.ALLOWED_CATEGORIES)


def check_features(descriptor: Any, settings: Settings) -> Iterable[Finding]:
    return _check_enumeration(descriptor, "features", settings.ALLOWED_FEATURES)


def check_ui_labels(descriptor: Any, settings: Settings) -> Iterable[Finding]:
    labels = getattr(descriptor, "ui_labels", _MISSING)
    if labels is _MISSING:
        yield "ui_labels is missing"
    elif not _sequence(labels):
        yield f"ui_labels must be a list, got {type(labels).__name__}"
    else:
        for index, label in enumerate(labels):
            if not isinstance(label, str):
                yield f"ui_labels entries must be strings, got {type(label).__name__}", f"ui_labels.{index}"


def check_singleton(descriptor: Any, settings: Settings) -> Iterable[Finding]:
    singleton = getattr(descriptor, "singleton", _MISSING)
    if singleton is _MISSING:
        yield "singleton is missing"
    elif not isinstance(singleton, bool):
        yield f"singleton must be a boolean, got {type(singleton).__name__}"


def check_config_schema(descriptor: Any, settings: Settings) -> Iterable[Finding]:
    schema = getattr(descriptor, "config_schema", _MISSING)
    if schema is _MISSING:
        yield "config_schema is missing"
        return
    if not isinstance(schema, Mapping):
        yield f"config_schema must be an object, got {type(schema).__name__}"
        return
    for problem in schema_errors(schema):
        yield f"config_schema: {problem}", "config_schema"
    for name in missing_required_properties(schema):
        yield (
            f"config_schema requires '{name}' but does not declare it in properties",
            f"config_schema.properties.{name}"
        )


def check_auth_schemas(descriptor: Any, settings: Settings) -> Iterable[Finding]:
    schemas = getattr(descriptor, "auth_schemas", _MISSING)
    if schemas is _MISSING:
        yield "auth_schemas is missing"
        return
    if not isinstance(schemas, Mapping):
        yield f"auth_schemas must be an object, got {type(schemas).__name__}"
        return
    if not schemas:
        yield "auth_schemas must declare at least one auth type"
    for auth_type, schema in schemas.items():
        location = f"auth_schemas.{auth_type}"
        if not isinstance(auth_type, str) or not auth_type:
            yield f"auth type names must be non-empty strings, got {auth_type!r}", location
            continue
        for problem in schema_errors(schema):
            yield f"auth_schemas['{auth_type}']: {problem}", location
        if isinstance(schema, Mapping):
            for name in missing_required_properties(schema):
                yield (
                    f"auth_schemas['{auth_type}'] requires '{name}' but does not declare it in properties",
                    f"{location}.properties.{name}"
                )


def _check_schema_getter(descriptor: Any, getter: str, attribute: str) -> Iterable[Finding]:
    method = getattr(descriptor, getter, None)
    if not callable(method):
        yield f"{getter} must be a function"
        return
    if method() != getattr(descriptor, attribute, _MISSING):
        yield f"{getter}() must return {attribute}"


def check_get_config_schema(descriptor: Any, settings: Settings) -> Iterable[Finding]:
    return _check_schema_getter(descriptor, "get_config_schema", "config_schema")


def check_get_auth_schemas(descriptor: Any, settings: Settings) -> Iterable[Finding]:
    return _check_schema_getter(descriptor, "get_auth_schemas", "auth_schemas")


def check_get_client(descriptor: Any, settings: Settings) -> Iterable[Finding]:
    if not callable(getattr(descriptor, "get_client", None)):
        yield "get_client must be a function"


def _check_toolkit_operation(descriptor: Any, operation: str) -> Iterable[Finding]:
    handler = getattr(descriptor, operation, None)
    if handler is None:
        if "toolkit" in _features(descriptor):
            yield f"{operation} is required when 'toolkit' is a feature"
        return
    if not callable(handler):
        yield f"{operation} must be a function"
    elif not inspect.iscoroutinefunction(handler):
        yield f"{operation} must be an async function"


def check_get_tools(descriptor: Any, settings: Settings) -> Iterable[Finding]:
    return _check_toolkit_operation(descriptor, "get_tools")


def check_call_tool(descriptor: Any, settings: Settings) -> Iterable[Finding]:
    return _check_toolkit_operation(descriptor, "call_tool")


DESCRIPTOR_CHECKS: List[Tuple[str, Callable[[Any, Settings], Iterable[Finding]]]] = [
    ("exported", check_exported),
    ("name", check_name),
    ("categories", check_categories),
    ("features", check_features),
    ("ui_labels", check_ui_labels),
    ("singleton", check_singleton),
    ("config_schema", check_config_schema),
    ("auth_schemas", check_auth_schemas),
    ("get_config_schema", check_get_config_schema),
    ("get_auth_schemas", check_get_auth_schemas),
    ("get_client", check_get_client),
    ("get_tools", check_get_tools),
    ("call_tool", check_call_tool),
]


# -- metadata checks -------------------------------------------------------

def check_metadata_document(metadata: Any, settings: Settings) -> Iterable[Finding]:
    if not isinstance(metadata, dict):
        yield f"metadata must be a JSON object, got {type(metadata).__name__}"
        return
    try:
        MetadataDocument.model_validate(metadata)
    except ValidationError as e:
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            yield f"{location}: {error['msg']}", location


METADATA_CHECKS: List[Tuple[str, Callable[[Any, Settings], Iterable[Finding]]]] = [
    ("metadata", check_metadata_document),
]


def _run_checks(
    checks: List[Tuple[str, Callable[[Any, Settings], Iterable[Finding]]]],
    target: Any,
    settings: Settings,
    report: ConformanceReport
) -> None:
    for check_id, check in checks:
        report.checks_run.append(check_id)
        try:
            findings = list(check(target, settings))
        except Exception as e:
            logger.debug(f"Check '{check_id}' raised", exc_info=True)
            findings = [f"check raised {type(e).__name__}: {e}"]

        for finding in findings:
            message, location = finding if isinstance(finding, tuple) else (finding, None)
            report.violations.append(Violation(check=check_id, message=message, location=location))


def check_descriptor(descriptor: Any, settings: Optional[Settings] = None) -> List[Violation]:
    """Run every descriptor check and return all violations."""
    report = ConformanceReport(directory=None, app_id=getattr(descriptor, "id", None))
    _run_checks(DESCRIPTOR_CHECKS, descriptor, settings or get_settings(), report)
    return report.violations


def check_metadata(metadata: Any, settings: Optional[Settings] = None) -> List[Violation]:
    """Run every metadata check and return all violations."""
    report = ConformanceReport(directory=None, app_id=None)
    _run_checks(METADATA_CHECKS, metadata, settings or get_settings(), report)
    return report.violations


def check_app(loaded: LoadedApp, settings: Optional[Settings] = None) -> ConformanceReport:
    """Run every check against an already loaded app."""
    settings = settings or get_settings()
    app_id = getattr(loaded.descriptor, "id", None)
    report = ConformanceReport(directory=str(loaded.directory), app_id=app_id if isinstance(app_id, str) else None)

    _run_checks(DESCRIPTOR_CHECKS, loaded.descriptor, settings, report)
    _run_checks(METADATA_CHECKS, loaded.metadata_raw, settings, report)

    if report.valid:
        logger.info(f"App '{report.app_id}' passed {len(report.checks_run)} checks")
    else:
        logger.info(f"App '{report.app_id}' has {len(report.violations)} violation(s)")
    return report


def run_conformance(directory: Union[str, Path, None], settings: Optional[Settings] = None) -> ConformanceReport:
    """
    Load an app directory and check it against the contract.

    Raises:
        AppLoadError: If the directory cannot be loaded at all
    """
    return check_app(load_app_dir(directory), settings)
