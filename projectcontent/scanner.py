# projectcontent/scanner.py

"""
Convention-based entity discovery.

An entity is an immediate child directory of a base directory that contains
a fixed-name JSON *marker file*. :func:`scan_entities` finds those
directories and drops the ones whose marker cannot be parsed;
:func:`assemble_entities` turns the survivors into model objects using an
:class:`EntityKind` description.
"""


from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Generic, TypeVar

from projectcontent.errors import SkippedEntityWarning
from projectcontent.loader import (
    ScanOptions,
    load_content_file,
    load_optional_file,
    metadata_value,
    read_json,
)

E = TypeVar("E")

Builder = Callable[[Path, Any, dict[str, str], ScanOptions], E]


@dataclass(frozen=True)
class ContentField:
    """
    A content attribute loaded from a path stored in the entity metadata.

    ``optional`` fields are read only when the file exists and are silent
    when it does not; other fields log an error when the file is missing.
    """

    attribute: str
    metadata_key: str
    optional: bool = False


@dataclass(frozen=True)
class EntityKind(Generic[E]):
    """
    Description of one entity family.

    Parameters
    ----------
    label : str
        Human-readable kind used in log entries (``"fragment"``).
    marker : str
        Marker filename identifying an entity directory.
    build : Callable
        ``build(directory, metadata, contents, options)`` returning the
        entity, where ``contents`` maps each field attribute to its text.
    fields : tuple[ContentField, ...]
        Content fields to load before ``build`` is called.
    """

    label: str
    marker: str
    build: Builder[E]
    fields: tuple[ContentField, ...] = ()


def scan_order(path: Path) -> tuple[str, str]:
    """
    Sort key giving the marker paths in glob order.

    Paths compare case-insensitively first; on a tie, lowercase sorts before
    uppercase. This is the English locale order (``alpha``, ``Beta``,
    ``charlie``), not code point order.

    Parameters
    ----------
    path : pathlib.Path
        Marker file path.

    Returns
    -------
    tuple[str, str]
        Comparison key.
    """

    text = path.as_posix()
    return text.casefold(), text.swapcase()


def scan_entities(
    base_dir: Path,
    marker: str,
    *,
    label: str = "entity",
    options: ScanOptions | None = None,
) -> list[Path]:
    """
    Return the immediate child directories of ``base_dir`` holding ``marker``.

    Directories whose marker file cannot be read or parsed as JSON are
    excluded and reported with one ERROR log entry each. Hidden directories
    (leading dot) are not entities. A missing base directory or no match at
    all gives an empty list.

    Parameters
    ----------
    base_dir : pathlib.Path
        Directory whose children are inspected.
    marker : str
        Marker filename, e.g. ``"collection.json"``.
    label : str, default="entity"
        Entity kind used in log entries.
    options : ScanOptions, optional
        Encoding and log sink.

    Returns
    -------
    list[pathlib.Path]
        Valid entity directories, in :func:`scan_order`.
    """

    options = options or ScanOptions()
    directories: list[Path] = []

    for marker_path in sorted(base_dir.glob(f"*/{marker}"), key=scan_order):
        directory = marker_path.parent
        if directory.name.startswith("."):
            continue
        try:
            read_json(marker_path, encoding=options.encoding)
        except (OSError, ValueError):
            issue = SkippedEntityWarning(label, directory, marker)
            options.logger.error("%s", issue, extra={"issue": issue})
            continue
        directories.append(directory)

    return directories


def load_fields(
    directory: Path,
    metadata: Any,
    kind: EntityKind[Any],
    options: ScanOptions,
) -> dict[str, str]:
    """Load every content field of ``kind`` for one entity directory."""

    contents: dict[str, str] = {}
    for content_field in kind.fields:
        load = load_optional_file if content_field.optional else load_content_file
        contents[content_field.attribute] = load(
            directory,
            metadata_value(metadata, content_field.metadata_key),
            kind=kind.label,
            metadata=metadata,
            options=options,
        )
    return contents


def assemble_entities(
    base_dir: Path,
    kind: EntityKind[E],
    options: ScanOptions | None = None,
) -> tuple[E, ...]:
    """
    Scan ``base_dir`` for ``kind`` and build one entity per valid directory.

    The result preserves scan order.
    """

    options = options or ScanOptions()
    entities: list[E] = []

    for directory in scan_entities(
        base_dir, kind.marker, label=kind.label, options=options
    ):
        metadata = read_json(directory / kind.marker, encoding=options.encoding)
        contents = load_fields(directory, metadata, kind, options)
        entities.append(kind.build(directory, metadata, contents, options))

    return tuple(entities)
