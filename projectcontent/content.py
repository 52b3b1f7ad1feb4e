# projectcontent/content.py

"""
Project content aggregation.

This module turns a project directory laid out by convention into a
:class:`~projectcontent.models.Project`::

    <base>/package.json
    <base>/src/<collection>/collection.json
    <base>/src/<collection>/<fragment>/fragment.json
    <base>/src/<collection>/<composition>/fragment-composition.json
    <base>/src/<template>/page-template.json
    <base>/src/<template>/page-definition.json

Each entity family is described by an :class:`~projectcontent.scanner.EntityKind`
and assembled through the shared scanner. Failure handling is uniform:

- invalid marker files drop the entity (logged),
- missing content files degrade the field to ``""`` (logged, except for the
  optional fragment configuration),
- a missing or invalid ``package.json`` or ``page-definition.json`` raises
  :class:`~projectcontent.errors.FatalMetadataError`.
"""


from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from projectcontent.errors import FatalMetadataError
from projectcontent.loader import (
    ScanOptions,
    metadata_value,
    read_json,
    stringify_json,
)
from projectcontent.models import (
    Collection,
    Fragment,
    FragmentComposition,
    PageTemplate,
    PageTemplateMetadata,
    Project,
)
from projectcontent.scanner import ContentField, EntityKind, assemble_entities

SOURCE_DIRECTORY = "src"
PACKAGE_DESCRIPTOR = "package.json"
PAGE_DEFINITION = "page-definition.json"

COLLECTION_MARKER = "collection.json"
FRAGMENT_MARKER = "fragment.json"
FRAGMENT_COMPOSITION_MARKER = "fragment-composition.json"
PAGE_TEMPLATE_MARKER = "page-template.json"


def read_required_json(path: Path, *, encoding: str = "utf-8") -> Any:
    """
    Read a JSON file the aggregation cannot proceed without.

    Raises
    ------
    FatalMetadataError
        If the file is missing, unreadable or not valid JSON.
    """

    try:
        return read_json(path, encoding=encoding)
    except (OSError, ValueError) as exc:
        raise FatalMetadataError(path, str(exc)) from exc


def _build_fragment(
    directory: Path, metadata: Any, contents: dict[str, str], options: ScanOptions
) -> Fragment:
    """Build a fragment from its metadata and its loaded content files."""

    return Fragment(slug=directory.name, metadata=metadata, **contents)


def _build_fragment_composition(
    directory: Path, metadata: Any, contents: dict[str, str], options: ScanOptions
) -> FragmentComposition:
    """Build a fragment composition from its metadata and definition file."""

    return FragmentComposition(slug=directory.name, metadata=metadata, **contents)


def _build_collection(
    directory: Path, metadata: Any, contents: dict[str, str], options: ScanOptions
) -> Collection:
    """
    Build a collection and assemble the fragments and compositions inside it.

    Both child families are scanned in the collection directory itself.
    """

    return Collection(
        slug=directory.name,
        metadata=metadata,
        fragment_compositions=assemble_entities(
            directory, FRAGMENT_COMPOSITION, options
        ),
        fragments=assemble_entities(directory, FRAGMENT, options),
    )


def _build_page_template(
    directory: Path, metadata: Any, contents: dict[str, str], options: ScanOptions
) -> PageTemplate:
    """
    Build a page template from the sibling ``page-definition.json``.

    Only ``name`` is taken from the marker metadata. The definition is
    required: a missing or invalid file raises :class:`FatalMetadataError`.
    """

    definition_path = directory.resolve() / PAGE_DEFINITION
    definition = read_required_json(definition_path, encoding=options.encoding)

    return PageTemplate(
        slug=directory.name,
        metadata=PageTemplateMetadata(
            name=metadata_value(metadata, "name"),
            page_template_definition_path=definition_path,
        ),
        definition_data=stringify_json(definition),
    )


FRAGMENT: EntityKind[Fragment] = EntityKind(
    label="fragment",
    marker=FRAGMENT_MARKER,
    build=_build_fragment,
    fields=(
        ContentField("html", "htmlPath"),
        ContentField("css", "cssPath"),
        ContentField("js", "jsPath"),
        ContentField("configuration", "configurationPath", optional=True),
    ),
)

FRAGMENT_COMPOSITION: EntityKind[FragmentComposition] = EntityKind(
    label="fragment composition",
    marker=FRAGMENT_COMPOSITION_MARKER,
    build=_build_fragment_composition,
    fields=(ContentField("definition_data", "fragmentCompositionDefinitionPath"),),
)

COLLECTION: EntityKind[Collection] = EntityKind(
    label="collection",
    marker=COLLECTION_MARKER,
    build=_build_collection,
)

PAGE_TEMPLATE: EntityKind[PageTemplate] = EntityKind(
    label="page template",
    marker=PAGE_TEMPLATE_MARKER,
    build=_build_page_template,
)


def get_fragments(
    collection_dir: Path,
    *,
    encoding: str = "utf-8",
    logger: logging.Logger | None = None,
) -> tuple[Fragment, ...]:
    """Fragments of one collection directory, in scan order."""

    options = ScanOptions.create(encoding=encoding, logger=logger)
    return assemble_entities(Path(collection_dir), FRAGMENT, options)


def get_fragment_compositions(
    collection_dir: Path,
    *,
    encoding: str = "utf-8",
    logger: logging.Logger | None = None,
) -> tuple[FragmentComposition, ...]:
    """Fragment compositions of one collection directory, in scan order."""

    options = ScanOptions.create(encoding=encoding, logger=logger)
    return assemble_entities(Path(collection_dir), FRAGMENT_COMPOSITION, options)


def get_collections(
    base_path: Path,
    *,
    encoding: str = "utf-8",
    logger: logging.Logger | None = None,
) -> tuple[Collection, ...]:
    """
    Collections found under ``<base_path>/src``.

    Each collection carries its own fragments and fragment compositions.
    """

    options = ScanOptions.create(encoding=encoding, logger=logger)
    source_dir = Path(base_path).resolve() / SOURCE_DIRECTORY
    return assemble_entities(source_dir, COLLECTION, options)


def get_page_templates(
    base_path: Path,
    *,
    encoding: str = "utf-8",
    logger: logging.Logger | None = None,
) -> tuple[PageTemplate, ...]:
    """
    Page templates found under ``<base_path>/src``.

    Raises
    ------
    FatalMetadataError
        If a valid page template has no readable ``page-definition.json``.
    """

    options = ScanOptions.create(encoding=encoding, logger=logger)
    source_dir = Path(base_path).resolve() / SOURCE_DIRECTORY
    return assemble_entities(source_dir, PAGE_TEMPLATE, options)


def get_project_content(
    base_path: Path | str,
    *,
    encoding: str = "utf-8",
    logger: logging.Logger | None = None,
) -> Project:
    """
    Aggregate the whole content tree of a project directory.

    The filesystem is scanned from scratch on every call; nothing is cached.

    Parameters
    ----------
    base_path : pathlib.Path | str
        Project directory, containing ``package.json`` and ``src/``.
    encoding : str, default="utf-8"
        Text encoding used for every file read.
    logger : logging.Logger | None, optional
        Sink for skipped entities and degraded content. Defaults to the
        ``projectcontent`` logger.

    Returns
    -------
    Project
        The aggregated project.

    Raises
    ------
    FatalMetadataError
        If ``package.json`` or a page template's ``page-definition.json``
        is missing or malformed.
    """

    base_path = Path(base_path).resolve()
    project = read_required_json(base_path / PACKAGE_DESCRIPTOR, encoding=encoding)

    return Project(
        base_path=base_path,
        project=project,
        collections=get_collections(base_path, encoding=encoding, logger=logger),
        page_templates=get_page_templates(
            base_path, encoding=encoding, logger=logger
        ),
    )
