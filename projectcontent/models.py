# projectcontent/models.py

"""
In-memory model of an aggregated project.

Every entity is a frozen dataclass built once per aggregation run. Content
fields are always strings, child sequences are tuples in scan order, and
parsed metadata is kept as the JSON value read from the entity's marker file.
"""


from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class Fragment:
    """
    A fragment: markup, styles and script plus an optional configuration.

    ``html``, ``css`` and ``js`` hold the raw text of the files named by
    ``htmlPath``, ``cssPath`` and ``jsPath``; ``configuration`` that of
    ``configurationPath``. Each is ``""`` when its file is not available.
    """

    slug: str
    metadata: Any
    html: str = ""
    css: str = ""
    js: str = ""
    configuration: str = ""


@dataclass(frozen=True)
class FragmentComposition:
    """A fragment composition; ``definition_data`` is the raw definition file."""

    slug: str
    metadata: Any
    definition_data: str = ""


@dataclass(frozen=True)
class Collection:
    """A fragment collection; its slug doubles as the collection id."""

    slug: str
    metadata: Any
    fragment_compositions: tuple[FragmentComposition, ...] = ()
    fragments: tuple[Fragment, ...] = ()

    @property
    def fragment_collection_id(self) -> str:
        """Identifier of the collection, equal to its slug."""

        return self.slug


@dataclass(frozen=True)
class PageTemplateMetadata:
    """
    Page template metadata.

    Only ``name`` comes from ``page-template.json``; the definition path is
    always the absolute path of the sibling ``page-definition.json``.
    """

    name: Any
    page_template_definition_path: Path


@dataclass(frozen=True)
class PageTemplate:
    """A page template; ``definition_data`` is its compact JSON definition."""

    slug: str
    metadata: PageTemplateMetadata
    definition_data: str


@dataclass(frozen=True)
class Project:
    """
    Root of the aggregated tree.

    Attributes
    ----------
    base_path : pathlib.Path
        Absolute project directory.
    project : Any
        Parsed package descriptor (``package.json``).
    collections : tuple[Collection, ...]
        Valid collections found under ``<base_path>/src``.
    page_templates : tuple[PageTemplate, ...]
        Valid page templates found under ``<base_path>/src``.
    """

    base_path: Path
    project: Any
    collections: tuple[Collection, ...] = ()
    page_templates: tuple[PageTemplate, ...] = ()
