"""
projectcontent — discover and load a convention-based content project.

This package reads a project directory made of fragment collections,
fragments, fragment compositions and page templates, each identified by a
JSON marker file, and returns it as an immutable in-memory model:

- invalid entities are skipped and logged,
- missing content files degrade to empty strings and are logged,
- missing required metadata aborts with :class:`FatalMetadataError`.

The API is based on ``pathlib.Path`` and reads the filesystem only; nothing
is written or cached.
"""

from __future__ import annotations

from .content import (
    get_collections,
    get_fragment_compositions,
    get_fragments,
    get_page_templates,
    get_project_content,
)
from .errors import (
    DegradedContentWarning,
    FatalMetadataError,
    ProjectContentError,
    ProjectContentWarning,
    SkippedEntityWarning,
)
from .loader import (
    ScanOptions,
    load_content_file,
    load_optional_file,
    read_json,
    stringify_json,
)
from .models import (
    Collection,
    Fragment,
    FragmentComposition,
    PageTemplate,
    PageTemplateMetadata,
    Project,
)
from .scanner import (
    ContentField,
    EntityKind,
    assemble_entities,
    scan_entities,
    scan_order,
)
from .tree import build_tree, draw_project, draw_tree

__all__ = [
    "get_project_content",
    "get_collections",
    "get_fragments",
    "get_fragment_compositions",
    "get_page_templates",
    "scan_entities",
    "scan_order",
    "assemble_entities",
    "ContentField",
    "EntityKind",
    "ScanOptions",
    "read_json",
    "stringify_json",
    "load_content_file",
    "load_optional_file",
    "Project",
    "Collection",
    "Fragment",
    "FragmentComposition",
    "PageTemplate",
    "PageTemplateMetadata",
    "ProjectContentError",
    "FatalMetadataError",
    "ProjectContentWarning",
    "SkippedEntityWarning",
    "DegradedContentWarning",
    "build_tree",
    "draw_tree",
    "draw_project",
]
