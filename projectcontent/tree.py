# projectcontent/tree.py

"""
Project outline rendering.

This module turns an aggregated :class:`~projectcontent.models.Project` into
an ``anytree`` hierarchy and renders it as a Unicode tree, similar to the
Unix ``tree`` command::

    my-site
    ├── basic-components
    │   ├── card-grid
    │   └── heading
    └── landing

Children keep the aggregation order: within a collection, fragment
compositions come before fragments, and page templates follow collections.
"""


from __future__ import annotations

from anytree import ContStyle, Node, RenderTree

from projectcontent.loader import metadata_value
from projectcontent.models import Project


def build_tree(project: Project) -> Node:
    """
    Build an ``anytree`` node hierarchy mirroring ``project``.

    Every node has a ``kind`` attribute (``"project"``, ``"collection"``,
    ``"fragment composition"``, ``"fragment"`` or ``"page template"``) and an
    ``entity`` attribute holding the model object it represents.

    Parameters
    ----------
    project : Project
        Aggregated project.

    Returns
    -------
    anytree.Node
        Root node named after the project's ``name``, or its directory.
    """

    root = Node(
        str(metadata_value(project.project, "name") or project.base_path.name),
        kind="project",
        entity=project,
    )

    for collection in project.collections:
        parent = Node(collection.slug, parent=root, kind="collection", entity=collection)
        for composition in collection.fragment_compositions:
            Node(
                composition.slug,
                parent=parent,
                kind="fragment composition",
                entity=composition,
            )
        for fragment in collection.fragments:
            Node(fragment.slug, parent=parent, kind="fragment", entity=fragment)

    for page_template in project.page_templates:
        Node(page_template.slug, parent=root, kind="page template", entity=page_template)

    return root


def draw_tree(node: Node) -> str:
    """Render a node hierarchy with ``├──`` / ``└──`` / ``│`` connectors."""

    return "\n".join(
        f"{pre}{n.name}" for pre, _, n in RenderTree(node, style=ContStyle())
    )


def draw_project(project: Project) -> str:
    """Render the outline of an aggregated project in one call."""

    return draw_tree(build_tree(project))
