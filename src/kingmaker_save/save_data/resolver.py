"""
Reference resolution for save documents.

The engine serializes shared objects once, tagged with "$id", and writes
every other occurrence as a stub {"$ref": "<id>"}. ReferenceResolver builds
an identity index over one parsed document and dereferences such stubs on
demand. Each document needs its own resolver since identity tags are only
unique within a single document.
"""

import logging
from typing import Any, Optional

from .models import ID_KEY, REF_KEY, IdentityIndex, SourceNode, SourceObject


class ReferenceResolver:
    """Identity index over a single parsed save document.

    Indexing follows ownership only (nested dicts and lists), never
    references, so a single pass over the tree always terminates.
    """

    def __init__(self, root: SourceNode = None):
        """Initialize the resolver, indexing root if given.

        Args:
            root: Parsed document to index
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._index: IdentityIndex = {}
        self.duplicate_count = 0
        if root is not None:
            self.index(root)

    def index(self, root: SourceNode) -> int:
        """Walk the tree once and record every identity-tagged object.

        The first object seen for a given tag wins; later duplicates are
        counted but otherwise ignored.

        Args:
            root: Parsed document (or any sub-tree of it)

        Returns:
            Number of identity tags indexed by this call
        """
        added = 0
        # Pre-order, document order: children are pushed reversed
        stack: list[Any] = [root]
        while stack:
            node = stack.pop()
            if isinstance(node, dict):
                identity = node.get(ID_KEY)
                if isinstance(identity, str):
                    if identity in self._index:
                        self.duplicate_count += 1
                    else:
                        self._index[identity] = node
                        added += 1
                stack.extend(reversed(list(node.values())))
            elif isinstance(node, list):
                stack.extend(reversed(node))

        self.logger.debug(
            f"Indexed {added} identity tags ({self.duplicate_count} duplicates ignored)"
        )
        return added

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, identity: object) -> bool:
        return identity in self._index

    @staticmethod
    def is_reference(node: SourceNode) -> bool:
        """Check whether node is a reference stub."""
        return isinstance(node, dict) and REF_KEY in node

    def lookup(self, identity: str) -> Optional[SourceObject]:
        """Return the canonical object for an identity tag, or None."""
        return self._index.get(identity)

    def resolve(self, node: SourceNode) -> SourceNode:
        """Dereference node if it is a reference stub.

        Args:
            node: Any parsed JSON value

        Returns:
            The node itself when it is not a reference, the indexed target
            when it is, or None when the reference cannot be found
        """
        if isinstance(node, dict) and REF_KEY in node:
            return self._index.get(str(node[REF_KEY]))
        return node

    def resolve_object(self, node: SourceNode) -> Optional[SourceObject]:
        """Resolve node and return it only if the result is a JSON object."""
        resolved = self.resolve(node)
        return resolved if isinstance(resolved, dict) else None

    def resolve_list(self, node: SourceNode) -> list[Any]:
        """Resolve node and return it only if the result is a JSON array.

        Anything else (including a missing reference) yields an empty list.
        """
        resolved = self.resolve(node)
        return resolved if isinstance(resolved, list) else []

    def get(self, node: SourceNode, *keys: str) -> SourceNode:
        """Follow a chain of object keys, resolving at every hop.

        Each key is tried on the resolved object; a key may be given as
        "A|B" to accept either of two historical field names.

        Args:
            node: Starting node
            *keys: Field names to follow in order

        Returns:
            The resolved value at the end of the path, or None if any hop
            is missing or not an object
        """
        current = self.resolve(node)
        for key in keys:
            if not isinstance(current, dict):
                return None
            value = None
            for candidate in key.split("|"):
                if candidate in current:
                    value = current[candidate]
                    break
            current = self.resolve(value)
        return current
