"""Resolution — candidate names, search roots, and the two search orderings.

Everything here is pure apart from the injectable file-existence probe.
"""

from trellis.resolution.candidates import candidate_chain, generate_candidates, layout_candidates
from trellis.resolution.resolver import (
    ResolvedTemplate,
    reduce_identifier,
    resolve_candidate_major,
    resolve_path_major,
)
from trellis.resolution.search_path import SearchPath

__all__ = [
    "ResolvedTemplate",
    "SearchPath",
    "candidate_chain",
    "generate_candidates",
    "layout_candidates",
    "reduce_identifier",
    "resolve_candidate_major",
    "resolve_path_major",
]
