"""
SkillGraph - Assemble the skill graph and derive active views.

Provides:
- Node and edge assembly from the four loaded inputs
- Progression score/depth enrichment
- Prerequisite model for edge styling
- Active views filtered by progress, optionally transitively reduced
- Ready-now listing and summary text for the progress panel
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from fishgraph.schemas import (
    EdgeType,
    EngineSettings,
    OffOffDisplay,
    PrerequisiteModel,
    ProgressMetrics,
    ProgressStatus,
    RawEdge,
    ResolvedEdge,
    SkillNode,
)
from fishgraph.utils.categories import natural_sort_key
from fishgraph.utils.token_parser import ParseDiagnostics

from .metrics import compute_progress_metrics
from .prerequisites import build_prerequisite_model
from .progression import apply_progression, calculate_progression_metrics
from .reduction import transitive_reduce_links


logger = logging.getLogger(__name__)


@dataclass
class GraphView:
    """What the renderer draws for one interaction."""
    nodes: list[SkillNode]
    edges: list[ResolvedEdge]
    full_edge_count: int             # edges among active nodes before reduction
    reduced: bool
    metrics: ProgressMetrics
    suppressed_ids: set[str] = field(default_factory=set)  # dimmed, not removed

    @property
    def active_ids(self) -> set[str]:
        return {node.id for node in self.nodes}

    def edge_summary(self) -> str:
        """Shown/full edge counts, e.g. 'Edges shown: 5/8 (38% indirect removed)'."""
        shown = len(self.edges)
        if not self.reduced:
            return f"Edges shown: {shown}"
        removed = max(0, self.full_edge_count - shown)
        removed_pct = round(removed / self.full_edge_count * 100) if self.full_edge_count > 0 else 0
        return f"Edges shown: {shown}/{self.full_edge_count} ({removed_pct}% indirect removed)"

    def status_summary(self) -> str:
        counts = self.metrics.counts
        return (
            f"Mastered {counts.mastered} • In Progress {counts.in_progress} "
            f"• Not Started {counts.not_started}"
        )

    def ready_list(self, limit: int = 40) -> list[str]:
        """
        Ready-now skills visible in this view.

        Ordered by number of prerequisite groups (most first), then
        natural ID order, truncated to limit.
        """
        active = self.active_ids
        ready = [node_id for node_id in self.metrics.ready_now_ids if node_id in active]
        ready.sort(key=lambda node_id: (-self.metrics.total_by_id.get(node_id, 0), natural_sort_key(node_id)))
        return ready[:limit]


class SkillGraph:
    """
    Master node/edge set plus the derived prerequisite model.

    Built once from loaded data; active_view() is cheap enough to call
    on every status toggle or settings change.
    """

    def __init__(
        self,
        nodes: list[SkillNode],
        edges: list[ResolvedEdge],
        prerequisite_model: PrerequisiteModel,
        appendix_b: Optional[Mapping[str, list[str]]] = None,
        settings: Optional[EngineSettings] = None,
        diagnostics: Optional[ParseDiagnostics] = None,
        dropped_edges: Optional[list[RawEdge]] = None,
    ):
        self.nodes = nodes
        self.edges = edges
        self.prerequisite_model = prerequisite_model
        self.appendix_b = dict(appendix_b or {})
        self.settings = settings or EngineSettings()
        self.diagnostics = diagnostics or ParseDiagnostics()
        self.dropped_edges = dropped_edges or []
        self._node_index = {node.id: node for node in nodes}

    @classmethod
    def build(
        cls,
        skills: Mapping[str, str],
        edges: Iterable[object],
        appendix_a: Optional[Mapping[str, list[str]]] = None,
        appendix_b: Optional[Mapping[str, list[str]]] = None,
        settings: Optional[EngineSettings] = None,
    ) -> "SkillGraph":
        """
        Assemble the graph from loaded inputs.

        Args:
            skills: id -> description; defines the valid node set
            edges: raw {source, target} edges (dicts or RawEdge)
            appendix_a: target_id -> raw prerequisite strings
            appendix_b: supplementary text, carried through untouched
            settings: engine settings (defaults if None)
        """
        settings = settings or EngineSettings()
        appendix_a = appendix_a or {}
        raw_edges = [_to_raw_edge(edge) for edge in edges or []]
        raw_edges = [edge for edge in raw_edges if edge is not None]

        nodes = [
            SkillNode(
                id=skill_id,
                description=str(description or ""),
                prereq_count=len(appendix_a.get(skill_id) or []),
            )
            for skill_id, description in (skills or {}).items()
        ]

        progression = calculate_progression_metrics(nodes, raw_edges, settings.score_weights)
        apply_progression(nodes, progression)

        diagnostics = ParseDiagnostics()
        model = build_prerequisite_model(appendix_a, [node.id for node in nodes], diagnostics)

        node_index = {node.id: node for node in nodes}
        resolved: list[ResolvedEdge] = []
        dropped: list[RawEdge] = []
        for edge in raw_edges:
            source = node_index.get(edge.source)
            target = node_index.get(edge.target)
            if source is None or target is None:
                dropped.append(edge)
                continue
            resolved.append(ResolvedEdge(source=source, target=target))

        if dropped:
            logger.debug(f"Dropped {len(dropped)} edges with unknown endpoints")
        if diagnostics.skipped:
            logger.debug(f"Skipped {len(diagnostics)} prerequisite tokens")
        logger.info(
            f"Built skill graph: {len(nodes)} nodes, {len(resolved)} edges, "
            f"max depth {progression.max_depth}"
        )

        return cls(
            nodes=nodes,
            edges=resolved,
            prerequisite_model=model,
            appendix_b=appendix_b,
            settings=settings,
            diagnostics=diagnostics,
            dropped_edges=dropped,
        )

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get_node(self, skill_id: str) -> Optional[SkillNode]:
        return self._node_index.get(skill_id)

    @property
    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def edge_type(self, edge: ResolvedEdge) -> Optional[EdgeType]:
        return self.prerequisite_model.edge_type(edge.source.id, edge.target.id)

    def find_node(self, query: str) -> Optional[SkillNode]:
        """Case-insensitive exact ID match, else first ID containing the query."""
        needle = query.strip().lower()
        if not needle:
            return None
        for node in self.nodes:
            if node.id.lower() == needle:
                return node
        for node in self.nodes:
            if needle in node.id.lower():
                return node
        return None

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def progress_metrics(self, progress_state: Optional[Mapping[str, object]]) -> ProgressMetrics:
        """Metrics over the full node set."""
        return compute_progress_metrics(self.nodes, self.prerequisite_model, progress_state)

    def active_view(
        self,
        progress_state: Optional[Mapping[str, object]] = None,
        off_off_display: Optional[object] = None,
        transitive_reduction: Optional[bool] = None,
    ) -> GraphView:
        """
        Build the active view for the current progress and display settings.

        Args:
            progress_state: skill_id -> status (caller-owned, read only)
            off_off_display: "dim" or "remove"; defaults to settings
            transitive_reduction: reduce visible edges; defaults to settings
        """
        progress_state = progress_state or {}
        display = OffOffDisplay.normalize(
            self.settings.off_off_display if off_off_display is None else off_off_display
        )
        reduce_edges = (
            self.settings.transitive_reduction if transitive_reduction is None else bool(transitive_reduction)
        )

        not_started_ids = {
            node.id for node in self.nodes
            if ProgressStatus.normalize(progress_state.get(node.id)) == ProgressStatus.NOT_STARTED
        }
        remove = display == OffOffDisplay.REMOVE
        active_nodes = [node for node in self.nodes if not (remove and node.id in not_started_ids)]
        active_ids = {node.id for node in active_nodes}

        filtered = [
            edge for edge in self.edges
            if edge.source.id in active_ids and edge.target.id in active_ids
        ]
        shown = transitive_reduce_links([node.id for node in active_nodes], filtered) if reduce_edges else filtered

        return GraphView(
            nodes=active_nodes,
            edges=shown,
            full_edge_count=len(filtered),
            reduced=reduce_edges,
            metrics=self.progress_metrics(progress_state),
            suppressed_ids=set() if remove else not_started_ids,
        )


def _to_raw_edge(edge: object) -> Optional[RawEdge]:
    """Coerce one loaded edge; None for shapes that aren't an edge."""
    if isinstance(edge, RawEdge):
        return edge
    if isinstance(edge, ResolvedEdge):
        return edge.to_raw()
    if isinstance(edge, dict):
        source_id, target_id = edge.get("source"), edge.get("target")
    elif isinstance(edge, (tuple, list)) and len(edge) == 2:
        source_id, target_id = edge
    else:
        return None
    if source_id is None or target_id is None:
        return None
    return RawEdge(source=str(source_id), target=str(target_id))
