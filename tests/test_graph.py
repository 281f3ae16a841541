"""
SkillGraph assembly and active view tests for FishGraph.
"""

import pytest

from fishgraph.engine import SkillGraph
from fishgraph.schemas import EdgeType, EngineSettings, OffOffDisplay


SKILLS = {
    "ADT 1": "Follows a routine",
    "ADT 2": "Follows a two-step routine",
    "ADT 3": "Follows a visual schedule",
    "COG 1": "Matches objects",
    "COG 10": "Sorts by two attributes",
}
EDGES = [
    {"source": "ADT 1", "target": "ADT 2"},
    {"source": "ADT 2", "target": "ADT 3"},
    {"source": "ADT 1", "target": "ADT 3"},
    {"source": "COG 1", "target": "COG 10"},
    {"source": "COG 1", "target": "XYZ 1"},   # unknown target
]
APPENDIX_A = {
    "ADT 2": ["ADT 1"],
    "ADT 3": ["ADT 1", "ADT 2 (or COG 1)"],
    "COG 10": ["COG 1", "not applicable"],
}
APPENDIX_B = {"ADT 3": ["Use picture cards"]}


@pytest.fixture
def graph():
    return SkillGraph.build(SKILLS, EDGES, APPENDIX_A, APPENDIX_B)


class TestBuild:
    """Test graph assembly from loaded inputs."""

    def test_nodes_follow_skills_order(self, graph):
        assert graph.node_ids == list(SKILLS)
        assert graph.get_node("ADT 1").description == "Follows a routine"

    def test_prereq_count_is_raw_entry_count(self, graph):
        assert graph.get_node("ADT 3").prereq_count == 2
        assert graph.get_node("COG 10").prereq_count == 2
        assert graph.get_node("ADT 1").prereq_count == 0

    def test_progression_applied(self, graph):
        assert graph.get_node("ADT 1").progression_depth == 0
        assert graph.get_node("ADT 3").progression_depth == 2
        assert all(0.0 <= node.progression_score <= 1.0 for node in graph.nodes)

    def test_edges_resolved_to_node_objects(self, graph):
        assert len(graph.edges) == 4
        first = graph.edges[0]
        assert first.source is graph.get_node("ADT 1")
        assert first.target is graph.get_node("ADT 2")

    def test_unknown_endpoints_dropped(self, graph):
        assert [(edge.source, edge.target) for edge in graph.dropped_edges] == [("COG 1", "XYZ 1")]

    def test_malformed_edges_dropped(self):
        graph = SkillGraph.build(SKILLS, [{"source": "ADT 1"}, None, ("ADT 1", "ADT 2"), 42])
        assert [edge.key for edge in graph.edges] == [("ADT 1", "ADT 2")]

    def test_prerequisite_model(self, graph):
        model = graph.prerequisite_model
        assert model.groups_for("ADT 3") == [["ADT 1"], ["ADT 2", "COG 1"]]
        assert graph.edge_type(graph.edges[0]) == EdgeType.REQUIRED
        assert model.edge_type("COG 1", "ADT 3") == EdgeType.OR

    def test_unparseable_tokens_recorded(self, graph):
        assert [item.token for item in graph.diagnostics.skipped] == ["not applicable"]

    def test_appendix_b_carried_through(self, graph):
        assert graph.appendix_b == APPENDIX_B

    def test_empty_inputs(self):
        graph = SkillGraph.build({}, [], None)
        assert graph.nodes == []
        assert graph.active_view({}).edge_summary() == "Edges shown: 0"

    def test_find_node(self, graph):
        assert graph.find_node("adt 2").id == "ADT 2"
        assert graph.find_node("COG 1").id == "COG 1"
        assert graph.find_node("10").id == "COG 10"
        assert graph.find_node("SOC") is None
        assert graph.find_node("  ") is None


class TestActiveView:
    """Test progress filtering, reduction and panel text."""

    def test_dim_keeps_all_nodes(self, graph):
        view = graph.active_view({"ADT 1": "mastered"})
        assert len(view.nodes) == len(SKILLS)
        assert view.suppressed_ids == {"ADT 2", "ADT 3", "COG 1", "COG 10"}
        assert view.edge_summary() == "Edges shown: 4"

    def test_remove_drops_not_started(self, graph):
        state = {"ADT 1": "mastered", "ADT 3": "in-progress"}
        view = graph.active_view(state, off_off_display="remove")
        assert [node.id for node in view.nodes] == ["ADT 1", "ADT 3"]
        assert [edge.key for edge in view.edges] == [("ADT 1", "ADT 3")]
        assert view.suppressed_ids == set()

    def test_unknown_display_falls_back_to_dim(self, graph):
        view = graph.active_view({}, off_off_display="hide")
        assert len(view.nodes) == len(SKILLS)

    def test_transitive_reduction(self, graph):
        view = graph.active_view({}, transitive_reduction=True)
        assert [edge.key for edge in view.edges] == [("ADT 1", "ADT 2"), ("ADT 2", "ADT 3"), ("COG 1", "COG 10")]
        assert view.edge_summary() == "Edges shown: 3/4 (25% indirect removed)"

    def test_settings_defaults_used(self):
        settings = EngineSettings(off_off_display=OffOffDisplay.REMOVE, transitive_reduction=True)
        graph = SkillGraph.build(SKILLS, EDGES, APPENDIX_A, settings=settings)
        view = graph.active_view({"ADT 1": "mastered", "ADT 2": "mastered", "ADT 3": "mastered"})
        assert [edge.key for edge in view.edges] == [("ADT 1", "ADT 2"), ("ADT 2", "ADT 3")]
        assert view.reduced

    def test_metrics_cover_all_nodes(self, graph):
        view = graph.active_view({"ADT 1": "mastered"}, off_off_display="remove")
        assert set(view.metrics.state_by_id) == set(SKILLS)

    def test_status_summary(self, graph):
        view = graph.active_view({"ADT 1": "mastered", "COG 1": "in-progress"})
        assert view.status_summary() == "Mastered 1 • In Progress 1 • Not Started 3"

    def test_progress_state_not_mutated(self, graph):
        state = {"ADT 1": "mastered"}
        graph.active_view(state, off_off_display="remove", transitive_reduction=True)
        assert state == {"ADT 1": "mastered"}


class TestReadyList:
    """Test ready-now ordering for the progress panel."""

    def test_order_by_group_count_then_natural(self, graph):
        state = {"ADT 1": "mastered", "ADT 2": "mastered", "COG 1": "mastered"}
        view = graph.active_view(state)
        # ADT 3: 2 groups, COG 10: 1 group (the unparseable entry adds none)
        assert view.ready_list() == ["ADT 3", "COG 10"]

    def test_natural_order_on_ties(self):
        skills = {"COG 10": "", "COG 2": "", "COG 1": ""}
        graph = SkillGraph.build(skills, [])
        assert graph.active_view({}).ready_list() == ["COG 1", "COG 2", "COG 10"]

    def test_limit(self, graph):
        assert len(graph.active_view({}).ready_list(limit=1)) == 1

    def test_restricted_to_active_nodes(self, graph):
        view = graph.active_view({"ADT 1": "mastered"}, off_off_display="remove")
        # ADT 2 and COG 1 are ready but not started, so removed from the view
        assert view.ready_list() == []
