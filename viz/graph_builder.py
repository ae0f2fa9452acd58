"""
Cytoscape Graph Builder — State diagram of the identifier automaton.

Nodes are the three states, edges the transitions grouped by character
class. The current state and the transition that just fired are
highlighted so the diagram can follow a trace step by step.
"""

import os
import sys

import dash_cytoscape as cyto
from dash import html

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from identifier_dfa import State


# ── Cytoscape stylesheet ────────────────────────────────────────────────────

GRAPH_STYLESHEET = [
    # Default node style
    {
        "selector": "node",
        "style": {
            "label": "data(label)",
            "text-valign": "center",
            "text-halign": "center",
            "text-wrap": "wrap",
            "background-color": "#2a2a4a",
            "color": "#e0e0ee",
            "font-size": "11px",
            "border-width": 2,
            "border-color": "#3a3a5a",
            "width": 60,
            "height": 60,
        },
    },
    # Accepting state gets a double ring
    {
        "selector": "node.accept",
        "style": {
            "border-style": "double",
            "border-width": 6,
            "border-color": "#4ade80",
        },
    },
    # Reject state
    {
        "selector": "node.error",
        "style": {
            "background-color": "#3a1a1a",
            "border-color": "#ef4444",
        },
    },
    # Current automaton state
    {
        "selector": "node.current-state",
        "style": {
            "background-color": "#4f46e5",
            "border-color": "#c4b5fd",
            "width": 75,
            "height": 75,
            "font-size": "13px",
            "font-weight": "bold",
        },
    },
    {
        "selector": "node.current-state.error",
        "style": {
            "background-color": "#7f1d1d",
        },
    },
    # Default edge style
    {
        "selector": "edge",
        "style": {
            "width": 2,
            "label": "data(label)",
            "font-size": "9px",
            "color": "#aaa",
            "line-color": "#3a3a5a",
            "target-arrow-color": "#3a3a5a",
            "target-arrow-shape": "triangle",
            "curve-style": "bezier",
            "opacity": 0.6,
        },
    },
    # Self loops
    {
        "selector": "edge.loop",
        "style": {
            "loop-direction": "-45deg",
            "loop-sweep": "-60deg",
        },
    },
    # Transition that just fired
    {
        "selector": "edge.active",
        "style": {
            "line-color": "#6366f1",
            "target-arrow-color": "#6366f1",
            "color": "#c4b5fd",
            "width": 4,
            "opacity": 1,
        },
    },
]

# (source, target, label) for every drawn edge
DFA_EDGES = (
    (State.START, State.ACCEPT, "letter, _"),
    (State.START, State.REJECT, "digit, other"),
    (State.ACCEPT, State.ACCEPT, "letter, digit, _"),
    (State.ACCEPT, State.REJECT, "other"),
    (State.REJECT, State.REJECT, "any"),
)

NODE_POSITIONS = {
    State.START: {"x": 80, "y": 120},
    State.ACCEPT: {"x": 280, "y": 120},
    State.REJECT: {"x": 180, "y": 280},
}


# ── Diagram ─────────────────────────────────────────────────────────────────

def edge_id(src: State, tgt: State) -> str:
    return f"{src.value}->{tgt.value}"


def build_dfa_graph(current_state: str | None = None,
                    active_step: dict | None = None) -> list[dict]:
    """Build Cytoscape elements for the automaton.

    Args:
        current_state: State value ("q0", "q1", "qR") to highlight.
        active_step: TraceStep dict of the transition that just fired.

    Returns:
        List of Cytoscape node/edge elements.
    """
    elements = []

    for state, pos in NODE_POSITIONS.items():
        classes = []
        if state is State.ACCEPT:
            classes.append("accept")
        if state is State.REJECT:
            classes.append("error")
        if current_state == state.value:
            classes.append("current-state")
        elements.append({
            "data": {"id": state.value, "label": f"{state.value}\n{state.label}"},
            "position": pos,
            "classes": " ".join(classes),
        })

    active = None
    if active_step:
        active = (active_step.get("from_state"), active_step.get("to_state"))

    for src, tgt, label in DFA_EDGES:
        classes = []
        if src == tgt:
            classes.append("loop")
        if active == (src.value, tgt.value):
            classes.append("active")
        elements.append({
            "data": {
                "id": edge_id(src, tgt),
                "source": src.value,
                "target": tgt.value,
                "label": label,
            },
            "classes": " ".join(classes),
        })

    return elements


# ── Component builders ───────────────────────────────────────────────────────

def create_graph_component(
    elements: list[dict],
    graph_id: str = "cyto-graph",
    height: str = "340px",
    layout_name: str = "preset",
) -> cyto.Cytoscape:
    """Create a Cytoscape component with the standard stylesheet."""
    return cyto.Cytoscape(
        id=graph_id,
        elements=elements,
        stylesheet=GRAPH_STYLESHEET,
        style={"width": "100%", "height": height,
               "backgroundColor": "#0f0f1a"},
        layout={"name": layout_name},
        userZoomingEnabled=True,
        userPanningEnabled=True,
        boxSelectionEnabled=False,
    )


def create_graph_panel(current_state: str | None = None,
                       active_step: dict | None = None,
                       caption: str = "") -> html.Div:
    """Create the graph panel with caption and component."""
    return html.Div([
        html.Div(
            caption or "State diagram",
            style={"color": "#888", "fontSize": "12px", "marginBottom": "8px"},
        ),
        create_graph_component(build_dfa_graph(current_state, active_step)),
    ])
