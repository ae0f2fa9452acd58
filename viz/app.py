"""
Identifier Validator — Live Automaton Dashboard

Type a candidate variable name, press Validate, and watch the automaton
consume it one character per tick. Accepted names with a description get a
naming-quality recommendation at the end of playback.

Panels:
  Left sidebar: Controls (identifier, description, presets, speed, playback)
  Right: State diagram, character strip, trace table, verdict,
         recommendation, transition table
"""

import os
import sys

from dash import Dash, html, dcc, Input, Output, State
import dash
import plotly.graph_objects as go

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from identifier_dfa import IdentifierDFA, State as DFAState
from presets import (
    ValidatorConfig, get_preset, MIN_SPEED_MS, MAX_SPEED_MS, SPEED_STEP_MS,
)
from viz.breakpoint_engine import BreakpointEngine, ConditionType
from viz.graph_builder import create_graph_component, build_dfa_graph
from viz.playback import PlaybackController, PlaybackSession

# ── Globals ──────────────────────────────────────────────────────────────────

_app = None
_config = ValidatorConfig()
_controller = PlaybackController(speed_ms=_config.speed_ms)
_breakpoints = BreakpointEngine()
_breakpoints.add_breakpoint(ConditionType.ENTERED_STATE, target=DFAState.REJECT.value,
                            bp_id="first-rejection")

_CHART_LAYOUT = {
    "paper_bgcolor": "#1a1a2e",
    "plot_bgcolor": "#1a1a2e",
    "font": {"color": "#e0e0ee", "size": 10},
    "margin": {"l": 50, "r": 20, "t": 20, "b": 40},
}

_CHAR_COLORS = {
    "pending": ("#1e1e3a", "#666"),
    "current": ("#4a3a1a", "#fbbf24"),
    "valid": ("#1a3a1a", "#4ade80"),
    "invalid": ("#3a1a1a", "#f87171"),
}


def create_app(config=None, controller=None):
    """Create and return a configured Dash app."""
    global _config, _controller, _app
    if config is not None:
        _config = config
    if controller is not None:
        _controller = controller
    _controller.set_speed(_config.speed_ms)

    app = Dash(__name__)
    _app = app

    # ── Styles ───────────────────────────────────────────────────────────
    dark_bg = "#0f0f1a"
    panel_bg = "#1a1a2e"
    accent = "#6366f1"
    text_color = "#e0e0ee"
    muted = "#888"

    def _panel(title, children, style_override=None):
        base_style = {
            "backgroundColor": panel_bg,
            "borderRadius": "12px",
            "padding": "16px",
            "border": "1px solid #2a2a4a",
            "marginBottom": "12px",
        }
        if style_override:
            base_style.update(style_override)
        return html.Div([
            html.H3(title, style={
                "color": text_color, "margin": "0 0 12px 0",
                "fontSize": "15px", "fontWeight": "600",
            }),
            html.Div(children),
        ], style=base_style)

    def _btn(label, id, color="#2a2a4a", **kwargs):
        return html.Button(label, id=id, n_clicks=0, style={
            "backgroundColor": color, "color": text_color,
            "border": "1px solid #3a3a5a", "borderRadius": "6px",
            "padding": "6px 14px", "cursor": "pointer",
            "fontSize": "12px", "fontWeight": "500",
            **kwargs,
        })

    def _input(id, placeholder="", value=None, width="100%"):
        return dcc.Input(
            id=id, type="text", placeholder=placeholder, value=value,
            debounce=False,
            style={
                "backgroundColor": "#1e1e3a", "color": text_color,
                "border": "1px solid #3a3a5a", "borderRadius": "4px",
                "padding": "5px 8px", "fontSize": "12px", "width": width,
                "marginBottom": "8px",
            },
        )

    preset_options = [
        {"label": f"{'✅' if p.expected_valid else '❌'} {p.name}", "value": p.name}
        for p in _config.presets
    ]

    # ── Layout ───────────────────────────────────────────────────────────

    app.layout = html.Div(
        style={
            "backgroundColor": dark_bg, "minHeight": "100vh",
            "padding": "20px", "fontFamily": "'Inter', 'Segoe UI', sans-serif",
            "color": text_color,
        },
        children=[
            # Header
            html.Div(
                style={"display": "flex", "alignItems": "center",
                       "justifyContent": "space-between", "marginBottom": "20px"},
                children=[
                    html.H1("🔤 Identifier Validator", style={
                        "margin": "0", "fontSize": "24px",
                        "background": f"linear-gradient(135deg, {accent}, #a78bfa)",
                        "WebkitBackgroundClip": "text",
                        "WebkitTextFillColor": "transparent",
                    }),
                    html.Div(id="status-bar", style={
                        "fontSize": "13px", "color": muted,
                    }),
                ],
            ),

            html.Div(
                style={"display": "grid",
                       "gridTemplateColumns": "320px 1fr",
                       "gap": "16px"},
                children=[
                    # ── LEFT SIDEBAR: Controls ───────────────────────
                    html.Div([
                        _panel("✏️ Input", [
                            html.Div("Variable name:", style={"color": muted,
                                     "fontSize": "12px", "marginBottom": "4px"}),
                            _input("identifier-input", "e.g. myVariable"),
                            html.Div("Description (optional):", style={"color": muted,
                                     "fontSize": "12px", "marginBottom": "4px"}),
                            _input("description-input", "What does it hold?"),
                            html.Div(style={"display": "flex", "gap": "6px"}, children=[
                                _btn("▶ Validate", "btn-validate", color="#2a4a2a"),
                                _btn("⏭ Jump to rejection", "btn-jump", color="#4a3a2a"),
                                _btn("⟲ Reset", "btn-reset", color="#4a2a2a"),
                            ]),
                        ]),

                        _panel("📚 Examples", [
                            dcc.Dropdown(
                                id="preset-select",
                                options=preset_options,
                                placeholder="Try an example",
                                style={"backgroundColor": "#1e1e3a",
                                       "color": "#000", "fontSize": "12px"},
                            ),
                        ]),

                        _panel("⏱ Animation speed", [
                            dcc.Slider(
                                id="speed-slider",
                                min=MIN_SPEED_MS, max=MAX_SPEED_MS,
                                step=SPEED_STEP_MS, value=_config.speed_ms,
                                marks={MIN_SPEED_MS: "fast", MAX_SPEED_MS: "slow"},
                            ),
                            html.Div(id="speed-label", style={"fontSize": "11px",
                                                              "color": muted}),
                        ]),

                        _panel("📏 Rules", [
                            html.Ul([
                                html.Li("Must start with a letter (a-z, A-Z) or underscore (_)"),
                                html.Li("Can contain letters, digits (0-9), and underscores"),
                                html.Li("No reserved keywords (not checked here)"),
                            ], style={"fontSize": "12px", "color": muted,
                                      "paddingLeft": "18px", "margin": 0}),
                        ]),
                    ]),

                    # ── RIGHT: Visualization ─────────────────────────
                    html.Div([
                        html.Div(
                            style={"display": "grid",
                                   "gridTemplateColumns": "1fr 1fr",
                                   "gap": "12px"},
                            children=[
                                _panel("🕸️ State Diagram", [
                                    html.Div(id="graph-container",
                                             style={"minHeight": "340px"}),
                                ]),
                                _panel("🔎 Simulation", [
                                    html.Div(id="char-strip",
                                             style={"marginBottom": "12px"}),
                                    html.Div(id="verdict",
                                             style={"marginBottom": "12px"}),
                                    html.Div(id="trace-table",
                                             style={"maxHeight": "260px",
                                                    "overflowY": "auto"}),
                                ]),
                            ],
                        ),
                        html.Div(
                            style={"display": "grid",
                                   "gridTemplateColumns": "1fr 1fr",
                                   "gap": "12px"},
                            children=[
                                _panel("💡 Recommendation", [
                                    html.Div(id="recommendation"),
                                ]),
                                _panel("📋 Transition Table", [
                                    dcc.Graph(id="transition-table",
                                              figure=_render_transition_heatmap(),
                                              config={"displayModeBar": False},
                                              style={"height": "220px"}),
                                ]),
                            ],
                        ),
                    ]),
                ],
            ),

            dcc.Interval(id="playback-tick", interval=_config.speed_ms,
                         n_intervals=0, disabled=True),
            dcc.Store(id="playback", data=None),
        ],
    )

    # ── Callbacks ────────────────────────────────────────────────────────

    # == Preset picker ==
    @app.callback(
        Output("identifier-input", "value"),
        Output("description-input", "value"),
        Input("preset-select", "value"),
        prevent_initial_call=True,
    )
    def apply_preset(name):
        if not name:
            return dash.no_update, dash.no_update
        preset = get_preset(name)
        return preset.name, preset.description

    # == Playback driver: start, tick, jump, cancel ==
    @app.callback(
        Output("playback", "data"),
        Output("playback-tick", "disabled"),
        Input("btn-validate", "n_clicks"),
        Input("btn-reset", "n_clicks"),
        Input("btn-jump", "n_clicks"),
        Input("identifier-input", "value"),
        Input("playback-tick", "n_intervals"),
        State("description-input", "value"),
        State("playback", "data"),
        prevent_initial_call=True,
    )
    def drive_playback(validate, reset, jump, identifier, ticks,
                       description, data):
        return _handle_playback_event(dash.ctx.triggered_id, identifier,
                                      description, data)

    # == Speed ==
    @app.callback(
        Output("playback-tick", "interval"),
        Output("speed-label", "children"),
        Input("speed-slider", "value"),
    )
    def set_speed(value):
        try:
            _controller.set_speed(value)
        except ValueError as e:
            return dash.no_update, f"⚠ {e}"
        return _controller.speed_ms, f"{_controller.speed_ms} ms per character"

    # == Render everything from the live session ==
    @app.callback(
        Output("graph-container", "children"),
        Output("char-strip", "children"),
        Output("verdict", "children"),
        Output("trace-table", "children"),
        Output("recommendation", "children"),
        Output("status-bar", "children"),
        Input("playback", "data"),
    )
    def render(data):
        session = _live_session(data)
        return (
            _render_graph(session),
            _render_characters(session),
            _render_verdict(session),
            _render_trace_table(session),
            _render_recommendation(session),
            _render_status(session),
        )

    return app


# ── Playback helpers ─────────────────────────────────────────────────────────

def _live_session(data) -> PlaybackSession | None:
    """The controller's session if `data` still refers to it."""
    if not data:
        return None
    if not _controller.is_current(data.get("generation", -1)):
        return None
    return _controller.current


def _handle_playback_event(trigger, identifier, description, data):
    """Apply one UI event. Returns (store data, interval disabled)."""
    if trigger in ("identifier-input", "btn-reset"):
        _controller.cancel()
        return None, True

    if trigger == "btn-validate":
        session = _controller.start(identifier or "", description or "")
        return session.to_dict(), session.done

    session = _live_session(data)
    if session is None:
        return dash.no_update, True

    if trigger == "btn-jump":
        steps = [s.to_dict() for s in session.result.trace]
        hit = _breakpoints.find_next_breakpoint(steps, from_step=session.cursor)
        session.seek(hit.step + 1 if hit else session.total)
        return session.to_dict(), session.done

    if trigger == "playback-tick":
        if session.advance() is None:
            return None, True
        return session.to_dict(), session.done

    return dash.no_update, dash.no_update


# ── Render helpers ───────────────────────────────────────────────────────────

def _render_graph(session):
    """Render the state diagram for the session's current frame."""
    if session is None:
        return create_graph_component(build_dfa_graph(DFAState.START.value))
    frame = session.frame()
    active = frame.step.to_dict() if frame.step is not None else None
    return create_graph_component(build_dfa_graph(frame.current_state.value, active))


def _character_status(session, index):
    if index < session.cursor:
        step = session.result.trace[index]
        return "invalid" if step.to_state is DFAState.REJECT else "valid"
    if index == session.cursor and not session.done:
        return "current"
    return "pending"


def _display_char(ch):
    if ch == " ":
        return "␠"
    if ch.isprintable():
        return ch
    return repr(ch)[1:-1]


def _render_characters(session):
    """Render the input as a strip of per-character boxes."""
    if session is None or not session.result.input_str:
        return html.Div("Enter a name and press Validate.", style={"color": "#666",
                                                                   "fontSize": "12px"})
    boxes = []
    for i, ch in enumerate(session.result.input_str):
        bg, fg = _CHAR_COLORS[_character_status(session, i)]
        boxes.append(html.Span(
            _display_char(ch),
            style={"display": "inline-block", "minWidth": "22px",
                   "padding": "4px 6px", "margin": "2px",
                   "textAlign": "center", "fontFamily": "monospace",
                   "backgroundColor": bg, "color": fg,
                   "border": f"1px solid {fg}", "borderRadius": "4px"},
        ))
    return html.Div(boxes)


def _render_verdict(session):
    if session is None:
        return html.Div()
    frame = session.frame()
    if not frame.done:
        return html.Div(f"Processing… {frame.position}/{frame.total}",
                        style={"color": "#fbbf24", "fontSize": "13px"})
    if frame.accepted:
        return html.Div(f"✅ '{session.result.input_str}' is a valid variable name",
                        style={"color": "#4ade80", "fontWeight": "bold"})
    first = session.result.first_rejection()
    if first is None:
        reason = "Empty names are never valid."
    elif first.index == 0:
        reason = "Variable names must start with a letter or underscore."
    else:
        reason = "Variable names can only contain letters, digits, and underscores."
    return html.Div([
        html.Span(f"❌ '{session.result.input_str}' is not a valid variable name",
                  style={"color": "#f87171", "fontWeight": "bold"}),
        html.Br(),
        html.Span(reason, style={"color": "#888", "fontSize": "11px"}),
    ])


def _render_trace_table(session):
    """Render the steps revealed so far."""
    if session is None or session.cursor == 0:
        return html.Div("No steps yet.", style={"color": "#666"})

    rows = [html.Tr([
        html.Th(h, style={"padding": "4px 8px", "borderBottom": "1px solid #3a3a5a",
                          "color": "#aaa", "fontSize": "11px", "textAlign": "left"})
        for h in ["#", "Char", "From", "To", "Reason"]
    ])]

    for step in session.result.trace[:session.cursor]:
        row_style = {"padding": "3px 8px", "fontSize": "12px",
                     "borderBottom": "1px solid #1e1e3a", "color": "#ddd"}
        if step.index == session.cursor - 1:
            row_style["backgroundColor"] = "#2a2a4a"
        to_color = "#f87171" if step.to_state is DFAState.REJECT else "#4ade80"
        rows.append(html.Tr([
            html.Td(str(step.index), style=row_style),
            html.Td(repr(step.character), style={**row_style, "fontFamily": "monospace"}),
            html.Td(step.from_state.value, style=row_style),
            html.Td(step.to_state.value, style={**row_style, "color": to_color}),
            html.Td(step.reason, style={**row_style, "color": "#aaa"}),
        ]))

    return html.Table(rows, style={"width": "100%", "borderCollapse": "collapse"})


def _render_recommendation(session):
    """Render analyzer output once an accepted run has finished."""
    rec = session.recommendation() if session is not None else None
    if rec is None:
        if session is not None and session.done and session.result.accepted:
            return html.Div("Add a description to get naming suggestions.",
                            style={"color": "#666", "fontSize": "12px"})
        return html.Div("—", style={"color": "#666"})

    dots = [
        html.Span("●" if i < rec.score else "○",
                  style={"color": "#6366f1" if i < rec.score else "#3a3a5a",
                         "fontSize": "16px", "marginRight": "2px"})
        for i in range(5)
    ]
    items = [
        html.Div(rec.overall, style={"fontWeight": "bold", "marginBottom": "6px"}),
        html.Div([html.Span("Quality score: ", style={"color": "#888"}), *dots]),
    ]
    if rec.positives:
        items.append(html.Ul([html.Li(f"✓ {p}", style={"color": "#4ade80"})
                              for p in rec.positives],
                             style={"fontSize": "12px", "paddingLeft": "16px"}))
    if rec.suggestions:
        items.append(html.Ul([html.Li(f"→ {s}", style={"color": "#fbbf24"})
                              for s in rec.suggestions],
                             style={"fontSize": "12px", "paddingLeft": "16px"}))
    return html.Div(items)


def _render_status(session):
    speed = f"{_controller.speed_ms} ms/char"
    if session is None:
        return f"Idle | {speed}"
    frame = session.frame()
    return (f"Run #{session.generation} | State: {frame.current_state.value} | "
            f"Step {frame.position}/{frame.total} | {speed}")


def _render_transition_heatmap():
    """Render the (state × character class) table as a heatmap."""
    dfa = IdentifierDFA()
    matrix = dfa.transition_matrix()
    targets = [[dfa.states[v].value for v in row] for row in matrix.tolist()]
    fig = go.Figure(go.Heatmap(
        z=matrix,
        x=[cc.value for cc in dfa.alphabet],
        y=[f"{s.value} ({s.label})" for s in dfa.states],
        text=targets,
        texttemplate="%{text}",
        colorscale=[[0.0, "#2a2a4a"], [0.5, "#1a3a1a"], [1.0, "#3a1a1a"]],
        showscale=False,
        zmin=0, zmax=len(dfa.states) - 1,
    ))
    fig.update_layout(
        **_CHART_LAYOUT,
        xaxis={"title": "Character class", "title_font_size": 10, "side": "top"},
        yaxis={"autorange": "reversed"},
        height=200,
    )
    return fig


# ── Main ─────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app = create_app()
    print("🔤 Identifier Validator starting...")
    print("   Open http://127.0.0.1:8050 in your browser")
    app.run(debug=True, port=8050)
