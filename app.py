"""
Web application for the Wheel Terrain Contact Simulation

Interactive dashboard to visualize and analyze drop simulations.
"""

import logging
from typing import Any, Dict, List

import dash
from dash import dcc, html, Input, Output, State
from dash.exceptions import PreventUpdate
import numpy as np
import plotly.express as px
import plotly.graph_objs as go

from wheelsim import Terrain, run_drop_analysis
from wheelsim.logger import setup_logging

logger = logging.getLogger("wheelsim.app")

SPARK_GLOW_SCALE = 30.0
SPARK_GLOW_FLOOR = 0.7


def spark_glow(remaining_life: np.ndarray) -> np.ndarray:
    """Spark brightness derived from remaining life, floored for visibility"""
    return np.maximum(remaining_life / SPARK_GLOW_SCALE, SPARK_GLOW_FLOOR)


def build_terrain(name: str) -> Terrain:
    if name == "flat":
        return Terrain.flat(-50.0)
    return Terrain.default()


# Initialize Dash app
app = dash.Dash(__name__)
app.title = "Wheel Terrain Contact Simulation"

# Define app layout
app.layout = html.Div([
    html.Div([
        html.H1("Wheel Terrain Contact Simulation",
                style={'textAlign': 'center', 'marginBottom': '30px'}),

        html.Div([
            html.Div([
                html.Label("Drop Heights (comma-separated):",
                           style={'fontWeight': 'bold', 'marginBottom': '5px'}),
                dcc.Input(
                    id='heights-input',
                    type='text',
                    value='0,50,150,300',
                    style={'width': '100%', 'padding': '8px'}
                ),
            ], style={'width': '25%', 'display': 'inline-block', 'marginRight': '20px'}),

            html.Div([
                html.Label("Steps:",
                           style={'fontWeight': 'bold', 'marginBottom': '5px'}),
                dcc.Input(
                    id='steps-input',
                    type='number',
                    value=1000,
                    min=10,
                    max=20000,
                    step=10,
                    style={'width': '100%', 'padding': '8px'}
                ),
            ], style={'width': '12%', 'display': 'inline-block', 'marginRight': '20px'}),

            html.Div([
                html.Label("Initial Horizontal Velocity:",
                           style={'fontWeight': 'bold', 'marginBottom': '5px'}),
                dcc.Input(
                    id='vx-input',
                    type='number',
                    value=0.0,
                    step=1.0,
                    style={'width': '100%', 'padding': '8px'}
                ),
            ], style={'width': '15%', 'display': 'inline-block', 'marginRight': '20px'}),

            html.Div([
                html.Label("Terrain:",
                           style={'fontWeight': 'bold', 'marginBottom': '5px'}),
                dcc.Dropdown(
                    id='terrain-input',
                    options=[
                        {'label': 'Rolling hills', 'value': 'hills'},
                        {'label': 'Flat', 'value': 'flat'},
                    ],
                    value='hills',
                    clearable=False,
                ),
            ], style={'width': '15%', 'display': 'inline-block', 'marginRight': '20px',
                      'verticalAlign': 'bottom'}),

            html.Button('Run Simulation', id='run-button',
                        style={'width': '15%', 'padding': '10px', 'fontSize': '16px',
                               'backgroundColor': '#c0582b', 'color': 'white',
                               'border': 'none', 'borderRadius': '5px', 'cursor': 'pointer'})
        ], style={'marginBottom': '30px', 'padding': '20px', 'backgroundColor': '#f5f5f5',
                  'borderRadius': '10px'}),

        html.Div(id='status-message', style={'marginBottom': '20px', 'fontSize': '14px'}),

        dcc.Loading(
            id="loading",
            type="default",
            children=[
                html.Div(id='results-container')
            ]
        )
    ], style={'maxWidth': '1400px', 'margin': '0 auto', 'padding': '20px'})
])


@app.callback(
    [Output("results-container", "children"), Output("status-message", "children")],
    [Input("run-button", "n_clicks")],
    [
        State("heights-input", "value"),
        State("steps-input", "value"),
        State("vx-input", "value"),
        State("terrain-input", "value"),
    ],
)
def update_results(
    n_clicks: int | None, heights_str: str, n_steps: int, initial_vx: float, terrain_name: str
) -> tuple[Any, Any]:
    """Run simulation and update results"""
    if n_clicks is None:
        raise PreventUpdate

    try:
        heights = sorted([float(h.strip()) for h in heights_str.split(",")])
    except (AttributeError, ValueError):
        return [], html.Div(
            "Error: Drop heights must be comma-separated numbers.",
            style={"color": "red"},
        )

    # Validate inputs
    if n_steps is None or n_steps < 10 or n_steps > 20000:
        return [], html.Div(
            "Error: Steps must be between 10 and 20000.",
            style={"color": "red"},
        )

    if any(h < 0 for h in heights):
        return [], html.Div(
            "Error: Drop heights must be non-negative.",
            style={"color": "red"},
        )

    terrain = build_terrain(terrain_name)
    try:
        results = run_drop_analysis(
            heights, n_steps=int(n_steps), terrain=terrain, initial_vx=float(initial_vx or 0.0)
        )
    except ValueError as e:
        logger.warning("Simulation rejected: %s", e)
        return [], html.Div(f"Error: {e}", style={"color": "red"})

    status_msg = html.Div(
        f"Simulation complete! Analyzed {len(heights)} drop heights on {terrain}.",
        style={"color": "green"},
    )

    return create_results_layout(results, heights, terrain), status_msg


def create_results_layout(
    results: Dict[float, Dict[str, Any]], heights: List[float], terrain: Terrain
) -> html.Div:
    """Create the results visualization layout"""
    colors = px.colors.qualitative.Set1

    # 1. Terrain and wheel center trajectories, final sparks
    fig1 = go.Figure()
    x_min = min(float(np.min(results[h]["state"][:, 0])) for h in heights)
    x_max = max(float(np.max(results[h]["state"][:, 0])) for h in heights)
    margin = 2.0 * results[heights[0]]["simulator"].params.radius + 100.0
    xs, ys = terrain.sample(x_min - margin, x_max + margin)
    fig1.add_trace(
        go.Scatter(x=xs, y=ys, mode="lines", name="terrain",
                   line=dict(color="rgb(255, 178, 153)", width=3))
    )

    for i, drop_height in enumerate(heights):
        state = results[drop_height]["state"]
        color = colors[i % len(colors)]
        fig1.add_trace(
            go.Scatter(
                x=state[:, 0],
                y=state[:, 1],
                mode="lines",
                name=f"drop {drop_height:g}",
                line=dict(color=color, width=2),
                hovertemplate=f"Drop: {drop_height:g}<br>x: %{{x:.1f}}<br>y: %{{y:.1f}}<extra></extra>",
            )
        )

        particles = results[drop_height]["simulator"].snapshot()["particles"]
        if len(particles) > 0:
            glow = spark_glow(particles[:, 2])
            fig1.add_trace(
                go.Scatter(
                    x=particles[:, 0],
                    y=particles[:, 1],
                    mode="markers",
                    name=f"sparks {drop_height:g}",
                    marker=dict(size=4, color=glow, colorscale="YlOrRd", cmin=SPARK_GLOW_FLOOR),
                    showlegend=False,
                )
            )

    fig1.update_layout(
        title="Terrain and Wheel Center Trajectories",
        xaxis_title="x",
        yaxis_title="y",
        yaxis=dict(scaleanchor="x", scaleratio=1),
        hovermode="closest",
        height=500,
        template="plotly_white",
    )

    # 2. Clearance above the ground over time
    fig2 = go.Figure()
    for i, drop_height in enumerate(heights):
        t = results[drop_height]["time"]
        state = results[drop_height]["state"]
        clearance = state[:, 1] - np.array([terrain.height(x) for x in state[:, 0]])
        fig2.add_trace(
            go.Scatter(
                x=t,
                y=clearance,
                mode="lines",
                name=f"drop {drop_height:g}",
                line=dict(color=colors[i % len(colors)], width=2),
            )
        )

    fig2.update_layout(
        title="Center Height Above Ground",
        xaxis_title="Simulated time (s)",
        yaxis_title="Clearance",
        height=400,
        template="plotly_white",
    )

    # 3. Angular velocity over time
    fig3 = go.Figure()
    for i, drop_height in enumerate(heights):
        t = results[drop_height]["time"]
        omega = results[drop_height]["state"][:, 5]
        fig3.add_trace(
            go.Scatter(
                x=t,
                y=omega,
                mode="lines",
                name=f"drop {drop_height:g}",
                line=dict(color=colors[i % len(colors)], width=2),
            )
        )

    fig3.update_layout(
        title="Angular Velocity Over Time",
        xaxis_title="Simulated time (s)",
        yaxis_title="Angular velocity (rad/s)",
        height=400,
        template="plotly_white",
    )

    # 4. Live spark count
    fig4 = go.Figure()
    for i, drop_height in enumerate(heights):
        fig4.add_trace(
            go.Scatter(
                x=results[drop_height]["time"],
                y=results[drop_height]["spark_counts"],
                mode="lines",
                name=f"drop {drop_height:g}",
                line=dict(color=colors[i % len(colors)], width=2),
            )
        )

    fig4.update_layout(
        title="Live Sparks",
        xaxis_title="Simulated time (s)",
        yaxis_title="Sparks",
        height=400,
        template="plotly_white",
    )

    # 5. Oscillation amplitude by drop height
    labels = [f"{h:g}" for h in heights]
    amplitudes = [results[h]["analysis"]["oscillation_amplitude"] for h in heights]
    colors_bar = ["green" if results[h]["analysis"]["is_settled"] else "red" for h in heights]
    fig5 = go.Figure()
    fig5.add_trace(
        go.Bar(
            x=labels,
            y=amplitudes,
            marker_color=colors_bar,
            text=[f"{a:.3f}" for a in amplitudes],
            textposition="outside",
        )
    )

    fig5.update_layout(
        title="Settling Oscillation by Drop Height",
        xaxis_title="Drop height",
        yaxis_title="Peak-to-peak clearance",
        height=400,
        template="plotly_white",
    )

    # Summary table
    table_rows = [
        html.Tr([
            html.Th("Drop Height"),
            html.Th("Settled"),
            html.Th("First Contact Step"),
            html.Th("Contact (%)"),
            html.Th("Bounces"),
            html.Th("Max Speed"),
            html.Th("Max Live Sparks"),
        ])
    ]

    for drop_height in heights:
        analysis = results[drop_height]["analysis"]
        settled_color = "green" if analysis["is_settled"] else "red"
        table_rows.append(
            html.Tr([
                html.Td(f"{drop_height:g}"),
                html.Td(
                    "Yes" if analysis["is_settled"] else "No",
                    style={"color": settled_color, "fontWeight": "bold"},
                ),
                html.Td(analysis["first_contact_step"]),
                html.Td(f"{analysis['contact_fraction']*100:.1f}"),
                html.Td(analysis["bounce_count"]),
                html.Td(f"{analysis['max_speed']:.2f}"),
                html.Td(analysis["max_live_sparks"]),
            ])
        )

    return html.Div([
        html.H2("Simulation Results", style={"marginTop": "30px", "marginBottom": "20px"}),
        html.Div([
            html.H3("Summary Table", style={"marginBottom": "15px"}),
            html.Table(
                table_rows,
                style={
                    "width": "100%",
                    "borderCollapse": "collapse",
                    "marginBottom": "30px",
                    "fontSize": "14px",
                },
            ),
        ], style={"marginBottom": "30px"}),
        html.Div([
            html.Div([dcc.Graph(figure=fig1)], style={"marginBottom": "30px"}),
            html.Div([dcc.Graph(figure=fig2)], style={"marginBottom": "30px"}),
            html.Div([
                html.Div(
                    [dcc.Graph(figure=fig3)],
                    style={"width": "48%", "display": "inline-block", "marginRight": "2%"},
                ),
                html.Div(
                    [dcc.Graph(figure=fig4)],
                    style={"width": "48%", "display": "inline-block"},
                ),
            ], style={"marginBottom": "30px"}),
            html.Div([dcc.Graph(figure=fig5)], style={"marginBottom": "30px"}),
        ]),
    ])


if __name__ == "__main__":
    setup_logging("INFO")
    app.run(debug=True, port=8050)
