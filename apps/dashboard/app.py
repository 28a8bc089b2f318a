from __future__ import annotations

import json
from dataclasses import replace

import numpy as np
import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from vistas.driver.clock import FixedStepClock
from vistas.driver.context import SceneContext
from vistas.driver.loop import FrameSnapshot, SceneDriver
from vistas.logging_config import setup_logging
from vistas.scenes.builder import build_scene
from vistas.scenes.config import SceneConfig
from vistas.scenes.presets import PRESETS, get_preset
from vistas.surface.grid import SurfaceGrid
from vistas.surface.shading import floor_color, hex_to_rgb, rgb_to_hex, sky_color
from vistas.timeline.recorder import build_visual_frame, run_timeline

st.set_page_config(page_title="Vistas Scene Preview", layout="wide")

st.markdown(
    """
<style>
.stApp {
    background-color: #0b1220;
    color: #e5edf7;
    font-family: "JetBrains Mono", "SFMono-Regular", monospace;
}
[data-testid="stSidebar"] {
    background-color: #0e1627;
    border-right: 1px solid #1f2a3f;
}
[data-testid="stMetric"] {
    background-color: #111b2f;
    border: 1px solid #2a3b58;
    border-radius: 8px;
    padding: 10px 12px;
}
h1, h2, h3 {
    color: #dce7ff;
}
</style>
""",
    unsafe_allow_html=True,
)

PLOT_TEMPLATE = "plotly_dark"
ACCENT_BLUE = "#4c8dff"
ACCENT_GREEN = "#33d17a"
ACCENT_ORANGE = "#f6a04d"
ACCENT_PURPLE = "#a371f7"
PREVIEW_MAX_SEGMENTS = 80
PREVIEW_MAX_PARTICLES = 3000
CAMERA_EYE_DISTANCE = 1.8


def _placeholder_loader(url: str) -> dict[str, str]:
    # Props render as markers; any non-empty handle works.
    return {"url": url}


@st.cache_resource(show_spinner=False)
def _init_logging() -> None:
    setup_logging()


def _preview_config(config: SceneConfig) -> SceneConfig:
    if config.surface is None:
        return config
    surface = replace(
        config.surface,
        segments_x=min(config.surface.segments_x, PREVIEW_MAX_SEGMENTS),
        segments_z=min(config.surface.segments_z, PREVIEW_MAX_SEGMENTS),
    )
    return replace(config, surface=surface)


def _snapshot_at(
    config: SceneConfig, seconds: float, fps: int, seed: int
) -> tuple[FrameSnapshot, SceneContext]:
    context = build_scene(config, seed=seed, loader=_placeholder_loader)
    driver = SceneDriver(context)
    clock = FixedStepClock(step=1.0 / float(fps))
    snapshot = driver.step(clock.tick())
    for _ in range(int(round(seconds * fps))):
        snapshot = driver.step(clock.tick())
    return snapshot, context


@st.cache_data(show_spinner=False)
def _timeline(preset: str, seconds: float, fps: int, seed: int) -> pd.DataFrame:
    config = _preview_config(get_preset(preset))
    return run_timeline(
        config, seconds=seconds, fps=fps, seed=seed, loader=_placeholder_loader
    )


def _floor_trace(surface: SurfaceGrid, color1: int | str, color2: int | str) -> go.Mesh3d:
    u, v = surface.uv()
    rgb = floor_color(u, v, hex_to_rgb(color1), hex_to_rgb(color2))
    triangles = surface.triangles()
    return go.Mesh3d(
        x=surface.x,
        y=surface.z,
        z=surface.heights,
        i=triangles[:, 0],
        j=triangles[:, 1],
        k=triangles[:, 2],
        vertexcolor=[rgb_to_hex(tuple(color)) for color in rgb],
        opacity=0.9,
        name="Surface",
    )


def _camera_eye(position: tuple[float, float, float]) -> dict[str, float]:
    # Plotly's y/z axes are the scene's z/y; eye is in scene-box units.
    x, y, z = position
    norm = float(np.linalg.norm(position)) or 1.0
    scale = CAMERA_EYE_DISTANCE / norm
    return {"x": x * scale, "y": z * scale, "z": y * scale}


def _backdrop(snapshot: FrameSnapshot) -> str:
    if snapshot.sky is None:
        return rgb_to_hex(snapshot.background)
    # Sky seen behind the scene centre, looking from the camera through the origin.
    view = -np.asarray(snapshot.camera_position.as_tuple())
    if not view.any():
        view = np.array([0.0, 0.0, -1.0])
    inner, outer = snapshot.sky
    return rgb_to_hex(tuple(sky_color(view, inner, outer)))


def _scene_figure(
    config: SceneConfig, snapshot: FrameSnapshot, context: SceneContext
) -> go.Figure:
    fig = go.Figure()

    if context.surface is not None and config.surface is not None:
        fig.add_trace(_floor_trace(context.surface, config.surface.color1, config.surface.color2))

    if snapshot.particle_positions is not None and config.particles is not None:
        payload = build_visual_frame(snapshot, max_particles=PREVIEW_MAX_PARTICLES)
        points = np.asarray(payload["particles"], dtype=float)
        fig.add_trace(
            go.Scatter3d(
                x=points[:, 0],
                y=points[:, 2],
                z=points[:, 1],
                mode="markers",
                marker=dict(size=2.5, color=rgb_to_hex(hex_to_rgb(config.particles.color))),
                name="Particles",
            )
        )

    for light in snapshot.lights:
        if light.kind.value != "point":
            continue
        x, y, z = light.position.as_tuple()
        fig.add_trace(
            go.Scatter3d(
                x=[x],
                y=[z],
                z=[y],
                mode="markers+text",
                text=[f"{light.name} ({light.intensity:.2f})"],
                marker=dict(size=7, color=rgb_to_hex(light.color), symbol="diamond"),
                name=f"Light: {light.name}",
            )
        )

    for name, transform in snapshot.props.items():
        x, y, z = transform.position
        fig.add_trace(
            go.Scatter3d(
                x=[x],
                y=[z],
                z=[y],
                mode="markers+text",
                text=[name],
                marker=dict(size=6, color=ACCENT_ORANGE, symbol="square"),
                name=f"Prop: {name}",
            )
        )

    fig.update_layout(
        template=PLOT_TEMPLATE,
        height=640,
        margin=dict(l=0, r=0, t=30, b=0),
        scene=dict(
            xaxis_title="x",
            yaxis_title="z",
            zaxis_title="y",
            aspectmode="data",
            bgcolor=_backdrop(snapshot),
            camera=dict(eye=_camera_eye(snapshot.camera_position.as_tuple())),
        ),
    )
    return fig


_init_logging()

with st.sidebar:
    st.header("Scene")
    preset_names = sorted(PRESETS)
    preset_name = st.selectbox("Preset", preset_names, index=preset_names.index("crystal_cave"))
    elapsed_s = st.slider("Elapsed time (s)", min_value=0.0, max_value=30.0, value=5.0, step=0.5)
    fps = st.slider("Frame rate (fps)", min_value=10, max_value=60, value=30, step=5)
    seed = int(st.number_input("Spawn seed", min_value=0, value=42, step=1))

    st.header("Timeline")
    timeline_s = st.slider("Timeline length (s)", min_value=2, max_value=60, value=20, step=2)

config = get_preset(preset_name)
preview = _preview_config(config)
snapshot, context = _snapshot_at(preview, float(elapsed_s), int(fps), seed)

st.title("Vistas Scene Preview")
st.caption(config.description)

tab_scene, tab_timeline, tab_config = st.tabs(["Scene", "Timeline", "Config"])

with tab_scene:
    kpi_cols = st.columns(4)
    kpi_cols[0].metric("Frame", f"{snapshot.time.frame}")
    kpi_cols[1].metric(
        "Particles", f"{0 if context.particles is None else context.particles.count}"
    )
    kpi_cols[2].metric(
        "Surface vertices",
        f"{0 if context.surface is None else context.surface.vertex_count}",
    )
    kpi_cols[3].metric("Boundary resets (last frame)", f"{snapshot.boundary_resets}")
    st.plotly_chart(_scene_figure(preview, snapshot, context), use_container_width=True)
    if config.surface is not None and preview.surface is not None:
        if preview.surface.segments_x < config.surface.segments_x:
            st.info(
                f"Surface preview decimated to {preview.surface.segments_x} segments "
                f"(scene uses {config.surface.segments_x})."
            )

with tab_timeline:
    timeline = _timeline(preset_name, float(timeline_s), int(fps), seed)
    chart_cols = st.columns(2)

    light_fig = go.Figure()
    palette = [ACCENT_BLUE, ACCENT_GREEN, ACCENT_ORANGE, ACCENT_PURPLE]
    for idx, rig in enumerate(config.lights):
        light_fig.add_trace(
            go.Scatter(
                x=timeline["elapsed_s"],
                y=timeline[f"light_{rig.name}_intensity"],
                mode="lines",
                name=rig.name,
                line=dict(color=palette[idx % len(palette)], width=2.0),
            )
        )
    light_fig.update_layout(
        template=PLOT_TEMPLATE,
        title="Light Intensity",
        xaxis_title="Elapsed (s)",
        yaxis_title="Intensity",
    )
    chart_cols[0].plotly_chart(light_fig, use_container_width=True)

    motion_fig = go.Figure()
    if config.particles is not None:
        motion_fig.add_trace(
            go.Scatter(
                x=timeline["elapsed_s"],
                y=timeline["particle_mean_y"],
                mode="lines",
                name="Particle mean y",
                line=dict(color=ACCENT_BLUE, width=2.0),
            )
        )
    if config.surface is not None:
        motion_fig.add_trace(
            go.Scatter(
                x=timeline["elapsed_s"],
                y=timeline["surface_max"],
                mode="lines",
                name="Surface max",
                line=dict(color=ACCENT_GREEN, width=2.0),
            )
        )
        motion_fig.add_trace(
            go.Scatter(
                x=timeline["elapsed_s"],
                y=timeline["surface_min"],
                mode="lines",
                name="Surface min",
                line=dict(color=ACCENT_ORANGE, width=2.0),
            )
        )
    motion_fig.update_layout(
        template=PLOT_TEMPLATE,
        title="Particles and Surface",
        xaxis_title="Elapsed (s)",
        yaxis_title="Height",
    )
    chart_cols[1].plotly_chart(motion_fig, use_container_width=True)

    if config.props:
        prop_fig = go.Figure()
        for idx, prop in enumerate(config.props):
            for axis in ("rx", "ry", "rz"):
                column = f"prop_{prop.name}_{axis}"
                if timeline[column].abs().max() == 0:
                    continue
                prop_fig.add_trace(
                    go.Scatter(
                        x=timeline["elapsed_s"],
                        y=timeline[column],
                        mode="lines",
                        name=f"{prop.name} {axis}",
                        line=dict(color=palette[idx % len(palette)], width=2.0),
                    )
                )
        prop_fig.update_layout(
            template=PLOT_TEMPLATE,
            title="Prop Rotation",
            xaxis_title="Elapsed (s)",
            yaxis_title="Radians",
        )
        st.plotly_chart(prop_fig, use_container_width=True)

    st.download_button(
        "Download timeline CSV",
        data=timeline.to_csv(index=False).encode("utf-8"),
        file_name=f"{preset_name}_timeline.csv",
        mime="text/csv",
    )

with tab_config:
    st.json(json.loads(json.dumps(config.to_dict())))
