"""Unit tests for MatplotlibCanvas and color helpers."""

import math

import pytest
from matplotlib.lines import Line2D
from matplotlib.patches import Polygon

from constellation.config import ConstellationConfig
from constellation.core.edge import Edge
from constellation.core.node import Node
from constellation.viz.canvas import MatplotlibCanvas
from constellation.viz.colors import clip_alpha, parse_color, with_alpha


@pytest.fixture
def canvas():
    return MatplotlibCanvas(320, 240)


class TestColors:
    """Tests for color parsing."""

    def test_css_rgb_string(self):
        assert parse_color("rgb(255, 0, 51)") == pytest.approx((1.0, 0.0, 0.2, 1.0))

    def test_css_rgba_string(self):
        assert parse_color("rgba(0, 255, 0, 0.5)") == pytest.approx((0.0, 1.0, 0.0, 0.5))

    def test_matplotlib_specs(self):
        assert parse_color("#56e27d") == pytest.approx((86 / 255, 226 / 255, 125 / 255, 1.0))
        assert parse_color("white") == pytest.approx((1.0, 1.0, 1.0, 1.0))
        assert parse_color((0.0, 0.5, 1.0)) == pytest.approx((0.0, 0.5, 1.0, 1.0))

    def test_out_of_range_alpha_is_kept(self):
        assert parse_color((0.1, 0.2, 0.3, -0.5))[3] == -0.5
        assert with_alpha("rgb(86, 226, 125)", 1.7)[3] == 1.7

    def test_with_alpha_replaces_alpha(self):
        assert with_alpha("rgba(10, 20, 30, 0.9)", 0.25)[3] == 0.25

    def test_clip_alpha(self):
        assert clip_alpha((0.1, 0.2, 0.3, -2.0)) == (0.1, 0.2, 0.3, 0.0)
        assert clip_alpha((0.1, 0.2, 0.3, 3.0)) == (0.1, 0.2, 0.3, 1.0)
        assert clip_alpha((0.1, 0.2, 0.3, 0.4)) == (0.1, 0.2, 0.3, 0.4)


class TestMatplotlibCanvas:
    """Tests for MatplotlibCanvas."""

    def test_figure_matches_surface(self, canvas):
        assert canvas.figure.get_size_inches() * canvas.figure.dpi == pytest.approx((320, 240))
        assert canvas.ax.get_xlim() == (0, 320)
        # y axis points down
        assert canvas.ax.get_ylim() == (240, 0)

    def test_resize(self, canvas):
        canvas.resize(800, 600)
        assert (canvas.width, canvas.height) == (800, 600)
        assert canvas.ax.get_xlim() == (0, 800)
        assert canvas.ax.get_ylim() == (600, 0)

    def test_shrink_wipes_shapes_outside_new_size(self):
        canvas = MatplotlibCanvas(400, 300)
        canvas.begin_path()
        canvas.arc(350, 250, 2, 0, 2 * math.pi)
        canvas.fill_style = "green"
        canvas.fill()
        assert canvas.n_artists == 1

        canvas.resize(200, 150)
        canvas.clear_rect(0, 0, 200, 150)
        assert canvas.n_artists == 0
        assert len(canvas.ax.patches) == 0

    def test_resize_wipes_surface(self, canvas):
        canvas.begin_path()
        canvas.move_to(10, 10)
        canvas.line_to(100, 100)
        canvas.stroke()
        canvas.resize(640, 480)
        assert canvas.n_artists == 0
        assert len(canvas.ax.lines) == 0

    def test_empty_surface_limits(self):
        canvas = MatplotlibCanvas(0, 0)
        assert (canvas.width, canvas.height) == (0, 0)
        assert canvas.ax.get_xlim() == (0, 1)

    def test_fill_full_circle(self, canvas):
        canvas.begin_path()
        canvas.arc(100, 50, 10, 0, 2 * math.pi)
        canvas.close_path()
        canvas.fill_style = "red"
        canvas.fill()

        assert canvas.n_artists == 1
        patch = canvas.artists[0]
        assert isinstance(patch, Polygon)
        xy = patch.get_xy()
        distances = [math.hypot(x - 100, y - 50) for x, y in xy]
        assert distances == pytest.approx([10.0] * len(distances))
        assert patch.get_facecolor() == pytest.approx((1.0, 0.0, 0.0, 1.0))

    def test_arc_segments(self):
        canvas = MatplotlibCanvas(100, 100, arc_segments=16)
        canvas.begin_path()
        canvas.arc(50, 50, 5, 0, math.pi)
        canvas.fill()
        # Half circle: 8 segments, 9 points
        assert len(canvas.artists[0].get_xy()) >= 9

    def test_stroke_line(self, canvas):
        canvas.begin_path()
        canvas.move_to(10, 20)
        canvas.line_to(110, 220)
        canvas.stroke_style = (0.0, 0.0, 1.0, 0.5)
        canvas.line_width = 2.0
        canvas.stroke()

        line = canvas.artists[0]
        assert isinstance(line, Line2D)
        assert list(line.get_xdata()) == [10.0, 110.0]
        assert list(line.get_ydata()) == [20.0, 220.0]
        assert line.get_color() == pytest.approx((0.0, 0.0, 1.0, 0.5))
        assert line.get_linewidth() == pytest.approx(2.0 * 72.0 / canvas.figure.dpi)

    def test_stroke_clips_alpha(self, canvas):
        canvas.begin_path()
        canvas.move_to(0, 0)
        canvas.line_to(10, 10)
        canvas.stroke_style = (0.0, 1.0, 0.0, -0.3)
        canvas.stroke()
        assert canvas.artists[0].get_color()[3] == 0.0

    def test_single_point_is_not_drawn(self, canvas):
        canvas.begin_path()
        canvas.move_to(5, 5)
        canvas.stroke()
        canvas.fill()
        assert canvas.n_artists == 0

    def test_transparent_fill_rect_adds_nothing(self, canvas):
        canvas.fill_style = (0.0, 0.0, 0.0, 0.0)
        canvas.fill_rect(0, 0, 320, 240)
        assert canvas.n_artists == 0

    def test_fill_rect(self, canvas):
        canvas.fill_style = "blue"
        canvas.fill_rect(10, 10, 20, 20)
        assert canvas.n_artists == 1

    def test_clear_full_surface(self, canvas):
        canvas.fill_style = "blue"
        canvas.fill_rect(10, 10, 20, 20)
        canvas.begin_path()
        canvas.arc(0, 0, 2, 0, 2 * math.pi)  # Partly off-surface
        canvas.fill()
        canvas.begin_path()
        canvas.move_to(5, 5)
        canvas.line_to(300, 200)
        canvas.stroke()
        assert canvas.n_artists == 3

        canvas.clear_rect(0, 0, 320, 240)
        assert canvas.n_artists == 0
        assert len(canvas.ax.patches) == 0
        assert len(canvas.ax.lines) == 0

    def test_clear_partial_rect(self, canvas):
        canvas.fill_style = "blue"
        canvas.fill_rect(10, 10, 20, 20)
        canvas.fill_rect(200, 200, 20, 20)
        canvas.clear_rect(0, 0, 100, 100)
        assert canvas.n_artists == 1

    def test_from_figure(self):
        from matplotlib.figure import Figure

        figure = Figure(figsize=(2, 1), dpi=100)
        canvas = MatplotlibCanvas.from_figure(figure)
        assert (canvas.width, canvas.height) == (200, 100)
        assert canvas.figure is figure


class TestSceneRendering:
    """Nodes and edges drawn on a matplotlib canvas."""

    def test_node_and_edge_artists(self, canvas):
        cfg = ConstellationConfig()
        a = Node(cfg, canvas.width, canvas.height)
        b = Node(cfg, canvas.width, canvas.height)
        a.x, a.y, a.age = 0.25, 0.25, 1.0
        b.x, b.y, b.age = 0.5, 0.5, 1.0

        a.draw(canvas)
        b.draw(canvas)
        Edge(a, b, 0.8 * 240, cfg).draw(canvas)

        patches = [x for x in canvas.artists if isinstance(x, Polygon)]
        lines = [x for x in canvas.artists if isinstance(x, Line2D)]
        assert len(patches) == 2
        assert len(lines) == 1
        assert 0.0 < lines[0].get_color()[3] < 1.0

    def test_render_to_png(self, canvas, tmp_path):
        cfg = ConstellationConfig()
        node = Node(cfg, canvas.width, canvas.height)
        node.x, node.y = 0.5, 0.5
        node.draw(canvas)
        path = tmp_path / "frame.png"
        canvas.figure.savefig(path, dpi=canvas.figure.dpi)
        assert path.exists()
        assert path.stat().st_size > 0
