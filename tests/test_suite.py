"""
Test Suite for NeuroPlots.

Run with: pytest tests/ -v
"""

import logging
import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'


def png_size(data: bytes):
    """Width and height from a PNG IHDR chunk."""
    return int.from_bytes(data[16:20], "big"), int.from_bytes(data[20:24], "big")


@pytest.fixture(autouse=True)
def close_figures():
    yield
    import matplotlib.pyplot as plt
    plt.close('all')


class TestElectrodes:
    """Tests for the standard electrode table."""

    def test_table_size(self):
        from neuroplots.core.electrodes import STANDARD_1005_2D

        assert len(STANDARD_1005_2D) == 348

    def test_known_positions(self):
        from neuroplots.core.electrodes import get_position

        assert get_position("Cz") == (0.0, 0.0)
        assert get_position("Fpz") == (0.0, 0.7266)
        assert get_position("Fp1") == (-0.2245, 0.691)
        assert get_position("T8") == (0.7266, 0.0)
        assert get_position("Nz") == (0.0, 1.0)

    def test_table_is_read_only(self):
        from neuroplots.core.electrodes import STANDARD_1005_2D

        with pytest.raises(TypeError):
            STANDARD_1005_2D["Cz"] = (1.0, 1.0)

    def test_positions_within_reference_circle(self):
        from neuroplots.core.electrodes import STANDARD_1005_2D

        for name, (x, y) in STANDARD_1005_2D.items():
            assert np.hypot(x, y) <= 1.0 + 1e-3, name

    def test_unknown_label(self):
        from neuroplots.core.electrodes import get_position
        from neuroplots.core.exceptions import UnknownElectrodeError

        with pytest.raises(UnknownElectrodeError) as excinfo:
            get_position("ZZ9")
        assert excinfo.value.label == "ZZ9"
        assert "ZZ9" in str(excinfo.value)

    def test_resolve_positions(self):
        from neuroplots.core.electrodes import resolve_positions

        positions = resolve_positions(["Fpz", "Fp1", "Fp2"])
        assert positions.shape == (3, 2)
        np.testing.assert_allclose(positions[1], [-0.2245, 0.691])

    def test_resolve_reports_first_missing_label(self):
        from neuroplots.core.electrodes import resolve_positions
        from neuroplots.core.exceptions import UnknownElectrodeError

        with pytest.raises(UnknownElectrodeError) as excinfo:
            resolve_positions(["Cz", "XX1", "YY2"])
        assert excinfo.value.label == "XX1"

    def test_resolve_uses_standard_map(self):
        from neuroplots.core.electrodes import (STANDARD_ELECTRODES,
                                                resolve_positions)

        labels = ["Oz", "Cz", "Fpz"]
        np.testing.assert_array_equal(resolve_positions(labels),
                                      STANDARD_ELECTRODES.get_positions_2d(labels))
        assert len(STANDARD_ELECTRODES) == 348
        assert resolve_positions(iter(labels)).shape == (3, 2)

    def test_example_channels_are_standard(self):
        from neuroplots.core.electrodes import EXAMPLE_CHANNELS, STANDARD_1005_2D

        assert len(EXAMPLE_CHANNELS) == 59
        assert all(name in STANDARD_1005_2D for name in EXAMPLE_CHANNELS)


class TestElectrodeMap:
    """Tests for the electrode map view."""

    def test_full_map(self):
        from neuroplots.core.electrodes import ElectrodeMap

        electrode_map = ElectrodeMap()
        assert len(electrode_map) == 348
        assert "Oz" in electrode_map

    def test_subset(self):
        from neuroplots.core.electrodes import ElectrodeMap

        electrode_map = ElectrodeMap(["C3", "Cz", "C4"])
        assert electrode_map.get_channel_names() == ["C3", "Cz", "C4"]
        assert "Pz" not in electrode_map
        assert electrode_map.get_by_name("Pz") is None

        electrode = electrode_map.get_by_name("C4")
        assert electrode.name == "C4"
        assert electrode.x == 0.3249

    def test_positions_2d(self):
        from neuroplots.core.electrodes import ElectrodeMap

        electrode_map = ElectrodeMap(["C3", "Cz", "C4"])
        positions = electrode_map.get_positions_2d()
        assert positions.shape == (3, 2)
        np.testing.assert_allclose(positions[:, 1], 0.0)

    def test_subset_with_unknown_channel(self):
        from neuroplots.core.electrodes import ElectrodeMap
        from neuroplots.core.exceptions import UnknownElectrodeError

        with pytest.raises(UnknownElectrodeError):
            ElectrodeMap(["Cz", "Foo"])

        electrode_map = ElectrodeMap(["Cz"])
        with pytest.raises(UnknownElectrodeError):
            electrode_map.get_position("Pz")


class TestExceptions:
    """Tests for input errors."""

    def test_length_mismatch_message(self):
        from neuroplots.core.exceptions import ChannelLengthMismatchError

        error = ChannelLengthMismatchError(3, 2)
        assert error.n_channels == 3
        assert error.n_values == 2
        assert "(3)" in str(error) and "(2)" in str(error)

    def test_errors_are_value_errors(self):
        from neuroplots.core.exceptions import (ChannelLengthMismatchError,
                                                TopographyError,
                                                UnknownElectrodeError)

        assert issubclass(ChannelLengthMismatchError, TopographyError)
        assert issubclass(UnknownElectrodeError, TopographyError)
        assert issubclass(TopographyError, ValueError)


class TestBoundaryExtrapolation:
    """Tests for boundary point extrapolation."""

    def test_output_shape_and_originals(self):
        from neuroplots.visualization.interpolation import append_nearest_values

        xs, ys, vals = [0.0, 0.5, -0.5], [0.5, 0.0, 0.0], [1.0, 2.0, 3.0]
        points = append_nearest_values(xs, ys, vals)

        assert points.shape == (11, 3)
        np.testing.assert_array_equal(points[:3, 0], xs)
        np.testing.assert_array_equal(points[:3, 1], ys)
        np.testing.assert_array_equal(points[:3, 2], vals)

    def test_points_on_circle(self):
        from neuroplots.visualization.interpolation import append_nearest_values

        rng = np.random.default_rng(0)
        xs, ys = rng.uniform(-0.7, 0.7, (2, 10))
        points = append_nearest_values(xs, ys, rng.random(10), n=8, radius=1.2)
        extra = points[10:]

        np.testing.assert_allclose(np.hypot(extra[:, 0], extra[:, 1]), 1.2)

        angles = np.unwrap(np.arctan2(extra[:, 1], extra[:, 0]))
        np.testing.assert_allclose(np.diff(angles), 2 * np.pi / 8)

    def test_nearest_mean_hand_constructed(self):
        from neuroplots.visualization.interpolation import append_nearest_values

        # Boundary points at (0, 2), (-2, 0), (0, -2), (2, 0); each one's two
        # nearest electrodes are the one on its axis and the centre.
        xs = [0.0, 1.0, -1.0, 0.0, 0.0]
        ys = [0.0, 0.0, 0.0, 1.0, -1.0]
        vals = [10.0, 1.0, 2.0, 3.0, 4.0]

        points = append_nearest_values(xs, ys, vals, n=4, radius=2.0, k=2)
        extra = points[5:]

        np.testing.assert_allclose(extra[:, :2], [[0, 2], [-2, 0], [0, -2], [2, 0]], atol=1e-12)
        np.testing.assert_allclose(extra[:, 2], [6.5, 6.0, 7.0, 5.5])

    def test_nearest_mean_default_parameters(self):
        from neuroplots.visualization.interpolation import append_nearest_values

        rng = np.random.default_rng(42)
        xs, ys = rng.uniform(-0.8, 0.8, (2, 20))
        vals = rng.normal(size=20)
        points = append_nearest_values(xs, ys, vals)

        for x, y, value in points[20:]:
            distances = np.hypot(x - xs, y - ys)
            expected = vals[np.argsort(distances)[:4]].mean()
            assert value == pytest.approx(expected)

    def test_fewer_points_than_k(self):
        from neuroplots.visualization.interpolation import append_nearest_values

        points = append_nearest_values([0.1, -0.1], [0.0, 0.0], [1.0, 3.0], k=4)
        np.testing.assert_allclose(points[2:, 2], 2.0)

    def test_ties_keep_input_order(self):
        from neuroplots.visualization.interpolation import append_nearest_values

        points = append_nearest_values([0, 0, 0], [0, 0, 0], [1.0, 2.0, 9.0], k=2)
        np.testing.assert_allclose(points[3:, 2], 1.5)

    def test_invalid_input(self):
        from neuroplots.visualization.interpolation import append_nearest_values

        with pytest.raises(ValueError):
            append_nearest_values([], [], [])
        with pytest.raises(ValueError):
            append_nearest_values([0.0, 1.0], [0.0], [1.0, 2.0])
        with pytest.raises(ValueError):
            append_nearest_values([0.0], [0.0], [1.0], k=0)
        with pytest.raises(ValueError):
            append_nearest_values([0.0], [0.0], [1.0], radius=0.0)


class TestFieldInterpolation:
    """Tests for grid interpolation and head masking."""

    def test_make_grid(self):
        from neuroplots.visualization.interpolation import make_grid

        x, y, grid_x, grid_y = make_grid(5)
        np.testing.assert_allclose(x, [-1, -0.5, 0, 0.5, 1])
        assert grid_x.shape == grid_y.shape == (5, 5)

        with pytest.raises(ValueError):
            make_grid(1)

    def test_mask_outside_head(self):
        from neuroplots.visualization.interpolation import (make_grid,
                                                            mask_outside_head)

        _, _, grid_x, grid_y = make_grid(41)
        z = np.ones_like(grid_x)
        masked = mask_outside_head(grid_x, grid_y, z)

        outside = np.hypot(grid_x, grid_y) > 1
        assert np.all(np.isnan(masked[outside]))
        assert np.all(masked[~outside] == 1)
        assert not np.any(np.isnan(z))  # Input left untouched

    def test_masking_law_linear(self):
        from neuroplots.core.electrodes import resolve_positions
        from neuroplots.visualization.interpolation import (
            append_nearest_values, interpolate_field)

        positions = resolve_positions(["Fpz", "Fp1", "Fp2"])
        points = append_nearest_values(positions[:, 0], positions[:, 1], [0.1, 0.5, 0.9])
        field = interpolate_field(points, 50)

        assert field.shape == (50, 50)
        inside = np.hypot(field.grid_x, field.grid_y) <= 1
        assert np.all(np.isnan(field.z[~inside]))
        assert np.all(np.isfinite(field.z[inside]))

        # Linear interpolation stays within the electrode values
        assert np.nanmin(field.z) >= 0.1 - 1e-9
        assert np.nanmax(field.z) <= 0.9 + 1e-9

    def test_field_passes_through_electrode(self):
        from neuroplots.core.electrodes import resolve_positions
        from neuroplots.visualization.interpolation import (
            append_nearest_values, interpolate_field)

        positions = resolve_positions(["Cz", "C3", "C4", "Fz", "Pz"])
        vals = [5.0, 1.0, 2.0, 3.0, 4.0]
        points = append_nearest_values(positions[:, 0], positions[:, 1], vals)
        field = interpolate_field(points, 51)

        # Cz sits at the grid centre
        assert field.z[25, 25] == pytest.approx(5.0, abs=1e-6)

    @pytest.mark.parametrize("method", ["linear", "cubic", "rbf"])
    def test_interpolators_reproduce_values(self, method):
        from neuroplots.visualization.interpolation import (
            append_nearest_values, get_interpolator)

        rng = np.random.default_rng(1)
        xs, ys = rng.uniform(-0.7, 0.7, (2, 12))
        points = append_nearest_values(xs, ys, rng.random(12))

        interpolator = get_interpolator(method)
        z = interpolator(points[:, :2], points[:, 2], xs.reshape(3, 4), ys.reshape(3, 4))

        assert z.shape == (3, 4)
        np.testing.assert_allclose(z.ravel(), points[:12, 2], atol=1e-6)

    def test_unknown_interpolator(self):
        from neuroplots.visualization.interpolation import get_interpolator

        with pytest.raises(ValueError, match="Unknown interpolation method"):
            get_interpolator("kriging")

    def test_custom_interpolator(self):
        from neuroplots.visualization.interpolation import (FieldInterpolator,
                                                            interpolate_field)

        class Constant(FieldInterpolator):
            def __call__(self, points, values, grid_x, grid_y):
                return np.full(grid_x.shape, 7.0)

        points = np.array([[0.0, 0.0, 1.0], [0.5, 0.0, 2.0], [0.0, 0.5, 3.0]])
        field = interpolate_field(points, 21, interpolator=Constant())

        inside = np.hypot(field.grid_x, field.grid_y) <= 1
        assert np.all(field.z[inside] == 7.0)
        assert np.all(np.isnan(field.z[~inside]))


class TestHeadGeometry:
    """Tests for nose and ear curves."""

    def test_nose_points(self):
        from neuroplots.visualization.head import nose_points

        left = nose_points(10, 0.9)
        assert left.shape == (2, 2)
        np.testing.assert_allclose(left[0], 0.9 * np.array([np.cos(np.deg2rad(100)),
                                                             np.sin(np.deg2rad(100))]))
        np.testing.assert_allclose(left[1], [0.0, 0.85])

        right = nose_points(-10, 0.9)
        assert right[0, 0] == pytest.approx(-left[0, 0])
        assert right[0, 1] == pytest.approx(left[0, 1])

    def test_ear_points_outside_head(self):
        from neuroplots.visualization.head import ear_points

        for focus in (-0.75, 0.75):
            points = ear_points(focus, 0.8)
            assert points.shape == (100, 2)

            valid = ~np.isnan(points[:, 0])
            assert valid.any() and (~valid).any()
            assert np.all(np.hypot(points[valid, 0], points[valid, 1]) >= 0.8)
            assert np.all(np.sign(points[valid, 0]) == np.sign(focus))

    def test_ear_points_filtered_from_raw_ellipse(self):
        from neuroplots.visualization.head import ear_points

        t = np.linspace(0, 2 * np.pi, 50)
        raw = np.column_stack([0.75 + 0.09 * np.cos(t), 0.18 * np.sin(t)])
        inside = np.hypot(raw[:, 0], raw[:, 1]) < 0.8

        points = ear_points(0.75, 0.8, n_points=50)
        assert np.all(np.isnan(points[inside]))
        np.testing.assert_allclose(points[~inside], raw[~inside])

    def test_ear_fully_outside_small_head(self):
        from neuroplots.visualization.head import ear_points

        points = ear_points(0.75, 0.2)
        assert not np.any(np.isnan(points))
        np.testing.assert_allclose(points[0], points[-1], atol=1e-12)


class TestConfig:
    """Tests for plot settings."""

    def test_defaults(self):
        from neuroplots.core.config import DEFAULT_GRID_SIZE, TopoPlotSettings

        settings = TopoPlotSettings()
        assert DEFAULT_GRID_SIZE == 1000
        assert settings.output_path == "figure.png"
        assert settings.n_extra_points == 8
        assert settings.extra_radius == 1.2
        assert settings.k_nearest == 4
        assert settings.figsize == (13.0, 12.0)

    def test_figsize_follows_dpi(self):
        from neuroplots.core.config import TopoPlotSettings

        settings = TopoPlotSettings(figure_size_px=(400, 300), dpi=50)
        assert settings.figsize == (8.0, 6.0)


class TestLogging:
    """Tests for logging setup."""

    def test_setup_logging_is_idempotent(self, tmp_path):
        from neuroplots.core.logging_utils import setup_logging

        log_file = tmp_path / "logs" / "neuroplots.log"
        logger = setup_logging(logging.DEBUG, log_file=log_file)
        try:
            setup_logging(logging.DEBUG, log_file=log_file)
            assert len(logger.handlers) == 2
            assert logger.level == logging.DEBUG

            logger.info("hello topography")
            assert "hello topography" in log_file.read_text()
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()
            logger.setLevel(logging.NOTSET)


class TestTopoMap:
    """Tests for topography rendering."""

    CHANNELS = ["Fpz", "Fp1", "Fp2"]
    VALUES = [0.1, 0.5, 0.9]

    def test_end_to_end(self, tmp_path):
        from matplotlib.figure import Figure
        from neuroplots import plot_topography

        output = tmp_path / "figure.png"
        fig = plot_topography(self.CHANNELS, self.VALUES, grid_size=50, output_path=output)

        assert isinstance(fig, Figure)
        data = output.read_bytes()
        assert data[:8] == PNG_SIGNATURE
        assert png_size(data) == (1300, 1200)

    def test_default_output_path(self, tmp_path, monkeypatch):
        from neuroplots import plot_topography

        monkeypatch.chdir(tmp_path)
        plot_topography(self.CHANNELS, self.VALUES, grid_size=50)

        assert (tmp_path / "figure.png").stat().st_size > 0

    def test_unknown_label_writes_nothing(self, tmp_path):
        from neuroplots import UnknownElectrodeError, plot_topography

        output = tmp_path / "figure.png"
        with pytest.raises(UnknownElectrodeError) as excinfo:
            plot_topography(self.CHANNELS + ["XX1"], self.VALUES + [0.3],
                            grid_size=50, output_path=output)

        assert excinfo.value.label == "XX1"
        assert not output.exists()

    def test_length_mismatch_writes_nothing(self, tmp_path):
        from neuroplots import ChannelLengthMismatchError, plot_topography

        output = tmp_path / "figure.png"
        with pytest.raises(ChannelLengthMismatchError) as excinfo:
            plot_topography(self.CHANNELS, self.VALUES[:2], grid_size=50, output_path=output)

        assert (excinfo.value.n_channels, excinfo.value.n_values) == (3, 2)
        assert not output.exists()

    def test_empty_input(self, tmp_path):
        from neuroplots import TopographyError, plot_topography

        with pytest.raises(TopographyError):
            plot_topography([], [], output_path=tmp_path / "figure.png")

    def test_non_finite_value_writes_nothing(self, tmp_path):
        from neuroplots import TopographyError, plot_topography

        output = tmp_path / "figure.png"
        for bad in (float("nan"), float("inf")):
            with pytest.raises(TopographyError, match="'C3'"):
                plot_topography(["Cz", "C3", "C4"], [1.0, bad, 3.0],
                                grid_size=20, output_path=output)
        assert not output.exists()

    def test_one_sided_montage_head_radius(self):
        from matplotlib.patches import Circle
        from neuroplots.visualization.topomap import TopoMap

        topomap = TopoMap()
        topo = topomap.compute(["Fp1", "F3", "C3"], [0.1, 0.5, 0.9], grid_size=20)
        assert topo.head_radius == pytest.approx(0.3249)

        ax = topomap.create_figure(topo).axes[0]
        head = next(p for p in ax.patches if isinstance(p, Circle))
        assert head.get_radius() == pytest.approx(0.3249)

    def test_figures_not_kept_by_pyplot(self, tmp_path):
        import matplotlib.pyplot as plt
        from neuroplots import plot_topography

        before = len(plt.get_fignums())
        for i in range(3):
            plot_topography(self.CHANNELS, self.VALUES, grid_size=20,
                            output_path=tmp_path / f"figure{i}.png")
        assert len(plt.get_fignums()) == before

    def test_compute(self):
        from neuroplots.visualization.topomap import TopoMap

        topo = TopoMap().compute(self.CHANNELS, self.VALUES, grid_size=30)

        assert topo.head_radius == pytest.approx(0.2245)
        assert topo.positions.shape == (3, 2)
        assert topo.points.shape == (11, 3)
        assert topo.field.shape == (30, 30)

    def test_settings_are_applied(self, tmp_path):
        from neuroplots import TopoPlotSettings
        from neuroplots.visualization.topomap import TopoMap

        settings = TopoPlotSettings(
            output_path=str(tmp_path / "small.png"),
            figure_size_px=(400, 300),
            dpi=50,
            n_extra_points=12,
            colorbar_ticks=[0.2, 0.4, 0.6, 0.8],
        )
        topomap = TopoMap(settings=settings)
        fig = topomap.plot(self.CHANNELS, self.VALUES, grid_size=20)

        assert tuple(fig.get_size_inches() * fig.dpi) == (400, 300)
        assert png_size((tmp_path / "small.png").read_bytes()) == (400, 300)
        assert topomap.compute(self.CHANNELS, self.VALUES, grid_size=20).points.shape == (15, 3)

    def test_figure_contents(self):
        from matplotlib.patches import Circle
        from neuroplots.visualization.topomap import TopoMap

        topomap = TopoMap()
        fig = topomap.create_figure(topomap.compute(self.CHANNELS, self.VALUES, grid_size=30))
        ax = fig.axes[0]

        assert len(fig.axes) == 2  # Map and colorbar
        assert [t.get_text() for t in ax.texts] == self.CHANNELS
        assert len(ax.lines) == 4  # Two nose sides, two ears
        heads = [p for p in ax.patches if isinstance(p, Circle)]
        assert len(heads) == 1
        assert heads[0].get_radius() == pytest.approx(0.2245)

    def test_to_image_bytes(self, tmp_path, monkeypatch):
        from neuroplots.visualization.topomap import TopoMap

        monkeypatch.chdir(tmp_path)
        data = TopoMap().to_image_bytes(self.CHANNELS, self.VALUES, grid_size=30)

        assert data[:8] == PNG_SIGNATURE
        assert list(tmp_path.iterdir()) == []

    def test_constant_values(self, tmp_path):
        from neuroplots import plot_topography

        output = tmp_path / "flat.png"
        plot_topography(["C3", "Cz", "C4"], [1.0, 1.0, 1.0], grid_size=20, output_path=output)
        assert output.stat().st_size > 0

    def test_render_is_logged(self, tmp_path, caplog):
        from neuroplots import plot_topography

        caplog.set_level(logging.INFO, logger="neuroplots")
        output = tmp_path / "figure.png"
        plot_topography(self.CHANNELS, self.VALUES, grid_size=20, output_path=output)

        assert "Rendering topography: 3 channels" in caplog.text
        assert f"Saved topography to {output}" in caplog.text


# Run with pytest
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
