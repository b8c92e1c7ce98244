"""
Tests for GIF frame export.
"""

import pytest
import numpy as np
from PIL import Image
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from visualization.image_writer import (
    ImageWriter,
    create_file_name,
    scale_to_unit_range,
    get_colormap,
)


class TestFileNames:

    def test_zero_padding(self):
        assert create_file_name("u", 40, 6) == "u000040"
        assert create_file_name("u", 0, 6) == "u000000"
        assert create_file_name("rho", 123456, 6) == "rho123456"

    def test_names_sort_in_step_order(self):
        names = [create_file_name("u", n, 6) for n in (1000, 40, 0, 960)]
        assert sorted(names) == ["u000000", "u000040", "u000960", "u001000"]


class TestScaling:

    def test_unit_range(self):
        scaled = scale_to_unit_range(np.array([[2.0, 4.0], [3.0, 6.0]]))

        assert scaled.min() == 0.0
        assert scaled.max() == 1.0
        assert np.isclose(scaled[1, 0], 0.25)

    def test_constant_field(self):
        np.testing.assert_array_equal(scale_to_unit_range(np.full((3, 3), 0.7)), 0.0)


class TestColormaps:

    @pytest.mark.parametrize("name", ["leeloo", "earth", "water", "air", "fire", "viridis"])
    def test_known_names(self, name):
        rgba = get_colormap(name)(0.5)
        assert len(rgba) == 4

    def test_unknown_name(self):
        with pytest.raises(KeyError):
            get_colormap("no-such-map")


class TestImageWriter:

    @pytest.fixture
    def field(self):
        # Velocity grows with y
        return np.tile(np.linspace(0.0, 0.01, 10)[:, None], (1, 16))

    def test_writes_gif(self, tmp_path, field):
        writer = ImageWriter('leeloo', str(tmp_path))
        path = writer.write_scaled_gif("u000040", field)

        assert path == os.path.join(str(tmp_path), "u000040.gif")
        with Image.open(path) as image:
            assert image.format == "GIF"
            assert image.size == (16, 10)

    def test_resized(self, tmp_path, field):
        path = ImageWriter('leeloo', str(tmp_path)).write_scaled_gif("u", field, 64, 40)

        with Image.open(path) as image:
            assert image.size == (64, 40)

    def test_y_axis_points_up(self, field):
        rgb = ImageWriter('fire').to_rgb(field)
        cmap = get_colormap('fire')

        top = np.array(cmap(1.0, bytes=True)[:3])
        bottom = np.array(cmap(0.0, bytes=True)[:3])
        np.testing.assert_array_equal(rgb[0, 0], top)
        np.testing.assert_array_equal(rgb[-1, 0], bottom)

    def test_missing_directory_raises(self, tmp_path, field):
        writer = ImageWriter('leeloo', str(tmp_path / "missing"))

        with pytest.raises(OSError):
            writer.write_scaled_gif("u000000", field)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
