"""
Image Writer

Colour-mapped GIF frames of scalar lattice fields.

Each frame is rescaled to the range of its own values, so successive
frames of a run share a colour map but not a colour scale.
"""

import os

import numpy as np
import matplotlib
from matplotlib.colors import LinearSegmentedColormap
from PIL import Image


def create_leeloo_colormap():
    """Blue-cyan-yellow-red map for velocity norms."""
    colors = [
        (0.0, 0.0, 0.5),   # Dark blue (minimum)
        (0.0, 0.3, 1.0),
        (0.0, 0.9, 1.0),   # Cyan
        (0.6, 1.0, 0.4),
        (1.0, 0.9, 0.0),   # Yellow
        (1.0, 0.3, 0.0),
        (0.5, 0.0, 0.0),   # Dark red (maximum)
    ]
    return LinearSegmentedColormap.from_list('leeloo', colors, N=256)


# Tutorial colour map names mapped to matplotlib ones
COLORMAP_ALIASES = {
    'earth': 'gist_earth',
    'water': 'ocean',
    'air': 'Blues_r',
    'fire': 'hot',
}


def get_colormap(name):
    """Resolve a tutorial or matplotlib colour map name."""
    if name == 'leeloo':
        return create_leeloo_colormap()
    return matplotlib.colormaps[COLORMAP_ALIASES.get(name, name)]


def create_file_name(prefix, number, width):
    """
    Frame name from a prefix and a zero-padded number.

    >>> create_file_name("u", 40, 6)
    'u000040'
    """
    return f"{prefix}{int(number):0{width}d}"


def scale_to_unit_range(field):
    """Map a field linearly onto [0, 1]; a constant field maps to 0."""
    field = np.asarray(field, dtype=np.float64)
    lo = np.nanmin(field)
    hi = np.nanmax(field)
    if hi > lo:
        return (field - lo) / (hi - lo)
    return np.zeros_like(field)


class ImageWriter:
    """
    Write scalar fields as colour-mapped GIF images.

    Parameters
    ----------
    colormap : str
        'leeloo', 'earth', 'water', 'air', 'fire' or any matplotlib name
    output_dir : str
        Directory receiving the frames. It is not created here; writing
        into a missing directory raises.
    """

    def __init__(self, colormap='leeloo', output_dir='./tmp/'):
        self.colormap = colormap
        self.cmap = get_colormap(colormap)
        self.output_dir = output_dir

    def to_rgb(self, field):
        """
        Colour-mapped image of a field.

        Parameters
        ----------
        field : ndarray
            Shape (ny, nx), row 0 is y = 0

        Returns
        -------
        rgb : ndarray
            uint8, shape (ny, nx, 3), row 0 is the top of the image
        """
        rgba = self.cmap(scale_to_unit_range(field), bytes=True)
        return np.ascontiguousarray(rgba[::-1, :, :3])

    def write_scaled_gif(self, name, field, width=None, height=None):
        """
        Write ``<output_dir>/<name>.gif``.

        Parameters
        ----------
        name : str
            File name without extension
        field : ndarray
            Scalar field, shape (ny, nx)
        width, height : int, optional
            Image size in pixels; defaults to one pixel per cell

        Returns
        -------
        path : str
            Path of the written image
        """
        image = Image.fromarray(self.to_rgb(field))

        if width is not None or height is not None:
            size = (width or image.width, height or image.height)
            image = image.resize(size, resample=Image.Resampling.NEAREST)

        path = os.path.join(self.output_dir, f"{name}.gif")
        image.save(path, format='GIF')
        return path
