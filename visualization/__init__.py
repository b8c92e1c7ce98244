"""
Image export of lattice fields.
"""

from .image_writer import ImageWriter, create_file_name
