"""Rendering surfaces for images and PDFs."""

from textvertical.render.base import Surface
from textvertical.render.image import ImageSurface, save_image_to_bytes
from textvertical.render.pdf import PDFSurface

__all__ = [
    "ImageSurface",
    "PDFSurface",
    "Surface",
    "save_image_to_bytes",
]
