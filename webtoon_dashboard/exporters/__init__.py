"""Exporters for generated images."""

from .zip_bundle import encode_png, save_images, write_zip, zip_path_for

__all__ = ["encode_png", "save_images", "write_zip", "zip_path_for"]
