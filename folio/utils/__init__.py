"""Shared utilities for the folio backend."""

from folio.utils.images import UploadedImage, get_image_from_request

__all__ = ['UploadedImage', 'get_image_from_request']
