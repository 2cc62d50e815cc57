"""Services: data access, storage, caching, OCR and translation."""
