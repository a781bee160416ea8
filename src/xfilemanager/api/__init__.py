# XFile Manager JSON API layer.
# Created: 2026-10-12
#
# Versioned REST endpoints mounted at /api/v1/ next to the HTML pages.
