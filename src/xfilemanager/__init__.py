"""XFile Manager: a directory browser and file server for a local document root."""
