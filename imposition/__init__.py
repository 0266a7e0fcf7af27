"""Sheet imposition: copies per sheet, orientation and utilization."""
