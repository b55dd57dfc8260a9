"""Command line interface for tagconf (`tagconf ...`)."""
