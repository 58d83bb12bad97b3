"""Data types shared across the WLED backup tool."""
