"""Click commands for the WLED Backup CLI."""
