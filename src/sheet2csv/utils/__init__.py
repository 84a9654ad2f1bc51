"""Helper utilities shared by the sheet2csv modules."""
