"""Office hours queue backend."""
