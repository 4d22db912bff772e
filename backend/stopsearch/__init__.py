"""StopSearch backend: Metropolitan Police stop and search dashboard API."""
