"""Infrastructure — seams to the outside world: ids, latency, logging, fixture data."""
