"""Feature workflows built on the record-shaping core."""
