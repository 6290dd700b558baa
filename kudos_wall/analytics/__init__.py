"""Recognition analytics by period."""
