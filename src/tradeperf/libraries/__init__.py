"""Analytics libraries."""
