"""
admin_api/models/competitor.py
------------------------------
Field names and defaults for competitor records.
"""

THREAT_LEVELS = ("low", "medium", "high")

# Writable columns, in insert order.
FIELDS = (
    "name", "website", "distance", "type", "threat_level", "rating",
    "rating_change", "review_count", "avg_price", "price_diff",
    "strengths", "weaknesses", "top_items", "sentiment", "notes",
)

# Columns stored as JSONB.
JSON_FIELDS = ("top_items", "sentiment")

# Applied on create when the payload leaves the field empty.
DEFAULTS = {
    "type": "Direct Competitor",
    "threat_level": "medium",
    "rating_change": 0,
    "review_count": 0,
    "price_diff": 0,
}
