"""
admin_api/services/competitor_service.py
----------------------------------------
Business logic for competitor intelligence.
"""

from typing import Optional

from admin_api.db.query import Page, Pagination
from admin_api.errors import NotFoundError, ValidationError
from admin_api.models.competitor import DEFAULTS, FIELDS, JSON_FIELDS, THREAT_LEVELS
from admin_api.repositories.competitor_repo import CompetitorRepository
from admin_api.services.validation import as_decimal, as_int, pick

_DECIMAL_FIELDS = ("distance", "rating", "rating_change", "avg_price", "price_diff")


def _coerce(data: dict) -> dict:
    values = pick(data, FIELDS)
    for name in _DECIMAL_FIELDS:
        values[name] = as_decimal(values[name], name)
    values["review_count"] = as_int(values["review_count"], "review_count")

    threat_level = values["threat_level"] or None
    values["threat_level"] = threat_level
    if threat_level is not None and threat_level not in THREAT_LEVELS:
        raise ValidationError(f"threat_level must be one of: {', '.join(THREAT_LEVELS)}")

    for name in JSON_FIELDS:
        if values[name] is not None and not isinstance(values[name], (dict, list)):
            raise ValidationError(f"'{name}' must be an object or a list")
    return values


class CompetitorService:
    """Validates competitor payloads and applies create-time defaults."""

    def __init__(self, repo: CompetitorRepository):
        self.repo = repo

    def list_competitors(self, page: Pagination, threat_level: Optional[str] = None) -> Page:
        return self.repo.list_page(page, threat_level=threat_level)

    def get_summary(self) -> dict:
        return self.repo.get_summary()

    def get_competitor(self, competitor_id: int) -> dict:
        competitor = self.repo.get_by_id(competitor_id)
        if competitor is None:
            raise NotFoundError("Competitor")
        return competitor

    def create_competitor(self, data: dict) -> dict:
        if not data.get("name"):
            raise ValidationError("Competitor name is required")
        values = _coerce(data)
        for name, default in DEFAULTS.items():
            if not values[name]:
                values[name] = default
        return self.repo.add(values)

    def update_competitor(self, competitor_id: int, data: dict) -> dict:
        competitor = self.repo.update(competitor_id, _coerce(data))
        if competitor is None:
            raise NotFoundError("Competitor")
        return competitor

    def delete_competitor(self, competitor_id: int) -> None:
        if not self.repo.delete(competitor_id):
            raise NotFoundError("Competitor")
