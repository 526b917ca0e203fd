"""
MongoDB filter documents and aggregation pipelines for transaction queries.

Month matching is a case-insensitive substring match on the stored
``dateOfSale`` string, so ``"03"`` matches ``"2022-03-01T10:00:00"``.
User input is escaped and always matched literally.
"""

import re
from typing import Optional

# (label, inclusive upper bound); the last bucket is open-ended
PRICE_BUCKETS = [
    ("0-100", 100),
    ("101-200", 200),
    ("201-300", 300),
    ("301-400", 400),
    ("401-500", 500),
    ("501-600", 600),
    ("601-700", 700),
    ("701-800", 800),
    ("801-900", 900),
    ("901-above", None),
]

BUCKET_ORDER = {label: index for index, (label, _) in enumerate(PRICE_BUCKETS)}


def _contains(value: str) -> dict:
    return {"$regex": re.escape(value), "$options": "i"}


def month_filter(month: Optional[str] = None) -> dict:
    if not month:
        return {}
    return {"dateOfSale": _contains(month)}


def search_filter(search: Optional[str] = None) -> dict:
    if not search:
        return {}
    pattern = re.escape(search)
    return {
        "$or": [
            {"title": _contains(search)},
            {"description": _contains(search)},
            # price is numeric, so match against its string form
            {"$expr": {"$regexMatch": {"input": {"$toString": "$price"}, "regex": pattern, "options": "i"}}},
        ]
    }


def transactions_filter(month: Optional[str] = None, search: Optional[str] = None) -> dict:
    clauses = [clause for clause in (month_filter(month), search_filter(search)) if clause]
    if not clauses:
        return {}
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def sale_amount_pipeline(month: Optional[str] = None) -> list:
    return [
        {"$match": month_filter(month)},
        {"$group": {"_id": None, "totalAmount": {"$sum": "$price"}}},
    ]


def bar_chart_pipeline(month: Optional[str] = None) -> list:
    branches = [
        {"case": {"$lte": ["$price", upper]}, "then": label}
        for label, upper in PRICE_BUCKETS
        if upper is not None
    ]
    last_label, _ = PRICE_BUCKETS[-1]
    return [
        {"$match": month_filter(month)},
        {
            "$group": {
                "_id": {"$switch": {"branches": branches, "default": last_label}},
                "count": {"$sum": 1},
            }
        },
    ]


def pie_chart_pipeline(month: Optional[str] = None) -> list:
    return [
        {"$match": month_filter(month)},
        {"$group": {"_id": "$category", "count": {"$sum": 1}}},
        {"$sort": {"_id": 1}},
    ]
