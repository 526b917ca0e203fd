"""
Pytest configuration for the product transactions API.

Provides an in-memory stand-in for a Motor collection that evaluates the
query operators and aggregation stages the services emit, so service and
route tests run without a MongoDB server.
"""

from __future__ import annotations

import copy
import re
from types import SimpleNamespace
from typing import Any

import pytest
from bson import ObjectId
from pymongo.errors import OperationFailure


def _regex_flags(options: str) -> int:
    return re.IGNORECASE if "i" in (options or "") else 0


def _to_string(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _evaluate(doc: dict, expr: Any) -> Any:
    if isinstance(expr, str) and expr.startswith("$"):
        return doc.get(expr[1:])
    if not isinstance(expr, dict) or len(expr) != 1:
        return expr

    (operator, args), = expr.items()
    if operator == "$toString":
        return _to_string(_evaluate(doc, args))
    if operator == "$regexMatch":
        value = _evaluate(doc, args["input"])
        return re.search(args["regex"], value, _regex_flags(args.get("options"))) is not None
    if operator == "$lte":
        left, right = (_evaluate(doc, arg) for arg in args)
        if _is_number(left) and _is_number(right):
            return left <= right
        # BSON comparison order: null sorts before numbers, strings after
        return left is None
    if operator == "$switch":
        for branch in args["branches"]:
            if _evaluate(doc, branch["case"]):
                return _evaluate(doc, branch["then"])
        return _evaluate(doc, args["default"])
    raise NotImplementedError(operator)


def _matches(doc: dict, query: dict) -> bool:
    for key, condition in query.items():
        if key == "$and":
            if not all(_matches(doc, clause) for clause in condition):
                return False
        elif key == "$or":
            if not any(_matches(doc, clause) for clause in condition):
                return False
        elif key == "$expr":
            if not _evaluate(doc, condition):
                return False
        elif isinstance(condition, dict) and "$regex" in condition:
            value = doc.get(key)
            flags = _regex_flags(condition.get("$options"))
            # $regex never matches non-string values
            if not isinstance(value, str) or not re.search(condition["$regex"], value, flags):
                return False
        elif doc.get(key) != condition:
            return False
    return True


def _group(docs: list[dict], spec: dict) -> list[dict]:
    groups: dict[Any, dict] = {}
    for doc in docs:
        key = _evaluate(doc, spec["_id"])
        group = groups.setdefault(key, {"_id": key, **{name: 0 for name in spec if name != "_id"}})
        for name, accumulator in spec.items():
            if name != "_id":
                value = _evaluate(doc, accumulator["$sum"])
                # $sum skips non-numeric values
                if _is_number(value):
                    group[name] += value
    return list(groups.values())


class FakeCursor:
    def __init__(self, docs: list[dict]) -> None:
        self._docs = docs
        self._skip = 0
        self._limit = 0

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._docs = sorted(self._docs, key=lambda doc: doc[key], reverse=direction < 0)
        return self

    def skip(self, count: int) -> "FakeCursor":
        self._skip = count
        return self

    def limit(self, count: int) -> "FakeCursor":
        self._limit = count
        return self

    async def to_list(self, length: int | None = None) -> list[dict]:
        docs = self._docs[self._skip:]
        if self._limit:
            docs = docs[: self._limit]
        if length is not None:
            docs = docs[:length]
        return copy.deepcopy(docs)


class FakeCollection:
    def __init__(self, docs: list[dict] | None = None, failing: tuple[str, ...] = ()) -> None:
        self.docs: list[dict] = []
        self.failing = set(failing)
        self.pipelines: list[list] = []
        for doc in docs or []:
            self.docs.append({"_id": ObjectId(), **doc})

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise OperationFailure(f"{operation} failed")

    def find(self, query: dict) -> FakeCursor:
        self._check("find")
        return FakeCursor([doc for doc in self.docs if _matches(doc, query)])

    async def count_documents(self, query: dict) -> int:
        self._check("count_documents")
        return sum(1 for doc in self.docs if _matches(doc, query))

    def aggregate(self, pipeline: list) -> FakeCursor:
        self._check("aggregate")
        self.pipelines.append(pipeline)
        docs = list(self.docs)
        for stage in pipeline:
            (name, spec), = stage.items()
            if name == "$match":
                docs = [doc for doc in docs if _matches(doc, spec)]
            elif name == "$group":
                docs = _group(docs, spec)
            elif name == "$sort":
                for key, direction in reversed(list(spec.items())):
                    docs.sort(key=lambda doc: (doc[key] is not None, doc[key] or ""), reverse=direction < 0)
            else:
                raise NotImplementedError(name)
        return FakeCursor(docs)

    async def insert_many(self, documents: list[dict]) -> SimpleNamespace:
        self._check("insert_many")
        inserted_ids = []
        for document in documents:
            document.setdefault("_id", ObjectId())
            self.docs.append(dict(document))
            inserted_ids.append(document["_id"])
        return SimpleNamespace(inserted_ids=inserted_ids)


class StaticDatasetClient:
    def __init__(self, payload=None, error=None) -> None:
        self.payload = payload
        self.error = error

    def fetch_transactions(self) -> list[dict]:
        if self.error is not None:
            raise self.error
        return [dict(item) for item in self.payload]


SCENARIO_RECORDS = [
    {"title": "A", "description": "first", "price": 50, "category": "X", "sold": True, "dateOfSale": "2022-03-01"},
    {"title": "B", "description": "second", "price": 150, "category": "Y", "sold": False, "dateOfSale": "2022-03-15"},
]

SAMPLE_RECORDS = [
    {"id": 1, "title": "Fjallraven Backpack", "description": "Fits 15 inch laptops", "price": 329.85,
     "category": "men's clothing", "sold": False, "dateOfSale": "2021-11-27T20:29:54+05:30"},
    {"id": 2, "title": "Mens Casual T-Shirts", "description": "Slim-fitting style", "price": 44.6,
     "category": "men's clothing", "sold": True, "dateOfSale": "2021-10-27T20:29:54+05:30"},
    {"id": 3, "title": "Solid Gold Petite Micropave", "description": "Satisfaction guaranteed", "price": 168,
     "category": "jewelery", "sold": True, "dateOfSale": "2022-03-27T20:29:54+05:30"},
    {"id": 4, "title": "WD 2TB Elements Hard Drive", "description": "USB 3.0 and USB 2.0 compatibility", "price": 100,
     "category": "electronics", "sold": True, "dateOfSale": "2022-03-10T20:29:54+05:30"},
    {"id": 5, "title": "Samsung 49-Inch Monitor", "description": "Super ultrawide screen", "price": 999.99,
     "category": "electronics", "sold": False, "dateOfSale": "2022-03-05T20:29:54+05:30"},
    {"id": 6, "title": "Rain Jacket", "description": "Lightweight, 100% polyester", "price": 900,
     "category": "women's clothing", "sold": True, "dateOfSale": "2021-11-12T20:29:54+05:30"},
]


@pytest.fixture
def scenario_collection() -> FakeCollection:
    return FakeCollection(SCENARIO_RECORDS)


@pytest.fixture
def sample_collection() -> FakeCollection:
    return FakeCollection(SAMPLE_RECORDS)
