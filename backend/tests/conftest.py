import copy
import uuid
from collections import defaultdict
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from pymongo.errors import DuplicateKeyError


class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]) -> None:
        self._docs = docs

    def sort(self, key, direction: int = 1) -> "FakeCursor":
        keys = key if isinstance(key, list) else [(key, direction)]
        for k, d in reversed(keys):
            self._docs.sort(key=lambda doc: str(doc.get(k) or ""), reverse=d < 0)
        return self

    def skip(self, n: int) -> "FakeCursor":
        self._docs = self._docs[n:]
        return self

    def limit(self, n: int) -> "FakeCursor":
        if n:
            self._docs = self._docs[:n]
        return self

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return self._docs if length is None else self._docs[:length]


class FakeCollection:
    """Equality-filter subset of the motor collection API."""

    def __init__(self) -> None:
        self.docs: Dict[Any, Dict[str, Any]] = {}

    @staticmethod
    def _match(doc: Dict[str, Any], flt: Optional[Dict[str, Any]]) -> bool:
        return all(doc.get(k) == v for k, v in (flt or {}).items())

    async def find_one(self, flt=None, projection=None):
        for d in self.docs.values():
            if self._match(d, flt):
                return copy.deepcopy(d)
        return None

    def find(self, flt=None, projection=None) -> FakeCursor:
        return FakeCursor([copy.deepcopy(d) for d in self.docs.values() if self._match(d, flt)])

    async def insert_one(self, doc):
        _id = doc.get("_id") or uuid.uuid4().hex
        if _id in self.docs:
            raise DuplicateKeyError(f"duplicate _id {_id}")
        self.docs[_id] = {**copy.deepcopy(doc), "_id": _id}
        return SimpleNamespace(inserted_id=_id)

    async def replace_one(self, flt, doc, upsert: bool = False):
        for _id, d in self.docs.items():
            if self._match(d, flt):
                self.docs[_id] = {**copy.deepcopy(doc), "_id": _id}
                return SimpleNamespace(matched_count=1, upserted_id=None)
        if upsert:
            _id = doc.get("_id") or (flt or {}).get("_id") or uuid.uuid4().hex
            self.docs[_id] = {**copy.deepcopy(doc), "_id": _id}
            return SimpleNamespace(matched_count=0, upserted_id=_id)
        return SimpleNamespace(matched_count=0, upserted_id=None)

    async def delete_one(self, flt):
        for _id, d in list(self.docs.items()):
            if self._match(d, flt):
                del self.docs[_id]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def create_index(self, *args, **kwargs):
        return "fake_index"


class FakeDB:
    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = defaultdict(FakeCollection)

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections[name]

    async def command(self, name: str):
        return {"ok": 1}


@pytest.fixture
def db() -> FakeDB:
    return FakeDB()


def meal_doc(rid: str = "52772", **overrides: Any) -> Dict[str, Any]:
    doc = {
        "id": rid,
        "strMeal": "Teriyaki Chicken Casserole",
        "strCategory": "Chicken",
        "strInstructions": "Preheat oven to 350F.",
        "strMealThumb": "https://www.themealdb.com/images/media/meals/wvpsxx1468256321.jpg",
        "strArea": "Japanese",
        "ingredients": ["soy sauce", "water", "brown sugar"],
        "measures": ["3/4 cup", "1/2 cup", "1/4 cup"],
        "likedAt": "2024-03-01T10:00:00.000Z",
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def make_doc():
    return meal_doc
