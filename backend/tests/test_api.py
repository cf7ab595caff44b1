import pytest
from fastapi.testclient import TestClient

from mealswipe.core.deps import get_user_id
from mealswipe.db.init import get_db
from mealswipe.db.models.recipe import Recipe
from mealswipe.db.models.schemas import GeneratedRecipe
from mealswipe.main import app
from mealswipe.services.generator import GeneratorNotReady, get_generator
from mealswipe.services.mealdb import MealDBError, get_mealdb

RANDOM = Recipe(
    id="52772",
    idMeal="52772",
    strMeal="Teriyaki Chicken Casserole",
    strCategory="Chicken",
    strInstructions="Preheat oven to 350F.",
    strMealThumb="https://www.themealdb.com/images/media/meals/wvpsxx1468256321.jpg",
    strArea="Japanese",
    ingredients=["soy sauce", "water"],
    measures=["3/4 cup", "1/2 cup"],
)


class StubMealDB:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail

    async def get_random_recipe(self):
        if self.fail:
            raise MealDBError("down")
        return RANDOM

    async def search_recipes(self, term: str):
        return [RANDOM.model_copy(update={"id": str(i), "idMeal": str(i)}) for i in range(5)] if term else []

    async def get_recipe_by_id(self, recipe_id: str):
        return RANDOM if recipe_id == "52772" else None


class StubGenerator:
    def __init__(self, ready: bool = True) -> None:
        self.ready = ready

    async def generate_recipe(self, name, diets=None, cuisine=None):
        if not self.ready:
            raise GeneratorNotReady("GEMINI_API_KEY not set")
        return GeneratedRecipe(
            strMeal=name,
            strCategory="Vegetarian",
            strInstructions="Cook.",
            strMealThumb="/recipe-placeholder.jpg",
            ingredients=["Pasta"],
            measures=["200g"],
            dietaryPreferences=list(diets or []),
        )

    async def correct_recipe_name(self, name: str) -> str:
        return name.title()


@pytest.fixture
def client(db):
    mealdb = StubMealDB()
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_user_id] = lambda: "alice"
    app.dependency_overrides[get_mealdb] = lambda: mealdb
    app.dependency_overrides[get_generator] = lambda: StubGenerator()
    yield TestClient(app)
    app.dependency_overrides.clear()


def like_payload(rid: str = "52772", title: str = "Teriyaki Chicken Casserole") -> dict:
    return {**RANDOM.model_dump(), "id": rid, "idMeal": rid, "strMeal": title}


def test_root(client) -> None:
    assert client.get("/").json() == {"status": "ok"}


def test_discover_random_and_search(client) -> None:
    r = client.get("/discover/random")
    assert r.status_code == 200
    assert r.json()["strMeal"] == "Teriyaki Chicken Casserole"

    page = client.get("/discover/search", params={"q": "chicken", "page": 2, "perPage": 2}).json()
    assert [x["id"] for x in page["items"]] == ["2", "3"]
    assert page["total"] == 5
    assert page["totalPages"] == 3


def test_discover_random_upstream_failure(client) -> None:
    app.dependency_overrides[get_mealdb] = lambda: StubMealDB(fail=True)
    assert client.get("/discover/random").status_code == 502


def test_like_toggle_and_list(client) -> None:
    r = client.post("/likes", json=like_payload())
    assert r.status_code == 200
    assert r.json()["notices"][0]["message"] == 'Added "Teriyaki Chicken Casserole" to favorites'

    assert client.get("/likes/52772/status").json()["liked"] is True
    listing = client.get("/likes").json()
    assert [x["id"] for x in listing["items"]] == ["52772"]

    toggled = client.post("/likes/toggle", json=like_payload()).json()
    assert toggled["ok"] is True
    assert toggled["liked"] is False
    assert client.get("/likes").json()["items"] == []

    assert client.delete("/likes/52772").status_code == 404


def test_like_without_id_is_rejected(client) -> None:
    r = client.post("/likes", json=like_payload(rid=""))
    assert r.status_code == 422
    assert client.get("/likes").json()["items"] == []


def test_create_edit_restore_recipe(client) -> None:
    form = {
        "strMeal": "Grandma's Pancakes",
        "strCategory": "Breakfast",
        "strInstructions": "Mix and fry.",
        "ingredients": ["Flour", "Milk"],
        "measures": ["1 cup", "1 cup"],
    }
    created = client.post("/recipes", json=form)
    assert created.status_code == 201
    rid = created.json()["recipe"]["id"]

    r = client.put(f"/recipes/{rid}", json={**form, "strMeal": "Fluffy Pancakes"})
    assert r.status_code == 200
    assert r.json()["notices"][0]["message"] == "Recipe updated successfully!"

    current = client.get(f"/recipes/{rid}").json()
    assert current["strMeal"] == "Fluffy Pancakes"
    assert current["isCustomized"] is True
    assert client.get("/recipes/customized").json()["total"] == 1

    restored = client.post(f"/recipes/{rid}/restore").json()
    assert restored["recipe"]["strMeal"] == "Grandma's Pancakes"
    assert client.get(f"/recipes/{rid}").json()["isCustomized"] is False


def test_create_recipe_missing_fields(client) -> None:
    r = client.post("/recipes", json={"strMeal": "Only a title"})
    assert r.status_code == 422
    assert r.json()["detail"]["missingFields"] == ["strCategory", "strInstructions"]


def test_get_missing_recipe(client) -> None:
    assert client.get("/recipes/nope").status_code == 404
    assert client.post("/recipes/nope/restore").status_code == 404


def test_cleanup_endpoint(client, db, make_doc) -> None:
    broken = make_doc("7")
    del broken["strMeal"]
    db["liked_recipes"].docs["alice_7"] = {**broken, "_id": "alice_7", "userId": "alice"}
    report = client.post("/likes/cleanup").json()
    assert report == {"deleted": [], "fixed": ["7"], "failed": []}


def test_weekly_plan_swap_and_shopping_list(client) -> None:
    for i in range(8):
        client.post("/likes", json=like_payload(str(i), f"Meal {i}"))

    plan = client.get("/weekly").json()
    assert len(plan["days"]) == 7
    assert plan["days"][0]["day"] == "Monday"
    assert plan["available"] == 8

    before = [d["recipe"]["id"] for d in plan["days"]]
    swapped = client.post("/weekly/swap", json={"index": 3}).json()
    after = [d["recipe"]["id"] for d in swapped["days"]]
    assert after[3] not in before
    assert after[:3] == before[:3]

    text = client.get("/weekly/shopping-list")
    assert text.status_code == 200
    assert "shopping_list.txt" in text.headers["content-disposition"]
    assert text.text.startswith("Weekly Meal Plan - Shopping List\n\n")

    assert client.post("/weekly/swap", json={"index": 9}).status_code == 404


def test_weekly_swap_without_alternatives(client) -> None:
    client.post("/likes", json=like_payload("1", "Only Meal"))
    assert client.post("/weekly/swap", json={"index": 0}).status_code == 409


def test_generate_and_save(client) -> None:
    r = client.post(
        "/generate/recipe",
        json={"recipeName": "Pesto Pasta", "dietaryPreferences": ["vegan"], "shouldSave": True},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["id"]
    assert body["dietaryPreferences"] == ["vegan"]
    assert client.get("/likes/" + body["id"] + "/status").json()["liked"] is True

    assert client.post("/generate/name", json={"name": "pad thai"}).json()["corrected"] == "Pad Thai"


def test_generate_not_ready(client) -> None:
    app.dependency_overrides[get_generator] = lambda: StubGenerator(ready=False)
    assert client.post("/generate/recipe", json={"recipeName": "Pesto"}).status_code == 503


def test_profile(client) -> None:
    client.post("/likes", json=like_payload("1", "A"))
    client.post("/likes", json=like_payload("2", "B"))
    stats = client.get("/profile").json()
    assert stats["totalRecipes"] == 2
    assert stats["favoriteCategory"] == "Chicken"
