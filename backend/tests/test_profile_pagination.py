import pytest

from mealswipe.db.models.recipe import Recipe
from mealswipe.services.pagination import paginate
from mealswipe.services.profile import profile_stats


def r(rid: str, category: str, liked_at: str) -> Recipe:
    return Recipe(
        id=rid,
        strMeal=f"Meal {rid}",
        strCategory=category,
        strInstructions="Cook.",
        strMealThumb="/recipe-placeholder.jpg",
        likedAt=liked_at,
    )


def test_profile_stats() -> None:
    recipes = [
        r("1", "Dessert", "2024-01-01T00:00:00.000Z"),
        r("2", "Beef", "2024-03-01T00:00:00.000Z"),
        r("3", "Beef", "2024-02-01T00:00:00.000Z"),
        r("4", "Dessert", "2023-12-01T00:00:00.000Z"),
    ]
    stats = profile_stats(recipes)
    assert stats.totalRecipes == 4
    # tie goes to the category seen first
    assert stats.favoriteCategory == "Dessert"
    assert stats.lastAdded == "2024-03-01T00:00:00.000Z"
    assert [x.id for x in stats.recentRecipes] == ["2", "3", "1"]


def test_profile_stats_empty() -> None:
    stats = profile_stats([])
    assert stats.totalRecipes == 0
    assert stats.favoriteCategory == ""
    assert stats.recentRecipes == []


@pytest.mark.parametrize(
    "page,per_page,expected_items,expected_page,expected_pages",
    (
        (1, 4, [0, 1, 2, 3], 1, 3),
        (3, 4, [8, 9], 3, 3),
        (4, 4, [], 4, 3),
        (0, 4, [0, 1, 2, 3], 1, 3),
        (1, 500, list(range(10)), 1, 1),
    ),
)
def test_paginate(page, per_page, expected_items, expected_page, expected_pages) -> None:
    got = paginate(list(range(10)), page, per_page)
    assert got.items == expected_items
    assert got.page == expected_page
    assert got.total == 10
    assert got.totalPages == expected_pages


def test_paginate_empty() -> None:
    got = paginate([], 1, 12)
    assert got.items == []
    assert got.totalPages == 0
    assert got.perPage == 12
