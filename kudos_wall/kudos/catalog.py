"""Teams and recognition categories known to the kudos wall."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Team:
    id: str
    name: str


@dataclass(frozen=True)
class Category:
    id: str
    name: str


TEAMS: list[Team] = [
    Team("171b342d-c330-420b-a50b-88e3d9eccdef", "Sales"),
    Team("1e080fd4-bedf-476d-9d22-0236d74cf554", "Marketing"),
    Team("68fceb9c-f7b9-4577-9da3-10225d99fd2c", "Operations"),
    Team("7cd938ba-cb64-46fd-bebe-0f0e4a2afda3", "Engineering"),
    Team("7e7ab7ae-c6ef-4c60-bfa7-de1419e5948c", "Design"),
    Team("a6905ed0-2286-4012-9fb6-ee4fe9642f2c", "Product"),
    Team("b7f599bf-caa8-47ab-bd08-4d235aee9b9a", "Customer Support"),
]

CATEGORIES: list[Category] = [
    Category("category-1", "Innovation"),
    Category("category-2", "Collaboration"),
    Category("category-3", "Efficiency"),
    Category("category-4", "Mentorship"),
    Category("category-5", "Excellence"),
]


def find_team(key: str) -> Optional[Team]:
    """Look a team up by id or (case-insensitive) name."""
    for team in TEAMS:
        if team.id == key or team.name.lower() == key.lower():
            return team
    return None


def find_category(key: str) -> Optional[Category]:
    """Look a category up by id or (case-insensitive) name."""
    for category in CATEGORIES:
        if category.id == key or category.name.lower() == key.lower():
            return category
    return None
