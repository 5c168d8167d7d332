# -*- coding: utf-8 -*-
"""Foods — built-in Portuguese food catalog loaded at startup."""

from __future__ import annotations

from typing import List

from .models import FoodSeed

DEFAULT_FOODS: List[FoodSeed] = [
    FoodSeed(
        name="Bifana",
        calories=350,
        description="Marinated pork cutlet in a bread roll",
        category="sandwich",
        serving_size="1 sandwich",
    ),
    FoodSeed(
        name="Francesinha",
        calories=1000,
        description="Layered meat sandwich with melted cheese and beer sauce",
        category="sandwich",
        serving_size="1 plate",
    ),
    FoodSeed(
        name="Prego no Pão",
        calories=420,
        description="Garlic beef steak in a bread roll",
        category="sandwich",
        serving_size="1 sandwich",
    ),
    FoodSeed(
        name="Pastel de Nata",
        calories=298,
        description="Custard tart with puff pastry",
        category="dessert",
        serving_size="1 tart",
    ),
    FoodSeed(
        name="Bacalhau à Brás",
        calories=450,
        description="Shredded salt cod with onions, straw potatoes and egg",
        category="fish",
        serving_size="1 plate",
    ),
    FoodSeed(
        name="Caldo Verde",
        calories=180,
        description="Potato and kale soup with chouriço",
        category="soup",
        serving_size="1 bowl",
    ),
    FoodSeed(
        name="Arroz de Pato",
        calories=600,
        description="Oven-baked duck rice",
        category="rice",
        serving_size="1 plate",
    ),
    FoodSeed(
        name="Sardinhas Assadas",
        calories=330,
        description="Grilled sardines",
        category="fish",
        serving_size="3 sardines",
    ),
    FoodSeed(
        name="Cozido à Portuguesa",
        calories=750,
        description="Boiled meats, sausages and vegetables",
        category="stew",
        serving_size="1 plate",
    ),
    FoodSeed(
        name="Feijoada",
        calories=650,
        description="Bean stew with pork and sausages",
        category="stew",
        serving_size="1 plate",
    ),
    FoodSeed(
        name="Polvo à Lagareiro",
        calories=480,
        description="Roasted octopus with olive oil and potatoes",
        category="seafood",
        serving_size="1 plate",
    ),
    FoodSeed(
        name="Bolo de Bolacha",
        calories=400,
        description="Layered biscuit and coffee cream cake",
        category="dessert",
        serving_size="1 slice",
    ),
]
